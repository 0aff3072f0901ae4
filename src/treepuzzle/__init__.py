"""Grid tree puzzle: stochastic generation and reverse-search solving."""

__version__ = "0.1.0"
