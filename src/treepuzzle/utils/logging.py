from __future__ import annotations
import logging
from functools import wraps
from typing import Any, Callable, Optional


def log_calls(
    logger_name: str | None = None,
    summarize: Optional[Callable[[Any], str]] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log engine entry points at DEBUG level with basic error logging.

    ``summarize`` turns the return value into a short description; traces can
    hold thousands of snapshots so they are never logged with ``repr``.
    """

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = logger_name or func.__module__
        logger = logging.getLogger(name)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.debug("Calling %s kwargs=%s", func.__qualname__, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.exception("Error in %s: %s", func.__qualname__, e)
                raise
            described = summarize(result) if summarize else type(result).__name__
            logger.debug("%s returned %s", func.__qualname__, described)
            return result

        return _wrapper

    return _decorator


def configure_logging(verbose: bool = False) -> None:
    """Route package logs through rich; DEBUG when verbose, WARNING otherwise."""
    from rich.console import Console
    from rich.logging import RichHandler

    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger("treepuzzle")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False, markup=False))


__all__ = ["log_calls", "configure_logging"]
