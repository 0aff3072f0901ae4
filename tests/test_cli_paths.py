from pathlib import Path

import pytest


def test_resolve_puzzle_path_simple(tmp_path, monkeypatch):
    """Test resolve puzzle path with simple name."""
    monkeypatch.chdir(tmp_path)
    from treepuzzle.cli.paths import puzzles_dir, resolve_puzzle_path

    result = resolve_puzzle_path("daily")
    assert Path(result) == puzzles_dir() / "daily.yaml"
    assert puzzles_dir().is_dir()


def test_resolve_puzzle_path_with_extension(tmp_path, monkeypatch):
    """Test resolve puzzle path when name already has .yaml extension."""
    monkeypatch.chdir(tmp_path)
    from treepuzzle.cli.paths import puzzles_dir, resolve_puzzle_path

    result = resolve_puzzle_path("daily.yaml")
    assert Path(result) == puzzles_dir() / "daily.yaml"


def test_resolve_puzzle_path_nested(tmp_path, monkeypatch):
    """Test resolve puzzle path extracts basename from nested path."""
    monkeypatch.chdir(tmp_path)
    from treepuzzle.cli.paths import puzzles_dir, resolve_puzzle_path

    result = resolve_puzzle_path("custom/daily.yaml")
    assert Path(result) == puzzles_dir() / "daily.yaml"


def test_find_puzzle_file_direct_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    from treepuzzle.cli.paths import find_puzzle_file

    target = tmp_path / "mine.yaml"
    target.write_text("puzzle_id: mine\n")

    assert find_puzzle_file(str(target)) == str(target)
    assert find_puzzle_file("mine") == "mine.yaml"


def test_find_puzzle_file_in_outputs(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    from treepuzzle.cli.paths import find_puzzle_file, puzzles_dir

    puzzles_dir().mkdir(parents=True)
    (puzzles_dir() / "stored.yaml").write_text("puzzle_id: stored\n")

    assert Path(find_puzzle_file("stored")) == puzzles_dir() / "stored.yaml"


def test_find_puzzle_file_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    from treepuzzle.cli.paths import find_puzzle_file

    with pytest.raises(FileNotFoundError):
        find_puzzle_file("absent")


def test_puzzle_candidates_share_suffix_rule(tmp_path, monkeypatch):
    """Saving and lookup agree on where a bare name lives."""
    monkeypatch.chdir(tmp_path)
    from treepuzzle.cli.paths import puzzle_candidates, puzzles_dir, resolve_puzzle_path

    candidates = puzzle_candidates("daily")
    assert candidates == [Path("daily"), Path("daily.yaml"), puzzles_dir() / "daily.yaml"]
    assert Path(resolve_puzzle_path("daily")) == candidates[-1]


def test_puzzle_candidates_skip_repeated_suffix(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    from treepuzzle.cli.paths import puzzle_candidates, puzzles_dir

    assert puzzle_candidates("daily.yaml") == [Path("daily.yaml"), puzzles_dir() / "daily.yaml"]


def test_find_puzzle_file_missing_lists_candidates(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    from treepuzzle.cli.paths import find_puzzle_file, puzzles_dir

    with pytest.raises(FileNotFoundError) as exc_info:
        find_puzzle_file("absent")
    message = str(exc_info.value)
    assert "Puzzle file not found: 'absent'" in message
    assert "absent.yaml" in message
    assert str(puzzles_dir() / "absent.yaml") in message
