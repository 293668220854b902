from __future__ import annotations

import logging
import os
from typing import Optional

from .engine import commit
from .models import SIZE, Grid

log = logging.getLogger(__name__)

EMPTY_SYMBOLS = "-.0"


class PuzzleLoadError(Exception):
    """The puzzle file could not be read."""


class PuzzleFormatError(PuzzleLoadError):
    """The puzzle text is not 81 valid cell symbols."""


def default_puzzle_path() -> str:
    return os.path.join(".", "emptySudoku.txt")


def resolve_puzzle_path() -> str:
    return os.environ.get("SUDOKULITE_PUZZLE", default_puzzle_path())


def parse_puzzle(text: str) -> Grid:
    """
    Read 81 cell symbols row-major, skipping whitespace.
    Digits 1..9 are givens, '-', '.' and '0' are empty cells.
    Anything after the 81st symbol is ignored.
    """
    symbols = [ch for ch in text if not ch.isspace()]
    total = SIZE * SIZE
    if len(symbols) < total:
        raise PuzzleFormatError(f"Expected {total} cells, found {len(symbols)}.")

    grid = Grid()
    for i, ch in enumerate(symbols[:total]):
        r, c = divmod(i, SIZE)
        if ch in EMPTY_SYMBOLS:
            continue
        if ch not in "123456789":
            raise PuzzleFormatError(f"Invalid symbol {ch!r} at ({r+1},{c+1}).")
        commit(grid, int(ch), r, c)
    return grid


def load_grid(path: Optional[str] = None) -> Grid:
    p = path or resolve_puzzle_path()
    try:
        with open(p, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise PuzzleLoadError(f"Could not open {p}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise PuzzleFormatError(f"{p} is not UTF-8 text: {e.reason}") from e
    log.debug("Loaded puzzle from %s", p)
    return parse_puzzle(text)
