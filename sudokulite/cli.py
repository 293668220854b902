from __future__ import annotations

import argparse
import logging
from dataclasses import asdict
from typing import List, Optional

from .engine import solve, validate_board
from .models import SolveStats
from .render import format_grid
from .storage import PuzzleLoadError, load_grid

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sudokulite", description="Solve a 9x9 Sudoku puzzle.")
    ap.add_argument(
        "puzzle",
        nargs="?",
        help="Puzzle file: 81 cells, digits 1-9 for givens and '-', '.' or 0 for blanks "
             "(default: $SUDOKULITE_PUZZLE or ./emptySudoku.txt)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    ap.add_argument("--stats", action="store_true", help="Log search statistics")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
    )

    try:
        grid = load_grid(args.puzzle)
    except PuzzleLoadError as e:
        log.error("%s", e)
        return 1

    ok, msg = validate_board(grid.to_board())
    if not ok:
        log.warning("%s", msg)
        print("Sudoku was impossible")
        return 0

    stats = SolveStats()
    if solve(grid, stats):
        print(format_grid(grid))
    else:
        print("Sudoku was impossible")

    if args.stats:
        log.info("Search stats: %s", asdict(stats))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
