from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .models import (
    BASE,
    SIZE,
    Board,
    Complete,
    Contradiction,
    Grid,
    Outcome,
    SolveStats,
    Stalled,
    count,
    values_of,
)

log = logging.getLogger(__name__)


def _box_origin(r: int, c: int) -> Tuple[int, int]:
    return BASE * (r // BASE), BASE * (c // BASE)


def _box_index(r: int, c: int) -> int:
    return (r // BASE) * BASE + (c // BASE)


# -----------------------------
# Candidate tracking
# -----------------------------

def commit(grid: Grid, value: int, row: int, col: int) -> None:
    """
    Assign `value` to (row, col) and strike it from every peer in the same
    row, column and box. No legality check: callers pass a value taken from
    the cell's own candidates, or a trusted given.
    """
    bit = 1 << value
    target = grid.cell(row, col)
    target.value = value
    target.candidates = 0

    for i in range(SIZE):
        grid.cell(i, col).candidates &= ~bit
        grid.cell(row, i).candidates &= ~bit

    r0, c0 = _box_origin(row, col)
    for r in range(r0, r0 + BASE):
        for c in range(c0, c0 + BASE):
            grid.cell(r, c).candidates &= ~bit


# -----------------------------
# Propagation
# -----------------------------

def propagate(grid: Grid, stats: Optional[SolveStats] = None) -> Outcome:
    """
    Commit naked singles until a fixed point.

    The scan restarts from the top after every commit. Returns Contradiction
    as soon as an empty cell has no candidates left, Complete when every cell
    is assigned, otherwise Stalled at the first cell (row-major) with the
    fewest candidates.
    """
    while True:
        best: Optional[Tuple[int, int]] = None
        best_count = SIZE + 1
        moved = False

        for r in range(SIZE):
            for c in range(SIZE):
                cell = grid.cell(r, c)
                if cell.assigned:
                    continue
                cnt = count(cell.candidates)
                if cnt == 0:
                    return Contradiction()
                if cnt == 1:
                    commit(grid, values_of(cell.candidates)[0], r, c)
                    if stats is not None:
                        stats.commits += 1
                    moved = True
                    break
                if cnt < best_count:
                    best_count = cnt
                    best = (r, c)
            if moved:
                break

        if moved:
            continue
        if best is None:
            return Complete()
        return Stalled(*best)


# -----------------------------
# Validity
# -----------------------------

def _groups() -> List[List[Tuple[int, int]]]:
    rows = [[(r, c) for c in range(SIZE)] for r in range(SIZE)]
    cols = [[(r, c) for r in range(SIZE)] for c in range(SIZE)]
    boxes = []
    for b in range(SIZE):
        r0, c0 = BASE * (b // BASE), BASE * (b % BASE)
        boxes.append([(r0 + p // BASE, c0 + p % BASE) for p in range(SIZE)])
    return rows + cols + boxes


GROUPS = _groups()


def is_complete(grid: Grid) -> bool:
    """True only if each of the 27 rows/columns/boxes holds 1..9 exactly once."""
    for group in GROUPS:
        occurrences = [0] * (SIZE + 1)
        for r, c in group:
            occurrences[grid.cell(r, c).value] += 1
        if any(occurrences[v] != 1 for v in range(1, SIZE + 1)):
            return False
    return True


def validate_board(board: Board) -> Tuple[bool, str]:
    """
    Checks:
      - board is 9 x 9
      - values in 0..9
      - no duplicate values in any row/col/box (ignoring 0)
    """
    if len(board) != SIZE or any(len(row) != SIZE for row in board):
        return False, f"Board must be {SIZE} x {SIZE}."

    row_used = [0] * SIZE
    col_used = [0] * SIZE
    box_used = [0] * SIZE

    for r in range(SIZE):
        for c in range(SIZE):
            v = board[r][c]
            if isinstance(v, bool) or not isinstance(v, int):
                return False, f"Invalid value at ({r+1},{c+1}): {v} (not an integer)."
            if v < 0 or v > SIZE:
                return False, f"Invalid value at ({r+1},{c+1}): {v} (allowed: 0..{SIZE})."
            if v == 0:
                continue

            bit = 1 << v
            b = _box_index(r, c)

            if (row_used[r] & bit) or (col_used[c] & bit) or (box_used[b] & bit):
                return False, f"Conflict: value {v} appears twice in a row/column/box (cell {r+1},{c+1})."

            row_used[r] |= bit
            col_used[c] |= bit
            box_used[b] |= bit

    return True, "OK"


# -----------------------------
# Search
# -----------------------------

def solve(grid: Grid, stats: Optional[SolveStats] = None) -> bool:
    """
    Propagate, then branch on the stalled cell's candidates in ascending order,
    each on a private clone. On success the clone's state is copied into `grid`
    and True is returned; on failure `grid` is left in an indeterminate state.
    """
    return _search(grid, stats, 0)


def _search(grid: Grid, stats: Optional[SolveStats], depth: int) -> bool:
    if stats is not None and depth > stats.max_depth:
        stats.max_depth = depth

    outcome = propagate(grid, stats)
    if isinstance(outcome, Contradiction):
        return False
    if isinstance(outcome, Complete):
        if not is_complete(grid):
            log.debug("Filled grid failed the validity check at depth %d", depth)
            return False
        return True

    r, c = outcome.row, outcome.col
    options = values_of(grid.cell(r, c).candidates)
    log.debug("Branching on (%d,%d) over %s at depth %d", r + 1, c + 1, options, depth)

    for v in options:
        trial = grid.clone()
        commit(trial, v, r, c)
        if stats is not None:
            stats.branches += 1
        if _search(trial, stats, depth + 1):
            grid.copy_from(trial)
            return True
        if stats is not None:
            stats.backtracks += 1

    return False


def solve_board(board: Board, stats: Optional[SolveStats] = None) -> Optional[Board]:
    """
    Solve a 0-for-empty board.
    Returns a NEW solved board or None if unsolvable / invalid.
    """
    ok, _ = validate_board(board)
    if not ok:
        return None
    grid = Grid.from_board(board)
    return grid.to_board() if solve(grid, stats) else None
