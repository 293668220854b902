from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Union

Board = List[List[int]]  # 0 = empty, values 1..9

SIZE = 9
BASE = 3
# bits 1..9 set => (1<<10) - 2
FULL_MASK = (1 << (SIZE + 1)) - 2


def mask_of(values: Iterable[int]) -> int:
    mask = 0
    for v in values:
        mask |= 1 << v
    return mask


def values_of(mask: int) -> List[int]:
    """Candidate values held in `mask`, ascending."""
    return [v for v in range(1, SIZE + 1) if mask & (1 << v)]


def count(mask: int) -> int:
    return mask.bit_count()


@dataclass
class Cell:
    value: int = 0              # 0 = unassigned
    candidates: int = FULL_MASK  # bit mask, cleared once assigned

    @property
    def assigned(self) -> bool:
        return self.value != 0


def _fresh_cells() -> List[List[Cell]]:
    return [[Cell() for _ in range(SIZE)] for _ in range(SIZE)]


@dataclass
class Grid:
    cells: List[List[Cell]] = field(default_factory=_fresh_cells)

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def clone(self) -> "Grid":
        return Grid([[Cell(c.value, c.candidates) for c in row] for row in self.cells])

    def copy_from(self, other: "Grid") -> None:
        """Overwrite this grid's state with `other`'s (used to promote a solved branch)."""
        for r in range(SIZE):
            for c in range(SIZE):
                src = other.cells[r][c]
                dst = self.cells[r][c]
                dst.value = src.value
                dst.candidates = src.candidates

    def is_filled(self) -> bool:
        return all(c.assigned for row in self.cells for c in row)

    def to_board(self) -> Board:
        return [[c.value for c in row] for row in self.cells]

    @staticmethod
    def from_board(board: Board) -> "Grid":
        """
        Build a grid and commit every non-zero value of `board` into it.
        Raises ValueError for a board that is not 9 x 9 or holds values outside 0..9.
        """
        from .engine import commit  # engine depends on models

        if len(board) != SIZE or any(len(row) != SIZE for row in board):
            raise ValueError(f"Board must be {SIZE} x {SIZE}.")
        grid = Grid()
        for r in range(SIZE):
            for c in range(SIZE):
                v = board[r][c]
                if isinstance(v, bool) or not isinstance(v, int) or v < 0 or v > SIZE:
                    raise ValueError(f"Invalid value at ({r+1},{c+1}): {v!r} (allowed: 0..{SIZE}).")
                if v:
                    commit(grid, v, r, c)
        return grid


# -----------------------------
# Propagation outcomes
# -----------------------------

@dataclass(frozen=True)
class Stalled:
    row: int
    col: int


@dataclass(frozen=True)
class Contradiction:
    pass


@dataclass(frozen=True)
class Complete:
    pass


Outcome = Union[Stalled, Contradiction, Complete]


@dataclass
class SolveStats:
    commits: int = 0     # forced moves made by propagation
    branches: int = 0    # trial values tried by search
    backtracks: int = 0  # trials that failed
    max_depth: int = 0
