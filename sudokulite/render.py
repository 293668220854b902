from __future__ import annotations

from typing import List

from .models import BASE, SIZE, Grid

SEPARATOR = "\t-------|-------|-------"


def format_grid(grid: Grid) -> str:
    """Nine rows of digits with '|' between boxes and a rule after every third row."""
    lines: List[str] = []
    for r in range(SIZE):
        vals = [str(grid.cell(r, c).value) for c in range(SIZE)]
        chunks = [" ".join(vals[i:i + BASE]) for i in range(0, SIZE, BASE)]
        lines.append("\t " + " | ".join(chunks))
        if (r + 1) % BASE == 0 and (r + 1) != SIZE:
            lines.append(SEPARATOR)
    return "\n".join(lines)


def format_compact(grid: Grid) -> str:
    return "".join(
        str(grid.cell(r, c).value) if grid.cell(r, c).assigned else "-"
        for r in range(SIZE)
        for c in range(SIZE)
    )
