from sudokulite.models import Grid
from sudokulite.render import SEPARATOR, format_compact, format_grid
from sudokulite.storage import parse_puzzle

SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]


def test_format_grid_layout():
    lines = format_grid(Grid.from_board(SOLUTION)).split("\n")
    assert len(lines) == 11
    assert lines[0] == "\t 5 3 4 | 6 7 8 | 9 1 2"
    assert lines[3] == SEPARATOR
    assert lines[7] == SEPARATOR
    assert lines[10] == "\t 3 4 5 | 2 8 6 | 1 7 9"


def test_format_grid_shows_unassigned_as_zero():
    assert format_grid(Grid()).split("\n")[0] == "\t 0 0 0 | 0 0 0 | 0 0 0"


def test_format_compact_reloads():
    board = [row[:] for row in SOLUTION]
    board[0][0] = 0
    board[8][8] = 0
    text = format_compact(Grid.from_board(board))
    assert len(text) == 81
    assert text.startswith("-34678912")
    assert text.endswith("17-")
    assert parse_puzzle(text).to_board() == board
