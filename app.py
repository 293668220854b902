from __future__ import annotations

from dataclasses import asdict
from typing import List, Tuple

import pandas as pd
import streamlit as st

from sudokulite.engine import propagate, solve, validate_board
from sudokulite.models import BASE, SIZE, Board, Grid, SolveStats, count
from sudokulite.render import format_compact
from sudokulite.storage import PuzzleFormatError, parse_puzzle


def cell_key(r: int, c: int) -> str:
    return f"cell_{r}_{c}"


def reset_board() -> None:
    for r in range(SIZE):
        for c in range(SIZE):
            st.session_state[cell_key(r, c)] = ""


def fill_board(board: Board) -> None:
    for r in range(SIZE):
        for c in range(SIZE):
            v = board[r][c]
            st.session_state[cell_key(r, c)] = "" if v == 0 else str(v)


def parse_board() -> Tuple[Board, List[str]]:
    """
    Read cell widget values from session_state and build an int board.
    Returns (board, errors). Empty string or '0' => 0.
    """
    errors: List[str] = []
    board: Board = [[0] * SIZE for _ in range(SIZE)]

    for r in range(SIZE):
        for c in range(SIZE):
            raw = str(st.session_state.get(cell_key(r, c), "")).strip()
            if raw == "":
                continue

            if not raw.isdigit():
                errors.append(f"Cell ({r+1},{c+1}) is not a number: '{raw}'")
                continue

            v = int(raw)
            if 0 <= v <= SIZE:
                board[r][c] = v
            else:
                errors.append(f"Cell ({r+1},{c+1}) out of range: {v} (allowed 1..{SIZE}, or blank/0).")

    return board, errors


def board_df(board: Board) -> pd.DataFrame:
    return pd.DataFrame(
        board,
        index=[f"r{r+1}" for r in range(SIZE)],
        columns=[f"c{c+1}" for c in range(SIZE)],
    )


def candidates_df(grid: Grid) -> pd.DataFrame:
    """Candidate counts left after propagation (blank for assigned cells)."""
    rows = []
    for r in range(SIZE):
        rows.append([
            None if grid.cell(r, c).assigned else count(grid.cell(r, c).candidates)
            for c in range(SIZE)
        ])
    df = pd.DataFrame(rows, index=[f"r{r+1}" for r in range(SIZE)], columns=[f"c{c+1}" for c in range(SIZE)])
    return df.astype("Int64")


THICK = "3px solid rgba(49, 51, 63, 0.65)"
THIN = "1px solid rgba(49, 51, 63, 0.25)"


def _cell_style(r: int, c: int) -> str:
    top = THICK if r % BASE == 0 else THIN
    left = THICK if c % BASE == 0 else THIN
    bottom = THICK if r == SIZE - 1 else THIN
    right = THICK if c == SIZE - 1 else THIN
    return f"border-top:{top};border-left:{left};border-bottom:{bottom};border-right:{right}"


def render_board_html(board: Board, title: str) -> None:
    """Draw `board` as a table, boxes outlined; blanks stay empty."""
    rows = []
    for r in range(SIZE):
        tds = "".join(
            f"<td style='{_cell_style(r, c)}'>{board[r][c] or ''}</td>" for c in range(SIZE)
        )
        rows.append(f"<tr>{tds}</tr>")
    st.markdown(f"**{title}**")
    st.markdown(f"<table class='sudoku'>{''.join(rows)}</table>", unsafe_allow_html=True)


st.set_page_config(page_title="sudokulite", layout="wide")

st.markdown(
    """
<style>
div[data-testid="stTextInput"] input { text-align: center; font-size: 20px !important; }
table.sudoku { border-collapse: collapse; }
table.sudoku td { width: 2.6rem; height: 2.6rem; text-align: center; font-size: 20px; }
</style>
""",
    unsafe_allow_html=True,
)

st.title("sudokulite")
st.caption("Leave cells blank (or enter 0). Click **Solve** to propagate forced moves and search the rest.")

# ---- Sidebar controls ----
with st.sidebar:
    st.header("Puzzle")
    upload = st.file_uploader("Load puzzle file", type=["txt", "sdk"])
    if upload is not None and st.button("Use uploaded puzzle", use_container_width=True):
        try:
            fill_board(parse_puzzle(upload.getvalue().decode("utf-8")).to_board())
        except (PuzzleFormatError, UnicodeDecodeError) as e:
            st.error(f"Could not read {upload.name}: {e}")

    st.divider()
    if st.button("Reset board", use_container_width=True):
        reset_board()

# ---- Input grid in a form (prevents rerun on every keystroke) ----
st.subheader("Input")

with st.form("sudoku_form", clear_on_submit=False):
    for r in range(SIZE):
        cols = st.columns(SIZE, gap="small")
        for c in range(SIZE):
            with cols[c]:
                key = cell_key(r, c)
                if key not in st.session_state:
                    st.session_state[key] = ""
                st.text_input(label=f"r{r+1}c{c+1}", key=key, label_visibility="collapsed")
        if (r + 1) % BASE == 0 and (r + 1) != SIZE:
            st.write("")

    colA, colB, _ = st.columns([1, 1, 2])
    validate_clicked = colA.form_submit_button("Validate", use_container_width=True)
    solve_clicked = colB.form_submit_button("Solve", use_container_width=True)

# ---- Actions ----
if validate_clicked or solve_clicked:
    board, parse_errors = parse_board()
    if parse_errors:
        st.error("Please fix these input issues:")
        st.write("\n".join([f"- {e}" for e in parse_errors]))
    else:
        ok, msg = validate_board(board)
        if not ok:
            st.error(msg)
        else:
            st.success("Board looks valid.")
            render_board_html(board, "Current board (preview)")

            grid = Grid.from_board(board)
            propagated = grid.clone()
            outcome = propagate(propagated)
            with st.expander("Candidates after propagation"):
                st.caption(f"Propagation result: {type(outcome).__name__}")
                st.dataframe(candidates_df(propagated), use_container_width=True)

            if solve_clicked:
                stats = SolveStats()
                if not solve(grid, stats):
                    st.error("No solution found (the puzzle may be unsolvable).")
                else:
                    solution = grid.to_board()
                    st.success("Solution found")
                    render_board_html(solution, "Solution")
                    st.json(asdict(stats))
                    st.code(format_compact(grid), language=None)

                    st.download_button(
                        "Download solution as CSV",
                        data=board_df(solution).to_csv(index=False, header=False).encode("utf-8"),
                        file_name="sudoku_solution_9x9.csv",
                        mime="text/csv",
                        use_container_width=False,
                    )
else:
    board, _ = parse_board()
    render_board_html(board, "Current board (preview)")
