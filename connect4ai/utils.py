"""
utils.py - Constants, enumerations and shared helpers for connect4ai

This module holds the grid dimensions, the tuning constants for the AI
opponents, the error hierarchy used by the rules engine, and the precomputed
table of every four-cell window on the board.
"""

import os
from enum import Enum
from typing import Any, List, Tuple

import numpy as np

# Grid constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Pieces in a row needed to win
CENTER_COL = COLS // 2
NO_MOVE = -1  # Returned by a strategy when the board is full

# AI tuning
HARD_SEARCH_DEPTH = 5
WIN_SCORE = 1_000_000
# Indexed by how many of one player's pieces sit in an otherwise empty window
WINDOW_WEIGHTS = (0, 1, 5, 50, 1000)
CENTER_WEIGHT = 3
AI_MOVE_DELAY = 0.5  # seconds, used by interactive front ends

# Stats persistence
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
STATS_FILE = os.environ.get('CONNECT4AI_STATS_FILE',
                            os.path.join(BASE_DIR, 'data', 'stats.json'))


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # Human by convention
    TWO = 2    # AI by convention

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        return "O"


# Errors

class Connect4Error(Exception):
    """Base class for every connect4ai error."""


class OutOfRangeError(Connect4Error, IndexError):
    """A row or column index lies outside the grid."""


class ColumnFullError(Connect4Error, ValueError):
    """A piece was dropped into a column that already holds ROWS pieces."""


class InvalidPlayerError(Connect4Error, ValueError):
    """A player identifier other than 1 or 2 was supplied."""


class InvalidBoardError(Connect4Error, ValueError):
    """A grid has the wrong shape, unknown symbols or floating pieces."""


class GameOverError(Connect4Error):
    """A move was attempted on a session that has already finished."""


class OutOfTurnError(Connect4Error):
    """A move was attempted by the side that is not on turn."""


def as_player(value: Any) -> Player:
    """
    Normalise a player identifier to a Player.

    Accepts Player.ONE / Player.TWO or the plain integers 1 and 2.

    Raises:
        InvalidPlayerError: for anything else, including Player.EMPTY
    """
    if isinstance(value, Player):
        player = value
    else:
        if isinstance(value, bool):
            raise InvalidPlayerError(f"Invalid player: {value!r}")
        try:
            player = Player(int(value))
        except (TypeError, ValueError):
            raise InvalidPlayerError(f"Invalid player: {value!r}") from None

    if player == Player.EMPTY:
        raise InvalidPlayerError("Player.EMPTY is not a player")
    return player


def is_valid_position(row: int, col: int) -> bool:
    """Check if a position is within the board boundaries."""
    return 0 <= row < ROWS and 0 <= col < COLS


def check_column(col: int) -> int:
    """Return col unchanged, or raise OutOfRangeError if it is off the board."""
    if not 0 <= col < COLS:
        raise OutOfRangeError(f"Column {col} out of range [0, {COLS})")
    return col


# Direction vectors (row, col), in the order windows are scanned
DIRECTION_VECTORS = (
    (0, 1),    # horizontal
    (1, 0),    # vertical
    (1, 1),    # diagonal down-right
    (1, -1),   # diagonal down-left
)


def _build_windows() -> Tuple[np.ndarray, np.ndarray]:
    cells: List[List[Tuple[int, int]]] = []
    for row in range(ROWS):
        for col in range(COLS):
            for dr, dc in DIRECTION_VECTORS:
                end_row = row + (CONNECT_N - 1) * dr
                end_col = col + (CONNECT_N - 1) * dc
                if not is_valid_position(end_row, end_col):
                    continue
                cells.append([(row + i * dr, col + i * dc) for i in range(CONNECT_N)])

    window_cells = np.array(cells, dtype=np.intp)
    window_index = window_cells[:, :, 0] * COLS + window_cells[:, :, 1]
    return window_cells, window_index


# Every window of CONNECT_N cells, anchored cell by cell in row-major order
# with directions in DIRECTION_VECTORS order. WINDOW_CELLS holds (row, col)
# pairs, WINDOW_INDEX the matching offsets into a flattened grid.
WINDOW_CELLS, WINDOW_INDEX = _build_windows()


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a grid as ASCII art with column numbers underneath.

    Args:
        grid: ROWS x COLS array of cell values

    Returns:
        Multi-line string
    """
    symbols = {p.value: str(p) for p in Player}
    border = "+" + "-" * (COLS * 2 + 1) + "+"

    lines = [border]
    for row in range(ROWS):
        cells = " ".join(symbols[int(v)] for v in grid[row])
        lines.append(f"| {cells} |")
    lines.append(border)
    lines.append("  " + " ".join(str(c) for c in range(COLS)))
    return "\n".join(lines)
