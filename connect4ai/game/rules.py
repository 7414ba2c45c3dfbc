"""
rules.py - Move generation, move application and win detection

Every function here is a pure query or transform over an immutable Board.
Win detection walks the precomputed window table in utils, whose order
matches a cell-anchored forward scan: cells in row-major order, each checked
horizontally, vertically, down-right and down-left.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from connect4ai.game.board import Board
from connect4ai.utils import (ROWS, Player, WINDOW_CELLS, WINDOW_INDEX,
                              ColumnFullError, as_player)


@dataclass(frozen=True)
class Move:
    """A piece dropped by player into column, landing on row."""
    column: int
    row: int
    player: Player


def opponent(player) -> Player:
    """The other player."""
    return as_player(player).other()


def valid_moves(board: Board) -> List[int]:
    """
    Columns that can still take a piece, in ascending order.

    Strategies iterate this list as their default order and tie-break.
    """
    return np.flatnonzero(board.grid[0] == Player.EMPTY.value).tolist()


def drop_row(board: Board, col: int) -> int:
    """
    Row a piece dropped into col would land on.

    Raises:
        OutOfRangeError: if col is outside the grid
        ColumnFullError: if the column already holds ROWS pieces
    """
    height = board.column_height(col)
    if height >= ROWS:
        raise ColumnFullError(f"Column {col} is full")
    return ROWS - 1 - height


def apply_move(board: Board, col: int, player) -> Board:
    """
    Drop player's piece into col and return the resulting board.

    The input board is left untouched.

    Raises:
        InvalidPlayerError: if player is not 1 or 2
        OutOfRangeError: if col is outside the grid
        ColumnFullError: if the column is full
    """
    player = as_player(player)
    row = drop_row(board, col)
    return board.with_piece(row, col, player)


def play_moves(columns: Iterable[int], first_player=Player.ONE,
               board: Optional[Board] = None) -> Board:
    """
    Replay a sequence of drops with players alternating.

    Args:
        columns: Columns to drop into, in order
        first_player: Who makes the first drop
        board: Starting board (empty if omitted)

    Returns:
        The board after every drop
    """
    board = board if board is not None else Board.empty()
    player = as_player(first_player)
    for col in columns:
        board = apply_move(board, col, player)
        player = player.other()
    return board


def _complete_windows(board: Board, player) -> np.ndarray:
    value = as_player(player).value
    cells = board.grid.ravel()[WINDOW_INDEX]
    return (cells == value).all(axis=1)


def check_win(board: Board, player) -> bool:
    """True iff player holds four in a row anywhere on the board."""
    return bool(_complete_windows(board, player).any())


def winning_cells(board: Board, player) -> Optional[List[Tuple[int, int]]]:
    """
    The first winning line for player, or None.

    Lines are found in scan order: anchor cells in row-major order, then
    directions horizontal, vertical, down-right, down-left. The returned
    coordinates run forward from the anchor.
    """
    hits = np.flatnonzero(_complete_windows(board, player))
    if hits.size == 0:
        return None
    return [(int(r), int(c)) for r, c in WINDOW_CELLS[hits[0]]]


def is_draw(board: Board) -> bool:
    """Full board with no winner."""
    return (board.is_full()
            and not check_win(board, Player.ONE)
            and not check_win(board, Player.TWO))
