"""
heuristic.py - Medium opponent: one-ply win/block lookahead

Checks, in priority order:
1. A column that wins immediately
2. A column the opponent would win with next, which must be blocked
3. The column closest to the center, lower index on ties

Only one ply is examined, so double threats set up over several moves go
unnoticed.
"""

from typing import List, Optional

from connect4ai.debug import debug
from connect4ai.game.board import Board
from connect4ai.game.rules import apply_move, check_win, valid_moves
from connect4ai.utils import CENTER_COL, NO_MOVE, Player, as_player


def find_winning_column(board: Board, player, moves: Optional[List[int]] = None) -> Optional[int]:
    """First column (ascending) where player's drop completes four in a row."""
    for col in (moves if moves is not None else valid_moves(board)):
        if check_win(apply_move(board, col, player), player):
            return col
    return None


def center_preference(moves: List[int]) -> int:
    """The move nearest the center column; ties go to the lower index."""
    return min(moves, key=lambda c: (abs(c - CENTER_COL), c))


def get_medium_move(board: Board, player=Player.TWO, rng=None) -> int:
    """
    Choose a move with the one-ply heuristic.

    Args:
        board: Position to move in
        player: The side the AI plays
        rng: Unused; the heuristic is deterministic

    Returns:
        A column index, or NO_MOVE (-1) if the board is full
    """
    moves = valid_moves(board)
    if not moves:
        return NO_MOVE

    me = as_player(player)

    col = find_winning_column(board, me, moves)
    if col is not None:
        debug.debug(f"Medium AI wins in column {col}", "ai")
        return col

    col = find_winning_column(board, me.other(), moves)
    if col is not None:
        debug.debug(f"Medium AI blocks column {col}", "ai")
        return col

    col = center_preference(moves)
    debug.debug(f"Medium AI takes positional column {col}", "ai")
    return col
