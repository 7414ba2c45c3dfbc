"""
random_ai.py - Easy opponent: a uniformly random legal move
"""

import random
from typing import Optional

from connect4ai.debug import debug
from connect4ai.game.board import Board
from connect4ai.game.rules import valid_moves
from connect4ai.utils import NO_MOVE


def get_easy_move(board: Board, player=None, rng: Optional[random.Random] = None) -> int:
    """
    Pick any legal column with equal probability.

    Args:
        board: Position to move in
        player: Unused; accepted so every strategy shares one signature
        rng: Optional random.Random for reproducible choices

    Returns:
        A column index, or NO_MOVE (-1) if the board is full
    """
    moves = valid_moves(board)
    if not moves:
        return NO_MOVE

    column = (rng or random).choice(moves)
    debug.debug(f"Easy AI picked column {column} from {moves}", "ai")
    return column
