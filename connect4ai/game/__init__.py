"""
connect4ai.game - Board representation and rules engine

Sessions and the Gymnasium environment live in connect4ai.game.session and
connect4ai.game.env; they depend on connect4ai.ai and are not imported here.
"""

from connect4ai.game.board import Board
from connect4ai.game.rules import (Move, apply_move, check_win, drop_row, is_draw,
                                   opponent, play_moves, valid_moves, winning_cells)

__all__ = ['Board', 'Move', 'apply_move', 'check_win', 'drop_row', 'is_draw',
           'opponent', 'play_moves', 'valid_moves', 'winning_cells']
