"""
connect4ai - Connect Four against three AI opponents

This package provides an immutable board, a stateless rules engine and three
opponents (random, one-ply heuristic and alpha-beta minimax), plus a game
session, a Gymnasium environment, a stats store and a command-line front end
built on top of them.

The functions below are the interface front ends are expected to call.
"""

__version__ = '0.2.0'

from connect4ai.game.board import Board
from connect4ai.game.rules import (apply_move, check_win, drop_row, is_draw,
                                   valid_moves, winning_cells)
from connect4ai.ai.heuristic import get_medium_move
from connect4ai.ai.minimax import get_hard_move
from connect4ai.ai.random_ai import get_easy_move
from connect4ai.utils import (ColumnFullError, Connect4Error, InvalidBoardError,
                              InvalidPlayerError, OutOfRangeError, Player)


def create_empty_board() -> Board:
    return Board.empty()


def get_valid_moves(board: Board):
    return valid_moves(board)


def get_drop_row(board: Board, col: int) -> int:
    return drop_row(board, col)


def make_move(board: Board, col: int, player) -> Board:
    return apply_move(board, col, player)


def get_winning_cells(board: Board, player):
    return winning_cells(board, player)


def is_board_full(board: Board) -> bool:
    return board.is_full()


__all__ = [
    'Board', 'Player',
    'create_empty_board', 'get_valid_moves', 'get_drop_row', 'make_move',
    'check_win', 'get_winning_cells', 'is_board_full', 'is_draw',
    'get_easy_move', 'get_medium_move', 'get_hard_move',
    'Connect4Error', 'OutOfRangeError', 'ColumnFullError', 'InvalidPlayerError',
    'InvalidBoardError',
]
