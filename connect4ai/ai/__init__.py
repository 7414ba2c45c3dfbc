"""
connect4ai.ai - The three AI opponents

Easy plays randomly, Medium looks one ply ahead for wins and blocks, and Hard
runs a minimax search with alpha-beta pruning.
"""

from connect4ai.ai.heuristic import get_medium_move
from connect4ai.ai.minimax import MinimaxPlayer, evaluate_position, get_hard_move
from connect4ai.ai.random_ai import get_easy_move
from connect4ai.ai.strategies import Difficulty, STRATEGIES, choose_move, get_strategy

__all__ = ['Difficulty', 'STRATEGIES', 'MinimaxPlayer', 'choose_move', 'evaluate_position',
           'get_easy_move', 'get_hard_move', 'get_medium_move', 'get_strategy']
