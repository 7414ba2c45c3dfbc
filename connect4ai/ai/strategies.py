"""
strategies.py - Difficulty selection for the AI opponent

Each difficulty maps to one plain strategy function with the signature
``strategy(board, player=..., rng=None) -> column``. Every strategy returns
NO_MOVE (-1) when the board is full.
"""

import random
from enum import Enum
from typing import Callable, Dict, Optional

from connect4ai.ai.heuristic import get_medium_move
from connect4ai.ai.minimax import get_hard_move
from connect4ai.ai.random_ai import get_easy_move
from connect4ai.game.board import Board
from connect4ai.utils import Player

Strategy = Callable[..., int]


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value) -> 'Difficulty':
        """Accept a Difficulty or its name in any case."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r} (expected one of: {choices})") from None


STRATEGIES: Dict[Difficulty, Strategy] = {
    Difficulty.EASY: get_easy_move,
    Difficulty.MEDIUM: get_medium_move,
    Difficulty.HARD: get_hard_move,
}


def get_strategy(difficulty) -> Strategy:
    return STRATEGIES[Difficulty.parse(difficulty)]


def choose_move(board: Board, difficulty=Difficulty.MEDIUM, player=Player.TWO,
                rng: Optional[random.Random] = None) -> int:
    """Ask the strategy for difficulty to pick a column for player."""
    return get_strategy(difficulty)(board, player=player, rng=rng)
