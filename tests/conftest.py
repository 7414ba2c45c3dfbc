import random

import pytest

from connect4ai.game.board import Board
from connect4ai.game.rules import apply_move, check_win, valid_moves
from connect4ai.utils import Player

# Alternating pair pattern: no four in a row horizontally, vertically or diagonally
DRAW_ROWS = [
    [1, 1, 2, 2, 1, 1, 2],
    [2, 2, 1, 1, 2, 2, 1],
    [1, 1, 2, 2, 1, 1, 2],
    [2, 2, 1, 1, 2, 2, 1],
    [1, 1, 2, 2, 1, 1, 2],
    [2, 2, 1, 1, 2, 2, 1],
]


def empty_rows(count: int):
    return [[0] * 7 for _ in range(count)]


def random_boards(count: int, seed: int = 0, max_moves: int = 30):
    """Reachable, undecided boards produced by seeded random play."""
    rng = random.Random(seed)
    boards = []
    while len(boards) < count:
        board = Board.empty()
        player = Player.ONE
        for _ in range(rng.randint(0, max_moves)):
            nxt = apply_move(board, rng.choice(valid_moves(board)), player)
            if check_win(nxt, player) or nxt.is_full():
                break
            board = nxt
            player = player.other()
        boards.append((board, player))
    return boards


@pytest.fixture
def draw_board() -> Board:
    return Board.from_rows(DRAW_ROWS)


@pytest.fixture
def stats_path(tmp_path) -> str:
    return str(tmp_path / "stats.json")
