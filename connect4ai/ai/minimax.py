"""
minimax.py - Hard opponent: minimax search with alpha-beta pruning

The AI maximizes and its opponent minimizes. Wins and losses are scored
beyond any heuristic value, with a bonus for reaching them sooner. A full
board scores 0. Positions at the depth limit fall back to a static window
evaluation:

- every four-cell window holding only the AI's pieces adds
  WINDOW_WEIGHTS[count], and only the opponent's pieces subtracts it;
- windows holding both players' pieces are dead and score nothing;
- each AI piece in the center column adds CENTER_WEIGHT.
"""

import math
from typing import List, Tuple

import numpy as np

from connect4ai.debug import debug
from connect4ai.game.board import Board
from connect4ai.game.rules import apply_move, check_win, valid_moves
from connect4ai.utils import (CENTER_COL, CENTER_WEIGHT, HARD_SEARCH_DEPTH, NO_MOVE,
                              WIN_SCORE, WINDOW_INDEX, WINDOW_WEIGHTS, Player, as_player)

_WEIGHTS = np.array(WINDOW_WEIGHTS, dtype=np.int64)


def evaluate_position(board: Board, player) -> int:
    """
    Static score of board from player's point of view.

    More of player's pieces in an open window never scores lower than fewer,
    and the opponent's windows mirror that with negative weights.
    """
    me = as_player(player)
    cells = board.grid.ravel()[WINDOW_INDEX]
    mine = (cells == me.value).sum(axis=1)
    theirs = (cells == me.other().value).sum(axis=1)

    score = _WEIGHTS[mine[theirs == 0]].sum() - _WEIGHTS[theirs[mine == 0]].sum()
    score += CENTER_WEIGHT * np.count_nonzero(board.grid[:, CENTER_COL] == me.value)
    return int(score)


def _center_first(moves: List[int]) -> List[int]:
    return sorted(moves, key=lambda c: (abs(c - CENTER_COL), c))


class MinimaxPlayer:
    """
    Depth-limited minimax player.

    Each search builds and discards its own tree; the only state kept between
    calls is the node counter from the most recent search.
    """

    def __init__(self, depth: int = HARD_SEARCH_DEPTH, player=Player.TWO, prune: bool = True):
        """
        Args:
            depth: Plies to search before falling back to evaluate_position
            player: The side this player moves for
            prune: Apply alpha-beta cutoffs. Turning it off gives plain
                minimax with the same result, only slower.
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.player = as_player(player)
        self.prune = prune
        self.nodes_evaluated = 0

    def get_move(self, board: Board) -> int:
        """Best column for self.player, or NO_MOVE (-1) if the board is full."""
        column, _ = self.search(board)
        return column

    def search(self, board: Board) -> Tuple[int, float]:
        """
        Search the position and report the chosen column with its score.

        Root moves are tried in ascending order and only a strictly better
        score replaces the incumbent, so equal scores go to the lowest column.

        Returns:
            (column, score), or (NO_MOVE, 0) when there is no legal move
        """
        self.nodes_evaluated = 0
        moves = valid_moves(board)
        if not moves:
            return NO_MOVE, 0

        debug.start_timer("minimax_search")

        best_column = moves[0]
        best_score = -math.inf
        alpha = -math.inf
        beta = math.inf

        for column in moves:
            child = apply_move(board, column, self.player)
            score = self._minimax(child, self.depth - 1, alpha, beta, False)

            if score > best_score:
                best_score = score
                best_column = column

            if self.prune:
                alpha = max(alpha, score)

        elapsed = debug.end_timer("minimax_search", "ai")
        debug.info(f"Hard AI chose column {best_column} (score {best_score}, "
                   f"depth {self.depth}, {self.nodes_evaluated} nodes, "
                   f"{elapsed or 0.0:.3f}s)", "ai")
        return best_column, best_score

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float,
                 is_maximizing: bool) -> float:
        """
        Score a position by recursive minimax.

        Args:
            board: Position after the previous move
            depth: Remaining plies
            alpha: Best score the maximizer can already guarantee
            beta: Best score the minimizer can already guarantee
            is_maximizing: True when self.player is to move
        """
        self.nodes_evaluated += 1
        me = self.player
        them = me.other()

        if check_win(board, me):
            return WIN_SCORE + depth
        if check_win(board, them):
            return -(WIN_SCORE + depth)
        if board.is_full():
            return 0

        if depth == 0:
            return evaluate_position(board, me)

        moves = _center_first(valid_moves(board))

        if is_maximizing:
            max_score = -math.inf
            for column in moves:
                score = self._minimax(apply_move(board, column, me), depth - 1, alpha, beta, False)
                max_score = max(max_score, score)
                if self.prune:
                    alpha = max(alpha, score)
                    if alpha >= beta:
                        break
            return max_score

        min_score = math.inf
        for column in moves:
            score = self._minimax(apply_move(board, column, them), depth - 1, alpha, beta, True)
            min_score = min(min_score, score)
            if self.prune:
                beta = min(beta, score)
                if alpha >= beta:
                    break
        return min_score


def get_hard_move(board: Board, player=Player.TWO, rng=None, depth: int = HARD_SEARCH_DEPTH) -> int:
    """
    Choose a move by alpha-beta search.

    Args:
        board: Position to move in
        player: The side the AI plays
        rng: Unused; the search is deterministic
        depth: Search depth in plies

    Returns:
        A column index, or NO_MOVE (-1) if the board is full
    """
    return MinimaxPlayer(depth=depth, player=player).get_move(board)


if __name__ == "__main__":
    import time
    from connect4ai.debug import DebugLevel
    from connect4ai.game.rules import play_moves

    debug.configure(level=DebugLevel.INFO)

    for label, columns in [
        ("Empty board", []),
        ("Block the bottom row", [0, 0, 1, 1, 2]),
        ("Stacked center", [3, 2, 3, 4, 3]),
    ]:
        board = play_moves(columns)
        ai = MinimaxPlayer(depth=HARD_SEARCH_DEPTH, player=Player.ONE if len(columns) % 2 == 0 else Player.TWO)
        print(label)
        print(board)
        start = time.time()
        move = ai.get_move(board)
        print(f"Best move: {move}, nodes: {ai.nodes_evaluated}, {time.time() - start:.3f}s\n")
