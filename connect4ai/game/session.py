"""
session.py - A single human-versus-AI game

GameSession is the caller the rules engine expects. It holds the current
Board, drives the Playing -> {PlayerWin, AIWin, Draw} state machine and asks
the selected strategy for the AI's replies. Listeners receive "drop", "win",
"lose" and "draw" events, which front ends use for sound cues.
"""

import functools
import random
import time
from enum import Enum
from typing import Callable, Iterable, List, Optional, Tuple

from connect4ai.ai.strategies import Difficulty, get_strategy
from connect4ai.debug import debug
from connect4ai.game.board import Board
from connect4ai.game.rules import Move, apply_move, check_win, drop_row, winning_cells
from connect4ai.utils import NO_MOVE, GameOverError, OutOfTurnError, Player, as_player


class GameState(Enum):
    """Outcome of a session."""
    PLAYING = "playing"
    PLAYER_WIN = "playerWin"
    AI_WIN = "aiWin"
    DRAW = "draw"

    def is_game_over(self) -> bool:
        return self != GameState.PLAYING


class SessionEvent(Enum):
    DROP = "drop"
    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"


Listener = Callable[[SessionEvent, 'GameSession'], None]

# Result strings understood by the stats store
_STATS_RESULTS = {
    GameState.PLAYER_WIN: "win",
    GameState.AI_WIN: "loss",
    GameState.DRAW: "draw",
}


class GameSession:
    """
    One game between a human and an AI opponent.

    The human plays human_player (Player.ONE by default) and the AI plays the
    other side. The session does not move for the AI on its own: after a
    human move, call ai_move() to get the reply.
    """

    def __init__(self, difficulty=Difficulty.MEDIUM, human_player=Player.ONE,
                 human_first: bool = True, rng: Optional[random.Random] = None,
                 listeners: Iterable[Listener] = (), depth: Optional[int] = None,
                 ai_delay: float = 0.0):
        """
        Args:
            difficulty: Difficulty or its name
            human_player: Which side the human plays
            human_first: Whether the human moves first
            rng: Random source handed to the strategy
            listeners: Callables notified of session events
            depth: Search depth override for the hard strategy
            ai_delay: Seconds to pause before each AI move
        """
        self.difficulty = Difficulty.parse(difficulty)
        self.human_player = as_player(human_player)
        self.ai_player = self.human_player.other()
        self.human_first = human_first
        self.rng = rng
        self.ai_delay = ai_delay
        self.listeners: List[Listener] = list(listeners)

        strategy = get_strategy(self.difficulty)
        if depth is not None and self.difficulty == Difficulty.HARD:
            strategy = functools.partial(strategy, depth=depth)
        self._strategy = strategy

        self.reset()

    def reset(self) -> None:
        """Start a new game with an empty board."""
        self.board = Board.empty()
        self.state = GameState.PLAYING
        self.winning_cells: Optional[List[Tuple[int, int]]] = None
        self.last_move: Optional[Move] = None
        self.moves: List[Move] = []
        self.is_human_turn = self.human_first
        debug.debug(f"New {self.difficulty.value} session, human first: {self.human_first}", "session")

    def add_listener(self, listener: Listener) -> None:
        self.listeners.append(listener)

    def human_move(self, col: int) -> Move:
        """
        Drop the human's piece into col.

        Raises:
            GameOverError: if the game has finished
            OutOfTurnError: if it is the AI's turn
            OutOfRangeError, ColumnFullError: for an unplayable column
        """
        self._check_can_move(human=True)
        return self._play(col, self.human_player)

    def ai_move(self) -> Optional[Move]:
        """
        Let the AI choose and play its move.

        Returns:
            The move played, or None if the strategy found no legal column

        Raises:
            GameOverError: if the game has finished
            OutOfTurnError: if it is the human's turn
        """
        self._check_can_move(human=False)

        if self.ai_delay > 0:
            time.sleep(self.ai_delay)

        col = self._strategy(self.board, player=self.ai_player, rng=self.rng)
        if col == NO_MOVE:
            debug.warning("AI found no legal move", "session")
            return None
        return self._play(col, self.ai_player)

    def result_for_stats(self) -> Optional[str]:
        """"win", "loss" or "draw" from the human's side, None while playing."""
        return _STATS_RESULTS.get(self.state)

    @property
    def winner(self) -> Optional[Player]:
        if self.state == GameState.PLAYER_WIN:
            return self.human_player
        if self.state == GameState.AI_WIN:
            return self.ai_player
        return None

    def _check_can_move(self, human: bool) -> None:
        if self.state.is_game_over():
            raise GameOverError(f"Game is over ({self.state.value})")
        if self.is_human_turn != human:
            side = "human" if self.is_human_turn else "AI"
            raise OutOfTurnError(f"It is the {side}'s turn")

    def _play(self, col: int, player: Player) -> Move:
        row = drop_row(self.board, col)
        self.board = apply_move(self.board, col, player)
        move = Move(column=col, row=row, player=player)
        self.last_move = move
        self.moves.append(move)
        debug.debug(f"Player {player.value} dropped into column {col} (row {row})", "session")
        self._emit(SessionEvent.DROP)

        if check_win(self.board, player):
            self.winning_cells = winning_cells(self.board, player)
            if player == self.human_player:
                self.state = GameState.PLAYER_WIN
                self._emit(SessionEvent.WIN)
            else:
                self.state = GameState.AI_WIN
                self._emit(SessionEvent.LOSE)
            debug.info(f"Game over: {self.state.value} with {self.winning_cells}", "session")
        elif self.board.is_full():
            self.state = GameState.DRAW
            self._emit(SessionEvent.DRAW)
            debug.info("Game over: draw", "session")
        else:
            self.is_human_turn = player != self.human_player

        return move

    def _emit(self, event: SessionEvent) -> None:
        for listener in self.listeners:
            listener(event, self)
