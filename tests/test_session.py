import random

import pytest

from connect4ai.game.board import Board
from connect4ai.game.rules import Move
from connect4ai.game.session import GameSession, GameState, SessionEvent
from connect4ai.utils import (ColumnFullError, GameOverError, OutOfRangeError, OutOfTurnError,
                              Player)

from conftest import DRAW_ROWS, empty_rows


class Recorder:
    def __init__(self):
        self.events = []

    def __call__(self, event, session):
        self.events.append(event)


def test_new_session_starts_with_human_to_move() -> None:
    session = GameSession()

    assert session.state == GameState.PLAYING
    assert session.is_human_turn
    assert session.board == Board.empty()
    assert session.moves == []
    assert session.result_for_stats() is None


def test_human_then_ai_move() -> None:
    recorder = Recorder()
    session = GameSession("medium", listeners=[recorder])

    human = session.human_move(0)
    assert human == Move(column=0, row=5, player=Player.ONE)
    assert not session.is_human_turn

    ai = session.ai_move()
    assert ai == Move(column=3, row=5, player=Player.TWO)
    assert session.is_human_turn
    assert session.last_move == ai
    assert session.moves == [human, ai]
    assert recorder.events == [SessionEvent.DROP, SessionEvent.DROP]


def test_moves_out_of_turn_are_rejected() -> None:
    session = GameSession()

    with pytest.raises(OutOfTurnError):
        session.ai_move()

    session.human_move(3)
    with pytest.raises(OutOfTurnError):
        session.human_move(3)


def test_bad_columns_leave_state_unchanged() -> None:
    session = GameSession()
    rows = empty_rows(6)
    for r in range(6):
        rows[r][2] = 1 if r % 2 else 2
    session.board = Board.from_rows(rows)

    with pytest.raises(ColumnFullError):
        session.human_move(2)
    with pytest.raises(OutOfRangeError):
        session.human_move(7)

    assert session.is_human_turn
    assert session.moves == []


def test_human_win() -> None:
    recorder = Recorder()
    session = GameSession(listeners=[recorder])
    rows = empty_rows(6)
    rows[5][:3] = [1, 1, 1]
    rows[4][:3] = [2, 2, 2]
    session.board = Board.from_rows(rows)

    session.human_move(3)

    assert session.state == GameState.PLAYER_WIN
    assert session.winner == Player.ONE
    assert session.winning_cells == [(5, 0), (5, 1), (5, 2), (5, 3)]
    assert session.result_for_stats() == "win"
    assert recorder.events == [SessionEvent.DROP, SessionEvent.WIN]

    with pytest.raises(GameOverError):
        session.human_move(4)
    with pytest.raises(GameOverError):
        session.ai_move()


def test_ai_win() -> None:
    recorder = Recorder()
    session = GameSession("hard", listeners=[recorder], depth=2)
    rows = empty_rows(6)
    rows[5][:3] = [2, 2, 2]
    rows[4][:3] = [1, 1, 1]
    session.board = Board.from_rows(rows)
    session.is_human_turn = False

    move = session.ai_move()

    assert move.column == 3
    assert session.state == GameState.AI_WIN
    assert session.winner == Player.TWO
    assert session.result_for_stats() == "loss"
    assert recorder.events == [SessionEvent.DROP, SessionEvent.LOSE]


def test_draw() -> None:
    recorder = Recorder()
    session = GameSession(listeners=[recorder])
    rows = [list(r) for r in DRAW_ROWS]
    rows[0][0] = 0
    session.board = Board.from_rows(rows)

    session.human_move(0)

    assert session.state == GameState.DRAW
    assert session.winner is None
    assert session.winning_cells is None
    assert session.result_for_stats() == "draw"
    assert recorder.events == [SessionEvent.DROP, SessionEvent.DRAW]


def test_ai_can_move_first() -> None:
    session = GameSession("medium", human_first=False)

    assert not session.is_human_turn
    move = session.ai_move()
    assert move == Move(column=3, row=5, player=Player.TWO)
    assert session.is_human_turn


def test_human_can_play_second_colour() -> None:
    session = GameSession("easy", human_player=Player.TWO, human_first=False)

    assert session.ai_player == Player.ONE
    assert session.ai_move().player == Player.ONE
    assert session.human_move(0).player == Player.TWO


def test_reset_starts_over() -> None:
    session = GameSession()
    session.human_move(1)
    session.ai_move()

    session.reset()

    assert session.board == Board.empty()
    assert session.moves == []
    assert session.last_move is None
    assert session.is_human_turn


def test_full_game_against_easy_ends() -> None:
    rng = random.Random(3)
    session = GameSession("easy", rng=random.Random(4))
    while not session.state.is_game_over():
        if session.is_human_turn:
            session.human_move(rng.choice([c for c in range(7) if session.board.column_height(c) < 6]))
        else:
            session.ai_move()

    assert session.result_for_stats() in ("win", "loss", "draw")
    assert len(session.moves) == session.board.piece_count()
