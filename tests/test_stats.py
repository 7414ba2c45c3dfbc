import contextlib
import json

import pytest

from connect4ai.data import stats_store
from connect4ai.data.stats_store import StatsWriteError, UnknownUserError
from connect4ai.utils import Connect4Error


def test_format_username() -> None:
    assert stats_store.format_username("  rahul   prakash ") == "Rahul Prakash"
    assert stats_store.format_username("ADA") == "Ada"


def test_create_and_get_user(stats_path) -> None:
    record = stats_store.create_user("ada lovelace", stats_path)

    assert record == {
        "username": "Ada Lovelace",
        "wins": 0,
        "losses": 0,
        "draws": 0,
        "total_games": 0,
        "last_played": None,
    }
    assert stats_store.get_user("ADA LOVELACE", stats_path) == record
    assert stats_store.get_user("nobody", stats_path) is None


def test_blank_username_rejected(stats_path) -> None:
    with pytest.raises(ValueError):
        stats_store.create_user("   ", stats_path)


def test_update_stats_counts_each_result(stats_path) -> None:
    stats_store.create_user("grace", stats_path)

    stats_store.update_stats("grace", "win", stats_path)
    stats_store.update_stats("Grace", "win", stats_path)
    stats_store.update_stats("grace", "loss", stats_path)
    record = stats_store.update_stats("grace", "draw", stats_path)

    assert (record["wins"], record["losses"], record["draws"]) == (2, 1, 1)
    assert record["total_games"] == 4
    assert record["last_played"] is not None
    assert stats_store.get_user("grace", stats_path) == record


def test_update_unknown_user(stats_path) -> None:
    with pytest.raises(UnknownUserError):
        stats_store.update_stats("ghost", "win", stats_path)


def test_update_rejects_unknown_result(stats_path) -> None:
    stats_store.create_user("grace", stats_path)

    with pytest.raises(ValueError):
        stats_store.update_stats("grace", "forfeit", stats_path)


def test_get_or_create_keeps_existing_record(stats_path) -> None:
    stats_store.create_user("alan", stats_path)
    stats_store.update_stats("alan", "win", stats_path)

    assert stats_store.get_or_create_user("alan", stats_path)["wins"] == 1
    assert stats_store.get_or_create_user("linus", stats_path)["wins"] == 0


def test_leaderboard_sorted_by_wins(stats_path) -> None:
    for name, wins in [("a", 1), ("b", 3), ("c", 2)]:
        stats_store.create_user(name, stats_path)
        for _ in range(wins):
            stats_store.update_stats(name, "win", stats_path)

    board = stats_store.get_leaderboard(path=stats_path)
    assert [u["username"] for u in board] == ["B", "C", "A"]
    assert len(stats_store.get_leaderboard(2, stats_path)) == 2


def test_file_is_plain_json_keyed_by_lowercase_name(stats_path) -> None:
    stats_store.create_user("Ada Lovelace", stats_path)

    with open(stats_path) as f:
        data = json.load(f)
    assert list(data) == ["ada lovelace"]


def test_corrupt_file_reads_as_empty(stats_path) -> None:
    with open(stats_path, "w") as f:
        f.write("{not json")

    assert stats_store.get_leaderboard(path=stats_path) == []


def fail_moves(monkeypatch):
    def broken_move(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(stats_store.shutil, "move", broken_move)


def test_failed_write_raises_and_keeps_saved_record(stats_path, monkeypatch) -> None:
    stats_store.create_user("ada", stats_path)
    fail_moves(monkeypatch)

    with pytest.raises(StatsWriteError):
        stats_store.update_stats("ada", "win", stats_path)
    assert stats_store.get_user("ada", stats_path)["wins"] == 0


def test_failed_create_raises(stats_path, monkeypatch) -> None:
    fail_moves(monkeypatch)

    with pytest.raises(Connect4Error):
        stats_store.create_user("ada", stats_path)
    assert stats_store.get_user("ada", stats_path) is None


def test_update_holds_one_lock_across_read_and_write(stats_path, monkeypatch) -> None:
    stats_store.create_user("ada", stats_path)
    held = []
    acquired = []
    events = []
    real_lock = stats_store._lock
    real_read = stats_store._read_json
    real_write = stats_store._write_json

    @contextlib.contextmanager
    def tracking_lock(path):
        with real_lock(path):
            held.append(path)
            acquired.append(path)
            yield
            held.pop()

    def tracking_read(path):
        events.append(("read", bool(held), len(acquired)))
        return real_read(path)

    def tracking_write(path, data):
        events.append(("write", bool(held), len(acquired)))
        return real_write(path, data)

    monkeypatch.setattr(stats_store, "_lock", tracking_lock)
    monkeypatch.setattr(stats_store, "_read_json", tracking_read)
    monkeypatch.setattr(stats_store, "_write_json", tracking_write)

    stats_store.update_stats("ada", "win", stats_path)

    assert events == [("read", True, 1), ("write", True, 1)]
    assert stats_store.get_user("ada", stats_path)["wins"] == 1
