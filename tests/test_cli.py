import builtins

import pytest

from connect4ai.data import stats_store
from connect4ai.interfaces.cli import QUIT, SimpleCLI, build_parser, main


def feed_input(monkeypatch, answers):
    answers = iter(answers)
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(answers))


def test_no_command_fails(capsys) -> None:
    assert main([]) == 1
    assert "specify a command" in capsys.readouterr().out


def test_get_human_move_parses_input(monkeypatch, capsys) -> None:
    cli = SimpleCLI(["play"])
    feed_input(monkeypatch, ["3", "q", "abc", "9"])

    assert cli.get_human_move() == 3
    assert cli.get_human_move() == QUIT
    assert cli.get_human_move() is None
    assert cli.get_human_move() is None
    out = capsys.readouterr().out
    assert "Invalid input" in out
    assert "between 0 and 6" in out


def test_play_until_quit(monkeypatch, capsys) -> None:
    feed_input(monkeypatch, ["3", "nope", "q"])

    assert main(["play", "--difficulty", "medium", "--no-delay"]) == 0
    out = capsys.readouterr().out
    assert "AI plays column" in out
    assert "Invalid input" in out
    assert "Quitting game." in out


def test_play_treats_end_of_input_as_quit(monkeypatch, capsys) -> None:
    def closed(prompt=""):
        raise EOFError

    monkeypatch.setattr(builtins, "input", closed)

    assert main(["play", "--ai-first", "--difficulty", "easy", "--no-delay"]) == 0
    assert "Quitting game." in capsys.readouterr().out


def test_record_result_creates_user(stats_path, capsys) -> None:
    cli = SimpleCLI(["--stats-file", stats_path, "play", "--user", "ada"])
    cli.parse_args()

    cli.record_result("ada", "win")

    assert stats_store.get_user("ada", stats_path)["wins"] == 1
    assert "Ada: 1 wins" in capsys.readouterr().out


def test_stats_command(stats_path, capsys) -> None:
    assert main(["--stats-file", stats_path, "stats", "ada"]) == 1
    assert "No stats recorded for Ada" in capsys.readouterr().out

    stats_store.create_user("ada", stats_path)
    stats_store.update_stats("ada", "draw", stats_path)

    assert main(["--stats-file", stats_path, "stats", "ada"]) == 0
    out = capsys.readouterr().out
    assert "Draws:       1" in out
    assert "Total games: 1" in out


def test_leaderboard_command(stats_path, capsys) -> None:
    main(["--stats-file", stats_path, "leaderboard"])
    assert "No games recorded yet." in capsys.readouterr().out

    stats_store.create_user("ada", stats_path)
    stats_store.update_stats("ada", "win", stats_path)
    main(["--stats-file", stats_path, "leaderboard"])
    assert "Ada" in capsys.readouterr().out


def test_benchmark_plays_requested_games(capsys) -> None:
    cli = SimpleCLI(["benchmark", "--games", "3", "--first", "medium", "--second", "easy",
                     "--seed", "1"])
    cli.parse_args()

    results = cli.benchmark()

    assert sum(results.values()) == 3
    assert "ms per move" in capsys.readouterr().out


@pytest.mark.parametrize("command", ["play", "benchmark"])
@pytest.mark.parametrize("depth", ["0", "-2", "deep"])
def test_depth_must_be_positive(command, depth, capsys) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([command, "--depth", depth])
    assert "--depth" in capsys.readouterr().err


def test_depth_accepted(capsys) -> None:
    assert build_parser().parse_args(["play", "--depth", "2"]).depth == 2


def test_failed_stats_write_is_reported(stats_path, monkeypatch, capsys) -> None:
    stats_store.create_user("ada", stats_path)

    def broken_move(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(stats_store.shutil, "move", broken_move)
    monkeypatch.setattr(SimpleCLI, "play_game",
                        lambda self: self.record_result("ada", "win"))

    assert main(["--stats-file", stats_path, "play", "--user", "ada"]) == 1
    out = capsys.readouterr().out
    assert "Error: Could not save stats" in out
    assert "1 wins" not in out
    assert stats_store.get_user("ada", stats_path)["wins"] == 0
