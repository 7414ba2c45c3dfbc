"""
cli.py - Command-line interface for connect4ai

Commands:
    play         Play an interactive game against an AI opponent
    stats        Show a player's win/loss/draw record
    leaderboard  Show the players with the most wins
    benchmark    Pit two AI difficulties against each other and time them
"""

import argparse
import random
import sys
import time
from typing import Dict, List, Optional

from connect4ai.ai.strategies import Difficulty, get_strategy
from connect4ai.data import stats_store
from connect4ai.debug import debug, DebugLevel
from connect4ai.game.board import Board
from connect4ai.game.rules import apply_move, check_win
from connect4ai.game.session import GameSession, GameState
from connect4ai.utils import (AI_MOVE_DELAY, COLS, HARD_SEARCH_DEPTH, NO_MOVE, STATS_FILE,
                              ColumnFullError, Connect4Error, Player)

QUIT = -1
DIFFICULTY_CHOICES = [d.value for d in Difficulty]


def positive_int(value: str) -> int:
    """argparse type for counts and depths that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect Four against an AI opponent')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--debug-level', default='warning',
                        choices=[level.name.lower() for level in DebugLevel],
                        help='Logging level (default: warning)')
    parser.add_argument('--log-file', help='Also write logs to this file')
    parser.add_argument('--stats-file', default=STATS_FILE, help='Path to the stats JSON file')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--difficulty', choices=DIFFICULTY_CHOICES, default='medium',
                             help='AI opponent strength')
    play_parser.add_argument('--user', help='Record the result under this player name')
    play_parser.add_argument('--ai-first', action='store_true', help='Let the AI open')
    play_parser.add_argument('--depth', type=positive_int, default=HARD_SEARCH_DEPTH,
                             help='Search depth for the hard AI')
    play_parser.add_argument('--no-delay', action='store_true',
                             help='Do not pause before AI moves')

    stats_parser = subparsers.add_parser('stats', help="Show a player's record")
    stats_parser.add_argument('name', help='Player name')

    board_parser = subparsers.add_parser('leaderboard', help='Show the top players')
    board_parser.add_argument('--limit', type=int, default=stats_store.LEADERBOARD_SIZE,
                              help='Number of players to list')

    bench_parser = subparsers.add_parser('benchmark', help='Play AI against AI')
    bench_parser.add_argument('--games', type=int, default=10, help='Number of games')
    bench_parser.add_argument('--first', choices=DIFFICULTY_CHOICES, default='hard',
                              help='Difficulty moving first')
    bench_parser.add_argument('--second', choices=DIFFICULTY_CHOICES, default='medium',
                              help='Difficulty moving second')
    bench_parser.add_argument('--depth', type=positive_int, default=HARD_SEARCH_DEPTH,
                              help='Search depth for hard players')
    bench_parser.add_argument('--seed', type=int, help='Seed for the easy AI')

    return parser


class SimpleCLI:
    """Simple command-line interface for connect4ai."""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv
        self.args = None

    def parse_args(self) -> None:
        """Parse command-line arguments and configure logging."""
        self.args = build_parser().parse_args(self.argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the selected command and return an exit code."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'stats':
            return self.show_stats()
        elif self.args.command == 'leaderboard':
            self.show_leaderboard()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a game against the AI in the terminal."""
        args = self.args
        session = GameSession(difficulty=args.difficulty, human_first=not args.ai_first,
                              depth=args.depth,
                              ai_delay=0.0 if args.no_delay else AI_MOVE_DELAY)

        print(f"Starting a new game against the {args.difficulty} AI!")
        print(f"You are {session.human_player}. Enter a column (0-{COLS - 1}) or 'q' to quit.")
        print(session.board)

        while not session.state.is_game_over():
            if session.is_human_turn:
                move = self.get_human_move()
                if move is None:
                    continue
                if move == QUIT:
                    print("Quitting game.")
                    return
                try:
                    session.human_move(move)
                except ColumnFullError:
                    print(f"Column {move} is full.")
                    continue
            else:
                print("AI is thinking...")
                ai_move = session.ai_move()
                if ai_move is None:
                    break
                print(f"AI plays column {ai_move.column}")
            print(session.board)

        print("Game over!")
        if session.state == GameState.PLAYER_WIN:
            print("You win! Congratulations!")
        elif session.state == GameState.AI_WIN:
            print("AI wins! Better luck next time.")
        else:
            print("It's a draw!")

        if args.user and session.result_for_stats():
            self.record_result(args.user, session.result_for_stats())

    def record_result(self, name: str, result: str) -> None:
        path = self.args.stats_file
        stats_store.get_or_create_user(name, path)
        record = stats_store.update_stats(name, result, path)
        print(f"{record['username']}: {record['wins']} wins, {record['losses']} losses, "
              f"{record['draws']} draws")

    def get_human_move(self) -> Optional[int]:
        """
        Read one move from the player.

        Returns:
            A column index, QUIT, or None if the input was not understood
        """
        try:
            user_input = input(f"Your move (0-{COLS - 1}, q): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or 'q'.")
            return None

        if not 0 <= move < COLS:
            print(f"Column must be between 0 and {COLS - 1}.")
            return None
        return move

    def show_stats(self) -> int:
        record = stats_store.get_user(self.args.name, self.args.stats_file)
        if record is None:
            print(f"No stats recorded for {stats_store.format_username(self.args.name)}.")
            return 1

        print(f"Player:      {record['username']}")
        print(f"Wins:        {record['wins']}")
        print(f"Losses:      {record['losses']}")
        print(f"Draws:       {record['draws']}")
        print(f"Total games: {record['total_games']}")
        print(f"Last played: {record['last_played'] or 'never'}")
        return 0

    def show_leaderboard(self) -> None:
        players = stats_store.get_leaderboard(self.args.limit, self.args.stats_file)
        if not players:
            print("No games recorded yet.")
            return

        print(f"{'#':>3}  {'Player':<20} {'W':>4} {'L':>4} {'D':>4} {'Games':>6}")
        for rank, record in enumerate(players, start=1):
            print(f"{rank:>3}  {record['username']:<20} {record['wins']:>4} "
                  f"{record['losses']:>4} {record['draws']:>4} {record['total_games']:>6}")

    def benchmark(self) -> Dict[str, int]:
        """Play AI-vs-AI games and report results and move timings."""
        args = self.args
        rng = random.Random(args.seed)
        sides = {
            Player.ONE: Difficulty.parse(args.first),
            Player.TWO: Difficulty.parse(args.second),
        }
        print(f"Running {args.games} games: {sides[Player.ONE].value} (X) vs "
              f"{sides[Player.TWO].value} (O), depth {args.depth}")

        results = {"first": 0, "second": 0, "draw": 0}
        think_time = {Player.ONE: 0.0, Player.TWO: 0.0}
        move_count = {Player.ONE: 0, Player.TWO: 0}

        for _ in range(args.games):
            winner = self._play_ai_game(sides, rng, think_time, move_count)
            if winner == Player.ONE:
                results["first"] += 1
            elif winner == Player.TWO:
                results["second"] += 1
            else:
                results["draw"] += 1

        print(f"Results: first {results['first']}, second {results['second']}, "
              f"draws {results['draw']}")
        for player, difficulty in sides.items():
            moves = move_count[player]
            avg_ms = think_time[player] / moves * 1000 if moves else 0.0
            print(f"  {difficulty.value} ({player}): {moves} moves, {avg_ms:.2f} ms per move")
        return results

    def _play_ai_game(self, sides, rng, think_time, move_count) -> Optional[Player]:
        board = Board.empty()
        player = Player.ONE
        while True:
            strategy = get_strategy(sides[player])
            options = {'depth': self.args.depth} if sides[player] == Difficulty.HARD else {}

            start = time.perf_counter()
            col = strategy(board, player=player, rng=rng, **options)
            think_time[player] += time.perf_counter() - start
            move_count[player] += 1

            if col == NO_MOVE:
                return None
            board = apply_move(board, col, player)
            if check_win(board, player):
                return player
            if board.is_full():
                return None
            player = player.other()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    try:
        return SimpleCLI(argv).run()
    except Connect4Error as e:
        debug.error(str(e), "cli")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
