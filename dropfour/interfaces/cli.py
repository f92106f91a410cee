"""
cli.py - Command-line interface for playing a match in the console

This module wires a MatchController to standard input and output: it prints the grid and
whose turn it is, reads column numbers, and reports the winner or a tie.
"""

import argparse
from typing import List, Optional

from dropfour.debug import debug
from dropfour.game.rules import MatchController
from dropfour.utils import (DEFAULT_PLAYER_ONE, DEFAULT_PLAYER_TWO, ROWS, COLS,
                            MatchConfig, MatchOutcome)

QUIT_COMMANDS = ('q', 'quit', 'exit')


class SimpleCLI:
    """Console host for a two-player match."""

    def __init__(self):
        """Initialize the CLI."""
        self.match: Optional[MatchController] = None
        self.args = None

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Two-player gravity drop game in the console')
        parser.add_argument('--rows', type=int, default=ROWS, help='Grid height (at least 4)')
        parser.add_argument('--columns', type=int, default=COLS, help='Grid width (at least 4)')
        parser.add_argument('--player-one', default=DEFAULT_PLAYER_ONE, help='Name of the first player')
        parser.add_argument('--player-two', default=DEFAULT_PLAYER_TWO, help='Name of the second player')
        parser.add_argument('--log-level', default='error',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            help='Logging verbosity')
        parser.add_argument('--log-file', default=None, help='Also write log output to this file')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments and apply the logging settings."""
        self.args = self.build_parser().parse_args(argv)

        debug.set_from_string(self.args.log_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Run a match based on the parsed arguments.

        Returns:
            Process exit status
        """
        if argv is not None or not self.args:
            self.parse_args(argv)

        config = MatchConfig(
            rows=self.args.rows,
            columns=self.args.columns,
            player_one_name=self.args.player_one,
            player_two_name=self.args.player_two,
        )
        try:
            self.match = MatchController.from_config(config.validate())
        except ValueError as e:
            print(f"Error: {e}")
            return 2

        self.play_game()
        return 0

    def print_new_round(self) -> None:
        print(self.match.render())
        print(f"{self.match.get_active_player().name}'s turn.")

    def play_game(self) -> None:
        """Play a match interactively until it ends or a player quits."""
        columns = self.match.grid.columns
        print(f"Enter a column number (0-{columns - 1}) to drop a token, or 'q' to quit.")
        self.print_new_round()

        while not self.match.is_over():
            player = self.match.get_active_player()
            column = self.get_human_move(player.name)

            if column is None:
                print("Quitting game.")
                return

            print(f"Dropping {player.name}'s token into column {column}...")
            if not self.match.play_round(column):
                print(f"Column {column} is not available. Choose another column.")
                continue

            if self.match.outcome == MatchOutcome.WON:
                print(self.match.render())
                print(f"{self.match.winner.name} won!")
            elif self.match.outcome == MatchOutcome.TIED:
                print(self.match.render())
                print("No more cells. It's a Tie!")
            else:
                self.print_new_round()

    def get_human_move(self, name: str) -> Optional[int]:
        """
        Get a column from the active player.

        Re-prompts until the input is a number or a quit command. Range checking is left
        to the match so that out-of-range columns are rejected like full ones.

        Returns:
            Column index, or None if the player quit
        """
        while True:
            try:
                user_input = input(f"{name}, your move: ").strip().lower()
            except EOFError:
                return None

            if user_input in QUIT_COMMANDS:
                return None

            try:
                return int(user_input)
            except ValueError:
                print("Invalid input. Please enter a column number or 'q'.")


def main(argv: Optional[List[str]] = None) -> int:
    return SimpleCLI().run(argv)
