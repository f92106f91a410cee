"""
rules.py - Turn management, win/tie evaluation and a Gymnasium environment

This module provides:
1. The Player record and the MatchController that runs one match over a Grid
2. A gymnasium-compatible environment that drives a MatchController
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.debug import debug
from dropfour.game.grid import Grid
from dropfour.utils import (DEFAULT_PLAYER_ONE, DEFAULT_PLAYER_TWO, ROWS, COLS,
                            MatchConfig, MatchOutcome, Token, check_tie, check_win)


@dataclass(frozen=True)
class Player:
    """A participant in a match: display name and the token they drop."""
    name: str
    token: Token


class MatchController:
    """
    Runs a single match: whose turn it is, where tokens go, and when the match ends.

    The first player always moves first. A match is over once it is won or tied; further
    calls to play_round() are rejected.
    """

    def __init__(self, player_one_name: str = DEFAULT_PLAYER_ONE,
                 player_two_name: str = DEFAULT_PLAYER_TWO,
                 rows: int = ROWS, columns: int = COLS):
        """
        Initialize a new match.

        Args:
            player_one_name: Display name of the player holding token 1
            player_two_name: Display name of the player holding token 2
            rows: Grid height
            columns: Grid width

        Raises:
            InvalidGridConfig: if the grid dimensions are too small
            ValueError: if a player name is empty
        """
        self.config = MatchConfig(rows, columns, player_one_name, player_two_name).validate()
        self._players = (
            Player(player_one_name, Token.ONE),
            Player(player_two_name, Token.TWO),
        )
        self.reset()

    @classmethod
    def from_config(cls, config: MatchConfig) -> "MatchController":
        return cls(config.player_one_name, config.player_two_name,
                   config.rows, config.columns)

    def reset(self) -> None:
        """Start over on an empty grid with the same players and size."""
        self._grid = Grid(self.config.rows, self.config.columns)
        self._active_index = 0
        self._outcome = MatchOutcome.IN_PROGRESS
        self._winner: Optional[Player] = None
        self._rounds_played = 0
        debug.debug(f"New match: {self._players[0].name} vs {self._players[1].name}", "match")

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def players(self) -> Tuple[Player, Player]:
        return self._players

    @property
    def outcome(self) -> MatchOutcome:
        return self._outcome

    @property
    def winner(self) -> Optional[Player]:
        """The player who completed a line, or None while in progress or on a tie."""
        return self._winner

    @property
    def rounds_played(self) -> int:
        """Number of accepted moves so far."""
        return self._rounds_played

    def get_active_player(self) -> Player:
        return self._players[self._active_index]

    def is_over(self) -> bool:
        return self._outcome.is_game_over()

    def snapshot(self) -> np.ndarray:
        return self._grid.snapshot()

    def render(self) -> str:
        return self._grid.render()

    def _switch_player_turn(self) -> None:
        self._active_index = 1 - self._active_index
        debug.debug(f"{self.get_active_player().name}'s turn.", "match")

    def play_round(self, column: int) -> bool:
        """
        Drop the active player's token into a column and evaluate the result.

        On an accepted move the grid is checked for a win by the mover first, then for a
        full grid. A win ends the match without switching turns; a full grid without a
        win ends it as a tie; otherwise the other player becomes active.

        Args:
            column: Column to drop into (0-indexed)

        Returns:
            True if the move was accepted, False if the column is out of range or full, or
            if the match is already over. A rejected move changes nothing and the same
            player keeps the turn.
        """
        player = self.get_active_player()

        if self.is_over():
            debug.warning(f"Rejected move by {player.name}: match is already {self._outcome.name}", "match")
            return False

        debug.debug(f"Dropping {player.name}'s token into column {column}...", "match")
        if not self._grid.drop_token(column, player.token):
            debug.warning(f"Rejected move by {player.name}: column {column!r} is unavailable", "match")
            return False

        self._rounds_played += 1
        cells = self._grid.snapshot()

        debug.start_timer("win_check")
        won = check_win(cells, player.token)
        debug.end_timer("win_check", "match")

        if won:
            self._outcome = MatchOutcome.WON
            self._winner = player
            debug.info(f"{player.name} won!", "match")
        elif check_tie(cells):
            self._outcome = MatchOutcome.TIED
            debug.info("No more cells. It's a Tie!", "match")
        else:
            self._switch_player_turn()

        return True


class MatchEnv(gym.Env):
    """
    MatchController exposed through the Gymnasium interface.

    Actions are column indices and observations are grid snapshots. Each step plays one
    round for whichever player is active, so a single agent acting for both sides (or a
    host alternating two agents) walks through a whole match.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    reward_win = 1.0
    reward_tie = 0.0
    reward_step = 0.0
    reward_rejected = -0.5

    def __init__(self, config: Optional[MatchConfig] = None, render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            config: Match configuration, defaults to a standard 6x7 match
            render_mode: Mode for rendering the environment
        """
        debug.debug("Initializing MatchEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode!r}")

        self.config = (config or MatchConfig()).validate()
        self.match = MatchController.from_config(self.config)
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(self.config.columns)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.config.rows, self.config.columns), dtype=np.int8
        )

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to an empty grid.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.match.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play one round with the given column.

        Stepping a finished match changes nothing and reports the episode as terminated
        again with zero reward. Actions that are not integers are handed to the match
        unchanged, so they are rejected like any other unusable column.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        debug.debug(f"Environment step with action {action!r}", "env")

        if self.match.is_over():
            info = self._get_info()
            info['rejected'] = True
            return self._get_observation(), 0.0, True, False, info

        column = int(action) if isinstance(action, np.integer) else action
        if not self.match.play_round(column):
            info = self._get_info()
            info['rejected'] = True
            return self._get_observation(), self.reward_rejected, False, False, info

        reward = self.reward_step
        if self.match.outcome == MatchOutcome.WON:
            reward = self.reward_win
        elif self.match.outcome == MatchOutcome.TIED:
            reward = self.reward_tie

        if self.render_mode == "human":
            self.render()

        info = self._get_info()
        info['rejected'] = False
        return self._get_observation(), reward, self.match.is_over(), False, info

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current grid.

        Returns:
            The ASCII board for 'ascii', None otherwise
        """
        if self.render_mode == "ascii":
            return self.match.render()
        if self.render_mode == "human":
            print(self.match.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return np.array(self.match.snapshot(), dtype=np.int8)

    def _get_info(self) -> Dict:
        winner = self.match.winner
        return {
            'active_player': int(self.match.get_active_player().token),
            'outcome': self.match.outcome.name,
            'winner': int(winner.token) if winner else None,
            'valid_columns': self.match.grid.valid_columns(),
            'rounds_played': self.match.rounds_played,
            'last_drop': self.match.grid.last_drop,
        }
