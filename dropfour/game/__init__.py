"""
dropfour.game - Core rules engine

This package contains the grid with its gravity-drop rule and the match controller
that manages turns and decides wins and ties.
"""

from dropfour.game.grid import Grid
from dropfour.game.rules import MatchController, MatchEnv, Player

__all__ = ['Grid', 'MatchController', 'MatchEnv', 'Player']
