"""
Money Adventure Rules Engine

A deterministic, seedable implementation of the Money Adventure
financial-literacy board game.
"""

from .board import Board
from .config import DifficultyLevel, GameConfig, PenaltyPolicy
from .game import GamePhase, GameState, create_game
from .player import ControllerKind, Player, PlayerState

__all__ = [
    "GameState",
    "GamePhase",
    "create_game",
    "Player",
    "PlayerState",
    "ControllerKind",
    "Board",
    "GameConfig",
    "DifficultyLevel",
    "PenaltyPolicy",
]
