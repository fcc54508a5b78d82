"""Base class for all Money Adventure computer players."""

import random
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from money_adventure.cards import Card
    from money_adventure.config import LifeGoal, SupportKind
    from money_adventure.player import PlayerState


class Decision(Enum):
    """Ways a pending card can be resolved."""

    BUY = "buy"
    PASS = "pass"
    DONATE = "donate"
    PAY = "pay"


class Agent(ABC):
    """
    Abstract base class for computer players.

    Agents hold no game state of their own. Every method receives the
    player it decides for and the game's random source, so a seeded game
    replays the same decisions.

    Attributes:
        player_id: The player's id in the game.
        name: The player's display name.
    """

    def __init__(self, player_id: str, name: str):
        self.player_id = player_id
        self.name = name

    @abstractmethod
    def choose_goal(self, goals: List["LifeGoal"], rng: random.Random) -> "LifeGoal":
        """Pick a life goal during goal selection."""

    @abstractmethod
    def decide(self, player: "PlayerState", card: "Card", rng: random.Random) -> Decision:
        """Resolve a pending card."""

    @abstractmethod
    def choose_support(
        self,
        player: "PlayerState",
        targets: List["PlayerState"],
        rng: random.Random,
    ) -> Optional[Tuple["PlayerState", "SupportKind"]]:
        """Optionally pick an earner to support before rolling."""

    @abstractmethod
    def wants_support(self, player: "PlayerState", rng: random.Random) -> bool:
        """Whether to ask a human investor for support before rolling."""

    def say(self, category: str, rng: random.Random) -> Optional[str]:
        """A line of dialog for the log, or None."""
        return None
