"""
Player state and management.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from money_adventure.agents.personality import BehaviorProfile, Personality, get_profile
from money_adventure.cards import Card
from money_adventure.config import LifeGoal


SUPPORT_CATEGORY = "support"


class ControllerKind(str, Enum):
    HUMAN = "human"
    COMPUTER = "computer"


@dataclass
class Asset:
    """An income-producing holding owned by exactly one player."""

    asset_id: str
    name: str
    cost: int
    cashflow: int
    category: str = "business"

    @property
    def is_sellable(self) -> bool:
        """Support stakes stay with the giver for the rest of the game."""
        return self.category != SUPPORT_CATEGORY


@dataclass(frozen=True)
class Liability:
    """A fixed recurring obligation, already counted in monthly expenses."""

    liability_id: str
    name: str
    total_amount: int
    monthly_payment: int


class PlayerState:
    """Represents the complete financial state of a player in the game."""

    def __init__(
        self,
        player_id: str,
        name: str,
        controller: ControllerKind,
        cash: int,
        salary: int,
        monthly_expenses: int,
        job_title: str = "",
        avatar: str = "",
        liabilities: Optional[List[Liability]] = None,
        behavior_profile: Optional[BehaviorProfile] = None,
    ):
        self.player_id = player_id
        self.name = name
        self.controller = controller
        self.job_title = job_title
        self.avatar = avatar
        self.cash = cash
        self.salary = salary
        self.monthly_expenses = monthly_expenses
        self.passive_income = 0
        self.position = 0
        self.has_escaped = False
        self.selected_goal: Optional[LifeGoal] = None
        self.assets: List[Asset] = []
        self.liabilities: List[Liability] = list(liabilities or [])
        self.dreams: List[Card] = []
        self.charity_turns_remaining = 0
        self.support_bonus = 0
        self.behavior_profile = behavior_profile

    @property
    def is_computer(self) -> bool:
        return self.controller == ControllerKind.COMPUTER

    @property
    def is_human(self) -> bool:
        return self.controller == ControllerKind.HUMAN

    def find_asset(self, asset_id: str) -> Optional[Asset]:
        for asset in self.assets:
            if asset.asset_id == asset_id:
                return asset
        return None

    def __repr__(self) -> str:
        return (
            f"PlayerState(id={self.player_id}, name='{self.name}', cash={self.cash}, "
            f"position={self.position}, escaped={self.has_escaped})"
        )


@dataclass
class Player:
    """
    Roster entry used to create a game.

    A computer player without a personality plays as BALANCED.
    """

    player_id: str
    name: str
    controller: ControllerKind = ControllerKind.COMPUTER
    cash: int = 1000
    salary: int = 2000
    monthly_expenses: int = 1200
    job_title: str = ""
    avatar: str = ""
    liabilities: List[Liability] = field(default_factory=list)
    personality: Optional[Personality] = None

    def to_state(self) -> PlayerState:
        profile = None
        if self.controller == ControllerKind.COMPUTER:
            profile = get_profile(self.personality or Personality.BALANCED)
        return PlayerState(
            self.player_id,
            self.name,
            self.controller,
            cash=self.cash,
            salary=self.salary,
            monthly_expenses=self.monthly_expenses,
            job_title=self.job_title,
            avatar=self.avatar,
            liabilities=self.liabilities,
            behavior_profile=profile,
        )


def default_roster() -> List[Player]:
    """One human and three computer players."""
    return [
        Player(
            "p1", "You", ControllerKind.HUMAN, cash=1000, salary=2000,
            monthly_expenses=1200, job_title="Office Worker", avatar="🧑‍🚀",
            liabilities=[
                Liability("l1", "Home Loan", 5000, 500),
                Liability("l2", "Car Loan", 1000, 100),
            ],
        ),
        Player(
            "p2", "Manabu", ControllerKind.COMPUTER, cash=800, salary=2500,
            monthly_expenses=1500, job_title="Engineer", avatar="🤖",
            personality=Personality.CAUTIOUS,
        ),
        Player(
            "p3", "Hikari", ControllerKind.COMPUTER, cash=1200, salary=1800,
            monthly_expenses=1000, job_title="Teacher", avatar="🦊",
            personality=Personality.CHARITABLE,
        ),
        Player(
            "p4", "Takumi", ControllerKind.COMPUTER, cash=500, salary=2200,
            monthly_expenses=1600, job_title="Designer", avatar="🦁",
            personality=Personality.GAMBLER,
        ),
    ]
