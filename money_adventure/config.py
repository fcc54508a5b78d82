"""
Game configuration settings and static rule tables.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional


class PenaltyPolicy(Enum):
    """How a doodad/audit payment larger than the player's cash is settled."""

    CLAMP = "clamp"  # pay what you have, cash floors at zero
    DEBT = "debt"  # pay in full, cash may go negative


class DifficultyLevel(str, Enum):
    KIDS = "kids"
    TEEN = "teen"
    ADULT = "adult"


@dataclass
class GameConfig:
    """Configuration for a Money Adventure game."""

    seed: Optional[int] = None
    difficulty: DifficultyLevel = DifficultyLevel.TEEN

    escape_bonus: int = 100000
    investor_paycheck_bonus: int = 10000
    charity_bonus_turns: int = 3
    sell_ratio: float = 0.8
    donation_rate: float = 0.1

    penalty_policy: PenaltyPolicy = PenaltyPolicy.CLAMP

    # Pacing delays, in milliseconds of scheduler time
    roll_delay_ms: int = 1000
    thinking_ms: int = 1500
    end_turn_delay_ms: int = 800
    support_resume_delay_ms: int = 1500
    decline_resume_delay_ms: int = 500


@dataclass(frozen=True)
class DifficultySettings:
    """Multipliers applied once when the difficulty is chosen."""

    level: DifficultyLevel
    name: str
    description: str
    age_range: str
    goal_multiplier: float
    starting_cash_multiplier: float
    expense_multiplier: float
    event_frequency: str


DIFFICULTY_SETTINGS: Dict[DifficultyLevel, DifficultySettings] = {
    DifficultyLevel.KIDS: DifficultySettings(
        DifficultyLevel.KIDS,
        "Easy",
        "More starting cash, cheaper living and smaller goals.",
        "6-9",
        goal_multiplier=0.5,
        starting_cash_multiplier=1.5,
        expense_multiplier=0.8,
        event_frequency="low",
    ),
    DifficultyLevel.TEEN: DifficultySettings(
        DifficultyLevel.TEEN,
        "Normal",
        "The standard game.",
        "10-14",
        goal_multiplier=1.0,
        starting_cash_multiplier=1.0,
        expense_multiplier=1.0,
        event_frequency="medium",
    ),
    DifficultyLevel.ADULT: DifficultySettings(
        DifficultyLevel.ADULT,
        "Hard",
        "Less cash, higher expenses and bigger goals.",
        "15+",
        goal_multiplier=1.5,
        starting_cash_multiplier=0.8,
        expense_multiplier=1.2,
        event_frequency="high",
    ),
}


def get_difficulty(level) -> DifficultySettings:
    """Look up difficulty settings by level or level name."""
    return DIFFICULTY_SETTINGS[DifficultyLevel(level)]


class SupportKind(str, Enum):
    JOB = "job"
    INVESTMENT = "investment"


@dataclass(frozen=True)
class SupportOption:
    """A fixed support package an investor can give an earner."""

    kind: SupportKind
    title: str
    cost_to_investor: int
    benefit_to_worker: int
    benefit_to_investor: int


SUPPORT_OPTIONS: Dict[SupportKind, SupportOption] = {
    # Worker benefit lands in supportBonus and is paid out on their next payday
    SupportKind.JOB: SupportOption(
        SupportKind.JOB, "Offer a job", cost_to_investor=1000,
        benefit_to_worker=800, benefit_to_investor=200,
    ),
    # Worker benefit is paid in cash immediately
    SupportKind.INVESTMENT: SupportOption(
        SupportKind.INVESTMENT, "Co-invest", cost_to_investor=5000,
        benefit_to_worker=3000, benefit_to_investor=1000,
    ),
}


@dataclass(frozen=True)
class LifeGoal:
    """A win condition chosen once, before play begins."""

    goal_id: str
    title: str
    description: str
    icon: str
    required_cash: int

    def scaled(self, multiplier: float) -> "LifeGoal":
        return replace(self, required_cash=int(self.required_cash * multiplier))


LIFE_GOALS: List[LifeGoal] = [
    LifeGoal("g1", "Scholarship Fund", "Start a fund that sends kids to college.", "🎓", 100000),
    LifeGoal("g2", "Open a Cafe", "Run your own cosy cafe by the sea.", "☕", 120000),
    LifeGoal("g3", "Sports Car", "Drive the car of your dreams.", "🏎️", 130000),
    LifeGoal("g4", "Trip Around the World", "Visit every continent.", "🌍", 150000),
    LifeGoal("g5", "Dream House", "A big house with a garden and a pool.", "🏡", 200000),
    LifeGoal("g6", "Space Travel", "See the Earth from orbit.", "🚀", 300000),
]
