"""Personality profiles that parameterize computer players."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class Personality(str, Enum):
    CAUTIOUS = "cautious"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"
    CHARITABLE = "charitable"
    GAMBLER = "gambler"


@dataclass(frozen=True)
class BehaviorProfile:
    """
    Decision parameters for a computer player.

    Attributes:
        personality: Personality tag, used by goal selection.
        buy_threshold: Largest cost/cash ratio bought without hesitation.
        charity_chance: Probability of donating on a charity card.
        risk_tolerance: Probability of buying above the threshold.
        support_chance: Probability of supporting an earner when on the investor track.
        request_support_chance: Probability of asking a human investor for help.
        catchphrase: Line the character says when rolling.
    """

    personality: Personality
    buy_threshold: float
    charity_chance: float
    risk_tolerance: float
    support_chance: float
    request_support_chance: float
    catchphrase: str


PERSONALITIES: Dict[Personality, BehaviorProfile] = {
    Personality.CAUTIOUS: BehaviorProfile(
        Personality.CAUTIOUS, buy_threshold=0.3, charity_chance=0.2, risk_tolerance=0.2,
        support_chance=0.3, request_support_chance=0.4,
        catchphrase="Slow and steady wins the race.",
    ),
    Personality.BALANCED: BehaviorProfile(
        Personality.BALANCED, buy_threshold=0.5, charity_chance=0.3, risk_tolerance=0.5,
        support_chance=0.5, request_support_chance=0.3,
        catchphrase="Let's think this through.",
    ),
    Personality.AGGRESSIVE: BehaviorProfile(
        Personality.AGGRESSIVE, buy_threshold=0.8, charity_chance=0.1, risk_tolerance=0.8,
        support_chance=0.4, request_support_chance=0.2,
        catchphrase="Go big or go home!",
    ),
    Personality.CHARITABLE: BehaviorProfile(
        Personality.CHARITABLE, buy_threshold=0.4, charity_chance=0.8, risk_tolerance=0.4,
        support_chance=0.9, request_support_chance=0.3,
        catchphrase="Everyone wins when we help each other.",
    ),
    Personality.GAMBLER: BehaviorProfile(
        Personality.GAMBLER, buy_threshold=1.0, charity_chance=0.2, risk_tolerance=0.95,
        support_chance=0.3, request_support_chance=0.5,
        catchphrase="Feeling lucky today!",
    ),
}


DIALOGS: Dict[str, List[str]] = {
    "buy": ["This is a good investment!", "I'll take it!", "My money is going to work."],
    "pass": ["I'll pass this time.", "Not for me.", "Too risky right now."],
    "donate": ["Happy to help!", "Giving back feels great."],
    "support": ["Let me give you a hand.", "Let's grow together!"],
    "request_support": ["Could you help me out?", "A little support would mean a lot!"],
    "accept_support": ["Thank you so much!", "I won't forget this!"],
}


def get_profile(personality) -> BehaviorProfile:
    return PERSONALITIES[Personality(personality)]
