from money_adventure.agents.base import Agent, Decision
from money_adventure.agents.personality import (
    PERSONALITIES,
    BehaviorProfile,
    Personality,
    get_profile,
)

__all__ = [
    "Agent",
    "Decision",
    "BehaviorProfile",
    "Personality",
    "PERSONALITIES",
    "get_profile",
]
