"""
Board tracks and space types.

The game uses two parallel cyclic boards: the earner track every player
starts on, and the investor track a player moves to after escaping.
"""

from enum import Enum
from typing import Dict, List


class SpaceType(Enum):
    """Types of spaces on a track."""

    START = "start"
    OPPORTUNITY = "opportunity"
    BUSINESS = "business"
    DOODAD = "doodad"
    AUDIT = "audit"
    CHARITY = "charity"
    PAYCHECK = "paycheck"
    DREAM = "dream"
    MARKET = "market"


SPACE_LABELS: Dict[SpaceType, str] = {
    SpaceType.START: "Start",
    SpaceType.OPPORTUNITY: "Opportunity",
    SpaceType.BUSINESS: "Business",
    SpaceType.DOODAD: "Doodad",
    SpaceType.AUDIT: "Audit",
    SpaceType.CHARITY: "Charity",
    SpaceType.PAYCHECK: "Payday",
    SpaceType.DREAM: "Dream",
    SpaceType.MARKET: "Market",
}


class Track(Enum):
    """Which board a player is moving on."""

    EARNER = "earner"
    INVESTOR = "investor"


EARNER_SPACES: List[SpaceType] = [
    SpaceType.START,
    SpaceType.OPPORTUNITY,
    SpaceType.DOODAD,
    SpaceType.OPPORTUNITY,
    SpaceType.CHARITY,
    SpaceType.OPPORTUNITY,
    SpaceType.PAYCHECK,
    SpaceType.OPPORTUNITY,
    SpaceType.DOODAD,
    SpaceType.MARKET,
    SpaceType.OPPORTUNITY,
    SpaceType.PAYCHECK,
]

INVESTOR_SPACES: List[SpaceType] = [
    SpaceType.START,
    SpaceType.BUSINESS,
    SpaceType.AUDIT,
    SpaceType.BUSINESS,
    SpaceType.CHARITY,
    SpaceType.BUSINESS,
    SpaceType.PAYCHECK,
    SpaceType.BUSINESS,
    SpaceType.DREAM,
    SpaceType.MARKET,
    SpaceType.BUSINESS,
    SpaceType.PAYCHECK,
]


class Board:
    """The two fixed-length cyclic tracks."""

    def __init__(self):
        self.tracks: Dict[Track, List[SpaceType]] = {
            Track.EARNER: list(EARNER_SPACES),
            Track.INVESTOR: list(INVESTOR_SPACES),
        }

    @staticmethod
    def track_for(has_escaped: bool) -> Track:
        return Track.INVESTOR if has_escaped else Track.EARNER

    def length(self, track: Track) -> int:
        return len(self.tracks[track])

    def get_space(self, track: Track, position: int) -> SpaceType:
        """Get the space type at a position, wrapping around the track."""
        spaces = self.tracks[track]
        return spaces[position % len(spaces)]

    def advance(self, track: Track, position: int, steps: int) -> int:
        """Return the landing position after moving `steps` spaces."""
        return (position + steps) % self.length(track)

    @staticmethod
    def label(space: SpaceType) -> str:
        return SPACE_LABELS.get(space, space.value)
