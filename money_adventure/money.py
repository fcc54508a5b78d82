"""
Game event logging.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class EventType(Enum):
    """Types of game events."""

    GAME_START = "game_start"
    DIFFICULTY_SELECTED = "difficulty_selected"
    GOAL_SELECTED = "goal_selected"
    TURN_START = "turn_start"
    DICE_ROLL = "dice_roll"
    LAND = "land"

    PAYCHECK = "paycheck"
    CARD_DRAW = "card_draw"
    PURCHASE = "purchase"
    DONATION = "donation"
    PENALTY_PAYMENT = "penalty_payment"
    PASS = "pass"
    SALE = "sale"

    ESCAPE = "escape"

    SUPPORT_GIVEN = "support_given"
    SUPPORT_REQUESTED = "support_requested"
    SUPPORT_DECLINED = "support_declined"

    AGENT_SPEECH = "agent_speech"
    HINT = "hint"
    COMMAND_REJECTED = "command_rejected"

    GAME_END = "game_end"


@dataclass
class GameEvent:
    """A logged event in the game."""

    event_type: EventType
    message: str
    turn: int
    timestamp: float
    player_id: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        player_str = self.player_id if self.player_id is not None else "System"
        return f"[T{self.turn} {player_str}] {self.event_type.value}: {self.message}"


class EventLog:
    """Append-only game event log."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.events: List[GameEvent] = []
        self._clock = clock
        # Bumped on every clear
        self.generation = 0

    def log(
        self,
        event_type: EventType,
        message: str,
        turn: int,
        player_id: Optional[str] = None,
        **details: Any,
    ) -> GameEvent:
        """Log a game event."""
        event = GameEvent(event_type, message, turn, self._clock(), player_id, details)
        self.events.append(event)
        return event

    def get_events(self) -> List[GameEvent]:
        """Get all logged events."""
        return self.events.copy()

    def get_recent_events(self, count: int = 10) -> List[GameEvent]:
        """Get the most recent N events."""
        return self.events[-count:]

    def of_type(self, event_type: EventType) -> List[GameEvent]:
        return [e for e in self.events if e.event_type == event_type]

    def clear(self) -> None:
        """Clear the event log. Only a restart may do this."""
        self.events.clear()
        self.generation += 1

    def __len__(self) -> int:
        return len(self.events)
