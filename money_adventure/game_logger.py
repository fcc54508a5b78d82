"""
JSONL logger for Money Adventure game events.

Logs all game events to a JSONL file, one JSON object per line.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from money_adventure.economy import freedom_progress
from money_adventure.events.mapper import map_events

logger = logging.getLogger(__name__)


class GameLogger:
    """Logger that writes game events to a JSONL file."""

    def __init__(self, log_file: Optional[str] = None):
        """
        Initialize game logger.

        Args:
            log_file: Path to log file. If None, generates timestamped filename.
        """
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"money_adventure_{timestamp}.jsonl"

        self.log_file = log_file
        self.event_count = 0
        self._engine_last_idx = 0  # last flushed index from engine's internal EventLog
        self._engine_source = None  # (log identity, generation) the index refers to

        # Create/clear log file
        with open(self.log_file, "w", encoding="utf-8"):
            pass

    def log_event(self, event_type: str, **kwargs: Any) -> Dict[str, Any]:
        """
        Log a game event to JSONL file.

        Args:
            event_type: Type of event (e.g., "game_start", "dice_roll", "purchase")
            **kwargs: Additional event data
        """
        event = {
            "event_id": self.event_count,
            "timestamp": datetime.now().isoformat(),
            "event_type": event_type,
            **kwargs,
        }

        with open(self.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(event) + "\n")

        self.event_count += 1
        return event

    def flush_engine_events(self, game) -> int:
        """Flush new internal engine events to JSONL using the event mapper.

        Returns the number of events written.
        """
        events = game.event_log.events
        source = (id(game.event_log), game.event_log.generation)
        if source != self._engine_source:
            if self._engine_source is not None:
                logger.debug("Engine log was restarted, flushing from the start")
            self._engine_source = source
            self._engine_last_idx = 0
        if self._engine_last_idx == len(events):
            return 0

        new_events = events[self._engine_last_idx:]
        wrote = 0
        for m in map_events(game.board, new_events):
            m.pop("seq", None)
            player = game.get_player(m["player_id"]) if "player_id" in m else None
            if player is not None:
                m["player_name"] = player.name

            if m.get("event_type") == "game_end":
                m["final_standings"] = [
                    {
                        "player_id": p.player_id,
                        "player_name": p.name,
                        "cash": p.cash,
                        "passive_income": p.passive_income,
                        "has_escaped": p.has_escaped,
                    }
                    for p in game.players
                ]

            etype = m.pop("event_type")
            self.log_event(etype, **m)
            wrote += 1

        self._engine_last_idx = len(events)
        return wrote

    def log_turn_snapshot(self, game) -> None:
        """Log a financial sheet for every player."""
        for p in game.players:
            self.log_event(
                "player_state",
                turn_number=game.turn_count,
                player_id=p.player_id,
                player_name=p.name,
                cash=p.cash,
                salary=p.salary,
                passive_income=p.passive_income,
                monthly_expenses=p.monthly_expenses,
                freedom_progress=freedom_progress(p),
                position=p.position,
                has_escaped=p.has_escaped,
                assets=[a.name for a in p.assets],
            )
