"""
Mapping from internal EventLog objects to canonical public JSON events.

The internal engine emits GameEvent objects where:
- event_type is money.EventType
- player_id is optional
- details is a flat dict of event-specific values

This module produces stable, UI/JSONL-friendly dicts with consistent
event_type strings and payload keys.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from money_adventure.board import Board, Track
from money_adventure.money import EventType, GameEvent


def _space_name(board: Board, track: Optional[str], position: Optional[int]) -> Optional[str]:
    if position is None or track is None:
        return None
    try:
        return board.label(board.get_space(Track(track), position))
    except ValueError:
        return None


def map_event(board: Board, event: GameEvent) -> Dict[str, Any]:
    """
    Map a single GameEvent to a canonical JSON dict.

    Args:
        board: Board instance (for resolving space names)
        event: internal event object

    Returns:
        dict with keys: event_type (str), player_id (optional), turn_number,
        message and event-specific fields
    """
    d = event.details or {}

    base: Dict[str, Any] = {
        "event_type": event.event_type.value,
        "turn_number": event.turn,
        "message": event.message,
    }
    if event.player_id is not None:
        base["player_id"] = event.player_id

    if event.event_type == EventType.DICE_ROLL:
        dice = d.get("dice") or []
        base.update(
            dice=dice,
            total=d.get("total"),
            double_dice=len(dice) > 1,
            position=d.get("position"),
            track=d.get("track"),
            space_name=_space_name(board, d.get("track"), d.get("position")),
        )
        return base

    if event.event_type == EventType.LAND:
        base.update(position=d.get("position"), space=d.get("space"))
        return base

    if event.event_type == EventType.PAYCHECK:
        base.update(
            amount=d.get("amount"),
            support_bonus=d.get("support_bonus", 0),
            cash_after=d.get("new_balance"),
        )
        return base

    if event.event_type == EventType.CARD_DRAW:
        base.update(
            card_id=d.get("card_id"),
            card_type=d.get("card_type"),
            cost=d.get("cost"),
            cashflow=d.get("cashflow"),
        )
        return base

    if event.event_type == EventType.PURCHASE:
        base.update(
            card_id=d.get("card_id"),
            asset_id=d.get("asset_id"),
            goal_id=d.get("goal_id"),
            price=d.get("price"),
            cashflow=d.get("cashflow", 0),
            cash_after=d.get("new_balance"),
        )
        return base

    if event.event_type == EventType.SALE:
        base.update(
            asset_id=d.get("asset_id"),
            sale_price=d.get("price"),
            cashflow_lost=d.get("cashflow"),
            cash_after=d.get("new_balance"),
        )
        return base

    if event.event_type == EventType.DONATION:
        base.update(amount=d.get("amount"), cash_after=d.get("new_balance"))
        return base

    if event.event_type == EventType.PENALTY_PAYMENT:
        base.update(
            amount=d.get("amount"),
            paid=d.get("paid"),
            forgiven=d.get("forgiven", 0),
            cash_after=d.get("new_balance"),
        )
        return base

    if event.event_type == EventType.ESCAPE:
        base.update(
            passive_income=d.get("passive_income"),
            monthly_expenses=d.get("monthly_expenses"),
            bonus=d.get("bonus"),
        )
        return base

    if event.event_type == EventType.SUPPORT_GIVEN:
        base.update(
            investor_id=event.player_id,
            target_id=d.get("target_id"),
            kind=d.get("kind"),
            cost=d.get("cost"),
            benefit_to_worker=d.get("benefit_to_worker"),
            benefit_to_investor=d.get("benefit_to_investor"),
        )
        return base

    if event.event_type == EventType.COMMAND_REJECTED:
        base.update(command=d.get("command"), error=d.get("error"))
        return base

    if event.event_type == EventType.GAME_START:
        players = d.get("players") or []
        base.update(player_names=players, num_players=len(players), seed=d.get("seed"))
        return base

    if event.event_type == EventType.GAME_END:
        base.update(winner_id=d.get("winner_id", event.player_id))
        return base

    # Default: echo raw fields
    base.update(d)
    return base


def map_events(board: Board, events: Iterable[GameEvent]) -> List[Dict[str, Any]]:
    """Map a sequence of GameEvent objects, numbering them in order."""
    mapped: List[Dict[str, Any]] = []
    for idx, ev in enumerate(events):
        mev = map_event(board, ev)
        mev["seq"] = idx
        mapped.append(mev)
    return mapped
