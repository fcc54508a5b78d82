"""
High-level rules API for controlling game flow.
This module provides the public interface for game actions and legal move detection.
"""

from enum import Enum
from typing import Any, List, Optional

from money_adventure.cards import CardType
from money_adventure.config import SUPPORT_OPTIONS, DifficultyLevel, SupportKind
from money_adventure.economy import can_afford_support, card_total_cost
from money_adventure.game import GamePhase, GameState


class ActionType(Enum):
    """Types of actions a player can take."""

    SELECT_DIFFICULTY = "select_difficulty"
    SELECT_GOAL = "select_goal"
    ROLL_DICE = "roll_dice"
    BUY = "buy"
    DONATE = "donate"
    PAY_PENALTY = "pay_penalty"
    PASS = "pass"
    SELL_ASSET = "sell_asset"
    BEGIN_SUPPORT = "begin_support"
    SKIP_SUPPORT = "skip_support"
    OFFER_SUPPORT = "offer_support"
    ACCEPT_SUPPORT_REQUEST = "accept_support_request"
    DECLINE_SUPPORT_REQUEST = "decline_support_request"
    REQUEST_HINT = "request_hint"
    END_TURN = "end_turn"


class Action:
    """Represents a game action that can be taken."""

    def __init__(self, action_type: ActionType, **params: Any):
        self.action_type = action_type
        self.params = params

    def __repr__(self) -> str:
        return f"Action({self.action_type.value}, {self.params})"


def get_legal_actions(game_state: GameState, player_id: str) -> List[Action]:
    """
    Get all legal actions available to a player.

    This is the main interface for controllers to determine valid moves.

    Args:
        game_state: Current game state
        player_id: Player to get actions for

    Returns:
        List of legal Action objects
    """
    if game_state.game_over:
        return []

    player = game_state.get_player(player_id)
    if player is None:
        return []

    if game_state.phase == GamePhase.SETUP:
        if not player.is_human:
            return []
        return [Action(ActionType.SELECT_DIFFICULTY, level=level) for level in DifficultyLevel]

    if game_state.phase == GamePhase.GOAL_SELECT:
        selecting = game_state.goal_selecting_player
        if selecting is not player or not player.is_human:
            return []
        return [
            Action(ActionType.SELECT_GOAL, goal_id=goal.goal_id)
            for goal in game_state.available_goals()
        ]

    # A pending support request is answered by the investor, not the active player
    request = game_state.support_request
    if request is not None:
        if request.investor_id != player_id:
            return []
        actions = [
            Action(ActionType.ACCEPT_SUPPORT_REQUEST, kind=kind)
            for kind in SupportKind
            if can_afford_support(player, SUPPORT_OPTIONS[kind])
        ]
        actions.append(Action(ActionType.DECLINE_SUPPORT_REQUEST))
        return actions

    if game_state.current_player is not player:
        return []

    actions: List[Action] = []
    phase = game_state.phase

    if phase == GamePhase.ROLL:
        actions.append(Action(ActionType.ROLL_DICE))
        if _can_support(game_state):
            actions.append(Action(ActionType.BEGIN_SUPPORT))
            actions.extend(_get_support_actions(game_state))

    elif phase == GamePhase.SUPPORT:
        actions.extend(_get_support_actions(game_state))
        actions.append(Action(ActionType.SKIP_SUPPORT))

    elif phase == GamePhase.DECISION:
        card = game_state.current_card
        if card.is_penalty:
            actions.append(Action(ActionType.PAY_PENALTY))
        elif card.card_type == CardType.CHARITY:
            if player.cash >= game_state.donation_for(player, card):
                actions.append(Action(ActionType.DONATE))
            actions.append(Action(ActionType.PASS))
        else:
            if card.is_purchasable and player.cash >= card_total_cost(card):
                actions.append(Action(ActionType.BUY))
            actions.append(Action(ActionType.PASS))
        actions.append(Action(ActionType.REQUEST_HINT))

    elif phase == GamePhase.END_TURN:
        actions.append(Action(ActionType.END_TURN))

    for asset in game_state.sellable_assets(player.player_id):
        actions.append(Action(ActionType.SELL_ASSET, asset_id=asset.asset_id))

    return actions


def _can_support(game_state: GameState) -> bool:
    player = game_state.current_player
    return (
        player.has_escaped
        and not game_state.support_used
        and bool(game_state.earner_track_players())
    )


def _get_support_actions(game_state: GameState) -> List[Action]:
    """Get affordable support offers for the active investor."""
    player = game_state.current_player
    actions = []
    for target in game_state.earner_track_players():
        for kind in SupportKind:
            if can_afford_support(player, SUPPORT_OPTIONS[kind]):
                actions.append(Action(ActionType.OFFER_SUPPORT, target_id=target.player_id, kind=kind))
    return actions


def apply_action(game_state: GameState, action: Action, player_id: Optional[str] = None) -> bool:
    """
    Apply an action to the game state.

    This is the main interface for executing moves.

    Args:
        game_state: Current game state
        action: Action to apply
        player_id: Player executing the action (optional, defaults to whoever
            is expected to act)

    Returns:
        True if action was successful, False otherwise
    """
    action_type = action.action_type
    params = action.params

    if player_id is not None and player_id != _acting_player_id(game_state, action_type):
        return False

    if action_type == ActionType.SELECT_DIFFICULTY:
        return game_state.select_difficulty(params.get("level"))
    elif action_type == ActionType.SELECT_GOAL:
        return game_state.select_goal(params.get("goal_id"))
    elif action_type == ActionType.ROLL_DICE:
        return game_state.roll_dice()
    elif action_type == ActionType.BUY:
        return game_state.buy()
    elif action_type == ActionType.DONATE:
        return game_state.donate()
    elif action_type == ActionType.PAY_PENALTY:
        return game_state.pay_penalty()
    elif action_type == ActionType.PASS:
        return game_state.pass_card()
    elif action_type == ActionType.SELL_ASSET:
        return game_state.sell_asset(params.get("asset_id"))
    elif action_type == ActionType.BEGIN_SUPPORT:
        return game_state.begin_support()
    elif action_type == ActionType.SKIP_SUPPORT:
        return game_state.skip_support()
    elif action_type == ActionType.OFFER_SUPPORT:
        return game_state.offer_support(params.get("target_id"), params.get("kind"))
    elif action_type == ActionType.ACCEPT_SUPPORT_REQUEST:
        return game_state.respond_to_support_request(True, params.get("kind"))
    elif action_type == ActionType.DECLINE_SUPPORT_REQUEST:
        return game_state.respond_to_support_request(False)
    elif action_type == ActionType.REQUEST_HINT:
        return game_state.request_hint()
    elif action_type == ActionType.END_TURN:
        return game_state.advance_turn()

    return False


def _acting_player_id(game_state: GameState, action_type: ActionType) -> Optional[str]:
    """Id of the player entitled to take an action of this type right now."""
    if action_type in (ActionType.ACCEPT_SUPPORT_REQUEST, ActionType.DECLINE_SUPPORT_REQUEST):
        request = game_state.support_request
        return request.investor_id if request else None
    if action_type == ActionType.SELECT_GOAL:
        selecting = game_state.goal_selecting_player
        return selecting.player_id if selecting else None
    if action_type == ActionType.SELECT_DIFFICULTY:
        human = next((p for p in game_state.players if p.is_human), None)
        return human.player_id if human else None
    return game_state.current_player.player_id
