"""
Public snapshot serialization of GameState.

Produces a read-only, UI-friendly view of the current game. Presentation
layers render from the snapshot and never touch GameState directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel, Field

from money_adventure.economy import freedom_progress, monthly_cashflow

if TYPE_CHECKING:
    from money_adventure.game import GameState


class AssetSnapshot(BaseModel):
    asset_id: str
    name: str
    cost: int
    cashflow: int
    category: str


class LiabilitySnapshot(BaseModel):
    liability_id: str
    name: str
    total_amount: int
    monthly_payment: int


class GoalSnapshot(BaseModel):
    goal_id: str
    title: str
    required_cash: int


class PlayerSnapshot(BaseModel):
    player_id: str
    name: str
    controller: str
    job_title: str = ""
    avatar: str = ""
    cash: int
    salary: int
    passive_income: int
    monthly_expenses: int
    monthly_cashflow: int
    freedom_progress: float
    position: int
    track: str
    has_escaped: bool
    charity_turns_remaining: int = 0
    support_bonus: int = 0
    personality: Optional[str] = None
    selected_goal: Optional[GoalSnapshot] = None
    assets: List[AssetSnapshot] = Field(default_factory=list)
    liabilities: List[LiabilitySnapshot] = Field(default_factory=list)
    dreams: List[str] = Field(default_factory=list)


class CardSnapshot(BaseModel):
    card_id: str
    card_type: str
    title: str
    description: str = ""
    cost: int = 0
    cashflow: int = 0
    effects: List[Dict[str, Any]] = Field(default_factory=list)


class SupportRequestSnapshot(BaseModel):
    requesting_player_id: str
    requesting_player_name: str
    investor_id: str


class GameSnapshot(BaseModel):
    phase: str
    turn_count: int
    difficulty: str
    current_player_id: str
    current_card: Optional[CardSnapshot] = None
    dice: List[int] = Field(default_factory=list)
    dice_roll: Optional[int] = None
    winner_id: Optional[str] = None
    coach_message: Optional[str] = None
    support_request: Optional[SupportRequestSnapshot] = None
    players: List[PlayerSnapshot]
    recent_messages: List[str] = Field(default_factory=list)


def serialize_snapshot(game: "GameState", recent: int = 10) -> GameSnapshot:
    """Serialize a GameState into a public, stable model.

    The snapshot includes:
    - phase, turn_count and current_player_id
    - players with their financial sheet (assets, liabilities, cashflow)
    - the pending card, dice and any outstanding support request
    - the last `recent` log messages
    """
    players: List[PlayerSnapshot] = []
    for p in game.players:
        goal = None
        if p.selected_goal is not None:
            goal = GoalSnapshot(
                goal_id=p.selected_goal.goal_id,
                title=p.selected_goal.title,
                required_cash=p.selected_goal.required_cash,
            )
        players.append(
            PlayerSnapshot(
                player_id=p.player_id,
                name=p.name,
                controller=p.controller.value,
                job_title=p.job_title,
                avatar=p.avatar,
                cash=p.cash,
                salary=p.salary,
                passive_income=p.passive_income,
                monthly_expenses=p.monthly_expenses,
                monthly_cashflow=monthly_cashflow(p.salary, p.passive_income, p.monthly_expenses),
                freedom_progress=freedom_progress(p),
                position=p.position,
                track=game.board.track_for(p.has_escaped).value,
                has_escaped=p.has_escaped,
                charity_turns_remaining=p.charity_turns_remaining,
                support_bonus=p.support_bonus,
                personality=p.behavior_profile.personality.value if p.behavior_profile else None,
                selected_goal=goal,
                assets=[
                    AssetSnapshot(
                        asset_id=a.asset_id,
                        name=a.name,
                        cost=a.cost,
                        cashflow=a.cashflow,
                        category=a.category,
                    )
                    for a in p.assets
                ],
                liabilities=[
                    LiabilitySnapshot(
                        liability_id=l.liability_id,
                        name=l.name,
                        total_amount=l.total_amount,
                        monthly_payment=l.monthly_payment,
                    )
                    for l in p.liabilities
                ],
                dreams=[c.title for c in p.dreams],
            )
        )

    card = None
    if game.current_card is not None:
        c = game.current_card
        card = CardSnapshot(
            card_id=c.card_id,
            card_type=c.card_type.value,
            title=c.title,
            description=c.description,
            cost=c.cost,
            cashflow=c.cashflow,
            effects=[
                {"kind": e.kind.value, "amount": e.amount, "goal_id": e.goal_id}
                for e in c.effects
            ],
        )

    request = None
    if game.support_request is not None:
        r = game.support_request
        request = SupportRequestSnapshot(
            requesting_player_id=r.requesting_player_id,
            requesting_player_name=r.requesting_player_name,
            investor_id=r.investor_id,
        )

    return GameSnapshot(
        phase=game.phase.value,
        turn_count=game.turn_count,
        difficulty=game.difficulty.value,
        current_player_id=game.current_player.player_id,
        current_card=card,
        dice=list(game.dice),
        dice_roll=game.dice_roll,
        winner_id=game.winner.player_id if game.winner else None,
        coach_message=game.coach_message,
        support_request=request,
        players=players,
        recent_messages=[e.message for e in game.event_log.get_recent_events(recent)],
    )
