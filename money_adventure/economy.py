"""
Pure economy rules.

Nothing in this module mutates state; the game engine applies the results.
"""

import math
from typing import Optional

from money_adventure.cards import Card, EffectKind
from money_adventure.config import SupportOption


def monthly_cashflow(salary: int, passive_income: int, monthly_expenses: int) -> int:
    """Salary plus passive income minus expenses."""
    return salary + passive_income - monthly_expenses


def paycheck_income(player, investor_bonus: int) -> int:
    """
    Amount credited on payday.

    Investor-track players get the fixed bonus on top; any pending
    support bonus is included once.
    """
    income = monthly_cashflow(player.salary, player.passive_income, player.monthly_expenses)
    if player.has_escaped:
        income += investor_bonus
    return income + player.support_bonus


def scale(value: int, multiplier: float) -> int:
    """Apply a difficulty multiplier, truncating the product."""
    return int(math.floor(value * multiplier))


def sell_price(acquisition_cost: int, ratio: float = 0.8) -> int:
    return int(math.floor(acquisition_cost * ratio))


def donation_amount(card: Card, salary: int, passive_income: int, rate: float = 0.1) -> int:
    """Fixed card cost, or a share of total income when the card costs nothing."""
    if card.cost:
        return card.cost
    return int(math.floor((salary + passive_income) * rate))


def card_total_cost(card: Card) -> int:
    """Card cost including any flat-cost effects."""
    return card.cost + sum(e.amount for e in card.effects_of(EffectKind.FLAT_COST))


def card_total_cashflow(card: Card) -> int:
    """Card cashflow including any cashflow grants."""
    return card.cashflow + sum(e.amount for e in card.effects_of(EffectKind.CASHFLOW_GRANT))


def unlocked_goal_id(card: Card) -> Optional[str]:
    for effect in card.effects_of(EffectKind.GOAL_UNLOCK):
        return effect.goal_id
    return None


def can_escape(player) -> bool:
    """Passive income covers expenses. Equality counts as covered."""
    return not player.has_escaped and player.passive_income >= player.monthly_expenses


def goal_achieved(player) -> bool:
    if not player.has_escaped or player.selected_goal is None:
        return False
    return player.cash >= player.selected_goal.required_cash


def can_afford(player, amount: int) -> bool:
    return player.cash >= amount


def can_afford_support(player, option: SupportOption) -> bool:
    return can_afford(player, option.cost_to_investor)


def freedom_progress(player) -> float:
    """Share of expenses covered by passive income, capped to [0, 100]."""
    if player.monthly_expenses <= 0:
        return 0.0
    ratio = player.passive_income / player.monthly_expenses
    return min(100.0, max(0.0, ratio * 100))

