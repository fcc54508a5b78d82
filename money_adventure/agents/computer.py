"""Personality-driven computer player."""

import random
from typing import List, Optional, Tuple

from money_adventure.agents.base import Agent, Decision
from money_adventure.agents.personality import (
    DIALOGS,
    BehaviorProfile,
    Personality,
    get_profile,
)
from money_adventure.cards import Card, CardType
from money_adventure.config import SUPPORT_OPTIONS, LifeGoal, SupportKind
from money_adventure.economy import can_afford_support, card_total_cost
from money_adventure.player import PlayerState


class PersonalityAgent(Agent):
    """
    Computer player whose choices are driven by a BehaviorProfile.

    Purchases cheaper than `buy_threshold` of cash are always made; more
    expensive ones are made with probability `risk_tolerance`.
    """

    def __init__(self, player_id: str, name: str, profile: Optional[BehaviorProfile] = None):
        super().__init__(player_id, name)
        self.profile = profile or get_profile(Personality.BALANCED)

    def choose_goal(self, goals: List[LifeGoal], rng: random.Random) -> LifeGoal:
        personality = self.profile.personality
        if personality in (Personality.AGGRESSIVE, Personality.GAMBLER):
            ranked = sorted(goals, key=lambda g: g.required_cash, reverse=True)
            return ranked[rng.randrange(min(2, len(ranked)))]
        if personality == Personality.CAUTIOUS:
            ranked = sorted(goals, key=lambda g: g.required_cash)
            return ranked[rng.randrange(min(2, len(ranked)))]
        return goals[rng.randrange(len(goals))]

    def decide(self, player: PlayerState, card: Card, rng: random.Random) -> Decision:
        if card.is_penalty:
            return Decision.PAY

        if card.card_type == CardType.CHARITY:
            return Decision.DONATE if rng.random() < self.profile.charity_chance else Decision.PASS

        if card.is_purchasable:
            cost = card_total_cost(card)
            if player.cash < cost:
                return Decision.PASS
            ratio = cost / player.cash if player.cash > 0 else 0.0
            if ratio > self.profile.buy_threshold:
                return Decision.BUY if rng.random() < self.profile.risk_tolerance else Decision.PASS
            return Decision.BUY

        return Decision.PASS

    def choose_support(
        self,
        player: PlayerState,
        targets: List[PlayerState],
        rng: random.Random,
    ) -> Optional[Tuple[PlayerState, SupportKind]]:
        if not targets:
            return None
        if rng.random() >= self.profile.support_chance:
            return None
        target = targets[rng.randrange(len(targets))]
        kind = SupportKind.JOB if rng.random() > 0.5 else SupportKind.INVESTMENT
        if not can_afford_support(player, SUPPORT_OPTIONS[kind]):
            return None
        return target, kind

    def wants_support(self, player: PlayerState, rng: random.Random) -> bool:
        return rng.random() < self.profile.request_support_chance

    def say(self, category: str, rng: random.Random) -> Optional[str]:
        if category == "catchphrase":
            return self.profile.catchphrase
        lines = DIALOGS.get(category)
        if not lines:
            return None
        return lines[rng.randrange(len(lines))]
