"""
Opportunity, penalty, charity and dream card system.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import random


class CardType(Enum):
    """Types of cards."""

    OPPORTUNITY = "opportunity"
    BUSINESS = "business"
    DOODAD = "doodad"
    AUDIT = "audit"
    DREAM = "dream"
    CHARITY = "charity"
    MARKET = "market"
    PAYCHECK = "paycheck"


PURCHASABLE_TYPES = (CardType.OPPORTUNITY, CardType.BUSINESS, CardType.DREAM)
PENALTY_TYPES = (CardType.DOODAD, CardType.AUDIT)


class EffectKind(Enum):
    """Closed set of extra effects a card may carry."""

    FLAT_COST = "flat_cost"
    CASHFLOW_GRANT = "cashflow_grant"
    GOAL_UNLOCK = "goal_unlock"


@dataclass(frozen=True)
class CardEffect:
    """An extra, data-only effect attached to a card."""

    kind: EffectKind
    amount: int = 0
    goal_id: Optional[str] = None


@dataclass(frozen=True)
class Card:
    """Represents a drawn card. Cards are shared catalog values, never mutated."""

    card_id: str
    card_type: CardType
    title: str
    description: str = ""
    cost: int = 0
    cashflow: int = 0
    effects: Tuple[CardEffect, ...] = field(default_factory=tuple)

    @property
    def is_purchasable(self) -> bool:
        return self.card_type in PURCHASABLE_TYPES

    @property
    def is_penalty(self) -> bool:
        return self.card_type in PENALTY_TYPES

    def effects_of(self, kind: EffectKind) -> List[CardEffect]:
        return [e for e in self.effects if e.kind == kind]

    def __repr__(self) -> str:
        return f"Card('{self.title}')"


class Deck:
    """
    A fixed catalog of cards.

    Drawing samples with replacement: the catalog never shrinks.
    """

    def __init__(self, name: str, cards: List[Card]):
        if not cards:
            raise ValueError(f"Deck '{name}' needs at least one card")
        self.name = name
        self.cards = list(cards)

    def draw(self, rng: random.Random) -> Card:
        """Draw a card uniformly at random."""
        return self.cards[rng.randrange(len(self.cards))]

    def of_type(self, card_type: CardType) -> List[Card]:
        return [c for c in self.cards if c.card_type == card_type]

    def __len__(self) -> int:
        return len(self.cards)


def create_opportunity_deck() -> Deck:
    """Earner-track opportunities."""
    cards = [
        Card("o1", CardType.OPPORTUNITY, "Small Apartment",
             "A used three-room flat. Steady rental income.", cost=500, cashflow=100),
        Card("o2", CardType.OPPORTUNITY, "Fixer-Upper House",
             "Needs renovation, but the yield is high.", cost=300, cashflow=80),
        Card("o3", CardType.OPPORTUNITY, "Tech Stock",
             "Shares in a growing IT company. Small dividend, big future.", cost=100, cashflow=10),
        Card("o4", CardType.OPPORTUNITY, "Vending Machine Business",
             "Install a vending machine next to the park.", cost=200, cashflow=40),
        Card("o5", CardType.OPPORTUNITY, "Coin Laundry",
             "A neighbourhood laundromat. High start-up cost, high return.",
             cost=1000, cashflow=250),
    ]
    return Deck("opportunity", cards)


def create_doodad_deck() -> Deck:
    """Earner-track penalties."""
    cards = [
        Card("d1", CardType.DOODAD, "New Game Console",
             "You bought the console you wanted!", cost=50),
        Card("d2", CardType.DOODAD, "Fancy Cafe",
             "You ordered the expensive cake set with friends.", cost=20),
        Card("d3", CardType.DOODAD, "Car Repair",
             "Flat tyre! It needs fixing.", cost=200),
    ]
    return Deck("doodad", cards)


def create_business_deck() -> Deck:
    """Investor-track opportunities, including generic dream items."""
    cards = [
        Card("ft_o1", CardType.BUSINESS, "Burger Chain Buyout",
             "Become owner of a nationwide burger chain.", cost=50000, cashflow=10000),
        Card("ft_o2", CardType.BUSINESS, "Shopping Mall Development",
             "Join a giant shopping mall construction project.", cost=100000, cashflow=25000),
        Card("ft_o3", CardType.BUSINESS, "Film Studio",
             "Invest in a studio that makes hit movies.", cost=30000, cashflow=8000),
        Card("ft_o4", CardType.DREAM, "Private Jet",
             "Fly anywhere in the world!", cost=150000),
        Card("ft_o5", CardType.DREAM, "Island Villa",
             "A luxury villa surrounded by clear blue sea.", cost=80000),
    ]
    return Deck("business", cards)


def create_audit_deck() -> Deck:
    """Investor-track penalties."""
    cards = [
        Card("ft_d1", CardType.AUDIT, "Tax Audit",
             "The tax office came calling. Pay the accountant.", cost=5000),
        Card("ft_d2", CardType.AUDIT, "Divorce Lawsuit",
             "Things went badly with your partner.", cost=10000),
        Card("ft_d3", CardType.AUDIT, "Defamation Suit",
             "A social media post blew up. Lawyer fees are due.", cost=8000),
    ]
    return Deck("audit", cards)


def create_charity_deck() -> Deck:
    """Charity cards. A cost of zero means 'donate a share of income'."""
    cards = [
        Card("c1", CardType.CHARITY, "Food Bank Drive",
             "Donate 10% of your income to the local food bank.", cost=0),
        Card("c2", CardType.CHARITY, "Animal Shelter",
             "Help the animal shelter buy food for the winter.", cost=100),
        Card("c3", CardType.CHARITY, "School Library",
             "Donate 10% of your income to buy library books.", cost=0),
        Card("c4", CardType.CHARITY, "Disaster Relief",
             "Support families affected by a flood.", cost=300),
    ]
    return Deck("charity", cards)


def create_goal_card(goal) -> Card:
    """Synthesize a one-off card that lets a player claim their life goal."""
    return Card(
        "goal_achievement",
        CardType.DREAM,
        goal.title,
        f"Life goal achieved! {goal.description}",
        cost=goal.required_cash,
        effects=(CardEffect(EffectKind.GOAL_UNLOCK, goal_id=goal.goal_id),),
    )


class DeckSet:
    """All decks used by a game, grouped by track."""

    def __init__(self):
        self.opportunity = create_opportunity_deck()
        self.doodad = create_doodad_deck()
        self.business = create_business_deck()
        self.audit = create_audit_deck()
        self.charity = create_charity_deck()

    def opportunities(self, fast_track: bool) -> Deck:
        return self.business if fast_track else self.opportunity

    def penalties(self, fast_track: bool) -> Deck:
        return self.audit if fast_track else self.doodad

    def draw_dream(self, rng: random.Random) -> Card:
        """Draw one of the dream items offered when a goal is still out of reach."""
        dreams = self.business.of_type(CardType.DREAM)
        if not dreams:
            return self.business.draw(rng)
        return dreams[rng.randrange(len(dreams))]
