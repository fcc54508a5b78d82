"""Shared test fixtures for Money Adventure tests."""

import random

import pytest

from money_adventure import GameConfig, create_game
from money_adventure.cards import Card, CardEffect, CardType, EffectKind
from money_adventure.player import default_roster


class ScriptedRandom(random.Random):
    """
    Random source that returns queued values first.

    random() and randint() pop from their queues and fall back to the
    seeded generator once a queue is empty. Card draws and choices use
    getrandbits and are never scripted.
    """

    def __init__(self, *, randoms=(), randints=(), seed=42):
        super().__init__(seed)
        self.randoms = list(randoms)
        self.randints = list(randints)

    def random(self):
        if self.randoms:
            return self.randoms.pop(0)
        return super().random()

    def randint(self, a, b):
        if self.randints:
            return self.randints.pop(0)
        return super().randint(a, b)

    def getrandbits(self, k):
        return super().getrandbits(k)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def new_game(game_config):
    """Fresh game in the SETUP phase with the default roster."""
    return create_game(game_config, default_roster())


@pytest.fixture
def make_game():
    """
    Factory for a started game: difficulty chosen, every goal assigned,
    the human player (p1) to roll.
    """

    def _make(randints=(), randoms=(), goal_id="g1", difficulty="teen", **config_kwargs):
        config = GameConfig(seed=42, **config_kwargs)
        game = create_game(config, rng=ScriptedRandom(randoms=randoms, randints=randints))
        assert game.select_difficulty(difficulty)
        assert game.select_goal(goal_id)
        game.run_until_idle()
        return game

    return _make


@pytest.fixture
def started_game(make_game):
    """Started game with a fixed seed and no scripted values."""
    return make_game()


@pytest.fixture
def offer_card():
    """Put the active player in DECISION with a catalog card or a Card instance."""

    def _offer(game, card_id):
        if isinstance(card_id, Card):
            game._offer_card(card_id, f"Test card {card_id.card_id}")
            return card_id
        decks = (
            game.decks.opportunity,
            game.decks.doodad,
            game.decks.business,
            game.decks.audit,
            game.decks.charity,
        )
        for deck in decks:
            for card in deck.cards:
                if card.card_id == card_id:
                    game._offer_card(card, f"Test card {card_id}")
                    return card
        raise KeyError(card_id)

    return _offer


@pytest.fixture
def effect_cards():
    """Cards outside the catalog that carry cost and cashflow effects."""
    return {
        "setup_fee": Card(
            "x1", CardType.OPPORTUNITY, "Laundromat With Setup Fee", "", cost=1000, cashflow=250,
            effects=(CardEffect(EffectKind.FLAT_COST, amount=50),),
        ),
        "sponsor": Card(
            "x2", CardType.OPPORTUNITY, "Sponsored Vending Machine", "", cost=200, cashflow=40,
            effects=(CardEffect(EffectKind.CASHFLOW_GRANT, amount=10),),
        ),
        "towing": Card(
            "x3", CardType.DOODAD, "Car Repair And Tow", "", cost=200,
            effects=(CardEffect(EffectKind.FLAT_COST, amount=30),),
        ),
    }
