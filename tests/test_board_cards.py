import random

import pytest

from money_adventure.board import Board, SpaceType, Track
from money_adventure.cards import (
    CardType,
    Deck,
    DeckSet,
    create_audit_deck,
    create_business_deck,
    create_charity_deck,
    create_doodad_deck,
    create_opportunity_deck,
)


class TestBoard:
    """Tests for the two cyclic tracks."""

    def test_track_lengths(self):
        board = Board()
        assert board.length(Track.EARNER) == 12
        assert board.length(Track.INVESTOR) == 12

    def test_start_space(self):
        board = Board()
        assert board.get_space(Track.EARNER, 0) == SpaceType.START
        assert board.get_space(Track.INVESTOR, 0) == SpaceType.START

    def test_positions_wrap(self):
        board = Board()
        assert board.advance(Track.EARNER, 10, 4) == 2
        assert board.advance(Track.INVESTOR, 11, 1) == 0
        assert board.get_space(Track.EARNER, 12) == SpaceType.START

    def test_track_for(self):
        assert Board.track_for(False) == Track.EARNER
        assert Board.track_for(True) == Track.INVESTOR

    def test_only_investor_track_has_dreams(self):
        board = Board()
        assert SpaceType.DREAM not in board.tracks[Track.EARNER]
        assert SpaceType.DREAM in board.tracks[Track.INVESTOR]

    def test_labels(self):
        assert Board.label(SpaceType.PAYCHECK) == "Payday"


class TestDecks:
    """Tests for deck contents and drawing."""

    def test_deck_sizes(self):
        assert len(create_opportunity_deck()) == 5
        assert len(create_doodad_deck()) == 3
        assert len(create_business_deck()) == 5
        assert len(create_audit_deck()) == 3
        assert len(create_charity_deck()) == 4

    def test_business_deck_holds_two_dreams(self):
        dreams = create_business_deck().of_type(CardType.DREAM)
        assert {c.card_id for c in dreams} == {"ft_o4", "ft_o5"}

    def test_draw_with_replacement(self):
        deck = create_opportunity_deck()
        rng = random.Random(1)
        drawn = [deck.draw(rng) for _ in range(50)]
        assert len(deck) == 5
        assert all(card in deck.cards for card in drawn)
        assert len({c.card_id for c in drawn}) == 5

    def test_empty_deck_rejected(self):
        with pytest.raises(ValueError):
            Deck("empty", [])

    def test_dream_draw(self):
        decks = DeckSet()
        rng = random.Random(3)
        for _ in range(20):
            assert decks.draw_dream(rng).card_type == CardType.DREAM

    def test_deck_set_by_track(self):
        decks = DeckSet()
        assert decks.opportunities(False) is decks.opportunity
        assert decks.opportunities(True) is decks.business
        assert decks.penalties(False) is decks.doodad
        assert decks.penalties(True) is decks.audit

    def test_card_kinds(self):
        doodad = create_doodad_deck().cards[0]
        assert doodad.is_penalty
        assert not doodad.is_purchasable
        opportunity = create_opportunity_deck().cards[0]
        assert opportunity.is_purchasable
        charity = create_charity_deck().cards[0]
        assert not charity.is_purchasable
        assert not charity.is_penalty
