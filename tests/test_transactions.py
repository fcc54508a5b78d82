"""Tests for buy, sell, donate, pay and pass."""

from money_adventure import GamePhase
from money_adventure.money import EventType


def _last_rejection(game):
    return game.event_log.of_type(EventType.COMMAND_REJECTED)[-1]


class TestBuy:
    def test_buy_creates_asset(self, started_game, offer_card):
        game = started_game
        offer_card(game, "o1")
        assert game.buy()

        p1 = game.players[0]
        assert p1.cash == 500
        assert p1.passive_income == 100
        assert len(p1.assets) == 1
        assert p1.assets[0].cost == 500
        assert p1.assets[0].cashflow == 100
        assert game.phase == GamePhase.END_TURN
        assert len(game.decks.opportunity) == 5

    def test_buy_with_insufficient_cash(self, started_game, offer_card):
        game = started_game
        game.players[0].cash = 100
        offer_card(game, "o1")

        assert not game.buy()
        p1 = game.players[0]
        assert p1.cash == 100
        assert p1.assets == []
        assert p1.passive_income == 0
        assert game.phase == GamePhase.DECISION
        assert _last_rejection(game).details["error"] == "insufficient_funds"

    def test_buy_with_flat_cost(self, started_game, offer_card, effect_cards):
        game = started_game
        game.players[0].cash = 2000
        offer_card(game, effect_cards["setup_fee"])
        assert game.buy()
        assert game.players[0].cash == 950
        assert game.players[0].passive_income == 250
        assert game.players[0].assets[0].cost == 1050

    def test_flat_cost_counts_toward_sell_price(self, started_game, offer_card, effect_cards):
        game = started_game
        game.players[0].cash = 2000
        offer_card(game, effect_cards["setup_fee"])
        game.buy()
        assert game.sell_asset(game.players[0].assets[0].asset_id)
        assert game.players[0].cash == 950 + 840

    def test_buy_with_cashflow_grant(self, started_game, offer_card, effect_cards):
        game = started_game
        offer_card(game, effect_cards["sponsor"])
        assert game.buy()
        assert game.players[0].passive_income == 50
        assert game.players[0].assets[0].cashflow == 50

    def test_flat_cost_checked_before_buying(self, started_game, offer_card, effect_cards):
        game = started_game
        game.players[0].cash = 1020
        offer_card(game, effect_cards["setup_fee"])
        assert not game.buy()
        assert game.players[0].cash == 1020

    def test_cannot_buy_penalty(self, started_game, offer_card):
        offer_card(started_game, "d1")
        assert not started_game.buy()
        assert _last_rejection(started_game).details["error"] == "invalid_action"

    def test_passive_income_matches_assets(self, started_game, offer_card):
        game = started_game
        game.players[0].cash = 5000
        offer_card(game, "o4")
        game.buy()
        p1 = game.players[0]
        assert p1.passive_income == sum(a.cashflow for a in p1.assets)


class TestSell:
    def test_sell_at_eighty_percent(self, started_game, offer_card):
        game = started_game
        offer_card(game, "o1")
        game.buy()
        asset_id = game.players[0].assets[0].asset_id

        assert game.sell_asset(asset_id)
        p1 = game.players[0]
        assert p1.cash == 500 + 400
        assert p1.passive_income == 0
        assert p1.assets == []
        assert game.phase == GamePhase.END_TURN

    def test_sell_unknown_asset(self, started_game):
        assert not started_game.sell_asset("a99")
        assert _last_rejection(started_game).details["error"] == "invalid_target"

    def test_sell_before_play(self, new_game):
        assert not new_game.sell_asset("a1")

    def test_asset_ids_are_unique(self, started_game, offer_card):
        game = started_game
        game.players[0].cash = 5000
        offer_card(game, "o1")
        game.buy()
        offer_card(game, "o2")
        game.buy()
        ids = [a.asset_id for a in game.players[0].assets]
        assert len(set(ids)) == 2
        assert game.sellable_assets("p1") == game.players[0].assets


class TestDonate:
    def test_fixed_donation(self, started_game, offer_card):
        game = started_game
        offer_card(game, "c2")
        assert game.donate()
        p1 = game.players[0]
        assert p1.cash == 900
        assert p1.charity_turns_remaining == 3
        assert game.phase == GamePhase.END_TURN

    def test_income_share_donation(self, started_game, offer_card):
        game = started_game
        offer_card(game, "c1")
        assert game.donate()
        assert game.players[0].cash == 1000 - 200

    def test_donation_with_insufficient_cash(self, started_game, offer_card):
        game = started_game
        game.players[0].cash = 50
        offer_card(game, "c4")
        assert not game.donate()
        assert game.players[0].cash == 50
        assert game.players[0].charity_turns_remaining == 0
        assert game.phase == GamePhase.DECISION

    def test_donate_requires_charity_card(self, started_game, offer_card):
        offer_card(started_game, "o1")
        assert not started_game.donate()

    def test_pass_on_charity(self, started_game, offer_card):
        offer_card(started_game, "c2")
        assert started_game.pass_card()
        assert started_game.players[0].cash == 1000
        assert started_game.phase == GamePhase.END_TURN


class TestPenalties:
    def test_pay_doodad(self, started_game, offer_card):
        game = started_game
        offer_card(game, "d1")
        assert game.pay_penalty()
        assert game.players[0].cash == 950
        assert game.phase == GamePhase.END_TURN

    def test_pay_catalog_repair(self, started_game, offer_card):
        game = started_game
        offer_card(game, "d3")
        assert game.pay_penalty()
        assert game.players[0].cash == 800

    def test_pay_includes_flat_cost(self, started_game, offer_card, effect_cards):
        game = started_game
        offer_card(game, effect_cards["towing"])
        assert game.pay_penalty()
        assert game.players[0].cash == 1000 - 230

    def test_penalty_cannot_be_passed(self, started_game, offer_card):
        game = started_game
        offer_card(game, "d2")
        assert not game.pass_card()
        assert game.phase == GamePhase.DECISION
        assert game.players[0].cash == 1000

    def test_pay_requires_penalty(self, started_game, offer_card):
        offer_card(started_game, "o1")
        assert not started_game.pay_penalty()

    def test_pass_on_opportunity(self, started_game, offer_card):
        offer_card(started_game, "o1")
        assert started_game.pass_card()
        assert started_game.players[0].cash == 1000
        assert started_game.event_log.of_type(EventType.PASS)
