"""Tests for investor-to-earner support, both offered and requested."""

from dataclasses import replace

import pytest

from money_adventure import GamePhase
from money_adventure.agents import Personality, get_profile
from money_adventure.agents.computer import PersonalityAgent
from money_adventure.money import EventType
from money_adventure.rules import ActionType, get_legal_actions


@pytest.fixture
def investor_game(started_game):
    """p1 (human) is on the investor track with plenty of cash."""
    p1 = started_game.players[0]
    p1.has_escaped = True
    p1.cash = 10000
    return started_game


def _hand_turn_to_p2(game, offer_card):
    offer_card(game, "ft_o1")
    assert game.pass_card()
    assert game.advance_turn()
    assert game.current_player.player_id == "p2"


def _use_agent(game, player_id, **overrides):
    profile = replace(get_profile(Personality.CAUTIOUS), **overrides)
    game.agents[player_id] = PersonalityAgent(player_id, game.get_player(player_id).name, profile)


class TestOfferSupport:
    def test_job_support(self, investor_game):
        game = investor_game
        p1, p2 = game.players[0], game.players[1]

        assert game.offer_support("p2", "job")
        assert p1.cash == 9000
        assert p1.passive_income == 200
        assert p1.assets[-1].category == "support"
        assert p2.support_bonus == 800
        assert p2.cash == 800
        assert game.support_used
        assert game.phase == GamePhase.ROLL

    def test_job_bonus_paid_on_next_paycheck(self, investor_game):
        game = investor_game
        p2 = game.players[1]
        game.offer_support("p2", "job")

        game._pay_paycheck(p2)
        assert p2.cash == 800 + (2500 - 1500) + 800
        assert p2.support_bonus == 0

        game._pay_paycheck(p2)
        assert p2.cash == 2600 + 1000

    def test_investment_support(self, investor_game):
        game = investor_game
        p1, p3 = game.players[0], game.players[2]

        assert game.offer_support("p3", "investment")
        assert p1.cash == 5000
        assert p1.passive_income == 1000
        assert p3.cash == 1200 + 3000
        assert p3.support_bonus == 0

    def test_once_per_turn(self, investor_game):
        game = investor_game
        assert game.offer_support("p2", "job")
        assert not game.offer_support("p3", "job")
        assert game.players[0].cash == 9000

    def test_insufficient_cash(self, investor_game):
        game = investor_game
        game.players[0].cash = 500
        assert not game.offer_support("p2", "job")
        assert game.players[1].support_bonus == 0
        assert game.players[0].passive_income == 0
        assert not game.support_used
        rejected = game.event_log.of_type(EventType.COMMAND_REJECTED)[-1]
        assert rejected.details["error"] == "insufficient_funds"

    def test_invalid_targets(self, investor_game):
        game = investor_game
        game.players[2].has_escaped = True
        assert not game.offer_support("p9", "job")
        assert not game.offer_support("p1", "job")
        assert not game.offer_support("p3", "job")
        assert not game.offer_support("p2", "loan")
        assert game.players[0].cash == 10000

    def test_earner_cannot_support(self, started_game):
        assert not started_game.offer_support("p2", "job")
        assert not started_game.begin_support()

    def test_support_stake_cannot_be_sold(self, investor_game):
        game = investor_game
        p1, p2 = game.players[0], game.players[1]
        game.offer_support("p2", "job")
        stake = p1.assets[-1]

        assert game.sellable_assets("p1") == []
        assert ActionType.SELL_ASSET not in {a.action_type for a in get_legal_actions(game, "p1")}
        assert not game.sell_asset(stake.asset_id)
        assert p1.cash == 9000
        assert p1.passive_income == 200
        assert p2.support_bonus == 800
        rejected = game.event_log.of_type(EventType.COMMAND_REJECTED)[-1]
        assert rejected.details["error"] == "invalid_target"

    def test_support_keeps_passive_income_in_assets(self, investor_game):
        game = investor_game
        game.offer_support("p2", "investment")
        p1 = game.players[0]
        assert p1.passive_income == sum(a.cashflow for a in p1.assets)


class TestSupportPhase:
    def test_begin_and_skip(self, investor_game):
        game = investor_game
        assert game.begin_support()
        assert game.phase == GamePhase.SUPPORT
        assert not game.roll_dice()

        assert game.skip_support()
        assert game.phase == GamePhase.ROLL
        assert not game.begin_support()
        assert game.roll_dice()

    def test_offer_from_support_phase_returns_to_roll(self, investor_game):
        game = investor_game
        game.begin_support()
        assert game.offer_support("p4", "job")
        assert game.phase == GamePhase.ROLL

    def test_no_earners_left(self, investor_game):
        game = investor_game
        for player in game.players[1:]:
            player.has_escaped = True
        assert not game.begin_support()
        assert game.phase == GamePhase.ROLL

    def test_support_resets_next_turn(self, investor_game, offer_card):
        game = investor_game
        game.offer_support("p2", "job")
        offer_card(game, "ft_o1")
        game.pass_card()
        game.advance_turn()
        assert not game.support_used


class TestSupportRequest:
    def test_computer_requests_and_waits(self, investor_game, offer_card):
        game = investor_game
        _use_agent(game, "p2", request_support_chance=1.0)
        _hand_turn_to_p2(game, offer_card)

        game.run_until_idle()
        request = game.support_request
        assert request is not None
        assert request.requesting_player_id == "p2"
        assert request.investor_id == "p1"
        assert game.phase == GamePhase.ROLL
        assert game.current_player.player_id == "p2"
        assert game.scheduler.pending == 0
        assert not game.roll_dice()
        assert game.event_log.of_type(EventType.SUPPORT_REQUESTED)

    def test_accept_request(self, investor_game, offer_card):
        game = investor_game
        _use_agent(game, "p2", request_support_chance=1.0)
        _hand_turn_to_p2(game, offer_card)
        game.run_until_idle()

        assert game.respond_to_support_request(True, "job")
        assert game.support_request is None
        assert game.players[0].cash == 9000
        assert game.players[1].support_bonus == 800

        game.advance_clock(game.config.support_resume_delay_ms)
        assert game.phase == GamePhase.MOVE
        assert game.event_log.of_type(EventType.DICE_ROLL)[-1].player_id == "p2"

    def test_decline_request(self, investor_game, offer_card):
        game = investor_game
        _use_agent(game, "p2", request_support_chance=1.0)
        _hand_turn_to_p2(game, offer_card)
        game.run_until_idle()

        assert game.respond_to_support_request(False)
        assert game.support_request is None
        assert game.players[0].cash == 10000
        assert game.event_log.of_type(EventType.SUPPORT_DECLINED)

        game.advance_clock(game.config.decline_resume_delay_ms)
        assert game.phase == GamePhase.MOVE

    def test_unaffordable_accept_leaves_request_open(self, investor_game, offer_card):
        game = investor_game
        _use_agent(game, "p2", request_support_chance=1.0)
        _hand_turn_to_p2(game, offer_card)
        game.run_until_idle()
        game.players[0].cash = 500
        request = game.support_request

        assert not game.respond_to_support_request(True, "job")
        assert game.support_request == request
        assert game.players[0].cash == 500
        assert game.players[1].support_bonus == 0
        assert game.scheduler.pending == 0
        rejected = game.event_log.of_type(EventType.COMMAND_REJECTED)[-1]
        assert rejected.details["error"] == "insufficient_funds"

        assert game.respond_to_support_request(False)
        game.run_until_idle()
        assert game.event_log.of_type(EventType.DICE_ROLL)[-1].player_id == "p2"

    def test_respond_without_request(self, investor_game):
        assert not investor_game.respond_to_support_request(True, "job")

    def test_no_request_without_human_investor(self, started_game, offer_card):
        game = started_game
        _use_agent(game, "p2", request_support_chance=1.0)
        offer_card(game, "o3")
        game.pass_card()
        game.advance_turn()

        game.advance_clock(game.config.thinking_ms)
        assert game.support_request is None
        assert game.phase == GamePhase.MOVE

    def test_computer_investor_supports_earner(self, started_game, offer_card):
        game = started_game
        p2 = game.players[1]
        p2.has_escaped = True
        p2.cash = 20000
        _use_agent(game, "p2", support_chance=1.0)
        offer_card(game, "o3")
        game.pass_card()
        game.advance_turn()

        game.advance_clock(game.config.thinking_ms)
        given = game.event_log.of_type(EventType.SUPPORT_GIVEN)
        assert len(given) == 1
        assert given[0].player_id == "p2"
        assert given[0].details["target_id"] in ("p1", "p3", "p4")
        assert game.support_used
        assert game.phase == GamePhase.ROLL

        game.advance_clock(game.config.support_resume_delay_ms)
        assert game.phase == GamePhase.MOVE
