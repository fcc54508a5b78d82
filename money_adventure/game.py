"""
Main game engine and state management.

GameState owns every player record and is the only place that mutates
them. Each public command validates its preconditions, applies one
transition and records what happened in the event log; a command that
cannot be applied leaves the state untouched and returns False.
"""

import functools
import itertools
import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from money_adventure.agents.base import Agent, Decision
from money_adventure.agents.computer import PersonalityAgent
from money_adventure.board import Board, SpaceType
from money_adventure.cards import Card, CardType, DeckSet, create_goal_card
from money_adventure.config import (
    LIFE_GOALS,
    SUPPORT_OPTIONS,
    DifficultyLevel,
    GameConfig,
    LifeGoal,
    PenaltyPolicy,
    SupportKind,
    get_difficulty,
)
from money_adventure.economy import (
    can_escape,
    card_total_cashflow,
    card_total_cost,
    donation_amount,
    goal_achieved,
    paycheck_income,
    scale,
    sell_price,
    unlocked_goal_id,
)
from money_adventure.exceptions import (
    InsufficientFundsError,
    InvalidActionError,
    InvalidTargetError,
    MoneyAdventureError,
    PhaseError,
)
from money_adventure.money import EventLog, EventType
from money_adventure.player import SUPPORT_CATEGORY, Asset, Player, PlayerState, default_roster
from money_adventure.scheduler import Scheduler

logger = logging.getLogger(__name__)

HintProvider = Callable[[PlayerState, Card], str]

HINT_FALLBACK = "No hint is available right now. Try to decide on your own!"


class GamePhase(Enum):
    """States of the turn state machine."""

    SETUP = "setup"
    GOAL_SELECT = "goal_select"
    ROLL = "roll"
    MOVE = "move"
    DECISION = "decision"
    SUPPORT = "support"
    END_TURN = "end_turn"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class SupportRequest:
    """An earner-track computer player asking a human investor for help."""

    requesting_player_id: str
    requesting_player_name: str
    investor_id: str


def _command(name: str):
    """Run a command handler, turning game errors into a logged no-op."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs) -> bool:
            try:
                method(self, *args, **kwargs)
            except MoneyAdventureError as exc:
                self._reject(name, exc)
                return False
            return True

        return wrapper

    return decorator


class GameState:
    """
    Represents the complete state of a Money Adventure game.
    This is the main interface for the game engine.
    """

    def __init__(
        self,
        config: GameConfig,
        players: List[Player],
        agents: Optional[Dict[str, Agent]] = None,
        hint_provider: Optional[HintProvider] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.roster = list(players)
        self.board = Board()
        self.decks = DeckSet()
        self.event_log = EventLog(clock)
        self.scheduler = Scheduler()
        self.hint_provider = hint_provider

        # Initialize RNG
        self.rng = rng if rng is not None else random.Random(config.seed)

        self._custom_agents = dict(agents or {})
        self._reset()

    def _reset(self) -> None:
        self.players: List[PlayerState] = [p.to_state() for p in self.roster]
        self.agents: Dict[str, Agent] = {}
        for player in self.players:
            if player.is_computer:
                self.agents[player.player_id] = self._custom_agents.get(
                    player.player_id,
                    PersonalityAgent(player.player_id, player.name, player.behavior_profile),
                )

        self.current_player_index = 0
        self.turn_count = 1
        self.phase = GamePhase.SETUP
        self.current_card: Optional[Card] = None
        self.dice: Tuple[int, ...] = ()
        self.dice_roll: Optional[int] = None
        self.winner: Optional[PlayerState] = None
        self.difficulty = DifficultyLevel(self.config.difficulty)
        self.goal_selecting_index = 0
        self.support_request: Optional[SupportRequest] = None
        self.support_used = False
        self.coach_message: Optional[str] = None

        self._asset_ids = itertools.count(1)
        self._epoch = 0

        self._log(
            EventType.GAME_START,
            "The game has started!",
            players=[p.name for p in self.players],
            seed=self.config.seed,
        )

    # === QUERIES ===

    @property
    def current_player(self) -> PlayerState:
        return self.players[self.current_player_index]

    @property
    def is_fast_track(self) -> bool:
        return self.current_player.has_escaped

    @property
    def game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def get_player(self, player_id: str) -> Optional[PlayerState]:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def earner_track_players(self, exclude_current: bool = True) -> List[PlayerState]:
        """Players still on the earner track (support targets)."""
        current = self.current_player
        return [
            p for p in self.players
            if not p.has_escaped and not (exclude_current and p is current)
        ]

    def investor_track_players(self, exclude_current: bool = True) -> List[PlayerState]:
        current = self.current_player
        return [
            p for p in self.players
            if p.has_escaped and not (exclude_current and p is current)
        ]

    def human_investor(self) -> Optional[PlayerState]:
        """A human on the investor track who is not the active player, if any."""
        for player in self.investor_track_players():
            if player.is_human:
                return player
        return None

    def sellable_assets(self, player_id: str) -> List[Asset]:
        player = self.get_player(player_id)
        if player is None:
            return []
        return [a for a in player.assets if a.is_sellable]

    def available_goals(self) -> List[LifeGoal]:
        """Life goals with required cash scaled by the chosen difficulty."""
        multiplier = get_difficulty(self.difficulty).goal_multiplier
        return [goal.scaled(multiplier) for goal in LIFE_GOALS]

    @property
    def goal_selecting_player(self) -> Optional[PlayerState]:
        if self.phase != GamePhase.GOAL_SELECT:
            return None
        return self.players[self.goal_selecting_index]

    def snapshot(self):
        """Read-only projection for presentation layers."""
        from money_adventure.snapshot import serialize_snapshot

        return serialize_snapshot(self)

    # === DRIVING ===

    def advance_clock(self, ms: int) -> int:
        """Let `ms` of pacing time pass, firing due follow-ups."""
        return self.scheduler.advance(ms)

    def run_until_idle(self, max_steps: int = 10000) -> int:
        """Fire every pending follow-up, including ones they schedule."""
        return self.scheduler.run_until_idle(max_steps)

    # === SETUP ===

    @_command("select_difficulty")
    def select_difficulty(self, level) -> None:
        self._require_phase(GamePhase.SETUP)
        try:
            settings = get_difficulty(level)
        except ValueError:
            raise InvalidTargetError(f"Unknown difficulty '{level}'")

        for player in self.players:
            player.cash = scale(player.cash, settings.starting_cash_multiplier)
            player.monthly_expenses = scale(player.monthly_expenses, settings.expense_multiplier)

        self.difficulty = settings.level
        self.goal_selecting_index = 0
        self._log(
            EventType.DIFFICULTY_SELECTED,
            f"Difficulty set to {settings.name}.",
            difficulty=settings.level.value,
        )
        self._enter_phase(GamePhase.GOAL_SELECT)

    @_command("select_goal")
    def select_goal(self, goal_id: str) -> None:
        self._require_phase(GamePhase.GOAL_SELECT)
        player = self.goal_selecting_player
        if not player.is_human:
            raise InvalidActionError(f"{player.name} chooses their own goal")
        self._assign_goal(player, goal_id)

    def _assign_goal(self, player: PlayerState, goal_id: str) -> None:
        goal = next((g for g in self.available_goals() if g.goal_id == goal_id), None)
        if goal is None:
            raise InvalidTargetError(f"Unknown goal '{goal_id}'")

        player.selected_goal = goal
        self._log(
            EventType.GOAL_SELECTED,
            f"{player.name} chose '{goal.title}' as their life goal!",
            player,
            goal_id=goal.goal_id,
            required_cash=goal.required_cash,
        )

        self.goal_selecting_index += 1
        if self.goal_selecting_index >= len(self.players):
            self.goal_selecting_index = 0
            self._start_turn()
        else:
            self._enter_phase(GamePhase.GOAL_SELECT)

    # === ROLL / MOVE ===

    def throw_dice(self, count: int) -> Tuple[int, ...]:
        """Throw `count` six-sided dice using the game's random source."""
        return tuple(self.rng.randint(1, 6) for _ in range(count))

    @_command("roll_dice")
    def roll_dice(self) -> None:
        self._require_phase(GamePhase.ROLL)
        if self.support_request is not None:
            raise PhaseError("Waiting for an answer to a support request")

        player = self.current_player
        double = player.charity_turns_remaining > 0
        self.dice = self.throw_dice(2 if double else 1)
        self.dice_roll = sum(self.dice)

        track = self.board.track_for(player.has_escaped)
        player.position = self.board.advance(track, player.position, self.dice_roll)
        space = self.board.get_space(track, player.position)

        if double:
            rolled = f"rolled two dice: {self.dice[0]}+{self.dice[1]}={self.dice_roll}"
        else:
            rolled = f"rolled a {self.dice_roll}"
        self._log(
            EventType.DICE_ROLL,
            f"{player.name} {rolled} and landed on {self.board.label(space)}.",
            player,
            dice=list(self.dice),
            total=self.dice_roll,
            position=player.position,
            track=track.value,
        )

        self._enter_phase(GamePhase.MOVE)
        self._schedule(self.config.roll_delay_ms, self._resolve_landing, "resolve_landing")

    def _resolve_landing(self) -> None:
        """Apply the effect of the space the current player landed on."""
        player = self.current_player
        track = self.board.track_for(player.has_escaped)
        space = self.board.get_space(track, player.position)
        fast = player.has_escaped

        self._log(
            EventType.LAND,
            f"{player.name} is on {self.board.label(space)}.",
            player,
            position=player.position,
            space=space.value,
        )

        if space in (SpaceType.PAYCHECK, SpaceType.START):
            self._pay_paycheck(player)
            if not self.game_over:
                self._enter_phase(GamePhase.END_TURN)
            return

        if space in (SpaceType.OPPORTUNITY, SpaceType.BUSINESS):
            card = self.decks.opportunities(fast).draw(self.rng)
            self._offer_card(card, f"{player.name} found an opportunity: '{card.title}'.")
        elif space in (SpaceType.DOODAD, SpaceType.AUDIT):
            card = self.decks.penalties(fast).draw(self.rng)
            self._offer_card(card, f"Trouble for {player.name}: '{card.title}'.")
        elif space == SpaceType.CHARITY:
            card = self.decks.charity.draw(self.rng)
            self._offer_card(card, f"{player.name} has a chance to give: '{card.title}'.")
        elif space == SpaceType.DREAM:
            goal = player.selected_goal
            if goal is not None and player.cash >= goal.required_cash:
                card = create_goal_card(goal)
                self._offer_card(card, f"{player.name} can achieve their life goal '{goal.title}'!")
            else:
                card = self.decks.draw_dream(self.rng)
                self._offer_card(card, f"{player.name} found a dream item: '{card.title}'.")
        else:
            self._log(EventType.LAND, "Nothing special happened.", player, space=space.value)
            self._enter_phase(GamePhase.END_TURN)

    def _offer_card(self, card: Card, message: str) -> None:
        self.current_card = card
        self._log(
            EventType.CARD_DRAW,
            message,
            self.current_player,
            card_id=card.card_id,
            card_type=card.card_type.value,
            cost=card.cost,
            cashflow=card.cashflow,
        )
        self._enter_phase(GamePhase.DECISION)

    def _pay_paycheck(self, player: PlayerState) -> None:
        income = paycheck_income(player, self.config.investor_paycheck_bonus)
        bonus = player.support_bonus
        player.support_bonus = 0

        if income >= 0:
            player.cash += income
        else:
            self._charge(player, -income)

        suffix = " (including a support bonus)" if bonus > 0 else ""
        self._log(
            EventType.PAYCHECK,
            f"Payday for {player.name}! Received {income:,}{suffix}.",
            player,
            amount=income,
            support_bonus=bonus,
            new_balance=player.cash,
        )

        self._check_escape(player)
        if goal_achieved(player):
            self._finish(player, f"{player.name} achieved their life goal '{player.selected_goal.title}'!")

    # === DECISION ===

    @_command("buy")
    def buy(self) -> None:
        self._require_phase(GamePhase.DECISION)
        card = self.current_card
        if card is None or not card.is_purchasable:
            raise InvalidActionError("There is nothing to buy")

        player = self.current_player
        cost = card_total_cost(card)
        if player.cash < cost:
            raise InsufficientFundsError(f"Not enough cash (need {cost:,}, have {player.cash:,})")

        player.cash -= cost

        if card.card_type == CardType.DREAM:
            player.dreams.append(card)
            goal_id = unlocked_goal_id(card)
            self._log(
                EventType.PURCHASE,
                f"{player.name} bought the dream '{card.title}'!",
                player,
                card_id=card.card_id,
                goal_id=goal_id,
                price=cost,
                new_balance=player.cash,
            )
            if goal_id is not None:
                self._finish(player, f"{player.name} achieved their life goal '{card.title}'!")
            else:
                self._finish(player, f"{player.name} made their dream come true and won the game!")
            return

        cashflow = card_total_cashflow(card)
        asset = Asset(
            f"a{next(self._asset_ids)}",
            card.title,
            cost,
            cashflow,
            category=card.card_type.value,
        )
        player.assets.append(asset)
        player.passive_income += cashflow
        self._log(
            EventType.PURCHASE,
            f"{player.name} bought '{card.title}' (passive income +{cashflow:,}).",
            player,
            card_id=card.card_id,
            asset_id=asset.asset_id,
            price=cost,
            cashflow=cashflow,
            new_balance=player.cash,
        )

        self._check_escape(player)
        self._enter_phase(GamePhase.END_TURN)

    def donation_for(self, player: PlayerState, card: Card) -> int:
        return donation_amount(card, player.salary, player.passive_income, self.config.donation_rate)

    @_command("donate")
    def donate(self) -> None:
        self._require_phase(GamePhase.DECISION)
        card = self.current_card
        if card is None or card.card_type != CardType.CHARITY:
            raise InvalidActionError("Only charity cards accept donations")

        player = self.current_player
        amount = self.donation_for(player, card)
        if player.cash < amount:
            raise InsufficientFundsError(f"Not enough cash to donate {amount:,}")

        player.cash -= amount
        player.charity_turns_remaining = self.config.charity_bonus_turns
        self._log(
            EventType.DONATION,
            f"{player.name} donated {amount:,}! Two dice for the next "
            f"{self.config.charity_bonus_turns} turns!",
            player,
            amount=amount,
            new_balance=player.cash,
        )
        self._enter_phase(GamePhase.END_TURN)

    @_command("pay_penalty")
    def pay_penalty(self) -> None:
        self._require_phase(GamePhase.DECISION)
        card = self.current_card
        if card is None or not card.is_penalty:
            raise InvalidActionError("There is no penalty to pay")

        player = self.current_player
        amount = card_total_cost(card)
        paid = self._charge(player, amount)
        self._log(
            EventType.PENALTY_PAYMENT,
            f"{player.name} paid {paid:,} for '{card.title}'.",
            player,
            amount=amount,
            paid=paid,
            forgiven=amount - paid,
            new_balance=player.cash,
        )
        self._enter_phase(GamePhase.END_TURN)

    @_command("pass")
    def pass_card(self) -> None:
        self._require_phase(GamePhase.DECISION)
        card = self.current_card
        if card is not None and card.is_penalty:
            raise InvalidActionError("Penalties cannot be skipped")

        player = self.current_player
        self._log(EventType.PASS, f"{player.name} passed.", player)
        self._enter_phase(GamePhase.END_TURN)

    def _charge(self, player: PlayerState, amount: int) -> int:
        """Debit an unavoidable cost according to the penalty policy. Returns the amount paid."""
        if self.config.penalty_policy == PenaltyPolicy.DEBT:
            player.cash -= amount
            return amount
        paid = min(amount, max(player.cash, 0))
        player.cash -= paid
        return paid

    # === ASSETS ===

    @_command("sell_asset")
    def sell_asset(self, asset_id: str) -> None:
        self._require_phase(
            GamePhase.ROLL,
            GamePhase.MOVE,
            GamePhase.DECISION,
            GamePhase.SUPPORT,
            GamePhase.END_TURN,
        )
        if self.support_request is not None:
            raise PhaseError("Waiting for an answer to a support request")
        player = self.current_player
        asset = player.find_asset(asset_id)
        if asset is None:
            raise InvalidTargetError(f"{player.name} does not own asset '{asset_id}'")
        if not asset.is_sellable:
            raise InvalidTargetError(f"'{asset.name}' cannot be sold")

        price = sell_price(asset.cost, self.config.sell_ratio)
        player.assets.remove(asset)
        player.passive_income -= asset.cashflow
        player.cash += price
        self._log(
            EventType.SALE,
            f"{player.name} sold '{asset.name}' for {price:,}.",
            player,
            asset_id=asset.asset_id,
            price=price,
            cashflow=asset.cashflow,
            new_balance=player.cash,
        )
        self._check_escape(player)

    # === SUPPORT ===

    @_command("begin_support")
    def begin_support(self) -> None:
        self._require_phase(GamePhase.ROLL)
        self._require_can_support()
        if not self.earner_track_players():
            raise InvalidTargetError("Nobody is left on the earner track")
        self._enter_phase(GamePhase.SUPPORT)

    @_command("skip_support")
    def skip_support(self) -> None:
        self._require_phase(GamePhase.SUPPORT)
        self.support_used = True
        self._enter_phase(GamePhase.ROLL)

    @_command("offer_support")
    def offer_support(self, target_id: str, kind) -> None:
        self._require_phase(GamePhase.ROLL, GamePhase.SUPPORT)
        self._require_can_support()
        giver = self.current_player
        try:
            kind = SupportKind(kind)
        except ValueError:
            raise InvalidTargetError(f"Unknown support kind '{kind}'")

        target = self.get_player(target_id)
        if target is None or target is giver or target.has_escaped:
            raise InvalidTargetError(f"'{target_id}' cannot receive support")

        self._execute_support(giver, target, kind)
        self.support_used = True
        if self.phase == GamePhase.SUPPORT:
            self._enter_phase(GamePhase.ROLL)

    def _require_can_support(self) -> None:
        if self.support_request is not None:
            raise PhaseError("Waiting for an answer to a support request")
        if not self.current_player.has_escaped:
            raise InvalidActionError("Only investor-track players can give support")
        if self.support_used:
            raise InvalidActionError("Support was already offered this turn")

    def _execute_support(self, giver: PlayerState, receiver: PlayerState, kind: SupportKind) -> None:
        option = SUPPORT_OPTIONS[kind]
        if giver.cash < option.cost_to_investor:
            raise InsufficientFundsError(
                f"Not enough cash to support (need {option.cost_to_investor:,})"
            )

        giver.cash -= option.cost_to_investor
        # The giver's return is held as an asset so passive income stays the sum of assets
        stake = Asset(
            f"a{next(self._asset_ids)}",
            f"{option.title}: {receiver.name}",
            option.cost_to_investor,
            option.benefit_to_investor,
            category=SUPPORT_CATEGORY,
        )
        giver.assets.append(stake)
        giver.passive_income += option.benefit_to_investor

        if kind == SupportKind.JOB:
            receiver.support_bonus += option.benefit_to_worker
            message = f"{giver.name} offered {receiver.name} a job!"
        else:
            receiver.cash += option.benefit_to_worker
            message = f"{giver.name} co-invested with {receiver.name}!"

        self._log(
            EventType.SUPPORT_GIVEN,
            message,
            giver,
            target_id=receiver.player_id,
            kind=kind.value,
            cost=option.cost_to_investor,
            benefit_to_worker=option.benefit_to_worker,
            benefit_to_investor=option.benefit_to_investor,
        )
        self._check_escape(giver)

    @_command("respond_to_support_request")
    def respond_to_support_request(self, accept: bool, kind=None) -> None:
        request = self.support_request
        if request is None or self.game_over:
            raise PhaseError("There is no support request to answer")

        investor = self.get_player(request.investor_id)
        requester = self.get_player(request.requesting_player_id)

        if not accept:
            self._resume_after_request(f"{investor.name} declined to help {requester.name}.")
            return

        try:
            kind = SupportKind(kind)
        except ValueError:
            raise InvalidTargetError(f"Unknown support kind '{kind}'")

        # An unaffordable accept leaves the request open
        self._execute_support(investor, requester, kind)
        self.support_request = None
        self._speak(requester, "accept_support")
        self._schedule(self.config.support_resume_delay_ms, self._resume_roll, "resume_roll")

    def _resume_after_request(self, message: str) -> None:
        request = self.support_request
        self.support_request = None
        self._log(
            EventType.SUPPORT_DECLINED,
            message,
            self.get_player(request.investor_id),
            requesting_player_id=request.requesting_player_id,
        )
        self._schedule(self.config.decline_resume_delay_ms, self._resume_roll, "resume_roll")

    def _resume_roll(self) -> None:
        self.roll_dice()

    # === TURN END ===

    @_command("advance_turn")
    def advance_turn(self) -> None:
        self._require_phase(GamePhase.END_TURN)
        player = self.current_player

        if player.charity_turns_remaining > 0:
            player.charity_turns_remaining -= 1

        # Support-derived income can cross the threshold between turns
        self._check_escape(player)

        self.current_player_index = (self.current_player_index + 1) % len(self.players)
        if self.current_player_index == 0:
            self.turn_count += 1

        self.current_card = None
        self.dice = ()
        self.dice_roll = None
        self.coach_message = None
        self.support_used = False
        self._start_turn()

    def _start_turn(self) -> None:
        player = self.current_player
        self._log(
            EventType.TURN_START,
            f"It's {player.name}'s turn.",
            player,
        )
        self._enter_phase(GamePhase.ROLL)

    def _check_escape(self, player: PlayerState) -> bool:
        """One-way move to the investor track once passive income covers expenses."""
        if not can_escape(player):
            return False
        player.has_escaped = True
        player.cash += self.config.escape_bonus
        player.position = 0
        self._log(
            EventType.ESCAPE,
            f"Congratulations! {player.name} escaped the rat race and moves to the fast track!",
            player,
            passive_income=player.passive_income,
            monthly_expenses=player.monthly_expenses,
            bonus=self.config.escape_bonus,
        )
        return True

    def _finish(self, winner: PlayerState, message: str) -> None:
        self.winner = winner
        self.phase = GamePhase.GAME_OVER
        self._epoch += 1
        self.scheduler.cancel_all()
        self._log(EventType.GAME_END, message, winner, winner_id=winner.player_id)

    @_command("restart")
    def restart(self) -> None:
        """Throw the current game away, cancelling every pending follow-up."""
        self.scheduler.cancel_all()
        self.event_log.clear()
        self._reset()

    # === HINTS ===

    @_command("request_hint")
    def request_hint(self) -> None:
        self._require_phase(GamePhase.DECISION)
        player = self.current_player
        card = self.current_card

        text = None
        if self.hint_provider is not None:
            try:
                text = self.hint_provider(player, card)
            except Exception as exc:
                logger.warning("Hint provider failed for %s: %s", player.player_id, exc)
        self.coach_message = text or HINT_FALLBACK
        self._log(EventType.HINT, self.coach_message, player, card_id=card.card_id)

    # === COMPUTER PLAYERS ===

    def _pending_actor(self) -> Optional[PlayerState]:
        if self.phase == GamePhase.GOAL_SELECT:
            return self.players[self.goal_selecting_index]
        if self.phase in (GamePhase.ROLL, GamePhase.DECISION, GamePhase.SUPPORT, GamePhase.END_TURN):
            return self.current_player
        return None

    def _schedule_computer_step(self) -> None:
        actor = self._pending_actor()
        if actor is None or not actor.is_computer or self.support_request is not None:
            return
        if self.phase == GamePhase.END_TURN:
            delay = self.config.end_turn_delay_ms
        else:
            delay = self.config.thinking_ms
        self._schedule(delay, self._computer_step, f"{actor.player_id}:{self.phase.value}")

    def _computer_step(self) -> None:
        actor = self._pending_actor()
        if actor is None or not actor.is_computer:
            return
        agent = self.agents[actor.player_id]

        if self.phase == GamePhase.GOAL_SELECT:
            goal = agent.choose_goal(self.available_goals(), self.rng)
            self._assign_goal(actor, goal.goal_id)
        elif self.phase == GamePhase.ROLL:
            self._computer_roll_entry(actor, agent)
        elif self.phase == GamePhase.SUPPORT:
            choice = agent.choose_support(actor, self.earner_track_players(), self.rng)
            if choice is None or not self.offer_support(choice[0].player_id, choice[1]):
                self.skip_support()
        elif self.phase == GamePhase.DECISION:
            self._computer_decide(actor, agent)
        elif self.phase == GamePhase.END_TURN:
            self.advance_turn()

    def _computer_roll_entry(self, player: PlayerState, agent: Agent) -> None:
        investor = self.human_investor()
        if not player.has_escaped and investor is not None and agent.wants_support(player, self.rng):
            self.support_request = SupportRequest(player.player_id, player.name, investor.player_id)
            self._speak(player, "request_support")
            self._log(
                EventType.SUPPORT_REQUESTED,
                f"{player.name} asked {investor.name} for support.",
                player,
                investor_id=investor.player_id,
            )
            return

        if player.has_escaped and not self.support_used:
            choice = agent.choose_support(player, self.earner_track_players(), self.rng)
            if choice is not None:
                target, kind = choice
                self._speak(player, "support")
                if self.offer_support(target.player_id, kind):
                    self._schedule(self.config.support_resume_delay_ms, self._resume_roll, "resume_roll")
                    return

        if self.rng.random() > 0.6:
            self._speak(player, "catchphrase")
        self.roll_dice()

    def _computer_decide(self, player: PlayerState, agent: Agent) -> None:
        card = self.current_card
        decision = agent.decide(player, card, self.rng)

        if decision == Decision.PAY:
            self.pay_penalty()
        elif decision == Decision.DONATE and player.cash >= self.donation_for(player, card):
            self._speak(player, "donate")
            self.donate()
        elif decision == Decision.BUY:
            self._speak(player, "buy")
            if not self.buy():
                self.pass_card()
        else:
            self._speak(player, "pass")
            self.pass_card()

    def _speak(self, player: PlayerState, category: str) -> None:
        agent = self.agents.get(player.player_id)
        if agent is None:
            return
        line = agent.say(category, self.rng)
        if line:
            self._log(EventType.AGENT_SPEECH, f'{player.name}: "{line}"', player, category=category)

    # === INTERNALS ===

    def _enter_phase(self, phase: GamePhase) -> None:
        self.phase = phase
        self._epoch += 1
        self._schedule_computer_step()

    def _schedule(self, delay_ms: int, callback: Callable[[], None], label: str) -> None:
        """Schedule a follow-up that is dropped if the phase moves on before it fires."""
        epoch = self._epoch

        def run() -> None:
            if self._epoch == epoch and not self.game_over:
                callback()
            else:
                logger.debug("Dropping stale follow-up %s", label)

        self.scheduler.schedule(delay_ms, run, label)

    def _require_phase(self, *phases: GamePhase) -> None:
        if self.phase == GamePhase.GAME_OVER:
            raise PhaseError("The game is over")
        if self.phase not in phases:
            allowed = ", ".join(p.value for p in phases)
            raise PhaseError(f"Not allowed during {self.phase.value} (needs {allowed})")

    def _reject(self, command: str, exc: MoneyAdventureError) -> None:
        logger.debug("Rejected %s: %s", command, exc)
        self._log(
            EventType.COMMAND_REJECTED,
            str(exc),
            self.current_player,
            command=command,
            error=exc.kind,
        )

    def _log(
        self,
        event_type: EventType,
        message: str,
        player: Optional[PlayerState] = None,
        **details,
    ) -> None:
        player_id = player.player_id if player is not None else None
        self.event_log.log(event_type, message, self.turn_count, player_id, **details)


def create_game(
    config: Optional[GameConfig] = None,
    players: Optional[List[Player]] = None,
    **kwargs,
) -> GameState:
    """
    Create a new game in the SETUP phase.

    Args:
        config: Game configuration (defaults to GameConfig())
        players: Roster in turn order (defaults to the standard four players)
        **kwargs: Passed through to GameState (agents, hint_provider, rng, clock)

    Returns:
        Initialized GameState
    """
    config = config or GameConfig()
    players = default_roster() if players is None else players
    if len(players) < 1:
        raise ValueError("Game requires at least 1 player")
    ids = [p.player_id for p in players]
    if len(set(ids)) != len(ids):
        raise ValueError("Player ids must be unique")
    return GameState(config, players, **kwargs)
