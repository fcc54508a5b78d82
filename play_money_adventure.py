#!/usr/bin/env python3
"""
Minimal CLI for simulating Money Adventure games.

This script demonstrates the game engine by running a simulated game in
which the human seat is played by a balanced computer personality.
"""

import argparse
import logging
from dataclasses import replace
from typing import Optional

from money_adventure.agents.computer import PersonalityAgent
from money_adventure.agents.base import Decision
from money_adventure.agents.personality import Personality, get_profile
from money_adventure.config import DifficultyLevel, PenaltyPolicy
from money_adventure.economy import freedom_progress
from money_adventure.game import GamePhase, GameState, create_game
from money_adventure.game_logger import GameLogger
from money_adventure.settings import get_game_settings

logger = logging.getLogger(__name__)


def print_game_state(game: GameState) -> None:
    """Print current game state."""
    print("\n" + "=" * 60)
    print(f"TURN {game.turn_count}")
    print("=" * 60)

    for player in game.players:
        track = "fast track" if player.has_escaped else "rat race"
        print(
            f"{player.name}: cash {player.cash:,} | passive {player.passive_income:,}"
            f"/{player.monthly_expenses:,} ({freedom_progress(player):.0f}%) | "
            f"{len(player.assets)} assets | {track}"
        )


def print_game_summary(game: GameState) -> None:
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER" if game.game_over else "TURN LIMIT REACHED")
    print("=" * 60)

    if game.winner is not None:
        winner = game.winner
        print(f"\nWinner: {winner.name}")
        print(f"Final Cash: {winner.cash:,}")
        if winner.selected_goal is not None:
            print(f"Life Goal: {winner.selected_goal.title}")

    print("\nFinal Standings:")
    for player in sorted(game.players, key=lambda p: p.cash, reverse=True):
        status = "escaped" if player.has_escaped else "in the rat race"
        print(f"  {player.name}: {player.cash:,} ({status})")

    print(f"\nTotal Turns: {game.turn_count}")


def drive_human_seat(game: GameState, pilot: PersonalityAgent, difficulty: DifficultyLevel) -> bool:
    """
    Take one action on behalf of the human player, if one is awaited.

    Returns:
        True if an action was attempted
    """
    human = game.get_player(pilot.player_id)
    request = game.support_request

    if request is not None and request.investor_id == human.player_id:
        requester = game.get_player(request.requesting_player_id)
        choice = pilot.choose_support(human, [requester], game.rng)
        if choice is None:
            game.respond_to_support_request(False)
        else:
            game.respond_to_support_request(True, choice[1])
        return True

    if game.phase == GamePhase.SETUP:
        game.select_difficulty(difficulty)
        return True

    if game.phase == GamePhase.GOAL_SELECT:
        if game.goal_selecting_player is not human:
            return False
        goal = pilot.choose_goal(game.available_goals(), game.rng)
        game.select_goal(goal.goal_id)
        return True

    if game.current_player is not human:
        return False

    if game.phase == GamePhase.ROLL:
        if human.has_escaped and not game.support_used:
            choice = pilot.choose_support(human, game.earner_track_players(), game.rng)
            if choice is not None and game.offer_support(choice[0].player_id, choice[1]):
                return True
        game.roll_dice()
        return True

    if game.phase == GamePhase.SUPPORT:
        game.skip_support()
        return True

    if game.phase == GamePhase.DECISION:
        decision = pilot.decide(human, game.current_card, game.rng)
        done = False
        if decision == Decision.PAY:
            done = game.pay_penalty()
        elif decision == Decision.DONATE:
            done = game.donate()
        elif decision == Decision.BUY:
            done = game.buy()
        if not done:
            game.pass_card()
        return True

    if game.phase == GamePhase.END_TURN:
        game.advance_turn()
        return True

    return False


def simulate_game(
    seed: Optional[int] = None,
    difficulty: Optional[DifficultyLevel] = None,
    penalty_policy: Optional[PenaltyPolicy] = None,
    verbose: bool = True,
    max_turns: int = 50,
    log_file: Optional[str] = None,
) -> GameState:
    """
    Simulate a complete game of Money Adventure.

    Args:
        seed: Random seed for reproducibility
        difficulty: Difficulty level (default from GAME_DIFFICULTY)
        penalty_policy: How unaffordable penalties are settled
        verbose: Whether to print detailed output
        max_turns: Stop after this many rounds if nobody has won
        log_file: Path to JSONL log file (None = auto-generate)
    """
    settings = get_game_settings()
    config = settings.to_config()
    if seed is not None:
        config = replace(config, seed=seed)
    if difficulty is not None:
        config = replace(config, difficulty=difficulty)
    if penalty_policy is not None:
        config = replace(config, penalty_policy=penalty_policy)

    game_logger = GameLogger(log_file)
    game = create_game(config)
    human = next(p for p in game.players if p.is_human)
    pilot = PersonalityAgent(human.player_id, human.name, get_profile(Personality.BALANCED))

    game_logger.flush_engine_events(game)

    if verbose:
        print(f"Starting Money Adventure ({config.difficulty.value} difficulty)")
        print(f"Seed: {config.seed}")
        print(f"Logging to: {game_logger.log_file}")

    # Safety limit to prevent infinite loops in case of bugs
    iteration_count = 0
    max_iterations = 10000
    last_turn = 0

    while not game.game_over and game.turn_count <= max_turns and iteration_count < max_iterations:
        iteration_count += 1

        game.run_until_idle()
        game_logger.flush_engine_events(game)

        if game.game_over or game.turn_count > max_turns:
            break

        if game.turn_count != last_turn:
            last_turn = game.turn_count
            game_logger.log_turn_snapshot(game)
            if verbose and game.turn_count % 5 == 0:
                print_game_state(game)

        if not drive_human_seat(game, pilot, config.difficulty):
            logger.warning("Nobody can act in phase %s; stopping", game.phase.value)
            break

    if iteration_count >= max_iterations:
        print(f"\n!!! SAFETY LIMIT HIT ({max_iterations} iterations) !!!")

    game_logger.flush_engine_events(game)

    if verbose:
        print_game_summary(game)
        print(f"\nGame logged to: {game_logger.log_file}")

    return game


def main():
    """Main entry point for CLI."""
    settings = get_game_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(description="Simulate a Money Adventure game")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--difficulty",
        type=str,
        default=None,
        choices=[level.value for level in DifficultyLevel],
        help="Difficulty level",
    )
    parser.add_argument(
        "--penalty-policy",
        type=str,
        default=None,
        choices=[policy.value for policy in PenaltyPolicy],
        help="How penalties larger than the player's cash are settled",
    )
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument(
        "--max-turns",
        type=int,
        default=50,
        help="Maximum number of rounds",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Path to JSONL log file (default: auto-generated timestamp)",
    )

    args = parser.parse_args()

    simulate_game(
        seed=args.seed,
        difficulty=DifficultyLevel(args.difficulty) if args.difficulty else None,
        penalty_policy=PenaltyPolicy(args.penalty_policy) if args.penalty_policy else None,
        verbose=not args.quiet,
        max_turns=args.max_turns,
        log_file=args.log_file,
    )


if __name__ == "__main__":
    main()
