"""
Custom exception hierarchy for the Money Adventure engine.

Command handlers raise these internally; the public command surface
catches them, records the rejection in the game log and reports failure
to the caller instead of propagating.
"""


class MoneyAdventureError(Exception):
    """Base exception for all game-related errors."""

    kind = "error"


class InsufficientFundsError(MoneyAdventureError):
    """The player cannot cover the cost of the action."""

    kind = "insufficient_funds"


class InvalidTargetError(MoneyAdventureError):
    """A referenced player, asset or goal does not exist."""

    kind = "invalid_target"


class PhaseError(MoneyAdventureError):
    """Action is not legal in the current phase."""

    kind = "phase_violation"


class InvalidActionError(MoneyAdventureError):
    """Action is not legal for this player or card."""

    kind = "invalid_action"


class HintError(MoneyAdventureError):
    """Hint provider communication failed."""

    kind = "hint_failure"
