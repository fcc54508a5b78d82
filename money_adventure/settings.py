"""
Central application configuration using pydantic-settings.

This module provides typed access to environment-based configuration for:
- Game defaults used by the CLI (seed, difficulty, penalty policy, pacing)
- The hint provider (OpenAI-compatible chat completion endpoint)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from money_adventure.config import DifficultyLevel, GameConfig, PenaltyPolicy


class GameSettings(BaseSettings):
    """
    Default game options.

    Environment variables (prefix: GAME_):
        GAME_SEED            - RNG seed (default: unseeded)
        GAME_DIFFICULTY      - kids | teen | adult (default: teen)
        GAME_PENALTY_POLICY  - clamp | debt (default: clamp)
        GAME_ROLL_DELAY_MS   - Pause between roll and landing (default: 1000)
        GAME_THINKING_MS     - Computer player thinking pause (default: 1500)
        GAME_END_TURN_DELAY_MS - Pause before a computer ends its turn (default: 800)
        GAME_SUPPORT_RESUME_DELAY_MS - Pause after an accepted support request (default: 1500)
        GAME_DECLINE_RESUME_DELAY_MS - Pause after a declined support request (default: 500)
        GAME_LOG_LEVEL       - Process log level (default: WARNING)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="GAME_",
    )

    seed: Optional[int] = Field(default=None, description="RNG seed for reproducible games.")
    difficulty: DifficultyLevel = Field(default=DifficultyLevel.TEEN)
    penalty_policy: PenaltyPolicy = Field(
        default=PenaltyPolicy.CLAMP,
        description="How unaffordable doodad/audit payments are settled.",
    )
    roll_delay_ms: int = Field(default=1000, ge=0)
    thinking_ms: int = Field(default=1500, ge=0)
    end_turn_delay_ms: int = Field(default=800, ge=0)
    support_resume_delay_ms: int = Field(default=1500, ge=0)
    decline_resume_delay_ms: int = Field(default=500, ge=0)
    log_level: str = Field(default="WARNING")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Optional[str]) -> str:
        return (value or "WARNING").upper()

    def to_config(self) -> GameConfig:
        """Build a GameConfig from these settings."""
        return GameConfig(
            seed=self.seed,
            difficulty=self.difficulty,
            penalty_policy=self.penalty_policy,
            roll_delay_ms=self.roll_delay_ms,
            thinking_ms=self.thinking_ms,
            end_turn_delay_ms=self.end_turn_delay_ms,
            support_resume_delay_ms=self.support_resume_delay_ms,
            decline_resume_delay_ms=self.decline_resume_delay_ms,
        )


class HintSettings(BaseSettings):
    """
    Configuration for the hint provider.

    Environment variables (prefix: HINT_):
        HINT_BASE_URL        - Base URL for OpenAI-compatible API (unset: demo mode)
        HINT_MODEL           - Model name or identifier
        HINT_API_KEY         - Optional API key
        HINT_TIMEOUT_SECONDS - Request timeout in seconds (default: 10)
        HINT_MAX_TOKENS      - Max response tokens (default: 200)
        HINT_LANGUAGE        - Language the coach answers in (default: English)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="HINT_",
    )

    base_url: Optional[str] = Field(
        default=None,
        description="Base URL for OpenAI-compatible API, e.g. http://localhost:11434/v1.",
    )
    model: str = Field(default="gemma3:4b", description="Model name or identifier.")
    api_key: Optional[SecretStr] = Field(default=None)
    timeout_seconds: float = Field(default=10.0, gt=0)
    max_tokens: int = Field(default=200, gt=0)
    language: str = Field(default="English")


@lru_cache
def get_game_settings() -> GameSettings:
    """Return cached game settings instance."""
    return GameSettings()


@lru_cache
def get_hint_settings() -> HintSettings:
    """Return cached hint settings instance."""
    return HintSettings()
