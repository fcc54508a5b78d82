"""Coach hints from a language model using an OpenAI-compatible API."""

import logging
from typing import Dict, Optional

import httpx

from money_adventure.cards import Card
from money_adventure.economy import card_total_cashflow, card_total_cost, monthly_cashflow
from money_adventure.exceptions import HintError
from money_adventure.player import PlayerState
from money_adventure.settings import HintSettings, get_hint_settings

logger = logging.getLogger(__name__)

DEMO_MODE_HINT = "Hints are unavailable because no hint provider is configured. (Demo Mode)"
EMPTY_HINT = "I can't think of a hint right now. Try to figure it out yourself!"
ERROR_HINT = "The coach couldn't be reached, so no hint this time."


class HintService:
    """
    Asks a friendly financial coach for a one or two sentence hint.

    Any transport error, malformed response or empty answer yields a
    fallback string; get_hint never raises.

    Attributes:
        settings: Provider configuration.
    """

    def __init__(self, settings: Optional[HintSettings] = None, client: Optional[httpx.Client] = None):
        self.settings = settings or get_hint_settings()
        self._client = client

    @property
    def demo_mode(self) -> bool:
        return not self.settings.base_url

    def __call__(self, player: PlayerState, card: Card) -> str:
        return self.get_hint(player, card)

    def get_hint(self, player: PlayerState, card: Card) -> str:
        if self.demo_mode:
            return DEMO_MODE_HINT

        prompt = self.build_prompt(player, card)
        try:
            text = self._query(prompt)
        except (httpx.HTTPError, HintError) as e:
            logger.warning("Hint request failed for %s: %s", player.player_id, e)
            return ERROR_HINT

        return text or EMPTY_HINT

    def build_prompt(self, player: PlayerState, card: Card) -> str:
        if player.has_escaped:
            status = "Fast Track (Rich)"
            goal = "Buy your DREAM to win the game!"
            cashflow = "(High Income)"
        else:
            status = "Rat Race (Learning)"
            goal = "Passive Income > Expenses to escape the Rat Race."
            cashflow = str(monthly_cashflow(player.salary, player.passive_income, player.monthly_expenses))

        return f"""You are a friendly, encouraging financial coach for a child playing a board game called "Money Adventure".

Current Player Situation:
- Status: {status}
- Cash: {player.cash}
- Monthly Cashflow: {cashflow}
- Goal: {goal}

The player drew this card:
- Type: {card.card_type.value}
- Title: {card.title}
- Description: {card.description}
- Cost: {card_total_cost(card)}
- Cashflow Increase: {card_total_cashflow(card)}

Task:
Provide a short, 1-2 sentence hint to help the child decide what to do.
If they are on the Fast Track and found a DREAM card, encourage them to buy it to win!
Do not tell them explicitly to buy or not to buy unless it's the winning move.
Instead, ask a guiding question or highlight a key concept (ROI, cash buffer, dreams).
Keep the tone playful and educational. Answer in simple {self.settings.language}."""

    def _query(self, prompt: str) -> str:
        """Query the provider using the chat completions API."""
        url = f"{self.settings.base_url.rstrip('/')}/chat/completions"

        payload = {
            "model": self.settings.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.settings.max_tokens,
            "temperature": 0.7,
        }

        headers: Dict[str, str] = {}
        if self.settings.api_key is not None:
            headers["Authorization"] = f"Bearer {self.settings.api_key.get_secret_value()}"

        client = self._client or httpx.Client(timeout=self.settings.timeout_seconds)
        try:
            response = client.post(
                url,
                json=payload,
                headers=headers or None,
                timeout=self.settings.timeout_seconds,
            )
            response.raise_for_status()
            try:
                result = response.json()
            except ValueError as e:
                raise HintError(f"Response is not JSON: {e}")
        finally:
            if self._client is None:
                client.close()

        choices = result.get("choices") if isinstance(result, dict) else None
        if not choices:
            raise HintError("Invalid hint response format")

        message = choices[0].get("message") or {}
        return (message.get("content") or "").strip()

    def close(self) -> None:
        """Clean up resources."""
        if self._client:
            self._client.close()
