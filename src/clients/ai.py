"""
AI List Generator
Fills DataList components with model-generated rows.
"""

import asyncio
import time
from typing import Any

import pybreaker
from pydantic import ValidationError as PydanticValidationError

from blueprint import DataListItem
from core import JSONParseError, extract_json, get_logger
from models import GeminiModel
from monitoring import metrics_collector

logger = get_logger(__name__)


class GenerationError(Exception):
    """List generation failed; the upstream cause is chained, never exposed in the message."""

    def __init__(self, message: str = "generation failed") -> None:
        super().__init__(message)


LIST_ITEM_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "id": {"type": "STRING"},
            "title": {"type": "STRING"},
            "subtitle": {"type": "STRING"},
            "value": {"type": "STRING"},
            "badge": {"type": "STRING"},
        },
        "required": ["id", "title"],
    },
}

PROMPT_TEMPLATE = """You are Orion AI, a specialized Data Generator for a UI library.

User Request: "{request}"

Your task is to generate a JSON array of items suitable for a dashboard list component.

Each item must strictly follow this schema:
- id: string (unique)
- title: string (main text)
- subtitle: string (secondary text, short description)
- value: string (numeric value, price, or metric)
- badge: string (short status label like 'High', 'Buy', '+5%')

Generate 3 to 6 items.
Ensure the data is realistic and strictly matches the user's request."""


class BreakerListener(pybreaker.CircuitBreakerListener):
    """Logs circuit breaker state changes."""

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "breaker_state_change",
            breaker=cb.name,
            from_state=str(old_state),
            to_state=str(new_state),
        )


class ListItemGenerator:
    """
    Turns a free-text request into DataList rows.

    Every failure (breaker open, API error, unparseable or invalid output,
    empty result) surfaces as ``GenerationError("generation failed")``.
    """

    def __init__(self, model: GeminiModel, fail_max: int = 5, reset_timeout: int = 30) -> None:
        self.model = model
        self._breaker = pybreaker.CircuitBreaker(
            fail_max=fail_max,
            reset_timeout=reset_timeout,
            name="gemini-list",
            listeners=[BreakerListener()],
        )

    @property
    def breaker_state(self) -> str:
        return self._breaker.current_state

    def build_prompt(self, request: str) -> str:
        return PROMPT_TEMPLATE.format(request=request.strip())

    def generate_list_items(self, prompt: str) -> list[DataListItem]:
        """
        Generate rows for ``prompt``.

        Raises:
            GenerationError: On any upstream or parsing failure
        """
        model_name = getattr(self.model, "name", "unknown")
        start_time = time.time()
        try:
            raw = self._breaker.call(self.model.generate_json, self.build_prompt(prompt), LIST_ITEM_SCHEMA)
            items = self._parse(raw)
        except Exception as e:
            duration = time.time() - start_time
            metrics_collector.record_generation(model_name, "error", duration)
            metrics_collector.record_error("generation_error", "list_generator")
            logger.error("generation_failed", error=str(e), error_type=type(e).__name__)
            raise GenerationError() from e

        duration = time.time() - start_time
        metrics_collector.record_generation(model_name, "success", duration)
        logger.info("generated", items=len(items), duration_ms=duration * 1000)
        return items

    async def agenerate_list_items(self, prompt: str) -> list[DataListItem]:
        """Async variant; the blocking SDK call runs in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.generate_list_items, prompt)

    def _parse(self, raw: str | None) -> list[DataListItem]:
        if not raw:
            raise JSONParseError("No data returned from model")

        data = extract_json(raw)
        if isinstance(data, dict):
            data = data.get("items", [data])
        if not data:
            raise JSONParseError("Model returned an empty list")

        try:
            return [DataListItem.model_validate(item) for item in data]
        except PydanticValidationError as e:
            raise JSONParseError(f"Invalid list items: {e.error_count()} errors", e) from e
