"""LiteLLM-backed generator used by the JSON extraction endpoint."""

import logging
from typing import Any

import litellm

from ..config import settings
from ..core.errors import GeneratorTransportFailure

logger = logging.getLogger(__name__)


class LiteLLMGenerator:
    """Submit chat messages to any LiteLLM-supported model and return the text.

    Satisfies the core.generation.Generator protocol.
    """

    def __init__(
        self,
        model: str,
        *,
        api_key: str | None = None,
        temperature: float | None = None,
        json_mode: bool = False,
    ) -> None:
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.json_mode = json_mode

    def completion_kwargs(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Keyword arguments passed to litellm.acompletion."""
        kwargs: dict[str, Any] = {"model": self.model, "messages": messages}
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        return kwargs

    async def submit(self, messages: list[dict[str, str]]) -> str:
        try:
            response = await litellm.acompletion(**self.completion_kwargs(messages))
        except Exception as e:
            logger.warning(f"LiteLLM call to {self.model} failed: {e}")
            raise GeneratorTransportFailure(f"{type(e).__name__}: {e}") from e
        return response.choices[0].message.content or ""


def get_generator() -> LiteLLMGenerator:
    """FastAPI dependency returning the configured generator."""
    return LiteLLMGenerator(
        settings.model,
        api_key=settings.openai_api_key,
        temperature=settings.temperature,
        json_mode=settings.json_mode,
    )
