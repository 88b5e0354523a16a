"""Bounded retry loop around the external JSON generator.

Every attempt is an independent generator call with the identical prompt.
Decode failures, shape mismatches and transport errors (including timeouts)
all consume one retry. The first value that passes the validator is
returned; partial or invalid data is never returned.
"""

import asyncio
import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .errors import (
    AttemptFailure,
    DecodeFailure,
    GenerationExhausted,
    GeneratorTransportFailure,
)
from .prompts import build_messages
from .shape_compiler import Validator

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5
DEFAULT_ATTEMPT_TIMEOUT = 60.0

_CODE_FENCE_RE = re.compile(r"^```(?:json|JSON)?\s*\n?([\s\S]*?)\n?\s*```$")


@runtime_checkable
class Generator(Protocol):
    """Anything that turns chat messages into completion text."""

    async def submit(self, messages: list[dict[str, str]]) -> str:
        ...


@dataclass
class GenerationAttempt:
    """One generator round-trip plus decode and validation."""

    number: int
    prompt: str
    raw: str | None = None
    value: Any = None
    error: AttemptFailure | None = None
    latency_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.error is None


def strip_code_fences(raw: str) -> str:
    """Strip a markdown code fence wrapping the whole response, if any."""
    trimmed = raw.strip()
    match = _CODE_FENCE_RE.match(trimmed)
    return match.group(1).strip() if match else trimmed


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_json(raw: str, *, strip_fences: bool = True) -> Any:
    """Decode generator text as JSON.

    The NaN, Infinity and -Infinity literals that json.loads tolerates are
    rejected.

    Raises:
        DecodeFailure: The text is not valid JSON, or nests too deeply to
            decode.
    """
    text = strip_code_fences(raw) if strip_fences else raw
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise DecodeFailure(raw, str(e)) from e


class GenerationLoop:
    """Ask the generator for JSON until the output satisfies a validator."""

    def __init__(
        self,
        generator: Generator,
        *,
        attempt_timeout: float = DEFAULT_ATTEMPT_TIMEOUT,
        strip_fences: bool = True,
    ) -> None:
        self.generator = generator
        self.attempt_timeout = attempt_timeout
        self.strip_fences = strip_fences

    async def generate(
        self,
        prompt: str,
        validator: Validator,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> Any:
        """Return the first generated value that passes the validator.

        Args:
            prompt: Rendered user prompt (see prompts.build_prompt).
            validator: Compiled shape validator.
            max_retries: Retries allowed after the first attempt, so at most
                max_retries + 1 generator calls are made.

        Raises:
            GenerationExhausted: Every attempt failed. Carries the last
                failure and the full attempt history.
        """
        if max_retries < 0:
            raise ValueError(f"max_retries must be non-negative, got {max_retries}")

        messages = build_messages(prompt)
        attempts: list[GenerationAttempt] = []
        retries_left = max_retries

        while True:
            attempt = await self._attempt(len(attempts) + 1, prompt, messages, validator)
            attempts.append(attempt)

            if attempt.succeeded:
                logger.info(
                    f"Generation succeeded on attempt {attempt.number} "
                    f"({attempt.latency_ms:.0f}ms)"
                )
                return attempt.value

            if retries_left == 0:
                logger.error(
                    f"Generation exhausted after {len(attempts)} attempts: {attempt.error}"
                )
                raise GenerationExhausted(attempt.error, attempts)

            logger.warning(
                f"Attempt {attempt.number} failed ({type(attempt.error).__name__}: "
                f"{attempt.error}); retrying, {retries_left} retries left"
            )
            retries_left -= 1

    async def _attempt(
        self,
        number: int,
        prompt: str,
        messages: list[dict[str, str]],
        validator: Validator,
    ) -> GenerationAttempt:
        attempt = GenerationAttempt(number=number, prompt=prompt)
        start_time = time.perf_counter()
        try:
            attempt.raw = await self._submit(messages)
            logger.debug(f"Attempt {number} raw output: {attempt.raw[:500]}")
            decoded = decode_json(attempt.raw, strip_fences=self.strip_fences)
            attempt.value = validator.check(decoded)
        except AttemptFailure as e:
            attempt.error = e
        attempt.latency_ms = (time.perf_counter() - start_time) * 1000
        return attempt

    async def _submit(self, messages: list[dict[str, str]]) -> str:
        # CancelledError is not an Exception subclass and propagates untouched
        try:
            return await asyncio.wait_for(
                self.generator.submit(messages), timeout=self.attempt_timeout
            )
        except asyncio.TimeoutError as e:
            raise GeneratorTransportFailure(
                f"timed out after {self.attempt_timeout}s"
            ) from e
        except GeneratorTransportFailure:
            raise
        except Exception as e:
            raise GeneratorTransportFailure(f"{type(e).__name__}: {e}") from e
