"""Test data for shape compilation and generation tests.

The student example mirrors the few-shot example the generator is primed
with; ScriptedGenerator stands in for the LiteLLM generator.
"""

import asyncio

# ---------------------------------------------------------------------------
# Shared constants
# ---------------------------------------------------------------------------
STUDENT_DATA = "John is 25 years old and studies computer science at university"

STUDENT_FORMAT = {
    "name": {"type": "string"},
    "age": {"type": "number"},
    "isStudent": {"type": "boolean"},
    "courses": {"type": "array", "items": {"type": "string"}},
}

STUDENT_ANSWER = {
    "name": "John",
    "age": 25,
    "isStudent": True,
    "courses": ["computer science"],
}


class ScriptedGenerator:
    """Generator stub that replays a fixed script of responses.

    Each entry is either the completion text to return or an exception to
    raise. The last entry repeats once the script runs out.
    """

    def __init__(self, script: list, delay: float = 0.0):
        self.script = list(script)
        self.delay = delay
        self.calls: list[list[dict[str, str]]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def submit(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        if self.delay:
            await asyncio.sleep(self.delay)
        entry = self.script[min(len(self.calls), len(self.script)) - 1]
        if isinstance(entry, BaseException):
            raise entry
        return entry
