"""Prompts for the JSON extraction generator.

Separates prompt construction from the retry loop. The generator sees a
system instruction, one worked example (user prompt + assistant answer) and
then the real prompt built from the request.
"""

import json
from typing import Any


SYSTEM_PROMPT = """You are an AI that converts unstructured data into the attached JSON format.

You respond with nothing but valid JSON based on the input data.
Your output should DIRECTLY be valid JSON. Do not add any text before or after the JSON.
Begin your answer with { and end it with }.
Include every field of the expected format.
If you cannot determine the value of a field from the data, use null for that field."""


def build_prompt(data: str, format: dict[str, Any]) -> str:
    """Render the user prompt for one extraction request.

    Args:
        data: Free-form unstructured text.
        format: Raw shape description, rendered verbatim as pretty JSON.

    Returns:
        Prompt text separating the data from the expected JSON format.
    """
    expected = json.dumps(format, indent=2)
    return (
        f'DATA: \n"{data}"\n\n'
        f"-----------\nExpected JSON format: {expected}\n\n"
        f"-----------\nValid JSON output in expected format:"
    )


EXAMPLE_DATA = "John is 25 years old and studies computer science at university"

EXAMPLE_FORMAT: dict[str, Any] = {
    "name": {"type": "string"},
    "age": {"type": "number"},
    "isStudent": {"type": "boolean"},
    "courses": {
        "type": "array",
        "items": {"type": "string"},
    },
}

EXAMPLE_PROMPT = build_prompt(EXAMPLE_DATA, EXAMPLE_FORMAT)

EXAMPLE_ANSWER = json.dumps(
    {
        "name": "John",
        "age": 25,
        "isStudent": True,
        "courses": ["computer science"],
    },
    indent=2,
)


def build_messages(prompt: str) -> list[dict[str, str]]:
    """Wrap a rendered prompt with the system instruction and few-shot example."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": EXAMPLE_PROMPT},
        {"role": "assistant", "content": EXAMPLE_ANSWER},
        {"role": "user", "content": prompt},
    ]
