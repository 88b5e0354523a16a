"""Request payloads and envelope parsing."""

from typing import Any
from pydantic import BaseModel, Field, StrictStr, ValidationError

from ..core.errors import EnvelopeInvalid


class JsonExtractionRequest(BaseModel):
    """Request payload for POST /api/json.

    `format` is kept verbatim, including every nested key, because it is the
    input to the shape compiler.
    """

    data: StrictStr = Field(
        ...,
        description="Free-form unstructured text to extract from",
        examples=["John is 25 years old and studies computer science at university"],
    )
    format: dict[str, Any] = Field(
        ...,
        description="Shape description of the expected JSON output",
        examples=[{
            "name": {"type": "string"},
            "age": {"type": "number"},
            "isStudent": {"type": "boolean"},
            "courses": {"type": "array", "items": {"type": "string"}},
        }],
    )


def parse_envelope(body: Any) -> JsonExtractionRequest:
    """Validate a decoded request body.

    Raises:
        EnvelopeInvalid: `data` or `format` is missing or has the wrong type.
    """
    try:
        return JsonExtractionRequest.model_validate(body)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        ]
        raise EnvelopeInvalid(errors) from e
