"""Pydantic models for request/response payloads."""


from .requests import (
    JsonExtractionRequest,
    parse_envelope,
)
from .responses import (
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "JsonExtractionRequest",
    "parse_envelope",
    "ErrorResponse",
    "HealthResponse",
]
