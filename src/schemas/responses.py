from pydantic import BaseModel, Field
from typing import Literal


class ErrorResponse(BaseModel):
    """Error body for a failed /api/json request."""

    error: str = Field(..., description="Error type name")
    detail: str = Field(..., description="Human-readable error message")
    attempts: int | None = Field(
        default=None,
        description="Generator attempts made before giving up",
    )


class HealthResponse(BaseModel):
    """Response payload for GET /health."""

    status: Literal["healthy"] = "healthy"
    version: str
    model: str
