"""FastAPI application for Structify.

Turns unstructured text into JSON matching a caller-supplied shape.

Run locally:  uvicorn src.main:app --reload
Run on Modal: modal serve modal_app.py (or modal deploy modal_app.py)
"""

import logging
from typing import Any

from fastapi import Body, Depends, FastAPI
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import settings
from .core import (
    EnvelopeInvalid,
    GenerationExhausted,
    GenerationLoop,
    Generator,
    ShapeCompilationError,
    StructifyError,
    build_prompt,
    compile_shape,
)
from .schemas import ErrorResponse, HealthResponse, parse_envelope
from .services import get_generator

__version__ = "0.1.0"

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Structify",
    description="Coerce unstructured text into a caller-specified JSON shape",
    version=__version__,
)


def _error_response(status_code: int, error: StructifyError, attempts: int | None = None) -> JSONResponse:
    body = ErrorResponse(error=type(error).__name__, detail=str(error), attempts=attempts)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.get("/", response_class=PlainTextResponse)
async def hello() -> str:
    return "Hello, world!"


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(version=__version__, model=settings.model)


@app.post(
    "/api/json",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid envelope or shape description"},
        500: {"model": ErrorResponse, "description": "Generator never produced valid output"},
    },
)
async def extract_json(
    body: Any = Body(...),
    generator: Generator = Depends(get_generator),
) -> JSONResponse:
    """
    Extract structured JSON from free-form text.

    Body: {"data": "<text>", "format": {<shape description>}}

    The shape is compiled before any generator call; the generator is then
    retried up to `max_retries` times until its output matches the shape.
    """
    try:
        request = parse_envelope(body)
        validator = compile_shape(request.format, max_depth=settings.max_shape_depth)
    except (EnvelopeInvalid, ShapeCompilationError) as e:
        logger.info(f"Rejected request: {e}")
        return _error_response(400, e)

    loop = GenerationLoop(
        generator,
        attempt_timeout=settings.attempt_timeout,
        strip_fences=settings.strip_code_fences,
    )
    prompt = build_prompt(request.data, request.format)

    try:
        result = await loop.generate(prompt, validator, max_retries=settings.max_retries)
    except GenerationExhausted as e:
        return _error_response(500, e, attempts=len(e.attempts))

    return JSONResponse(status_code=200, content=result)
