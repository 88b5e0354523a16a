"""Error types raised while compiling shapes and generating structured output.

Compilation and envelope errors are caller defects and are surfaced at once.
AttemptFailure subclasses are generator noise and feed the retry loop.
"""

from typing import Any


class StructifyError(Exception):
    """Base class for all errors raised by the service."""


class EnvelopeInvalid(StructifyError):
    """The inbound request body does not match {data: str, format: mapping}."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("Invalid request body: " + "; ".join(errors))


# ---------------------------------------------------------------------------
# Shape compilation
# ---------------------------------------------------------------------------


class ShapeCompilationError(StructifyError):
    """A shape description could not be compiled into a validator."""

    def __init__(self, message: str, path: str) -> None:
        self.path = path
        super().__init__(f"{message} (at {path})")


class UnsupportedShapeKind(ShapeCompilationError):
    def __init__(self, kind: Any, path: str) -> None:
        self.kind = kind
        super().__init__(
            f"Unsupported shape kind {kind!r}; expected one of "
            "string, number, boolean, object, array",
            path,
        )


class MissingItemsDescriptor(ShapeCompilationError):
    def __init__(self, path: str) -> None:
        super().__init__("Array shape is missing its 'items' descriptor", path)


class ShapeTooDeep(ShapeCompilationError):
    def __init__(self, max_depth: int, path: str) -> None:
        self.max_depth = max_depth
        super().__init__(f"Shape nesting exceeds the maximum depth of {max_depth}", path)


# ---------------------------------------------------------------------------
# Generation attempts
# ---------------------------------------------------------------------------


class AttemptFailure(StructifyError):
    """One generator round-trip failed. Retried by the generation loop."""


class DecodeFailure(AttemptFailure):
    """Generator text is not valid JSON."""

    def __init__(self, raw: str, reason: str) -> None:
        self.raw = raw
        self.reason = reason
        preview = raw[:100] + "..." if len(raw) > 100 else raw
        super().__init__(f"Invalid JSON ({reason}): {preview!r}")


class ShapeMismatch(AttemptFailure):
    """Decoded JSON does not satisfy the compiled validator."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        if len(errors) == 1:
            summary = errors[0]
        else:
            summary = f"{len(errors)} validation errors: {'; '.join(errors)}"
        super().__init__(summary)


class GeneratorTransportFailure(AttemptFailure):
    """The generator call raised or timed out."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Generator call failed: {reason}")


class GenerationExhausted(StructifyError):
    """Every attempt failed. Wraps the last attempt failure."""

    def __init__(self, last_error: AttemptFailure, attempts: list | None = None) -> None:
        self.last_error = last_error
        self.attempts = attempts or []
        super().__init__(
            f"All {len(self.attempts)} generation attempts failed. Last error: {last_error}"
        )
