"""Core module for Structify.

Contains the shape compiler and the resilient generation loop.
"""

from .errors import (
    AttemptFailure,
    DecodeFailure,
    EnvelopeInvalid,
    GenerationExhausted,
    GeneratorTransportFailure,
    MissingItemsDescriptor,
    ShapeCompilationError,
    ShapeMismatch,
    ShapeTooDeep,
    StructifyError,
    UnsupportedShapeKind,
)
from .shape_compiler import (
    ArrayShape,
    ObjectShape,
    Primitive,
    ShapeNode,
    Validator,
    build_validator,
    compile_shape,
    decode_shape_node,
    infer_kind,
)
from .generation import (
    GenerationAttempt,
    GenerationLoop,
    Generator,
    decode_json,
    strip_code_fences,
)
from .prompts import (
    EXAMPLE_ANSWER,
    EXAMPLE_PROMPT,
    SYSTEM_PROMPT,
    build_messages,
    build_prompt,
)

__all__ = [
    # Errors
    "StructifyError",
    "EnvelopeInvalid",
    "ShapeCompilationError",
    "UnsupportedShapeKind",
    "MissingItemsDescriptor",
    "ShapeTooDeep",
    "AttemptFailure",
    "DecodeFailure",
    "ShapeMismatch",
    "GeneratorTransportFailure",
    "GenerationExhausted",
    # Shape compiler
    "Primitive",
    "ObjectShape",
    "ArrayShape",
    "ShapeNode",
    "Validator",
    "infer_kind",
    "decode_shape_node",
    "build_validator",
    "compile_shape",
    # Generation loop
    "Generator",
    "GenerationAttempt",
    "GenerationLoop",
    "decode_json",
    "strip_code_fences",
    # Prompts
    "SYSTEM_PROMPT",
    "EXAMPLE_PROMPT",
    "EXAMPLE_ANSWER",
    "build_prompt",
    "build_messages",
]
