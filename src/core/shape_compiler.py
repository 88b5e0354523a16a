"""Compile JSON shape descriptions into pydantic-backed validators.

A shape description is untyped decoded JSON such as::

    {
        "name": {"type": "string"},
        "age": {"type": "number"},
        "courses": {"type": "array", "items": {"type": "string"}},
    }

Compilation happens in two steps:

1. decode_shape_node() turns the raw description into a ShapeNode tree
   (Primitive / ObjectShape / ArrayShape). All of the irregular inference
   rules live here.
2. build_validator() turns the ShapeNode tree into a pydantic type tree.
   Objects become create_model() classes whose fields are aliased to the
   exact JSON key, so any key (including ones that are not Python
   identifiers) can be modeled.
"""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Annotated, Any, Mapping, Optional, Union

from pydantic import (
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    create_model,
)

from .errors import MissingItemsDescriptor, ShapeMismatch, ShapeTooDeep, UnsupportedShapeKind

logger = logging.getLogger(__name__)

# Reserved keys in a raw shape description
TYPE_KEY = "type"
ITEMS_KEY = "items"

PRIMITIVE_KINDS = ("string", "number", "boolean")
SUPPORTED_KINDS = PRIMITIVE_KINDS + ("object", "array")

DEFAULT_MAX_DEPTH = 32


# ---------------------------------------------------------------------------
# ShapeNode
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Primitive:
    """Leaf shape: string, number or boolean."""

    kind: str


@dataclass(frozen=True)
class ObjectShape:
    """Named child shapes. Field order is irrelevant."""

    fields: Mapping[str, "ShapeNode"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only view over a private copy
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))


@dataclass(frozen=True)
class ArrayShape:
    """Homogeneous sequence sharing one item shape."""

    items: "ShapeNode"


ShapeNode = Union[Primitive, ObjectShape, ArrayShape]


def infer_kind(raw: Any) -> Any:
    """Return the kind a raw node names or implies.

    An explicit ``type`` key wins. Otherwise the node's own runtime type is
    used, so a bare example value such as ``"Ann"`` describes a string leaf
    and a mapping without ``type`` describes an object.
    """
    if isinstance(raw, Mapping) and TYPE_KEY in raw:
        return raw[TYPE_KEY]
    if isinstance(raw, list):
        return "array"
    if isinstance(raw, Mapping):
        return "object"
    if isinstance(raw, str):
        return "string"
    # bool is a subclass of int, check it first
    if isinstance(raw, bool):
        return "boolean"
    if isinstance(raw, (int, float)):
        return "number"
    if raw is None:
        return "null"
    return type(raw).__name__


def decode_shape_node(raw: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> ShapeNode:
    """Decode a raw shape description into a ShapeNode tree.

    Args:
        raw: Untyped decoded JSON describing the expected shape.
        max_depth: Maximum nesting depth accepted. The description comes from
            the caller, so it is bounded.

    Returns:
        The root ShapeNode.

    Raises:
        UnsupportedShapeKind: A node names or implies a kind outside
            string/number/boolean/object/array.
        MissingItemsDescriptor: An array node has no ``items`` child.
        ShapeTooDeep: Nesting exceeds max_depth.
    """
    return _decode(raw, "$", 0, max_depth)


def _decode(raw: Any, path: str, depth: int, max_depth: int) -> ShapeNode:
    if depth > max_depth:
        raise ShapeTooDeep(max_depth, path)

    kind = infer_kind(raw)
    if kind not in SUPPORTED_KINDS:
        raise UnsupportedShapeKind(kind, path)

    if kind in PRIMITIVE_KINDS:
        return Primitive(kind)

    if kind == "array":
        if not isinstance(raw, Mapping) or ITEMS_KEY not in raw:
            raise MissingItemsDescriptor(path)
        items = _decode(raw[ITEMS_KEY], f"{path}.{ITEMS_KEY}", depth + 1, max_depth)
        return ArrayShape(items)

    fields: dict[str, ShapeNode] = {}
    for key, value in raw.items():
        if key == TYPE_KEY:
            continue
        fields[key] = _decode(value, f"{path}.{key}", depth + 1, max_depth)
    return ObjectShape(fields)


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------

_PRIMITIVE_TYPES: dict[str, Any] = {
    "string": StrictStr,
    # Booleans are rejected by StrictInt, integers stay integers
    # NaN and infinities have no JSON encoding
    "number": Union[StrictInt, Annotated[float, Field(strict=True, allow_inf_nan=False)]],
    "boolean": StrictBool,
}

# Unknown keys in a candidate value are dropped from the validated result
_OBJECT_CONFIG = ConfigDict(extra="ignore")

_NON_NAME_RE = re.compile(r"[^0-9a-zA-Z]+")


def _model_name(path: str) -> str:
    parts = [p for p in _NON_NAME_RE.split(path) if p]
    return "Shape" + "".join(p[:1].upper() + p[1:] for p in parts)


def _build_type(node: ShapeNode, path: str) -> Any:
    if isinstance(node, Primitive):
        return Optional[_PRIMITIVE_TYPES[node.kind]]

    if isinstance(node, ArrayShape):
        item_type = _build_type(node.items, f"{path}.{ITEMS_KEY}")
        return Optional[list[item_type]]

    field_definitions: dict[str, Any] = {}
    for index, (key, child) in enumerate(node.fields.items()):
        child_type = _build_type(child, f"{path}.{key}")
        # Python-safe attribute name, exact JSON key as alias
        field_definitions[f"field_{index}"] = (child_type, Field(..., alias=key))

    return create_model(_model_name(path), __config__=_OBJECT_CONFIG, **field_definitions)


def _format_errors(error: ValidationError) -> list[str]:
    messages = []
    for err in error.errors():
        location = ".".join(["$", *(str(part) for part in err["loc"])])
        messages.append(f"{location}: {err['msg']}")
    return messages


class Validator:
    """Executable check for one compiled shape.

    Holds no mutable state; the same instance can be reused across attempts
    and across concurrent tasks.
    """

    def __init__(self, shape: ShapeNode) -> None:
        self.shape = shape
        self._adapter = TypeAdapter(_build_type(shape, "$"))

    def check(self, value: Any) -> Any:
        """Validate a decoded JSON value and return the coerced JSON value.

        Raises:
            ShapeMismatch: The value does not satisfy the shape.
        """
        try:
            validated = self._adapter.validate_python(value)
        except ValidationError as e:
            raise ShapeMismatch(_format_errors(e)) from e
        except RecursionError as e:
            raise ShapeMismatch(["$: value is nested too deeply"]) from e
        return self._adapter.dump_python(validated, mode="json", by_alias=True)

    def is_valid(self, value: Any) -> bool:
        try:
            self.check(value)
        except ShapeMismatch:
            return False
        return True

    def __repr__(self) -> str:
        return f"Validator({self.shape!r})"


def build_validator(node: ShapeNode) -> Validator:
    """Compile an already decoded ShapeNode."""
    return Validator(node)


def compile_shape(raw: Any, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Validator:
    """Compile a raw shape description into a Validator.

    Fails before any generator call is made if the description is unusable.
    """
    node = decode_shape_node(raw, max_depth=max_depth)
    logger.debug(f"Compiled shape: {node!r}")
    return build_validator(node)
