"""Classify raw schema nodes into a closed set of shapes.

An OpenAPI schema has no single discriminant field: whether a node is an
enumeration, an interface, an open map or a composition depends on which of
several optional keys it carries (``x-enum-values``, ``properties``,
``x-dictionary-key``, ``allOf``, ``type``). :func:`classify_schema` probes
those keys once, in a fixed order, and returns one of the shape models
below. The type resolver and the namespace renderer dispatch on the
``kind`` tag instead of re-probing the dict.

Shapes::

    reference     {"$ref": ...}
    enum          x-enum-values list (platform extension)
    dictionary    type object + x-dictionary-key (platform extension)
    composed      type object + non-empty allOf
    object        type object + properties
    array         type array
    primitive     integer / number / string / boolean (+ legacy int32/int64)
    unresolvable  anything else
"""

from __future__ import annotations

import enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

PRIMITIVE_TYPES = frozenset({"integer", "number", "string", "boolean", "int32", "int64"})


class SchemaKind(str, enum.Enum):
    REFERENCE = "reference"
    ENUM = "enum"
    DICTIONARY = "dictionary"
    COMPOSED = "composed"
    OBJECT = "object"
    ARRAY = "array"
    PRIMITIVE = "primitive"
    UNRESOLVABLE = "unresolvable"


class _Shape(BaseModel):
    description: Optional[str] = None
    nullable: bool = False


class ReferenceShape(_Shape):
    kind: SchemaKind = SchemaKind.REFERENCE
    ref: str


class EnumValue(BaseModel):
    """One constant of an ``x-enum-values`` table."""

    identifier: str
    numeric_value: Any = Field(default=None, alias="numericValue")
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


class EnumShape(_Shape):
    kind: SchemaKind = SchemaKind.ENUM
    type: Optional[str] = None
    format: Optional[str] = None
    values: list[EnumValue] = Field(default_factory=list)


class DictionaryShape(_Shape):
    kind: SchemaKind = SchemaKind.DICTIONARY
    key: Any = None
    value: Any = None


class ComposedShape(_Shape):
    kind: SchemaKind = SchemaKind.COMPOSED
    members: list[Any] = Field(default_factory=list)


class ObjectShape(_Shape):
    kind: SchemaKind = SchemaKind.OBJECT
    properties: dict[str, Any] = Field(default_factory=dict)


class ArrayShape(_Shape):
    kind: SchemaKind = SchemaKind.ARRAY
    items: Any = None


class PrimitiveShape(_Shape):
    kind: SchemaKind = SchemaKind.PRIMITIVE
    type: str
    format: Optional[str] = None


class UnresolvableShape(_Shape):
    kind: SchemaKind = SchemaKind.UNRESOLVABLE
    reason: str


SchemaShape = Union[
    ReferenceShape,
    EnumShape,
    DictionaryShape,
    ComposedShape,
    ObjectShape,
    ArrayShape,
    PrimitiveShape,
    UnresolvableShape,
]


def classify_schema(node: Any) -> SchemaShape:
    """Classify a raw schema node.

    Args:
        node: A schema dict, a Reference Object, or anything else found where
            a schema was expected (``None`` for a missing node).

    Returns:
        Exactly one shape model; never raises.
    """
    if not isinstance(node, dict):
        return UnresolvableShape(reason=f"not a schema object: {node!r}")

    description = node.get("description") if isinstance(node.get("description"), str) else None
    common = {"description": description, "nullable": bool(node.get("nullable", False))}

    ref = node.get("$ref")
    if isinstance(ref, str):
        return ReferenceShape(ref=ref, **common)

    schema_type = node.get("type")
    schema_format = node.get("format") if isinstance(node.get("format"), str) else None

    enum_values = node.get("x-enum-values")
    if isinstance(enum_values, list):
        return EnumShape(
            type=schema_type if isinstance(schema_type, str) else None,
            format=schema_format,
            values=[
                EnumValue.model_validate(v)
                for v in enum_values
                if isinstance(v, dict) and "identifier" in v
            ],
            **common,
        )

    if schema_type == "object":
        if "x-dictionary-key" in node:
            return DictionaryShape(
                key=node.get("x-dictionary-key"),
                value=node.get("additionalProperties"),
                **common,
            )
        all_of = node.get("allOf")
        if isinstance(all_of, list) and all_of:
            return ComposedShape(members=all_of, **common)
        properties = node.get("properties")
        if isinstance(properties, dict):
            return ObjectShape(properties=properties, **common)
        return UnresolvableShape(reason="object without properties", **common)

    if schema_type == "array":
        return ArrayShape(items=node.get("items"), **common)

    if isinstance(schema_type, str) and schema_type in PRIMITIVE_TYPES:
        return PrimitiveShape(type=schema_type, format=schema_format, **common)

    return UnresolvableShape(reason=f"unknown type {schema_type!r}", **common)


def classify_declaration(node: Any) -> SchemaShape:
    """Classify a component schema for its top-level declaration.

    Declarations probe in a different order than type expressions: an
    object that lists ``properties`` is an interface even when it also
    carries ``allOf`` or ``x-dictionary-key``, and a dictionary needs both
    ``x-dictionary-key`` and ``additionalProperties``. Everything else falls
    through to :func:`classify_schema`.
    """
    if not isinstance(node, dict) or "$ref" in node or isinstance(node.get("x-enum-values"), list):
        return classify_schema(node)

    if node.get("type") == "object":
        description = node.get("description") if isinstance(node.get("description"), str) else None
        common = {"description": description, "nullable": bool(node.get("nullable", False))}
        properties = node.get("properties")
        if isinstance(properties, dict):
            return ObjectShape(properties=properties, **common)
        key = node.get("x-dictionary-key")
        value = node.get("additionalProperties")
        if isinstance(key, dict) and isinstance(value, dict):
            return DictionaryShape(key=key, value=value, **common)

    return classify_schema(node)
