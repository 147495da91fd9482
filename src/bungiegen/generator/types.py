"""Map OpenAPI schema nodes to TypeScript type expressions.

:class:`TypeResolver` is shared by the namespace pass (interface fields,
dictionary classes) and the module pass (parameter and return types). It
never inlines a referenced schema: a ``$ref`` becomes the bare symbol name,
and the caller learns about it through the ``on_reference`` callback so that
it can record the matching ``import`` (and, if it needs to, spell the name
itself).

Whenever a node cannot be expressed exactly, the resolver degrades instead
of failing (``any`` for unknown nodes, a permissive key type for
dictionaries keyed by something other than ``string`` or ``number``) and
records a warning in the shared :class:`~bungiegen.diagnostics.Diagnostics`.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from bungiegen.diagnostics import Diagnostics
from bungiegen.models import ParsedSpec
from bungiegen.parser.resolver import is_reference, reference_name
from bungiegen.parser.schemas import (
    ArrayShape,
    ComposedShape,
    DictionaryShape,
    EnumShape,
    PrimitiveShape,
    ReferenceShape,
    classify_schema,
)

ReferenceCallback = Callable[[dict[str, Any]], Optional[str]]

INDEX_KEY_TYPES = frozenset({"string", "number"})
PERMISSIVE_KEY_TYPE = "string | number"
ENUM_KEY_TYPE = "number"
FALLBACK_TYPE = "any"


def primitive_type(schema_type: Optional[str], schema_format: Optional[str]) -> Optional[str]:
    """Return the TypeScript spelling of a primitive OpenAPI type, or ``None``.

    64-bit integers do not fit a JavaScript number and travel as strings.
    """
    if schema_type == "integer":
        return "string" if "int64" in (schema_format or "") else "number"
    if schema_type == "int64":
        return "string"
    if schema_type == "int32":
        return "number"
    if schema_type in ("number", "string", "boolean"):
        return schema_type
    return None


class TypeResolver:
    """Resolve schema nodes of one document to TypeScript type expressions.

    Args:
        spec: The document references are resolved against.
        diagnostics: Receives a warning for every degraded type.
    """

    def __init__(self, spec: ParsedSpec, diagnostics: Diagnostics) -> None:
        self.spec = spec
        self.diagnostics = diagnostics

    def resolve(
        self,
        node: Any,
        on_reference: Optional[ReferenceCallback] = None,
        location: str = "",
    ) -> str:
        """Return the TypeScript type of *node*.

        Args:
            node: A schema dict, a Reference Object, or ``None``.
            on_reference: Called once with every Reference Object met while
                resolving, including those nested in arrays, dictionary
                values and ``allOf`` members. A string it returns replaces
                the bare symbol name in the expression.
            location: Context prefix for the diagnostics.

        Returns:
            A type expression such as ``number``, ``DestinyClass[]`` or
            ``{[field: number]: DestinyItemComponent}``.
        """
        shape = classify_schema(node)

        if isinstance(shape, ReferenceShape):
            spelled = on_reference(node) if on_reference is not None else None
            return spelled if spelled is not None else reference_name(shape.ref)

        if isinstance(shape, (PrimitiveShape, EnumShape)):
            resolved = primitive_type(shape.type, shape.format)
            if resolved is not None:
                return resolved

        elif isinstance(shape, ArrayShape):
            return f"{self.resolve(shape.items, on_reference, location)}[]"

        elif isinstance(shape, DictionaryShape):
            value_type = self.resolve(shape.value, on_reference, location)
            key_type = self.dictionary_key(shape.key, location)
            return f"{{[field: {key_type}]: {value_type}}}"

        elif isinstance(shape, ComposedShape):
            return " & ".join(
                self.resolve(member, on_reference, location) for member in shape.members
            )

        self.diagnostics.warn(location, f"Unable to resolve type of {_describe(node)}")
        return FALLBACK_TYPE

    def dictionary_key(self, key_node: Any, location: str = "") -> str:
        """Return a valid index-signature key type for a dictionary key schema.

        TypeScript only accepts ``string`` and ``number`` index signatures.
        Keys typed by an enumeration are integers on the wire, so they become
        ``number``; any other key type widens to ``string | number``. Neither
        rewrite needs an import, so references in the key are not reported.
        """
        key_type = self.resolve(key_node, None, location)
        if key_type in INDEX_KEY_TYPES:
            return key_type

        if is_reference(key_node):
            target = self.spec.resolve(key_node)
            if isinstance(target, dict) and isinstance(target.get("x-enum-values"), list):
                self.diagnostics.warn(
                    location,
                    f"Dictionary key type {key_type} rewritten to {ENUM_KEY_TYPE}",
                )
                return ENUM_KEY_TYPE

        self.diagnostics.warn(
            location,
            f"Dictionary key type {key_type} is not a number or string",
        )
        return PERMISSIVE_KEY_TYPE


def _describe(node: Any) -> str:
    if isinstance(node, dict):
        schema_type = node.get("type")
        return f"schema of type {schema_type!r}" if schema_type else "untyped schema"
    return repr(node)
