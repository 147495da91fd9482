"""Resolve ``$ref`` JSON Reference pointers one hop at a time.

The platform's OpenAPI document is heavily cross-referenced, and several
schemas refer to themselves or to each other (item definitions, socket
plugs, ...). The generator never inlines a referenced schema: it emits an
``import`` of the referenced symbol instead. A reference therefore only ever
needs to be dereferenced once, to classify or render the target, so this
module walks a single pointer and stops. No cycle bookkeeping is needed
because nothing recurses through the result.

Only **internal** references (those starting with ``#/``) are meaningful
here; anything else resolves to ``None`` like a dangling pointer.
"""

from __future__ import annotations

from typing import Any

REF_PREFIX = "#/"


def is_reference(value: Any) -> bool:
    """Return ``True`` if *value* is a Reference Object (a dict carrying ``$ref``)."""
    return isinstance(value, dict) and isinstance(value.get("$ref"), str)


def reference_name(reference: Any) -> str:
    """Return the bare symbol a reference points at.

    Component names are dot-qualified (``Destiny.Definitions.DestinyItemDefinition``),
    so the symbol is the last dot segment of the last pointer segment.

    Example::

        >>> reference_name("#/components/schemas/Destiny.DestinyClass")
        'DestinyClass'
    """
    ref = reference["$ref"] if isinstance(reference, dict) else reference
    return ref.split("/")[-1].split(".")[-1]


def resolve_reference(root: dict[str, Any], reference: Any) -> Any:
    """Resolve a single ``$ref`` against the root spec.

    Parses JSON Pointer references like ``#/components/schemas/Destiny.DestinyClass``
    and navigates *root* to locate the referenced value. Handles RFC 6901
    JSON Pointer escaping (``~0`` for ``~``, ``~1`` for ``/``).

    Resolution is a read-only walk: resolving the same reference twice
    returns the very same object.

    Args:
        root: The root spec dictionary to resolve against.
        reference: The ``$ref`` string, or a Reference Object holding one.

    Returns:
        The value found at the referenced path, or ``None`` if the reference
        is external or any segment does not exist.
    """
    ref = reference.get("$ref") if isinstance(reference, dict) else reference
    if not isinstance(ref, str) or not ref.startswith(REF_PREFIX):
        return None

    current: Any = root
    for segment in ref[len(REF_PREFIX):].split("/"):
        segment = segment.replace("~1", "/").replace("~0", "~")

        if isinstance(current, dict):
            if segment not in current:
                return None
            current = current[segment]
        elif isinstance(current, list):
            try:
                current = current[int(segment)]
            except (ValueError, IndexError):
                return None
        else:
            return None

    return current
