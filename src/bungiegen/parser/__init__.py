"""OpenAPI spec parser -- load the document, resolve ``$ref`` pointers, classify schemas.

This sub-package is responsible for the first half of the bungiegen pipeline:
turning the raw OpenAPI 3.x document (JSON or YAML, local file or remote URL)
into a :class:`~bungiegen.models.ParsedSpec` that both generator passes read.

Typical usage::

    from bungiegen.parser import load_spec, validate_openapi_version, extract_spec

    raw = load_spec("https://raw.githubusercontent.com/Bungie-net/api/master/openapi.json")
    version = validate_openapi_version(raw)
    parsed = extract_spec(raw, version)

Sub-modules:

* :mod:`~bungiegen.parser.loader` -- I/O layer (URL, file, stdin) plus format
  detection and OpenAPI version validation.
* :mod:`~bungiegen.parser.resolver` -- One-hop ``$ref`` resolution.
* :mod:`~bungiegen.parser.schemas` -- Classification of schema nodes into a
  closed set of shapes.
* :mod:`~bungiegen.parser.extractor` -- Builds the
  :class:`~bungiegen.models.ParsedSpec` and operation parameter models.
"""

from bungiegen.parser.extractor import extract_parameters, extract_spec
from bungiegen.parser.loader import load_spec, validate_openapi_version
from bungiegen.parser.resolver import is_reference, reference_name, resolve_reference
from bungiegen.parser.schemas import SchemaKind, classify_declaration, classify_schema

__all__ = [
    "load_spec",
    "validate_openapi_version",
    "extract_spec",
    "extract_parameters",
    "is_reference",
    "reference_name",
    "resolve_reference",
    "SchemaKind",
    "classify_declaration",
    "classify_schema",
]
