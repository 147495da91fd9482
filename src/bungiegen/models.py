"""Canonical Pydantic models shared across all bungiegen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Configuration models** -- loaded from ``./bungiegen.json`` and overridden by
environment variables and CLI flags:
    :class:`GeneratorConfig`.

**Parser output models** -- produced by the spec loader and extractor and
consumed by both generator passes:
    :class:`HTTPMethod`, :class:`ParameterLocation`, :class:`APIParameter`,
    :class:`APIInfo`, and :class:`ParsedSpec`.

**Generator models** -- the intermediate records of the module pass:
    :class:`OperationRecord` and :class:`ModuleDefinition`.

Schema nodes themselves stay plain dicts; they are classified on demand by
:func:`~bungiegen.parser.schemas.classify_schema`.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SPEC_URL = "https://raw.githubusercontent.com/Bungie-net/api/master/openapi.json"
"""Location of the platform API's published OpenAPI document."""


# --- Generator Config ---


class GeneratorConfig(BaseModel):
    """Effective configuration for a single generator run.

    Resolved by :func:`~bungiegen.config.resolve_config` from CLI flags,
    environment variables, the project file and the defaults below.

    Example::

        GeneratorConfig(spec="openapi.json", output_dir="client/src")
    """

    model_config = ConfigDict(extra="forbid")

    spec: str = Field(
        default=DEFAULT_SPEC_URL,
        description="URL, file path or '-' (stdin) of the OpenAPI document",
    )
    output_dir: str = Field(
        default="src", description="Root directory of the generated source tree"
    )
    indent: str = Field(
        default="\t", description="Indentation unit used by the code writer"
    )
    module_import: str = Field(
        default="../module",
        description="Import specifier of the runtime Module base class",
    )


# --- Parser Output Models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods a generated module method can delegate to.

    Listed in lookup precedence: a path item's ``get`` operation wins over
    ``post``, which wins over ``put``.
    """

    GET = "get"
    POST = "post"
    PUT = "put"


class ParameterLocation(str, enum.Enum):
    """Locations where an API parameter can appear, per OpenAPI ``in`` field."""

    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class APIParameter(BaseModel):
    """A single operation parameter after one-hop reference resolution.

    ``schema_`` keeps the raw schema node (possibly a ``$ref`` dict) so the
    type resolver can record imports for it.
    """

    name: str
    location: ParameterLocation
    required: bool = False
    description: Optional[str] = None
    schema_: Optional[dict[str, Any]] = Field(default=None, alias="schema")

    model_config = {"populate_by_name": True}


class APIInfo(BaseModel):
    """API metadata extracted from the OpenAPI spec's *Info Object*."""

    title: str
    version: str
    description: Optional[str] = None


class ParsedSpec(BaseModel):
    """The subset of an OpenAPI document both generator passes read.

    The component maps and ``paths`` are the raw dicts from the document,
    references included. ``raw_spec`` is the whole document and is the root
    every ``$ref`` is resolved against.

    See Also:
        :func:`~bungiegen.parser.extractor.extract_spec`: Builds this model.
        :func:`~bungiegen.parser.resolver.resolve_reference`: One-hop lookup.
    """

    info: APIInfo
    openapi_version: str = Field(
        description="Original OpenAPI version string (e.g., '3.0.1')"
    )
    paths: dict[str, Any] = Field(default_factory=dict)
    schemas: dict[str, Any] = Field(default_factory=dict)
    responses: dict[str, Any] = Field(default_factory=dict)
    parameters: dict[str, Any] = Field(default_factory=dict)
    raw_spec: dict[str, Any] = Field(default_factory=dict)

    def resolve(self, reference: Any) -> Any:
        """Resolve *reference* one hop against :attr:`raw_spec`."""
        from bungiegen.parser.resolver import resolve_reference

        return resolve_reference(self.raw_spec, reference)


# --- Generator Models ---


class OperationRecord(BaseModel):
    """One endpoint of a module: a path template plus its chosen operation.

    ``operation`` and ``path_item`` are the raw OpenAPI objects; the module
    renderer resolves parameters and the response from them.
    """

    module: str
    endpoint: str
    path: str
    method: HTTPMethod
    operation: dict[str, Any]
    path_item: dict[str, Any] = Field(default_factory=dict)

    @property
    def description(self) -> Optional[str]:
        """The operation description, falling back to the path item's."""
        return self.operation.get("description") or self.path_item.get("description")


class ModuleDefinition(BaseModel):
    """A generated class grouping every endpoint whose summary shares a prefix."""

    name: str
    operations: list[OperationRecord] = Field(default_factory=list)
