"""Extract the generator's view of an OpenAPI document.

Unlike a client that inlines every ``$ref``, the generator needs the
references intact: each one becomes an ``import`` in the emitted TypeScript.
:func:`extract_spec` therefore only lifts the sections both passes read
(``info``, ``paths`` and the ``components`` maps) into a
:class:`~bungiegen.models.ParsedSpec` and leaves every node untouched.

:func:`extract_parameters` turns an operation's raw parameter list into
:class:`~bungiegen.models.APIParameter` models, dereferencing
``#/components/parameters/...`` entries one hop first.
"""

from __future__ import annotations

from typing import Any

from bungiegen.diagnostics import Diagnostics
from bungiegen.models import APIInfo, APIParameter, ParameterLocation, ParsedSpec
from bungiegen.parser.resolver import is_reference, resolve_reference


def extract_spec(raw_spec: dict[str, Any], openapi_version: str) -> ParsedSpec:
    """Extract a :class:`~bungiegen.models.ParsedSpec` from a raw OpenAPI dict.

    Args:
        raw_spec: The raw OpenAPI spec dictionary as returned by
            :func:`~bungiegen.parser.loader.load_spec`.
        openapi_version: The validated OpenAPI version string, as returned by
            :func:`~bungiegen.parser.loader.validate_openapi_version`.

    Returns:
        A :class:`~bungiegen.models.ParsedSpec` sharing its nodes with
        *raw_spec*.

    Example::

        raw = load_spec("openapi.json")
        parsed = extract_spec(raw, validate_openapi_version(raw))
        print(len(parsed.schemas), "schemas")
    """
    components = _mapping(raw_spec.get("components"))
    return ParsedSpec(
        info=_extract_info(raw_spec),
        openapi_version=openapi_version,
        paths=_mapping(raw_spec.get("paths")),
        schemas=_mapping(components.get("schemas")),
        responses=_mapping(components.get("responses")),
        parameters=_mapping(components.get("parameters")),
        raw_spec=raw_spec,
    )


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _extract_info(spec: dict[str, Any]) -> APIInfo:
    info = _mapping(spec.get("info"))
    return APIInfo(
        title=str(info.get("title", "Untitled API")),
        version=str(info.get("version", "0.0.0")),
        description=info.get("description"),
    )


def extract_parameters(
    spec: ParsedSpec,
    raw_parameters: Any,
    diagnostics: Diagnostics,
    location: str = "",
) -> list[APIParameter]:
    """Convert a raw parameter list into :class:`~bungiegen.models.APIParameter` models.

    Parameter references are dereferenced one hop. Entries that cannot be
    resolved, or that declare an unknown ``in`` location, are reported and
    dropped.

    Args:
        spec: The parsed spec the references are resolved against.
        raw_parameters: The ``parameters`` array of an operation or path item.
        diagnostics: Receives a warning for every dropped entry.
        location: Context prefix for the diagnostics (e.g. ``Trending.GetTrendingCategory``).

    Returns:
        The parameters in declaration order.
    """
    if not isinstance(raw_parameters, list):
        return []

    parameters: list[APIParameter] = []
    for raw in raw_parameters:
        param = raw
        if is_reference(raw):
            param = resolve_reference(spec.raw_spec, raw)
        if not isinstance(param, dict) or "name" not in param:
            diagnostics.warn(location, f"Unable to resolve parameter {raw!r}")
            continue

        try:
            param_location = ParameterLocation(param.get("in", "query"))
        except ValueError:
            diagnostics.warn(
                location, f"Parameter {param['name']} has unknown location {param.get('in')!r}"
            )
            continue

        schema = param.get("schema")
        parameters.append(
            APIParameter(
                name=param["name"],
                location=param_location,
                required=bool(param.get("required", False)),
                description=param.get("description"),
                schema=schema if isinstance(schema, dict) else None,
            )
        )

    return parameters
