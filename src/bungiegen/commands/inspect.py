"""Inspect commands -- examine what the generator will see in the document.

Provides the ``bungiegen inspect`` sub-command group with read-only
commands for viewing the contents of the OpenAPI document: the modules and
endpoints derived from ``paths``, the classified component schemas, and
general API info. Nothing is rendered to disk.
"""

from __future__ import annotations

from typing import Optional

import typer

from bungiegen.diagnostics import Diagnostics, emit
from bungiegen.exceptions import BungiegenError
from bungiegen.models import ParsedSpec
from bungiegen.output import error, format_response, get_output, info


inspect_app = typer.Typer(no_args_is_help=True)


def _load_spec(spec_source: Optional[str] = None) -> ParsedSpec:
    """Resolve the configured document source and load it.

    Args:
        spec_source: Explicit source. When ``None``, the environment, the
            project config or the default URL is used.

    Raises:
        typer.Exit: With the error's exit code when the configuration is
            invalid or the document cannot be loaded.
    """
    from bungiegen.config import resolve_config
    from bungiegen.pipeline import load_parsed_spec

    try:
        config = resolve_config(cli_spec=spec_source)
        return load_parsed_spec(config.spec)
    except BungiegenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


@inspect_app.command("modules")
def inspect_modules(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI document URL or file path."
    ),
) -> None:
    """List the modules and endpoints derived from the document's paths.

    Path items whose summary cannot be split into ``Module.endpoint`` are
    reported as warnings and left out of the table.

    Example::

        bungiegen inspect modules
        bungiegen inspect modules --spec openapi.json
    """
    from bungiegen.generator import build_modules

    parsed = _load_spec(spec)
    diagnostics = Diagnostics()
    modules = build_modules(parsed, diagnostics)
    emit(diagnostics)

    if not modules:
        info("No modules found in this spec.")
        return

    headers = ["Module", "Endpoint", "Method", "Path"]
    rows: list[list[str]] = []
    for module in modules:
        for record in module.operations:
            rows.append([
                module.name,
                record.endpoint,
                record.method.value.upper(),
                record.path,
            ])

    get_output().print_table(
        headers, rows, title=f"{parsed.info.title} -- Modules ({len(modules)})"
    )


@inspect_app.command("schemas")
def inspect_schemas(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI document URL or file path."
    ),
) -> None:
    """List component schemas with the shape the generator classifies them as.

    Shows one row per ``components.schemas`` entry: its name, its kind
    (``enum``, ``object``, ``dictionary``, ...) and the number of members
    (enum values or properties).

    Example::

        bungiegen inspect schemas
    """
    from bungiegen.parser.schemas import EnumShape, ObjectShape, classify_declaration

    parsed = _load_spec(spec)
    if not parsed.schemas:
        info("No schemas defined in this spec.")
        return

    headers = ["Schema", "Kind", "Members"]
    rows: list[list[str]] = []
    for name, schema in parsed.schemas.items():
        shape = classify_declaration(schema)
        members = ""
        if isinstance(shape, EnumShape):
            members = str(len(shape.values))
        elif isinstance(shape, ObjectShape):
            members = str(len(shape.properties))
        rows.append([name, shape.kind.value, members])

    get_output().print_table(headers, rows, title=f"Schemas ({len(rows)})")


@inspect_app.command("info")
def inspect_info(
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI document URL or file path."
    ),
) -> None:
    """Show API info and component counts.

    Example::

        bungiegen inspect info
    """
    parsed = _load_spec(spec)

    data: dict = {
        "title": parsed.info.title,
        "version": parsed.info.version,
        "openapi_version": parsed.openapi_version,
        "description": parsed.info.description or "-",
        "paths": len(parsed.paths),
        "schemas": len(parsed.schemas),
        "responses": len(parsed.responses),
    }

    format_response(data)
