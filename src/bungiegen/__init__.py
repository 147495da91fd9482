"""bungiegen -- Generate a TypeScript client from the Bungie.net OpenAPI document.

This package reads the platform API's OpenAPI 3.0 document and writes a
source tree of TypeScript declarations and module classes that mirror it:
``schemas/`` and ``responses/`` hold interfaces, enums and indexable classes
laid out by the dotted component names, and ``modules/`` holds one class per
API module with a method per endpoint.

Typical workflow::

    bungiegen generate                       # fetch the default spec into ./src
    bungiegen generate --spec openapi.json --output ./client/src
    bungiegen inspect modules                # list the endpoints per module

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: Project configuration and precedence resolution.
    pipeline: Load, render and write in a single run.
    diagnostics: Accumulator for the warnings produced while rendering.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
