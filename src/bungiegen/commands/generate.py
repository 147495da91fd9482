"""Generate command -- render the TypeScript client from the OpenAPI document.

Implements the ``bungiegen generate`` top-level command. It resolves the
effective configuration, runs :func:`~bungiegen.pipeline.run_generation`,
prints every diagnostic the passes produced, and finishes with a one-line
summary. With ``--dry-run`` the file list goes to stdout and the output
directory is left untouched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from bungiegen.diagnostics import emit
from bungiegen.exceptions import BungiegenError, InvalidUsageError
from bungiegen.output import debug, error, info, print_data, progress, success


def generate_command(
    spec: Optional[str] = typer.Option(
        None,
        "--spec",
        "-s",
        help="OpenAPI document URL or file path (use '-' for stdin).",
    ),
    output_dir: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Root directory of the generated source tree.",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="List the files without writing them."
    ),
) -> None:
    """Generate schemas, responses and modules from the OpenAPI document.

    Args:
        spec: Document source; overrides ``BUNGIEGEN_SPEC`` and
            ``bungiegen.json``.
        output_dir: Output root; overrides ``BUNGIEGEN_OUTPUT`` and
            ``bungiegen.json``.
        dry_run: Render everything but only print the paths.

    Raises:
        typer.Exit: With the error's exit code if the configuration is
            invalid, the document cannot be loaded, or the output cannot
            be written.

    Example::

        bungiegen generate
        bungiegen generate --spec openapi.json --output client/src
        bungiegen generate --dry-run
    """
    from bungiegen.config import resolve_config
    from bungiegen.pipeline import run_generation

    try:
        config = resolve_config(cli_spec=spec, cli_output=output_dir)
        if Path(config.output_dir).exists() and not Path(config.output_dir).is_dir():
            raise InvalidUsageError(f"Output path is not a directory: {config.output_dir}")
        debug(f"Loading spec from {config.spec}")
        progress(f"Generating client into {config.output_dir}...")
        result = run_generation(config, dry_run=dry_run)
    except BungiegenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    emit(result.diagnostics)

    if dry_run:
        for path in result.written:
            print_data(str(path))
        info(f"Dry run: {len(result.written)} files would be written to {config.output_dir}")
        return

    warnings = len(result.diagnostics.warnings)
    success(
        f"Generated {len(result.written)} files for "
        f"{result.spec.info.title} {result.spec.info.version} in {config.output_dir}"
    )
    if warnings:
        info(f"{warnings} warning(s) reported.")
