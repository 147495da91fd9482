"""The ``bungiegen`` command line.

Two command groups hang off the root::

    bungiegen generate [--spec PATH|URL|-] [--output DIR] [--dry-run]
    bungiegen inspect {modules,schemas,info} [--spec ...]

The root options pick the output format and verbosity for whichever command
runs; they are turned into the process-wide
:class:`~bungiegen.output.OutputManager` before the command body starts.

:func:`main` is the console script. Known failures
(:class:`~bungiegen.exceptions.BungiegenError`) become an ``Error:`` line and
their exit code; anything else is a bug in the generator, so the traceback
goes to a crash log under :func:`~bungiegen.config.get_data_dir` together with
the version and command line needed to reproduce it.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from bungiegen import __version__
from bungiegen.commands.generate import generate_command
from bungiegen.commands.inspect import inspect_app
from bungiegen.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE
from bungiegen.output import OutputFormat, OutputManager, set_output

app = typer.Typer(
    name="bungiegen",
    help="Generate a TypeScript client from the Bungie.net OpenAPI document.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)
app.command("generate")(generate_command)
app.add_typer(inspect_app, name="inspect", help="Inspect the OpenAPI document.")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f"bungiegen {__version__}")
        raise typer.Exit()


def _data_format(json_output: bool, plain_output: bool) -> OutputFormat:
    if json_output and plain_output:
        raise typer.BadParameter("--json and --plain cannot be combined")
    if json_output:
        return OutputFormat.JSON
    if plain_output:
        return OutputFormat.PLAIN
    return OutputFormat.AUTO


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show version and exit."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print inspect tables and info as JSON."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Print inspect tables and info as tab-separated text."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only print warnings, errors and data."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show per-schema and per-endpoint progress."
    ),
) -> None:
    set_output(
        OutputManager(
            format=_data_format(json_output, plain_output),
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )


def _on_sigint(signum: int, frame: Any) -> None:  # noqa: ANN401
    sys.stderr.write("\nCancelled.\n")
    sys.exit(EXIT_CANCELLED)


def _write_crash_log(exc: Exception) -> Path:
    """Save the traceback of an unexpected failure and return the log path."""
    from bungiegen.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now():%Y%m%d-%H%M%S}.log"

    header = f"bungiegen {__version__}\nargv: {' '.join(sys.argv)}\n\n"
    body = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    log_path.write_text(header + body, encoding="utf-8")
    return log_path


def main() -> None:
    """Console script entry point."""
    from bungiegen.exceptions import BungiegenError
    from bungiegen.output import error

    signal.signal(signal.SIGINT, _on_sigint)
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except BungiegenError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error, please report it. Crash log: {_write_crash_log(exc)}")
        sys.exit(EXIT_GENERIC_FAILURE)
