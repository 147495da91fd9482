"""Console output for the generator, split between stdout and stderr.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** carries data only: the ``inspect`` tables, ``inspect info`` and
  the file list of ``generate --dry-run``. Build scripts may pipe it.
* **stderr** carries everything else: the run summary, the generator's
  diagnostics, progress and errors.

A run of ``bungiegen generate`` against the full platform document produces
thousands of info-level diagnostics (one per schema and endpoint); those go
through :func:`debug` and only appear with ``--verbose``. Warnings are never
suppressed, not even by ``--quiet``.

:class:`OutputManager` holds the resolved format and the two Rich consoles.
The root CLI callback installs one with :func:`set_output`; everything else
calls the module-level helpers, which delegate to it.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    """Format of the data written to stdout.

    ``AUTO`` becomes ``RICH`` on an interactive, colour-capable terminal and
    ``PLAIN`` otherwise. ``--json`` and ``--plain`` force the other two.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Route data to stdout and status messages to stderr.

    Args:
        format: Requested data format; ``AUTO`` is resolved here.
        no_color: Print status messages as bare lines without Rich markup.
        quiet: Drop info, success and progress messages.
        verbose: Show debug messages (the per-schema and per-endpoint
            diagnostics).
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich = _is_tty() and not self._no_color
            format = OutputFormat.RICH if rich else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=(format == OutputFormat.RICH),
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_quiet(self) -> bool:
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    # --- stdout ---

    def print_data(self, text: str) -> None:
        """Print one line of data to stdout, whatever the format."""
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Print a dict or list to stdout.

        JSON mode dumps it indented, plain mode prints ``key<TAB>value``
        lines (or one line per list item), and rich mode highlights the JSON.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(_dumps(data))
        elif self._format == OutputFormat.PLAIN:
            if isinstance(data, dict):
                for key, value in data.items():
                    self.print_data(f"{key}\t{value}")
            elif isinstance(data, list):
                for item in data:
                    self.print_data(str(item))
            else:
                self.print_data(str(data))
        else:
            self._stdout.print(Syntax(_dumps(data), "json", theme="monokai", word_wrap=True))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows to stdout.

        JSON mode emits one object per row keyed by *headers*; plain mode
        emits tab-separated lines with the headers first. *title* is only
        shown by the Rich table.
        """
        if self._format == OutputFormat.JSON:
            self.print_data(_dumps([dict(zip(headers, row)) for row in rows]))
            return

        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # --- stderr ---

    def _status(self, message: str, prefix: str = "", style: Optional[str] = None) -> None:
        if self._no_color:
            print(f"{prefix}{message}", file=sys.stderr, flush=True)
            return
        # messages carry component names and type expressions such as
        # ``{[field: number]: X}``, which must not be read as markup
        text = escape(prefix) + escape(message) if style is None else (
            f"[{style}]{escape(prefix)}[/{style}]{escape(message)}"
        )
        self._stderr.print(text)

    def info(self, message: str) -> None:
        if not self._quiet:
            self._status(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._status(message, style="green")

    def warning(self, message: str) -> None:
        """Print a warning. Shown even with ``--quiet``."""
        self._status(message, prefix="Warning: ", style="yellow")

    def error(self, message: str) -> None:
        self._status(message, prefix="Error: ", style="bold red")

    def debug(self, message: str) -> None:
        """Print a debug line; only with ``--verbose``."""
        if self._verbose:
            self._status(message, prefix="[debug] ", style="dim")

    def progress(self, message: str) -> None:
        """Print a transient status line on interactive terminals only."""
        if not self._quiet and _is_tty():
            self._status(message, style="dim")


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """``NO_COLOR`` (any value, even empty) or ``TERM=dumb`` disable colour."""
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# --- Global instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager (tests swap stdout between runs)."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)


def progress(message: str) -> None:
    get_output().progress(message)
