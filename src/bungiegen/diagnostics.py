"""Accumulator for the problems met while rendering.

The generator never aborts on a malformed schema, an unparseable summary or
an unresolvable type: it records a :class:`Diagnostic` and carries on with a
best-effort substitute (or skips the unit). Every pass returns its
:class:`Diagnostics` next to the rendered files so callers and tests can see
exactly which warnings a document produced.

Printing is left to :func:`emit`, which forwards each entry to the global
:class:`~bungiegen.output.OutputManager`.
"""

from __future__ import annotations

import enum
from typing import Iterable, Iterator

from pydantic import BaseModel


class DiagnosticLevel(str, enum.Enum):
    """Severity of a :class:`Diagnostic`."""

    INFO = "info"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """A single ``(location, message)`` entry."""

    level: DiagnosticLevel
    location: str
    message: str

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class Diagnostics:
    """Ordered collection of diagnostics produced by one or more passes."""

    def __init__(self, entries: Iterable[Diagnostic] | None = None) -> None:
        self._entries: list[Diagnostic] = list(entries or [])

    def info(self, location: str, message: str) -> None:
        self._entries.append(
            Diagnostic(level=DiagnosticLevel.INFO, location=location, message=message)
        )

    def warn(self, location: str, message: str) -> None:
        self._entries.append(
            Diagnostic(level=DiagnosticLevel.WARNING, location=location, message=message)
        )

    def extend(self, other: Diagnostics) -> None:
        self._entries.extend(other)

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self._entries if d.level == DiagnosticLevel.WARNING]

    def messages(self, level: DiagnosticLevel | None = DiagnosticLevel.WARNING) -> list[str]:
        """Return the message strings, optionally restricted to *level*."""
        return [d.message for d in self._entries if level is None or d.level == level]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def emit(diagnostics: Diagnostics) -> None:
    """Print every diagnostic through the global output manager.

    Warnings are always shown; info entries only appear with ``--verbose``.
    """
    from bungiegen.output import debug, warning

    for entry in diagnostics:
        if entry.level == DiagnosticLevel.WARNING:
            warning(str(entry))
        else:
            debug(str(entry))
