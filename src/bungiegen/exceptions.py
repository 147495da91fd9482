"""Errors that abort a ``bungiegen`` run.

Problems inside the document (an unresolvable ``$ref``, a summary that does
not split into module and endpoint, a dictionary keyed by an enum) are not
errors: they become :class:`~bungiegen.diagnostics.Diagnostic` entries and
the affected schema or endpoint is skipped or degraded. What remains here is
the short list of conditions under which no useful output can be produced::

    BungiegenError          exit 1
    +-- ConfigError         exit 1  bad bungiegen.json or BUNGIEGEN_* values
    +-- InvalidUsageError   exit 2  bad arguments
    +-- SpecParseError      exit 7  document missing, unparsable or not OpenAPI 3
    +-- OutputError         exit 8  output tree cannot be cleaned or written

Commands print ``str(exc)`` and exit with ``exc.exit_code``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from bungiegen import exit_codes


class BungiegenError(Exception):
    """Base class; ``exit_code`` selects the process exit status."""

    exit_code: int = exit_codes.EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(BungiegenError):
    pass


class InvalidUsageError(BungiegenError):
    exit_code = exit_codes.EXIT_INVALID_USAGE


class SpecParseError(BungiegenError):
    """The OpenAPI document could not be turned into a usable dict.

    ``source`` is the file path, URL or ``-`` the document was read from,
    when known.
    """

    exit_code = exit_codes.EXIT_SPEC_PARSE_ERROR

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class OutputError(BungiegenError):
    """A managed directory or generated file could not be removed or written.

    ``path`` is the filesystem entry that failed, when known.
    """

    exit_code = exit_codes.EXIT_OUTPUT_ERROR

    def __init__(self, message: str, path: Union[str, Path, None] = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None
