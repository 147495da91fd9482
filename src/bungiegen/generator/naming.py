"""Name and path conventions shared by both generator passes."""

from __future__ import annotations

import posixpath
import re

COMPONENTS_PREFIX = "#/components/"

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def pascal(name: str) -> str:
    """Upper-case the first character of *name*, leaving the rest untouched."""
    return name[:1].upper() + name[1:]


def get_path(dotted: str) -> str:
    """Convert a dotted namespace path into a kebab-case file path.

    Example::

        >>> get_path("schemas.Destiny.HistoricalStats")
        'schemas/destiny/historical-stats'
    """
    return _CAMEL_BOUNDARY.sub(r"\1-\2", dotted.replace(".", "/")).lower()


def split_symbol(dotted: str) -> tuple[str, str]:
    """Split ``a.b.Name`` into the namespace path ``a.b`` and the symbol ``Name``."""
    namespace, _, name = dotted.rpartition(".")
    return namespace, name


def relative_specifier(from_dir: str, to_path: str) -> str:
    """Return the TypeScript import specifier of *to_path* as seen from *from_dir*.

    Both arguments are ``/``-separated paths relative to the output root.
    Specifiers that do not climb get a ``./`` prefix, and a specifier ending
    in ``.`` gets a trailing ``/`` so that it resolves to the directory's
    ``index.ts``.
    """
    path = posixpath.relpath(to_path or ".", from_dir or ".")
    if path == ".":
        path = ""
    if not path.startswith(".."):
        path = f"./{path}"
    if path.endswith("."):
        path += "/"
    return path


def sort_key(value: str) -> str:
    """Case-insensitive ordering used for import paths and imported names."""
    return value.lower()
