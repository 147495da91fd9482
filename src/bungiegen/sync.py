"""Write a rendered file map to disk, replacing the previous generation.

The generated directories are owned by the generator: every run removes
them entirely before writing, together with the ``schemas.ts`` or
``responses.ts`` file a leaf-only top-level namespace renders to, so a
schema that disappeared from the document cannot leave a stale file behind. Directories outside the
*managed* set (the hand-written runtime ``module.ts``, ``index.ts``, ...)
are never touched.
"""

from __future__ import annotations

import shutil
from pathlib import Path, PurePosixPath
from typing import Iterable, Mapping

from bungiegen.config import atomic_write
from bungiegen.exceptions import OutputError

MANAGED_DIRECTORIES = ("schemas", "responses", "modules")


def _target(output_dir: Path, relative: str) -> Path:
    parts = PurePosixPath(relative).parts
    if not parts or PurePosixPath(relative).is_absolute() or ".." in parts:
        raise OutputError(f"Refusing to write outside {output_dir}: {relative}", path=relative)
    return output_dir.joinpath(*parts)


def plan_output(
    output_dir: str | Path,
    files: Mapping[str, str],
) -> list[Path]:
    """Return the paths :func:`sync_output` would write, sorted, without touching disk."""
    root = Path(output_dir)
    return sorted(_target(root, relative) for relative in files)


def sync_output(
    output_dir: str | Path,
    files: Mapping[str, str],
    managed: Iterable[str] = MANAGED_DIRECTORIES,
) -> list[Path]:
    """Replace the managed directories under *output_dir* with *files*.

    Args:
        output_dir: Root of the generated source tree.
        files: ``{path relative to output_dir: content}``, ``/``-separated.
        managed: Top-level directories removed, together with their
            ``<name>.ts`` siblings, before writing.

    Returns:
        The written paths, sorted.

    Raises:
        OutputError: If a directory cannot be removed or a file cannot be
            written.
    """
    root = Path(output_dir)
    targets = {relative: _target(root, relative) for relative in files}

    for name in managed:
        directory = root / name
        if directory.is_dir():
            try:
                shutil.rmtree(directory)
            except OSError as exc:
                raise OutputError(f"Failed to remove {directory}: {exc}", path=directory) from exc
        elif directory.exists():
            raise OutputError(f"Expected a directory at {directory}", path=directory)

        # a namespace without child namespaces renders beside the directory
        sibling = root / f"{name}.ts"
        try:
            sibling.unlink(missing_ok=True)
        except OSError as exc:
            raise OutputError(f"Failed to remove {sibling}: {exc}", path=sibling) from exc

    written: list[Path] = []
    for relative, path in targets.items():
        try:
            atomic_write(path, files[relative])
        except OSError as exc:
            raise OutputError(f"Failed to write {path}: {exc}", path=path) from exc
        written.append(path)

    return sorted(written)
