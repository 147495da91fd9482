"""Where ``bungiegen`` reads its settings from and writes its own files to.

A run needs two settings, the document source and the output root. They
come from, highest first: ``--spec``/``--output``, ``BUNGIEGEN_SPEC`` and
``BUNGIEGEN_OUTPUT``, a ``bungiegen.json`` in the working directory, and the
:class:`~bungiegen.models.GeneratorConfig` defaults (the Bungie.net document
on GitHub, ``./src``). See :func:`resolve_config`.

Generated files are written through :func:`atomic_write`.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from bungiegen.exceptions import ConfigError
from bungiegen.models import GeneratorConfig

_APP_NAME = "bungiegen"
_PROJECT_CONFIG_FILENAME = "bungiegen.json"

ENV_SPEC = "BUNGIEGEN_SPEC"
ENV_OUTPUT = "BUNGIEGEN_OUTPUT"


# --- Data directory ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def get_data_dir() -> Path:
    """Return the directory crash logs are written to, creating it if needed.

    ``$XDG_DATA_HOME/bungiegen`` (``~/.local/share/bungiegen``) on Linux and
    the BSDs, ``~/.bungiegen/logs`` elsewhere.
    """
    if _is_xdg_platform():
        xdg_data = os.environ.get("XDG_DATA_HOME")
        base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
        path = base / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* in one rename.

    The content goes to a hidden sibling temp file first, so a run killed
    mid-write leaves either the old file or the new one, never a truncated
    ``.ts``. Line endings are always ``\\n`` regardless of platform.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    handle, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(handle, "w", encoding="utf-8", newline="\n") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./bungiegen.json``.

    Project-local config sits between the defaults and environment variables
    in the precedence chain. It typically pins ``spec`` to a vendored copy of
    the document so that generation is reproducible.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but does not hold a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_spec: Optional[str] = None,
    cli_output: Optional[str] = None,
) -> GeneratorConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_spec``, ``cli_output``)
        2. Environment variables (``BUNGIEGEN_SPEC``, ``BUNGIEGEN_OUTPUT``)
        3. Project config (``./bungiegen.json``)
        4. Defaults

    Returns:
        The effective :class:`~bungiegen.models.GeneratorConfig`.

    Raises:
        ConfigError: If the project config is malformed or holds unknown keys.
    """
    # 3. Project-local config over the model defaults
    values: dict[str, Any] = dict(load_project_config() or {})

    # 2. Environment variables
    env_spec = os.environ.get(ENV_SPEC)
    if env_spec:
        values["spec"] = env_spec
    env_output = os.environ.get(ENV_OUTPUT)
    if env_output:
        values["output_dir"] = env_output

    # 1. CLI flags (highest precedence)
    if cli_spec is not None:
        values["spec"] = cli_spec
    if cli_output is not None:
        values["output_dir"] = cli_output

    try:
        return GeneratorConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
