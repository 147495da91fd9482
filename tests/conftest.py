"""Shared test fixtures for bungiegen.

Provides reusable fixtures for loading spec fixtures, creating isolated
config environments, managing output state, and running CLI commands.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from bungiegen.diagnostics import Diagnostics
from bungiegen.models import ParsedSpec
from bungiegen.output import OutputFormat, OutputManager, reset_output, set_output
from bungiegen.parser.extractor import extract_spec


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def bungie_raw() -> dict[str, Any]:
    """Load the raw mini platform document."""
    with open(FIXTURES_DIR / "bungie_mini.json") as f:
        return json.load(f)


@pytest.fixture
def bungie_spec(bungie_raw: dict[str, Any]) -> ParsedSpec:
    """Parsed mini platform document."""
    return extract_spec(bungie_raw, "3.0.0")


@pytest.fixture
def bungie_spec_file(tmp_path: Path, bungie_raw: dict[str, Any]) -> Path:
    """The mini platform document written to a temporary file."""
    path = tmp_path / "openapi.json"
    path.write_text(json.dumps(bungie_raw), encoding="utf-8")
    return path


@pytest.fixture
def make_spec() -> Callable[..., ParsedSpec]:
    """Factory building a ParsedSpec from ``paths`` and ``components`` dicts."""

    def _make(
        paths: dict[str, Any] | None = None,
        schemas: dict[str, Any] | None = None,
        responses: dict[str, Any] | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> ParsedSpec:
        raw = {
            "openapi": "3.0.0",
            "info": {"title": "Test API", "version": "1.0.0"},
            "paths": paths or {},
            "components": {
                "schemas": schemas or {},
                "responses": responses or {},
                "parameters": parameters or {},
            },
        }
        return extract_spec(raw, "3.0.0")

    return _make


@pytest.fixture
def diagnostics() -> Diagnostics:
    """An empty diagnostics collection."""
    return Diagnostics()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Sets XDG_DATA_HOME to a subdirectory of tmp_path so that crash logs
    never touch the real user directory. Clears all BUNGIEGEN_* environment
    variables and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["BUNGIEGEN_SPEC", "BUNGIEGEN_OUTPUT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for tests that ignore output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def json_output() -> OutputManager:
    """Install a JSON-format OutputManager for tests that check JSON output."""
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner.

    Returns a CliRunner instance that captures stdout/stderr and
    provides a consistent interface for invoking Typer apps in tests.
    """
    from typer.testing import CliRunner

    return CliRunner()
