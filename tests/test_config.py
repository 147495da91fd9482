"""Tests for bungiegen.config -- XDG paths, atomic writes, precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from bungiegen.config import (
    atomic_write,
    get_data_dir,
    load_project_config,
    resolve_config,
)
from bungiegen.exceptions import ConfigError
from bungiegen.models import DEFAULT_SPEC_URL


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestDataDir:
    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("bungiegen.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_data_dir()
        assert result == tmp_path / ".local" / "share" / "bungiegen"
        assert result.is_dir()

    def test_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_data"
        monkeypatch.setattr("bungiegen.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(custom))

        result = get_data_dir()
        assert result == custom / "bungiegen"
        assert result.is_dir()

    def test_fallback(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("bungiegen.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_data_dir()
        assert result == tmp_path / ".bungiegen" / "logs"
        assert result.is_dir()


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "index.ts"
        atomic_write(target, "export {};\n")
        assert target.read_text(encoding="utf-8") == "export {};\n"

    def test_overwrites_existing_file(self, tmp_path: Path) -> None:
        target = tmp_path / "index.ts"
        target.write_text("old content", encoding="utf-8")
        atomic_write(target, "new content")
        assert target.read_text(encoding="utf-8") == "new content"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "schemas" / "destiny" / "entities" / "profiles.ts"
        atomic_write(target, "deep write")
        assert target.read_text(encoding="utf-8") == "deep write"

    def test_keeps_unix_newlines(self, tmp_path: Path) -> None:
        target = tmp_path / "lines.ts"
        atomic_write(target, "a\nb\n")
        assert target.read_bytes() == b"a\nb\n"

    def test_no_temp_files_left_on_success(self, tmp_path: Path) -> None:
        target = tmp_path / "index.ts"
        atomic_write(target, "content")
        assert list(tmp_path.iterdir()) == [target]

    def test_no_temp_files_left_on_error(self, tmp_path: Path) -> None:
        target = tmp_path / "index.ts"
        with patch("bungiegen.config.os.fsync", side_effect=OSError("disk error")):
            with pytest.raises(OSError, match="disk error"):
                atomic_write(target, "will fail")
        assert list(tmp_path.iterdir()) == []

    def test_unicode_content(self, tmp_path: Path) -> None:
        target = tmp_path / "unicode.ts"
        content = "// Destiny éàüñ 世界\n"
        atomic_write(target, content)
        assert target.read_text(encoding="utf-8") == content


# ---------------------------------------------------------------------------
# Project-local config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_load_returns_none_when_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_load_valid_project_config(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "bungiegen.json", {"spec": "vendor/openapi.json"})

        result = load_project_config()
        assert result == {"spec": "vendor/openapi.json"}

    def test_load_invalid_json_raises_config_error(self, isolated_config: Path) -> None:
        (isolated_config / "bungiegen.json").write_text("broken{", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid project config"):
            load_project_config()

    def test_load_non_object_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "bungiegen.json", ["spec"])

        with pytest.raises(ConfigError, match="expected a JSON object"):
            load_project_config()


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveConfig:
    """Test the full precedence chain: CLI > env > project > defaults."""

    def test_defaults(self, isolated_config: Path) -> None:
        cfg = resolve_config()
        assert cfg.spec == DEFAULT_SPEC_URL
        assert cfg.output_dir == "src"
        assert cfg.indent == "\t"
        assert cfg.module_import == "../module"

    def test_project_overrides_defaults(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "bungiegen.json",
            {"spec": "openapi.json", "output_dir": "lib", "indent": "    "},
        )
        cfg = resolve_config()
        assert cfg.spec == "openapi.json"
        assert cfg.output_dir == "lib"
        assert cfg.indent == "    "

    def test_env_overrides_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(isolated_config / "bungiegen.json", {"spec": "openapi.json", "output_dir": "lib"})
        monkeypatch.setenv("BUNGIEGEN_SPEC", "env.json")
        monkeypatch.setenv("BUNGIEGEN_OUTPUT", "env-out")

        cfg = resolve_config()
        assert cfg.spec == "env.json"
        assert cfg.output_dir == "env-out"

    def test_empty_env_is_ignored(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BUNGIEGEN_SPEC", "")
        assert resolve_config().spec == DEFAULT_SPEC_URL

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("BUNGIEGEN_SPEC", "env.json")
        monkeypatch.setenv("BUNGIEGEN_OUTPUT", "env-out")

        cfg = resolve_config(cli_spec="cli.json", cli_output="cli-out")
        assert cfg.spec == "cli.json"
        assert cfg.output_dir == "cli-out"

    def test_unknown_project_key_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "bungiegen.json", {"default_profile": "x"})

        with pytest.raises(ConfigError, match="Invalid configuration"):
            resolve_config()
