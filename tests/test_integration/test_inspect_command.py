"""Integration tests for the ``bungiegen inspect`` command group."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from bungiegen.app import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def empty_spec_file(isolated_config: Path) -> Path:
    path = isolated_config / "empty.json"
    path.write_text(
        json.dumps({"openapi": "3.0.0", "info": {"title": "Empty", "version": "0"}}),
        encoding="utf-8",
    )
    return path


class TestInspectModules:
    def test_plain_table(
        self, runner: CliRunner, isolated_config: Path, bungie_spec_file: Path
    ) -> None:
        result = runner.invoke(app, ["--no-color", "inspect", "modules", "-s", str(bungie_spec_file)])

        assert result.exit_code == 0, result.output
        assert "Module\tEndpoint\tMethod\tPath" in result.output
        assert "User\tGetBungieNetUserById\tGET\t/User/GetBungieNetUserById/{id}/" in result.output
        assert "Destiny2\tTransferItem\tPOST\t/Destiny2/Actions/Items/TransferItem/" in result.output
        assert "Warning: /GetAvailableLocales/" in result.output

    def test_json_table(
        self, runner: CliRunner, isolated_config: Path, bungie_spec_file: Path
    ) -> None:
        result = runner.invoke(app, ["--json", "inspect", "modules", "-s", str(bungie_spec_file)])

        assert result.exit_code == 0, result.output
        assert '"Endpoint": "GetProfile"' in result.output
        assert '"Method": "GET"' in result.output

    def test_no_modules(self, runner: CliRunner, empty_spec_file: Path) -> None:
        result = runner.invoke(app, ["--no-color", "inspect", "modules", "-s", str(empty_spec_file)])

        assert result.exit_code == 0, result.output
        assert "No modules found in this spec." in result.output


class TestInspectSchemas:
    def test_plain_table(
        self, runner: CliRunner, isolated_config: Path, bungie_spec_file: Path
    ) -> None:
        result = runner.invoke(app, ["--no-color", "inspect", "schemas", "-s", str(bungie_spec_file)])

        assert result.exit_code == 0, result.output
        assert "Schema\tKind\tMembers" in result.output
        assert "BungieMembershipType\tenum\t3" in result.output
        assert "User.GeneralUser\tobject\t3" in result.output
        assert "Destiny.Definitions.DestinyItemDefinitionMap\tdictionary\t" in result.output

    def test_no_schemas(self, runner: CliRunner, empty_spec_file: Path) -> None:
        result = runner.invoke(app, ["--no-color", "inspect", "schemas", "-s", str(empty_spec_file)])

        assert result.exit_code == 0, result.output
        assert "No schemas defined in this spec." in result.output


class TestInspectInfo:
    def test_json(self, runner: CliRunner, isolated_config: Path, bungie_spec_file: Path) -> None:
        result = runner.invoke(app, ["--json", "inspect", "info", "-s", str(bungie_spec_file)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["title"] == "Bungie.Net API"
        assert data["version"] == "2.1.1"
        assert data["openapi_version"] == "3.0.0"
        assert data["paths"] == 6
        assert data["schemas"] == 9
        assert data["responses"] == 4

    def test_plain(self, runner: CliRunner, isolated_config: Path, bungie_spec_file: Path) -> None:
        result = runner.invoke(app, ["--plain", "inspect", "info", "-s", str(bungie_spec_file)])

        assert result.exit_code == 0, result.output
        assert "title\tBungie.Net API" in result.output

    def test_uses_environment_spec(
        self,
        runner: CliRunner,
        isolated_config: Path,
        bungie_spec_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("BUNGIEGEN_SPEC", str(bungie_spec_file))
        result = runner.invoke(app, ["--plain", "inspect", "info"])

        assert result.exit_code == 0, result.output
        assert "version\t2.1.1" in result.output

    def test_missing_spec(self, runner: CliRunner, isolated_config: Path) -> None:
        result = runner.invoke(app, ["--no-color", "inspect", "info", "-s", "missing.json"])

        assert result.exit_code == 7
        assert "Error: Spec file not found" in result.output
