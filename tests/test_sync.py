"""Tests for bungiegen.sync -- replacing the generated directories."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from bungiegen.exceptions import OutputError
from bungiegen.sync import plan_output, sync_output


class TestPlanOutput:
    def test_sorted_paths_without_writing(self, tmp_path: Path) -> None:
        files = {"schemas/user.ts": "a", "modules/user.ts": "b"}
        planned = plan_output(tmp_path / "src", files)
        assert planned == [tmp_path / "src" / "modules" / "user.ts", tmp_path / "src" / "schemas" / "user.ts"]
        assert not (tmp_path / "src").exists()

    @pytest.mark.parametrize("relative", ["../escape.ts", "/abs/user.ts", "schemas/../../x.ts", ""])
    def test_rejects_paths_outside_root(self, tmp_path: Path, relative: str) -> None:
        with pytest.raises(OutputError, match="Refusing to write outside"):
            plan_output(tmp_path, {relative: ""})


class TestSyncOutput:
    def test_writes_nested_files(self, tmp_path: Path) -> None:
        written = sync_output(tmp_path, {"schemas/destiny/index.ts": "export {};\n"})
        target = tmp_path / "schemas" / "destiny" / "index.ts"
        assert written == [target]
        assert target.read_text(encoding="utf-8") == "export {};\n"

    def test_stale_files_are_removed(self, tmp_path: Path) -> None:
        sync_output(tmp_path, {"schemas/old.ts": "old", "schemas/index.ts": "v1"})
        sync_output(tmp_path, {"schemas/index.ts": "v2"})

        assert not (tmp_path / "schemas" / "old.ts").exists()
        assert (tmp_path / "schemas" / "index.ts").read_text(encoding="utf-8") == "v2"

    def test_managed_directory_removed_even_when_now_empty(self, tmp_path: Path) -> None:
        sync_output(tmp_path, {"responses/user.ts": "x"})
        sync_output(tmp_path, {"schemas/index.ts": "y"})
        assert not (tmp_path / "responses").exists()

    def test_leaf_only_namespace_file_is_removed(self, tmp_path: Path) -> None:
        sync_output(tmp_path, {"schemas.ts": "export interface Foo {}\n"})
        sync_output(tmp_path, {"schemas/index.ts": "v2", "schemas/destiny.ts": "v2"})

        assert not (tmp_path / "schemas.ts").exists()
        assert sorted(p.relative_to(tmp_path).as_posix() for p in tmp_path.rglob("*.ts")) == [
            "schemas/destiny.ts",
            "schemas/index.ts",
        ]

    def test_unmanaged_files_survive(self, tmp_path: Path) -> None:
        (tmp_path / "module.ts").write_text("export class Module {}\n", encoding="utf-8")
        (tmp_path / "lib").mkdir()
        (tmp_path / "lib" / "http.ts").write_text("// runtime\n", encoding="utf-8")

        sync_output(tmp_path, {"modules/user.ts": "x"})

        assert (tmp_path / "module.ts").exists()
        assert (tmp_path / "lib" / "http.ts").exists()

    def test_custom_managed_set(self, tmp_path: Path) -> None:
        (tmp_path / "modules").mkdir()
        (tmp_path / "modules" / "keep.ts").write_text("", encoding="utf-8")
        sync_output(tmp_path, {"schemas/index.ts": "x"}, managed=("schemas",))
        assert (tmp_path / "modules" / "keep.ts").exists()

    def test_managed_path_that_is_a_file(self, tmp_path: Path) -> None:
        (tmp_path / "schemas").write_text("not a directory", encoding="utf-8")
        with pytest.raises(OutputError, match="Expected a directory") as excinfo:
            sync_output(tmp_path, {"schemas/index.ts": "x"})
        assert excinfo.value.path == tmp_path / "schemas"
        assert excinfo.value.exit_code == 8

    def test_invalid_path_leaves_tree_untouched(self, tmp_path: Path) -> None:
        sync_output(tmp_path, {"schemas/index.ts": "v1"})
        with pytest.raises(OutputError):
            sync_output(tmp_path, {"schemas/index.ts": "v2", "../x.ts": "y"})
        assert (tmp_path / "schemas" / "index.ts").read_text(encoding="utf-8") == "v1"

    def test_write_failure_raises_output_error(self, tmp_path: Path) -> None:
        with patch("bungiegen.sync.atomic_write", side_effect=OSError("disk full")):
            with pytest.raises(OutputError, match="disk full"):
                sync_output(tmp_path, {"schemas/index.ts": "x"})

    def test_remove_failure_raises_output_error(self, tmp_path: Path) -> None:
        (tmp_path / "schemas").mkdir()
        with patch("bungiegen.sync.shutil.rmtree", side_effect=OSError("busy")):
            with pytest.raises(OutputError, match="Failed to remove"):
                sync_output(tmp_path, {"schemas/index.ts": "x"})
