"""Tests for bungiegen.diagnostics."""

from __future__ import annotations

from bungiegen.diagnostics import DiagnosticLevel, Diagnostics, emit
from bungiegen.output import OutputFormat, OutputManager, set_output


class TestDiagnostics:
    def test_collects_in_order(self) -> None:
        diagnostics = Diagnostics()
        diagnostics.info("User", "Creating module User")
        diagnostics.warn("/GetAvailableLocales/", "Unable to parse summary")
        assert [d.level for d in diagnostics] == [DiagnosticLevel.INFO, DiagnosticLevel.WARNING]
        assert len(diagnostics) == 2

    def test_warnings_and_messages(self) -> None:
        diagnostics = Diagnostics()
        diagnostics.info("a", "first")
        diagnostics.warn("b", "second")
        assert [d.message for d in diagnostics.warnings] == ["second"]
        assert diagnostics.messages() == ["second"]
        assert diagnostics.messages(DiagnosticLevel.INFO) == ["first"]
        assert diagnostics.messages(None) == ["first", "second"]

    def test_extend(self) -> None:
        first, second = Diagnostics(), Diagnostics()
        first.warn("a", "one")
        second.warn("b", "two")
        first.extend(second)
        assert first.messages() == ["one", "two"]

    def test_str_includes_location(self) -> None:
        diagnostics = Diagnostics()
        diagnostics.warn("Foo.bar", "broken")
        diagnostics.warn("", "global")
        assert [str(d) for d in diagnostics] == ["Foo.bar: broken", "global"]


class TestEmit:
    def test_warnings_always_info_only_when_verbose(self, capfd, monkeypatch) -> None:
        monkeypatch.setattr("bungiegen.output._is_tty", lambda: False)
        diagnostics = Diagnostics()
        diagnostics.info("User", "Creating module User")
        diagnostics.warn("Foo.bar", "broken")

        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        emit(diagnostics)
        err = capfd.readouterr().err
        assert "Warning: Foo.bar: broken" in err
        assert "Creating module User" not in err

        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True))
        emit(diagnostics)
        assert "[debug] User: Creating module User" in capfd.readouterr().err
