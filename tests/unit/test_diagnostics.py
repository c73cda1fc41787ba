"""
Unit tests for diagnostic values, errors and console configuration.
"""

import pytest

from frontdiag.utils import console
from frontdiag.utils.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    WarningEvent,
    file_format,
    format_location,
)
from frontdiag.utils.errors import (
    CompileError,
    DiagnosticError,
    SyntaxError,
    TermDecodeError,
    TokenMissingError,
    exception_class,
)


class TestDiagnostic:
    """Tests for the Diagnostic value."""

    def test_location_without_line(self):
        diagnostic = Diagnostic(DiagnosticKind.SYNTAX_ERROR, "XY", "b.ex", 0)
        assert diagnostic.location == "b.ex"
        assert str(diagnostic) == "b.ex: XY"

    def test_location_with_line(self):
        diagnostic = Diagnostic(DiagnosticKind.SYNTAX_ERROR, "XY", "b.ex", 12)
        assert diagnostic.location == "b.ex:12"

    def test_is_immutable(self):
        diagnostic = Diagnostic(DiagnosticKind.SYNTAX_ERROR, "XY", "b.ex", 12)
        with pytest.raises(AttributeError):
            diagnostic.message = "changed"

    def test_to_exception_round_trip(self):
        diagnostic = Diagnostic(DiagnosticKind.TOKEN_MISSING_ERROR, "incomplete", "b.ex", 2)
        error = diagnostic.to_exception()
        assert isinstance(error, TokenMissingError)
        assert error.diagnostic == diagnostic

    def test_to_exception_is_annotated(self):
        assert Diagnostic.to_exception.__annotations__["return"] == "DiagnosticError"
        error = Diagnostic(DiagnosticKind.COMPILE_ERROR, "boom", "b.ex").to_exception()
        assert isinstance(error, DiagnosticError)

    def test_kind_values(self):
        assert [kind.value for kind in DiagnosticKind] == [
            "CompileError",
            "TokenMissingError",
            "SyntaxError",
        ]

    def test_kind_descriptions(self):
        assert all(kind.description for kind in DiagnosticKind)


class TestFormatting:
    """Tests for location formatting."""

    def test_format_location(self):
        assert format_location(0, "a.ex") == "a.ex"
        assert format_location(4, "a.ex") == "a.ex:4"

    def test_file_format_relative(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert file_format(4, str(tmp_path / "a.ex")) == "a.ex:4"

    def test_file_format_unresolvable_path(self):
        file = "/nonexistent_root_dir/\x00x.ex"
        assert file_format(1, file) == f"{file}:1"

    def test_file_format_outside_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        outside = str(tmp_path.parent / "b.ex")
        assert file_format(0, outside) == outside

    def test_file_format_pseudo_file(self):
        assert file_format(0, "nofile") == "nofile"

    def test_warning_event_render(self):
        event = WarningEvent(file="lib/a.ex", line=3, text="unused")
        assert event.render() == "unused\n  lib/a.ex:3"
        assert event.location == "lib/a.ex:3"


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_exception_classes(self):
        assert exception_class(DiagnosticKind.COMPILE_ERROR) is CompileError
        assert exception_class(DiagnosticKind.TOKEN_MISSING_ERROR) is TokenMissingError
        assert exception_class(DiagnosticKind.SYNTAX_ERROR) is SyntaxError

    def test_syntax_error_is_not_builtin(self):
        import builtins

        assert SyntaxError is not builtins.SyntaxError
        assert not issubclass(SyntaxError, builtins.SyntaxError)

    def test_error_message(self):
        error = CompileError("boom", file="a.ex", line=2)
        assert str(error) == "a.ex:2: boom"
        assert error.stacktrace is None

    def test_term_decode_error_message(self):
        error = TermDecodeError("Unexpected token", "[a", column=3)
        assert str(error) == "[column 3] Unexpected token in '[a'"


class TestConsole:
    """Tests for ANSI configuration."""

    def test_env_forces_colors(self, monkeypatch):
        monkeypatch.setenv(console.ANSI_ENV_VAR, "true")
        console.set_ansi_enabled(None)
        assert console.ansi_enabled() is True
        assert console.warning_prefix() == "\x1b[33mwarning: \x1b[0m"

    def test_env_disables_colors(self, monkeypatch):
        monkeypatch.setenv(console.ANSI_ENV_VAR, "off")
        console.set_ansi_enabled(None)
        assert console.ansi_enabled() is False
        assert console.warning_prefix() == "warning: "

    def test_no_color(self, monkeypatch):
        monkeypatch.delenv(console.ANSI_ENV_VAR, raising=False)
        monkeypatch.setenv("NO_COLOR", "1")
        console.set_ansi_enabled(None)
        assert console.ansi_enabled() is False

    def test_pinned_value_wins_over_env(self, monkeypatch):
        monkeypatch.setenv(console.ANSI_ENV_VAR, "1")
        console.set_ansi_enabled(False)
        assert console.ansi_enabled() is False

    def test_colorize(self):
        console.set_ansi_enabled(True)
        assert console.colorize("x", console.Colors.RED) == "\x1b[31mx\x1b[0m"
