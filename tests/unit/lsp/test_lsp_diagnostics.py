"""
Tests for LSP diagnostic conversion.
"""

from lsprotocol import types

from frontdiag.lsp.diagnostics import (
    LSP_SOURCE,
    error_to_lsp_diagnostic,
    file_uri,
    line_range,
    to_lsp_diagnostic,
    warning_to_lsp_diagnostic,
)
from frontdiag.utils.diagnostics import Diagnostic, DiagnosticKind, WarningEvent


class TestLineRange:
    """Tests for line to range conversion."""

    def test_covers_whole_line(self):
        rng = line_range(3)
        assert (rng.start.line, rng.start.character) == (2, 0)
        assert (rng.end.line, rng.end.character) == (3, 0)

    def test_line_zero_maps_to_first_line(self):
        rng = line_range(0)
        assert rng.start.line == 0
        assert rng.end.line == 1


class TestFileUri:
    """Tests for document URIs."""

    def test_absolute_path(self, tmp_path):
        uri = file_uri(str(tmp_path / "a.ex"))
        assert uri.startswith("file://")
        assert uri.endswith("/a.ex")

    def test_uri_passes_through(self):
        assert file_uri("file:///project/lib/a.ex") == "file:///project/lib/a.ex"


class TestConversion:
    """Tests for diagnostic conversion."""

    def test_error(self):
        diagnostic = Diagnostic(DiagnosticKind.TOKEN_MISSING_ERROR, "incomplete", "a.ex", 4)
        lsp = to_lsp_diagnostic(diagnostic)
        assert lsp.severity == types.DiagnosticSeverity.Error
        assert lsp.code == "TokenMissingError"
        assert lsp.message == "incomplete"
        assert lsp.source == LSP_SOURCE
        assert lsp.range.start.line == 3

    def test_raised_error(self, raise_fragment):
        error = raise_fragment("syntax error before: ", "'end'", line=2)
        lsp = error_to_lsp_diagnostic(error)
        assert lsp.code == "SyntaxError"
        assert lsp.message == "unexpected token: end"
        assert lsp.range.start.line == 1

    def test_warning(self):
        lsp = warning_to_lsp_diagnostic(WarningEvent("a.ex", 7, "unused"))
        assert lsp.severity == types.DiagnosticSeverity.Warning
        assert lsp.message == "unused"
        assert lsp.code is None
        assert lsp.range.start.line == 6
