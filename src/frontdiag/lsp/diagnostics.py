"""
LSP conversion of frontdiag diagnostics.

This module converts raised diagnostics and warnings into LSP-compatible
diagnostic messages for display in editors. Diagnostics only carry a line,
so every range covers the whole reported line.
"""

from pathlib import Path

from lsprotocol import types

from frontdiag.utils.diagnostics import Diagnostic, WarningEvent
from frontdiag.utils.errors import DiagnosticError

LSP_SOURCE = "frontdiag"


def file_uri(file: str) -> str:
    """Get the document URI for a file path (URIs are passed through)."""
    if "://" in file:
        return file
    return Path(file).absolute().as_uri()


def line_range(line: int) -> types.Range:
    """
    Range covering a whole 1-indexed line.

    Line 0 ("no specific line") maps to the first line of the document.
    """
    start_line = max(0, line - 1)
    return types.Range(
        start=types.Position(line=start_line, character=0),
        end=types.Position(line=start_line + 1, character=0),
    )


def to_lsp_diagnostic(diagnostic: Diagnostic) -> types.Diagnostic:
    """Convert a fatal diagnostic into an LSP error."""
    return types.Diagnostic(
        range=line_range(diagnostic.line),
        message=diagnostic.message,
        severity=types.DiagnosticSeverity.Error,
        source=LSP_SOURCE,
        code=diagnostic.kind.value,
    )


def error_to_lsp_diagnostic(error: DiagnosticError) -> types.Diagnostic:
    """Convert a raised diagnostic into an LSP error."""
    return to_lsp_diagnostic(error.diagnostic)


def warning_to_lsp_diagnostic(event: WarningEvent) -> types.Diagnostic:
    """Convert a located warning into an LSP warning."""
    return types.Diagnostic(
        range=line_range(event.line),
        message=event.text,
        severity=types.DiagnosticSeverity.Warning,
        source=LSP_SOURCE,
    )
