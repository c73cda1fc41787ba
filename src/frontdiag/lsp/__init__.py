"""
frontdiag editor integration.

Converts diagnostics and warnings into Language Server Protocol messages and
provides a compilation session that publishes them through a pygls server.
"""

from frontdiag.lsp.diagnostics import (
    error_to_lsp_diagnostic,
    file_uri,
    line_range,
    to_lsp_diagnostic,
    warning_to_lsp_diagnostic,
)
from frontdiag.lsp.session import LanguageServerSession

__all__ = [
    "LanguageServerSession",
    "error_to_lsp_diagnostic",
    "file_uri",
    "line_range",
    "to_lsp_diagnostic",
    "warning_to_lsp_diagnostic",
]
