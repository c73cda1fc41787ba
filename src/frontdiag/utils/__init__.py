"""
frontdiag Utilities Package.

Diagnostic values, error types, path rendering and console configuration.
"""

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
from frontdiag.utils.paths import relative_to_cwd

__all__ = [
    # Diagnostic values
    "DiagnosticKind",
    "Diagnostic",
    "WarningEvent",
    "format_location",
    "file_format",
    # Errors
    "DiagnosticError",
    "CompileError",
    "TokenMissingError",
    "SyntaxError",
    "TermDecodeError",
    "exception_class",
    # Paths
    "relative_to_cwd",
]
