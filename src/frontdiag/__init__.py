"""
frontdiag - diagnostic reporting for a compiler front-end.

Turns raw lexer/parser failure fragments and node metadata into normalized
diagnostics. Fatal problems are raised as CompileError, TokenMissingError or
SyntaxError; warnings are printed to stderr and reported to the active
compilation session.
"""

from frontdiag.compiler import (
    CompilationSession,
    compilation_session,
    compile_error,
    form_error,
    form_warn,
    normalize,
    parse_error,
    resolve_location,
    warn,
    warn_message,
)
from frontdiag.utils.diagnostics import Diagnostic, DiagnosticKind, WarningEvent
from frontdiag.utils.errors import (
    CompileError,
    DiagnosticError,
    SyntaxError,
    TermDecodeError,
    TokenMissingError,
)

__version__ = "0.1.0"
__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "WarningEvent",
    "DiagnosticError",
    "CompileError",
    "TokenMissingError",
    "SyntaxError",
    "TermDecodeError",
    "normalize",
    "resolve_location",
    "compile_error",
    "form_error",
    "parse_error",
    "warn",
    "warn_message",
    "form_warn",
    "CompilationSession",
    "compilation_session",
]
