"""
Error types raised by the frontdiag reporting subsystem.

Every fatal diagnostic is raised as a subclass of DiagnosticError carrying
the normalized message and the resolved (file, line). TermDecodeError is
unrelated to user input: it means a structured token handed over by the
parser could not be decoded.
"""

import traceback
from typing import Optional

from frontdiag.utils.diagnostics import Diagnostic, DiagnosticKind, format_location


class DiagnosticError(Exception):
    """Base exception for all raised diagnostics."""

    kind: DiagnosticKind = DiagnosticKind.COMPILE_ERROR

    def __init__(self, message: str, file: str = "nofile", line: int = 0) -> None:
        self.message = message
        self.file = file
        self.line = line
        # Trace starting at the caller of the raising helper
        self.stacktrace: Optional[traceback.StackSummary] = None
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return f"{format_location(self.line, self.file)}: {self.message}"

    @property
    def location(self) -> str:
        return format_location(self.line, self.file)

    @property
    def diagnostic(self) -> Diagnostic:
        """The immutable diagnostic value this exception carries."""
        return Diagnostic(kind=self.kind, message=self.message, file=self.file, line=self.line)


class CompileError(DiagnosticError):
    """Raised for generic compile-time failures."""

    kind = DiagnosticKind.COMPILE_ERROR


class TokenMissingError(DiagnosticError):
    """Raised when the input ended before a construct was complete."""

    kind = DiagnosticKind.TOKEN_MISSING_ERROR


class SyntaxError(DiagnosticError):
    """Raised when the parser encounters a malformed token sequence."""

    kind = DiagnosticKind.SYNTAX_ERROR


_EXCEPTION_CLASSES: dict[DiagnosticKind, type[DiagnosticError]] = {
    DiagnosticKind.COMPILE_ERROR: CompileError,
    DiagnosticKind.TOKEN_MISSING_ERROR: TokenMissingError,
    DiagnosticKind.SYNTAX_ERROR: SyntaxError,
}


def exception_class(kind: DiagnosticKind) -> type[DiagnosticError]:
    """Get the exception class raised for a diagnostic kind."""
    return _EXCEPTION_CLASSES[kind]


class TermDecodeError(Exception):
    """
    Raised when a structured token cannot be decoded.

    Attributes:
        message: What went wrong
        text: The token text being decoded
        column: 1-indexed column of the offending character, if known
    """

    def __init__(self, message: str, text: str = "", column: Optional[int] = None) -> None:
        self.message = message
        self.text = text
        self.column = column
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.column is not None:
            return f"[column {self.column}] {self.message} in {self.text!r}"
        return f"{self.message} in {self.text!r}"
