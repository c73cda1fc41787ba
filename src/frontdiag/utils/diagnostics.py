"""
Diagnostic values for the frontdiag reporting subsystem.

A Diagnostic is the immutable description of a fatal compile-time problem
(kind, message and location). A WarningEvent is its non-fatal counterpart:
it is printed to the diagnostic stream and forwarded to the compilation
session, but never persisted.

Example output of file_format:
    lib/parser.ex:12
    lib/parser.ex        (no specific line)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from frontdiag.utils.paths import relative_to_cwd

if TYPE_CHECKING:
    from frontdiag.utils.errors import DiagnosticError


# =============================================================================
# Diagnostic Kinds
# =============================================================================


class DiagnosticKind(Enum):
    """Closed set of fatal diagnostic kinds."""

    COMPILE_ERROR = "CompileError"
    TOKEN_MISSING_ERROR = "TokenMissingError"
    SYNTAX_ERROR = "SyntaxError"

    @property
    def description(self) -> str:
        """Short human description of this kind."""
        descriptions = {
            DiagnosticKind.COMPILE_ERROR: "compile-time failure",
            DiagnosticKind.TOKEN_MISSING_ERROR: "input ended before the construct was complete",
            DiagnosticKind.SYNTAX_ERROR: "malformed token sequence",
        }
        return descriptions[self]


# =============================================================================
# Location Formatting
# =============================================================================


def format_location(line: int, file: str) -> str:
    """Render a location as `file` or `file:line` (line 0 means no line)."""
    if line == 0:
        return file
    return f"{file}:{line}"


def file_format(line: int, file: str) -> str:
    """
    Render a location for the diagnostic stream.

    The file is shown relative to the current working directory and the
    line suffix is omitted when the line is 0.
    """
    return format_location(line, relative_to_cwd(file))


# =============================================================================
# Diagnostic Values
# =============================================================================


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """
    A normalized, fatal diagnostic.

    Attributes:
        kind: Which exception the diagnostic raises as
        message: The user-facing message
        file: Source file the diagnostic refers to
        line: 1-indexed line, or 0 for "no specific line"
    """

    kind: DiagnosticKind
    message: str
    file: str
    line: int = 0

    @property
    def location(self) -> str:
        return format_location(self.line, self.file)

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"

    def to_exception(self) -> DiagnosticError:
        """Build the exception carrying this diagnostic."""
        # errors imports this module
        from frontdiag.utils.errors import exception_class

        return exception_class(self.kind)(self.message, file=self.file, line=self.line)


@dataclass(frozen=True, slots=True)
class WarningEvent:
    """A located warning, forwarded to the session and printed once."""

    file: str
    line: int
    text: str

    @property
    def location(self) -> str:
        return format_location(self.line, self.file)

    def render(self) -> str:
        """Render as the two-line body printed after the warning prefix."""
        return f"{self.text}\n  {file_format(self.line, self.file)}"


__all__ = [
    "DiagnosticKind",
    "Diagnostic",
    "WarningEvent",
    "format_location",
    "file_format",
]
