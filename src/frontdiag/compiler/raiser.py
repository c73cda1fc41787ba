"""
Raising fatal diagnostics.

Every fatal diagnostic leaves through raise_diagnostic(), which builds the
kind's exception and raises it so control transfers to the nearest
enclosing handler. The raising helpers in this module mark their frames
with `__tracebackhide__` (the convention pytest also honors), and both the
stack captured on the exception and trimmed_traceback() start at the first
frame outside of them.

Nothing on this path writes to a stream or a log: the exception boundary
decides how a diagnostic is printed.
"""

from __future__ import annotations

import sys
import traceback
from types import FrameType, TracebackType
from typing import Any, NoReturn, Optional, Protocol, Union

from frontdiag.compiler.location import MetaLike, coerce_line, resolve_location
from frontdiag.compiler.normalizer import ErrorPrefix, normalize
from frontdiag.utils.diagnostics import DiagnosticKind
from frontdiag.utils.errors import DiagnosticError, exception_class


class ErrorFormatter(Protocol):
    """Anything that can turn an error description into text."""

    def format_error(self, desc: Any) -> str: ...


def _is_hidden(frame: FrameType) -> bool:
    return bool(frame.f_locals.get("__tracebackhide__", False))


def _caller_frame() -> Optional[FrameType]:
    frame: Optional[FrameType] = sys._getframe(1)
    while frame is not None and _is_hidden(frame):
        frame = frame.f_back
    return frame


def raise_diagnostic(line: Any, file: str, kind: DiagnosticKind, message: str) -> NoReturn:
    """
    Raise the exception for a diagnostic.

    Args:
        line: Line number, None (treated as 0) or a (line, column, ...) position
        file: File the diagnostic refers to
        kind: Which diagnostic kind to raise
        message: The final, user-facing message

    Raises:
        DiagnosticError: Always, as the subclass matching `kind`
    """
    __tracebackhide__ = True
    line = coerce_line(line)
    if not isinstance(file, str):
        raise TypeError(f"file must be a string, got {file!r}")
    if not isinstance(message, str):
        raise TypeError(f"message must be a string, got {message!r}")
    if not isinstance(kind, DiagnosticKind):
        raise TypeError(f"kind must be a DiagnosticKind, got {kind!r}")

    exc = exception_class(kind)(message, file=file, line=line)
    exc.stacktrace = traceback.extract_stack(_caller_frame())
    raise exc


def compile_error(meta: MetaLike, file: str, message: Union[str, bytes], *args: Any) -> NoReturn:
    """
    Raise a CompileError at the node described by `meta`.

    `message` is a ready-made string (or UTF-8 bytes). When `args` are
    given it is treated as a format string and rendered with str.format.
    """
    __tracebackhide__ = True
    if isinstance(message, (bytes, bytearray)):
        message = bytes(message).decode("utf-8")
    if args:
        message = message.format(*args)

    meta_file, meta_line = resolve_location(meta, file)
    raise_diagnostic(meta_line, meta_file, DiagnosticKind.COMPILE_ERROR, message)


def form_error(meta: MetaLike, file: str, formatter: ErrorFormatter, desc: Any) -> NoReturn:
    """Raise a CompileError whose message comes from `formatter.format_error(desc)`."""
    __tracebackhide__ = True
    compile_error(meta, file, formatter.format_error(desc))


def parse_error(line: Any, file: str, prefix: ErrorPrefix, token: str) -> NoReturn:
    """
    Raise the normalized diagnostic for a raw parser fragment.

    Raises:
        TokenMissingError: When the input ended early
        SyntaxError: For every other fragment
        TermDecodeError: If a structured token is malformed
    """
    __tracebackhide__ = True
    diagnostic = normalize(coerce_line(line), file, prefix, token)
    raise_diagnostic(diagnostic.line, diagnostic.file, diagnostic.kind, diagnostic.message)


# =============================================================================
# Exception Boundary Helpers
# =============================================================================


def _walk_visible(tb: Optional[TracebackType]) -> list[traceback.FrameSummary]:
    frames: list[traceback.FrameSummary] = []
    while tb is not None:
        frame = tb.tb_frame
        if not _is_hidden(frame):
            code = frame.f_code
            frames.append(
                traceback.FrameSummary(code.co_filename, tb.tb_lineno, code.co_name)
            )
        tb = tb.tb_next
    return frames


def trimmed_traceback(exc: BaseException) -> traceback.StackSummary:
    """The exception's traceback without the raising helpers' frames."""
    return traceback.StackSummary.from_list(_walk_visible(exc.__traceback__))


def format_diagnostic_error(exc: DiagnosticError, with_traceback: bool = False) -> str:
    """
    Render a raised diagnostic the way an exception boundary prints it.

    Example:
        ** (SyntaxError) lib/a.ex:3: unexpected token: end
    """
    header = f"** ({exc.kind.value}) {exc.location}: {exc.message}"
    if not with_traceback:
        return header

    stack = trimmed_traceback(exc)
    if not stack and exc.stacktrace is not None:
        stack = exc.stacktrace
    return header + "\n" + "".join(stack.format()).rstrip("\n")
