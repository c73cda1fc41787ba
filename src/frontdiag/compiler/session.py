"""
Compilation session collaborator.

A compilation session tracks the warnings produced while compiling one
unit. The reporter only ever talks to it through two calls:

- notify_warning(file, line, text): one-way, must not block
- register_warning(): bumps the session's warning counter

The handle is scoped per compilation with a context variable, so
independent threads and asyncio tasks each see their own session. When no
session is registered, reporting is a no-op on this side.

Usage:
    session = CompilationSession()
    with compilation_session(session):
        compile_unit(...)
    for event in session.drain():
        ...
"""

from __future__ import annotations

import logging
import queue
import threading
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional, Protocol, runtime_checkable

from frontdiag.utils.diagnostics import WarningEvent

logger = logging.getLogger(__name__)


@runtime_checkable
class CompilationSessionProtocol(Protocol):
    """What the reporter needs from a compilation session."""

    def notify_warning(self, file: str, line: int, text: str) -> None: ...

    def register_warning(self) -> None: ...


class CompilationSession:
    """
    In-process compilation session.

    Located warnings are posted to a mailbox without blocking; the
    compiler drains them when the unit is done. The warning counter is
    shared by every thread reporting into this session.
    """

    def __init__(self, name: str = "compilation") -> None:
        self.name = name
        self._mailbox: queue.SimpleQueue[WarningEvent] = queue.SimpleQueue()
        self._warning_count = 0
        self._lock = threading.Lock()

    def notify_warning(self, file: str, line: int, text: str) -> None:
        self._mailbox.put_nowait(WarningEvent(file=file, line=line, text=text))

    def register_warning(self) -> None:
        with self._lock:
            self._warning_count += 1

    @property
    def warning_count(self) -> int:
        with self._lock:
            return self._warning_count

    def drain(self) -> list[WarningEvent]:
        """Take every pending warning event, oldest first."""
        events: list[WarningEvent] = []
        while True:
            try:
                events.append(self._mailbox.get_nowait())
            except queue.Empty:
                return events

    def __repr__(self) -> str:
        return f"CompilationSession({self.name!r}, warnings={self.warning_count})"


_current_session: ContextVar[Optional[CompilationSessionProtocol]] = ContextVar(
    "frontdiag_compilation_session", default=None
)


def current_session() -> Optional[CompilationSessionProtocol]:
    """The session registered for the current compilation, if any."""
    return _current_session.get()


def set_session(
    session: Optional[CompilationSessionProtocol],
) -> Token[Optional[CompilationSessionProtocol]]:
    """Register a session for the current context and return a reset token."""
    logger.debug("Registering compilation session %r", session)
    return _current_session.set(session)


def reset_session(token: Token[Optional[CompilationSessionProtocol]]) -> None:
    """Restore the session that was active before set_session()."""
    _current_session.reset(token)


@contextmanager
def compilation_session(
    session: CompilationSessionProtocol,
) -> Iterator[CompilationSessionProtocol]:
    """Register a session for the duration of a compilation."""
    token = set_session(session)
    try:
        yield session
    finally:
        reset_session(token)
