"""
Pytest configuration and shared fixtures for frontdiag tests.
"""

import pytest

from frontdiag.compiler.raiser import parse_error
from frontdiag.compiler.session import CompilationSession, reset_session, set_session
from frontdiag.utils import console
from frontdiag.utils.errors import DiagnosticError


@pytest.fixture(autouse=True)
def plain_console():
    """Pin plain (uncolored) output unless a test opts in."""
    console.set_ansi_enabled(False)
    yield
    console.set_ansi_enabled(None)


@pytest.fixture
def session():
    """Register an in-process compilation session for the test."""
    active = CompilationSession("test")
    token = set_session(active)
    yield active
    reset_session(token)


class PrefixFormatter:
    """Error formatter that records what it was asked to format."""

    def __init__(self) -> None:
        self.calls: list[object] = []

    def format_error(self, desc: object) -> str:
        self.calls.append(desc)
        return f"formatted: {desc}"


@pytest.fixture
def formatter() -> PrefixFormatter:
    return PrefixFormatter()


@pytest.fixture
def raise_fragment():
    """Factory fixture returning the diagnostic raised for a parser fragment."""

    def _raise(prefix, token: str, line: int = 1, file: str = "lib/a.ex") -> DiagnosticError:
        with pytest.raises(DiagnosticError) as excinfo:
            parse_error(line, file, prefix, token)
        return excinfo.value

    return _raise
