"""
Console configuration for the diagnostic stream.

The ANSI-enabled flag is process wide. It is resolved lazily the first time
a warning is printed and can be pinned with set_ansi_enabled().

Resolution order:
    1. set_ansi_enabled() (or the CLI's --color / --no-color)
    2. FRONTDIAG_ANSI environment variable (1/true/yes/on, 0/false/no/off)
    3. NO_COLOR environment variable disables colors
    4. whether stderr is a TTY
"""

import os
import sys
from typing import Optional

ANSI_ENV_VAR = "FRONTDIAG_ANSI"

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off"})


class Colors:
    """ANSI escape codes used on the diagnostic stream."""

    YELLOW = "\033[33m"
    RED = "\033[31m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


_ansi_enabled: Optional[bool] = None


def _detect_ansi() -> bool:
    setting = os.environ.get(ANSI_ENV_VAR)
    if setting is not None:
        value = setting.strip().lower()
        if value in _TRUTHY:
            return True
        if value in _FALSY:
            return False

    if os.environ.get("NO_COLOR"):
        return False

    isatty = getattr(sys.stderr, "isatty", None)
    return bool(isatty and isatty())


def ansi_enabled() -> bool:
    """Whether diagnostic output should be colored."""
    global _ansi_enabled
    if _ansi_enabled is None:
        _ansi_enabled = _detect_ansi()
    return _ansi_enabled


def set_ansi_enabled(enabled: Optional[bool]) -> None:
    """Pin the ANSI flag, or pass None to re-detect on next use."""
    global _ansi_enabled
    _ansi_enabled = enabled


def colorize(text: str, color: str) -> str:
    """Wrap text in a color when ANSI output is enabled."""
    if not ansi_enabled():
        return text
    return f"{color}{text}{Colors.RESET}"


def warning_prefix() -> str:
    """The prefix written before every warning."""
    return colorize("warning: ", Colors.YELLOW)
