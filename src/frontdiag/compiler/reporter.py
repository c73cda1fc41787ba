"""
Warning reporting.

Warnings never abort compilation. Each one is written to the diagnostic
stream (stderr) and, when a compilation session is registered, reported to
it as well:

    warning: variable "x" is unused
      lib/a.ex:3
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from frontdiag.compiler.location import MetaLike, coerce_line, resolve_location
from frontdiag.compiler.raiser import ErrorFormatter
from frontdiag.compiler.session import current_session
from frontdiag.utils.console import warning_prefix
from frontdiag.utils.diagnostics import file_format

logger = logging.getLogger(__name__)


def warn(line: Any, file: str, text: str) -> None:
    """
    Report a warning located at (file, line).

    The session, if any, is notified without waiting; the warning is then
    printed with its location on the line below.
    """
    line = coerce_line(line)

    session = current_session()
    if session is not None:
        try:
            session.notify_warning(file, line, text)
        except Exception:
            logger.debug("Session did not accept warning for %s:%d", file, line, exc_info=True)

    warn_message(f"{text}\n  {file_format(line, file)}")


def warn_message(text: str) -> None:
    """Report a warning without a location."""
    session = current_session()
    if session is not None:
        try:
            session.register_warning()
        except Exception:
            logger.debug("Session did not register warning", exc_info=True)

    sys.stderr.write(f"{warning_prefix()}{text}\n")


def form_warn(meta: MetaLike, file: str, formatter: ErrorFormatter, desc: Any) -> None:
    """Report a warning whose text comes from `formatter.format_error(desc)`."""
    meta_file, meta_line = resolve_location(meta, file)
    warn(meta_line, meta_file, formatter.format_error(desc))
