"""
Compilation session backed by a language server.

Registered as the compilation session while an editor-triggered compile
runs, it publishes every located warning to the client as it arrives and
can report the fatal diagnostic that ended the compilation.

Usage:
    session = LanguageServerSession(server)
    with compilation_session(session):
        try:
            compile_unit(...)
        except DiagnosticError as exc:
            session.report_error(exc)
"""

import logging
import threading

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from frontdiag.lsp.diagnostics import (
    error_to_lsp_diagnostic,
    file_uri,
    warning_to_lsp_diagnostic,
)
from frontdiag.utils.diagnostics import WarningEvent
from frontdiag.utils.errors import DiagnosticError

logger = logging.getLogger(__name__)


class LanguageServerSession:
    """
    Session collaborator that forwards diagnostics to an LSP client.

    Diagnostics are accumulated per document URI because
    textDocument/publishDiagnostics replaces the full set each time.
    """

    def __init__(self, server: LanguageServer) -> None:
        self._server = server
        self._diagnostics: dict[str, list[types.Diagnostic]] = {}
        self._warning_count = 0
        self._lock = threading.Lock()

    @property
    def warning_count(self) -> int:
        with self._lock:
            return self._warning_count

    def diagnostics_for(self, file: str) -> list[types.Diagnostic]:
        """Diagnostics published so far for a file."""
        with self._lock:
            return list(self._diagnostics.get(file_uri(file), []))

    def notify_warning(self, file: str, line: int, text: str) -> None:
        diagnostic = warning_to_lsp_diagnostic(WarningEvent(file=file, line=line, text=text))
        self._add(file_uri(file), diagnostic)

    def register_warning(self) -> None:
        with self._lock:
            self._warning_count += 1

    def report_error(self, error: DiagnosticError) -> None:
        """Publish the diagnostic that aborted the compilation."""
        self._add(file_uri(error.file), error_to_lsp_diagnostic(error))

    def clear(self, file: str) -> None:
        """Forget and unpublish everything reported for a file."""
        uri = file_uri(file)
        with self._lock:
            self._diagnostics.pop(uri, None)
        self._publish(uri, [])

    def _add(self, uri: str, diagnostic: types.Diagnostic) -> None:
        with self._lock:
            published = self._diagnostics.setdefault(uri, [])
            published.append(diagnostic)
            snapshot = list(published)
        self._publish(uri, snapshot)

    def _publish(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        logger.debug("Publishing %d diagnostics for %s", len(diagnostics), uri)
        self._server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )
