"""
Parse error message normalization.

The parser reports failures as an (error, token) fragment: `error` is a
prefix such as "syntax error before: " (or a (prefix, suffix) pair meant to
surround the token) and `token` is the text following the point of failure.
The ordered rule table below rewrites these fragments into readable
messages. Rules are tried top to bottom and the first match wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from frontdiag.compiler.term_decoder import (
    ALIAS_MARKER,
    LIST_MARKER,
    SIGIL_MARKER,
    decode_alias,
    decode_list,
    decode_sigil,
    is_text,
)
from frontdiag.utils.diagnostics import Diagnostic, DiagnosticKind

ErrorPrefix = Union[str, tuple[str, str]]

SYNTAX_ERROR_BEFORE = "syntax error before: "

INCOMPLETE_EXPRESSION_MESSAGE = "syntax error: expression is incomplete"
END_OF_LINE_MESSAGE = (
    "unexpectedly reached end of line. The current expression is invalid or incomplete"
)
DANGLING_END_MESSAGE = "unexpected token: end"


@dataclass(frozen=True, slots=True)
class NormalizationRule:
    """
    One row of the normalization table.

    Attributes:
        name: Stable identifier of the rule
        kind: Diagnostic kind produced when the rule matches
        matches: Predicate over (error, token)
        render: Builds the final message from (error, token)
    """

    name: str
    kind: DiagnosticKind
    matches: Callable[[ErrorPrefix, str], bool]
    render: Callable[[ErrorPrefix, str], str]

    def apply(self, line: int, file: str, error: ErrorPrefix, token: str) -> Diagnostic:
        return Diagnostic(kind=self.kind, message=self.render(error, token), file=file, line=line)


def _is_pair(error: ErrorPrefix) -> bool:
    return (
        isinstance(error, tuple)
        and len(error) == 2
        and isinstance(error[0], str)
        and isinstance(error[1], str)
    )


def _is_syntax_error_before(error: ErrorPrefix) -> bool:
    return isinstance(error, str) and error == SYNTAX_ERROR_BEFORE


def _error_text(error: ErrorPrefix) -> str:
    if _is_pair(error):
        return error[0] + error[1]
    return error


def _render_sigil(error: ErrorPrefix, token: str) -> str:
    sigil = decode_sigil(token)
    return f"syntax error before: sigil ~{sigil.char} starting with content '{sigil.content}'"


def _render_alias(error: ErrorPrefix, token: str) -> str:
    return error + decode_alias(token).name


def _render_list(error: ErrorPrefix, token: str) -> str:
    elements = decode_list(token)
    if elements and is_text(elements[0]):
        return f'{error}"{elements[0]}"'
    return f'{error}"'


RULES: tuple[NormalizationRule, ...] = (
    NormalizationRule(
        name="incomplete-expression",
        kind=DiagnosticKind.TOKEN_MISSING_ERROR,
        matches=lambda error, token: token == "" and _is_syntax_error_before(error),
        render=lambda error, token: INCOMPLETE_EXPRESSION_MESSAGE,
    ),
    NormalizationRule(
        name="missing-token",
        kind=DiagnosticKind.TOKEN_MISSING_ERROR,
        matches=lambda error, token: token == "",
        render=lambda error, token: _error_text(error),
    ),
    NormalizationRule(
        name="end-of-line",
        kind=DiagnosticKind.SYNTAX_ERROR,
        matches=lambda error, token: _is_syntax_error_before(error) and token == "eol",
        render=lambda error, token: END_OF_LINE_MESSAGE,
    ),
    NormalizationRule(
        name="dangling-end",
        kind=DiagnosticKind.SYNTAX_ERROR,
        matches=lambda error, token: _is_syntax_error_before(error) and token == "'end'",
        render=lambda error, token: DANGLING_END_MESSAGE,
    ),
    NormalizationRule(
        name="sigil",
        kind=DiagnosticKind.SYNTAX_ERROR,
        matches=lambda error, token: _is_syntax_error_before(error) and token.startswith(SIGIL_MARKER),
        render=_render_sigil,
    ),
    # Must stay ahead of list-wrapped: aliases also start with "["
    NormalizationRule(
        name="alias",
        kind=DiagnosticKind.SYNTAX_ERROR,
        matches=lambda error, token: isinstance(error, str) and token.startswith(ALIAS_MARKER),
        render=_render_alias,
    ),
    NormalizationRule(
        name="list-wrapped",
        kind=DiagnosticKind.SYNTAX_ERROR,
        matches=lambda error, token: isinstance(error, str) and token.startswith(LIST_MARKER),
        render=_render_list,
    ),
    NormalizationRule(
        name="prefix-suffix",
        kind=DiagnosticKind.SYNTAX_ERROR,
        matches=lambda error, token: _is_pair(error),
        render=lambda error, token: error[0] + token + error[1],
    ),
    NormalizationRule(
        name="concatenate",
        kind=DiagnosticKind.SYNTAX_ERROR,
        matches=lambda error, token: True,
        render=lambda error, token: error + token,
    ),
)

RULES_BY_NAME: dict[str, NormalizationRule] = {rule.name: rule for rule in RULES}


def _validate(prefix: ErrorPrefix, token: str) -> None:
    if not isinstance(token, str):
        raise TypeError(f"token must be a string, got {token!r}")
    if not (isinstance(prefix, str) or _is_pair(prefix)):
        raise TypeError(f"prefix must be a string or a (prefix, suffix) pair, got {prefix!r}")


def select_rule(prefix: ErrorPrefix, token: str) -> NormalizationRule:
    """Return the first rule matching the fragment."""
    _validate(prefix, token)
    for rule in RULES:
        if rule.matches(prefix, token):
            return rule
    raise AssertionError("the concatenate rule matches every fragment")


def normalize(line: int, file: str, prefix: ErrorPrefix, token: str) -> Diagnostic:
    """
    Turn a raw parser fragment into a diagnostic.

    Args:
        line: Line of the failure (0 if unknown)
        file: File being parsed
        prefix: Prefix string, or a (prefix, suffix) pair surrounding the token
        token: Text following the point of failure, possibly empty

    Returns:
        The normalized diagnostic

    Raises:
        TermDecodeError: If a structured token is malformed
    """
    return select_rule(prefix, token).apply(line, file, prefix, token)
