"""
frontdiag compiler-facing API.

The lexer and parser call into this package when they fail:

    parse_error(line, file, "syntax error before: ", token)
    compile_error(meta, file, "undefined function {0}/{1}", name, arity)
    form_error(meta, file, formatter, desc)
    form_warn(meta, file, formatter, desc)
    warn(line, file, text)
"""

from frontdiag.compiler.location import LocationMeta, coerce_line, resolve_location
from frontdiag.compiler.normalizer import (
    RULES,
    RULES_BY_NAME,
    NormalizationRule,
    normalize,
    select_rule,
)
from frontdiag.compiler.raiser import (
    ErrorFormatter,
    compile_error,
    form_error,
    format_diagnostic_error,
    parse_error,
    raise_diagnostic,
    trimmed_traceback,
)
from frontdiag.compiler.reporter import form_warn, warn, warn_message
from frontdiag.compiler.session import (
    CompilationSession,
    CompilationSessionProtocol,
    compilation_session,
    current_session,
    reset_session,
    set_session,
)
from frontdiag.compiler.term_decoder import (
    Identifier,
    Sigil,
    decode_structured_token,
    decode_term,
)

__all__ = [
    # Location
    "LocationMeta",
    "coerce_line",
    "resolve_location",
    # Normalization
    "NormalizationRule",
    "RULES",
    "RULES_BY_NAME",
    "normalize",
    "select_rule",
    # Raising
    "ErrorFormatter",
    "raise_diagnostic",
    "compile_error",
    "form_error",
    "parse_error",
    "trimmed_traceback",
    "format_diagnostic_error",
    # Warnings
    "warn",
    "warn_message",
    "form_warn",
    # Sessions
    "CompilationSessionProtocol",
    "CompilationSession",
    "compilation_session",
    "current_session",
    "set_session",
    "reset_session",
    # Structured tokens
    "Sigil",
    "Identifier",
    "decode_term",
    "decode_structured_token",
]
