"""
Structured token decoding.

Three kinds of offending tokens reach the normalizer as serialized values
instead of plain text:

    {sigil,1,114,[<<"foo">>],[],nil}    a sigil node
    ['Elixir.Foo']                      a quoted alias
    [<<"bar">>]                         a list wrapping binary content

The helpers below decode them into small typed values so the normalizer
never has to look at the term grammar itself.
"""

from dataclasses import dataclass
from typing import Any, Union

from frontdiag.compiler.term_parser import Atom, ImproperList, parse_term
from frontdiag.utils.errors import TermDecodeError

SIGIL_MARKER = "{sigil,"
ALIAS_MARKER = "['"
LIST_MARKER = "["


@dataclass(frozen=True, slots=True)
class Sigil:
    """
    A decoded sigil node.

    Attributes:
        char: The sigil letter, e.g. "r" for ~r
        content: The first content part when it is text, else ""
    """

    char: str
    content: str


@dataclass(frozen=True, slots=True)
class Identifier:
    """A decoded alias name, e.g. "Elixir.Foo"."""

    name: str


StructuredToken = Union[Sigil, Identifier, list]


def decode_term(text: str) -> Any:
    """Decode any serialized term."""
    return parse_term(text)


def _sigil_from_term(term: Any, text: str) -> Sigil:
    if not (isinstance(term, tuple) and len(term) == 6 and term[0] == "sigil"):
        raise TermDecodeError("Expected a six element sigil tuple", text)

    _, _, char, parts, _, _ = term
    if not isinstance(parts, list) or not parts:
        raise TermDecodeError("Expected non-empty sigil content", text)

    if isinstance(char, int):
        char = chr(char)
    elif not isinstance(char, str):
        raise TermDecodeError(f"Invalid sigil letter {char!r}", text)

    content = parts[0] if is_text(parts[0]) else ""
    return Sigil(char=str(char), content=content)


def decode_sigil(text: str) -> Sigil:
    """Decode a serialized sigil node."""
    return _sigil_from_term(decode_term(text), text)


def _is_alias_list(term: Any) -> bool:
    return (
        isinstance(term, list)
        and not isinstance(term, ImproperList)
        and len(term) == 1
        and isinstance(term[0], Atom)
    )


def decode_alias(text: str) -> Identifier:
    """Decode a quoted alias wrapped in a one element list."""
    term = decode_term(text)
    if not _is_alias_list(term):
        raise TermDecodeError("Expected a single quoted alias", text)
    return Identifier(name=str(term[0]))


def decode_list(text: str) -> list:
    """
    Decode a list-wrapped token.

    An improper list such as [<<"x">>|foo] comes back as an ImproperList
    holding the elements before the bar.
    """
    term = decode_term(text)
    if not isinstance(term, list):
        raise TermDecodeError("Expected a list", text)
    return term


def is_text(value: Any) -> bool:
    """Whether a decoded value is binary text (not an atom or char list)."""
    return isinstance(value, str) and not isinstance(value, Atom)


def decode_structured_token(text: str) -> StructuredToken:
    """
    Decode a structured token by its shape.

    Sigil tuples become Sigil, a single quoted alias becomes Identifier and
    any other list is returned as decoded.
    """
    term = decode_term(text)

    if isinstance(term, tuple) and term and term[0] == "sigil":
        return _sigil_from_term(term, text)

    if isinstance(term, list):
        if text.lstrip().startswith(ALIAS_MARKER) and _is_alias_list(term):
            return Identifier(name=str(term[0]))
        return term

    raise TermDecodeError("Not a structured token", text)
