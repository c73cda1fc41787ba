"""
Token definitions for the structured-token term lexer.

Structured tokens are serialized internal values (tuples, lists, atoms,
binaries) that the parser hands over instead of plain text. This module
defines the small set of tokens needed to read them back.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class TermTokenType(Enum):
    """Enumeration of all token types in the term grammar."""

    # End of input
    EOF = auto()

    # Terminator appended before parsing
    DOT = auto()

    # Literals
    ATOM = auto()
    VARIABLE = auto()
    INTEGER = auto()
    FLOAT = auto()
    CHAR = auto()
    STRING = auto()

    # Delimiters
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    BIN_OPEN = auto()  # <<
    BIN_CLOSE = auto()  # >>

    # Punctuation
    COMMA = auto()
    PIPE = auto()  # |
    COLON = auto()  # segment size
    SLASH = auto()  # segment type specifier
    MINUS = auto()
    PLUS = auto()


SINGLE_CHAR_TOKENS: dict[str, TermTokenType] = {
    "{": TermTokenType.LBRACE,
    "}": TermTokenType.RBRACE,
    "[": TermTokenType.LBRACKET,
    "]": TermTokenType.RBRACKET,
    ",": TermTokenType.COMMA,
    "|": TermTokenType.PIPE,
    ":": TermTokenType.COLON,
    "/": TermTokenType.SLASH,
    "-": TermTokenType.MINUS,
    "+": TermTokenType.PLUS,
}

DOUBLE_CHAR_TOKENS: dict[str, TermTokenType] = {
    "<<": TermTokenType.BIN_OPEN,
    ">>": TermTokenType.BIN_CLOSE,
}

ESCAPE_SEQUENCES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "s": " ",
    "e": "\x1b",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "d": "\x7f",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


@dataclass
class TermToken:
    """
    A single token of a structured-token text.

    Attributes:
        type: The type of this token
        value: The decoded literal value (None for punctuation)
        column: 1-indexed column where the token starts
    """

    type: TermTokenType
    value: Any
    column: int

    def __repr__(self) -> str:
        if self.value is not None:
            return f"TermToken({self.type.name}, {self.value!r}, col {self.column})"
        return f"TermToken({self.type.name}, col {self.column})"
