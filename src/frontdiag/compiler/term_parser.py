"""
Term Parser.

A recursive descent parser that turns a term token stream back into Python
values. The grammar is deliberately narrow: it reconstructs values that were
serialized by the compiler itself, never arbitrary source.

Value mapping:
    atom / 'quoted atom'   -> Atom (a str subclass)
    {A, B}                 -> tuple
    [A, B]                 -> list
    [A | B]                -> ImproperList (elements plus a non-list tail)
    "chars"                -> list of code points
    <<"bin", 1, 2>>        -> str
    1, 16#ff, $a, 1.5      -> int / float
"""

from typing import Any

from frontdiag.compiler.term_lexer import TermLexer
from frontdiag.compiler.term_tokens import TermToken, TermTokenType
from frontdiag.utils.errors import TermDecodeError

_NUMBER_TYPES = (TermTokenType.INTEGER, TermTokenType.FLOAT, TermTokenType.CHAR)
_UNICODE_SPECIFIERS = frozenset({"utf8", "utf16", "utf32"})


class Atom(str):
    """A decoded atom. Compares equal to its name."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Atom({str.__repr__(self)})"


class ImproperList(list):
    """
    A list whose final tail is not a list, such as [a | b].

    The list items are the elements before the bar; the tail is kept apart.
    """

    def __init__(self, elements: list, tail: Any) -> None:
        super().__init__(elements)
        self.tail = tail

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ImproperList):
            return list.__eq__(self, other) and self.tail == other.tail
        if isinstance(other, list):
            return False
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ImproperList({list.__repr__(self)}, tail={self.tail!r})"


class TermParser:
    """
    Parser for exactly one term followed by a DOT terminator.

    Usage:
        tokens = TermLexer(text).tokenize()
        value = TermParser(tokens, text).parse()
    """

    def __init__(self, tokens: list[TermToken], text: str = "") -> None:
        self.tokens = tokens
        self.text = text
        self.pos = 0

    @property
    def _current(self) -> TermToken:
        return self.tokens[self.pos]

    def _check(self, *types: TermTokenType) -> bool:
        return self._current.type in types

    def _advance(self) -> TermToken:
        token = self._current
        if token.type != TermTokenType.EOF:
            self.pos += 1
        return token

    def _match(self, *types: TermTokenType) -> bool:
        if self._check(*types):
            self._advance()
            return True
        return False

    def _expect(self, token_type: TermTokenType, message: str) -> TermToken:
        if self._check(token_type):
            return self._advance()
        raise self._error(message)

    def _error(self, message: str) -> TermDecodeError:
        return TermDecodeError(message, self.text, self._current.column)

    def parse(self) -> Any:
        """Parse one term and its terminator."""
        value = self._parse_term()
        self._expect(TermTokenType.DOT, "Expected end of term")
        if not self._check(TermTokenType.EOF):
            raise self._error("Unexpected input after term")
        return value

    def _parse_term(self) -> Any:
        token = self._current

        if token.type == TermTokenType.ATOM:
            self._advance()
            return Atom(token.value)

        if token.type in _NUMBER_TYPES:
            self._advance()
            return token.value

        if token.type in (TermTokenType.MINUS, TermTokenType.PLUS):
            return self._parse_signed_number()

        if token.type == TermTokenType.STRING:
            return self._parse_string()

        if token.type == TermTokenType.LBRACE:
            return self._parse_tuple()

        if token.type == TermTokenType.LBRACKET:
            return self._parse_list()

        if token.type == TermTokenType.BIN_OPEN:
            return self._parse_binary()

        if token.type == TermTokenType.VARIABLE:
            raise self._error(f"Variables are not allowed in terms: {token.value}")

        raise self._error(f"Unexpected token {token.type.name}")

    def _parse_signed_number(self) -> Any:
        sign = self._advance()
        if not self._check(*_NUMBER_TYPES):
            raise self._error("Expected a number after sign")
        value = self._advance().value
        return -value if sign.type == TermTokenType.MINUS else value

    def _parse_string(self) -> list[int]:
        # Adjacent string literals are concatenated
        chars: list[int] = []
        while self._check(TermTokenType.STRING):
            chars.extend(ord(c) for c in self._advance().value)
        return chars

    def _parse_tuple(self) -> tuple:
        self._expect(TermTokenType.LBRACE, "Expected '{'")
        elements: list[Any] = []
        if not self._check(TermTokenType.RBRACE):
            elements.append(self._parse_term())
            while self._match(TermTokenType.COMMA):
                elements.append(self._parse_term())
        self._expect(TermTokenType.RBRACE, "Expected '}' to close tuple")
        return tuple(elements)

    def _parse_list(self) -> list:
        self._expect(TermTokenType.LBRACKET, "Expected '['")
        elements: list[Any] = []
        if self._match(TermTokenType.RBRACKET):
            return elements

        elements.append(self._parse_term())
        while self._match(TermTokenType.COMMA):
            elements.append(self._parse_term())

        tail: Any = []
        if self._match(TermTokenType.PIPE):
            tail = self._parse_term()

        self._expect(TermTokenType.RBRACKET, "Expected ']' to close list")

        if isinstance(tail, ImproperList):
            return ImproperList(elements + list(tail), tail.tail)
        if isinstance(tail, list):
            return elements + tail
        return ImproperList(elements, tail)

    def _parse_binary(self) -> str:
        self._expect(TermTokenType.BIN_OPEN, "Expected '<<'")
        data = bytearray()
        if not self._check(TermTokenType.BIN_CLOSE):
            data.extend(self._parse_segment())
            while self._match(TermTokenType.COMMA):
                data.extend(self._parse_segment())
        self._expect(TermTokenType.BIN_CLOSE, "Expected '>>' to close binary")

        try:
            return bytes(data).decode("utf-8")
        except UnicodeDecodeError:
            return bytes(data).decode("latin-1")

    def _parse_segment(self) -> bytes:
        """Parse one binary segment: value[:size][/type-spec]."""
        if self._check(TermTokenType.STRING):
            value: Any = "".join(chr(c) for c in self._parse_string())
        elif self._check(TermTokenType.MINUS, TermTokenType.PLUS):
            value = self._parse_signed_number()
        elif self._check(TermTokenType.INTEGER, TermTokenType.CHAR):
            value = self._advance().value
        else:
            raise self._error(f"Unexpected token {self._current.type.name} in binary")

        size = 8
        if self._match(TermTokenType.COLON):
            size = self._expect(TermTokenType.INTEGER, "Expected segment size").value

        specifiers: set[str] = set()
        if self._match(TermTokenType.SLASH):
            specifiers.add(self._expect(TermTokenType.ATOM, "Expected type specifier").value)
            while self._match(TermTokenType.MINUS):
                specifiers.add(self._expect(TermTokenType.ATOM, "Expected type specifier").value)

        is_unicode = bool(specifiers & _UNICODE_SPECIFIERS)

        if isinstance(value, str):
            if is_unicode:
                return value.encode("utf-8")
            return bytes(ord(c) & 0xFF for c in value)

        if isinstance(value, float):
            raise self._error("Float segments are not supported")

        if is_unicode:
            if not 0 <= value <= 0x10FFFF:
                raise self._error(f"Invalid code point {value} in binary")
            return chr(value).encode("utf-8")

        if size % 8 != 0:
            raise self._error(f"Segment size {size} is not a whole number of bytes")
        width = size // 8
        return (value % (1 << size)).to_bytes(width, "big") if width else b""


def parse_term(text: str) -> Any:
    """
    Decode the textual form of a term.

    The text is tokenized, a DOT terminator is appended, and exactly one
    term is parsed from the result.

    Raises:
        TermDecodeError: If the text is not a well-formed term
    """
    tokens = TermLexer(text).tokenize()
    eof = tokens.pop()
    tokens.append(TermToken(TermTokenType.DOT, None, eof.column))
    tokens.append(eof)
    return TermParser(tokens, text).parse()
