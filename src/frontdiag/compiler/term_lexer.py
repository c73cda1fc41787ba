"""
Term Lexer.

Tokenizes the textual form of a serialized term such as
    {sigil,1,114,[<<"foo">>],[],nil}
    ['Elixir.Foo']
    [<<"bar">>]
"""

from typing import Iterator, Optional

from frontdiag.compiler.term_tokens import (
    DOUBLE_CHAR_TOKENS,
    ESCAPE_SEQUENCES,
    SINGLE_CHAR_TOKENS,
    TermToken,
    TermTokenType,
)
from frontdiag.utils.errors import TermDecodeError

DIGITS = "0123456789"


class TermLexer:
    """
    Tokenizer for serialized terms.

    Usage:
        tokens = TermLexer("['Elixir.Foo']").tokenize()
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.tokens: list[TermToken] = []

    @property
    def _current_char(self) -> Optional[str]:
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    @property
    def _peek_char(self) -> Optional[str]:
        peek_pos = self.pos + 1
        if peek_pos >= len(self.text):
            return None
        return self.text[peek_pos]

    @property
    def _column(self) -> int:
        return self.pos + 1

    def _advance(self) -> str:
        char = self.text[self.pos]
        self.pos += 1
        return char

    def _error(self, message: str, column: Optional[int] = None) -> TermDecodeError:
        return TermDecodeError(message, self.text, column if column is not None else self._column)

    def _skip_whitespace(self) -> None:
        while self._current_char is not None and self._current_char.isspace():
            self._advance()

    def _read_escape(self) -> str:
        """Read the character after a backslash and return its value."""
        char = self._current_char
        if char is None:
            raise self._error("Unterminated escape sequence")

        if char in "01234567":
            digits = ""
            while len(digits) < 3 and self._current_char is not None and self._current_char in "01234567":
                digits += self._advance()
            return chr(int(digits, 8))

        if char == "x":
            self._advance()
            digits = ""
            if self._current_char == "{":
                self._advance()
                while self._current_char is not None and self._current_char != "}":
                    digits += self._advance()
                if self._current_char is None:
                    raise self._error("Unterminated hex escape")
                self._advance()
            else:
                while len(digits) < 2 and self._current_char is not None:
                    digits += self._advance()
            try:
                return chr(int(digits, 16))
            except (ValueError, OverflowError):
                raise self._error(f"Invalid hex escape '\\x{digits}'") from None

        if char == "^" and self._peek_char is not None:
            # Control character, e.g. \^A
            self._advance()
            return chr(ord(self._advance()) % 32)

        self._advance()
        return ESCAPE_SEQUENCES.get(char, char)

    def _read_quoted(self, quote_char: str) -> str:
        start = self._column
        self._advance()  # consume opening quote

        value_chars: list[str] = []
        while True:
            char = self._current_char
            if char is None:
                kind = "string" if quote_char == '"' else "quoted atom"
                raise self._error(f"Unterminated {kind}", start)
            if char == quote_char:
                self._advance()
                break
            if char == "\\":
                self._advance()
                value_chars.append(self._read_escape())
            else:
                value_chars.append(self._advance())

        return "".join(value_chars)

    def _read_char(self) -> TermToken:
        """Read a $c character literal."""
        start = self._column
        self._advance()  # consume $
        char = self._current_char
        if char is None:
            raise self._error("Unterminated character literal", start)
        if char == "\\":
            self._advance()
            return TermToken(TermTokenType.CHAR, ord(self._read_escape()), start)
        self._advance()
        return TermToken(TermTokenType.CHAR, ord(char), start)

    def _read_number(self) -> TermToken:
        """
        Read an integer or float.

        Supports:
        - Decimal integers: 123
        - Floats: 1.5, 2.0e-3
        - Based integers: 16#ff
        - Underscores for readability: 1_000
        """
        start = self._column
        digits: list[str] = []
        while self._current_char is not None and (self._current_char in DIGITS or self._current_char == "_"):
            char = self._advance()
            if char != "_":
                digits.append(char)

        if self._current_char == "#":
            self._advance()
            base = int("".join(digits))
            if not 2 <= base <= 36:
                raise self._error(f"Invalid integer base {base}", start)
            based: list[str] = []
            while self._current_char is not None and (self._current_char.isalnum() or self._current_char == "_"):
                char = self._advance()
                if char != "_":
                    based.append(char)
            try:
                return TermToken(TermTokenType.INTEGER, int("".join(based), base), start)
            except ValueError:
                raise self._error(f"Invalid base {base} integer", start) from None

        is_float = False
        if self._current_char == "." and self._peek_char is not None and self._peek_char in DIGITS:
            is_float = True
            digits.append(self._advance())
            while self._current_char is not None and (self._current_char in DIGITS or self._current_char == "_"):
                char = self._advance()
                if char != "_":
                    digits.append(char)

            if self._current_char in ("e", "E"):
                digits.append(self._advance())
                if self._current_char in ("+", "-"):
                    digits.append(self._advance())
                if self._current_char is None or self._current_char not in DIGITS:
                    raise self._error("Invalid float exponent", start)
                while self._current_char is not None and self._current_char in DIGITS:
                    digits.append(self._advance())

        text = "".join(digits)
        if is_float:
            return TermToken(TermTokenType.FLOAT, float(text), start)
        return TermToken(TermTokenType.INTEGER, int(text), start)

    def _read_name(self) -> TermToken:
        """Read a bare atom or a variable name."""
        start = self._column
        chars: list[str] = []
        while self._current_char is not None and (self._current_char.isalnum() or self._current_char in "_@"):
            chars.append(self._advance())
        name = "".join(chars)

        if name[0].isupper() or name[0] == "_":
            return TermToken(TermTokenType.VARIABLE, name, start)
        return TermToken(TermTokenType.ATOM, name, start)

    def _next_token(self) -> TermToken:
        self._skip_whitespace()

        char = self._current_char
        if char is None:
            return TermToken(TermTokenType.EOF, None, self._column)

        if char == '"':
            start = self._column
            return TermToken(TermTokenType.STRING, self._read_quoted('"'), start)

        if char == "'":
            start = self._column
            return TermToken(TermTokenType.ATOM, self._read_quoted("'"), start)

        if char == "$":
            return self._read_char()

        if char in DIGITS:
            return self._read_number()

        if char.isalpha() or char == "_":
            return self._read_name()

        if self._peek_char is not None:
            pair = char + self._peek_char
            if pair in DOUBLE_CHAR_TOKENS:
                start = self._column
                self._advance()
                self._advance()
                return TermToken(DOUBLE_CHAR_TOKENS[pair], None, start)

        if char in SINGLE_CHAR_TOKENS:
            start = self._column
            self._advance()
            return TermToken(SINGLE_CHAR_TOKENS[char], None, start)

        if char == ".":
            start = self._column
            self._advance()
            return TermToken(TermTokenType.DOT, None, start)

        raise self._error(f"Unexpected character '{char}'")

    def tokenize(self) -> list[TermToken]:
        """
        Tokenize the whole text.

        Returns:
            A list of all tokens including the final EOF token.
        """
        self.tokens = []
        self.pos = 0

        while True:
            token = self._next_token()
            self.tokens.append(token)
            if token.type == TermTokenType.EOF:
                break

        return self.tokens

    def __iter__(self) -> Iterator[TermToken]:
        if not self.tokens:
            self.tokenize()
        return iter(self.tokens)
