""" CSS LEXING

The lexer has two modes. After a `:` it reads a value, which runs up to the
next `;`, `:`, brace, tab or newline and may hold spaces, `.` and `#`:

    border: 1px solid #fff;
            ^^^^^^^^^^^^^^ one token

Everywhere else it reads selectors and property names, which also stop at
`#`, `.`, `,` and spaces so that `.a, #b` splits into prefix and name tokens.

{ } : ; . # => single character punctuation,
anything else => value,
"""

from __future__ import annotations
from enum import Enum, auto
from os import PathLike
import codecs
import re

from cssmap.errors import CharsetError
from cssmap.logger import get_logger
from cssmap.tokens import Token, TokenKind

__all__ = ["LexerMode", "Lexer", "tokenize", "read_css", "decode"]

logger = get_logger(__name__)

REPLACEMENT_CHAR = "\uFFFD"
RETURNS = re.compile("\r\n|\f|\r")
VALUE_STOP = "\n\t:;{}"
SELECTOR_STOP = VALUE_STOP + "#. ,"


class LexerMode(Enum):
    """Which identifier rules apply to the next token."""

    Selector = auto()  # selectors and property names
    Value = auto()  # right after a `:`

    @staticmethod
    def after(token: Token) -> LexerMode:
        if token.kind is TokenKind.StyleSeparator:
            return LexerMode.Value
        return LexerMode.Selector


class Check:
    @staticmethod
    def whitespace(current: str | None) -> bool:
        return current is not None and current in "\t\n "

    @staticmethod
    def separator(current: str | None, mode: LexerMode) -> bool:
        return mode is LexerMode.Selector and current == ","

    @staticmethod
    def ident(current: str | None, mode: LexerMode) -> bool:
        if current is None:
            return False
        if mode is LexerMode.Value:
            return current not in VALUE_STOP
        return current not in SELECTOR_STOP


class Lexer:
    def __init__(self, source: str) -> None:
        self.source: str = RETURNS.sub("\n", source).replace("\u0000", REPLACEMENT_CHAR)
        self.index = 0
        self.line = 1
        self.mode = LexerMode.Selector

    @staticmethod
    def from_path(path: str | PathLike[str]) -> Lexer:
        return Lexer(read_css(path))

    def __iter__(self):
        return self

    def __next__(self) -> Token:
        token = self.consume(self.mode)
        if token is None:
            raise StopIteration
        self.mode = LexerMode.after(token)
        return token

    def process(self) -> list[Token]:
        """Tokenize the entire source at once."""
        tokens = [token for token in self]
        logger.debug("Tokenized %d tokens over %d lines", len(tokens), self.line)
        return tokens

    def peek(self, amount: int = 1) -> str | None:
        """The next code point."""
        index = self.index + amount - 1
        if index < len(self.source):
            return self.source[index]
        return None

    def next(self) -> str | None:
        if self.index < len(self.source):
            current = self.source[self.index]
            self.index += 1
            if current == "\n":
                self.line += 1
            return current
        return None

    def _skip_(self, mode: LexerMode) -> None:
        while Check.whitespace(self.peek()) or Check.separator(self.peek(), mode):
            self.next()

    def _consume_ident_(self, mode: LexerMode) -> str:
        result = ""
        while Check.ident(self.peek(), mode):
            result += self.next()
        if mode is LexerMode.Value:
            result = result.rstrip(" ")
        return result

    def consume(self, mode: LexerMode) -> Token | None:
        """Consume code points and return the next token, or None at end of input."""
        self._skip_(mode)
        line = self.line
        if self.peek() is None:
            return None
        if Check.ident(self.peek(), mode):
            return Token(self._consume_ident_(mode), line)
        return Token(self.next(), line)


def tokenize(source: str) -> list[Token]:
    return Lexer(source).process()


def decode(data: bytes, encoding: str) -> str:
    """Decode stylesheet bytes, substituting REPLACEMENT_CHAR for invalid sequences.

    Raises:
        CharsetError: If no codec is registered for ``encoding``.
    """
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise CharsetError(encoding) from None
    return data.decode(encoding, errors="replace")


def read_css(path: str | PathLike[str]) -> str:
    """Read a stylesheet file, honouring a leading `@charset "...";`.

    The charset declaration itself is dropped from the returned text.
    """
    with open(path, "rb") as f:
        data = f.read()

    if data.startswith(b"@charset"):
        end = data.find(b";")
        if end != -1:
            charset = data[len(b"@charset"):end].decode("ascii", errors="replace").strip().replace('"', "").lower()
            logger.debug("Reading %s as %s", path, charset)
            return decode(data[end + 1:], charset)
    return decode(data, "utf-8-sig")
