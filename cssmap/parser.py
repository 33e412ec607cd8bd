""" CSS Parser

Drains the token list front to back. The only state carried between tokens
is the kind of the previous token plus the accumulators below, so every
transition can be checked against the one before it:

    .box, #main {      selectors, then BLOCK_START
        color: red;    VALUE STYLE_SEPARATOR VALUE STATEMENT_END
    }                  BLOCK_END merges into every pending selector

A selector that shows up again later can only gain properties. Whatever
was set first for a property wins.
"""

from __future__ import annotations

from cssmap.config import DEFAULT_CONFIG, ParseConfig
from cssmap.errors import ParseError
from cssmap.lexer import Lexer, decode
from cssmap.logger import get_logger
from cssmap.tokens import Rule, Stylesheet, Token, TokenKind

__all__ = ["Parser", "Parse", "parse_stylesheet"]

logger = get_logger(__name__)

Tokens = list[Token] | str


class Parser:
    def __init__(self, tokens: Tokens, config: ParseConfig | None = None) -> None:
        self.tokens: list[Token] = Parse.normalize(tokens)
        self.index = 0
        self.config = config or DEFAULT_CONFIG

        self.stylesheet: Stylesheet = {}
        self.rules: list[str] = []
        self.declarations: dict[str, str] = {}
        self.property = ""
        self.value = ""
        self.prefix = ""
        self.in_block = False
        # None until the first token has been consumed
        self.previous: TokenKind | None = None
        self.last: Token | None = None

    def next(self) -> Token | None:
        if self.index < len(self.tokens):
            token = self.tokens[self.index]
            self.index += 1
            return token
        return None

    def error(self, token: Token, message: str | None = None):
        message = message or f"unexpected token {token.value!r} ({token.kind})"
        logger.debug("Syntax error on line %d: %s", token.line, message)
        raise ParseError(message, token.line, token.value, self.stylesheet)

    def parse(self) -> Stylesheet:
        while (token := self.next()) is not None:
            self.consume(token)
            self.previous = token.kind
            self.last = token
        self.finish()
        return self.stylesheet

    def consume(self, token: Token):
        kind = token.kind
        if kind is TokenKind.Value:
            self.consume_value(token)
        elif kind is TokenKind.SelectorPrefix:
            if self.in_block:
                self.error(token)
            self.prefix = token.value
        elif kind is TokenKind.StyleSeparator:
            if not (self.in_block and self.previous is TokenKind.Value and self.property and not self.value):
                self.error(token)
        elif kind is TokenKind.BlockStart:
            if self.in_block or self.previous is not TokenKind.Value:
                self.error(token)
            self.in_block = True
        elif kind is TokenKind.StatementEnd:
            if not (self.in_block and self.previous is TokenKind.Value and self.property and self.value):
                self.error(token)
            self.commit()
        elif kind is TokenKind.BlockEnd:
            if not self.in_block:
                self.error(token)
            if self.previous is TokenKind.Value:
                if not (self.property and self.value):
                    self.error(token)
                # last declaration of a block may omit its `;`
                self.commit()
            elif self.previous not in (TokenKind.BlockStart, TokenKind.StatementEnd):
                self.error(token)
            self.close_block()

    def consume_value(self, token: Token):
        previous = self.previous
        if previous is TokenKind.StyleSeparator:
            self.value = token.value
        elif self.in_block:
            if previous not in (TokenKind.BlockStart, TokenKind.StatementEnd):
                self.error(token)
            self.property = token.value
        elif previous is None or previous is TokenKind.BlockEnd:
            self.rules = [token.value]
        elif previous is TokenKind.SelectorPrefix:
            self.rules.append(self.prefix + token.value)
            self.prefix = ""
        elif previous is TokenKind.Value:
            self.rules.append(token.value)
        else:
            self.error(token)

    def commit(self):
        self.declarations[self.property] = self.value
        self.property, self.value = "", ""

    def close_block(self):
        for name in self.rules:
            existing = self.stylesheet.setdefault(Rule(name), {})
            for prop, value in self.declarations.items():
                existing.setdefault(prop, value)
        logger.debug("Merged %d declarations into %s", len(self.declarations), ", ".join(self.rules))

        self.rules = []
        self.declarations = {}
        self.property, self.value = "", ""
        self.in_block = False

    def finish(self):
        """Check the state left behind once every token is consumed."""
        if not (self.in_block or self.rules or self.prefix):
            return

        line = self.last.line if self.last is not None else 1
        if self.in_block and self.config.allow_unclosed_block:
            logger.warning("Block for %s was not closed before end of input", ", ".join(self.rules))
            if self.previous is TokenKind.Value and self.property and self.value:
                self.commit()
            self.close_block()
            return

        message = "unexpected end of input, block was not closed" if self.in_block else "unexpected end of input"
        logger.debug("Syntax error on line %d: %s", line, message)
        raise ParseError(message, line, "", self.stylesheet)


class Parse:
    @staticmethod
    def normalize(_input_: Tokens) -> list[Token]:
        if isinstance(_input_, list):
            return _input_
        elif isinstance(_input_, str):
            return Lexer(_input_).process()
        raise TypeError(
            "Unexpected input to parse. Expected string or list of tokens."
        )

    @staticmethod
    def parse_stylesheet(source: Tokens, config: ParseConfig | None = None) -> Stylesheet:
        return Parser(source, config).parse()


def parse_stylesheet(raw: bytes | str, config: ParseConfig | None = None) -> Stylesheet:
    """Parse raw stylesheet text into a mapping of selector to declarations.

    Bytes are decoded with ``config.encoding``. Invalid byte sequences become
    U+FFFD instead of failing.

    Raises:
        CharsetError: If ``config.encoding`` names no known codec.
        ParseError: On the first token the grammar does not allow. The error
            keeps the rules committed before that token in ``stylesheet``.
    """
    config = config or DEFAULT_CONFIG
    if isinstance(raw, (bytes, bytearray)):
        raw = decode(bytes(raw), config.encoding)
    return Parse.parse_stylesheet(raw, config)
