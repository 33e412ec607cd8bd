"""
Parse flat stylesheets into a mapping of selector to declarations.

    >>> from cssmap import parse_stylesheet
    >>> parse_stylesheet(b".box, p { color: red; }")
    {Rule('.box'): {'color': 'red'}, Rule('p'): {'color': 'red'}}

Selectors are `.class`, `#id` or bare tag names. Values are kept as opaque
strings. There is no support for combinators, at-rules or comments.
"""
from cssmap.config import ParseConfig
from cssmap.errors import CharsetError, CssmapError, ParseError
from cssmap.lexer import Lexer, LexerMode, read_css, tokenize
from cssmap.parser import Parse, Parser, parse_stylesheet
from cssmap.tokens import (
    Declarations,
    Rule,
    SelectorType,
    Stylesheet,
    Token,
    TokenKind,
    selector_type,
)

__version__ = "0.1.0"

__all__ = [
    "parse_stylesheet",
    "tokenize",
    "read_css",
    "Lexer",
    "LexerMode",
    "Parser",
    "Parse",
    "ParseConfig",
    "CssmapError",
    "CharsetError",
    "ParseError",
    "Token",
    "TokenKind",
    "Rule",
    "SelectorType",
    "selector_type",
    "Declarations",
    "Stylesheet",
]
