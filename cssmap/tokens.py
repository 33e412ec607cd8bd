"""
Tokens produced by the lexer and the selector names the parser collects.

<ruleset>
    <selector/> <block>
        <property/>: <value/>;
    </block>
</ruleset>

selector => `.class`, `#id` or `tag`,
block => `{}`,
value => anything up to `;`, kept as an opaque string,
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing_extensions import TypeAliasType

__all__ = [
    "TokenKind",
    "Token",
    "SelectorType",
    "Rule",
    "selector_type",
    "Declarations",
    "Stylesheet",
]


class TokenKind(Enum):
    BlockStart = "BLOCK_START"
    BlockEnd = "BLOCK_END"
    SelectorPrefix = "SELECTOR_PREFIX"
    StyleSeparator = "STYLE_SEPARATOR"
    StatementEnd = "STATEMENT_END"
    Value = "VALUE"

    def __str__(self) -> str:
        return self.value

    @staticmethod
    def classify(raw: str) -> TokenKind:
        return PUNCTUATION.get(raw, TokenKind.Value)


PUNCTUATION: dict[str, TokenKind] = {
    "{": TokenKind.BlockStart,
    "}": TokenKind.BlockEnd,
    ":": TokenKind.StyleSeparator,
    ";": TokenKind.StatementEnd,
    ".": TokenKind.SelectorPrefix,
    "#": TokenKind.SelectorPrefix,
}


@dataclass(frozen=True, slots=True)
class Token:
    value: str
    line: int

    @property
    def kind(self) -> TokenKind:
        return TokenKind.classify(self.value)

    def __repr__(self) -> str:
        return f"{self.kind.name}({self.value!r}, line={self.line})"

    def __str__(self) -> str:
        return self.value


class SelectorType(Enum):
    Class = "class"
    Id = "id"
    Tag = "tag"

    def __str__(self) -> str:
        return self.value


def selector_type(rule: str) -> SelectorType:
    """Classify a selector name by its leading character."""
    if rule.startswith("."):
        return SelectorType.Class
    elif rule.startswith("#"):
        return SelectorType.Id
    return SelectorType.Tag


class Rule(str):
    """A single selector name used as a key of the stylesheet."""

    @property
    def type(self) -> SelectorType:
        return selector_type(self)

    def __repr__(self) -> str:
        return f"Rule({str(self)!r})"


Declarations = TypeAliasType("Declarations", dict[str, str])
Stylesheet = TypeAliasType("Stylesheet", dict[Rule, Declarations])
