"""Exception classes for cssmap."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cssmap.tokens import Stylesheet


class CssmapError(Exception):
    """Base exception for all cssmap errors."""

    pass


class ParseError(CssmapError):
    """A token showed up where the grammar does not allow it.

    Carries the rules committed from blocks that were closed before the
    offending token, so callers can keep the partial result if they want it.
    """

    def __init__(
        self,
        message: str,
        line: int,
        token_text: str = "",
        stylesheet: Stylesheet | None = None,
    ) -> None:
        """Initialize parse error.

        Args:
            message: Error description
            line: Line of the offending token (1-indexed)
            token_text: Literal text of the offending token, empty at end of input
            stylesheet: Rules committed before the error
        """
        self.message = message
        self.line = line
        self.token_text = token_text
        self.stylesheet = stylesheet if stylesheet is not None else {}
        super().__init__(f"line {line}: {message}")


class CharsetError(CssmapError):
    """The input names an encoding Python has no codec for."""

    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(f"unknown encoding {encoding!r}")
