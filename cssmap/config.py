"""Parse configuration for cssmap.

Usage:
    from cssmap import parse_stylesheet
    from cssmap.config import ParseConfig

    sheet = parse_stylesheet(data, ParseConfig(allow_unclosed_block=True))
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        encoding: Codec used when the input is bytes
        allow_unclosed_block: Merge a block left open at end of input
            instead of raising a ParseError
    """

    encoding: str = "utf-8"
    allow_unclosed_block: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> ParseConfig:
        """Create ParseConfig from a dictionary.

        Raises:
            ValueError: If the dictionary holds keys ParseConfig does not know.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ValueError(f"Unknown ParseConfig keys: {', '.join(unknown)}")
        return cls(**config_dict)


DEFAULT_CONFIG = ParseConfig()
