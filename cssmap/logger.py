"""Loggers for the cssmap modules.

Everything cssmap logs goes under the ``cssmap`` logger. The lexer reports
token counts and the parser reports merges at DEBUG. A block salvaged at end
of input is reported at WARNING. No handlers are installed here; the
``cssmap -v`` command calls ``logging.basicConfig`` itself.
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, nested under ``cssmap``.

    >>> get_logger("cssmap.parser").name
    'cssmap.parser'
    >>> get_logger("plugin").name
    'cssmap.plugin'
    """
    if name != "cssmap" and not name.startswith("cssmap."):
        name = f"cssmap.{name}"
    return logging.getLogger(name)
