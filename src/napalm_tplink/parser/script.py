"""Extraction of JavaScript array literals from TP-Link web UI pages.

Every report page carries its data in inline ``<script>`` blocks, either as
object properties (``state:[1,1,0,1]``) or as declarations
(``var cablestate = [1,-1,3];``).  All domain parsers go through
:class:`ScriptArrays` so the extraction strategy can change without touching
them.
"""

from __future__ import annotations

import re
from functools import lru_cache

from napalm_tplink.parser.html import script_text

_DECIMAL_RE: re.Pattern[str] = re.compile(r"[+-]?[0-9]+")
_HEX_RE: re.Pattern[str] = re.compile(r"0[xX]([0-9a-fA-F]+)")
_QUOTED_RE: re.Pattern[str] = re.compile(r"'([^']*)'")


@lru_cache(maxsize=64)
def _array_re(name: str) -> re.Pattern[str]:
    # The lookbehind keeps "state" from matching inside "cablestate" or "link_state".
    return re.compile(
        rf"(?<![\w$.])(?:var\s+)?{re.escape(name)}\s*[:=]\s*\[([^\]]*)\]"
    )


@lru_cache(maxsize=64)
def _scalar_re(name: str) -> re.Pattern[str]:
    return re.compile(rf"(?<![\w$.])(?:var\s+)?{re.escape(name)}\s*[:=]\s*([0-9]+)")


def parse_int(text: str) -> int:
    """Parse a decimal or ``0x``-prefixed hexadecimal integer.

    Args:
        text: A single array element.

    Returns:
        The integer value, or ``0`` if *text* is neither form.
    """
    text = text.strip()
    m = _HEX_RE.fullmatch(text)
    if m:
        return int(m.group(1), 16)
    if _DECIMAL_RE.fullmatch(text):
        return int(text)
    return 0


def bitmask_to_ports(mask: int) -> list[int]:
    """Decode a 32-bit port bitmask; bit *i* is port *i + 1*.

    Returns:
        Port numbers in ascending order.
    """
    return [bit + 1 for bit in range(32) if (mask >> bit) & 1]


class ScriptArrays:
    """Lookup of named array literals in one page.

    Args:
        html: Raw page text returned by the switch.
    """

    def __init__(self, html: str) -> None:
        self._text: str = script_text(html)

    def has_array(self, name: str) -> bool:
        """True if an array called *name* is assigned in the page."""
        return _array_re(name).search(self._text) is not None

    def int_array(self, name: str) -> list[int]:
        """Return the elements of integer array *name* (``[]`` if absent).

        Elements that are neither decimal nor ``0x`` hex resolve to ``0``.
        """
        body = self._body(name)
        if body is None:
            return []
        return [parse_int(item) for item in body.split(",") if item.strip()]

    def string_array(self, name: str) -> list[str]:
        """Return the single-quoted elements of array *name* (``[]`` if absent)."""
        body = self._body(name)
        if body is None:
            return []
        return _QUOTED_RE.findall(body)

    def scalar(self, name: str) -> int | None:
        """Return the decimal value assigned to *name*, or ``None`` if absent."""
        m = _scalar_re(name).search(self._text)
        return int(m.group(1)) if m else None

    def _body(self, name: str) -> str | None:
        m = _array_re(name).search(self._text)
        return m.group(1) if m else None
