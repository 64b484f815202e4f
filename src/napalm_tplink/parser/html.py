"""HTML helpers shared by the page parsers.

TP-Link pages keep their data in inline ``<script>`` blocks, so the only
thing the parsers need from the document tree is the text of those blocks.
"""

from __future__ import annotations

from bs4 import BeautifulSoup


def parse_html(html: str, parser: str = "lxml") -> BeautifulSoup:
    """Parse a switch page into a BeautifulSoup document (``lxml`` by default)."""
    return BeautifulSoup(html, parser)


def script_text(html: str) -> str:
    """Return the concatenated text of all ``<script>`` elements in *html*.

    Script bodies are joined with newlines in document order.  Pages without
    any ``<script>`` element (bare script payloads) are returned unchanged.
    """
    scripts = parse_html(html).find_all("script")
    if not scripts:
        return html
    return "\n".join(script.get_text() for script in scripts)
