"""Heading extraction from block text and rendered output nodes.

Two sources of headings:
- ``parse_heading``: raw markdown text; only the first line counts.
- ``parse_rendered_heading``: markup of an already-rendered output node;
  the first element must be ``<h1>``..``<h6>``.

``title_string`` shortens a heading line for outline labels.
"""
from __future__ import annotations

import re

from bs4 import BeautifulSoup
from bs4.element import Tag

from tocfold.blocks import Heading

# "#" run of 1-6 at column 0, then whitespace. A 7-run fails because the
# seventh "#" is not whitespace. Applied to a single line only.
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")

_HTML_HEADING_TAGS: frozenset[str] = frozenset(
    {"h1", "h2", "h3", "h4", "h5", "h6"}
)

# Anchor links appended to rendered headings by notebook renderers.
_ANCHOR_CHARS = "¶"

DEFAULT_TITLE_LENGTH = 45


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0].rstrip("\r")


def parse_heading(text: str) -> Heading | None:
    """Parse the first line of *text* as a markdown heading.

    Returns None for empty text, leading whitespace, runs longer than six,
    or a marker run not followed by whitespace.
    """
    if not text:
        return None
    m = _HEADING_RE.match(_first_line(text))
    if m is None:
        return None
    return Heading(level=len(m.group(1)), title=m.group(2).strip())


def parse_rendered_heading(markup: str | None) -> Heading | None:
    """Derive a heading from a rendered output node's markup.

    Markup without any element is treated as plain text and handed to
    ``parse_heading``.
    """
    if not markup:
        return None
    soup = BeautifulSoup(markup, "html.parser")
    first = soup.find(True)
    if first is None:
        return parse_heading(soup.get_text())
    if not isinstance(first, Tag) or first.name not in _HTML_HEADING_TAGS:
        return None
    title = first.get_text(" ", strip=True).replace(_ANCHOR_CHARS, "").strip()
    return Heading(level=int(first.name[1]), title=title)


def title_string(text: str, max_length: int = DEFAULT_TITLE_LENGTH) -> str:
    """Outline label: first line without ``#`` and backticks, truncated."""
    label = _first_line(text).replace("#", "").replace("`", "").strip()
    if len(label) > max_length:
        return label[:max_length] + "..."
    return label
