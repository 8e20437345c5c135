"""
Line-oriented markdown renderer.

Understands only the subset Gemini emits in restaurant answers:

- ``# `` and ``## `` headings
- ``* `` / ``- `` bullet items, consecutive items grouped into one list
- blank lines as breaks
- ``**bold**`` emphasis inside any line

Everything else is a paragraph. The renderer never raises; malformed
markers are kept as literal text.
"""
from __future__ import annotations

import re

from .models import (
    Block,
    Break,
    Document,
    Emphasized,
    Heading,
    InlineRun,
    ListGroup,
    Paragraph,
    PlainText,
    Span,
)

_BOLD_RE = re.compile(r"(\*\*.*?\*\*)")
_MARKER_LEN = 2
_LIST_PREFIXES = ("* ", "- ")

# Whitespace as JavaScript trim() sees it. Unlike str.strip(), includes the
# BOM and excludes \x1c-\x1f and \x85.
_BLANK_CHARS = (
    " \t\n\v\f\r\u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def parse_inline(body: str) -> InlineRun:
    """Split ``body`` into plain and emphasized spans.

    With a capturing group, ``re.split`` puts the ``**...**`` matches at odd
    indices, so only real matches become emphasis.
    """
    spans: list[Span] = []
    for i, piece in enumerate(_BOLD_RE.split(body)):
        if i % 2:
            spans.append(Emphasized(text=piece[_MARKER_LEN:-_MARKER_LEN]))
        elif piece:
            spans.append(PlainText(text=piece))
    return tuple(spans)


def _is_list_item(line: str) -> bool:
    return line.startswith(_LIST_PREFIXES)


def _render_line(line: str) -> Block:
    if line.startswith("## "):
        return Heading(level=2, text=parse_inline(line[3:]))
    if line.startswith("# "):
        return Heading(level=1, text=parse_inline(line[2:]))
    if line.strip(_BLANK_CHARS) == "":
        return Break()
    return Paragraph(text=parse_inline(line))


def render_markdown(text: str) -> Document:
    """Render ``text`` into a fresh Document."""
    blocks: list[Block] = []
    pending_items: list[InlineRun] = []

    for line in text.split("\n"):
        if _is_list_item(line):
            pending_items.append(parse_inline(line[2:]))
            continue
        if pending_items:
            blocks.append(ListGroup(items=tuple(pending_items)))
            pending_items = []
        blocks.append(_render_line(line))

    if pending_items:
        blocks.append(ListGroup(items=tuple(pending_items)))

    return Document(blocks=tuple(blocks))
