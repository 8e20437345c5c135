from __future__ import annotations

from html import escape

from .models import (
    Block,
    Break,
    Document,
    Emphasized,
    Heading,
    InlineRun,
    ListGroup,
    Paragraph,
)


def _inline_html(run: InlineRun) -> str:
    parts: list[str] = []
    for span in run:
        if isinstance(span, Emphasized):
            parts.append(f"<strong>{escape(span.text)}</strong>")
        else:
            parts.append(escape(span.text))
    return "".join(parts)


def _block_html(block: Block) -> str:
    if isinstance(block, Heading):
        return f"<h{block.level}>{_inline_html(block.text)}</h{block.level}>"
    if isinstance(block, ListGroup):
        items = "".join(f"<li>{_inline_html(item)}</li>" for item in block.items)
        return f"<ul>{items}</ul>"
    if isinstance(block, Paragraph):
        return f"<p>{_inline_html(block.text)}</p>"
    if isinstance(block, Break):
        return "<br>"
    raise TypeError(f"Unknown block type: {type(block).__name__}")


def render_html(document: Document) -> str:
    """Map a Document onto semantic HTML, one element per block."""
    body = "\n".join(_block_html(block) for block in document.blocks)
    return f'<div class="markdown">{body}</div>'
