"""
Markdown rendering for Gemini answers.

Responsibilities:
- Turn the markdown-flavoured text returned by Gemini into a Document tree.
- Map a Document onto plain HTML for the single-page client.
"""
from .html import render_html
from .models import (
    Break,
    Document,
    Emphasized,
    Heading,
    ListGroup,
    Paragraph,
    PlainText,
)
from .renderer import render_markdown

__all__ = [
    "Break",
    "Document",
    "Emphasized",
    "Heading",
    "ListGroup",
    "Paragraph",
    "PlainText",
    "render_html",
    "render_markdown",
]
