from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Inline spans ─────────────────────────────────────────────────────────


class PlainText(_Frozen):
    type: Literal["text"] = "text"
    text: str


class Emphasized(_Frozen):
    type: Literal["strong"] = "strong"
    text: str


Span = Annotated[Union[PlainText, Emphasized], Field(discriminator="type")]
InlineRun = tuple[Span, ...]


def run_text(run: InlineRun) -> str:
    """Return the visible text of an inline run, emphasis markers removed."""
    return "".join(span.text for span in run)


# ── Blocks ───────────────────────────────────────────────────────────────


class Heading(_Frozen):
    type: Literal["heading"] = "heading"
    level: Literal[1, 2]
    text: InlineRun = ()


class ListGroup(_Frozen):
    type: Literal["list"] = "list"
    items: tuple[InlineRun, ...] = ()


class Paragraph(_Frozen):
    type: Literal["paragraph"] = "paragraph"
    text: InlineRun = ()


class Break(_Frozen):
    type: Literal["break"] = "break"


Block = Annotated[
    Union[Heading, ListGroup, Paragraph, Break],
    Field(discriminator="type"),
]


class Document(_Frozen):
    blocks: tuple[Block, ...] = ()
