"""AST node types for parsed doc comments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from doctor.source import Span


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Literal run of text, including its trailing line terminator if any."""

    value: str
    span: Span


@dataclass(frozen=True, slots=True)
class InlineTag:
    """An inline annotation: {@name body lines...}."""

    name: str
    body_lines: tuple[str, ...]
    span: Span


BodyItem: TypeAlias = TextSegment | InlineTag


@dataclass(frozen=True, slots=True)
class Description:
    """Free-form prose preceding any block tags."""

    body_items: tuple[BodyItem, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class BlockTag:
    """A block annotation: @name followed by an optional body."""

    name: str
    body_items: tuple[BodyItem, ...]
    span: Span


@dataclass(frozen=True, slots=True)
class DocComment:
    """Root node: one complete comment, open marker to close marker."""

    description: Description | None
    block_tags: tuple[BlockTag, ...]
    span: Span
