"""--debug AST dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from doctor.ast import BlockTag, BodyItem, Description, DocComment, InlineTag, TextSegment


def dump_ast(doc: DocComment, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    _dump_comment(doc, 0, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_comment(doc: DocComment, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}DocComment\n")
    if doc.description is not None:
        _dump_description(doc.description, depth + 1, f)
    for tag in doc.block_tags:
        _dump_block_tag(tag, depth + 1, f)


def _dump_description(desc: Description, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}Description\n")
    for item in desc.body_items:
        _dump_item(item, depth + 1, f)


def _dump_block_tag(tag: BlockTag, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}BlockTag @{tag.name}\n")
    for item in tag.body_items:
        _dump_item(item, depth + 1, f)


def _dump_item(item: BodyItem, depth: int, f: TextIO) -> None:
    if isinstance(item, TextSegment):
        f.write(f"{_indent(depth)}TextSegment({item.value!r})\n")
    elif isinstance(item, InlineTag):
        f.write(f"{_indent(depth)}InlineTag @{item.name}\n")
        for line in item.body_lines:
            f.write(f"{_indent(depth + 1)}{line!r}\n")
