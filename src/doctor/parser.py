"""Doc comment parser: a backtracking recursive descent grammar over raw text.

Every rule takes an offset into the source and either returns the offset
just past what it consumed (plus a value, for rules that build nodes), or
raises ``_Failure`` without any side effect. Ordered choice is therefore
just "try the next alternative at the same offset".
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TypeVar

from doctor.ast import BlockTag, BodyItem, Description, DocComment, InlineTag, TextSegment
from doctor.errors import ParseError, TraceEntry
from doctor.scanner import Delimiter, scan_until
from doctor.source import Span, is_hspace, is_tag_char, is_tag_start_char

T = TypeVar("T")

COMMENT_START = "/**"
COMMENT_END = "*/"


class _Failure(Exception):
    """Internal rule failure; drives backtracking and never escapes parse()."""

    def __init__(self, entry: TraceEntry) -> None:
        super().__init__(entry.rule)
        self.trace = [entry]

    def at(self, offset: int, rule: str) -> _Failure:
        self.trace.append(TraceEntry(offset, rule))
        return self


def _rule(name: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Name a grammar rule so failures passing through it record it in the trace."""

    def decorate(method: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(method)
        def wrapper(self: Parser, pos: int) -> T:
            try:
                return method(self, pos)
            except _Failure as exc:
                exc.at(pos, name)
                raise

        return wrapper

    return decorate


class Parser:
    """Recursive descent parser for a single doc comment."""

    def __init__(self, source: str) -> None:
        self._source = source

    def parse(self) -> DocComment:
        try:
            return self._doc_comment(0)
        except _Failure as exc:
            raise ParseError(tuple(exc.trace), self._source) from None

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _peek(self, pos: int) -> str:
        return self._source[pos] if pos < len(self._source) else ""

    def _fail(self, pos: int, kind: str, expected: str | None = None) -> _Failure:
        return _Failure(TraceEntry(pos, kind, expected))

    def _literal(self, pos: int, text: str) -> int:
        if not self._source.startswith(text, pos):
            raise self._fail(pos, "Tag")
        return pos + len(text)

    def _char(self, pos: int, ch: str) -> int:
        if self._peek(pos) != ch:
            raise self._fail(pos, "Char", ch)
        return pos + 1

    def _space0(self, pos: int) -> int:
        while is_hspace(self._peek(pos)):
            pos += 1
        return pos

    def _space1(self, pos: int) -> int:
        end = self._space0(pos)
        if end == pos:
            raise self._fail(pos, "Space")
        return end

    def _multispace0(self, pos: int) -> int:
        while self._peek(pos) in _MULTISPACE:
            pos += 1
        return pos

    def _line_ending(self, pos: int) -> int:
        if self._source.startswith("\n", pos):
            return pos + 1
        if self._source.startswith("\r\n", pos):
            return pos + 2
        raise self._fail(pos, "CrLf")

    def _optional(self, rule: Callable[[int], int], pos: int) -> int:
        """Apply a recognizer, staying at *pos* if it fails."""
        try:
            return rule(pos)
        except _Failure:
            return pos

    def _attempt(self, rule: Callable[[int], T], pos: int) -> T | None:
        """Apply a rule, returning None instead of failing."""
        try:
            return rule(pos)
        except _Failure:
            return None

    # ------------------------------------------------------------------
    # Comment decoration
    # ------------------------------------------------------------------

    @_rule("comment_start")
    def _comment_start(self, pos: int) -> int:
        pos = self._literal(pos, COMMENT_START)
        pos = self._space0(pos)
        return self._optional(self._line_ending, pos)

    @_rule("comment_end")
    def _comment_end(self, pos: int) -> int:
        pos = self._multispace0(pos)
        return self._literal(pos, COMMENT_END)

    @_rule("line_leading")
    def _line_leading(self, pos: int) -> int:
        pos = self._space0(pos)
        # The close marker must never be eaten as a continuation star
        if self._source.startswith(COMMENT_END, pos):
            raise self._fail(pos, "Not")
        pos = self._literal(pos, "*")
        return self._space0(pos)

    @_rule("tag_name")
    def _tag_name(self, pos: int) -> tuple[int, str]:
        start = self._literal(pos, "@")
        if not is_tag_start_char(self._peek(start)):
            raise self._fail(start, "Alpha")
        end = start + 1
        while is_tag_char(self._peek(end)):
            end += 1
        return end, self._source[start:end]

    # ------------------------------------------------------------------
    # Inline tags
    # ------------------------------------------------------------------

    @_rule("inline_tag_body_line")
    def _inline_tag_body_line(self, pos: int) -> tuple[int, str]:
        end = self._attempt(self._line_ending, pos)
        if end is None:
            end = scan_until(self._source, pos, _INLINE_BODY_DELIMITERS)
            if end == pos:
                raise self._fail(pos, "NonEmpty").at(pos, "Alt")
            end = self._optional(self._line_ending, end)
        return end, self._source[pos:end]

    @_rule("inline_tag_body")
    def _inline_tag_body(self, pos: int) -> tuple[int, tuple[str, ...]]:
        pos, line = self._inline_tag_body_line(pos)
        lines = [line]
        while True:
            sep_end = self._attempt(self._line_leading, pos)
            if sep_end is None:
                break
            found = self._attempt(self._inline_tag_body_line, sep_end)
            if found is None:
                break
            pos, line = found
            lines.append(line)
        return pos, tuple(lines)

    @_rule("inline_tag")
    def _inline_tag(self, pos: int) -> tuple[int, InlineTag]:
        end = self._char(pos, "{")
        end, name = self._tag_name(end)

        body_lines: tuple[str, ...] = ()
        found = self._attempt(self._inline_tag_body, self._space0(end))
        if found is not None:
            end, body_lines = found

        end = self._char(self._optional(self._line_leading, end), "}")
        return end, InlineTag(name, body_lines, Span(pos, end))

    # ------------------------------------------------------------------
    # Bodies (shared by the description and block tags)
    # ------------------------------------------------------------------

    @_rule("text_segment")
    def _text_segment(self, pos: int) -> tuple[int, TextSegment]:
        end = self._attempt(self._line_ending, pos)
        if end is None:
            end = scan_until(self._source, pos, _TEXT_DELIMITERS)
            # Pure indentation is left to the whitespace alternative
            if _is_blank(self._source[pos:end]):
                raise self._fail(pos, "Verify").at(pos, "Alt")
            end = self._optional(self._line_ending, end)
        return end, TextSegment(self._source[pos:end], Span(pos, end))

    def _body_step(self, pos: int, items: list[BodyItem]) -> int | None:
        """Consume one body element, appending it to *items* if it carries content."""
        for skip in (self._line_leading, self._space1):
            end = self._attempt(skip, pos)
            if end is not None:
                return end

        for rule in (self._inline_tag, self._text_segment):
            found = self._attempt(rule, pos)
            if found is not None:
                end, item = found
                items.append(item)
                return end

        return None

    @_rule("body")
    def _body(self, pos: int) -> tuple[int, tuple[BodyItem, ...]]:
        items: list[BodyItem] = []
        end = self._body_step(pos, items)
        if end is None:
            raise self._fail(pos, "Many1")

        while True:
            next_end = self._body_step(end, items)
            if next_end is None:
                break
            end = next_end

        if not any(_is_meaningful(item) for item in items):
            raise self._fail(pos, "Verify")
        return end, tuple(items)

    @_rule("description")
    def _description(self, pos: int) -> tuple[int, Description]:
        end, items = self._body(pos)
        return end, Description(items, Span(pos, end))

    @_rule("block_tag")
    def _block_tag(self, pos: int) -> tuple[int, BlockTag]:
        end, name = self._tag_name(pos)
        end = self._space0(end)

        # A block tag may legitimately have no body at all
        items: tuple[BodyItem, ...] = ()
        found = self._attempt(self._body, end)
        if found is not None:
            end, items = found

        return end, BlockTag(name, items, Span(pos, end))

    # ------------------------------------------------------------------
    # Comment level
    # ------------------------------------------------------------------

    def _skip_decoration(self, pos: int) -> int:
        """Skip continuation markers and whitespace that carry no content."""
        while True:
            end = self._optional(self._line_leading, pos)
            end = self._multispace0(end)
            if end == pos:
                return pos
            pos = end

    def _block_tag_line(self, pos: int) -> tuple[int, BlockTag]:
        return self._block_tag(self._skip_decoration(pos))

    @_rule("doc_comment")
    def _doc_comment(self, pos: int) -> DocComment:
        end = self._comment_start(pos)
        end = self._optional(self._line_leading, end)

        description: Description | None = None
        found = self._attempt(self._description, end)
        if found is not None:
            end, description = found

        block_tags: list[BlockTag] = []
        while True:
            tag_found = self._attempt(self._block_tag_line, end)
            if tag_found is None:
                break
            end, tag = tag_found
            block_tags.append(tag)

        end = self._comment_end(self._skip_decoration(end))
        if end != len(self._source):
            raise self._fail(end, "Eof")

        return DocComment(description, tuple(block_tags), Span(pos, end))


# Module-level constants
_MULTISPACE: frozenset[str] = frozenset(" \t\r\n")
# Information separators: isspace() accepts them but they are not Unicode White_Space
_SEPARATOR_CONTROLS: frozenset[str] = frozenset("\x1c\x1d\x1e\x1f")
_INLINE_BODY_DELIMITERS: tuple[Delimiter, ...] = (
    Delimiter("{"),
    Delimiter("}"),
    Delimiter("\r", escapable=False),
    Delimiter("\n", escapable=False),
)
_TEXT_DELIMITERS: tuple[Delimiter, ...] = (
    Delimiter("{"),
    Delimiter("}"),
    Delimiter("@"),
    Delimiter("\r", escapable=False),
    Delimiter("\n", escapable=False),
    Delimiter(COMMENT_END, escapable=False),
)


def _is_blank(text: str) -> bool:
    """Return True if text is empty or whitespace-only."""
    return all(ch.isspace() and ch not in _SEPARATOR_CONTROLS for ch in text)


def _is_meaningful(item: BodyItem) -> bool:
    return isinstance(item, InlineTag) or not _is_blank(item.value)


def parse(source: str) -> DocComment:
    """Convenience function: parse one doc comment and return its AST."""
    return Parser(source).parse()
