"""Tests for parse failures and their rendered traces."""

from __future__ import annotations

import pytest

from doctor.errors import ParseError, TraceEntry, render_trace
from doctor.parser import parse
from doctor.source import Position, Span


def _rules(exc: ParseError) -> list[str]:
    return [entry.rule for entry in exc.trace]


class TestTrailingContent:
    def test_rendered_trace(self):
        with pytest.raises(ParseError) as exc_info:
            parse("/** Comment */ not comment")
        assert str(exc_info.value) == (
            "0: at line 1, in Eof:\n"
            "/** Comment */ not comment\n"
            "              ^\n"
            "\n"
            "1: at line 1, in doc_comment:\n"
            "/** Comment */ not comment\n"
            "^\n"
            "\n"
        )

    def test_trace_entries(self):
        with pytest.raises(ParseError) as exc_info:
            parse("/** Comment */ not comment")
        assert exc_info.value.trace == (TraceEntry(14, "Eof"), TraceEntry(0, "doc_comment"))


class TestUnterminated:
    def test_trace_rooted_at_comment_end(self):
        with pytest.raises(ParseError) as exc_info:
            parse("/** abc")
        assert _rules(exc_info.value) == ["Tag", "comment_end", "doc_comment"]
        assert exc_info.value.position == Position(1, 8, 7)

    def test_caret_past_end_of_last_line(self):
        with pytest.raises(ParseError) as exc_info:
            parse("/**\n * text\n")
        assert str(exc_info.value).startswith("0: at line 3, in Tag:\n\n^\n\n")

    def test_unclosed_inline_tag(self):
        with pytest.raises(ParseError, match="in comment_end"):
            parse("/** see {@link Foo */")


class TestMissingStart:
    def test_plain_comment(self):
        with pytest.raises(ParseError) as exc_info:
            parse("/* plain */")
        assert _rules(exc_info.value) == ["Tag", "comment_start", "doc_comment"]

    def test_empty_input(self):
        with pytest.raises(ParseError) as exc_info:
            parse("")
        assert str(exc_info.value) == (
            "0: in Tag, got empty input\n\n"
            "1: in comment_start, got empty input\n\n"
            "2: in doc_comment, got empty input\n\n"
        )


class TestErrorPosition:
    def test_second_line(self):
        with pytest.raises(ParseError) as exc_info:
            parse("/**\n * a } b\n */")
        err = exc_info.value
        assert err.position.line == 2
        assert err.position.column == 6
        assert err.span == Span(9, 10)

    def test_format_with_filename(self):
        with pytest.raises(ParseError) as exc_info:
            parse("/** Comment */ not comment")
        formatted = exc_info.value.format("Example.java")
        assert formatted.startswith("error: invalid doc comment\n --> Example.java:1:15\n\n")
        assert formatted.endswith(str(exc_info.value))

    def test_format_without_filename_is_str(self):
        with pytest.raises(ParseError) as exc_info:
            parse("/** x")
        assert exc_info.value.format() == str(exc_info.value)


class TestRenderTrace:
    def test_expected_char(self):
        rendered = render_trace("{@tag body", (TraceEntry(5, "Char", "}"),))
        assert rendered == "0: at line 1:\n{@tag body\n     ^\nexpected '}', found  \n\n"

    def test_expected_char_at_end(self):
        rendered = render_trace("{@tag", (TraceEntry(5, "Char", "}"),))
        assert rendered == "0: at line 1:\n{@tag\n     ^\nexpected '}', got end of input\n\n"

    def test_expected_char_empty_input(self):
        assert render_trace("", (TraceEntry(0, "Char", "{"),)) == (
            "0: expected '{', got empty input\n\n"
        )

    def test_line_is_trimmed(self):
        rendered = render_trace("ab  \r\ncd", (TraceEntry(7, "x"),))
        assert rendered == "0: at line 2, in x:\ncd\n ^\n\n"

    def test_empty_trace(self):
        assert render_trace("/** */", ()) == ""
