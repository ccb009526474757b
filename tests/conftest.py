"""Shared test fixtures and helpers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from doctor.ast import DocComment, InlineTag, TextSegment
from doctor.parser import Parser, _Failure, parse


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a DocComment."""

    def _parse(source: str) -> DocComment:
        return parse(source)

    return _parse


@pytest.fixture
def run_rule():
    """Return a helper that applies one grammar rule at offset 0.

    The rule is named without its leading underscore, e.g. ``"tag_name"``.
    """

    def _run(name: str, source: str) -> Any:
        rule: Callable[[int], Any] = getattr(Parser(source), f"_{name}")
        return rule(0)

    return _run


@pytest.fixture
def rule_trace():
    """Return a helper that applies a rule expected to fail and returns its trace."""

    def _trace(name: str, source: str) -> list[tuple[int, str]]:
        rule = getattr(Parser(source), f"_{name}")
        with pytest.raises(_Failure) as exc_info:
            rule(0)
        return [(e.offset, e.rule) for e in exc_info.value.trace]

    return _trace


@pytest.fixture
def describe():
    """Return a helper that reduces body items to plain values for comparison.

    Text segments become their text; inline tags become (name, body_lines).
    """

    def _describe(items: tuple) -> list:
        result: list[str | tuple[str, tuple[str, ...]]] = []
        for item in items:
            if isinstance(item, TextSegment):
                result.append(item.value)
            elif isinstance(item, InlineTag):
                result.append((item.name, item.body_lines))
            else:
                raise TypeError(f"unexpected body item {type(item).__name__}")
        return result

    return _describe
