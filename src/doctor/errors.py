"""Parse error type and its contextual trace rendering."""

from __future__ import annotations

from dataclasses import dataclass

from doctor.source import Position, Span, position_at


@dataclass(frozen=True, slots=True)
class TraceEntry:
    """One failed rule: where it failed and what it was called.

    ``rule`` is either a named grammar rule (``doc_comment``,
    ``inline_tag``, ...) or a primitive failure kind (``Tag``, ``Eof``,
    ...). ``expected`` holds the wanted character for ``Char`` entries.
    """

    offset: int
    rule: str
    expected: str | None = None


class ParseError(Exception):
    """Raised when the input is not a single well-formed doc comment.

    The trace runs from the most specific failing rule (index 0) out to
    the top-level rule.
    """

    message = "invalid doc comment"

    def __init__(self, trace: tuple[TraceEntry, ...], source: str) -> None:
        self.trace = trace
        self.source = source
        super().__init__(self.format())

    @property
    def position(self) -> Position:
        offset = self.trace[0].offset if self.trace else 0
        return position_at(self.source, offset)

    @property
    def span(self) -> Span:
        offset = self.position.offset
        return Span(offset, min(offset + 1, len(self.source)))

    def format(self, filename: str | None = None) -> str:
        result = render_trace(self.source, self.trace)
        if filename is None:
            return result
        pos = self.position
        return f"error: {self.message}\n --> {filename}:{pos.line}:{pos.column}\n\n{result}"


def render_trace(source: str, trace: tuple[TraceEntry, ...]) -> str:
    """Render *trace* as numbered, caret-annotated excerpts of *source*."""
    parts: list[str] = []
    for i, entry in enumerate(trace):
        if not source:
            if entry.rule == "Char":
                parts.append(f"{i}: expected '{entry.expected}', got empty input\n\n")
            else:
                parts.append(f"{i}: in {entry.rule}, got empty input\n\n")
            continue

        pos = position_at(source, entry.offset)
        line_start = entry.offset - pos.column + 1
        line = source[line_start:].split("\n", 1)[0].rstrip()
        caret = "^".rjust(pos.column)

        if entry.rule == "Char":
            if entry.offset < len(source):
                found = f"found {source[entry.offset]}"
            else:
                found = "got end of input"
            parts.append(
                f"{i}: at line {pos.line}:\n{line}\n{caret}\n"
                f"expected '{entry.expected}', {found}\n\n"
            )
        else:
            parts.append(f"{i}: at line {pos.line}, in {entry.rule}:\n{line}\n{caret}\n\n")
    return "".join(parts)
