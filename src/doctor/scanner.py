"""Delimiter scanner with backslash-escaping support."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Delimiter:
    """A token that ends a scan.

    An escapable delimiter is ignored when the character before it is an
    escaping backslash; a non-escapable one always ends the scan.
    """

    text: str
    escapable: bool = True


def scan_until(source: str, pos: int, delimiters: tuple[Delimiter, ...]) -> int:
    """Return the offset of the first delimiter at or after *pos*.

    The delimiter itself is not consumed. When nothing matches, the end
    of *source* is returned, so the scanned prefix is everything left.
    Never fails; the result is always >= *pos*.

    A backslash escapes the next character only when it is not itself
    escaped, so ``\\{`` is literal while ``\\\\{`` ends the scan at ``{``.
    """
    escaping = False
    for i in range(pos, len(source)):
        next_escaping = source[i] == "\\" and not escaping
        if next_escaping:
            escaping = True
            continue

        for delim in delimiters:
            if delim.escapable and escaping:
                continue
            if source.startswith(delim.text, i):
                return i

        escaping = False
    return len(source)
