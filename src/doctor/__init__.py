"""Parser for JavaDoc-style doc comments."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from doctor.ast import DocComment

__version__ = "0.2.2"


def parse(source: str) -> DocComment:
    """Parse a single doc comment, from '/**' to '*/', into a DocComment AST.

    Raises doctor.errors.ParseError if *source* is not exactly one
    well-formed comment.
    """
    from doctor.parser import parse as _parse

    return _parse(source)
