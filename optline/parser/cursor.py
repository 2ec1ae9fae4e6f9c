# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Cursor model for addressing a location inside a token stream.

A `Cursor` is `(index, offset)`: `index` selects a token and `offset` a
character position inside it (0 = token start). Cursors order like 2-tuples.
A nonzero offset addresses the middle of a token, which only happens after a
single-character alias consumed its flag letter (`-c0` leaves `2-2`) or an
alias matched `--name=value` (offset just past the `=`).

Positions render as `"index"` or `"index-offset"` in error messages and can be
parsed back with `split_position()`.
"""
from __future__ import annotations

import re
from typing import NamedTuple, Sequence

OPTION_PATTERN = re.compile(r"^-+[^ =]")


class Cursor(NamedTuple):
    """A (token index, intra-token offset) address."""

    index: int
    offset: int = 0

    def next_token(self) -> Cursor:
        """The start of the token after this one."""
        return Cursor(self.index + 1, 0)

    def __str__(self) -> str:
        if self.offset:
            return f"{self.index}-{self.offset}"
        return str(self.index)


def split_position(position: str | int | Cursor) -> Cursor:
    """
    Parse a position written as `"index"` or `"index-offset"`.

    Raises:
        ValueError: If the text is not a valid position.
    """
    if isinstance(position, Cursor):
        return position
    if isinstance(position, int):
        if position < 0:
            raise ValueError(f"Invalid position: {position!r}")
        return Cursor(position)
    index, sep, offset = position.strip().partition("-")
    if not index.isdigit() or (sep and not offset.isdigit()):
        raise ValueError(f"Invalid position: {position!r}")
    return Cursor(int(index), int(offset) if sep else 0)


def looks_like_option(cursor: Cursor, tokens: Sequence[str]) -> bool:
    """True iff the cursor sits at the start of an option-shaped token."""
    if cursor.offset != 0 or not 0 <= cursor.index < len(tokens):
        return False
    return OPTION_PATTERN.match(tokens[cursor.index]) is not None
