# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Per-invocation parse state shared by the driver, matchers and takers.

Every call to `OptionParser.parse()` builds its own `ParseContext` holding the
token stream and cursor. Nested parses (one per config-file line, or a taker
that parses again) get a fresh context but share the parser's registry and
`BindingTable`. Matchers always run on a `fork()` so a trial match cannot move
the shared cursor.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from optline.bindings import BindingTable
from optline.parser.cursor import Cursor, looks_like_option

if TYPE_CHECKING:
    from optline.parser.option_parser import OptionParser


@dataclass
class ParseContext:
    """
    Mutable state of one parse invocation.

    Attributes:
        tokens (tuple[str, ...]): The token stream, fixed for the invocation.
        cursor (Cursor): Current position; advanced by matchers and takers.
        bindings (BindingTable): Where takers store values.
        parser (OptionParser | None): The parser driving this context.
        item_start (Cursor): Cursor before the winning matcher ran.
        source (str | None): Config file the tokens came from, if any.
        depth (int): Config-file nesting level.
    """

    tokens: tuple[str, ...]
    cursor: Cursor = Cursor(0)
    bindings: BindingTable = field(default_factory=BindingTable)
    parser: OptionParser | None = None
    item_start: Cursor = Cursor(0)
    source: str | None = None
    depth: int = 0

    def fork(self) -> ParseContext:
        return replace(self)

    def at_end(self) -> bool:
        return self.cursor.index >= len(self.tokens)

    def current_token(self) -> str | None:
        if self.at_end():
            return None
        return self.tokens[self.cursor.index]

    def remaining(self) -> tuple[str, ...]:
        """Tokens from the cursor on; a partially consumed token is trimmed."""
        if self.at_end():
            return ()
        index, offset = self.cursor
        return (self.tokens[index][offset:],) + self.tokens[index + 1 :]

    def at_option(self) -> bool:
        return looks_like_option(self.cursor, self.tokens)
