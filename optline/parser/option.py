# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `OptionDefinition`, the read-only view of one registered option.

An option is three parts: a matcher that recognizes it in the token stream, a
taker that consumes its values and performs its effect, and documentation
lines for help output. Options are stored as records in the registry's
`RecordStore` under the tags `:matcher`, `:taker` and `:doc`; an
`OptionDefinition` is rebuilt from such a record and identified by the
record's position, which also fixes its registration order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from optline.exceptions import RecordStoreError
from optline.records import RecordStore

if TYPE_CHECKING:
    from optline.parser.matchers import Matcher
    from optline.parser.takers import Taker

MATCHER_TAG = ":matcher"
TAKER_TAG = ":taker"
DOC_TAG = ":doc"


@dataclass(frozen=True)
class OptionDefinition:
    """
    Represents a registered option.

    Attributes:
        position (int): Position of the option's record in the store.
        matcher (Matcher): Recognizes the option at the cursor.
        taker (Taker): Consumes the option's values once it won.
        doc (tuple[str, ...]): Documentation lines for help output.
    """

    position: int
    matcher: Matcher
    taker: Taker
    doc: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        """Text shown in the alias column of the help output."""
        return self.matcher.label

    @classmethod
    def from_record(cls, store: RecordStore, position: int) -> OptionDefinition:
        matcher = store.get_attr(position, MATCHER_TAG)
        taker = store.get_attr(position, TAKER_TAG)
        if not matcher or not taker:
            raise RecordStoreError(f"Record {position} is not an option definition")
        return cls(
            position=position,
            matcher=matcher[0],
            taker=taker[0],
            doc=store.get_attr(position, DOC_TAG) or (),
        )

    def __str__(self) -> str:
        return f"Option({self.label or self.position})"
