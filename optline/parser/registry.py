# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Option registry: the append-only table of option definitions.

Each `add()` stores one record with three attribute groups, `:matcher`,
`:taker` and `:doc`, in a `RecordStore`. The store may be shared with other
record kinds (build rules, for example); the registry only remembers the
positions of the records it added. The parse driver only ever reads the
registry.
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

from optline.logger import logger
from optline.parser.context import ParseContext
from optline.parser.matchers import Matcher, as_matcher
from optline.parser.option import DOC_TAG, MATCHER_TAG, TAKER_TAG, OptionDefinition
from optline.parser.takers import Taker, as_taker
from optline.records import RecordStore

MatcherSpec = str | Matcher | Callable[[ParseContext], Any]
TakerSpec = str | Taker | Callable[[ParseContext], Any]


def split_doc(doc: Iterable[str]) -> tuple[str, ...]:
    """Flatten doc arguments into lines; embedded newlines start new lines."""
    lines: list[str] = []
    for text in doc:
        lines.extend(str(text).split("\n"))
    return tuple(lines)


class OptionRegistry:
    """Stores option definitions as records, in registration order."""

    def __init__(self, store: RecordStore | None = None) -> None:
        self.store: RecordStore = store if store is not None else RecordStore()
        self._positions: list[int] = []

    def add(
        self, matcher_spec: MatcherSpec, taker_spec: TakerSpec, *doc: str
    ) -> OptionDefinition:
        """
        Register an option.

        Args:
            matcher_spec: An alias declaration (`"-t|--train-file"`), a
                `Matcher`, or a callable `func(ctx) -> priority`.
            taker_spec: A variable name to assign one value to, a `Taker`, or
                a callable `func(ctx)`.
            *doc: Documentation lines.

        Returns:
            OptionDefinition: The stored option.
        """
        matcher = as_matcher(matcher_spec)
        taker = as_taker(taker_spec)
        position = self.store.append(
            (MATCHER_TAG, (matcher,)),
            (TAKER_TAG, (taker,)),
            (DOC_TAG, split_doc(doc)),
        )
        self._positions.append(position)
        logger.debug("Registered option %r with %r at %d", matcher, taker, position)
        return OptionDefinition.from_record(self.store, position)

    def get(self, position: int) -> OptionDefinition:
        return OptionDefinition.from_record(self.store, position)

    def __iter__(self) -> Iterator[OptionDefinition]:
        for position in self._positions:
            yield OptionDefinition.from_record(self.store, position)

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"OptionRegistry(options={len(self._positions)})"
