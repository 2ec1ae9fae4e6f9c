# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Append-only store of self-describing, tagged records.

A `RecordStore` keeps heterogeneous "structs" (option definitions, build rules,
anything a caller wants to keep next to them) in one ordered sequence without a
fixed schema. Every record is an ordered list of attribute groups, each a tag
with zero or more values.

Records are addressed by position, never by list index:
- position `0` is the sentinel "before the first record"
- `next(0)` is the first record, `next(last)` is `None`
- positions stay valid while the store keeps growing

Example:
    store = RecordStore()
    rule = store.append((":target", ["app.o"]), (":deps", ["app.c", "app.h"]))
    store.get_attr(rule, ":deps")     # ("app.c", "app.h")
    store.raw_values(rule)            # ("app.o", "app.c", "app.h")
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping

from optline.exceptions import RecordStoreError

START = 0


@dataclass(frozen=True)
class Attribute:
    """One tagged group of values inside a record."""

    tag: str
    values: tuple[Any, ...]


@dataclass(frozen=True)
class Record:
    """An ordered collection of attribute groups."""

    attributes: tuple[Attribute, ...]

    def get(self, tag: str) -> tuple[Any, ...] | None:
        for attribute in self.attributes:
            if attribute.tag == tag:
                return attribute.values
        return None


class RecordStore:
    """Flat, append-only sequence of `Record` objects."""

    def __init__(self) -> None:
        self._records: list[Record] = []

    def append(self, *attributes: tuple[str, Iterable[Any]]) -> int:
        """
        Append one record built from `(tag, values)` pairs.

        Returns:
            int: The position of the new record.
        """
        groups = []
        for item in attributes:
            try:
                tag, values = item
            except (TypeError, ValueError):
                raise RecordStoreError(
                    f"Record attributes must be (tag, values) pairs, got {item!r}"
                ) from None
            if not isinstance(tag, str):
                raise RecordStoreError(f"Attribute tag must be a string, got {tag!r}")
            if isinstance(values, str):
                values = (values,)
            groups.append(Attribute(tag=tag, values=tuple(values)))
        self._records.append(Record(attributes=tuple(groups)))
        return len(self._records)

    def append_mapping(self, mapping: Mapping[str, Iterable[Any]]) -> int:
        """Append one record with an attribute per mapping key, in mapping order."""
        return self.append(*mapping.items())

    def _record(self, pos: int) -> Record:
        if not isinstance(pos, int) or pos < 1 or pos > len(self._records):
            raise RecordStoreError(f"No record at position {pos!r}")
        return self._records[pos - 1]

    def next(self, pos: int = START) -> int | None:
        """Return the position after `pos`, or `None` at the end of the store."""
        if pos != START:
            self._record(pos)
        if pos < len(self._records):
            return pos + 1
        return None

    def get_attr(self, pos: int, tag: str) -> tuple[Any, ...] | None:
        """Return the values of the first attribute tagged `tag`, or `None`."""
        return self._record(pos).get(tag)

    def raw_values(self, pos: int) -> tuple[Any, ...]:
        """Return every value of the record at `pos`, flattened in order."""
        return tuple(
            value
            for attribute in self._record(pos).attributes
            for value in attribute.values
        )

    def tags(self, pos: int) -> tuple[str, ...]:
        return tuple(attribute.tag for attribute in self._record(pos).attributes)

    def __iter__(self) -> Iterator[int]:
        pos = self.next(START)
        while pos is not None:
            yield pos
            pos = self.next(pos)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"RecordStore(records={len(self._records)})"
