# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Holds the variables that takers bind while a token stream is parsed.

The `BindingTable` replaces "assign the variable with this name in the caller's
scope": every taker receives the table through its `ParseContext` and writes
values by name. Values live in named namespaces, `"vars"` for plain options and
`"flags"` for typed flag presets, each an `argparse.Namespace`.

Nested parses (config files, takers that parse again) share one table. A caller
that needs isolation wraps the nested work in `scope()`, which snapshots a
namespace and restores it on exit:

    bindings = BindingTable()
    bindings.set("vi", 13, namespace_name="flags")
    with bindings.scope("flags"):
        bindings.set("vi", 123, namespace_name="flags")
    bindings.get("vi", namespace_name="flags")   # 13
"""
from __future__ import annotations

from argparse import Namespace
from collections import defaultdict
from contextlib import contextmanager
from typing import Any, Iterator

from optline.logger import logger

VARS = "vars"
FLAGS = "flags"


class BindingTable:
    """
    Manages bound values across multiple namespaces.

    Values are read and written by name; writes are last-writer-wins and there
    is no isolation unless a caller opens a `scope()`.
    """

    def __init__(self, namespaces: list[tuple[str, Namespace]] | None = None) -> None:
        self.namespaces: defaultdict[str, Namespace] = defaultdict(Namespace)
        if namespaces:
            for namespace_name, namespace in namespaces:
                self.from_namespace(namespace, namespace_name)

    def from_namespace(self, namespace: Namespace, namespace_name: str = VARS) -> None:
        self.namespaces[namespace_name] = namespace

    def get(self, name: str, default: Any = None, namespace_name: str = VARS) -> Any:
        """Get the value bound to `name`."""
        return getattr(self.namespaces[namespace_name], name, default)

    def set(self, name: str, value: Any, namespace_name: str = VARS) -> None:
        """Bind `value` to `name`."""
        setattr(self.namespaces[namespace_name], name, value)
        logger.debug("Bound %s.%s = %r", namespace_name, name, value)

    def has(self, name: str, namespace_name: str = VARS) -> bool:
        """Check if `name` is bound in the namespace."""
        return hasattr(self.namespaces[namespace_name], name)

    def declare(self, name: str, value: Any, namespace_name: str = VARS) -> bool:
        """
        Declare `name` with an initial value.

        Re-declaring an existing name re-assigns it.

        Returns:
            bool: True if the name was newly declared.
        """
        is_new = not self.has(name, namespace_name)
        self.set(name, value, namespace_name)
        return is_new

    def append(self, name: str, *values: Any, namespace_name: str = VARS) -> list[Any]:
        """Bind `name` to a new list holding its old items followed by `values`."""
        current = self.get(name, namespace_name=namespace_name)
        if current is None:
            current = []
        elif not isinstance(current, list):
            current = [current]
        items = [*current, *values]
        self.set(name, items, namespace_name)
        return items

    def as_dict(self, namespace_name: str = VARS) -> dict[str, Any]:
        """Return all bindings in a namespace as a dictionary."""
        return dict(vars(self.namespaces[namespace_name]))

    def namespace_names(self) -> list[str]:
        return list(self.namespaces)

    def snapshot(self, namespace_name: str = VARS) -> Namespace:
        # Shallow: bound values are replaced, never mutated, by this table.
        return Namespace(**self.as_dict(namespace_name))

    def restore(self, snapshot: Namespace, namespace_name: str = VARS) -> None:
        self.namespaces[namespace_name] = snapshot

    @contextmanager
    def scope(self, *namespace_names: str) -> Iterator[BindingTable]:
        """
        Shadow namespaces for the duration of a block.

        Bindings made inside the block, including new declarations, are
        discarded on exit and the outer values come back.
        """
        names = namespace_names or (VARS, FLAGS)
        saved = {name: self.snapshot(name) for name in names}
        try:
            yield self
        finally:
            for name, snapshot in saved.items():
                self.restore(snapshot, name)
            logger.debug("Restored binding scope: %s", ", ".join(names))

    def __repr__(self) -> str:
        summary = ", ".join(
            f"{name}={len(vars(namespace))}"
            for name, namespace in self.namespaces.items()
        )
        return f"BindingTable({summary})"
