# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Matchers decide whether an option applies at the current cursor.

A matcher looks at the token stream through a forked `ParseContext`, reports a
`Priority` and may move the context's cursor to where the option's taker
should start. The parse driver runs every registered matcher at each step and
the highest unambiguous priority wins.

Matchers:
- `AliasMatcher`: `-t|--train-file` style aliases with exact, prefix and
  bundled single-character matching.
- `PositionalMatcher`: any non-option token, at a fixed priority.
- `CustomMatcher`: a callable taking the context and returning a priority.
"""
from __future__ import annotations

import re
from enum import IntEnum
from typing import Callable, Iterable

from optline.exceptions import OptionDefinitionError, ValueCheckError
from optline.parser.context import ParseContext
from optline.parser.cursor import Cursor
from optline.parser.values import is_option, non_option, value

ALIAS_SEPARATORS = re.compile(r"[|,\s]+")


class Priority(IntEnum):
    """Total order used to pick among competing matches."""

    NONE = 0
    SINGLE = 100
    POSITION = 1000
    PREFIX = 10000
    EXACT = 100000


class Matcher:
    """Base class for matchers."""

    label: str = ""

    def match(self, ctx: ParseContext) -> int:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.label


def normalize_alias(alias: str) -> str:
    """Give a bare name its dashes: `v` -> `-v`, `verbose` -> `--verbose`."""
    alias = alias.strip()
    if not alias or alias.strip("-") == "":
        raise OptionDefinitionError(f"Invalid alias: {alias!r}")
    if "=" in alias or any(char.isspace() for char in alias):
        raise OptionDefinitionError(f"Alias must not contain '=' or spaces: {alias!r}")
    if alias.startswith("-"):
        return alias
    return f"-{alias}" if len(alias) == 1 else f"--{alias}"


def split_declaration(declaration: str) -> list[str]:
    """Split `"-t|--train-file"` into normalized aliases."""
    names = [name for name in ALIAS_SEPARATORS.split(declaration) if name]
    if not names:
        raise OptionDefinitionError(f"No aliases in declaration: {declaration!r}")
    return [normalize_alias(name) for name in names]


class AliasMatcher(Matcher):
    """
    Match option tokens against a set of aliases.

    Given the option-shaped token at the cursor with any `=value` suffix
    removed:
    - equal to an alias: `EXACT`
    - a prefix of an alias (`--trai` for `--train-file`): `PREFIX`
    - starting with a one-letter alias like `-c` (`-c0`): `SINGLE`, and the
      cursor is left just after the flag letter

    When the token carries `=value`, the cursor is left just past the `=` so the
    taker reads the attached value. Matching is case-sensitive. Two options both
    accepting a prefix are only detected when the driver finds them tied.
    """

    def __init__(self, aliases: Iterable[str]):
        self.aliases: tuple[str, ...] = tuple(normalize_alias(alias) for alias in aliases)
        if not self.aliases:
            raise OptionDefinitionError("AliasMatcher requires at least one alias")
        self.label = ", ".join(self.aliases)

    @classmethod
    def from_declaration(cls, declaration: str) -> AliasMatcher:
        return cls(split_declaration(declaration))

    def resolve(self, name: str) -> str | None:
        """Return the alias `name` selects, exactly or by prefix."""
        if name in self.aliases:
            return name
        return next((alias for alias in self.aliases if alias.startswith(name)), None)

    def match(self, ctx: ParseContext) -> int:
        start = ctx.cursor
        try:
            candidate = value(ctx, is_option())
        except ValueCheckError:
            return Priority.NONE

        name, sep, _ = candidate.partition("=")
        if sep:
            ctx.cursor = Cursor(start.index, start.offset + len(name) + 1)

        if name in self.aliases:
            return Priority.EXACT
        if any(alias.startswith(name) for alias in self.aliases):
            return Priority.PREFIX
        for alias in self.aliases:
            if len(alias) == 2 and alias[1] != "-" and name.startswith(alias):
                ctx.cursor = Cursor(start.index, start.offset + 2)
                return Priority.SINGLE

        ctx.cursor = start
        return Priority.NONE

    def __repr__(self) -> str:
        return f"AliasMatcher({'|'.join(self.aliases)})"


class PositionalMatcher(Matcher):
    """
    Match any non-option token at a fixed priority.

    The cursor is left at the token start; the taker consumes the token.
    """

    def __init__(self, priority: int = Priority.POSITION, label: str = "ARG"):
        self.priority = priority
        self.label = label

    def match(self, ctx: ParseContext) -> int:
        start = ctx.cursor
        try:
            value(ctx, non_option())
        except ValueCheckError:
            return Priority.NONE
        ctx.cursor = start
        return self.priority

    def __repr__(self) -> str:
        return f"PositionalMatcher(priority={int(self.priority)}, label={self.label!r})"


class CustomMatcher(Matcher):
    """
    Adapt a callable `func(ctx) -> priority` into a matcher.

    The callable may move `ctx.cursor` to where the taker should start; a falsy
    return value means no match.
    """

    def __init__(self, func: Callable[[ParseContext], int | None], label: str | None = None):
        if not callable(func):
            raise OptionDefinitionError(f"Matcher must be callable: {func!r}")
        self.func = func
        self.label = label or getattr(func, "__name__", "custom")

    def match(self, ctx: ParseContext) -> int:
        return int(self.func(ctx) or Priority.NONE)

    def __repr__(self) -> str:
        return f"CustomMatcher({self.label})"


def as_matcher(spec: str | Matcher | Callable[[ParseContext], int | None]) -> Matcher:
    """Turn a matcher spec into a `Matcher`: alias declarations, matchers or callables."""
    if isinstance(spec, Matcher):
        return spec
    if isinstance(spec, str):
        return AliasMatcher.from_declaration(spec)
    if callable(spec):
        return CustomMatcher(spec)
    raise OptionDefinitionError(f"Invalid matcher: {spec!r}")
