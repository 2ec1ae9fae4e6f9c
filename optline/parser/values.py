# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value engine: composable checks and the consumers that apply them.

`value(ctx, *checks)` consumes the token under the cursor (or the rest of it,
when the cursor sits mid-token) and folds it through the checks left to right.
Every check sees the value returned by the previous one, so order matters:

    value(ctx, regex(r"^[-+]?[0-9]+$"), int)   # "42" -> 42
    value(ctx, int, regex(...))                # fails, regex gets an int

A failing check stops the fold, leaves the cursor where it was before the call
and raises `ValueCheckError`. Two modifiers change where the value comes from:

- `optional(default)`: when no input is left, use `default` without moving
  the cursor.
- `inline()`: only the remainder of the current token may be consumed
  (`--flag=value`, `-c0`); a token boundary counts as no input left.

`value_times()` repeats a consumer between `minimum` and `maximum` times. It is
greedy and only ever backtracks the single failed attempt, unless fewer than
`minimum` values were collected, in which case the whole run is rolled back.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Iterable

from optline.bindings import VARS
from optline.exceptions import ValueCheckError
from optline.logger import logger
from optline.parser.context import ParseContext
from optline.parser.cursor import OPTION_PATTERN, Cursor

INTEGER_PATTERN = r"^[-+]?[0-9]+$"
FLOAT_PATTERN = r"^[-+]?[0-9]*\.?[0-9]+([eE][-+]?[0-9]+)?$"

TRUE_WORDS = frozenset({"t", "true", "True", "TRUE", "1"})
FALSE_WORDS = frozenset({"f", "false", "False", "FALSE", "0"})


class ValueCheck:
    """
    Base class for a single step of a value check chain.

    Subclasses implement `apply()`, returning the (possibly transformed) value
    or raising `ValueError` to reject it. `start` is the cursor the value was
    read from.
    """

    name: str = "check"

    def apply(self, value: Any, start: Cursor) -> Any:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.name


class IsOption(ValueCheck):
    name = "is-option"

    def apply(self, value: Any, start: Cursor) -> Any:
        if start.offset != 0 or not OPTION_PATTERN.match(str(value)):
            raise ValueError(f"{value!r} is not an option")
        return value


class NonOption(ValueCheck):
    name = "non-option"

    def apply(self, value: Any, start: Cursor) -> Any:
        if start.offset == 0 and OPTION_PATTERN.match(str(value)):
            raise ValueError(f"{value!r} is an option")
        return value


class Regex(ValueCheck):
    """Search `pattern` in the value; with `group`, keep only that group."""

    def __init__(self, pattern: str | re.Pattern, group: int | str | None = None):
        self.pattern = re.compile(pattern)
        self.group = group
        self.name = f"regex {self.pattern.pattern}"

    def apply(self, value: Any, start: Cursor) -> Any:
        found = self.pattern.search(str(value))
        if found is None:
            raise ValueError(f"{value!r} does not match {self.pattern.pattern}")
        if self.group is None:
            return value
        return found.group(self.group)


class Boolean(ValueCheck):
    name = "bool"

    def apply(self, value: Any, start: Cursor) -> Any:
        if value in TRUE_WORDS:
            return "1"
        if value in FALSE_WORDS:
            return "0"
        raise ValueError(f"{value!r} is not a boolean")


class Eq(ValueCheck):
    def __init__(self, expected: Any):
        self.expected = expected
        self.name = f"eq {expected}"

    def apply(self, value: Any, start: Cursor) -> Any:
        if value != self.expected:
            raise ValueError(f"{value!r} != {self.expected!r}")
        return value


class Ne(ValueCheck):
    def __init__(self, unexpected: Any):
        self.unexpected = unexpected
        self.name = f"ne {unexpected}"

    def apply(self, value: Any, start: Cursor) -> Any:
        if value == self.unexpected:
            raise ValueError(f"{value!r} == {self.unexpected!r}")
        return value


class StripDashes(ValueCheck):
    name = "strip-dashes"

    def apply(self, value: Any, start: Cursor) -> Any:
        found = re.match(r"^-+(.*)", str(value))
        if found is None:
            raise ValueError(f"{value!r} has no leading dash")
        return found.group(1)


class FunctionCheck(ValueCheck):
    """Wrap a plain callable such as `int` or `Path` as a check."""

    def __init__(self, function: Callable[[Any], Any]):
        self.function = function
        self.name = getattr(function, "__name__", repr(function))

    def apply(self, value: Any, start: Cursor) -> Any:
        try:
            return self.function(value)
        except TypeError as error:
            raise ValueError(str(error)) from error


class DefaultValue:
    """Modifier: fall back to `value` when no input is left."""

    def __init__(self, value: Any):
        self.value = value

    def __repr__(self) -> str:
        return f"optional({self.value!r})"


class InlineOnly:
    """Modifier: consume only the rest of the current token."""

    def __repr__(self) -> str:
        return "inline()"


def is_option() -> ValueCheck:
    return IsOption()


def non_option() -> ValueCheck:
    return NonOption()


def regex(pattern: str | re.Pattern, group: int | str | None = None) -> ValueCheck:
    return Regex(pattern, group)


def integer() -> ValueCheck:
    return Regex(INTEGER_PATTERN)


def float_() -> ValueCheck:
    return Regex(FLOAT_PATTERN)


def boolean() -> ValueCheck:
    return Boolean()


def eq(expected: Any) -> ValueCheck:
    return Eq(expected)


def ne(unexpected: Any) -> ValueCheck:
    return Ne(unexpected)


def strip_dashes() -> ValueCheck:
    return StripDashes()


def optional(default: Any) -> DefaultValue:
    return DefaultValue(default)


def inline() -> InlineOnly:
    return InlineOnly()


def as_check(check: Any) -> ValueCheck:
    """Normalize a check spec: `ValueCheck` instances pass, callables are wrapped."""
    if isinstance(check, ValueCheck):
        return check
    if callable(check):
        return FunctionCheck(check)
    raise TypeError(f"Not a value check: {check!r}")


def _split_checks(
    checks: Iterable[Any],
) -> tuple[DefaultValue | None, bool, list[ValueCheck]]:
    default: DefaultValue | None = None
    inline_only = False
    chain: list[ValueCheck] = []
    for check in checks:
        if isinstance(check, DefaultValue):
            default = check
        elif isinstance(check, InlineOnly):
            inline_only = True
        else:
            chain.append(as_check(check))
    return default, inline_only, chain


def value(ctx: ParseContext, *checks: Any) -> Any:
    """
    Consume one value at the cursor and fold it through `checks`.

    Returns:
        Any: The final folded value.

    Raises:
        ValueCheckError: If input ran out or a check rejected the value. The
            cursor is left where it was before the call.
    """
    default, inline_only, chain = _split_checks(checks)
    start = ctx.cursor
    index, offset = start
    if index < len(ctx.tokens) and not (inline_only and offset == 0):
        result: Any = ctx.tokens[index][offset:]
        prospective = start.next_token()
    elif default is not None:
        result = default.value
        prospective = start
    else:
        raise ValueCheckError("run out of input")

    for check in chain:
        try:
            result = check.apply(result, start)
        except ValueError as error:
            logger.debug("Value check %s rejected %r at %s: %s", check, result, start, error)
            raise ValueCheckError(f"check failed {check} {result}") from error

    ctx.cursor = prospective
    return result


def value_times(
    ctx: ParseContext,
    minimum: int,
    maximum: int | None,
    *checks: Any,
    consume: Callable[[ParseContext], Any] | None = None,
) -> list[Any]:
    """
    Repeat a consumer until it fails or `maximum` values were collected.

    Args:
        minimum (int): Fewest values accepted.
        maximum (int | None): Most values taken; `None` means no limit.
        *checks: Checks for the default consumer, `value(ctx, *checks)`.
        consume: A custom single-value consumer.

    Returns:
        list[Any]: The collected values. The cursor is left right after the last
        successful consumption.

    Raises:
        ValueCheckError: If fewer than `minimum` values were collected; the
            cursor is restored to where the first attempt started.
    """
    if consume is None:

        def consume(inner: ParseContext) -> Any:
            return value(inner, *checks)

    start = ctx.cursor
    values: list[Any] = []
    failure: ValueCheckError | None = None
    while maximum is None or len(values) < maximum:
        before = ctx.cursor
        try:
            item = consume(ctx)
        except ValueCheckError as error:
            ctx.cursor = before
            failure = error
            break
        values.append(item)
        if ctx.cursor <= before:
            break

    if len(values) < minimum:
        ctx.cursor = start
        reason = f": {failure.detail}" if failure else ""
        raise ValueCheckError(
            f"expected at least {minimum} values, got {len(values)}{reason}"
        )
    return values


def value_many(ctx: ParseContext, *checks: Any) -> list[Any]:
    """Consume as many values as the checks accept (possibly none)."""
    return value_times(ctx, 0, None, *checks)


def value_append(
    ctx: ParseContext, name: str, *checks: Any, namespace_name: str = VARS
) -> Any:
    """Consume one value and append it to the list bound to `name`."""
    item = value(ctx, *checks)
    ctx.bindings.append(name, item, namespace_name=namespace_name)
    return item


def value_extend(
    ctx: ParseContext, name: str, *checks: Any, namespace_name: str = VARS
) -> list[Any]:
    """Consume values while the checks accept them and extend the list `name`."""
    items = value_many(ctx, *checks)
    ctx.bindings.append(name, *items, namespace_name=namespace_name)
    return items
