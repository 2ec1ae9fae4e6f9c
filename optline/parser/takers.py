# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Takers run after an option's matcher won a parse step.

A taker starts at the cursor the matcher left, consumes zero or more values
through the value engine and performs the option's effect, usually binding a
value in the context's `BindingTable`. It reports failure by letting a
`ValueCheckError` or `TakeFailure` escape; the driver turns either into a
`TakeError` at the cursor where consumption stopped.

Takers:
- `AssignOne`: bind one checked value to a name.
- `AppendOne` / `AppendMany`: append one / all following values to a list.
- `BooleanTaker`: `--flag`, `--flag=0`, `--no-flag` for boolean presets.
- `ConfigFileTaker`: read a config file and parse each of its lines.
- `HelpTaker`: render help and stop with `HelpSignal`.
- `CustomTaker`: any callable taking the context.
"""
from __future__ import annotations

from typing import Any, Callable, Sequence

from optline.bindings import FLAGS, VARS
from optline.exceptions import (
    ConfigFileError,
    OptionDefinitionError,
    TakeFailure,
    ValueCheckError,
)
from optline.parser.context import ParseContext
from optline.parser.matchers import AliasMatcher
from optline.parser.values import (
    boolean,
    inline,
    optional,
    value,
    value_append,
    value_times,
)
from optline.signals import HelpSignal


class Taker:
    """Base class for takers."""

    label: str = "taker"

    def take(self, ctx: ParseContext) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.label


class AssignOne(Taker):
    """Consume one value through `checks` and bind it to `name`."""

    def __init__(self, name: str, *checks: Any, namespace_name: str = VARS):
        self.name = name
        self.checks = checks
        self.namespace_name = namespace_name
        self.label = f"assign {name}"

    def take(self, ctx: ParseContext) -> None:
        ctx.bindings.set(self.name, value(ctx, *self.checks), self.namespace_name)

    def __repr__(self) -> str:
        return f"AssignOne({self.namespace_name}.{self.name})"


class AppendOne(Taker):
    """Consume one value and append it to the list bound to `name`."""

    def __init__(self, name: str, *checks: Any, namespace_name: str = VARS):
        self.name = name
        self.checks = checks
        self.namespace_name = namespace_name
        self.label = f"append {name}"

    def take(self, ctx: ParseContext) -> None:
        value_append(ctx, self.name, *self.checks, namespace_name=self.namespace_name)


class AppendMany(Taker):
    """Consume values while `checks` accept them and extend the list `name`."""

    def __init__(
        self,
        name: str,
        *checks: Any,
        minimum: int = 0,
        maximum: int | None = None,
        namespace_name: str = VARS,
    ):
        self.name = name
        self.checks = checks
        self.minimum = minimum
        self.maximum = maximum
        self.namespace_name = namespace_name
        self.label = f"extend {name}"

    def take(self, ctx: ParseContext) -> None:
        items = value_times(ctx, self.minimum, self.maximum, *self.checks)
        ctx.bindings.append(self.name, *items, namespace_name=self.namespace_name)


class BooleanTaker(Taker):
    """
    Set a boolean binding from a flag token.

    The bare flag means true, an attached value (`--flag=0`, `-v1`) must pass
    the `bool` check, and any of `negative_aliases` (`--no-flag`) inverts the
    result. The token after the flag is never consumed.
    """

    def __init__(
        self,
        name: str,
        aliases: Sequence[str],
        negative_aliases: Sequence[str] = (),
        namespace_name: str = FLAGS,
    ):
        self.name = name
        self.negative_aliases = tuple(negative_aliases)
        self.aliases = AliasMatcher(tuple(aliases) + self.negative_aliases)
        self.namespace_name = namespace_name
        self.label = f"boolean {name}"

    def take(self, ctx: ParseContext) -> None:
        token = ctx.tokens[ctx.item_start.index][ctx.item_start.offset :]
        matched = self.aliases.resolve(token.partition("=")[0])
        raw = value(ctx, inline(), optional("1"), boolean())
        result = raw == "1"
        if matched in self.negative_aliases:
            result = not result
        ctx.bindings.set(self.name, result, self.namespace_name)


class ConfigFileTaker(Taker):
    """Consume a file name and parse every line of that file as a command line."""

    label = "config-file"

    def take(self, ctx: ParseContext) -> None:
        try:
            path = value(ctx)
        except ValueCheckError:
            raise TakeFailure("expect a config file") from None
        if ctx.parser is None:
            raise TakeFailure("config files need a parser")
        try:
            ctx.parser.parse_file(path, depth=ctx.depth + 1)
        except ConfigFileError as error:
            raise TakeFailure(str(error)) from error


class HelpTaker(Taker):
    """Render help for every registered option, then raise `HelpSignal`."""

    label = "help"

    def take(self, ctx: ParseContext) -> None:
        if ctx.parser is not None:
            ctx.parser.render_help()
        raise HelpSignal()


class CustomTaker(Taker):
    """
    Adapt a callable `func(ctx)` into a taker.

    The callable consumes values with the value engine itself. Returning
    `False` fails the take; so does raising `TakeFailure` or `ValueCheckError`.
    """

    def __init__(self, func: Callable[[ParseContext], Any], label: str | None = None):
        if not callable(func):
            raise OptionDefinitionError(f"Taker must be callable: {func!r}")
        self.func = func
        self.label = label or getattr(func, "__name__", "custom")

    def take(self, ctx: ParseContext) -> None:
        if self.func(ctx) is False:
            raise TakeFailure(f"{self.label} failed")

    def __repr__(self) -> str:
        return f"CustomTaker({self.label})"


def as_taker(spec: str | Taker | Callable[[ParseContext], Any], *checks: Any) -> Taker:
    """
    Turn a taker spec into a `Taker`.

    A bare identifier means "assign one value to the variable of that name",
    takers pass through and any other callable is wrapped in `CustomTaker`.
    """
    if isinstance(spec, Taker):
        return spec
    if isinstance(spec, str):
        if not spec.isidentifier():
            raise OptionDefinitionError(
                f"Taker name must be a valid identifier, got {spec!r}"
            )
        return AssignOne(spec, *checks)
    if callable(spec):
        return CustomTaker(spec)
    raise OptionDefinitionError(f"Invalid taker: {spec!r}")
