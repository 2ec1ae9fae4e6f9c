# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Typed flag presets in the style of gflags' `DEFINE_string` and friends.

A flag is an option with a type, a documented default and a binding in the
`"flags"` namespace of the parser's `BindingTable`. This module only builds the
pieces; `OptionParser.define_flag()` registers them:

    parser.define_flag("integer", "epochs", 10, "training epochs")
    parser.parse(["--epochs", "20"])
    parser.bindings.get("epochs", namespace_name="flags")   # 20

Presets:
- string:  any value
- integer: `^[-+]?[0-9]+$`, bound as `int`
- float:   the float pattern, bound as `float`
- boolean: `--name` is true, `--name=0|false` and `--no-name` are false
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from optline.bindings import FLAGS
from optline.exceptions import OptionDefinitionError, ValueCheckError
from optline.parser.context import ParseContext
from optline.parser.matchers import split_declaration
from optline.parser.takers import AssignOne, BooleanTaker, Taker
from optline.parser.values import boolean, float_, integer, value


class FlagKind(Enum):
    """
    The flag presets.

    Aliases:
        - "str" → "string"
        - "int" → "integer"
        - "bool" → "boolean"

    Example:
        FlagKind("INT") → FlagKind.INTEGER
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "int": "integer",
            "bool": "boolean",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> FlagKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def checks(self) -> tuple[Any, ...]:
        """Value checks applied to a flag's value, converter last."""
        if self is FlagKind.INTEGER:
            return (integer(), int)
        if self is FlagKind.FLOAT:
            return (float_(), float)
        if self is FlagKind.BOOLEAN:
            return (boolean(), lambda raw: raw == "1")
        return ()

    @property
    def metavar(self) -> str | None:
        if self is FlagKind.BOOLEAN:
            return None
        return self.value.upper()

    def __str__(self) -> str:
        return self.value


@dataclass
class FlagBinding:
    """
    A typed flag and where its value lives.

    Attributes:
        name (str): Binding name in the `"flags"` namespace.
        kind (FlagKind): The preset.
        default (Any): The coerced default value.
        aliases (tuple[str, ...]): Aliases accepted on the command line.
        negative_aliases (tuple[str, ...]): `--no-` aliases of boolean flags.
        checks (tuple[Any, ...]): Value checks of the preset.
        namespace_name (str): Namespace of the binding.
    """

    name: str
    kind: FlagKind
    default: Any
    aliases: tuple[str, ...]
    negative_aliases: tuple[str, ...] = ()
    checks: tuple[Any, ...] = field(default_factory=tuple)
    namespace_name: str = FLAGS

    @property
    def all_aliases(self) -> tuple[str, ...]:
        return self.aliases + self.negative_aliases

    def make_taker(self) -> Taker:
        if self.kind is FlagKind.BOOLEAN:
            return BooleanTaker(
                self.name, self.aliases, self.negative_aliases, self.namespace_name
            )
        return AssignOne(self.name, *self.checks, namespace_name=self.namespace_name)

    def doc_lines(self, doc: tuple[str, ...]) -> tuple[str, ...]:
        lines: list[str] = []
        if self.kind.metavar:
            lines.append(self.kind.metavar)
        lines.extend(doc)
        lines.append(f"Default: {self.default}")
        return tuple(lines)


def flag_name(aliases: list[str]) -> str:
    """Derive a binding name: the first long alias wins, else the last short one."""
    name = None
    for alias in aliases:
        if alias.startswith("--"):
            name = alias.lstrip("-").replace("-", "_")
            break
        name = alias.lstrip("-").replace("-", "_")
    if not name or not name.isidentifier():
        raise OptionDefinitionError(
            f"Flag name must be a valid identifier, got {name!r} from {aliases!r}"
        )
    return name


def negative_aliases(name: str, aliases: list[str]) -> tuple[str, ...]:
    """`--no-<alias>` for every long alias, or `--no-<name>` if there is none."""
    negatives = tuple(
        f"--no-{alias[2:]}"
        for alias in aliases
        if alias.startswith("--") and not alias.startswith("--no-")
    )
    return negatives or (f"--no-{name.replace('_', '-')}",)


def coerce_default(default: Any, kind: FlagKind) -> Any:
    """Run a string default through the preset's checks."""
    if not isinstance(default, str):
        if kind is FlagKind.BOOLEAN and default is not None:
            return bool(default)
        if kind is FlagKind.FLOAT and isinstance(default, int):
            return float(default)
        return default
    try:
        return value(ParseContext(tokens=(default,)), *kind.checks)
    except ValueCheckError as error:
        raise OptionDefinitionError(
            f"Default value {default!r} is not a valid {kind}: {error.detail}"
        ) from error


def build_flag(kind: FlagKind | str, spec: str, default: Any) -> FlagBinding:
    """
    Build a `FlagBinding` from a preset kind and a name or alias spec.

    `spec` is either a bare name (`"epochs"` → `--epochs`) or an alias
    declaration starting with a dash (`"-e|--epochs"`).
    """
    if not isinstance(kind, FlagKind):
        try:
            kind = FlagKind(kind)
        except ValueError as error:
            raise OptionDefinitionError(str(error)) from error
    spec = spec.strip()
    if spec.startswith("-"):
        aliases = split_declaration(spec)
        name = flag_name(aliases)
    else:
        name = spec.replace("-", "_")
        if not name.isidentifier():
            raise OptionDefinitionError(f"Flag name must be a valid identifier: {spec!r}")
        aliases = [f"--{spec}"]
    negatives = negative_aliases(name, aliases) if kind is FlagKind.BOOLEAN else ()
    return FlagBinding(
        name=name,
        kind=kind,
        default=coerce_default(default, kind),
        aliases=tuple(aliases),
        negative_aliases=negatives,
        checks=kind.checks,
    )
