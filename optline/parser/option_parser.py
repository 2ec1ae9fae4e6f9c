# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `OptionParser`, the registration API and parse driver of
Optline.

Options are declared as a matcher, a taker and documentation. Parsing is a
loop over the token stream; each step:

1. runs every registered matcher on a forked context at the current cursor,
2. keeps the candidates with a priority above `Priority.NONE`,
3. fails with `MatchError("none")` if there is none and with
   `MatchError("multiple")` if the top two share a priority,
4. commits the winner's cursor and runs its taker; a taker failure becomes a
   `TakeError` at the cursor where consumption stopped.

The loop ends when the cursor passes the last token.

Example Usage:
    parser = OptionParser(description="Train a model.")
    parser.add_option("-t|--train-file", "train_file", "FILE", "set variable train_file")
    parser.define_flag("integer", "epochs", 10, "training epochs")
    parser.add_config_file_option()
    parser.add_help()

    parser.parse(["--train", "train.log", "--epochs", "20"])
    parser.bindings.get("train_file")                    # 'train.log'
    parser.get_flag("epochs")                            # 20

Design Notes:
Priorities are compared only between different options at the same cursor, so
two options accepting the same prefix are reported when the prefix is used, not
when they are registered.
"""
from __future__ import annotations

import shlex
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

from rich.console import Console
from rich.text import Text

from optline.bindings import FLAGS, BindingTable
from optline.console import console as default_console
from optline.console import error_console
from optline.exceptions import (
    ConfigFileError,
    MatchError,
    OptionDefinitionError,
    ParseError,
    ParseErrorKind,
    TakeError,
    TakeFailure,
    ValueCheckError,
)
from optline.help import (
    DOC_WIDTH,
    LABEL_COLUMN,
    default_usage,
    format_description,
    format_option_help,
)
from optline.logger import logger
from optline.parser.context import ParseContext
from optline.parser.cursor import Cursor
from optline.parser.flags import FlagBinding, FlagKind, build_flag
from optline.parser.matchers import AliasMatcher, Priority, PositionalMatcher
from optline.parser.option import OptionDefinition
from optline.parser.registry import MatcherSpec, OptionRegistry, TakerSpec, split_doc
from optline.parser.takers import AppendOne, ConfigFileTaker, HelpTaker, Taker
from optline.records import RecordStore

EXIT_PARSE_ERROR = 126
MAX_CONFIG_DEPTH = 16


@dataclass(frozen=True)
class MatchCandidate:
    """One option that matched at a step, and where its taker starts."""

    priority: int
    option: OptionDefinition
    cursor: Cursor


class OptionParser:
    """
    Declarative option parser driven by matcher priorities.

    Attributes:
        registry (OptionRegistry): Registered options, in registration order.
        bindings (BindingTable): Values bound by takers; shared with nested
            parses and with other parsers given the same table.
        flags (dict[str, FlagBinding]): Typed flags by binding name.
        last_position (Cursor): Where the most recent parse stopped.
    """

    def __init__(
        self,
        description: str | None = None,
        program: str | None = None,
        bindings: BindingTable | None = None,
        store: RecordStore | None = None,
        console: Console | None = None,
        help_column: int = LABEL_COLUMN,
        help_width: int = DOC_WIDTH,
    ) -> None:
        self.description: str | None = description
        self.program: str | None = program
        self.registry: OptionRegistry = OptionRegistry(store)
        self.bindings: BindingTable = bindings if bindings is not None else BindingTable()
        self.console: Console = console if console is not None else default_console
        self.help_column: int = help_column
        self.help_width: int = help_width
        self.flags: dict[str, FlagBinding] = {}
        self.last_position: Cursor = Cursor(0)

    # Registration

    def add_option(
        self, matcher: MatcherSpec, taker: TakerSpec, *doc: str
    ) -> OptionDefinition:
        """
        Register an option.

        `matcher` is an alias declaration such as `"-t|--train-file"`, a
        `Matcher` or a callable; `taker` is a variable name (assign one value),
        a `Taker` or a callable. `doc` lines are shown in help output.
        """
        return self.registry.add(matcher, taker, *doc)

    def add_positional(
        self,
        taker: TakerSpec,
        *doc: str,
        priority: int = Priority.POSITION,
        label: str = "ARG",
    ) -> OptionDefinition:
        """
        Register a catch-all for non-option tokens.

        A variable name as `taker` appends each token to that list binding.
        """
        if isinstance(taker, str):
            if not taker.isidentifier():
                raise OptionDefinitionError(
                    f"Taker name must be a valid identifier, got {taker!r}"
                )
            taker = AppendOne(taker)
        return self.registry.add(PositionalMatcher(priority, label), taker, *doc)

    def add_help(
        self, aliases: str = "-h|--help", text: str = "show help message"
    ) -> OptionDefinition:
        """Register an option that prints help and stops with `HelpSignal`."""
        return self.registry.add(aliases, HelpTaker(), text)

    def add_config_file_option(
        self, aliases: str = "--config-file", *doc: str
    ) -> OptionDefinition:
        """Register an option that parses every line of a file as a command line."""
        doc = doc or ("FILE", "parse every line of FILE as command line options")
        return self.registry.add(aliases, ConfigFileTaker(), *doc)

    def define_flag(
        self, kind: FlagKind | str, name: str, default: Any, *doc: str
    ) -> FlagBinding:
        """
        Declare a typed flag, bind its default and register its option.

        Args:
            kind (FlagKind | str): `string`, `integer`, `float` or `boolean`.
            name (str): A bare name (`"epochs"`) or an alias declaration
                starting with a dash (`"-e|--epochs"`).
            default (Any): Initial value; strings go through the preset checks.
            *doc: Documentation lines; `"Default: <value>"` is appended.
        """
        flag = build_flag(kind, name, default)
        self.bindings.declare(flag.name, flag.default, flag.namespace_name)
        self.flags[flag.name] = flag
        self.registry.add(
            AliasMatcher(flag.all_aliases),
            flag.make_taker(),
            *flag.doc_lines(split_doc(doc)),
        )
        return flag

    def define_string(self, name: str, default: Any, *doc: str) -> FlagBinding:
        return self.define_flag(FlagKind.STRING, name, default, *doc)

    def define_integer(self, name: str, default: Any, *doc: str) -> FlagBinding:
        return self.define_flag(FlagKind.INTEGER, name, default, *doc)

    def define_float(self, name: str, default: Any, *doc: str) -> FlagBinding:
        return self.define_flag(FlagKind.FLOAT, name, default, *doc)

    def define_boolean(self, name: str, default: Any, *doc: str) -> FlagBinding:
        return self.define_flag(FlagKind.BOOLEAN, name, default, *doc)

    def get_flag(self, name: str, default: Any = None) -> Any:
        """Current value of the flag bound as `name`."""
        return self.bindings.get(name, default, namespace_name=FLAGS)

    # Resolution

    def matches(self, ctx: ParseContext) -> list[MatchCandidate]:
        """Run every matcher at the cursor; best candidates first."""
        candidates: list[MatchCandidate] = []
        for option in self.registry:
            trial = ctx.fork()
            try:
                priority = option.matcher.match(trial)
            except ValueCheckError:
                continue
            if priority > Priority.NONE:
                candidates.append(MatchCandidate(priority, option, trial.cursor))
        return sorted(candidates, key=lambda candidate: candidate.priority, reverse=True)

    def resolve(self, ctx: ParseContext) -> MatchCandidate:
        """
        Pick the option for the current step.

        Raises:
            MatchError: `"none"` if nothing matched, `"multiple"` if the best
                priority is shared.
        """
        candidates = self.matches(ctx)
        if not candidates:
            logger.debug("No option matches at %s: %r", ctx.cursor, ctx.current_token())
            raise MatchError("none", ctx.cursor, ctx.tokens)
        best = candidates[0]
        if len(candidates) > 1 and candidates[1].priority == best.priority:
            tied = [c.option.label for c in candidates if c.priority == best.priority]
            logger.debug("Ambiguous match at %s between %s", ctx.cursor, ", ".join(tied))
            raise MatchError("multiple", ctx.cursor, ctx.tokens)
        logger.debug(
            "Matched %s at %s with priority %d",
            best.option.label,
            ctx.cursor,
            best.priority,
        )
        return best

    def _step(self, ctx: ParseContext) -> None:
        start = ctx.cursor
        winner = self.resolve(ctx)
        ctx.item_start = start
        ctx.cursor = winner.cursor
        taker: Taker = winner.option.taker
        try:
            taker.take(ctx)
        except (ValueCheckError, TakeFailure) as error:
            logger.debug("Taker %s failed at %s: %s", taker, ctx.cursor, error.detail)
            raise TakeError(error.detail, ctx.cursor, ctx.tokens) from error
        if ctx.cursor <= start:
            raise TakeError(f"no progress by {taker}", ctx.cursor, ctx.tokens)

    # Invocation

    def parse(
        self, tokens: Iterable[str], *, source: str | None = None, depth: int = 0
    ) -> Cursor:
        """
        Parse a token stream, binding values as a side effect.

        Returns:
            Cursor: The final cursor, past the last token.

        Raises:
            ParseError: `MatchError` or `TakeError` at the failing position.
        """
        ctx = ParseContext(
            tokens=tuple(tokens),
            bindings=self.bindings,
            parser=self,
            source=source,
            depth=depth,
        )
        try:
            while not ctx.at_end():
                self._step(ctx)
        finally:
            self.last_position = ctx.cursor
        return ctx.cursor

    def parse_all(self, tokens: Sequence[str] | None = None) -> Cursor:
        """
        Parse process arguments; on error report it and exit with status 126.

        Defaults to `sys.argv[1:]`.
        """
        if tokens is None:
            tokens = sys.argv[1:]
        try:
            return self.parse(tokens)
        except ParseError as error:
            self.report_error(error)
            sys.exit(EXIT_PARSE_ERROR)

    def parse_line(
        self, text: str, *, source: str | None = None, depth: int = 0
    ) -> Cursor:
        """Split a line with shell word rules and parse the words.

        An unquoted `#` starts a comment running to the end of the line.
        """
        try:
            tokens = shlex.split(text, comments=True)
        except ValueError as error:
            raise MatchError(f"cannot split line: {error}", Cursor(0), ()) from error
        return self.parse(tokens, source=source, depth=depth)

    def parse_file(self, path: str | Path, *, depth: int = 0) -> None:
        """
        Parse every line of a config file as an independent command line.

        Blank lines and lines starting with `#` are skipped. Lines share this
        parser's options and bindings.

        Raises:
            ConfigFileError: For the first failing line, or if the file cannot
                be read or config files nest too deeply.
        """
        name = str(path)
        if depth > MAX_CONFIG_DEPTH:
            raise ConfigFileError(
                f"config files nested deeper than {MAX_CONFIG_DEPTH}",
                Cursor(0),
                kind=ParseErrorKind.TAKE,
                path=name,
            )
        try:
            lines = Path(path).read_text(encoding="UTF-8").splitlines()
        except (OSError, UnicodeDecodeError) as error:
            reason = getattr(error, "strerror", None) or error
            raise ConfigFileError(
                f"cannot read config file: {reason}",
                Cursor(0),
                kind=ParseErrorKind.TAKE,
                path=name,
            ) from error

        logger.debug("Parsing config file %s (depth %d)", name, depth)
        for number, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            try:
                self.parse_line(line, source=name, depth=depth)
            except ParseError as error:
                logger.debug("Config file %s failed at line %d", name, number)
                raise ConfigFileError(
                    error.detail,
                    error.position,
                    error.tokens,
                    error.kind,
                    path=name,
                    line_number=number,
                    line=line,
                ) from error

    # Output

    def format_help(self) -> list[str]:
        """Return the help text as lines."""
        lines: list[str] = []
        description = self.description if self.description is not None else default_usage()
        if description:
            lines.extend(format_description(description))
            lines.append("")
        for option in self.registry:
            lines.extend(
                format_option_help(
                    option.label, option.doc, self.help_column, self.help_width
                )
            )
        return lines

    def render_help(self) -> None:
        """Print the help text."""
        for line in self.format_help():
            self.console.print(line, markup=False, highlight=False, soft_wrap=True)

    def format_error(self, error: ParseError) -> Text:
        """Render the token stream with the failing position highlighted."""
        text = Text()
        index, offset = error.position
        for number, token in enumerate(error.tokens):
            if number:
                text.append(" ")
            if number == index:
                text.append(token[:offset])
                text.append(token[offset:] or "<>", style="bold red underline")
            else:
                text.append(token)
        if index >= len(error.tokens):
            text.append(" <end>" if error.tokens else "<end>", style="bold red")
        return text

    def report_error(self, error: ParseError) -> None:
        program = f"{self.program}: " if self.program else ""
        error_console.print(
            f"{program}parse stop @{error.position} with error {error.kind} {error.detail}",
            markup=False,
            highlight=False,
        )
        if isinstance(error, ConfigFileError):
            error_console.print(
                f"  in {error.path}:{error.line_number}: {error.line}",
                markup=False,
                highlight=False,
            )
        error_console.print(Text("  ").append_text(self.format_error(error)))

    def suggest(self, stub: str = "") -> list[str]:
        """Aliases that the alias matchers would accept for `stub`, sorted."""
        suggestions = set()
        for option in self.registry:
            if isinstance(option.matcher, AliasMatcher):
                suggestions.update(
                    alias for alias in option.matcher.aliases if alias.startswith(stub)
                )
        return sorted(suggestions)

    def __str__(self) -> str:
        return f"OptionParser(options={len(self.registry)}, flags={len(self.flags)})"

    def __repr__(self) -> str:
        return str(self)
