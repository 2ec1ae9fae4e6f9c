# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Optline.

All exceptions inherit from `OptlineError`, the base exception for the package.

Exception Hierarchy:
- OptlineError
    ├── OptionDefinitionError
    ├── RecordStoreError
    ├── ValueCheckError
    ├── TakeFailure
    └── ParseError
          ├── MatchError
          ├── TakeError
          └── ConfigFileError

`ValueCheckError` and `TakeFailure` are raised while a taker consumes tokens;
the parse driver converts them into a `TakeError` carrying the cursor position
at the point of failure. Only `ParseError` and its subclasses escape `parse()`.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from optline.parser.cursor import Cursor


class OptlineError(Exception):
    """Base exception for Optline."""


class OptionDefinitionError(OptlineError):
    """Exception raised when an option, flag or matcher is declared incorrectly."""


class RecordStoreError(OptlineError):
    """Exception raised when a record position does not address a record."""


class ValueCheckError(OptlineError):
    """Exception raised when the value engine cannot consume a value."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class TakeFailure(OptlineError):
    """Raised by custom takers to report a failure to the parse driver."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ParseErrorKind(Enum):
    """The two ways a parse step can fail."""

    MATCH = "match-error"
    TAKE = "take-error"

    def __str__(self) -> str:
        return self.value


class ParseError(OptlineError):
    """
    A parse invocation stopped before consuming every token.

    Attributes:
        kind (ParseErrorKind): Whether matching or taking failed.
        detail (str): `"none"` / `"multiple"` for match errors, the taker's
            failure text for take errors.
        position (Cursor): Cursor at the point of failure.
        tokens (tuple[str, ...]): The token stream being parsed.
    """

    kind: ParseErrorKind = ParseErrorKind.MATCH

    def __init__(
        self,
        detail: str,
        position: Cursor,
        tokens: Sequence[str] = (),
        kind: ParseErrorKind | None = None,
    ):
        if kind is not None:
            self.kind = kind
        self.detail = detail
        self.position = position
        self.tokens = tuple(tokens)
        super().__init__(f"{self.kind} {detail} @{position}")


class MatchError(ParseError):
    """No option recognized the token, or several tied at the top priority."""

    kind = ParseErrorKind.MATCH


class TakeError(ParseError):
    """The winning option's taker failed after it was selected."""

    kind = ParseErrorKind.TAKE


class ConfigFileError(ParseError):
    """
    A line of a config file failed to parse.

    Wraps the child error of the failing line (available as `__cause__`) and
    records where it came from.
    """

    def __init__(
        self,
        detail: str,
        position: Cursor,
        tokens: Sequence[str] = (),
        kind: ParseErrorKind | None = None,
        *,
        path: str,
        line_number: int = 0,
        line: str = "",
    ):
        self.path = path
        self.line_number = line_number
        self.line = line
        super().__init__(detail, position, tokens, kind)
        self.args = (
            f"can't parse line({line}) from file({path}:{line_number}), "
            f"{self.kind} {detail}",
        )
