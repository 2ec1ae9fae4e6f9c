"""
Optline Options Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .context import ParseContext
from .cursor import Cursor, looks_like_option, split_position
from .flags import FlagBinding, FlagKind
from .matchers import AliasMatcher, CustomMatcher, Matcher, PositionalMatcher, Priority
from .option import OptionDefinition
from .option_parser import EXIT_PARSE_ERROR, MatchCandidate, OptionParser
from .registry import OptionRegistry
from .takers import (
    AppendMany,
    AppendOne,
    AssignOne,
    BooleanTaker,
    ConfigFileTaker,
    CustomTaker,
    HelpTaker,
    Taker,
)

__all__ = [
    "AliasMatcher",
    "AppendMany",
    "AppendOne",
    "AssignOne",
    "BooleanTaker",
    "ConfigFileTaker",
    "Cursor",
    "CustomMatcher",
    "CustomTaker",
    "EXIT_PARSE_ERROR",
    "FlagBinding",
    "FlagKind",
    "HelpTaker",
    "looks_like_option",
    "MatchCandidate",
    "Matcher",
    "OptionDefinition",
    "OptionParser",
    "OptionRegistry",
    "ParseContext",
    "PositionalMatcher",
    "Priority",
    "split_position",
    "Taker",
]
