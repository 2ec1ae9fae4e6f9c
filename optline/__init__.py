"""
Optline Options Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .bindings import BindingTable
from .exceptions import (
    ConfigFileError,
    MatchError,
    OptionDefinitionError,
    OptlineError,
    ParseError,
    TakeError,
)
from .logger import logger
from .parser import Cursor, FlagKind, OptionParser, Priority
from .records import RecordStore
from .signals import HelpSignal

__version__ = "0.1.0"

__all__ = [
    "BindingTable",
    "ConfigFileError",
    "Cursor",
    "FlagKind",
    "HelpSignal",
    "logger",
    "MatchError",
    "OptionDefinitionError",
    "OptionParser",
    "OptlineError",
    "ParseError",
    "Priority",
    "RecordStore",
    "TakeError",
]
