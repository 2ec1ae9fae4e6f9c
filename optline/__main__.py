"""
Optline Options Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from rich.table import Table
from rich.text import Text

from optline.bindings import FLAGS, VARS
from optline.config import load_options
from optline.console import console, error_console
from optline.exceptions import OptionDefinitionError, ParseError
from optline.parser import AppendMany, OptionParser
from optline.parser.option_parser import EXIT_PARSE_ERROR
from optline.utils import setup_logging

DESCRIPTION = """\
Parse command line words against option definitions loaded from a YAML or
TOML file and print the resulting bindings.

Without --options the first of optline.yaml, optline.toml, .optline.yaml and
.optline.toml in the current directory is used, else $OPTLINE_OPTIONS."""


def find_options_file() -> Path | None:
    candidates = [
        Path.cwd() / "optline.yaml",
        Path.cwd() / "optline.toml",
        Path.cwd() / ".optline.yaml",
        Path.cwd() / ".optline.toml",
    ]
    if os.environ.get("OPTLINE_OPTIONS"):
        candidates.append(Path(os.environ["OPTLINE_OPTIONS"]))
    return next((p for p in candidates if p.is_file()), None)


def get_parser() -> OptionParser:
    parser = OptionParser(description=DESCRIPTION, program="optline")
    parser.add_option("--options", "options", "FILE", "load option definitions from FILE")
    parser.add_option("--config-file", "config_file", "FILE", "parse FILE before --args")
    parser.add_option(
        "--args", AppendMany("args"), "TOKEN...", "parse every remaining word"
    )
    parser.define_boolean("verbose", False, "log parse steps")
    parser.add_help()
    return parser


def bindings_table(parser: OptionParser) -> Table:
    table = Table(title="Bindings")
    table.add_column("Namespace", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Value")
    for namespace_name in (VARS, FLAGS):
        for name, value in parser.bindings.as_dict(namespace_name).items():
            table.add_row(namespace_name, name, Text(repr(value)))
    return table


def main(argv: Sequence[str] | None = None) -> int:
    cli = get_parser()
    cli.parse_all(argv)
    if cli.get_flag("verbose"):
        setup_logging(console_log_level=logging.DEBUG)

    options_path = cli.bindings.get("options") or find_options_file()
    if not options_path:
        error_console.print("optline: no options file found, use --options FILE")
        return 1
    try:
        target = load_options(options_path)
    except OptionDefinitionError as error:
        error_console.print(f"optline: {error}", markup=False)
        return 1

    try:
        config_file = cli.bindings.get("config_file")
        if config_file:
            target.parse_file(config_file)
        target.parse(cli.bindings.get("args", []))
    except ParseError as error:
        target.report_error(error)
        return EXIT_PARSE_ERROR

    console.print(bindings_table(target))
    return 0


if __name__ == "__main__":
    sys.exit(main())
