# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative option definitions loaded from YAML or TOML files.

Example (YAML):
    description: "Trainer options"
    help: true
    config_file: "--config-file"
    flags:
      - {kind: integer, name: epochs, default: 10, help: "training epochs"}
    options:
      - {aliases: "-t|--train-file", dest: train_file, help: ["FILE", "set train file"]}
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from optline.exceptions import OptionDefinitionError
from optline.logger import logger
from optline.parser.flags import FlagKind
from optline.parser.option_parser import OptionParser
from optline.parser.takers import AppendMany, AppendOne, AssignOne, Taker
from optline.parser.values import non_option


def help_lines(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        return [value]
    return list(value)


class RawFlag(BaseModel):
    """A typed flag, as passed to `OptionParser.define_flag()`."""

    kind: str
    name: str
    default: Any = None
    help: str | list[str] = Field(default_factory=list)

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, value: str) -> str:
        return FlagKind(value).value


class RawOption(BaseModel):
    """An untyped option binding values in the `"vars"` namespace."""

    aliases: str
    dest: str
    action: Literal["assign", "append", "extend"] = "assign"
    kind: str | None = None
    help: str | list[str] = Field(default_factory=list)

    @field_validator("dest")
    @classmethod
    def validate_dest(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"dest must be a valid identifier, got {value!r}")
        return value

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, value: str | None) -> str | None:
        if value is None:
            return None
        kind = FlagKind(value)
        if kind is FlagKind.BOOLEAN:
            raise ValueError("boolean options must be declared as flags")
        return kind.value

    def make_taker(self) -> Taker:
        checks = FlagKind(self.kind).checks if self.kind else ()
        if self.action == "append":
            return AppendOne(self.dest, *checks)
        if self.action == "extend":
            return AppendMany(self.dest, non_option(), *checks)
        return AssignOne(self.dest, *checks)


class OptionsConfig(BaseModel):
    """Options file model."""

    description: str | None = None
    help: bool = True
    config_file: str | None = None
    positional: str | None = None
    flags: list[RawFlag] = Field(default_factory=list)
    options: list[RawOption] = Field(default_factory=list)

    def to_parser(self, parser: OptionParser | None = None) -> OptionParser:
        if parser is None:
            parser = OptionParser(description=self.description or "")
        elif self.description:
            parser.description = self.description
        for flag in self.flags:
            parser.define_flag(flag.kind, flag.name, flag.default, *help_lines(flag.help))
        for option in self.options:
            parser.add_option(option.aliases, option.make_taker(), *help_lines(option.help))
        if self.positional:
            parser.add_positional(self.positional, f"append to {self.positional}")
        if self.config_file:
            parser.add_config_file_option(self.config_file)
        if self.help:
            parser.add_help()
        return parser


def load_options(file_path: Path | str, parser: OptionParser | None = None) -> OptionParser:
    """
    Load option definitions from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to a `.yaml`, `.yml` or `.toml` file.
        parser (OptionParser | None): Parser to register the options on; a new
            one is created when omitted.

    Returns:
        OptionParser: The parser with the loaded options.

    Raises:
        OptionDefinitionError: If the file is missing, has an unsupported
            format, cannot be parsed or does not describe valid options.
    """
    path = Path(file_path)
    if not path.is_file():
        raise OptionDefinitionError(f"No such options file: {file_path}")

    suffix = path.suffix
    try:
        with path.open("r", encoding="UTF-8") as options_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(options_file)
            elif suffix == ".toml":
                raw_config = toml.load(options_file)
            else:
                raise OptionDefinitionError(f"Unsupported options format: {suffix}")
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        raise OptionDefinitionError(f"Cannot parse options file {path}: {error}") from error

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise OptionDefinitionError(
            "Options file must contain a mapping.\n"
            "Example:\n"
            "description: 'My tool'\n"
            "flags:\n"
            "  - kind: integer\n"
            "    name: epochs\n"
            "    default: 10"
        )

    try:
        config = OptionsConfig.model_validate(raw_config)
    except ValidationError as error:
        raise OptionDefinitionError(f"Invalid options file {path}:\n{error}") from error

    logger.debug(
        "Loaded %d flags and %d options from %s",
        len(config.flags),
        len(config.options),
        path,
    )
    return config.to_parser(parser)
