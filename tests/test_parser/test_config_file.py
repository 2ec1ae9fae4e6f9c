import os

import pytest

from optline.exceptions import ConfigFileError, ParseErrorKind, TakeError
from optline.parser import Cursor, OptionParser
from optline.parser.values import regex, value_many


@pytest.fixture
def parser():
    parser = OptionParser(description="")
    parser.add_option("tf|train-file", "train_file", "FILE\nset variable train_file")
    parser.add_option("input-file", "input_file", "FILE\nset variable input_file")
    parser.bindings.set("total", 0)

    def summation(ctx):
        numbers = value_many(ctx, regex("^[0-9]+$"))
        ctx.bindings.set("total", ctx.bindings.get("total") + sum(map(int, numbers)))

    parser.add_option("sum", summation, "INT+\ncall sum as take function")
    parser.add_config_file_option("config-file", "FILE\nconfig from file")
    return parser


def test_config_file(parser, tmp_path):
    uid = str(os.getuid()) if hasattr(os, "getuid") else "1000"
    config = tmp_path / "options.conf"
    config.write_text(
        "#options_parser, try load config from file\n"
        f"--sum 1 2 3 4 {uid}\n"
        "\n"
        "   # indented comment\n"
        "--train train.log\n"
        "--input in.log\n"
    )

    assert parser.parse(["--config-file", str(config)]) == Cursor(2)

    assert parser.bindings.get("total") == 10 + int(uid)
    assert parser.bindings.get("train_file") == "train.log"
    assert parser.bindings.get("input_file") == "in.log"


def test_config_file_equals_direct_parse(parser, tmp_path):
    config = tmp_path / "options.conf"
    config.write_text("--sum 1 2\n--train 'a b.log'\n")
    parser.parse(["--config-file", str(config)])
    from_file = parser.bindings.as_dict()

    direct = OptionParser(description="")
    for option in parser.registry:
        direct.add_option(option.matcher, option.taker, *option.doc)
    direct.bindings.set("total", 0)
    direct.parse(["--sum", "1", "2", "--train", "a b.log"])

    assert from_file == direct.bindings.as_dict()


def test_parse_file_error_carries_location(parser, tmp_path):
    config = tmp_path / "options.conf"
    config.write_text("--train a.log\n\n--bogus x\n")

    with pytest.raises(ConfigFileError) as error:
        parser.parse_file(config)

    assert error.value.path == str(config)
    assert error.value.line_number == 3
    assert error.value.line == "--bogus x"
    assert error.value.kind is ParseErrorKind.MATCH
    assert error.value.detail == "none"
    assert error.value.position == Cursor(0)
    assert str(error.value) == (
        f"can't parse line(--bogus x) from file({config}:3), match-error none"
    )
    assert error.value.__cause__ is not None
    assert parser.bindings.get("train_file") == "a.log"


def test_unbalanced_quotes(parser, tmp_path):
    config = tmp_path / "options.conf"
    config.write_text("--train 'a.log\n")
    with pytest.raises(ConfigFileError) as error:
        parser.parse_file(config)
    assert error.value.kind is ParseErrorKind.MATCH


def test_missing_config_file(parser, tmp_path):
    with pytest.raises(ConfigFileError) as error:
        parser.parse_file(tmp_path / "missing.conf")
    assert error.value.kind is ParseErrorKind.TAKE


def test_config_file_option_errors_become_take_errors(parser, tmp_path):
    config = tmp_path / "options.conf"
    config.write_text("--bogus\n")
    with pytest.raises(TakeError, match="can't parse line"):
        parser.parse(["--config-file", str(config)])
    with pytest.raises(TakeError, match="expect a config file"):
        parser.parse(["--config-file"])


def test_nested_config_files(parser, tmp_path):
    inner = tmp_path / "inner.conf"
    inner.write_text("--input in.log\n")
    outer = tmp_path / "outer.conf"
    outer.write_text(f"--train train.log\n--config-file {inner}\n")
    parser.parse(["--config-file", str(outer)])
    assert parser.bindings.get("train_file") == "train.log"
    assert parser.bindings.get("input_file") == "in.log"


def test_recursive_config_file_stops(parser, tmp_path):
    config = tmp_path / "loop.conf"
    config.write_text(f"--config-file {config}\n")
    with pytest.raises(TakeError, match="nested deeper than"):
        parser.parse(["--config-file", str(config)])


def test_trailing_comment_in_config_line(parser, tmp_path):
    config = tmp_path / "options.conf"
    config.write_text("--train a.log  # the train file\n--sum 1 2 # two numbers\n")
    parser.parse_file(config)
    assert parser.bindings.get("train_file") == "a.log"
    assert parser.bindings.get("total") == 3


def test_undecodable_config_file(parser, tmp_path):
    config = tmp_path / "latin1.conf"
    config.write_bytes(b"--train caf\xe9\n")

    with pytest.raises(ConfigFileError) as error:
        parser.parse_file(config)
    assert error.value.kind is ParseErrorKind.TAKE
    assert error.value.path == str(config)
    assert "cannot read config file" in error.value.detail

    with pytest.raises(TakeError, match="cannot read config file"):
        parser.parse(["--config-file", str(config)])


def test_undecodable_config_file_exits_with_parse_status(parser, tmp_path, capsys):
    config = tmp_path / "latin1.conf"
    config.write_bytes(b"--train caf\xe9\n")
    with pytest.raises(SystemExit) as exit_info:
        parser.parse_all(["--config-file", str(config)])
    assert exit_info.value.code == 126
