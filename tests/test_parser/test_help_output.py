import pytest
from rich.console import Console

from optline.help import format_description, format_option_help, leading_comment_block
from optline.parser import OptionParser
from optline.signals import HelpSignal


def test_label_and_doc_share_first_line():
    lines = format_option_help("-t, --train-file", ["FILE", "set variable train_file"])
    assert lines == [
        "-t, --train-file    FILE",
        "                    set variable train_file",
    ]


def test_long_label_moves_doc_to_next_line():
    lines = format_option_help("--a-very-long-option-name", ["text"])
    assert lines == ["--a-very-long-option-name", " " * 20 + "text"]


def test_label_of_eighteen_characters_fits():
    label = "-" * 18
    assert format_option_help(label, ["text"]) == [label + "  text"]


def test_doc_is_wrapped():
    lines = format_option_help("--x", ["word " * 30])
    assert len(lines) > 1
    assert all(len(line) <= 20 + 60 for line in lines)
    assert all(line.startswith(" " * 20) for line in lines[1:])


def test_empty_option_help():
    assert format_option_help("", []) == []
    assert format_option_help("--x", []) == ["--x"]


def test_format_description_keeps_paragraphs():
    assert format_description("first  paragraph\n\nsecond") == [
        "first paragraph",
        "",
        "second",
    ]


def test_leading_comment_block(tmp_path):
    script = tmp_path / "train.sh"
    script.write_text("#!/bin/bash\n# Train a model.\n#\n# Usage: train.sh\necho hi\n# not this\n")
    assert leading_comment_block(script) == "Train a model.\n\nUsage: train.sh"
    assert leading_comment_block(tmp_path / "missing.sh") == ""


def test_format_help():
    parser = OptionParser(description="Train a model.")
    parser.add_option("-t|--train-file", "train_file", "FILE\nset variable train_file")
    parser.define_integer("epochs", 10, "training epochs")
    assert parser.format_help() == [
        "Train a model.",
        "",
        "-t, --train-file    FILE",
        "                    set variable train_file",
        "--epochs            INTEGER",
        "                    training epochs",
        "                    Default: 10",
    ]


def test_help_option_renders_and_exits():
    console = Console(record=True, width=100)
    parser = OptionParser(description="Train a model.", console=console)
    parser.define_boolean("verbose", False, "log more")
    parser.add_help()

    with pytest.raises(HelpSignal) as exit_info:
        parser.parse(["--verbose", "--help", "--never-parsed"])

    assert exit_info.value.code == 1
    assert isinstance(exit_info.value, SystemExit)
    output = console.export_text()
    assert "Train a model." in output
    assert "--verbose, --no-verbose" in output
    assert "-h, --help          show help message" in output
    assert parser.get_flag("verbose") is True
