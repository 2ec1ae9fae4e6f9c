import pytest

from optline.__main__ import find_options_file, main

OPTIONS = """
description: "Trainer options"
flags:
  - {kind: integer, name: epochs, default: 10}
options:
  - {aliases: "-t|--train-file", dest: train_file}
"""


@pytest.fixture
def options_file(tmp_path):
    path = tmp_path / "optline.yaml"
    path.write_text(OPTIONS)
    return path


def test_main_prints_bindings(options_file, capsys):
    assert main(["--options", str(options_file), "--args", "--epochs", "3", "-t", "a.log"]) == 0
    output = capsys.readouterr().out
    assert "epochs" in output
    assert "'a.log'" in output


def test_main_config_file(options_file, tmp_path, capsys):
    config = tmp_path / "train.conf"
    config.write_text("--epochs 5\n")
    assert main(["--options", str(options_file), "--config-file", str(config)]) == 0
    assert "5" in capsys.readouterr().out


def test_main_parse_error(options_file, capsys):
    assert main(["--options", str(options_file), "--args", "--bogus"]) == 126
    assert "parse stop @0 with error match-error none" in capsys.readouterr().err


def test_main_bad_cli_arguments(capsys):
    with pytest.raises(SystemExit) as exit_info:
        main(["--bogus"])
    assert exit_info.value.code == 126


def test_main_help(capsys):
    with pytest.raises(SystemExit) as exit_info:
        main(["--help"])
    assert exit_info.value.code == 1
    assert "--options" in capsys.readouterr().out


def test_main_without_options_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPTLINE_OPTIONS", raising=False)
    assert main([]) == 1
    assert "no options file found" in capsys.readouterr().err


def test_main_invalid_options_file(tmp_path, capsys):
    path = tmp_path / "optline.yaml"
    path.write_text("flags: [{kind: complex, name: c}]\n")
    assert main(["--options", str(path)]) == 1


def test_find_options_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("OPTLINE_OPTIONS", raising=False)
    assert find_options_file() is None

    env_file = tmp_path / "elsewhere.toml"
    env_file.write_text("")
    monkeypatch.setenv("OPTLINE_OPTIONS", str(env_file))
    assert find_options_file() == env_file

    (tmp_path / ".optline.toml").write_text("")
    assert find_options_file() == tmp_path / ".optline.toml"

    (tmp_path / "optline.yaml").write_text("")
    assert find_options_file() == tmp_path / "optline.yaml"
