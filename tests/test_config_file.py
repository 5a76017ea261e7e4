"""Tests for config file reading."""

import pytest

from testwave.errors import ConfigFileError
from testwave.options import OptionSpec, OptionsDescription, VariablesMap, read_config_file


@pytest.fixture
def description():
    return OptionsDescription("Config file options", [
        OptionSpec("help", "print usage", short="h"),
        OptionSpec("debug", "debug level", short="d", value_type=int),
        OptionSpec("config-file", "config", value_type=str, composing=True),
        OptionSpec("timeout", "timeout", value_type=float),
        OptionSpec("input", "inputfile", value_type=str, composing=True),
    ])


def test_line_oriented_file(tmp_path, description):
    cfg = tmp_path / "run.cfg"
    cfg.write_text(
        "# options for the nightly run\n"
        "\n"
        "   --debug=3   \n"
        "timeout = 2.5\n"
        "cases/first case.yaml\n"
        "  # indented comment\n"
        "cases/second.yaml\n",
        encoding="utf-8",
    )
    vm = VariablesMap()

    read_config_file(cfg, description, vm)

    assert vm["debug"] == 3
    assert vm["timeout"] == 2.5
    assert vm["input"] == ["cases/first case.yaml", "cases/second.yaml"]
    assert vm.source_of("debug") == str(cfg)


def test_option_line_with_separate_value(tmp_path, description):
    cfg = tmp_path / "run.cfg"
    cfg.write_text("-d 4\n", encoding="utf-8")
    vm = VariablesMap()

    read_config_file(cfg, description, vm)

    assert vm["debug"] == 4


def test_undeclared_name_value_line_is_input(tmp_path, description):
    cfg = tmp_path / "run.cfg"
    cfg.write_text("weird=name.yaml\n", encoding="utf-8")
    vm = VariablesMap()

    read_config_file(cfg, description, vm)

    assert vm["input"] == ["weird=name.yaml"]


def test_earlier_values_are_kept(tmp_path, description):
    cfg = tmp_path / "run.cfg"
    cfg.write_text("--debug=8\n", encoding="utf-8")
    vm = VariablesMap()
    vm.set_default("debug", 1, source="command line")

    read_config_file(cfg, description, vm)

    assert vm["debug"] == 1


def test_yaml_file(tmp_path, description):
    cfg = tmp_path / "run.yaml"
    cfg.write_text(
        "debug: 2\n"
        "help: false\n"
        "input:\n"
        "  - a.yaml\n"
        "  - b.yaml\n",
        encoding="utf-8",
    )
    vm = VariablesMap()

    read_config_file(cfg, description, vm)

    assert vm["debug"] == 2
    assert "help" not in vm
    assert vm["input"] == ["a.yaml", "b.yaml"]


def test_yaml_flag_true(tmp_path, description):
    cfg = tmp_path / "run.yml"
    cfg.write_text("help: true\n", encoding="utf-8")
    vm = VariablesMap()

    read_config_file(cfg, description, vm)

    assert vm["help"] is True


def test_yaml_must_be_mapping(tmp_path, description):
    cfg = tmp_path / "run.yaml"
    cfg.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigFileError, match="mapping"):
        read_config_file(cfg, description, VariablesMap())


def test_missing_file(tmp_path, description):
    with pytest.raises(ConfigFileError, match="cannot read config file"):
        read_config_file(tmp_path / "absent.cfg", description, VariablesMap())


def test_unknown_option_names_the_file(tmp_path, description):
    cfg = tmp_path / "run.cfg"
    cfg.write_text("--bogus\n", encoding="utf-8")

    with pytest.raises(ConfigFileError, match="run.cfg"):
        read_config_file(cfg, description, VariablesMap())
