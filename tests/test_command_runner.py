"""Tests for CommandRunner orchestration."""

import pytest

from testwave.runner import (
    RECOGNIZED_FAILURE_EXIT,
    UNKNOWN_FAILURE_EXIT,
    CommandRunner,
    RecognizedFailure,
    RunResult,
    UnknownFailure,
)


def make_runner(executor, variables=None):
    return CommandRunner(executor, variables)


class TestInputs:
    def test_no_input_exits_zero_with_hint(self, executor, capsys):
        assert make_runner(executor).run([]) == 0
        captured = capsys.readouterr()
        assert "no input file specified" in captured.err
        assert executor.tested == []

    def test_exit_code_is_failure_count(self, make_executor):
        executor = make_executor(results={"b": False, "d": False})
        assert make_runner(executor).run(["a", "b", "c", "d", "e"]) == 2
        assert executor.tested == ["a", "b", "c", "d", "e"]

    def test_summary_line(self, make_executor, capsys):
        executor = make_executor(results={"bad": False})
        code = make_runner(executor).run(["--debug", "5", "good", "bad"])
        assert code == 1
        assert executor.debuglevel == 5
        out = capsys.readouterr().out
        assert "1 of 2 test(s) succeeded (1 test(s) failed)." in out

    def test_summary_without_failures(self, executor, capsys):
        make_runner(executor).run(["a", "b"])
        out = capsys.readouterr().out
        assert "testwave: 2 of 2 test(s) succeeded." in out
        assert "failed" not in out

    def test_no_summary_at_debug_level_zero(self, executor, capsys):
        make_runner(executor).run(["-d0", "a"])
        assert capsys.readouterr().out == ""

    def test_config_inputs_come_before_positionals(self, executor, tmp_path):
        cfg = tmp_path / "inputs.cfg"
        cfg.write_text("from_cfg_1\nfrom_cfg_2\n", encoding="utf-8")
        args = ["cmd_1", f"@{cfg}", "cmd_2"]

        make_runner(executor).run(args)

        assert executor.tested == ["from_cfg_1", "from_cfg_2", "cmd_1", "cmd_2"]

    def test_order_is_reproducible(self, make_executor, tmp_path):
        cfg = tmp_path / "inputs.cfg"
        cfg.write_text("x\ny\n", encoding="utf-8")
        args = ["b", f"--config-file={cfg}", "a"]

        first, second = make_executor(), make_executor()
        make_runner(first).run(args)
        make_runner(second).run(args)

        assert first.tested == second.tested == ["x", "y", "b", "a"]

    def test_input_option_not_allowed_on_command_line(self, executor, capsys):
        assert make_runner(executor).run(["--input=a"]) == RECOGNIZED_FAILURE_EXIT
        assert executor.tested == []


class TestDebugOption:
    def test_out_of_range_is_warned_and_ignored(self, executor, capsys):
        code = make_runner(executor).run(["--debug", "15", "a"])
        captured = capsys.readouterr()
        assert code == 0
        assert executor.debuglevel == 1
        assert "range [0..9]" in captured.err
        assert executor.tested == ["a"]

    def test_negative_is_rejected(self, executor, capsys):
        make_runner(executor).run(["-d", "-1", "a"])
        assert executor.debuglevel == 1
        assert "range [0..9]" in capsys.readouterr().err

    @pytest.mark.parametrize("level", [0, 9])
    def test_bounds_are_accepted(self, executor, level):
        make_runner(executor).run([f"--debug={level}"])
        assert executor.debuglevel == level

    def test_help_text_shows_enforced_range(self, executor, capsys):
        make_runner(executor).run(["--help"])
        assert "(0...9)" in capsys.readouterr().out


class TestEarlyExits:
    def test_help_wins_over_everything(self, executor, capsys):
        code = make_runner(executor).run(["a", "--version", "-c", "--help", "b"])
        out = capsys.readouterr().out
        assert code == 0
        assert executor.tested == []
        assert executor.version_calls == 0
        assert out.startswith("Usage: testwave [options] [@config-file(s)] file(s)")
        assert "--config-file arg" in out
        assert "--fake-flag" in out
        assert "Fake executor options:" in out
        assert "--input" not in out

    def test_version_returns_executor_code(self, executor):
        assert make_runner(executor).run(["-v", "a"]) == 3
        assert executor.version_calls == 1
        assert executor.tested == []

    def test_copyright_returns_executor_code(self, executor):
        assert make_runner(executor).run(["--copyright", "a"]) == 4
        assert executor.copyright_calls == 1
        assert executor.tested == []

    def test_version_before_copyright(self, executor):
        assert make_runner(executor).run(["-c", "-v"]) == 3
        assert executor.copyright_calls == 0

    def test_debug_applied_before_version(self, executor):
        make_runner(executor).run(["-d4", "-v"])
        assert executor.debuglevel == 4

    def test_help_from_config_file(self, executor, tmp_path):
        cfg = tmp_path / "help.cfg"
        cfg.write_text("--help\n", encoding="utf-8")
        assert make_runner(executor).run([f"@{cfg}", "a"]) == 0
        assert executor.tested == []


class TestConfigFiles:
    def test_at_file_and_option_are_equivalent(self, make_executor, tmp_path):
        cfg = tmp_path / "debug.cfg"
        cfg.write_text("--debug=6\ncase.yaml\n", encoding="utf-8")

        via_at, via_option = make_executor(), make_executor()
        make_runner(via_at).run([f"@{cfg}"])
        make_runner(via_option).run(["--config-file", str(cfg)])

        assert via_at.debuglevel == via_option.debuglevel == 6
        assert via_at.tested == via_option.tested == ["case.yaml"]

    def test_command_line_wins_over_config_file(self, executor, tmp_path):
        cfg = tmp_path / "debug.cfg"
        cfg.write_text("--debug=6\n", encoding="utf-8")
        make_runner(executor).run(["-d2", f"@{cfg}"])
        assert executor.debuglevel == 2

    def test_config_files_merge_in_order(self, executor, tmp_path):
        first = tmp_path / "first.cfg"
        second = tmp_path / "second.cfg"
        first.write_text("--debug=3\none\n", encoding="utf-8")
        second.write_text("--debug=8\ntwo\n", encoding="utf-8")

        make_runner(executor).run([f"@{first}", f"@{second}"])

        assert executor.debuglevel == 3
        assert executor.tested == ["one", "two"]

    def test_executor_options_allowed_in_config_file(self, executor, variables, tmp_path):
        cfg = tmp_path / "exec.cfg"
        cfg.write_text("fake-value=abc\n", encoding="utf-8")
        make_runner(executor, variables).run([f"@{cfg}"])
        assert variables["fake-value"] == "abc"

    def test_missing_config_file_is_fatal(self, executor, tmp_path, capsys):
        code = make_runner(executor).run([f"@{tmp_path / 'absent.cfg'}", "a"])
        assert code == RECOGNIZED_FAILURE_EXIT
        assert "testwave: exception caught:" in capsys.readouterr().err
        assert executor.tested == []


class TestFailures:
    def test_unknown_option(self, executor, capsys):
        code = make_runner(executor).run(["--no-such-option"])
        assert code == RECOGNIZED_FAILURE_EXIT
        assert "unrecognised option '--no-such-option'" in capsys.readouterr().err

    def test_invalid_debug_value(self, executor):
        assert make_runner(executor).run(["--debug=loud"]) == RECOGNIZED_FAILURE_EXIT

    def test_executor_exception_is_recognized(self, make_executor, capsys):
        executor = make_executor(raise_on={"b": RuntimeError("boom")})
        outcome = make_runner(executor).run_detailed(["a", "b", "c"])
        assert isinstance(outcome, RecognizedFailure)
        assert outcome.message == "boom"
        assert outcome.exit_code == RECOGNIZED_FAILURE_EXIT
        assert "testwave: exception caught: boom" in capsys.readouterr().err
        assert executor.tested == ["a", "b"]

    def test_non_exception_is_unknown(self, make_executor, capsys):
        executor = make_executor(raise_on={"a": KeyboardInterrupt()})
        outcome = make_runner(executor).run_detailed(["a"])
        assert isinstance(outcome, UnknownFailure)
        assert outcome.exit_code == UNKNOWN_FAILURE_EXIT
        assert "testwave: unexpected exception caught." in capsys.readouterr().err

    def test_system_exit_propagates(self, make_executor):
        executor = make_executor(raise_on={"a": SystemExit(7)})
        with pytest.raises(SystemExit):
            make_runner(executor).run(["a"])

    def test_sentinels_are_distinct_and_large(self):
        assert RECOGNIZED_FAILURE_EXIT == 2**31 - 2
        assert UNKNOWN_FAILURE_EXIT == 2**31 - 3


class TestRunResult:
    def test_counters(self):
        result = RunResult()
        result.record(True)
        result.record(False)
        result.record(True)
        assert (result.input_count, result.error_count, result.succeeded) == (3, 1, 2)
        assert result.exit_code == 1

    def test_run_detailed_returns_counters(self, make_executor):
        executor = make_executor(results={"x": False})
        outcome = make_runner(executor).run_detailed(["x", "y"])
        assert isinstance(outcome, RunResult)
        assert outcome.input_count == 2
        assert outcome.error_count == 1


class TestRepeatedRuns:
    def test_second_run_sees_only_its_own_arguments(self, executor, variables, tmp_path):
        cfg = tmp_path / "inputs.cfg"
        cfg.write_text("from_cfg\n", encoding="utf-8")
        runner = make_runner(executor, variables)

        runner.run([f"@{cfg}", "first"])
        runner.run(["second"])

        assert executor.tested == ["from_cfg", "first", "second"]
        assert "config-file" not in variables
        assert "input" not in variables
