"""Tests for CLI interface"""

from __future__ import annotations

import logging
import sys
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from retrycmd.cli import (
    EXIT_CLOCK_ERROR,
    EXIT_MAXIMUM_ITERATIONS,
    EXIT_SPAWN_ERROR,
    EXIT_TIMEOUT,
    RetryFailed,
    _die,
    cli,
    exit_code_for,
    setup_logging,
)
from retrycmd.domain.errors import (
    ClockError,
    MaximumIterationsReached,
    SpawnError,
    TimeoutExceeded,
)
from retrycmd.infrastructure.runner.scripted import ScriptedRunner


def invoke(args, script=(0,)):
    """Invoke the CLI with a scripted runner in place of real processes"""
    runner = ScriptedRunner(script)
    with patch("retrycmd.cli.SubprocessRunner", return_value=runner):
        result = CliRunner().invoke(cli, args)
    return result, runner


class TestSetupLogging:
    """Tests for setup_logging function"""

    @pytest.mark.parametrize(
        "verbosity,level",
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_levels(self, verbosity, level):
        """Test verbosity to log level mapping"""
        setup_logging(verbosity)
        assert logging.getLogger().level == level


class TestDie:
    """Tests for _die function"""

    def test_die_default_exit_code(self):
        """Test _die without exception"""
        with pytest.raises(RetryFailed, match="Test error") as excinfo:
            _die("Test error")
        assert excinfo.value.exit_code == 1

    def test_die_with_exit_code(self):
        """Test _die with exception and a custom exit code"""
        exc = ValueError("Test exception")
        with pytest.raises(RetryFailed) as excinfo:
            _die("Test error", verbose=True, exc=exc, exit_code=42)
        assert excinfo.value.exit_code == 42


class TestExitCodes:
    """Tests for exit code mapping"""

    def test_exit_codes_distinct(self):
        """Test each failure kind has its own code"""
        codes = {EXIT_TIMEOUT, EXIT_MAXIMUM_ITERATIONS, EXIT_CLOCK_ERROR, EXIT_SPAWN_ERROR}
        assert len(codes) == 4
        assert 0 not in codes and 1 not in codes and 2 not in codes

    @pytest.mark.parametrize(
        "error,code",
        [
            (TimeoutExceeded(), EXIT_TIMEOUT),
            (MaximumIterationsReached(), EXIT_MAXIMUM_ITERATIONS),
            (ClockError("rewound"), EXIT_CLOCK_ERROR),
            (SpawnError("cmd"), EXIT_SPAWN_ERROR),
            (RuntimeError("other"), 1),
        ],
    )
    def test_exit_code_for(self, error, code):
        """Test error to exit code mapping"""
        assert exit_code_for(error) == code


class TestRetryCommand:
    """Tests for the retry command"""

    def test_success(self):
        """Test a command that succeeds first time"""
        result, runner = invoke(["true"])
        assert result.exit_code == 0
        assert runner.calls == [("true", ())]
        assert "succeeded after" not in result.output

    def test_success_after_retries(self):
        """Test a summary line is printed when retries were needed"""
        result, runner = invoke(["flaky"], script=[1, 1, 0])
        assert result.exit_code == 0
        assert runner.call_count == 3
        assert "Command succeeded after 3 attempts" in result.output

    def test_maximum_iterations(self):
        """Test the maximum iterations exit code"""
        result, runner = invoke(["-m", "3", "false"], script=[1])
        assert result.exit_code == EXIT_MAXIMUM_ITERATIONS
        assert runner.call_count == 3
        assert "reached maximum iterations" in result.output
        assert "Iteration: 2" in result.output

    def test_timeout(self):
        """Test the timeout exit code"""
        result, runner = invoke(["--timeout", "0", "false"], script=[1])
        assert result.exit_code == EXIT_TIMEOUT
        assert runner.call_count == 1
        assert "due to timeout" in result.output

    def test_spawn_error(self):
        """Test the spawn error exit code"""
        error = SpawnError("nope", FileNotFoundError(2, "No such file or directory"))
        result, runner = invoke(["-m", "5", "nope"], script=[error])
        assert result.exit_code == EXIT_SPAWN_ERROR
        assert runner.call_count == 1
        assert "Failed to run 'nope': No such file or directory" in result.output

    def test_clock_error(self):
        """Test the clock error exit code"""
        with patch("retrycmd.cli.RetryService") as mock_service:
            mock_service.return_value.run.side_effect = ClockError("clock moved backwards")
            result = CliRunner().invoke(cli, ["true"])
        assert result.exit_code == EXIT_CLOCK_ERROR
        assert "clock moved backwards" in result.output

    def test_unexpected_error(self):
        """Test unexpected exceptions become fatal errors"""
        with patch("retrycmd.cli.RetryService") as mock_service:
            mock_service.return_value.run.side_effect = RuntimeError("boom")
            result = CliRunner().invoke(cli, ["true"])
        assert result.exit_code == 1
        assert "Fatal error: boom" in result.output

    def test_missing_command(self):
        """Test that a command is required"""
        result, runner = invoke([])
        assert result.exit_code == 2
        assert runner.call_count == 0

    def test_negative_timeout_rejected(self):
        """Test that option ranges are enforced"""
        result, _ = invoke(["-t", "-1", "true"])
        assert result.exit_code == 2

    def test_negative_maximum_iterations_rejected(self):
        """Test that maximum iterations must be non-negative"""
        result, _ = invoke(["-m", "-1", "true"])
        assert result.exit_code == 2

    def test_command_options_passed_through(self):
        """Test that options after the command belong to the command"""
        result, runner = invoke(["-m", "2", "grep", "-v", "--count", "x"])
        assert result.exit_code == 0
        assert runner.calls == [("grep", ("-v", "--count", "x"))]

    def test_double_dash_separator(self):
        """Test that -- separates retry options from the command"""
        result, runner = invoke(["-i", "0.5", "--", "ls", "-l"])
        assert result.exit_code == 0
        assert runner.calls == [("ls", ("-l",))]

    def test_config_file(self, tmp_path):
        """Test bounds read from --config"""
        config_file = tmp_path / "bounds.yml"
        config_file.write_text("loop:\n  maximum_iterations: 2\n")
        result, runner = invoke(["--config", str(config_file), "false"], script=[1])
        assert result.exit_code == EXIT_MAXIMUM_ITERATIONS
        assert runner.call_count == 2

    def test_discovered_config_file(self, tmp_path):
        """Test bounds read from .retry.yml in the working directory"""
        (tmp_path / ".retry.yml").write_text("loop:\n  maximum_iterations: 4\n")
        result, runner = invoke(["false"], script=[1])
        assert result.exit_code == EXIT_MAXIMUM_ITERATIONS
        assert runner.call_count == 4

    def test_invalid_config_file(self, tmp_path):
        """Test that invalid configuration fails cleanly"""
        config_file = tmp_path / "bounds.yml"
        config_file.write_text("loop:\n  interval: -3\n")
        result, runner = invoke(["--config", str(config_file), "true"])
        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output
        assert runner.call_count == 0

    def test_env_bounds(self, monkeypatch):
        """Test bounds read from the environment"""
        monkeypatch.setenv("RETRY_MAXIMUM_ITERATIONS", "1")
        result, runner = invoke(["false"], script=[1])
        assert result.exit_code == EXIT_MAXIMUM_ITERATIONS
        assert runner.call_count == 1

    def test_cli_overrides_env(self, monkeypatch):
        """Test command-line bounds win over the environment"""
        monkeypatch.setenv("RETRY_MAXIMUM_ITERATIONS", "1")
        result, runner = invoke(["-m", "3", "false"], script=[1])
        assert result.exit_code == EXIT_MAXIMUM_ITERATIONS
        assert runner.call_count == 3

    def test_verbose_logging(self):
        """Test that -vv enables debug logging"""
        result, _ = invoke(["-vv", "true"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_stop_condition_reported_once(self):
        """Test that a stop condition is not echoed by the log as well"""
        result, _ = invoke(["-m", "2", "false"], script=[1])
        assert result.exit_code == EXIT_MAXIMUM_ITERATIONS
        assert result.output.count("reached maximum iterations") == 1

    def test_env_verbosity_raises_level(self, monkeypatch):
        """Test that RETRY_VERBOSITY enables debug logging without -v"""
        monkeypatch.setenv("RETRY_VERBOSITY", "2")
        result, _ = invoke(["true"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_config_verbosity_never_lowers_cli(self, tmp_path):
        """Test that -vv stays at debug when the config asks for less"""
        config_file = tmp_path / "bounds.yml"
        config_file.write_text("logging:\n  verbosity: 1\n")
        result, _ = invoke(["-vv", "--config", str(config_file), "true"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_config_verbosity_below_cli(self, monkeypatch):
        """Test that -v keeps info level when the environment asks for nothing"""
        monkeypatch.setenv("RETRY_VERBOSITY", "0")
        result, _ = invoke(["-v", "true"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.INFO


class TestRetryCommandWithProcesses:
    """Tests running real processes through the CLI"""

    def test_real_success(self):
        """Test a real command that succeeds"""
        result = CliRunner().invoke(cli, [sys.executable, "-c", "import sys; sys.exit(0)"])
        assert result.exit_code == 0

    def test_real_failure(self):
        """Test a real command that keeps failing"""
        result = CliRunner().invoke(
            cli, ["-m", "2", sys.executable, "-c", "import sys; sys.exit(3)"]
        )
        assert result.exit_code == EXIT_MAXIMUM_ITERATIONS

    def test_real_missing_executable(self):
        """Test a real command that does not exist"""
        result = CliRunner().invoke(cli, ["retrycmd-no-such-program-xyz"])
        assert result.exit_code == EXIT_SPAWN_ERROR
