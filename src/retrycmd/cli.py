"""CLI interface for retrycmd"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from retrycmd.application.retry_service import RetryService
from retrycmd.domain.errors import (
    ClockError,
    MaximumIterationsReached,
    RetryError,
    SpawnError,
    TimeoutExceeded,
)
from retrycmd.infrastructure.config.config_manager import ConfigManager, ConfigurationError
from retrycmd.infrastructure.runner.subprocess_runner import SubprocessRunner

logger = logging.getLogger(__name__)

EXIT_TIMEOUT = 3
EXIT_MAXIMUM_ITERATIONS = 4
EXIT_CLOCK_ERROR = 5
EXIT_SPAWN_ERROR = 127

# Checked in order; first matching class wins
EXIT_CODES = (
    (TimeoutExceeded, EXIT_TIMEOUT),
    (MaximumIterationsReached, EXIT_MAXIMUM_ITERATIONS),
    (ClockError, EXIT_CLOCK_ERROR),
    (SpawnError, EXIT_SPAWN_ERROR),
)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


class RetryFailed(click.ClickException):
    """Click exception carrying a failure-specific exit code"""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


def setup_logging(verbosity: int = 0) -> None:
    """Setup logging configuration"""
    level = LOG_LEVELS.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    logging.getLogger().setLevel(level)
    for logger_name in logging.Logger.manager.loggerDict:
        logging.getLogger(logger_name).setLevel(level)


def exit_code_for(error: Exception) -> int:
    """Map an error to the process exit code"""
    for error_class, code in EXIT_CODES:
        if isinstance(error, error_class):
            return code
    return 1


def _die(
    message: str,
    verbose: bool = False,
    exc: Optional[Exception] = None,
    exit_code: int = 1,
) -> None:
    """Exit with a user-friendly error message"""
    if isinstance(exc, RetryError):
        # click prints the message itself; keep the log line for -vv
        logger.debug(message, exc_info=verbose)
    elif exc is not None:
        logger.error(message, exc_info=verbose)
    else:
        logger.error(message)
    raise RetryFailed(message, exit_code=exit_code)


@click.command(
    context_settings={
        "allow_interspersed_args": False,
        "help_option_names": ["-h", "--help"],
    }
)
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.option(
    "--timeout",
    "-t",
    type=click.FloatRange(min=0.0),
    help="Timeout (in seconds)",
)
@click.option(
    "--interval",
    "-i",
    type=click.FloatRange(min=0.0),
    help="Interval between attempts (in seconds); the wait grows linearly with each retry",
)
@click.option(
    "--maximum-iterations",
    "-m",
    type=click.IntRange(min=0),
    help="Stop once this many attempts have failed",
)
@click.option("--verbose", "-v", count=True, help="Increase log output (-v info, -vv debug)")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to .retry.yml config file",
)
@click.version_option(package_name="retrycmd")
def cli(
    command: Tuple[str, ...],
    timeout: Optional[float],
    interval: Optional[float],
    maximum_iterations: Optional[int],
    verbose: int,
    config: Optional[Path],
):
    """Retry runs COMMAND in a loop until it succeeds.

    Put -- before COMMAND when it takes options of its own.
    """
    setup_logging(verbose)
    try:
        config_manager = ConfigManager(config_path=config)
    except ConfigurationError as e:
        _die(str(e), verbose=verbose > 1, exc=e)

    # -v on the command line wins over the configured verbosity
    verbosity = max(verbose, config_manager.get_logging_config().verbosity)
    if verbosity != verbose:
        setup_logging(verbosity)
    debug = verbosity > 1

    logger.debug(
        f"Got arguments: command={list(command)} timeout={timeout} interval={interval} "
        f"maximum_iterations={maximum_iterations}"
    )

    try:
        loop_config = config_manager.loop_config(
            timeout=timeout,
            interval=interval,
            maximum_iterations=maximum_iterations,
        )
        service = RetryService(SubprocessRunner())
        result = service.run(command, loop_config)
    except ConfigurationError as e:
        _die(str(e), verbose=debug, exc=e)
    except RetryError as e:
        _die(str(e), verbose=debug, exc=e, exit_code=exit_code_for(e))
    except click.ClickException:
        raise
    except Exception as e:
        _die(f"Fatal error: {e}", verbose=debug, exc=e)

    if result.retried:
        click.echo(result.summary(), err=True)


def main():
    """Main entry point"""
    cli(prog_name="retry")


if __name__ == "__main__":
    main()
