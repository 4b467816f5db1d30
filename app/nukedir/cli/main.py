"""Main CLI application entry point.

Defines the Typer command and the ``run`` entry point, which checks
privileges before parsing and maps errors to exit codes.
"""

import logging
import os
import sys
from typing import Annotated, Any

import click
import typer
from pydantic import ValidationError
from rich.logging import RichHandler

from nukedir import __version__
from nukedir.core.errors import NukedirError, TargetSkipped
from nukedir.core.executor import DeletionExecutor, check_required_tools
from nukedir.core.paths import APP_NAME
from nukedir.core.privileges import check_preconditions
from nukedir.core.scratch import scratch_directory
from nukedir.core.targets import validate_target
from nukedir.models.config import RunConfig
from nukedir.utils.formatting import StatusReporter, err_console, print_error

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_MISSING_ARGUMENT = 2
EXIT_INVALID_OPTION = 22  # EINVAL
EXIT_INTERRUPTED = 130

LOG_LEVEL_ENV = "NUKEDIR_LOG_LEVEL"

app = typer.Typer(
    name=APP_NAME,
    help="Delete huge directory trees fast, using rsync against an empty directory.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


class OptionValue(click.ParamType):
    """Parameter type that refuses values looking like another option.

    ``-T -n`` would otherwise swallow ``-n`` as the timeout duration.
    """

    def __init__(self, inner: click.ParamType) -> None:
        self.inner = inner
        self.name = inner.name

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if isinstance(value, str) and value.startswith("-"):
            option = "/".join(param.opts) if param is not None else "option"
            raise click.BadOptionUsage(option, f"Option {option!r} requires an argument.", ctx)
        return self.inner.convert(value, param, ctx)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"{APP_NAME} {__version__}")
        raise typer.Exit()


@app.command()
def main(
    ctx: typer.Context,
    targets: Annotated[
        list[str] | None,
        typer.Argument(metavar="DIRNAME...", help="Directories to delete.", show_default=False),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dryrun/--notdryrun",
            "-n/-N",
            help="Only simulate (default) / really delete.",
        ),
    ] = True,
    timeout: Annotated[
        str | None,
        typer.Option(
            "--timeout",
            "-T",
            click_type=OptionValue(click.STRING),
            help="Kill rsync after this duration (e.g. 30m, 4h).",
            show_default=False,
        ),
    ] = None,
    ionice: Annotated[
        int,
        typer.Option(
            "--ionice",
            "-i",
            click_type=OptionValue(click.IntRange(0, 3)),
            help="I/O priority: 0 unchanged, 1 highest, 2 medium, 3 idle.",
        ),
    ] = 0,
    wait_for_rsync: Annotated[
        bool,
        typer.Option("--wait-for-rsync", "-w", help="Wait until other rsync processes finish."),
    ] = False,
    rsync_verbose: Annotated[
        bool,
        typer.Option("--rsync-verbose", "-r", help="Run rsync in verbose mode."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose/--quiet", "-v/-q", help="Show (default) / hide progress messages."),
    ] = True,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Delete directory trees by mirroring an empty directory onto them.

    Runs as a dry run unless [bold]-N[/bold] is given. Requires root.
    """
    if not targets:
        print_error("No directory specified")
        typer.echo(ctx.get_usage(), err=True)
        typer.echo(f"Try '{APP_NAME} -h' for help.", err=True)
        raise typer.Exit(code=EXIT_FAILURE)

    try:
        config = RunConfig(
            verbose=verbose,
            dry_run=dry_run,
            ionice=ionice,
            timeout=timeout,
            wait_for_rsync=wait_for_rsync,
            rsync_verbose=rsync_verbose,
            targets=targets,
        )
    except ValidationError as e:
        print_error(f"Invalid options: {e}")
        raise typer.Exit(code=EXIT_INVALID_OPTION) from None

    nuke(config)


def nuke(config: RunConfig) -> None:
    """Process every target of a run, in command-line order.

    Args:
        config: Validated run configuration.

    Raises:
        NukedirError: On any whole-run failure. Missing targets and
            non-directories are reported and skipped instead.
    """
    reporter = StatusReporter(verbose=config.verbose)
    check_required_tools(config)

    with scratch_directory() as scratch:
        executor = DeletionExecutor(config, scratch, reporter)

        for raw in config.targets:
            try:
                target = validate_target(raw)
            except TargetSkipped as e:
                reporter.error(str(e))
                continue

            result = executor.delete(target)
            if result.dry_run:
                reporter.success(f"{target.path} would be nuked (dry run)")
            else:
                reporter.success(f"{target.path} nuked")

    if config.dry_run:
        reporter.info("Dry run only; use -N to actually delete")


def _setup_logging() -> None:
    """Route nukedir log records to the stderr console."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    package_logger = logging.getLogger(APP_NAME)
    if not package_logger.handlers:
        package_logger.addHandler(
            RichHandler(console=err_console, show_time=False, show_path=False)
        )
    package_logger.setLevel(level)


def run(argv: list[str] | None = None) -> None:
    """Console-script entry point.

    Checks privileges and working directory before any parsing, then runs
    the command and exits with the matching status.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].
    """
    args = list(sys.argv[1:] if argv is None else argv)
    _setup_logging()

    try:
        child_status = check_preconditions(args)
    except NukedirError as e:
        print_error(str(e))
        raise SystemExit(e.exit_code) from None
    if child_status is not None:
        raise SystemExit(child_status)

    command = typer.main.get_command(app)
    try:
        status = command.main(args=args, prog_name=APP_NAME, standalone_mode=False)
    except click.NoSuchOption as e:
        print_error(f"Invalid option: {e.option_name}")
        raise SystemExit(EXIT_INVALID_OPTION) from None
    except click.BadOptionUsage as e:
        print_error(f"Missing argument for option {e.option_name}")
        raise SystemExit(EXIT_MISSING_ARGUMENT) from None
    except click.BadParameter as e:
        print_error(e.format_message())
        raise SystemExit(EXIT_INVALID_OPTION) from None
    except click.UsageError as e:
        print_error(e.format_message())
        raise SystemExit(e.exit_code) from None
    except click.Abort:
        print_error("Interrupted")
        raise SystemExit(EXIT_INTERRUPTED) from None
    except NukedirError as e:
        print_error(str(e))
        raise SystemExit(e.exit_code) from None

    raise SystemExit(status or 0)


if __name__ == "__main__":
    run()
