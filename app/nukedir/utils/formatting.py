"""Rich console status reporting.

All status lines go to stderr, tagged with the program name and a
one-character marker per category.
"""

import sys

from rich.console import Console
from rich.markup import escape

from nukedir.core.paths import APP_NAME
from nukedir.core.theme import get_rich_theme

ICON_INFO = "\u25c9"  # Fisheye
ICON_WARNING = "\u25b2"  # Triangle
ICON_SUCCESS = "\u2713"  # Check mark
ICON_ERROR = "\u2717"  # Ballot x


def _detect_color_system() -> str | None:
    """Return "truecolor" for interactive terminals, None to let Rich decide."""
    if sys.stderr.isatty():
        return "truecolor"
    return None


# Shared stderr console (theme loaded once at import)
err_console = Console(
    theme=get_rich_theme(),
    stderr=True,
    color_system=_detect_color_system(),
    highlight=False,
    soft_wrap=True,
)


def _line(style: str, icon: str, message: str) -> str:
    return f"{APP_NAME}: [{style}]{icon}[/] {escape(message)}"


def print_error(message: str) -> None:
    """Print an error message. Errors are never suppressed."""
    err_console.print(_line("error", ICON_ERROR, message))


class StatusReporter:
    """Categorized status output honoring quiet mode.

    Info, warning and success lines are dropped when ``verbose`` is False;
    error lines are always printed.
    """

    def __init__(self, verbose: bool = True, console: Console | None = None) -> None:
        self._verbose = verbose
        self._console = console or err_console

    def info(self, message: str) -> None:
        if self._verbose:
            self._console.print(_line("info", ICON_INFO, message))

    def warning(self, message: str) -> None:
        if self._verbose:
            self._console.print(_line("warning", ICON_WARNING, message))

    def success(self, message: str) -> None:
        if self._verbose:
            self._console.print(_line("success", ICON_SUCCESS, message))

    def error(self, message: str) -> None:
        self._console.print(_line("error", ICON_ERROR, message))
