import sys
from typing import NoReturn

from rich.console import Console

from rosa.status import ExitCodes


class Reporter:
    """
    Prints the messages meant for the user of the command line. Info
    lines go to stdout, everything else to stderr. Debug lines are only
    printed when debugging is enabled.
    """

    def __init__(self, debug: bool = False) -> None:
        self.debug_enabled = debug
        self._out = Console(markup=False, highlight=False, soft_wrap=True)
        self._err = Console(
            stderr=True, markup=False, highlight=False, soft_wrap=True
        )

    def info(self, msg: str) -> None:
        self._out.print(f"I: {msg}", style="cyan")

    def warn(self, msg: str) -> None:
        self._err.print(f"W: {msg}", style="yellow")

    def error(self, msg: str) -> None:
        self._err.print(f"E: {msg}", style="bold red")

    def debug(self, msg: str) -> None:
        if self.debug_enabled:
            self._err.print(f"D: {msg}", style="dim")

    def exit_error(self, msg: str) -> NoReturn:
        self.error(msg)
        sys.exit(ExitCodes.ERROR)
