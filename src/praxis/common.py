"""Console output helpers for the command line and server startup."""

from enum import Enum
from typing import Any

from praxis.core.schema import TaskStep


class AnsiColors(Enum):
    """
    ANSI color codes for terminal output.
    """

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[33m"
    BLUE = "\033[94m"


def colored_print(text: str, color: AnsiColors, *args: Any, **kwargs: Any) -> None:
    """Print *text* in *color*; extra arguments go to :func:`print`."""
    print(f"{color.value}{text}\033[0m", *args, **kwargs)  # ANSI reset at the end


def print_step(step: TaskStep) -> None:
    """
    Show an intermediate step as the agent reports it.

    Used as the ``on_step`` callback of the execution loop: the step name is printed as a heading,
    followed by the step's result text.  The reasoning is left to the debug log.
    """
    colored_print(f"🚀 Step: {step.name}", AnsiColors.BLUE)
    colored_print(step.result, AnsiColors.GREEN)


def print_result(result: str) -> None:
    """Show the final result of a completed task."""
    colored_print(result, AnsiColors.YELLOW)


def print_failure(exc: BaseException) -> None:
    """Show why a task was aborted, naming the error category."""
    colored_print(f"⚠️ {type(exc).__name__}: {exc}", AnsiColors.RED)


def print_server_banner(host: str, port: int) -> None:
    """Announce where the API is listening."""
    shown = "localhost" if host in {"0.0.0.0", "::"} else host
    colored_print(f"Praxis API is running at http://{shown}:{port}.", AnsiColors.GREEN)
    colored_print(f"Visit http://{shown}:{port}/docs for API documentation.", AnsiColors.BLUE)
