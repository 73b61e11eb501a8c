"""Console output helpers for command-line entry points."""

import functools
import sys
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]{escape(message)}[/yellow]", soft_wrap=True)


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]", soft_wrap=True)


def create_table(title: Optional[str] = None) -> Table:
    """Create a table with the common style."""
    return Table(title=title, show_header=True, header_style="bold magenta")


def print_table(table: Table) -> None:
    """Print a table followed by a blank line."""
    console.print(table)
    console.print()


def handle_errors(func: Callable) -> Callable:
    """
    Turn unexpected exceptions in a command into a message and exit code.

    KeyboardInterrupt exits with 130, anything else with 1. SystemExit
    raised by the command passes through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            warning("Interrupted")
            sys.exit(130)
        except Exception as e:
            error(f"Unexpected error: {e}")
            sys.exit(1)

    return wrapper
