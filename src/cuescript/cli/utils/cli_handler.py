"""Unified CLI handler for standardized error handling, output and documents."""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from functools import wraps
from pathlib import Path
from typing import Any, TypeVar

import typer
from rich.console import Console

from cuescript.cli.formatters.json_formatter import JsonFormatter
from cuescript.config import get_logger
from cuescript.editor import ScriptEditor
from cuescript.exceptions import CueScriptError
from cuescript.storage.files import load_script, save_script

logger = get_logger(__name__)

T = TypeVar("T")


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Report an error and exit.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use
        """
        if isinstance(error, CueScriptError):
            logger.error(
                "Command failed",
                error_type=type(error).__name__,
                message=error.message,
                details=error.details,
            )
        else:
            logger.error("Command failed", error=str(error), exc_info=error)

        if json_output:
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, CueScriptError):
            self.console.print(f"[red]✗ {error.message}[/red]", highlight=False)
            if error.hint:
                self.console.print(f"[yellow]→ {error.hint}[/yellow]", highlight=False)
        else:
            self.console.print(f"[red]Error: {error}[/red]", highlight=False)

        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        """Report success consistently.

        Args:
            message: Success message
            data: Optional data to include
            json_output: Whether to output JSON
        """
        if json_output:
            print(self.json_formatter.format_success(message, data))
        else:
            self.console.print(f"[green]✓ {message}[/green]", highlight=False)


@contextmanager
def edit_document(path: Path) -> Iterator[ScriptEditor]:
    """Open a script document for editing and save it if no error escapes."""
    editor = ScriptEditor(load_script(path))
    yield editor
    save_script(editor.script, path)


def cli_command(func: Callable[..., T]) -> Callable[..., T]:
    """Decorator for CLI commands with standardized error handling.

    cuescript errors and missing files are reported through CLIHandler;
    anything else propagates.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        handler = CLIHandler()
        try:
            return func(*args, **kwargs)
        except (CueScriptError, FileNotFoundError) as e:
            handler.handle_error(e, kwargs.get("json_output", False))
            raise  # handle_error always exits

    return wrapper
