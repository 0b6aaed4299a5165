"""CLI utilities."""

from cuescript.cli.utils.cli_handler import CLIHandler, cli_command, edit_document

__all__ = ["CLIHandler", "cli_command", "edit_document"]
