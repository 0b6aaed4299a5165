"""Output formatters for the cuescript CLI."""

from cuescript.cli.formatters.base import OutputFormat, OutputFormatter
from cuescript.cli.formatters.json_formatter import JsonFormatter
from cuescript.cli.formatters.script_formatter import (
    ElementFormatter,
    ScriptFormatter,
    annotate_line,
)

__all__ = [
    "ElementFormatter",
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "ScriptFormatter",
    "annotate_line",
]
