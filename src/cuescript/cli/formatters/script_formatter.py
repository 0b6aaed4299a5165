"""Rich rendering of scripts, elements and cues for the terminal."""

from __future__ import annotations

import io
import json

from rich.console import Console
from rich.table import Table
from rich.text import Text

from cuescript.cli.formatters.base import OutputFormat, OutputFormatter
from cuescript.models import Cue, CueOffset, CueStatus, Line, LineElement, Script
from cuescript.presentation import color, display_name
from cuescript.sections import covers


def cue_marker(cue: Cue) -> Text:
    """Inline marker for a cue, coloured by department."""
    return Text(f"«{display_name(cue.type)}: {cue.label}»", style=color(cue.type))


def annotate_line(line: Line) -> Text:
    """Line text with cue markers placed before or after their words."""
    text = Text()
    for element in line.elements:
        if element.position:
            text.append(" ")
        for cue in line.cues_at(element.position):
            if cue.position.offset is CueOffset.BEFORE:
                text.append_text(cue_marker(cue))
                text.append(" ")
        style = f"on {element.mark_color.value}" if element.mark_color else ""
        text.append(element.content, style=style)
        for cue in line.cues_at(element.position):
            if cue.position.offset is CueOffset.AFTER:
                text.append(" ")
                text.append_text(cue_marker(cue))
    orphans = [cue for cue in line.cues if cue.status is CueStatus.ORPHANED]
    for cue in orphans:
        text.append(f"  [orphaned: {cue.label}]", style="bold red")
    return text


class ScriptFormatter(OutputFormatter[Script]):
    """Formats a whole script with its sections and cues."""

    def render(self, script: Script) -> Table:
        """Build a table with one row per line."""
        table = Table(title=script.name, show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Sections", style="cyan")
        table.add_column("Line")

        for line in script.lines:
            covering = [
                section.title
                for section in script.sections
                if covers(section, script, line.line_number)
            ]
            number = Text(str(line.line_number))
            if line.is_marked and line.mark_color:
                number.stylize(f"on {line.mark_color.value}")
            table.add_row(number, ", ".join(covering), annotate_line(line))
        return table

    def format(
        self, data: Script, format_type: OutputFormat = OutputFormat.TABLE
    ) -> str:
        """Format a script as JSON or as plain table text."""
        if format_type == OutputFormat.JSON:
            return json.dumps(data.model_dump(mode="json"), indent=2)
        buffer = io.StringIO()
        Console(file=buffer, width=120, color_system=None).print(self.render(data))
        return buffer.getvalue()


class ElementFormatter(OutputFormatter[list[LineElement]]):
    """Formats the elements of a decomposed line."""

    def render(self, elements: list[LineElement]) -> Table:
        """Build a position/type/content table."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("Position", justify="right")
        table.add_column("Type")
        table.add_column("Content")
        for element in elements:
            table.add_row(
                str(element.position), element.type.value, repr(element.content)
            )
        return table

    def format(
        self,
        data: list[LineElement],
        format_type: OutputFormat = OutputFormat.TABLE,
    ) -> str:
        """Format elements as JSON or as plain table text."""
        if format_type == OutputFormat.JSON:
            return json.dumps(
                [
                    element.model_dump(
                        mode="json", include={"position", "content", "type"}
                    )
                    for element in data
                ],
                indent=2,
            )
        buffer = io.StringIO()
        Console(file=buffer, width=120, color_system=None).print(self.render(data))
        return buffer.getvalue()
