"""Section commands."""

from pathlib import Path
from typing import Annotated
from uuid import UUID

import typer
from rich.console import Console

from cuescript.cli.formatters.json_formatter import JsonFormatter
from cuescript.cli.utils.cli_handler import CLIHandler, cli_command, edit_document
from cuescript.models import SectionType
from cuescript.presentation import display_name
from cuescript.sections import effective_end, sections_covering
from cuescript.storage.files import load_script

section_app = typer.Typer(
    name="section",
    help="Mark acts, scenes, presets and numbers",
    rich_markup_mode="rich",
)

console = Console()

ScriptPath = Annotated[
    Path,
    typer.Argument(help="Script document (JSON)", dir_okay=False),
]


@section_app.command("open")
@cli_command
def section_open(
    script_path: ScriptPath,
    start_line: Annotated[int, typer.Argument(help="First line of the section")],
    title: Annotated[str, typer.Option("--title", help="Section title")],
    section_type: Annotated[
        SectionType, typer.Option("--type", "-t", help="Section type")
    ] = SectionType.SCENE,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Open a section at a line; it runs to the end until closed."""
    with edit_document(script_path) as editor:
        section = editor.open_section(start_line, section_type, title)
    CLIHandler(console).handle_success(
        f"Opened {display_name(section.type)} '{section.title}' at line {start_line}",
        data={"section_id": str(section.id)},
        json_output=json_output,
    )


@section_app.command("close")
@cli_command
def section_close(
    script_path: ScriptPath,
    section_id: Annotated[UUID, typer.Argument(help="Section id")],
    end_line: Annotated[int, typer.Argument(help="Last line of the section")],
) -> None:
    """Close a section at a line."""
    with edit_document(script_path) as editor:
        section = editor.close_section(section_id, end_line)
    CLIHandler(console).handle_success(
        f"Closed '{section.title}' at line {end_line}"
    )


@section_app.command("covering")
@cli_command
def section_covering(
    script_path: ScriptPath,
    line_number: Annotated[int, typer.Argument(help="Line number")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the sections that contain a line."""
    script = load_script(script_path)
    found = sections_covering(script, line_number)
    rows = [
        {
            "id": str(section.id),
            "title": section.title,
            "type": section.type.value,
            "start": section.start_line_number,
            "end": effective_end(section, script),
            "open": section.is_open,
        }
        for section in found
    ]

    if json_output:
        print(JsonFormatter().format(rows))
        return
    if not rows:
        console.print(f"[yellow]No section covers line {line_number}.[/yellow]")
        return
    for row in rows:
        suffix = " (open)" if row["open"] else ""
        console.print(
            f"{row['title']} [{row['type']}] lines {row['start']}-{row['end']}{suffix}",
            markup=False,
        )
