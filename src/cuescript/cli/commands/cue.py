"""Cue commands."""

from pathlib import Path
from typing import Annotated
from uuid import UUID

import typer
from rich.console import Console
from rich.table import Table

from cuescript.anchoring import assign_haptic
from cuescript.cli.formatters.json_formatter import JsonFormatter
from cuescript.cli.utils.cli_handler import CLIHandler, cli_command, edit_document
from cuescript.models import CueHapticConfig, CueOffset, CueType, StageLocation
from cuescript.presentation import display_name, general_name
from cuescript.storage.files import load_script

cue_app = typer.Typer(
    name="cue",
    help="Anchor cues to words in the script",
    rich_markup_mode="rich",
)

console = Console()

ScriptPath = Annotated[
    Path,
    typer.Argument(help="Script document (JSON)", dir_okay=False),
]


@cue_app.command("add")
@cli_command
def cue_add(
    script_path: ScriptPath,
    line_number: Annotated[int, typer.Argument(help="Line number")],
    element_index: Annotated[int, typer.Argument(help="Element (word) index")],
    cue_type: Annotated[CueType, typer.Option("--type", "-t", help="Cue type")],
    label: Annotated[str, typer.Option("--label", "-l", help="Cue label")],
    offset: Annotated[
        CueOffset, typer.Option("--offset", help="Fire before or after the word")
    ] = CueOffset.AFTER,
    alert_sound: Annotated[
        str | None,
        typer.Option("--alert", help="Enable the alert with this sound asset"),
    ] = None,
    crew_id: Annotated[
        int | None, typer.Option("--crew", help="Crew id for a haptic alert")
    ] = None,
    location: Annotated[
        StageLocation | None,
        typer.Option("--location", help="Crew location for a haptic alert"),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Anchor a cue to a word of a line."""
    if location is not None and crew_id is None:
        raise typer.BadParameter(
            "--location needs --crew to name who receives the haptic alert",
            param_hint="--location",
        )

    with edit_document(script_path) as editor:
        line = editor.line_by_number(line_number)
        cue = editor.attach_cue(
            line.id,
            element_index,
            offset,
            cue_type,
            label,
            has_alert=alert_sound is not None,
            alert_sound=alert_sound,
        )
        if crew_id is not None:
            assign_haptic(
                cue,
                CueHapticConfig(
                    location=location or StageLocation.CENTER_STAGE, crew_id=crew_id
                ),
            )

    CLIHandler(console).handle_success(
        f"Added {display_name(cue.type)} '{cue.label}' on line {line_number}",
        data={"cue_id": str(cue.id)},
        json_output=json_output,
    )


@cue_app.command("list")
@cli_command
def cue_list(
    script_path: ScriptPath,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List every cue in script order."""
    script = load_script(script_path)
    rows = [
        {
            "id": str(cue.id),
            "line": line.line_number,
            "element": cue.position.element_index,
            "offset": cue.position.offset.value,
            "type": cue.type.value,
            "call": general_name(cue.type),
            "label": cue.label,
            "status": cue.status.value,
        }
        for line in script.lines
        for cue in line.cues
    ]

    if json_output:
        print(JsonFormatter().format(rows))
        return

    if not rows:
        console.print("[yellow]No cues.[/yellow]")
        return

    table = Table(title="Cues", show_header=True, header_style="bold")
    for column in ("Line", "Element", "Call", "Type", "Label", "Status", "Id"):
        table.add_column(column)
    for row in rows:
        table.add_row(
            str(row["line"]),
            f"{row['offset']} {row['element']}",
            str(row["call"]),
            str(row["type"]),
            str(row["label"]),
            str(row["status"]),
            str(row["id"]),
        )
    console.print(table)


@cue_app.command("remove")
@cli_command
def cue_remove(
    script_path: ScriptPath,
    cue_id: Annotated[UUID, typer.Argument(help="Cue id")],
) -> None:
    """Remove a cue."""
    with edit_document(script_path) as editor:
        cue = editor.detach_cue(cue_id)
    CLIHandler(console).handle_success(f"Removed cue '{cue.label}'")


@cue_app.command("reanchor")
@cli_command
def cue_reanchor(
    script_path: ScriptPath,
    cue_id: Annotated[UUID, typer.Argument(help="Cue id")],
    element_index: Annotated[int, typer.Argument(help="New element index")],
    offset: Annotated[
        CueOffset, typer.Option("--offset", help="Fire before or after the word")
    ] = CueOffset.AFTER,
) -> None:
    """Move a cue to another word on its line, restoring orphaned cues."""
    with edit_document(script_path) as editor:
        cue = editor.reanchor_cue(cue_id, element_index, offset)
    CLIHandler(console).handle_success(
        f"Cue '{cue.label}' anchored {offset.value} element {element_index}"
    )
