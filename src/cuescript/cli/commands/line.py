"""Line editing commands."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from cuescript.cli.utils.cli_handler import CLIHandler, cli_command, edit_document

line_app = typer.Typer(
    name="line",
    help="Add, edit, remove and renumber script lines",
    rich_markup_mode="rich",
)

console = Console()

ScriptPath = Annotated[
    Path,
    typer.Argument(help="Script document (JSON)", dir_okay=False),
]


@line_app.command("add")
@cli_command
def line_add(
    script_path: ScriptPath,
    line_number: Annotated[int, typer.Argument(help="Line number", min=1)],
    content: Annotated[str, typer.Argument(help="Line text")],
) -> None:
    """Add a line of text to the script."""
    with edit_document(script_path) as editor:
        line = editor.add_line(line_number, content)
    CLIHandler(console).handle_success(
        f"Added line {line.line_number} ({len(line.elements)} elements)"
    )


@line_app.command("edit")
@cli_command
def line_edit(
    script_path: ScriptPath,
    line_number: Annotated[int, typer.Argument(help="Line number")],
    content: Annotated[str, typer.Argument(help="New line text")],
) -> None:
    """Replace a line's text; cues follow their words where they can."""
    with edit_document(script_path) as editor:
        line = editor.line_by_number(line_number)
        edit = editor.edit_line(line.id, content)

    CLIHandler(console).handle_success(f"Updated line {line_number}")
    for relocation in edit.relocated:
        console.print(
            f"  moved cue from element {relocation.old_index} "
            f"to {relocation.new_index}"
        )
    for orphan in edit.orphaned:
        console.print(
            f"[yellow]  cue {orphan.cue_id} lost its anchor "
            f"(was on {orphan.anchor_text!r}); re-anchor it with "
            f"'cuescript cue reanchor'[/yellow]",
            highlight=False,
        )


@line_app.command("remove")
@cli_command
def line_remove(
    script_path: ScriptPath,
    line_number: Annotated[int, typer.Argument(help="Line number")],
) -> None:
    """Remove a line together with its cues."""
    with edit_document(script_path) as editor:
        line = editor.line_by_number(line_number)
        removal = editor.remove_line(line.id)

    CLIHandler(console).handle_success(
        f"Removed line {line_number} and {len(removal.removed_cues)} cue(s)"
    )
    for change in removal.section_changes:
        if change.status.value == "empty":
            console.print(
                f"[yellow]  section {change.section_id} is now empty[/yellow]"
            )
        else:
            console.print(
                f"  section {change.section_id} now starts at {change.new_start}"
                + (f" and ends at {change.new_end}" if change.new_end else "")
            )


def _parse_mapping(pairs: list[str]) -> dict[int, int]:
    mapping: dict[int, int] = {}
    for pair in pairs:
        old, sep, new = pair.partition(":")
        if not sep or not old.strip().isdigit() or not new.strip().isdigit():
            raise typer.BadParameter(f"Expected OLD:NEW, got {pair!r}")
        mapping[int(old)] = int(new)
    return mapping


@line_app.command("renumber")
@cli_command
def line_renumber(
    script_path: ScriptPath,
    pairs: Annotated[
        list[str],
        typer.Argument(help="Renumberings as OLD:NEW, e.g. 3:4 4:3"),
    ],
) -> None:
    """Renumber lines in one all-or-nothing step."""
    mapping = _parse_mapping(pairs)
    with edit_document(script_path) as editor:
        editor.renumber_lines(mapping)
    CLIHandler(console).handle_success(f"Renumbered {len(mapping)} line(s)")
