"""Main CLI entry point."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from cuescript import __version__
from cuescript.cli.commands import cue_app, line_app, section_app
from cuescript.cli.formatters import (
    ElementFormatter,
    JsonFormatter,
    OutputFormat,
    ScriptFormatter,
)
from cuescript.cli.utils.cli_handler import CLIHandler, cli_command
from cuescript.config import (
    configure_logging,
    get_logger,
    get_settings,
    get_settings_for_cli,
    set_settings,
)
from cuescript.editor import ScriptEditor
from cuescript.exceptions import CueScriptError, DocumentError
from cuescript.storage.files import import_text, load_script, save_script
from cuescript.text import decompose
from cuescript.validation import ScriptValidator

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="cuescript",
    help="Mark up performance scripts with sections and word-anchored cues",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(line_app, name="line")
app.add_typer(cue_app, name="cue")
app.add_typer(section_app, name="section")


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file (YAML, TOML, or JSON)",
            envvar="CUESCRIPT_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure global options."""
    overrides: dict[str, object] = {}
    if debug:
        overrides.update(log_level="DEBUG", debug=True)
    elif verbose:
        overrides["log_level"] = "INFO"

    if config or overrides:
        try:
            settings = get_settings_for_cli(config_file=config, cli_overrides=overrides)
        except (CueScriptError, FileNotFoundError) as e:
            CLIHandler(console).handle_error(e)
        set_settings(settings)
        configure_logging(settings)
        logger.debug("Settings loaded", config=str(config) if config else None)


@app.command()
@cli_command
def new(
    script_path: Annotated[
        Path, typer.Argument(help="Script document to create", dir_okay=False)
    ],
    name: Annotated[str | None, typer.Option("--name", help="Script name")] = None,
    from_text: Annotated[
        Path | None,
        typer.Option(
            "--from-text",
            help="Plain text file to import, one script line per text line",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing document")
    ] = False,
) -> None:
    """Create a new script document."""
    if script_path.exists() and not force:
        raise DocumentError(
            message=f"{script_path} already exists",
            hint="Pass --force to overwrite it",
            details={"path": str(script_path)},
        )

    if from_text:
        script = import_text(from_text, name)
    else:
        script = ScriptEditor.new(name or script_path.stem).script

    save_script(script, script_path)
    CLIHandler(console).handle_success(
        f"Created '{script.name}' with {len(script.lines)} line(s)"
    )


@app.command()
@cli_command
def show(
    script_path: Annotated[
        Path, typer.Argument(help="Script document (JSON)", dir_okay=False)
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show a script with its sections and cues."""
    script = load_script(script_path)
    formatter = ScriptFormatter(console)
    if json_output:
        print(formatter.format(script, OutputFormat.JSON))
    else:
        console.print(formatter.render(script))


@app.command("decompose")
def decompose_command(
    text: Annotated[str, typer.Argument(help="Line text to split into elements")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show how a line of text splits into addressable elements."""
    settings = get_settings()
    elements = decompose(text, classify_punctuation=settings.classify_punctuation)
    formatter = ElementFormatter(console)
    if json_output:
        print(formatter.format(elements, OutputFormat.JSON))
    else:
        console.print(formatter.render(elements))


@app.command()
@cli_command
def validate(
    script_path: Annotated[
        Path, typer.Argument(help="Script document (JSON)", dir_okay=False)
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Check a script for broken invariants and items needing attention."""
    result = ScriptValidator().validate(load_script(script_path))

    if json_output:
        print(JsonFormatter().format(result))
    else:
        for error in result.errors:
            console.print(f"[red]✗ {error}[/red]", highlight=False)
        for warning in result.warnings:
            console.print(f"[yellow]! {warning}[/yellow]", highlight=False)
        for first, second in result.overlaps:
            console.print(
                f"  '{first.title}' overlaps '{second.title}'", highlight=False
            )
        if result.is_valid:
            console.print("[green]✓ Script is valid[/green]")

    if not result.is_valid:
        raise typer.Exit(1)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show cuescript version."""
    if json_output:
        print(JsonFormatter().format({"name": "cuescript", "version": __version__}))
    else:
        console.print(f"cuescript v{__version__}")


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
