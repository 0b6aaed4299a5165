"""cuescript CLI commands."""

from __future__ import annotations

from cuescript.cli.commands.cue import cue_app
from cuescript.cli.commands.line import line_app
from cuescript.cli.commands.section import section_app

__all__ = ["cue_app", "line_app", "section_app"]
