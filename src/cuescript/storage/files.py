"""Script documents on disk.

Documents are JSON dumps of a :class:`~cuescript.models.Script` with enum
wire values preserved, so any tool that reads the same field names can
share them.
"""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

from pydantic import ValidationError

from cuescript.config import get_logger
from cuescript.editor import ScriptEditor
from cuescript.exceptions import DocumentError
from cuescript.models import IdFactory, Script

logger = get_logger(__name__)


def save_script(script: Script, path: Path | str) -> Path:
    """Write a script document, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(script.model_dump_json(indent=2), encoding="utf-8")
    logger.debug("Script written", path=str(path), lines=len(script.lines))
    return path


def load_script(path: Path | str) -> Script:
    """Read a script document.

    Raises:
        DocumentError: If the file is missing, unreadable, or not a valid script
    """
    path = Path(path)
    if not path.exists():
        raise DocumentError(
            message=f"Script document not found: {path}",
            hint="Create one with 'cuescript new'",
            details={"path": str(path)},
        )
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(
            message=f"Cannot read script document: {path}",
            hint="Script documents are UTF-8 JSON written by 'cuescript new'",
            details={"path": str(path), "reason": str(e)},
        ) from e
    try:
        return Script.model_validate_json(raw)
    except ValidationError as e:
        raise DocumentError(
            message=f"Invalid script document: {path}",
            hint="The file may have been edited by hand or written by another tool",
            details={"path": str(path), "errors": e.error_count()},
        ) from e


def import_text(
    path: Path | str,
    name: str | None = None,
    *,
    id_factory: IdFactory = uuid4,
) -> Script:
    """Build a script from a plain text file, one line per non-blank line.

    Line numbers follow the source file, so blank lines leave gaps.

    Raises:
        DocumentError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise DocumentError(
            message=f"Text file not found: {path}",
            details={"path": str(path)},
        )

    editor = ScriptEditor.new(name or path.stem, id_factory=id_factory)
    with path.open(encoding="utf-8") as f:
        for number, raw in enumerate(f, start=1):
            text = raw.rstrip("\r\n")
            if text.strip():
                editor.add_line(number, text)

    logger.info(
        "Text imported", path=str(path), lines=len(editor.script.lines)
    )
    return editor.script
