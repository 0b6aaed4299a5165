"""In-memory key-based store for scripts and everything they own.

Every entity is addressable by its id. Deletes cascade along ownership:
Script → Lines → Elements and Cues, Script → Sections. Nothing cascades
along the non-owning ``Cue.line_id`` reference.
"""

from __future__ import annotations

from uuid import UUID

from cuescript.config import get_logger
from cuescript.editor import LineRemoval, ScriptEditor
from cuescript.exceptions import LineNotFoundError
from cuescript.models import Cue, Line, LineElement, Script, Section

logger = get_logger(__name__)


class InMemoryScriptStore:
    """Keeps scripts and id indexes for their lines, sections, elements and cues."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._scripts: dict[UUID, Script] = {}
        self._line_owner: dict[UUID, UUID] = {}
        self._section_owner: dict[UUID, UUID] = {}
        self._element_owner: dict[UUID, UUID] = {}
        self._cue_owner: dict[UUID, UUID] = {}

    def __len__(self) -> int:
        return len(self._scripts)

    def __contains__(self, script_id: object) -> bool:
        return script_id in self._scripts

    def save(self, script: Script) -> None:
        """Insert or replace a script and re-index everything it owns."""
        if script.id in self._scripts:
            self._drop_indexes(script.id)
        self._scripts[script.id] = script
        self._index(script)
        logger.debug("Script saved", script_id=str(script.id), lines=len(script.lines))

    def _index(self, script: Script) -> None:
        for line in script.lines:
            self._line_owner[line.id] = script.id
            for element in line.elements:
                self._element_owner[element.id] = line.id
            for cue in line.cues:
                self._cue_owner[cue.id] = line.id
        for section in script.sections:
            self._section_owner[section.id] = script.id

    def _drop_line(self, line: Line) -> None:
        self._line_owner.pop(line.id, None)
        for table in (self._element_owner, self._cue_owner):
            for key in [key for key, owner in table.items() if owner == line.id]:
                del table[key]

    def _drop_indexes(self, script_id: UUID) -> None:
        # Matched by owner: the script may have changed since it was indexed
        line_ids = {
            line_id
            for line_id, owner in self._line_owner.items()
            if owner == script_id
        }
        for line_id in line_ids:
            del self._line_owner[line_id]
        for table in (self._element_owner, self._cue_owner):
            for key in [key for key, owner in table.items() if owner in line_ids]:
                del table[key]
        for section_id in [
            key for key, owner in self._section_owner.items() if owner == script_id
        ]:
            del self._section_owner[section_id]

    def get_script(self, script_id: UUID) -> Script | None:
        """Fetch a script by id."""
        return self._scripts.get(script_id)

    def list_scripts(self) -> list[Script]:
        """All scripts, oldest first."""
        return sorted(self._scripts.values(), key=lambda script: script.date_added)

    def get_line(self, line_id: UUID) -> Line | None:
        """Fetch a line by id."""
        script_id = self._line_owner.get(line_id)
        if script_id is None:
            return None
        return self._scripts[script_id].get_line(line_id)

    def get_section(self, section_id: UUID) -> Section | None:
        """Fetch a section by id."""
        script_id = self._section_owner.get(section_id)
        if script_id is None:
            return None
        return self._scripts[script_id].get_section(section_id)

    def get_element(self, element_id: UUID) -> LineElement | None:
        """Fetch a line element by id."""
        line_id = self._element_owner.get(element_id)
        line = self.get_line(line_id) if line_id else None
        if line is None:
            return None
        return next((e for e in line.elements if e.id == element_id), None)

    def get_cue(self, cue_id: UUID) -> Cue | None:
        """Fetch a cue by id."""
        line_id = self._cue_owner.get(cue_id)
        line = self.get_line(line_id) if line_id else None
        return line.get_cue(cue_id) if line else None

    def delete_script(self, script_id: UUID) -> bool:
        """Delete a script with all its lines, sections, elements and cues.

        Returns:
            True if the script existed
        """
        if script_id not in self._scripts:
            return False
        self._drop_indexes(script_id)
        script = self._scripts.pop(script_id)
        logger.info(
            "Script deleted",
            script_id=str(script_id),
            lines=len(script.lines),
            sections=len(script.sections),
        )
        return True

    def delete_line(
        self, line_id: UUID, editor: ScriptEditor | None = None
    ) -> LineRemoval:
        """Delete one line with its elements and cues.

        The owning script and its sections stay; section ranges are
        recomputed by the editor.

        Args:
            line_id: Line to delete
            editor: Editor already open on the owning script, if any

        Raises:
            LineNotFoundError: If the store holds no such line
        """
        script_id = self._line_owner.get(line_id)
        if script_id is None:
            raise LineNotFoundError(
                message=f"Line {line_id} not found in store",
                details={"line_id": str(line_id)},
            )
        script = self._scripts[script_id]
        editor = editor or ScriptEditor(script)
        removal = editor.remove_line(line_id)
        self._drop_line(removal.line)
        return removal

    def counts(self) -> dict[str, int]:
        """Number of indexed entities of each kind."""
        return {
            "scripts": len(self._scripts),
            "lines": len(self._line_owner),
            "sections": len(self._section_owner),
            "elements": len(self._element_owner),
            "cues": len(self._cue_owner),
        }
