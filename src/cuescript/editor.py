"""Script aggregate editing.

``ScriptEditor`` is the single writer for one script. It performs every
structural mutation, rejecting invalid requests before anything changes,
and keeps a cue-id to line-id index so cues can be found without scanning.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4

from cuescript import anchoring, lines, sections
from cuescript.config import CueScriptSettings, get_logger, get_settings
from cuescript.exceptions import (
    CueNotFoundError,
    DuplicateLineNumberError,
    InvalidLineNumberError,
    InvalidRangeError,
    LineNotFoundError,
    RenumberError,
    SectionNotFoundError,
)
from cuescript.models import (
    Cue,
    CueOffset,
    CueType,
    IdFactory,
    Line,
    Script,
    Section,
    SectionRangeChange,
    SectionType,
)
from cuescript.validation import ScriptValidator, ValidationResult

logger = get_logger(__name__)


@dataclass
class LineRemoval:
    """What went with a removed line."""

    line: Line
    removed_cues: list[Cue] = field(default_factory=list)
    section_changes: list[SectionRangeChange] = field(default_factory=list)


class ScriptEditor:
    """Single-writer editing session over one script."""

    def __init__(
        self,
        script: Script,
        *,
        id_factory: IdFactory = uuid4,
        settings: CueScriptSettings | None = None,
    ) -> None:
        """Initialize the editor.

        Args:
            script: Script to edit in place
            id_factory: Source of ids for new lines, elements, cues and sections
            settings: Editing settings; defaults to the global settings
        """
        self.script = script
        self.id_factory = id_factory
        self.settings = settings or get_settings()
        self._cue_lines: dict[UUID, UUID] = {}
        self._rebuild_index()

    @classmethod
    def new(
        cls,
        name: str,
        *,
        id_factory: IdFactory = uuid4,
        settings: CueScriptSettings | None = None,
    ) -> ScriptEditor:
        """Start an editor on a new empty script."""
        script = Script(id=id_factory(), name=name)
        return cls(script, id_factory=id_factory, settings=settings)

    def _rebuild_index(self) -> None:
        self._cue_lines = {
            cue.id: line.id for line in self.script.lines for cue in line.cues
        }

    # Lines

    def get_line(self, line_id: UUID) -> Line:
        """Return a line by id.

        Raises:
            LineNotFoundError: If the script has no such line
        """
        line = self.script.get_line(line_id)
        if line is None:
            raise LineNotFoundError(
                message=f"Line {line_id} not found",
                details={"script": self.script.name, "line_id": str(line_id)},
            )
        return line

    def line_by_number(self, line_number: int) -> Line:
        """Return a line by number.

        Raises:
            LineNotFoundError: If no line has that number
        """
        line = self.script.line_by_number(line_number)
        if line is None:
            raise LineNotFoundError(
                message=f"Line {line_number} not found",
                details={"script": self.script.name, "line_number": line_number},
            )
        return line

    def add_line(self, line_number: int, content: str) -> Line:
        """Add a line of text, decomposed before it is returned.

        Empty sections whose range holds the new number become active again.

        Raises:
            InvalidLineNumberError: If the number is not positive
            DuplicateLineNumberError: If the number is already used
        """
        if line_number <= 0:
            raise InvalidLineNumberError(line_number)
        if self.script.line_by_number(line_number) is not None:
            raise DuplicateLineNumberError(line_number, self.script.name)

        line = lines.new_line(
            line_number,
            content,
            id_factory=self.id_factory,
            classify_punctuation=self.settings.classify_punctuation,
        )
        self.script.lines.append(line)
        self.script.lines.sort(key=lambda item: item.line_number)
        sections.reactivate_sections(self.script)
        logger.debug(
            "Line added", line_number=line_number, elements=len(line.elements)
        )
        return line

    def edit_line(self, line_id: UUID, content: str) -> lines.LineEdit:
        """Replace a line's text, re-decomposing it and rebasing its cues."""
        line = self.get_line(line_id)
        return lines.redecompose_line(
            line,
            content,
            id_factory=self.id_factory,
            classify_punctuation=self.settings.classify_punctuation,
            window=self.settings.rebase_search_window,
        )

    def remove_line(self, line_id: UUID) -> LineRemoval:
        """Delete a line with its elements and cues.

        Sections are kept; any bound that sat on the removed number is
        moved onto a remaining line.
        """
        line = self.get_line(line_id)
        self.script.lines.remove(line)
        for cue in line.cues:
            self._cue_lines.pop(cue.id, None)

        changes = sections.recompute_after_removal(self.script, line.line_number)
        logger.info(
            "Line removed",
            line_number=line.line_number,
            cues=len(line.cues),
            sections_changed=len(changes),
        )
        return LineRemoval(
            line=line, removed_cues=list(line.cues), section_changes=changes
        )

    def renumber_lines(self, mapping: Mapping[int, int]) -> None:
        """Change line numbers in bulk, all or nothing.

        Lines not named in ``mapping`` keep their numbers. Section bounds
        follow the lines they sat on.

        Raises:
            RenumberError: If a source number does not exist, a target is not
                positive, or two lines would share a number
            InvalidRangeError: If a section would end before it starts
        """
        existing = set(self.script.line_numbers())
        missing = sorted(set(mapping) - existing)
        if missing:
            raise RenumberError(
                message=f"Cannot renumber missing lines {missing}",
                details={"missing": missing},
            )
        invalid = sorted(n for n in mapping.values() if n <= 0)
        if invalid:
            raise RenumberError(
                message=f"Line numbers must be positive, got {invalid}",
                details={"invalid": invalid},
            )

        targets = [mapping.get(n, n) for n in self.script.line_numbers()]
        clashes = sorted({n for n in targets if targets.count(n) > 1})
        if clashes:
            raise RenumberError(
                message=f"Renumbering would duplicate line numbers {clashes}",
                hint="Map every line that currently holds a target number as well",
                details={"duplicates": clashes},
            )

        for line in self.script.lines:
            for cue in line.cues:
                if cue.line_id != line.id:
                    raise RenumberError(
                        message=f"Cue {cue.id} does not reference its line",
                        details={"cue_id": str(cue.id), "line_id": str(line.id)},
                    )

        # Section ranges are checked on copies before anything is renumbered
        sections.remap_sections(
            [section.model_copy() for section in self.script.sections], mapping
        )

        for line in self.script.lines:
            line.line_number = mapping.get(line.line_number, line.line_number)
        self.script.lines.sort(key=lambda item: item.line_number)
        sections.remap_sections(self.script.sections, mapping)
        sections.reactivate_sections(self.script)
        self._rebuild_index()
        logger.info("Lines renumbered", moved=len(mapping))

    # Cues

    def attach_cue(
        self,
        line_id: UUID,
        element_index: int,
        offset: CueOffset,
        cue_type: CueType,
        label: str,
        **options: Any,
    ) -> Cue:
        """Anchor a new cue on a line; see :func:`anchoring.attach_cue`."""
        line = self.get_line(line_id)
        cue = anchoring.attach_cue(
            line,
            element_index,
            offset,
            cue_type,
            label,
            id_factory=self.id_factory,
            **options,
        )
        self._cue_lines[cue.id] = line.id
        return cue

    def find_cue(self, cue_id: UUID) -> tuple[Line, Cue]:
        """Locate a cue and its line through the index.

        Raises:
            CueNotFoundError: If no line holds the cue
        """
        line_id = self._cue_lines.get(cue_id)
        line = self.script.get_line(line_id) if line_id else None
        cue = line.get_cue(cue_id) if line else None
        if line is None or cue is None:
            raise CueNotFoundError(
                message=f"Cue {cue_id} not found",
                details={"script": self.script.name, "cue_id": str(cue_id)},
            )
        return line, cue

    def detach_cue(self, cue_id: UUID) -> Cue:
        """Remove a cue from whichever line holds it."""
        line, _ = self.find_cue(cue_id)
        cue = anchoring.detach_cue(line, cue_id)
        self._cue_lines.pop(cue_id, None)
        return cue

    def reanchor_cue(
        self, cue_id: UUID, element_index: int, offset: CueOffset
    ) -> Cue:
        """Give a cue a new anchor on its current line."""
        line, _ = self.find_cue(cue_id)
        return anchoring.reanchor_cue(line, cue_id, element_index, offset)

    def cues(self) -> list[tuple[Line, Cue]]:
        """Every cue in script order."""
        return [(line, cue) for line in self.script.lines for cue in line.cues]

    # Sections

    def get_section(self, section_id: UUID) -> Section:
        """Return a section by id.

        Raises:
            SectionNotFoundError: If the script has no such section
        """
        section = self.script.get_section(section_id)
        if section is None:
            raise SectionNotFoundError(
                message=f"Section {section_id} not found",
                details={"script": self.script.name, "section_id": str(section_id)},
            )
        return section

    def open_section(
        self,
        start_line: int,
        section_type: SectionType,
        title: str,
        notes: str = "",
    ) -> Section:
        """Open a section at an existing line."""
        return sections.open_section(
            self.script,
            start_line,
            section_type,
            title,
            id_factory=self.id_factory,
            notes=notes,
        )

    def close_section(self, section_id: UUID, end_line: int) -> Section:
        """Close a section at an existing line.

        An empty section becomes active again, since its end is now a line
        that exists.

        Raises:
            InvalidRangeError: If the end is before the start
            LineNotFoundError: If no line has number ``end_line``
        """
        section = self.get_section(section_id)
        if end_line < section.start_line_number:
            raise InvalidRangeError(section.start_line_number, end_line)
        self.line_by_number(end_line)
        sections.close_section(section, end_line)
        sections.reactivate_sections(self.script)
        return section

    def reopen_section(self, section_id: UUID) -> Section:
        """Let a section run to the end of the script again."""
        section = sections.reopen_section(self.get_section(section_id))
        sections.reactivate_sections(self.script)
        return section

    def sections_covering(self, line_number: int) -> list[Section]:
        """Sections whose range contains ``line_number``."""
        return sections.sections_covering(self.script, line_number)

    def validate(self) -> ValidationResult:
        """Run the script validator over the current state."""
        return ScriptValidator().validate(self.script)
