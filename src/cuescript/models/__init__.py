"""cuescript Data Models.

This module defines the entities of an annotated performance script: the
script itself, its structural sections, its lines, the words and spaces each
line decomposes into, and the cues anchored to those words. Entities are
plain pydantic records with stable UUIDs so any key-based store can persist
them unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

IdFactory = Callable[[], UUID]


class SectionType(str, Enum):
    """Kinds of structural section."""

    ACT = "act"
    SCENE = "scene"
    PRESET = "preset"
    SONG_NUMBER = "song_number"
    CUSTOM = "custom"


class SectionStatus(str, Enum):
    """Whether a section still covers any line of the script."""

    ACTIVE = "active"
    EMPTY = "empty"  # Every line in its range was removed


class ElementType(str, Enum):
    """Kinds of line element produced by decomposition."""

    WORD = "word"
    SPACE = "space"
    PUNCTUATION = "punctuation"


class CueOffset(str, Enum):
    """Which side of its element a cue fires on."""

    BEFORE = "before"
    AFTER = "after"


class CueType(str, Enum):
    """Department and action of a cue."""

    LIGHTING_STANDBY = "lighting_standby"
    LIGHTING_GO = "lighting_go"
    SOUND_STANDBY = "sound_standby"
    SOUND_GO = "sound_go"
    FLY_STANDBY = "fly_standby"
    FLY_GO = "fly_go"
    AUTOMATION_STANDBY = "automation_standby"
    AUTOMATION_GO = "automation_go"
    SET_WARNING = "set_warning"
    SET_STANDBY = "set_standby"
    SET_GO = "set_go"
    CUELIGHT_STANDBY = "cuelight_standby"
    CUELIGHT_GO = "cuelight_go"


class CueStatus(str, Enum):
    """Anchoring state of a cue."""

    ANCHORED = "anchored"
    ORPHANED = "orphaned"


class MarkColor(str, Enum):
    """Highlight colours for marked lines and words."""

    YELLOW = "#FFFF00"
    PINK = "#FF69B4"
    GREEN = "#90EE90"
    BLUE = "#87CEEB"
    ORANGE = "#FFA500"
    PURPLE = "#DDA0DD"


class StageLocation(str, Enum):
    """Where a crew member is standing."""

    PIT = "pit"
    LEFT_WING = "left_wing"
    RIGHT_WING = "right_wing"
    UPSTAGE = "upstage"
    DOWNSTAGE = "downstage"
    STAGE_LEFT = "stage_left"
    STAGE_RIGHT = "stage_right"
    UPSTAGE_LEFT = "upstage_left"
    UPSTAGE_RIGHT = "upstage_right"
    DOWNSTAGE_LEFT = "downstage_left"
    DOWNSTAGE_RIGHT = "downstage_right"
    CENTER_STAGE = "center_stage"


class BaseEntity(BaseModel):
    """Base class for all script entities."""

    id: UUID = Field(default_factory=uuid4)


class LineElement(BaseEntity):
    """A word, space or punctuation unit within a line."""

    position: int = Field(ge=0)
    content: str
    type: ElementType
    is_marked: bool = False
    mark_color: MarkColor | None = None


class CuePosition(BaseModel):
    """The anchor of a cue: an element index plus which side of it."""

    model_config = ConfigDict(frozen=True)

    element_index: int = Field(ge=0)
    offset: CueOffset


class CueHapticConfig(BaseModel):
    """Who should feel a haptic alert for a cue, and where they stand."""

    location: StageLocation
    crew_id: int = Field(ge=0)  # Stable per crew member, independent of location


class Cue(BaseEntity):
    """A department action anchored to a word in a line."""

    line_id: UUID  # Lookup reference to the owning line, never owns it
    position: CuePosition
    type: CueType
    label: str  # e.g. "LX Q5 GO"
    notes: str = ""
    has_alert: bool = False
    alert_sound: str | None = None  # Name of an external sound asset
    status: CueStatus = CueStatus.ANCHORED
    haptic: CueHapticConfig | None = None

    @property
    def is_orphaned(self) -> bool:
        """Whether the cue lost its anchor during a line edit."""
        return self.status is CueStatus.ORPHANED


class Line(BaseEntity):
    """One line of script text with its elements and cues.

    When no elements are supplied they are decomposed from ``content``
    during construction, so a line is never observable without elements.
    """

    line_number: int = Field(gt=0)
    content: str
    elements: list[LineElement] = Field(default_factory=list)
    cues: list[Cue] = Field(default_factory=list)
    is_marked: bool = False
    mark_color: MarkColor | None = None
    notes: str = ""

    @model_validator(mode="after")
    def materialize_elements(self) -> Line:
        """Decompose content when needed and check element positions."""
        if not self.elements:
            # Import here to avoid circular dependencies
            from cuescript.text import decompose

            self.elements = decompose(self.content)
            return self

        self.elements.sort(key=lambda element: element.position)
        positions = [element.position for element in self.elements]
        if positions != list(range(len(positions))):
            raise ValueError(
                f"Element positions must be contiguous from 0, got {positions}"
            )
        return self

    @model_validator(mode="after")
    def cues_reference_this_line(self) -> Line:
        """Every cue must point back at this line."""
        for cue in self.cues:
            if cue.line_id != self.id:
                raise ValueError(
                    f"Cue {cue.id} references line {cue.line_id}, not {self.id}"
                )
        return self

    @property
    def element_count(self) -> int:
        """Number of elements in the line."""
        return len(self.elements)

    def get_cue(self, cue_id: UUID) -> Cue | None:
        """Return the cue with ``cue_id`` if it belongs to this line."""
        return next((cue for cue in self.cues if cue.id == cue_id), None)

    def cues_at(self, element_index: int) -> list[Cue]:
        """Return anchored cues on one element, before-cues first."""
        matches = [
            cue
            for cue in self.cues
            if cue.status is CueStatus.ANCHORED
            and cue.position.element_index == element_index
        ]
        return sorted(matches, key=lambda cue: cue.position.offset is CueOffset.AFTER)


@dataclass(frozen=True)
class BoundedRange:
    """A closed section range, both ends inclusive."""

    start: int
    end: int
    kind: Literal["bounded"] = "bounded"


@dataclass(frozen=True)
class OpenRange:
    """A section range that runs to the end of the script."""

    start: int
    kind: Literal["open"] = "open"


SectionRange = BoundedRange | OpenRange


class Section(BaseEntity):
    """A labelled range over a script's line numbers."""

    title: str
    type: SectionType
    start_line_number: int = Field(gt=0)
    end_line_number: int | None = None
    notes: str = ""
    status: SectionStatus = SectionStatus.ACTIVE

    @model_validator(mode="after")
    def end_not_before_start(self) -> Section:
        """Validate that a closed range does not end before it starts."""
        if self.end_line_number is not None and (
            self.end_line_number < self.start_line_number
        ):
            raise ValueError(
                f"Section ends at line {self.end_line_number} "
                f"before it starts at {self.start_line_number}"
            )
        return self

    @property
    def is_open(self) -> bool:
        """Whether the section has no end line yet."""
        return self.end_line_number is None

    @property
    def line_range(self) -> SectionRange:
        """The section's range as a tagged variant."""
        if self.end_line_number is None:
            return OpenRange(start=self.start_line_number)
        return BoundedRange(start=self.start_line_number, end=self.end_line_number)


class Script(BaseEntity):
    """The annotated performance text, owning its lines and sections."""

    name: str
    date_added: datetime = Field(default_factory=lambda: datetime.now(UTC))
    lines: list[Line] = Field(default_factory=list)
    sections: list[Section] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        """Validate that script name is not empty."""
        if not v or not v.strip():
            raise ValueError("Script name cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def line_numbers_unique(self) -> Script:
        """Keep lines in number order and reject duplicate numbers."""
        self.lines.sort(key=lambda line: line.line_number)
        numbers = [line.line_number for line in self.lines]
        duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate line numbers: {duplicates}")
        return self

    def line_numbers(self) -> list[int]:
        """Line numbers in ascending order."""
        return [line.line_number for line in self.lines]

    def max_line_number(self) -> int | None:
        """Highest line number, or None for an empty script."""
        return self.lines[-1].line_number if self.lines else None

    def get_line(self, line_id: UUID) -> Line | None:
        """Find a line by id."""
        return next((line for line in self.lines if line.id == line_id), None)

    def line_by_number(self, line_number: int) -> Line | None:
        """Find a line by its number."""
        return next(
            (line for line in self.lines if line.line_number == line_number), None
        )

    def get_section(self, section_id: UUID) -> Section | None:
        """Find a section by id."""
        return next(
            (section for section in self.sections if section.id == section_id), None
        )


# Status records surfaced to callers instead of exceptions


@dataclass(frozen=True)
class OrphanedCueAnchor:
    """A cue whose anchor could not be preserved after its line changed."""

    cue_id: UUID
    line_id: UUID
    line_number: int
    element_index: int
    offset: CueOffset
    anchor_text: str | None  # Text of the element the cue used to sit on


@dataclass(frozen=True)
class CueRelocation:
    """A cue that followed its word to a new element index."""

    cue_id: UUID
    old_index: int
    new_index: int


@dataclass(frozen=True)
class ReconstructionMismatch:
    """Elements of a line no longer join back into its stored content."""

    line_id: UUID
    line_number: int
    content: str
    reconstructed: str


@dataclass(frozen=True)
class SectionRangeChange:
    """How a section's range moved after a line was removed."""

    section_id: UUID
    old_start: int
    old_end: int | None
    new_start: int
    new_end: int | None
    status: SectionStatus


__all__ = [
    "BaseEntity",
    "BoundedRange",
    "Cue",
    "CueHapticConfig",
    "CueOffset",
    "CuePosition",
    "CueRelocation",
    "CueStatus",
    "CueType",
    "ElementType",
    "IdFactory",
    "Line",
    "LineElement",
    "MarkColor",
    "OpenRange",
    "OrphanedCueAnchor",
    "ReconstructionMismatch",
    "Script",
    "Section",
    "SectionRange",
    "SectionRangeChange",
    "SectionStatus",
    "SectionType",
    "StageLocation",
]
