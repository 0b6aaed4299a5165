"""Display names and colours for enum wire values.

These tables are read by whatever renders a script. They are keyed by the
enum's wire value so a renderer holding only serialized data can use them
without importing the models.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from cuescript.models import CueType, MarkColor, SectionType

STANDBY_STACK_COLOR = "#FF9500"
GO_STACK_COLOR = "#34C759"


class Presentation(NamedTuple):
    """Human-readable label and hex colour for one enum value."""

    label: str
    color: str


SECTION_TYPES: dict[str, Presentation] = {
    SectionType.ACT.value: Presentation("Act", "#FF6B6B"),
    SectionType.SCENE.value: Presentation("Scene", "#4ECDC4"),
    SectionType.PRESET.value: Presentation("Preset/Set Change", "#45B7D1"),
    SectionType.SONG_NUMBER.value: Presentation("Song/Musical Number", "#96CEB4"),
    SectionType.CUSTOM.value: Presentation("Custom", "#FECA57"),
}

CUE_TYPES: dict[str, Presentation] = {
    CueType.LIGHTING_STANDBY.value: Presentation("LX Standby", "#FFD700"),
    CueType.LIGHTING_GO.value: Presentation("LX GO", "#FFD700"),
    CueType.SOUND_STANDBY.value: Presentation("SFX Standby", "#FF6B6B"),
    CueType.SOUND_GO.value: Presentation("SFX GO", "#FF6B6B"),
    CueType.FLY_STANDBY.value: Presentation("Fly Standby", "#4ECDC4"),
    CueType.FLY_GO.value: Presentation("Fly GO", "#4ECDC4"),
    CueType.AUTOMATION_STANDBY.value: Presentation("Auto Standby", "#45B7D1"),
    CueType.AUTOMATION_GO.value: Presentation("Auto GO", "#45B7D1"),
    CueType.SET_WARNING.value: Presentation("Set Warning", "#944ECD"),
    CueType.SET_STANDBY.value: Presentation("Set Standby", "#944ECD"),
    CueType.SET_GO.value: Presentation("Set GO", "#944ECD"),
    CueType.CUELIGHT_STANDBY.value: Presentation("Cuelight Standby", "#CD4EBC"),
    CueType.CUELIGHT_GO.value: Presentation("Cuelight GO", "#CD4EBC"),
}

# Generic call the stage manager gives for each cue type
CUE_GENERAL_NAMES: dict[str, str] = {
    CueType.LIGHTING_STANDBY.value: "STANDBY",
    CueType.SOUND_STANDBY.value: "STANDBY",
    CueType.FLY_STANDBY.value: "STANDBY",
    CueType.AUTOMATION_STANDBY.value: "STANDBY",
    CueType.SET_STANDBY.value: "STANDBY",
    CueType.CUELIGHT_STANDBY.value: "STANDBY",
    CueType.LIGHTING_GO.value: "GO",
    CueType.SOUND_GO.value: "GO",
    CueType.FLY_GO.value: "GO",
    CueType.AUTOMATION_GO.value: "GO",
    CueType.SET_GO.value: "GO",
    CueType.CUELIGHT_GO.value: "GO",
    CueType.SET_WARNING.value: "WARNING",
}

# Only the set crew wear haptic devices
HAPTIC_CUE_TYPES: frozenset[str] = frozenset(
    {
        CueType.SET_WARNING.value,
        CueType.SET_STANDBY.value,
        CueType.SET_GO.value,
    }
)

MARK_COLORS: dict[str, Presentation] = {
    MarkColor.YELLOW.value: Presentation("Yellow", MarkColor.YELLOW.value),
    MarkColor.PINK.value: Presentation("Pink", MarkColor.PINK.value),
    MarkColor.GREEN.value: Presentation("Green", MarkColor.GREEN.value),
    MarkColor.BLUE.value: Presentation("Blue", MarkColor.BLUE.value),
    MarkColor.ORANGE.value: Presentation("Orange", MarkColor.ORANGE.value),
    MarkColor.PURPLE.value: Presentation("Purple", MarkColor.PURPLE.value),
}

_TABLES: dict[type[Enum], dict[str, Presentation]] = {
    SectionType: SECTION_TYPES,
    CueType: CUE_TYPES,
    MarkColor: MARK_COLORS,
}


def _wire(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value


def presentation_for(member: SectionType | CueType | MarkColor) -> Presentation:
    """Look up the presentation entry for an enum member.

    Raises:
        KeyError: If the enum type has no presentation table.
    """
    return _TABLES[type(member)][member.value]


def display_name(member: SectionType | CueType | MarkColor) -> str:
    """Human-readable label for an enum member."""
    return presentation_for(member).label


def color(member: SectionType | CueType | MarkColor) -> str:
    """Hex colour tag for an enum member."""
    return presentation_for(member).color


def general_name(cue_type: CueType | str) -> str:
    """STANDBY, GO or WARNING for a cue type or its wire value."""
    return CUE_GENERAL_NAMES[_wire(cue_type)]


def cue_stack_color(cue_type: CueType | str) -> str:
    """Colour of a cue in the running cue stack: green for GO, orange otherwise."""
    if general_name(cue_type) == "GO":
        return GO_STACK_COLOR
    return STANDBY_STACK_COLOR


def can_haptic(cue_type: CueType | str) -> bool:
    """Whether a cue type may carry a haptic alert."""
    return _wire(cue_type) in HAPTIC_CUE_TYPES
