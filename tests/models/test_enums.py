"""Tests for model enums."""

import pytest

from cuescript.models import (
    CueOffset,
    CueStatus,
    CueType,
    ElementType,
    MarkColor,
    SectionStatus,
    SectionType,
    StageLocation,
)


class TestSectionType:
    """Test SectionType enum."""

    def test_section_type_values(self):
        """Test SectionType has expected wire values."""
        assert SectionType.ACT.value == "act"
        assert SectionType.SCENE.value == "scene"
        assert SectionType.PRESET.value == "preset"
        assert SectionType.SONG_NUMBER.value == "song_number"
        assert SectionType.CUSTOM.value == "custom"
        assert len(SectionType) == 5

    def test_section_type_from_wire_value(self):
        """Test members can be looked up by wire value."""
        assert SectionType("song_number") is SectionType.SONG_NUMBER


class TestElementType:
    """Test ElementType enum."""

    def test_element_type_values(self):
        """Test ElementType has expected values."""
        assert [member.value for member in ElementType] == [
            "word",
            "space",
            "punctuation",
        ]


class TestCueType:
    """Test CueType enum."""

    def test_cue_type_count(self):
        """Test CueType has all thirteen department actions."""
        assert len(CueType) == 13

    @pytest.mark.parametrize(
        ("member", "value"),
        [
            (CueType.LIGHTING_STANDBY, "lighting_standby"),
            (CueType.LIGHTING_GO, "lighting_go"),
            (CueType.SOUND_STANDBY, "sound_standby"),
            (CueType.SOUND_GO, "sound_go"),
            (CueType.FLY_STANDBY, "fly_standby"),
            (CueType.FLY_GO, "fly_go"),
            (CueType.AUTOMATION_STANDBY, "automation_standby"),
            (CueType.AUTOMATION_GO, "automation_go"),
            (CueType.SET_WARNING, "set_warning"),
            (CueType.SET_STANDBY, "set_standby"),
            (CueType.SET_GO, "set_go"),
            (CueType.CUELIGHT_STANDBY, "cuelight_standby"),
            (CueType.CUELIGHT_GO, "cuelight_go"),
        ],
    )
    def test_cue_type_values(self, member, value):
        """Test each cue type keeps its wire value."""
        assert member.value == value
        assert CueType(value) is member


class TestSmallEnums:
    """Test the remaining enums."""

    def test_cue_offset_values(self):
        """Test CueOffset values."""
        assert CueOffset.BEFORE.value == "before"
        assert CueOffset.AFTER.value == "after"

    def test_cue_status_values(self):
        """Test CueStatus values."""
        assert CueStatus.ANCHORED.value == "anchored"
        assert CueStatus.ORPHANED.value == "orphaned"

    def test_section_status_values(self):
        """Test SectionStatus values."""
        assert SectionStatus.ACTIVE.value == "active"
        assert SectionStatus.EMPTY.value == "empty"

    def test_mark_color_values_are_hex(self):
        """Test MarkColor wire values are the hex colours."""
        assert MarkColor.YELLOW.value == "#FFFF00"
        assert MarkColor.PINK.value == "#FF69B4"
        assert MarkColor.GREEN.value == "#90EE90"
        assert MarkColor.BLUE.value == "#87CEEB"
        assert MarkColor.ORANGE.value == "#FFA500"
        assert MarkColor.PURPLE.value == "#DDA0DD"

    def test_stage_location_values(self):
        """Test StageLocation has every crew position."""
        assert len(StageLocation) == 12
        assert StageLocation.PIT.value == "pit"
        assert StageLocation.CENTER_STAGE.value == "center_stage"
        assert StageLocation.DOWNSTAGE_RIGHT.value == "downstage_right"
