"""Tests for whole-script validation."""

from cuescript.lines import set_element_content
from cuescript.models import (
    CueOffset,
    CueType,
    ElementType,
    Line,
    LineElement,
    Script,
    Section,
    SectionType,
)
from cuescript.validation import ScriptValidator


class TestScriptValidator:
    """Test ScriptValidator."""

    def test_clean_script_is_valid(self, editor):
        """Test an editor-built script has no errors or warnings."""
        result = ScriptValidator().validate(editor.script)

        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_reconstruction_mismatch_is_a_warning(self, editor):
        """Test an element-only edit is reported but does not invalidate."""
        line = editor.line_by_number(5)
        set_element_content(line, 0, "Exit")

        result = editor.validate()

        assert result.is_valid
        assert result.mismatches[0].line_number == 5
        assert result.mismatches[0].content == "Exeunt"
        assert result.mismatches[0].reconstructed == "Exit"

    def test_orphaned_cue_is_a_warning(self, editor):
        """Test orphans are listed for the caller to resolve."""
        line = editor.line_by_number(4)
        cue = editor.attach_cue(
            line.id, 3, CueOffset.AFTER, CueType.LIGHTING_GO, "LX Q5"
        )
        editor.edit_line(line.id, "LX")

        result = editor.validate()

        assert result.is_valid
        assert [o.cue_id for o in result.orphaned_cues] == [cue.id]
        assert any("orphaned" in w for w in result.warnings)

    def test_stale_anchor_is_an_error(self, editor):
        """Test an anchored cue past the end of its line is an error."""
        line = editor.line_by_number(4)
        cue = editor.attach_cue(
            line.id, 3, CueOffset.AFTER, CueType.LIGHTING_GO, "LX Q5"
        )
        line.elements = line.elements[:2]

        result = editor.validate()

        assert not result.is_valid
        assert any(cue.label in error for error in result.errors)

    def test_section_on_missing_line_is_an_error(self):
        """Test sections bound to line numbers that do not exist."""
        script = Script(
            name="Loaded",
            lines=[Line(line_number=1, content="a")],
            sections=[
                Section(
                    title="Ghost",
                    type=SectionType.SCENE,
                    start_line_number=2,
                    end_line_number=3,
                )
            ],
        )

        result = ScriptValidator().validate(script)

        assert not result.is_valid
        assert len(result.errors) == 2

    def test_empty_section_is_a_warning(self, editor):
        """Test sections emptied by removal are reported, not failed."""
        section = editor.open_section(5, SectionType.PRESET, "Blackout")
        editor.close_section(section.id, 5)
        editor.remove_line(editor.line_by_number(5).id)

        result = editor.validate()

        assert result.is_valid
        assert any("Blackout" in w for w in result.warnings)

    def test_alert_sound_without_alert(self, editor):
        """Test a sound left on a cue with alerts off is flagged."""
        line = editor.line_by_number(1)
        editor.attach_cue(
            line.id,
            0,
            CueOffset.BEFORE,
            CueType.SOUND_GO,
            "SQ",
            has_alert=False,
            alert_sound="bell",
        )

        result = editor.validate()

        assert any("alert sound" in w for w in result.warnings)

    def test_non_contiguous_positions(self):
        """Test gaps introduced after construction are errors."""
        line = Line(line_number=1, content="a b")
        line.elements.append(
            LineElement(position=5, content="c", type=ElementType.WORD)
        )
        script = Script(name="Gaps", lines=[line])

        result = ScriptValidator().validate(script)

        assert any("contiguous" in error for error in result.errors)

    def test_overlaps_listed(self, editor):
        """Test overlapping sections appear in the result."""
        act = editor.open_section(1, SectionType.ACT, "Act I")
        song = editor.open_section(3, SectionType.SONG_NUMBER, "Song")
        editor.close_section(song.id, 4)

        result = editor.validate()

        assert result.is_valid
        assert result.overlaps == [(act, song)]
        assert result.to_dict()["overlaps"] == [["Act I", "Song"]]
