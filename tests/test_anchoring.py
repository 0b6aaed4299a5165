"""Tests for cue anchoring and rebasing."""

from uuid import uuid4

import pytest

from cuescript.anchoring import (
    assign_haptic,
    attach_cue,
    configure_alert,
    detach_cue,
    is_anchor_valid,
    reanchor_cue,
    rebase_cues,
)
from cuescript.exceptions import (
    CueNotFoundError,
    HapticNotSupportedError,
    OutOfRangeAnchorError,
)
from cuescript.lines import new_line, redecompose_line
from cuescript.models import (
    CueHapticConfig,
    CueOffset,
    CueStatus,
    CueType,
    StageLocation,
)


@pytest.fixture
def line():
    """Line 'LX Q5 standby GO'."""
    return new_line(7, "LX Q5 standby GO")


class TestAttachCue:
    """Test attaching cues."""

    def test_attach_within_range(self, line):
        """Test a cue anchors to an existing element."""
        cue = attach_cue(line, 2, CueOffset.AFTER, CueType.LIGHTING_STANDBY, "LX Q5")

        assert cue in line.cues
        assert cue.line_id == line.id
        assert cue.position.element_index == 2
        assert cue.position.offset is CueOffset.AFTER
        assert cue.status is CueStatus.ANCHORED
        assert is_anchor_valid(line, cue)

    def test_attach_past_end_rejected(self, line):
        """Test an index equal to the element count is out of range."""
        with pytest.raises(OutOfRangeAnchorError) as exc_info:
            attach_cue(line, 4, CueOffset.AFTER, CueType.LIGHTING_STANDBY, "LX Q5")

        assert exc_info.value.element_index == 4
        assert exc_info.value.element_count == 4
        assert "0 to 3" in exc_info.value.hint
        assert line.cues == []

    def test_attach_negative_rejected(self, line):
        """Test negative indexes are out of range."""
        with pytest.raises(OutOfRangeAnchorError):
            attach_cue(line, -1, CueOffset.BEFORE, CueType.SOUND_GO, "SQ 1")

    def test_several_cues_share_an_anchor(self, line):
        """Test more than one cue may sit on the same word."""
        first = attach_cue(line, 3, CueOffset.AFTER, CueType.LIGHTING_GO, "LX Q5")
        second = attach_cue(line, 3, CueOffset.AFTER, CueType.SOUND_GO, "SQ 2")

        assert line.cues_at(3) == [first, second]

    def test_attach_with_alert(self, line):
        """Test alert options are stored on the cue."""
        cue = attach_cue(
            line,
            0,
            CueOffset.BEFORE,
            CueType.FLY_GO,
            "Fly 3",
            has_alert=True,
            alert_sound="chime",
        )

        assert cue.has_alert
        assert cue.alert_sound == "chime"


class TestDetachAndReanchor:
    """Test removing and moving cues."""

    def test_detach(self, line):
        """Test detaching removes the cue from its line."""
        cue = attach_cue(line, 0, CueOffset.BEFORE, CueType.SOUND_GO, "SQ 1")

        assert detach_cue(line, cue.id) is cue
        assert line.cues == []

    def test_detach_unknown(self, line):
        """Test detaching an unknown cue raises."""
        with pytest.raises(CueNotFoundError):
            detach_cue(line, uuid4())

    def test_reanchor_restores_orphan(self, line):
        """Test re-anchoring an orphan marks it anchored again."""
        cue = attach_cue(line, 3, CueOffset.AFTER, CueType.LIGHTING_GO, "LX Q5")
        cue.status = CueStatus.ORPHANED

        reanchor_cue(line, cue.id, 1, CueOffset.BEFORE)

        assert cue.status is CueStatus.ANCHORED
        assert cue.position.element_index == 1
        assert cue.position.offset is CueOffset.BEFORE

    def test_reanchor_out_of_range_leaves_cue(self, line):
        """Test a bad re-anchor does not touch the cue."""
        cue = attach_cue(line, 3, CueOffset.AFTER, CueType.LIGHTING_GO, "LX Q5")

        with pytest.raises(OutOfRangeAnchorError):
            reanchor_cue(line, cue.id, 9, CueOffset.AFTER)

        assert cue.position.element_index == 3


class TestRebaseCues:
    """Test rebasing cues after re-decomposition."""

    def test_unchanged_text_keeps_anchors(self, line):
        """Test re-decomposing the same text leaves cues where they were."""
        cue = attach_cue(line, 2, CueOffset.AFTER, CueType.LIGHTING_STANDBY, "LX Q5")

        edit = redecompose_line(line)

        assert edit.relocated == []
        assert edit.orphaned == []
        assert cue.position.element_index == 2

    def test_cue_follows_word_when_text_inserted(self, line):
        """Test a cue moves with its word when words are inserted before it."""
        cue = attach_cue(line, 3, CueOffset.AFTER, CueType.LIGHTING_GO, "LX Q5")

        edit = redecompose_line(line, "LX Q5 please standby GO")

        assert cue.position.element_index == 4
        assert cue.position.offset is CueOffset.AFTER
        assert [(r.old_index, r.new_index) for r in edit.relocated] == [(3, 4)]

    def test_nearest_match_wins(self, line):
        """Test the closest matching word is chosen, searching left first."""
        cue = attach_cue(line, 2, CueOffset.AFTER, CueType.SOUND_GO, "SQ 4")

        redecompose_line(line, "standby LX standby GO")

        # Index 2 itself still holds "standby"
        assert cue.position.element_index == 2

        redecompose_line(line, "standby LX GO now")

        # Distance one: index 1 is checked before index 3, distance two finds 0
        assert cue.position.element_index == 0

    def test_shrinking_line_orphans_cue(self):
        """Test a cue on a deleted word is orphaned, kept and reported."""
        line = new_line(12, "Fly in the set GO")
        cue = attach_cue(line, 4, CueOffset.AFTER, CueType.FLY_GO, "Fly 2")

        edit = redecompose_line(line, "Fly out now")

        assert cue in line.cues
        assert cue.status is CueStatus.ORPHANED
        assert cue.position.element_index == 4
        assert not is_anchor_valid(line, cue)
        assert edit.has_orphans
        orphan = edit.orphaned[0]
        assert orphan.cue_id == cue.id
        assert orphan.line_number == 12
        assert orphan.element_index == 4
        assert orphan.anchor_text == "GO"

    def test_match_outside_window_orphans(self):
        """Test matches further than the window are not used."""
        line = new_line(1, "GO a b c d e")
        cue = attach_cue(line, 0, CueOffset.BEFORE, CueType.SET_GO, "Set 1")
        previous = list(line.elements)
        line.elements = new_line(1, "a b c d e GO").elements

        relocations, orphans = rebase_cues(line, previous, window=3)

        assert relocations == []
        assert [o.cue_id for o in orphans] == [cue.id]

    def test_wider_window_finds_match(self):
        """Test a wider window reaches further."""
        line = new_line(1, "GO a b c d e")
        cue = attach_cue(line, 0, CueOffset.BEFORE, CueType.SET_GO, "Set 1")
        previous = list(line.elements)
        line.elements = new_line(1, "a b c d e GO").elements

        relocations, orphans = rebase_cues(line, previous, window=5)

        assert orphans == []
        assert cue.position.element_index == 5
        assert relocations[0].new_index == 5

    def test_orphans_stay_orphaned(self, line):
        """Test already-orphaned cues are skipped on later edits."""
        cue = attach_cue(line, 3, CueOffset.AFTER, CueType.LIGHTING_GO, "LX Q5")
        cue.status = CueStatus.ORPHANED

        edit = redecompose_line(line, "LX Q5 standby GO")

        assert edit.orphaned == []
        assert cue.status is CueStatus.ORPHANED


class TestAlertsAndHaptics:
    """Test alert and haptic configuration."""

    def test_disabled_alert_keeps_sound(self, line):
        """Test turning the alert off keeps the sound reference."""
        cue = attach_cue(line, 0, CueOffset.BEFORE, CueType.SOUND_GO, "SQ 1")
        configure_alert(cue, True, "bell")
        configure_alert(cue, False, "bell")

        assert not cue.has_alert
        assert cue.alert_sound == "bell"

    def test_sound_without_alert_on_attach(self, line):
        """Test a sound given with the alert off is stored on the new cue."""
        cue = attach_cue(
            line,
            0,
            CueOffset.BEFORE,
            CueType.SOUND_GO,
            "SQ 1",
            has_alert=False,
            alert_sound="chime.wav",
        )

        assert not cue.has_alert
        assert cue.alert_sound == "chime.wav"

    def test_haptic_on_set_cue(self, line):
        """Test set cues accept a haptic target."""
        cue = attach_cue(line, 0, CueOffset.BEFORE, CueType.SET_STANDBY, "Set 4")
        config = CueHapticConfig(location=StageLocation.LEFT_WING, crew_id=3)

        assign_haptic(cue, config)

        assert cue.haptic == config
        assign_haptic(cue, None)
        assert cue.haptic is None

    def test_haptic_on_lighting_cue_rejected(self, line):
        """Test non-set cues cannot drive haptics."""
        cue = attach_cue(line, 0, CueOffset.BEFORE, CueType.LIGHTING_GO, "LX 1")
        config = CueHapticConfig(location=StageLocation.PIT, crew_id=1)

        with pytest.raises(HapticNotSupportedError):
            assign_haptic(cue, config)
        assert cue.haptic is None
