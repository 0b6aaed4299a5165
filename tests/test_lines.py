"""Tests for line-level operations."""

from uuid import UUID

import pytest

from cuescript.exceptions import OutOfRangeAnchorError
from cuescript.lines import (
    mark_element,
    mark_line,
    new_line,
    reconcile_content,
    redecompose_line,
    set_element_content,
    unmark_element,
    unmark_line,
)
from cuescript.models import ElementType, MarkColor
from cuescript.text import reconstruct


class TestNewLine:
    """Test the line builder."""

    def test_builder_returns_materialized_line(self, sequential_ids):
        """Test elements exist and ids come from the factory."""
        line = new_line(3, "Thunder and lightning", id_factory=sequential_ids)

        assert line.line_number == 3
        assert line.element_count == 3
        # Elements are built before the line itself
        assert [e.id for e in line.elements] == [UUID(int=n) for n in (1, 2, 3)]
        assert line.id == UUID(int=4)

    def test_builder_classifies_punctuation_when_asked(self):
        """Test the punctuation option reaches decomposition."""
        line = new_line(1, "Stop !", classify_punctuation=True)

        assert line.elements[1].type is ElementType.PUNCTUATION


class TestRedecomposeLine:
    """Test re-decomposition."""

    def test_new_content_replaces_elements(self):
        """Test new text yields new elements and keeps the old text on record."""
        line = new_line(1, "old words here")
        old_ids = {e.id for e in line.elements}

        edit = redecompose_line(line, "fresh text")

        assert edit.previous_content == "old words here"
        assert line.content == "fresh text"
        assert reconstruct(line.elements) == "fresh text"
        assert old_ids.isdisjoint(e.id for e in line.elements)

    def test_word_marks_are_discarded(self):
        """Test element marks do not survive re-decomposition."""
        line = new_line(1, "mark me")
        mark_element(line, 1)

        redecompose_line(line)

        assert not any(e.is_marked for e in line.elements)


class TestMarking:
    """Test line and word highlighting."""

    def test_mark_and_unmark_line(self):
        """Test whole-line marks."""
        line = new_line(1, "Hark")

        mark_line(line, MarkColor.PINK)
        assert line.is_marked
        assert line.mark_color is MarkColor.PINK

        unmark_line(line)
        assert not line.is_marked
        assert line.mark_color is None

    def test_mark_element_defaults_to_yellow(self):
        """Test single-word marks."""
        line = new_line(1, "Hark who goes")

        element = mark_element(line, 1)

        assert element.content == "who"
        assert element.mark_color is MarkColor.YELLOW
        unmark_element(line, 1)
        assert not element.is_marked

    def test_mark_missing_element(self):
        """Test marking past the end raises."""
        line = new_line(1, "Hark")
        with pytest.raises(OutOfRangeAnchorError):
            mark_element(line, 1)


class TestElementEdits:
    """Test the element-only edit path."""

    def test_set_element_content_leaves_line_content(self):
        """Test editing one element does not rewrite the line text."""
        line = new_line(1, "To be or not")

        set_element_content(line, 3, "NOT")

        assert line.content == "To be or not"
        assert reconstruct(line.elements) == "To be or NOT"

    def test_reconcile_content(self):
        """Test reconciling accepts the element text as the line content."""
        line = new_line(1, "To be or not")
        set_element_content(line, 3, "NOT")

        assert reconcile_content(line) == "To be or NOT"
        assert line.content == "To be or NOT"

    def test_set_element_content_to_empty_is_space(self):
        """Test clearing a word retypes it as a space."""
        line = new_line(1, "a b")

        element = set_element_content(line, 0, "")

        assert element.type is ElementType.SPACE
