"""Line-level operations: building, re-decomposing and marking lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4

from cuescript.anchoring import rebase_cues
from cuescript.config import get_logger
from cuescript.exceptions import OutOfRangeAnchorError
from cuescript.models import (
    CueRelocation,
    IdFactory,
    Line,
    LineElement,
    MarkColor,
    OrphanedCueAnchor,
)
from cuescript.text import classify, decompose, reconstruct

logger = get_logger(__name__)


@dataclass
class LineEdit:
    """Outcome of replacing a line's content."""

    line: Line
    previous_content: str
    relocated: list[CueRelocation] = field(default_factory=list)
    orphaned: list[OrphanedCueAnchor] = field(default_factory=list)

    @property
    def has_orphans(self) -> bool:
        """Whether any cue lost its anchor and needs attention."""
        return bool(self.orphaned)


def new_line(
    line_number: int,
    content: str,
    *,
    id_factory: IdFactory = uuid4,
    classify_punctuation: bool = False,
) -> Line:
    """Build a line with its elements already decomposed."""
    elements = decompose(
        content, id_factory=id_factory, classify_punctuation=classify_punctuation
    )
    return Line(
        id=id_factory(),
        line_number=line_number,
        content=content,
        elements=elements,
    )


def redecompose_line(
    line: Line,
    content: str | None = None,
    *,
    id_factory: IdFactory = uuid4,
    classify_punctuation: bool = False,
    window: int = 3,
) -> LineEdit:
    """Replace a line's elements from its content and rebase its cues.

    All previous elements are discarded, including their word marks.

    Args:
        line: Line to update in place
        content: New text; when omitted the current content is re-decomposed
        id_factory: Source of element ids
        classify_punctuation: Type punctuation-only pieces as ``punctuation``
        window: Rebase search distance for anchored cues

    Returns:
        LineEdit describing moved and orphaned cues
    """
    previous_content = line.content
    previous_elements = list(line.elements)

    if content is not None:
        line.content = content
    line.elements = decompose(
        line.content, id_factory=id_factory, classify_punctuation=classify_punctuation
    )
    relocated, orphaned = rebase_cues(line, previous_elements, window=window)

    logger.info(
        "Line re-decomposed",
        line_number=line.line_number,
        elements=len(line.elements),
        relocated=len(relocated),
        orphaned=len(orphaned),
    )
    return LineEdit(
        line=line,
        previous_content=previous_content,
        relocated=relocated,
        orphaned=orphaned,
    )


def _element_at(line: Line, position: int) -> LineElement:
    if not 0 <= position < len(line.elements):
        raise OutOfRangeAnchorError(position, len(line.elements))
    return line.elements[position]


def mark_line(line: Line, color: MarkColor | None = MarkColor.YELLOW) -> Line:
    """Highlight a whole line."""
    line.is_marked = True
    line.mark_color = color
    return line


def unmark_line(line: Line) -> Line:
    """Clear a line highlight."""
    line.is_marked = False
    line.mark_color = None
    return line


def mark_element(
    line: Line, position: int, color: MarkColor | None = MarkColor.YELLOW
) -> LineElement:
    """Highlight a single word.

    Raises:
        OutOfRangeAnchorError: If no element sits at ``position``
    """
    element = _element_at(line, position)
    element.is_marked = True
    element.mark_color = color
    return element


def unmark_element(line: Line, position: int) -> LineElement:
    """Clear a word highlight."""
    element = _element_at(line, position)
    element.is_marked = False
    element.mark_color = None
    return element


def set_element_content(
    line: Line, position: int, text: str, *, classify_punctuation: bool = False
) -> LineElement:
    """Edit the text of one element without touching the line's content.

    The line's content is left as the source of truth, so afterwards the
    elements may no longer reconstruct it; validation reports that as a
    mismatch. Use :func:`reconcile_content` to accept the element text.
    """
    element = _element_at(line, position)
    element.content = text
    element.type = classify(text, classify_punctuation)
    if reconstruct(line.elements) != line.content:
        logger.warning(
            "Element edit diverges from line content",
            line_number=line.line_number,
            position=position,
        )
    return element


def reconcile_content(line: Line) -> str:
    """Overwrite a line's content with the reconstruction of its elements.

    Only called on explicit request; nothing in the library reconciles
    content automatically.
    """
    line.content = reconstruct(line.elements)
    logger.info("Line content reconciled", line_number=line.line_number)
    return line.content
