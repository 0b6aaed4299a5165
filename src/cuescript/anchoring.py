"""Cue anchoring: attaching cues to elements and keeping them attached.

A cue is anchored to ``(element_index, offset)`` within its line. When a
line is re-decomposed the element indexes can shift, so anchored cues are
rebased by looking for the text they were anchored to near their old index.
Cues that cannot be rebased are marked orphaned and reported; they are never
deleted or moved to a guessed position.
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID, uuid4

from cuescript.config import get_logger
from cuescript.exceptions import (
    CueNotFoundError,
    HapticNotSupportedError,
    OutOfRangeAnchorError,
)
from cuescript.models import (
    Cue,
    CueHapticConfig,
    CueOffset,
    CuePosition,
    CueRelocation,
    CueStatus,
    CueType,
    IdFactory,
    Line,
    LineElement,
    OrphanedCueAnchor,
)
from cuescript.presentation import can_haptic

logger = get_logger(__name__)


def _check_index(line: Line, element_index: int) -> None:
    if not 0 <= element_index < len(line.elements):
        raise OutOfRangeAnchorError(element_index, len(line.elements))


def is_anchor_valid(line: Line, cue: Cue) -> bool:
    """Whether a cue currently points at an existing element of ``line``."""
    return (
        cue.line_id == line.id
        and cue.status is CueStatus.ANCHORED
        and 0 <= cue.position.element_index < len(line.elements)
    )


def attach_cue(
    line: Line,
    element_index: int,
    offset: CueOffset,
    cue_type: CueType,
    label: str,
    *,
    id_factory: IdFactory = uuid4,
    notes: str = "",
    has_alert: bool = False,
    alert_sound: str | None = None,
) -> Cue:
    """Create a cue anchored to one element of ``line``.

    Several cues may share the same anchor.

    Args:
        line: Line the cue belongs to
        element_index: Index of the element to anchor to
        offset: Fire before or after the element
        cue_type: Department and action
        label: Free text such as "LX Q5 GO"
        id_factory: Source of the cue id
        notes: Optional notes
        has_alert: Whether the alert collaborator should fire for this cue
        alert_sound: Optional sound asset name for the alert

    Returns:
        The new cue, already added to ``line.cues``

    Raises:
        OutOfRangeAnchorError: If ``element_index`` is not an index into
            the line's elements
    """
    _check_index(line, element_index)

    cue = Cue(
        id=id_factory(),
        line_id=line.id,
        position=CuePosition(element_index=element_index, offset=offset),
        type=cue_type,
        label=label,
        notes=notes,
    )
    configure_alert(cue, has_alert, alert_sound)
    line.cues.append(cue)

    logger.debug(
        "Cue attached",
        cue_id=str(cue.id),
        line_number=line.line_number,
        element_index=element_index,
        offset=offset.value,
        cue_type=cue_type.value,
    )
    return cue


def detach_cue(line: Line, cue_id: UUID) -> Cue:
    """Remove a cue from its line and return it.

    Raises:
        CueNotFoundError: If the cue is not on this line
    """
    cue = line.get_cue(cue_id)
    if cue is None:
        raise CueNotFoundError(
            message=f"Cue {cue_id} not found on line {line.line_number}",
            details={"cue_id": str(cue_id), "line_id": str(line.id)},
        )
    line.cues.remove(cue)
    logger.debug("Cue detached", cue_id=str(cue_id), line_number=line.line_number)
    return cue


def reanchor_cue(
    line: Line, cue_id: UUID, element_index: int, offset: CueOffset
) -> Cue:
    """Move a cue to a new anchor, restoring it if it was orphaned.

    Raises:
        CueNotFoundError: If the cue is not on this line
        OutOfRangeAnchorError: If the new index is out of range
    """
    cue = line.get_cue(cue_id)
    if cue is None:
        raise CueNotFoundError(
            message=f"Cue {cue_id} not found on line {line.line_number}",
            details={"cue_id": str(cue_id), "line_id": str(line.id)},
        )
    _check_index(line, element_index)

    cue.position = CuePosition(element_index=element_index, offset=offset)
    cue.status = CueStatus.ANCHORED
    logger.info(
        "Cue re-anchored",
        cue_id=str(cue_id),
        line_number=line.line_number,
        element_index=element_index,
    )
    return cue


def _search_order(old_index: int, window: int) -> list[int]:
    """Indexes to try, outward from ``old_index``: 0, -1, +1, -2, +2..."""
    order = [old_index]
    for distance in range(1, window + 1):
        order.extend((old_index - distance, old_index + distance))
    return order


def rebase_cues(
    line: Line,
    previous_elements: Sequence[LineElement],
    *,
    window: int = 3,
) -> tuple[list[CueRelocation], list[OrphanedCueAnchor]]:
    """Re-point anchored cues after ``line.elements`` has been replaced.

    Each anchored cue looks up the text of the element it was on in
    ``previous_elements`` and searches the new elements outward from its old
    index, up to ``window`` positions either way. The nearest exact match
    becomes its new anchor. Cues with no match, or whose old index was
    already out of range, are marked orphaned and left in place.

    Args:
        line: Line whose elements have just been replaced
        previous_elements: The elements the cues were anchored against
        window: Maximum search distance from the old index

    Returns:
        Tuple of (relocated cues, orphaned cues)
    """
    relocations: list[CueRelocation] = []
    orphans: list[OrphanedCueAnchor] = []
    new_count = len(line.elements)

    for cue in line.cues:
        if cue.status is CueStatus.ORPHANED:
            continue

        old_index = cue.position.element_index
        anchor_text: str | None = None
        new_index: int | None = None

        if old_index < len(previous_elements):
            anchor_text = previous_elements[old_index].content
            for candidate in _search_order(old_index, window):
                if (
                    0 <= candidate < new_count
                    and line.elements[candidate].content == anchor_text
                ):
                    new_index = candidate
                    break

        if new_index is None:
            cue.status = CueStatus.ORPHANED
            orphan = OrphanedCueAnchor(
                cue_id=cue.id,
                line_id=line.id,
                line_number=line.line_number,
                element_index=old_index,
                offset=cue.position.offset,
                anchor_text=anchor_text,
            )
            orphans.append(orphan)
            logger.warning(
                "Cue anchor lost after line edit",
                cue_id=str(cue.id),
                label=cue.label,
                line_number=line.line_number,
                element_index=old_index,
                anchor_text=anchor_text,
            )
        elif new_index != old_index:
            cue.position = CuePosition(
                element_index=new_index, offset=cue.position.offset
            )
            relocations.append(
                CueRelocation(cue_id=cue.id, old_index=old_index, new_index=new_index)
            )

    return relocations, orphans


def configure_alert(cue: Cue, enabled: bool, sound: str | None = None) -> Cue:
    """Set whether the alert collaborator fires for ``cue``.

    The sound is stored even while the alert is off; validation warns about
    that combination.
    """
    cue.has_alert = enabled
    cue.alert_sound = sound
    return cue


def assign_haptic(cue: Cue, config: CueHapticConfig | None) -> Cue:
    """Attach or clear the haptic target of a cue.

    Raises:
        HapticNotSupportedError: If the cue type cannot trigger haptics
    """
    if config is not None and not can_haptic(cue.type):
        raise HapticNotSupportedError(
            message=f"Cue type '{cue.type.value}' cannot trigger haptic alerts",
            hint="Only set warning, set standby and set go cues drive haptics",
            details={"cue_id": str(cue.id), "cue_type": cue.type.value},
        )
    cue.haptic = config
    return cue
