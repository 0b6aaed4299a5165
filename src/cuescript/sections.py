"""Section range management.

Sections reference line numbers by value. An open section has no stored
end; its effective end is the script's highest line number, resolved each
time it is asked for. Sections may overlap freely, which is how a song can
sit inside a scene.
"""

from __future__ import annotations

import bisect
from collections.abc import Mapping
from itertools import combinations
from uuid import uuid4

from cuescript.config import get_logger
from cuescript.exceptions import InvalidRangeError, LineNotFoundError
from cuescript.models import (
    IdFactory,
    Script,
    Section,
    SectionRangeChange,
    SectionStatus,
    SectionType,
)

logger = get_logger(__name__)


def open_section(
    script: Script,
    start_line: int,
    section_type: SectionType,
    title: str,
    *,
    id_factory: IdFactory = uuid4,
    notes: str = "",
) -> Section:
    """Start a new open-ended section at an existing line.

    Raises:
        LineNotFoundError: If no line has number ``start_line``
    """
    if script.line_by_number(start_line) is None:
        raise LineNotFoundError(
            message=f"Cannot open a section at missing line {start_line}",
            hint="Sections must start on a line that exists in the script",
            details={"script": script.name, "line_number": start_line},
        )

    section = Section(
        id=id_factory(),
        title=title,
        type=section_type,
        start_line_number=start_line,
        notes=notes,
    )
    script.sections.append(section)
    logger.info(
        "Section opened",
        section_id=str(section.id),
        title=title,
        section_type=section_type.value,
        start_line=start_line,
    )
    return section


def close_section(section: Section, end_line: int) -> Section:
    """Set the inclusive end of a section.

    Raises:
        InvalidRangeError: If ``end_line`` is before the section start; the
            section is left unchanged
    """
    if end_line < section.start_line_number:
        raise InvalidRangeError(section.start_line_number, end_line)
    section.end_line_number = end_line
    logger.info("Section closed", section_id=str(section.id), end_line=end_line)
    return section


def reopen_section(section: Section) -> Section:
    """Drop a section's end so it runs to the end of the script again."""
    section.end_line_number = None
    return section


def effective_end(section: Section, script: Script) -> int:
    """Inclusive end of a section against the script's current lines."""
    if section.end_line_number is not None:
        return section.end_line_number
    highest = script.max_line_number()
    return section.start_line_number if highest is None else highest


def covers(section: Section, script: Script, line_number: int) -> bool:
    """Whether an active section's range contains ``line_number``."""
    if section.status is SectionStatus.EMPTY:
        return False
    return section.start_line_number <= line_number <= effective_end(section, script)


def sections_covering(script: Script, line_number: int) -> list[Section]:
    """All active sections, open or closed, whose range contains a line number."""
    return [
        section
        for section in script.sections
        if covers(section, script, line_number)
    ]


def _numbers_in_range(
    numbers: list[int], start: int, end: int | None
) -> list[int]:
    lo = bisect.bisect_left(numbers, start)
    hi = len(numbers) if end is None else bisect.bisect_right(numbers, end)
    return numbers[lo:hi]


def recompute_after_removal(
    script: Script, removed_number: int
) -> list[SectionRangeChange]:
    """Pull section bounds off a line number that no longer exists.

    ``script.lines`` must already exclude the removed line. A start on the
    removed number moves to the next remaining line inside the range, an end
    moves to the previous one. A section with no remaining line in its range
    is marked empty and kept.

    Returns:
        One change record per section whose range or status changed
    """
    remaining = script.line_numbers()
    changes: list[SectionRangeChange] = []

    for section in script.sections:
        if section.status is SectionStatus.EMPTY:
            continue
        old_start = section.start_line_number
        old_end = section.end_line_number
        if removed_number not in (old_start, old_end):
            continue

        in_range = _numbers_in_range(remaining, old_start, old_end)

        if not in_range:
            section.status = SectionStatus.EMPTY
            logger.warning(
                "Section no longer covers any line",
                section_id=str(section.id),
                title=section.title,
                removed_line=removed_number,
            )
        else:
            section.start_line_number = in_range[0]
            if old_end is not None:
                section.end_line_number = in_range[-1]

        changes.append(
            SectionRangeChange(
                section_id=section.id,
                old_start=old_start,
                old_end=old_end,
                new_start=section.start_line_number,
                new_end=section.end_line_number,
                status=section.status,
            )
        )

    return changes


def reactivate_sections(script: Script) -> list[Section]:
    """Bring empty sections back once a line exists inside their range again.

    Bounds snap onto the first and last lines inside the stale range, the
    same way they move when a line is removed.

    Returns:
        The sections that became active
    """
    numbers = script.line_numbers()
    revived: list[Section] = []

    for section in script.sections:
        if section.status is not SectionStatus.EMPTY:
            continue
        in_range = _numbers_in_range(
            numbers, section.start_line_number, section.end_line_number
        )
        if not in_range:
            continue

        section.start_line_number = in_range[0]
        if section.end_line_number is not None:
            section.end_line_number = in_range[-1]
        section.status = SectionStatus.ACTIVE
        revived.append(section)
        logger.info(
            "Section covers lines again",
            section_id=str(section.id),
            title=section.title,
            start_line=section.start_line_number,
        )

    return revived


def remap_sections(sections: list[Section], mapping: Mapping[int, int]) -> None:
    """Rewrite section bounds through an old→new line number mapping.

    Empty sections keep their stale bounds.

    Raises:
        InvalidRangeError: If a remapped section would end before it starts
    """
    for section in sections:
        if section.status is SectionStatus.EMPTY:
            continue
        start = mapping.get(section.start_line_number, section.start_line_number)
        end = section.end_line_number
        if end is not None:
            end = mapping.get(end, end)
            if end < start:
                raise InvalidRangeError(start, end)
        section.start_line_number = start
        section.end_line_number = end


def find_overlaps(script: Script) -> list[tuple[Section, Section]]:
    """Pairs of active sections whose ranges share at least one line number."""
    active = [s for s in script.sections if s.status is SectionStatus.ACTIVE]
    overlaps = []
    for first, second in combinations(active, 2):
        if first.start_line_number <= effective_end(
            second, script
        ) and second.start_line_number <= effective_end(first, script):
            overlaps.append((first, second))
    return overlaps
