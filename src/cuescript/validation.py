"""Whole-script consistency checks."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from cuescript.config import get_logger
from cuescript.models import (
    CueStatus,
    OrphanedCueAnchor,
    ReconstructionMismatch,
    Script,
    Section,
    SectionStatus,
)
from cuescript.sections import find_overlaps
from cuescript.text import reconstruct

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of script validation with detailed feedback."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    orphaned_cues: list[OrphanedCueAnchor] = field(default_factory=list)
    mismatches: list[ReconstructionMismatch] = field(default_factory=list)
    overlaps: list[tuple[Section, Section]] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """Plain-data view for JSON output."""
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "orphaned_cues": [
                {
                    "cue_id": str(orphan.cue_id),
                    "line_number": orphan.line_number,
                    "element_index": orphan.element_index,
                    "anchor_text": orphan.anchor_text,
                }
                for orphan in self.orphaned_cues
            ],
            "mismatches": [
                {
                    "line_number": mismatch.line_number,
                    "content": mismatch.content,
                    "reconstructed": mismatch.reconstructed,
                }
                for mismatch in self.mismatches
            ],
            "overlaps": [
                [first.title, second.title] for first, second in self.overlaps
            ],
        }


class ScriptValidator:
    """Checks a script against the invariants its editor maintains.

    Scripts loaded from storage may have been produced by another tool, so
    nothing here assumes the editor built them.
    """

    def validate(self, script: Script) -> ValidationResult:
        """Validate a whole script.

        Errors are broken invariants. Warnings are states that need a person
        to decide what to do, such as orphaned cues or edited words.
        """
        errors: list[str] = []
        warnings: list[str] = []
        orphaned: list[OrphanedCueAnchor] = []
        mismatches: list[ReconstructionMismatch] = []

        counts = Counter(line.line_number for line in script.lines)
        for number, count in sorted(counts.items()):
            if count > 1:
                errors.append(f"Line number {number} is used {count} times")

        for line in script.lines:
            positions = [element.position for element in line.elements]
            if sorted(positions) != list(range(len(positions))):
                errors.append(
                    f"Line {line.line_number}: element positions are not contiguous"
                )

            reconstructed = reconstruct(line.elements)
            if reconstructed != line.content:
                mismatches.append(
                    ReconstructionMismatch(
                        line_id=line.id,
                        line_number=line.line_number,
                        content=line.content,
                        reconstructed=reconstructed,
                    )
                )
                warnings.append(
                    f"Line {line.line_number}: elements read {reconstructed!r} "
                    f"but content is {line.content!r}"
                )

            for cue in line.cues:
                if cue.line_id != line.id:
                    errors.append(
                        f"Cue '{cue.label}' on line {line.line_number} "
                        f"references another line"
                    )
                if cue.status is CueStatus.ORPHANED:
                    orphaned.append(
                        OrphanedCueAnchor(
                            cue_id=cue.id,
                            line_id=line.id,
                            line_number=line.line_number,
                            element_index=cue.position.element_index,
                            offset=cue.position.offset,
                            anchor_text=None,
                        )
                    )
                    warnings.append(
                        f"Cue '{cue.label}' on line {line.line_number} is orphaned"
                    )
                elif cue.position.element_index >= len(line.elements):
                    errors.append(
                        f"Cue '{cue.label}' on line {line.line_number} points at "
                        f"element {cue.position.element_index} of "
                        f"{len(line.elements)}"
                    )
                if cue.alert_sound and not cue.has_alert:
                    warnings.append(
                        f"Cue '{cue.label}' has an alert sound but alerts are off"
                    )

        errors.extend(self._check_sections(script, warnings))

        result = ValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            orphaned_cues=orphaned,
            mismatches=mismatches,
            overlaps=find_overlaps(script),
        )
        logger.debug(
            "Script validated",
            script=script.name,
            errors=len(errors),
            warnings=len(warnings),
        )
        return result

    def _check_sections(self, script: Script, warnings: list[str]) -> list[str]:
        errors = []
        numbers = set(script.line_numbers())
        for section in script.sections:
            if section.status is SectionStatus.EMPTY:
                warnings.append(f"Section '{section.title}' no longer covers any line")
                continue
            end = section.end_line_number
            if end is not None and end < section.start_line_number:
                errors.append(f"Section '{section.title}' ends before it starts")
            if section.start_line_number not in numbers:
                errors.append(
                    f"Section '{section.title}' starts at missing line "
                    f"{section.start_line_number}"
                )
            if end is not None and end not in numbers:
                errors.append(
                    f"Section '{section.title}' ends at missing line {end}"
                )
        return errors
