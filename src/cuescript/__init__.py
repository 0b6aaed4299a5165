"""cuescript: word-anchored cue markup for performance scripts.

A script is split into numbered lines, each line into words and spaces, and
stage-management cues are anchored to individual words. Sections group
ranges of lines into acts, scenes, presets and musical numbers.
"""

__version__ = "0.1.0"

from .config import CueScriptSettings, get_logger, get_settings
from .editor import LineRemoval, ScriptEditor
from .exceptions import (
    CueNotFoundError,
    CueScriptError,
    DuplicateLineNumberError,
    InvalidLineNumberError,
    InvalidRangeError,
    LineNotFoundError,
    OutOfRangeAnchorError,
    RenumberError,
    SectionNotFoundError,
)
from .lines import LineEdit
from .models import (
    Cue,
    CueOffset,
    CueStatus,
    CueType,
    Line,
    LineElement,
    Script,
    Section,
    SectionStatus,
    SectionType,
)
from .text import decompose, reconstruct
from .validation import ScriptValidator, ValidationResult

__all__ = [
    "Cue",
    "CueNotFoundError",
    "CueOffset",
    "CueScriptError",
    "CueScriptSettings",
    "CueStatus",
    "CueType",
    "DuplicateLineNumberError",
    "InvalidLineNumberError",
    "InvalidRangeError",
    "Line",
    "LineEdit",
    "LineElement",
    "LineNotFoundError",
    "LineRemoval",
    "OutOfRangeAnchorError",
    "RenumberError",
    "Script",
    "ScriptEditor",
    "ScriptValidator",
    "Section",
    "SectionNotFoundError",
    "SectionStatus",
    "SectionType",
    "ValidationResult",
    "__version__",
    "decompose",
    "get_logger",
    "get_settings",
    "reconstruct",
]
