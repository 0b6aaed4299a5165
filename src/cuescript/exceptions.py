"""Custom exception hierarchy for cuescript with helpful error messages."""

from __future__ import annotations

from typing import Any


class CueScriptError(Exception):
    """Base exception with helpful formatting for all cuescript errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(CueScriptError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class DocumentError(CueScriptError):
    """Script document read/write errors."""

    pass


class DuplicateLineNumberError(CueScriptError):
    """A line number is already used in the script."""

    def __init__(self, line_number: int, script_name: str | None = None) -> None:
        """Initialize duplicate line number error.

        Args:
            line_number: The line number that is already taken
            script_name: Name of the script, when known
        """
        self.line_number = line_number
        details: dict[str, Any] = {"line_number": line_number}
        if script_name:
            details["script"] = script_name
        super().__init__(
            message=f"Line number {line_number} is already used",
            hint="Pick an unused number or renumber the existing lines first",
            details=details,
        )


class InvalidLineNumberError(CueScriptError):
    """A line number is zero or negative."""

    def __init__(self, line_number: int) -> None:
        """Initialize invalid line number error.

        Args:
            line_number: The rejected line number
        """
        self.line_number = line_number
        super().__init__(
            message=f"Line number {line_number} is not positive",
            hint="Line numbers start at 1",
            details={"line_number": line_number},
        )


class InvalidRangeError(CueScriptError):
    """A section range would end before it starts."""

    def __init__(self, start: int, end: int) -> None:
        """Initialize invalid range error.

        Args:
            start: Inclusive start line number
            end: Requested inclusive end line number
        """
        self.start = start
        self.end = end
        super().__init__(
            message=f"Section cannot end at line {end} before it starts at {start}",
            hint=f"Use an end line number of {start} or later",
            details={"start_line_number": start, "end_line_number": end},
        )


class OutOfRangeAnchorError(CueScriptError):
    """A cue anchor references an element that does not exist."""

    def __init__(self, element_index: int, element_count: int) -> None:
        """Initialize out-of-range anchor error.

        Args:
            element_index: Requested element index
            element_count: Number of elements in the line
        """
        self.element_index = element_index
        self.element_count = element_count
        if element_count:
            hint = f"Valid element indexes are 0 to {element_count - 1}"
        else:
            hint = "The line has no elements to anchor to"
        super().__init__(
            message=f"Element index {element_index} is out of range",
            hint=hint,
            details={"element_index": element_index, "element_count": element_count},
        )


class LineNotFoundError(CueScriptError):
    """A line id or line number does not exist in the script."""

    pass


class CueNotFoundError(CueScriptError):
    """A cue id does not exist in the line or script."""

    pass


class SectionNotFoundError(CueScriptError):
    """A section id does not exist in the script."""

    pass


class RenumberError(CueScriptError):
    """A bulk renumbering mapping cannot be applied."""

    pass


class HapticNotSupportedError(CueScriptError):
    """A haptic config was assigned to a cue type that cannot trigger haptics."""

    pass


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "window": "rebase_search_window",
        "search_window": "rebase_search_window",
        "punctuation": "classify_punctuation",
        "level": "log_level",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
