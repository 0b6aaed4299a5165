"""Tests for the cuescript exception hierarchy."""

import pytest

from cuescript.exceptions import (
    ConfigurationError,
    CueScriptError,
    DocumentError,
    DuplicateLineNumberError,
    InvalidRangeError,
    OutOfRangeAnchorError,
    RenumberError,
    check_config_keys,
)


class TestCueScriptError:
    """Test the base error formatting."""

    def test_message_only(self):
        """Test a bare message."""
        error = CueScriptError("Something broke")

        assert str(error) == "Error: Something broke"
        assert error.hint is None
        assert error.details is None

    def test_hint_and_details(self):
        """Test hint and details are included in the text."""
        error = CueScriptError(
            "Something broke", hint="Try again", details={"line_number": 4}
        )

        text = str(error)
        assert "Hint: Try again" in text
        assert "line_number: 4" in text

    @pytest.mark.parametrize(
        "error_type", [ConfigurationError, DocumentError, RenumberError]
    )
    def test_subclasses_share_base(self, error_type):
        """Test every error can be caught as CueScriptError."""
        with pytest.raises(CueScriptError):
            raise error_type("failed")


class TestStructuredErrors:
    """Test errors that build their own messages."""

    def test_duplicate_line_number(self):
        """Test duplicate line errors carry the number and script."""
        error = DuplicateLineNumberError(12, "Hamlet")

        assert error.line_number == 12
        assert "12" in error.message
        assert error.details == {"line_number": 12, "script": "Hamlet"}

    def test_invalid_range(self):
        """Test range errors suggest a valid end."""
        error = InvalidRangeError(10, 4)

        assert (error.start, error.end) == (10, 4)
        assert "10 or later" in error.hint

    def test_out_of_range_on_empty_line(self):
        """Test the hint for a line with nothing to anchor to."""
        error = OutOfRangeAnchorError(0, 0)

        assert error.hint == "The line has no elements to anchor to"


class TestCheckConfigKeys:
    """Test configuration key checks."""

    def test_valid_keys_pass(self):
        """Test correct keys raise nothing."""
        check_config_keys({"rebase_search_window": 2, "log_level": "INFO"})

    @pytest.mark.parametrize(
        ("wrong", "correct"),
        [
            ("window", "rebase_search_window"),
            ("punctuation", "classify_punctuation"),
            ("level", "log_level"),
        ],
    )
    def test_common_mistakes(self, wrong, correct):
        """Test misspelt keys point at the right name."""
        with pytest.raises(ConfigurationError) as exc_info:
            check_config_keys({wrong: 1})

        assert correct in exc_info.value.hint
