"""
Unit tests for one-time code input validation.

Tests verify:
- normalize_code keeps only ASCII digits, at most 6
- is_complete is true for exactly 6 characters
"""

import pytest

from src.domain.code_input import CODE_LENGTH, is_complete, normalize_code


class TestNormalizeCode:
    """Tests for normalize_code."""

    def test_digits_pass_through(self) -> None:
        """A plain 6-digit code is unchanged."""
        assert normalize_code("123456") == "123456"

    def test_strips_non_digits(self) -> None:
        """Letters, spaces and punctuation are removed."""
        assert normalize_code("12-34 5a6") == "123456"

    def test_truncates_to_six(self) -> None:
        """Input longer than 6 digits is truncated."""
        assert normalize_code("1234567890") == "123456"

    def test_strips_then_truncates(self) -> None:
        """Truncation counts digits only."""
        assert normalize_code("a1b2c3d4e5f6g7") == "123456"

    def test_empty_input(self) -> None:
        """Empty input normalizes to empty string."""
        assert normalize_code("") == ""

    def test_no_digits(self) -> None:
        """Input without digits normalizes to empty string."""
        assert normalize_code("abc!@#") == ""

    def test_leading_zeros_preserved(self) -> None:
        """Codes are strings; leading zeros survive."""
        assert normalize_code("000123") == "000123"

    def test_non_ascii_digits_removed(self) -> None:
        """Unicode digits outside ASCII are not accepted."""
        assert normalize_code("١٢٣123") == "123"

    @pytest.mark.parametrize(
        "raw",
        ["", "x", "12 34", "9" * 40, "++--12ab34cd56ef78", "\t\n0 1"],
    )
    def test_output_is_short_and_digit_only(self, raw: str) -> None:
        """Output contains only digits and is at most 6 long."""
        result = normalize_code(raw)
        assert len(result) <= CODE_LENGTH
        assert all(ch in "0123456789" for ch in result)


class TestIsComplete:
    """Tests for is_complete."""

    def test_six_digits_complete(self) -> None:
        """Exactly 6 characters is complete."""
        assert is_complete("123456") is True

    @pytest.mark.parametrize("code", ["", "1", "12345", "1234567"])
    def test_other_lengths_incomplete(self, code: str) -> None:
        """Any other length is incomplete."""
        assert is_complete(code) is False
