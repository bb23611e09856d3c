"""Unit tests for birth date parsing.

The legacy-minutes mode reproduces the earlier mapper's ``yyyy-mm-dd``
pattern, in which ``mm`` meant minutes. These tests pin down where the two
modes agree and where they diverge.
"""

from datetime import date

import pytest

from fhir_r4_mapper.mapper.dates import DateParsingMode, parse_birth_date


class TestCalendarMode:
    """Test the default YYYY-MM-DD parsing."""

    def test_parses_month_of_year(self):
        """Test the middle field is the month."""
        assert parse_birth_date("1980-05-12") == date(1980, 5, 12)

    def test_is_default_mode(self):
        """Test calendar parsing is used when no mode is given."""
        assert parse_birth_date("2001-12-31") == parse_birth_date(
            "2001-12-31", DateParsingMode.CALENDAR
        )

    @pytest.mark.parametrize(
        "value",
        ["01/15/1980", "1980-13-01", "1980-02-30", "not-a-date", "1980/05/12"],
    )
    def test_rejects_invalid_dates(self, value):
        """Test malformed or impossible dates raise ValueError."""
        with pytest.raises(ValueError) as exc_info:
            parse_birth_date(value)

        assert "YYYY-MM-DD" in str(exc_info.value)

    def test_rejects_empty_value(self):
        """Test an empty birth date raises ValueError."""
        with pytest.raises(ValueError):
            parse_birth_date("")


class TestLegacyMinutesMode:
    """Test reproduction of the legacy minutes-for-month pattern."""

    def test_middle_field_is_minutes_not_month(self):
        """Test month is ignored: the date lands in January."""
        # Act
        parsed = parse_birth_date("1980-05-12", DateParsingMode.LEGACY_MINUTES)

        # Assert
        assert parsed == date(1980, 1, 12)
        assert parsed != parse_birth_date("1980-05-12", DateParsingMode.CALENDAR)

    def test_agrees_with_calendar_mode_for_january(self):
        """Test both modes agree when the month is 01."""
        assert parse_birth_date("1975-01-20", DateParsingMode.LEGACY_MINUTES) == date(1975, 1, 20)
        assert parse_birth_date("1975-01-20") == date(1975, 1, 20)

    def test_day_overflows_into_later_months(self):
        """Test lenient day handling: day 45 of January is February 14."""
        assert parse_birth_date("1980-00-45", DateParsingMode.LEGACY_MINUTES) == date(1980, 2, 14)

    def test_ignores_trailing_text(self):
        """Test text after the day is ignored."""
        assert parse_birth_date("1980-05-12T10:00", DateParsingMode.LEGACY_MINUTES) == date(1980, 1, 12)

    @pytest.mark.parametrize("value", ["", "01/15/1980", "abcd-ef-gh"])
    def test_rejects_unparseable_values(self, value):
        """Test values not matching digits-digits-digits raise ValueError."""
        with pytest.raises(ValueError) as exc_info:
            parse_birth_date(value, DateParsingMode.LEGACY_MINUTES)

        assert "yyyy-mm-dd" in str(exc_info.value)

    def test_rejects_out_of_range_year(self):
        """Test year zero raises ValueError."""
        with pytest.raises(ValueError):
            parse_birth_date("0000-00-01", DateParsingMode.LEGACY_MINUTES)


class TestDateParsingMode:
    """Test mode values used in configuration."""

    def test_mode_values(self):
        """Test the configuration spellings of each mode."""
        assert DateParsingMode("calendar") is DateParsingMode.CALENDAR
        assert DateParsingMode("legacy-minutes") is DateParsingMode.LEGACY_MINUTES
