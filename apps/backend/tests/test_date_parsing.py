"""
Tests for date recognition and parsing.
"""
import pytest
from datetime import date

from core.date_parsing import extract_date, parse_date


class TestExtractDate:
    def test_nth_occurrence(self):
        text = "Published on 12-01-2025, last date 15/02/2025"
        assert extract_date(text, 0) == "12-01-2025"
        assert extract_date(text, 1) == "15/02/2025"
        assert extract_date(text, 2) is None

    @pytest.mark.parametrize("text,expected", [
        ("Closing on 13 Feb - 2026 at 5 PM", "13 Feb - 2026"),
        ("dated January 12, 2025", "January 12, 2025"),
        ("dated 5 Mar 2025.", "5 Mar 2025"),
        ("uploaded 1.2.2025", "1.2.2025"),
    ])
    def test_shapes(self, text, expected):
        assert extract_date(text) == expected

    def test_no_date(self):
        assert extract_date("Recruitment of 120 posts, Advt No. 5") is None
        assert extract_date(None) is None
        assert extract_date("") is None


class TestParseDate:
    @pytest.mark.parametrize("value,expected", [
        ("12-01-2025", date(2025, 1, 12)),
        ("12/01/2025", date(2025, 1, 12)),
        ("5/3/2025", date(2025, 3, 5)),
        ("12.01.2025", date(2025, 1, 12)),
        ("12 Jan 2025", date(2025, 1, 12)),
        ("12 Jan. 2025", date(2025, 1, 12)),
        ("12 January 2025", date(2025, 1, 12)),
        ("January 12, 2025", date(2025, 1, 12)),
        ("Jan 12, 2025", date(2025, 1, 12)),
        ("2025-01-12", date(2025, 1, 12)),
        ("12-Jan-2025", date(2025, 1, 12)),
        ("13 Feb - 2026", date(2026, 2, 13)),
        ("1st March 2025", date(2025, 3, 1)),
        ("  22nd   Aug, 2025 ", date(2025, 8, 22)),
    ])
    def test_known_formats(self, value, expected):
        assert parse_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "soon", "31-02-2025", "2025"])
    def test_unparseable_returns_none(self, value):
        assert parse_date(value) is None
