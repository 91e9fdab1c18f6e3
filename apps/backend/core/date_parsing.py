"""
Date recognition for notice listings.

Government listing pages print dates in a handful of Indian conventions
(12-01-2025, 12/1/2025, 12 Jan 2025, 13 Feb - 2026, January 12, 2025).
`extract_date` finds date-shaped substrings in free text and `parse_date`
turns one of them into a `datetime.date`.
"""
import re
import logging
from datetime import date, datetime
from typing import Optional

logger = logging.getLogger(__name__)

_MONTHS = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*"

# numeric | "12 Jan 2025" / "13 Feb - 2026" | "Jan 12, 2025"
DATE_REGEX = re.compile(
    r"\b\d{1,2}[-./]\d{1,2}[-./]\d{4}\b"
    rf"|\b\d{{1,2}}\s+{_MONTHS}[,.\-]?\s*(?:-\s*)?\d{{4}}\b"
    rf"|\b{_MONTHS}\s+\d{{1,2}}[,.\-]?\s*(?:-\s*)?\d{{4}}\b",
    re.IGNORECASE,
)

# Tried in this order; the first format that parses wins. strptime accepts
# one- or two-digit days and months, so "d/M/yyyy" and "dd/MM/yyyy" share
# an entry.
DATE_FORMATS = [
    "%d-%m-%Y",
    "%d/%m/%Y",
    "%d.%m.%Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%Y-%m-%d",
    "%d %b, %Y",
    "%d-%b-%Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %B, %Y",
    "%d-%B-%Y",
    "%b %d %Y",
    "%B %d %Y",
]

_ORDINAL_SUFFIX = re.compile(r"(?<=\d)(st|nd|rd|th)\b", re.IGNORECASE)
# "Feb - 2026" but not "12-Feb-2026"
_MONTH_YEAR_GAP = re.compile(r"([a-z]+)[,.]?(?:\s+-\s*|\s*-\s+)(\d{4})", re.IGNORECASE)
_ABBREVIATION_DOT = re.compile(r"(?<=[A-Za-z])\.")


def extract_date(text: Optional[str], index: int = 0) -> Optional[str]:
    """
    Return the Nth date-shaped substring of `text`.

    Args:
        text: Free text (row text, cell text, link text)
        index: 0 for the first occurrence, 1 for the second, ...

    Returns:
        The matched substring, or None when there are fewer than index+1 dates
    """
    if not text:
        return None
    for position, match in enumerate(DATE_REGEX.finditer(text)):
        if position == index:
            return match.group(0)
    return None


def _clean_date_text(value: str) -> str:
    cleaned = re.sub(r"\s+", " ", value.strip())
    cleaned = _ORDINAL_SUFFIX.sub("", cleaned)
    cleaned = _MONTH_YEAR_GAP.sub(r"\1 \2", cleaned)
    cleaned = _ABBREVIATION_DOT.sub("", cleaned)
    return cleaned.strip()


def parse_date(value: Optional[str]) -> Optional[date]:
    """
    Parse a date string in any of the known listing formats.

    Ordinal suffixes ("1st") are dropped and "Feb - 2026" gaps collapsed
    before matching. Never raises: an unparseable value yields None.
    """
    if not value or not value.strip():
        return None

    cleaned = _clean_date_text(value)
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue

    logger.debug(f"[dates] Could not parse date: '{value}'")
    return None
