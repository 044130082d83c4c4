"""
Field parsers: raw export cells → ratings, dates, publication years, genres, eras.

Every parser is total: unparseable input yields None (or a default), never an
exception, so one malformed row cannot abort a whole import.
"""
from __future__ import annotations

import datetime as dt
import math
import numbers
import re

import pandas as pd

from recap.config import (
    TEXT_RATINGS, MIN_RATING, MAX_RATING,
    GENRE_RULES, DEFAULT_GENRE,
    MIN_PUBLICATION_YEAR, MAX_PUBLICATION_YEAR,
    ERA_THRESHOLDS, LATEST_ERA,
)


# ---------------------------------------------------------------------------
# Numeric coercion
# ---------------------------------------------------------------------------

def is_blank(value) -> bool:
    """True for None, NaN/NaT and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def safe_float(value, default: float | None = None) -> float | None:
    """Convert a value to a finite float, returning *default* on failure."""
    if is_blank(value) or isinstance(value, bool):
        return default
    try:
        result = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (ValueError, TypeError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def safe_int(value, default: int | None = None) -> int | None:
    """Convert a value to int (via float, so "320.0" works), returning *default* on failure."""
    result = safe_float(value)
    if result is None:
        return default
    return int(result)


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------

_BRACKET_RATING_RE = re.compile(r"\[\s*(\d)\s*of 5 stars\s*\]")
_STAR_RATING_RE = re.compile(r"(\d)\s*of 5 stars")
_BARE_RATING_RE = re.compile(r"\d+(?:\.0+)?")


def parse_rating(value) -> int | None:
    """Parse a user rating field into 1-5.

    Recognised, in priority order: "[N of 5 stars]", "N of 5 stars", the
    five Goodreads text ratings ("it was amazing" ... "did not like it"),
    and a bare whole number 1-5.

    The bare-number form is an extension beyond the Goodreads text forms:
    spreadsheet exports store "My Rating" as a number. Zero is Goodreads'
    "not rated" and yields None.
    """
    if is_blank(value) or isinstance(value, bool) or value == 0:
        return None

    if isinstance(value, numbers.Number):
        number = float(value)
        if number.is_integer() and MIN_RATING <= number <= MAX_RATING:
            return int(number)
        return None

    text = str(value)

    m = _BRACKET_RATING_RE.search(text)
    if m:
        return int(m.group(1))

    m = _STAR_RATING_RE.search(text)
    if m:
        return int(m.group(1))

    rating = TEXT_RATINGS.get(text.lower())
    if rating is not None:
        return rating

    stripped = text.strip()
    if _BARE_RATING_RE.fullmatch(stripped):
        number = int(float(stripped))
        if MIN_RATING <= number <= MAX_RATING:
            return number
    return None


# ---------------------------------------------------------------------------
# Publication year
# ---------------------------------------------------------------------------

_YEAR_RE = re.compile(r"\b(\d{4})\b")
_NEGATIVE_YEAR_RE = re.compile(r"-\d+")


def parse_publication_year(value) -> int | None:
    """Extract a publication year, supporting BC years written as "-399".

    The first standalone 4-digit group wins when it lies in the accepted
    range, even if it is embedded in unrelated text.
    """
    if is_blank(value) or isinstance(value, bool) or value == 0:
        return None

    text = str(value).strip()
    if text.lower() == "unknown":
        return None

    m = _YEAR_RE.search(text)
    if m:
        year = int(m.group(1))
        if MIN_PUBLICATION_YEAR <= year <= MAX_PUBLICATION_YEAR:
            return year

    if text.startswith("-"):
        m = _NEGATIVE_YEAR_RE.match(text)
        if m:
            year = int(m.group(0))
            if MIN_PUBLICATION_YEAR <= year <= 0:
                return year

    return None


# ---------------------------------------------------------------------------
# Date read
# ---------------------------------------------------------------------------

_SLASH_DATE_RE = re.compile(r"(\d{4})/(\d{1,2})/(\d{1,2})")


def _rolled_date(year: int, month: int, day: int) -> dt.date:
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return dt.date(year, month, 1) + dt.timedelta(days=day - 1)


def parse_date_read(value) -> dt.date | None:
    """Parse a "Date Read" cell into a calendar date.

    Goodreads writes YYYY/MM/DD; spreadsheet cells may already hold dates.
    Out-of-range month or day values roll over into the following period
    (2023/02/30 is 2023-03-02, 2023/12/32 is 2024-01-01).
    Anything else goes through pandas' generic date parsing.
    """
    if is_blank(value):
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value

    text = str(value).strip()

    m = _SLASH_DATE_RE.search(text)
    if m:
        try:
            return _rolled_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except (ValueError, OverflowError):
            pass

    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.date()


# ---------------------------------------------------------------------------
# Genre & era
# ---------------------------------------------------------------------------

_GENRE_PATTERNS = [(re.compile(pattern), label) for pattern, label in GENRE_RULES]


def infer_genre(title) -> str:
    """Guess a coarse genre from keywords in the title."""
    title_lower = str(title).lower()
    for pattern, label in _GENRE_PATTERNS:
        if pattern.search(title_lower):
            return label
    return DEFAULT_GENRE


def get_era(year: int) -> str:
    """Map a publication year to its era label."""
    for upper_bound, label in ERA_THRESHOLDS:
        if year < upper_bound:
            return label
    return LATEST_ERA
