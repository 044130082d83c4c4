"""
Header aliasing and row normalization: raw export rows → Book records.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping

from recap.config import COLUMN_ALIASES
from recap.data.parsers import is_blank, safe_float, safe_int
from recap.data.schemas import Book


# ---------------------------------------------------------------------------
# Header lookup
# ---------------------------------------------------------------------------

def _header_key(header) -> str:
    return str(header).strip().lower()


class HeaderIndex:
    """Case-insensitive header lookup, built once per row set.

    Maps each normalized header to every original spelling seen in the
    rows, so a field resolves without rescanning row keys.
    """

    def __init__(self, headers: Iterable) -> None:
        self._spellings: dict[str, list] = {}
        for header in headers:
            spellings = self._spellings.setdefault(_header_key(header), [])
            if header not in spellings:
                spellings.append(header)

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping]) -> "HeaderIndex":
        seen: dict = {}
        for row in rows:
            for header in row.keys():
                seen.setdefault(header, None)
        return cls(seen)

    def get(self, row: Mapping, aliases: list[str], default=""):
        """First non-blank value among *aliases*, tried in order."""
        for alias in aliases:
            for header in self._spellings.get(_header_key(alias), ()):
                value = row.get(header)
                if not is_blank(value):
                    return value.strip() if isinstance(value, str) else value
        return default


# ---------------------------------------------------------------------------
# Row → Book
# ---------------------------------------------------------------------------

def _text(value) -> str:
    return value if isinstance(value, str) else str(value)


def _row_to_book(row: Mapping, index: HeaderIndex) -> Book | None:
    """Build a Book from one row, or None if the row has no title."""
    title = index.get(row, COLUMN_ALIASES["title"])
    if is_blank(title):
        return None

    pages = safe_int(index.get(row, COLUMN_ALIASES["pages"], 0), 0)

    return Book(
        title=_text(title),
        author=_text(index.get(row, COLUMN_ALIASES["author"])),
        rating=index.get(row, COLUMN_ALIASES["rating"]),
        avg_rating=safe_float(index.get(row, COLUMN_ALIASES["avg_rating"], 0), 0.0),
        date_read=index.get(row, COLUMN_ALIASES["date_read"]),
        date_published=index.get(row, COLUMN_ALIASES["date_published"]),
        isbn=_text(index.get(row, COLUMN_ALIASES["isbn"])),
        shelves=_text(index.get(row, COLUMN_ALIASES["shelves"])),
        pages=max(pages, 0),
    )


def normalize_rows(rows: Iterable[Mapping]) -> list[Book]:
    """Map raw rows (header → value) to Book records, dropping untitled rows."""
    rows = list(rows)
    index = HeaderIndex.from_rows(rows)
    books = []
    for row in rows:
        book = _row_to_book(row, index)
        if book is not None:
            books.append(book)
    return books


normalize = normalize_rows
