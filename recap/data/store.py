"""
Year index and LibraryStore: the session's book list with per-year accessors.

Books are loaded once per uploaded export and never mutated afterwards;
every year selection filters the same read-only list.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from recap.config import DEFAULT_READER_NAME
from recap.data.loader import NoDatedBooksError, load_books
from recap.data.schemas import Book


# ---------------------------------------------------------------------------
# Year index
# ---------------------------------------------------------------------------

def available_years(books: Sequence[Book]) -> list[int]:
    """Distinct years with at least one dated book, most recent first."""
    years = {read_on.year for read_on in (book.read_on for book in books) if read_on is not None}
    return sorted(years, reverse=True)


def filter_by_year(books: Sequence[Book], year: int) -> list[Book]:
    """Books read during *year*; undated books never match."""
    result = []
    for book in books:
        read_on = book.read_on
        if read_on is not None and read_on.year == year:
            result.append(book)
    return result


def year_counts(books: Sequence[Book]) -> dict[int, int]:
    """Book count per read-year, most recent year first."""
    counts: dict[int, int] = {}
    for book in books:
        read_on = book.read_on
        if read_on is not None:
            counts[read_on.year] = counts.get(read_on.year, 0) + 1
    return {year: counts[year] for year in sorted(counts, reverse=True)}


# ---------------------------------------------------------------------------
# Session store
# ---------------------------------------------------------------------------

class LibraryStore:
    """In-memory reading history for one uploaded export."""

    def __init__(self, books: Sequence[Book] | None = None, source_name: str = "") -> None:
        self.books: tuple[Book, ...] = tuple(books or ())
        self.source_name = source_name
        self._years: list[int] = available_years(self.books)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, path: str | Path) -> "LibraryStore":
        """Load an export from disk."""
        path = Path(path)
        print(f"Loading reading history from {path.name}...")
        return self._replace(load_books(path), path.name)

    def load_bytes(self, content: bytes, filename: str) -> "LibraryStore":
        """Load an export from uploaded bytes."""
        print(f"Loading reading history from {filename}...")
        return self._replace(load_books(content, filename), filename)

    def _replace(self, books: list[Book], source_name: str) -> "LibraryStore":
        years = available_years(books)
        if not years:
            raise NoDatedBooksError()

        self.books = tuple(books)
        self.source_name = source_name
        self._years = years

        undated = sum(1 for b in self.books if b.read_on is None)
        print(f"  Loaded {len(self.books):,} books across {len(years)} year(s)")
        if undated:
            print(f"  {undated:,} book(s) without a read date (excluded from yearly recaps)")
        return self

    @property
    def is_loaded(self) -> bool:
        return bool(self.books)

    # ------------------------------------------------------------------
    # Year queries
    # ------------------------------------------------------------------

    def available_years(self) -> list[int]:
        return list(self._years)

    def default_year(self) -> Optional[int]:
        """Most recent year with dated books."""
        return self._years[0] if self._years else None

    def filter_by_year(self, year: int) -> list[Book]:
        return filter_by_year(self.books, year)

    def year_counts(self) -> dict[int, int]:
        return year_counts(self.books)

    def book_count(self) -> int:
        return len(self.books)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def statistics(self, year: int | None = None, name: str = DEFAULT_READER_NAME):
        """Full recap for *year* (default: most recent), recomputed on every call."""
        from recap.analytics.statistics import compute_statistics

        if year is None:
            year = self.default_year()
        return compute_statistics(self.filter_by_year(year), name=name, year=year)
