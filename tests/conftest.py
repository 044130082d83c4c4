"""Shared fixtures: small Goodreads-style exports."""
from __future__ import annotations

import pytest

from recap.data.schemas import Book


GOODREADS_HEADER = (
    "Book Id,Title,Author,My Rating,Average Rating,Number of Pages,"
    "Original Publication Year,Date Read,Bookshelves\n"
)


@pytest.fixture
def goodreads_csv() -> str:
    """A short export spanning two read-years plus one unread book."""
    return GOODREADS_HEADER + (
        '1,The Republic,Plato,5,3.80,416,-380,2023/06/15,read\n'
        '2,Fourth Wing,Rebecca Yarros,4,4.40,517,2023,2023/02/01,read\n'
        '3,A Short History of Nearly Everything,Bill Bryson,3,4.21,544,2003,2023/09/30,read\n'
        '4,Dune,Frank Herbert,5,4.27,658,1965,2022/11/05,read\n'
        '5,Project Hail Mary,Andy Weir,0,4.52,496,2021,,to-read\n'
    )


@pytest.fixture
def goodreads_file(tmp_path, goodreads_csv):
    path = tmp_path / "goodreads_library_export.csv"
    path.write_text(goodreads_csv, encoding="utf-8")
    return path


@pytest.fixture
def five_books_2023() -> list[Book]:
    """Five 2023 reads with ratings [5,4,5,3,5] against community [3.5,4.0,3.0,4.5,3.9]."""
    rows = [
        ("Book One", "Author A", "5", 3.5),
        ("Book Two", "Author B", "4", 4.0),
        ("Book Three", "Author A", "5", 3.0),
        ("Book Four", "Author C", "3", 4.5),
        ("Book Five", "Author D", "5", 3.9),
    ]
    return [
        Book(
            title=title,
            author=author,
            rating=rating,
            avg_rating=avg,
            date_read=f"2023/0{i + 1}/15",
            date_published="2015",
            pages=300,
        )
        for i, (title, author, rating, avg) in enumerate(rows)
    ]
