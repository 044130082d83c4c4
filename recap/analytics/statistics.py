"""
Statistics engine: builds one StatisticsReport for a reader and year.

Every section guard is evaluated before any pass runs. A pass only executes
when its guard holds, so no section is ever computed over empty data.
"""
from __future__ import annotations

from typing import Optional, Sequence

from recap.config import DEFAULT_READER_NAME
from recap.data.schemas import Book
from recap.analytics.common import books_frame
from recap.analytics.report import StatisticsReport
from recap.analytics.ratings import rating_summary, rating_comparison, rating_analysis
from recap.analytics.publication import publication_summary
from recap.analytics.authors import author_summary
from recap.analytics.genres import genre_summary, community_summary


def compute_statistics(
    books: Sequence[Book],
    name: str = DEFAULT_READER_NAME,
    year: Optional[int] = None,
) -> StatisticsReport:
    """Compute the full recap over books already filtered to one year."""
    df = books_frame(books)

    has_books = not df.empty
    has_ratings = bool(df["rating"].notna().any())
    has_comparison = bool((df["rating"].notna() & (df["avg_rating"] > 0)).any())
    has_pub_years = bool(df["pub_year"].notna().any())
    has_authors = bool((df["author"] != "").any())
    has_community = bool((df["avg_rating"] > 0).any())

    ratings = rating_summary(df) if has_ratings else None
    user_avg = ratings.avg_rating if ratings is not None else None

    return StatisticsReport(
        name=name or DEFAULT_READER_NAME,
        year=year,
        total_books=len(df),
        total_pages=int(df["pages"].sum()),
        ratings=ratings,
        comparison=rating_comparison(df) if has_comparison else None,
        rating_analysis=rating_analysis(df) if has_comparison else None,
        publication=publication_summary(df) if has_pub_years else None,
        authors=author_summary(df) if has_authors else None,
        genres=genre_summary(df) if has_books else None,
        community=community_summary(df, user_avg) if has_community else None,
    )
