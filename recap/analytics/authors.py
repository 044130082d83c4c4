"""
Author analytics: author spread and the loyalty label.
"""
from __future__ import annotations

import pandas as pd

from recap.config import LOYALTY_MIN_BOOKS, SUPERFAN_BOOKS_PER_AUTHOR, EXPLORER_BOOKS_PER_AUTHOR
from recap.analytics.common import safe_divide, ordered_counts, first_mode, round_places
from recap.analytics.report import AuthorStats


def author_loyalty(books_per_author: float) -> str:
    if books_per_author >= SUPERFAN_BOOKS_PER_AUTHOR:
        return "Superfan"
    if books_per_author < EXPLORER_BOOKS_PER_AUTHOR:
        return "Explorer"
    return "Balanced"


def author_summary(df: pd.DataFrame) -> AuthorStats:
    """Author spread over books with a non-empty author."""
    authors = df.loc[df["author"] != "", "author"]
    counts = ordered_counts(authors)
    unique = len(counts)
    books_per_author = round_places(safe_divide(len(authors), unique), 2)
    top_author = first_mode(authors)

    loyalty = None
    if len(authors) >= LOYALTY_MIN_BOOKS:
        loyalty = author_loyalty(books_per_author)

    return AuthorStats(
        unique_authors=unique,
        books_per_author=books_per_author,
        top_author_name=top_author,
        top_author_count=counts[top_author],
        author_loyalty=loyalty,
    )
