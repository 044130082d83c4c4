"""
StatisticsReport: immutable recap for one reader + year, composed of optional sections.

Sections are None when their source data is missing; to_dict() omits them
entirely so consumers never see placeholder values.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, fields, is_dataclass
from typing import Optional

from recap.analytics.common import sanitize_for_json


_CAMEL_RE = re.compile(r"_([a-z0-9])")


def _camel(name: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def _section_dict(section) -> dict:
    """Dataclass → camelCase dict, skipping None fields."""
    out = {}
    for f in fields(section):
        value = getattr(section, f.name)
        if value is None:
            continue
        if isinstance(value, tuple):
            value = [_section_dict(v) if is_dataclass(v) else v for v in value]
        elif isinstance(value, dict):
            value = dict(value)
        out[_camel(f.name)] = value
    return out


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RatingStats:
    avg_rating: float
    five_star_pct: float
    four_plus_pct: float
    most_common_rating: int
    rating_distribution: dict[int, int]


@dataclass(frozen=True)
class RatingComparison:
    """Mean user-minus-community delta and the label it earns."""
    rating_vs_goodreads: float
    rating_personality: str


@dataclass(frozen=True)
class RatedBook:
    title: str
    author: str
    user_rating: int
    avg_rating: float
    difference: float


@dataclass(frozen=True)
class RatingAnalysis:
    """Per-book comparison of the reader's ratings with the community's."""
    total_compared: int
    rated_higher_count: int
    rated_higher_pct: float
    rated_lower_count: int
    rated_lower_pct: float
    rated_same_count: int
    rated_same_pct: float
    most_loved: tuple[RatedBook, ...]
    most_critical: tuple[RatedBook, ...]
    underrated_gems: tuple[RatedBook, ...]
    overrated_books: tuple[RatedBook, ...]
    consistency_score: float
    consistency_type: str
    harsh_on_popular: Optional[bool] = None
    champion_of_underdogs: Optional[bool] = None


@dataclass(frozen=True)
class PublicationStats:
    avg_pub_year: int
    oldest_book_year: int
    newest_book_year: int
    time_span_years: int
    oldest_book_title: str
    era_breakdown: dict[str, int]
    favorite_era: str
    books_2020_plus: int
    books_pre_1900: int
    books_ancient: int
    reading_personality: str


@dataclass(frozen=True)
class AuthorStats:
    unique_authors: int
    books_per_author: float
    top_author_name: str
    top_author_count: int
    author_loyalty: Optional[str] = None


@dataclass(frozen=True)
class GenreStats:
    top_genre: str
    genre_breakdown: dict[str, int]
    genre_diversity: int


@dataclass(frozen=True)
class CommunityStats:
    goodreads_avg: float
    taste_alignment: Optional[str] = None


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

_FLAT_SECTIONS = ("ratings", "comparison", "publication", "authors", "genres", "community")


@dataclass(frozen=True)
class StatisticsReport:
    name: str
    year: Optional[int]
    total_books: int
    total_pages: int = 0
    ratings: Optional[RatingStats] = None
    comparison: Optional[RatingComparison] = None
    rating_analysis: Optional[RatingAnalysis] = None
    publication: Optional[PublicationStats] = None
    authors: Optional[AuthorStats] = None
    genres: Optional[GenreStats] = None
    community: Optional[CommunityStats] = None

    def to_dict(self) -> dict:
        """Flat camelCase payload for the presentation layer.

        name, year, totalBooks and totalPages are always present; every
        other key appears only when its section could be computed.
        """
        out = {
            "name": self.name,
            "year": self.year,
            "totalBooks": self.total_books,
            "totalPages": self.total_pages,
        }
        for attr in _FLAT_SECTIONS:
            section = getattr(self, attr)
            if section is not None:
                out.update(_section_dict(section))
        if self.rating_analysis is not None:
            out["ratingAnalysis"] = _section_dict(self.rating_analysis)
        return sanitize_for_json(out)
