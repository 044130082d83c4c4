from recap.analytics.report import (
    StatisticsReport,
    RatingStats,
    RatingComparison,
    RatingAnalysis,
    RatedBook,
    PublicationStats,
    AuthorStats,
    GenreStats,
    CommunityStats,
)
from recap.analytics.statistics import compute_statistics

__all__ = [
    "StatisticsReport",
    "RatingStats",
    "RatingComparison",
    "RatingAnalysis",
    "RatedBook",
    "PublicationStats",
    "AuthorStats",
    "GenreStats",
    "CommunityStats",
    "compute_statistics",
]
