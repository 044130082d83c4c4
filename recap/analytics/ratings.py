"""
Rating analytics: the reader's own ratings measured against the community average.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from recap.config import (
    MIN_RATING, MAX_RATING,
    RATING_PERSONALITY_MARGIN,
    SAME_RATING_TOLERANCE, TOP_DISAGREEMENTS,
    GEM_MAX_COMMUNITY, OVERRATED_MAX_USER, OVERRATED_MIN_COMMUNITY,
    PREDICTABLE_STD, UNPREDICTABLE_STD,
    POPULAR_MIN_COMMUNITY, UNDERDOG_MAX_COMMUNITY, TRAIT_MARGIN,
)
from recap.analytics.common import pct_of_total, safe_divide, first_mode, round_places
from recap.analytics.report import RatingStats, RatingComparison, RatedBook, RatingAnalysis


def rated_books(df: pd.DataFrame) -> pd.DataFrame:
    """Books with a parseable user rating."""
    return df[df["rating"].notna()]


def compared_books(df: pd.DataFrame) -> pd.DataFrame:
    """Books with both a user rating and a positive community average, plus their delta."""
    compared = df[df["rating"].notna() & (df["avg_rating"] > 0)].copy()
    compared["difference"] = compared["rating"] - compared["avg_rating"]
    return compared


# ---------------------------------------------------------------------------
# Rating summary
# ---------------------------------------------------------------------------

def rating_summary(df: pd.DataFrame) -> RatingStats:
    """Average, five-star / four-plus shares, mode and 1-5 histogram."""
    ratings = rated_books(df)["rating"].astype(int)
    total = len(ratings)

    distribution = {}
    for star in range(MIN_RATING, MAX_RATING + 1):
        count = int((ratings == star).sum())
        if count > 0:
            distribution[star] = count

    return RatingStats(
        avg_rating=round_places(safe_divide(float(ratings.sum()), total), 2),
        five_star_pct=round_places(pct_of_total(int((ratings == 5).sum()), total), 1),
        four_plus_pct=round_places(pct_of_total(int((ratings >= 4).sum()), total), 1),
        most_common_rating=first_mode(ratings),
        rating_distribution=distribution,
    )


def rating_personality(mean_diff: float) -> str:
    if mean_diff > RATING_PERSONALITY_MARGIN:
        return "Generous Reviewer"
    if mean_diff < -RATING_PERSONALITY_MARGIN:
        return "Tough Critic"
    return "Balanced Judge"


def rating_comparison(df: pd.DataFrame) -> RatingComparison:
    """Mean (user - community) rating over books that have both."""
    diffs = compared_books(df)["difference"]
    mean_diff = safe_divide(float(diffs.sum()), len(diffs))
    return RatingComparison(
        rating_vs_goodreads=round_places(mean_diff, 2),
        rating_personality=rating_personality(mean_diff),
    )


# ---------------------------------------------------------------------------
# Rating analysis
# ---------------------------------------------------------------------------

def _rated_book_list(rows: pd.DataFrame) -> tuple[RatedBook, ...]:
    return tuple(
        RatedBook(
            title=row.title,
            author=row.author,
            user_rating=int(row.rating),
            avg_rating=float(row.avg_rating),
            difference=round_places(float(row.difference), 2),
        )
        for row in rows.itertuples(index=False)
    )


def consistency_type(std: float) -> str:
    if std < PREDICTABLE_STD:
        return "Predictable"
    if std > UNPREDICTABLE_STD:
        return "Unpredictable"
    return "Moderate"


def _mean_difference(rows: pd.DataFrame) -> float | None:
    if rows.empty:
        return None
    return float(rows["difference"].mean())


def rating_analysis(df: pd.DataFrame) -> RatingAnalysis:
    """Where the reader agrees and disagrees with the community average."""
    compared = compared_books(df)
    total = len(compared)
    diff = compared["difference"]

    higher = compared[diff > 0]
    lower = compared[diff < 0]
    same = compared[diff.abs() < SAME_RATING_TOLERANCE]

    most_loved = higher.sort_values("difference", ascending=False, kind="stable").head(TOP_DISAGREEMENTS)
    most_critical = lower.sort_values("difference", ascending=True, kind="stable").head(TOP_DISAGREEMENTS)

    gems = compared[(compared["rating"] == 5) & (compared["avg_rating"] < GEM_MAX_COMMUNITY)]
    overrated = compared[
        (compared["rating"] <= OVERRATED_MAX_USER) & (compared["avg_rating"] > OVERRATED_MIN_COMMUNITY)
    ]

    # Population standard deviation (ddof=0)
    std = float(np.std(diff.to_numpy())) if total else 0.0

    popular_mean = _mean_difference(compared[compared["avg_rating"] >= POPULAR_MIN_COMMUNITY])
    underdog_mean = _mean_difference(compared[compared["avg_rating"] < UNDERDOG_MAX_COMMUNITY])

    return RatingAnalysis(
        total_compared=total,
        rated_higher_count=len(higher),
        rated_higher_pct=round_places(pct_of_total(len(higher), total), 1),
        rated_lower_count=len(lower),
        rated_lower_pct=round_places(pct_of_total(len(lower), total), 1),
        rated_same_count=len(same),
        rated_same_pct=round_places(pct_of_total(len(same), total), 1),
        most_loved=_rated_book_list(most_loved),
        most_critical=_rated_book_list(most_critical),
        underrated_gems=_rated_book_list(gems),
        overrated_books=_rated_book_list(overrated),
        consistency_score=round_places(std, 2),
        consistency_type=consistency_type(std),
        harsh_on_popular=None if popular_mean is None else popular_mean < -TRAIT_MARGIN,
        champion_of_underdogs=None if underdog_mean is None else underdog_mean > TRAIT_MARGIN,
    )
