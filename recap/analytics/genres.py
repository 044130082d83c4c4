"""
Genre and community-average analytics.
"""
from __future__ import annotations

from typing import Optional

import pandas as pd

from recap.config import MAINSTREAM_MARGIN
from recap.analytics.common import safe_divide, ordered_counts, first_mode, round_places
from recap.analytics.report import GenreStats, CommunityStats


def genre_summary(df: pd.DataFrame) -> GenreStats:
    """Title-keyword genre mix."""
    breakdown = ordered_counts(df["genre"])
    return GenreStats(
        top_genre=first_mode(df["genre"]),
        genre_breakdown=breakdown,
        genre_diversity=len(breakdown),
    )


def taste_alignment(user_avg: float, community_avg: float) -> str:
    if abs(user_avg - community_avg) < MAINSTREAM_MARGIN:
        return "Mainstream"
    if user_avg > community_avg:
        return "Optimist"
    return "Contrarian"


def community_summary(df: pd.DataFrame, user_avg: Optional[float] = None) -> CommunityStats:
    """Mean community rating; taste alignment when the reader's own average is known."""
    community = df.loc[df["avg_rating"] > 0, "avg_rating"]
    goodreads_avg = round_places(safe_divide(float(community.sum()), len(community)), 2)
    alignment = None
    if user_avg is not None:
        alignment = taste_alignment(user_avg, goodreads_avg)
    return CommunityStats(goodreads_avg=goodreads_avg, taste_alignment=alignment)
