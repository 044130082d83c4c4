"""
Publication-year analytics: era mix and reading personality.
"""
from __future__ import annotations

import pandas as pd

from recap.config import (
    RECENT_YEAR, CLASSIC_YEAR, ANCIENT_YEAR,
    TIME_TRAVELER_SHARE, TREND_CHASER_SHARE,
)
from recap.data.parsers import get_era
from recap.analytics.common import safe_divide, round_half_up, ordered_counts, first_mode
from recap.analytics.report import PublicationStats


def reading_personality(pre_1900_share: float, recent_share: float) -> str:
    if pre_1900_share > TIME_TRAVELER_SHARE:
        return "Time Traveler"
    if recent_share > TREND_CHASER_SHARE:
        return "Trend Chaser"
    return "Balanced Reader"


def publication_summary(df: pd.DataFrame) -> PublicationStats:
    """Era breakdown and span over books with a parseable publication year."""
    dated = df[df["pub_year"].notna()]
    years = dated["pub_year"].astype(int)
    total = len(years)

    oldest = int(years.min())
    newest = int(years.max())
    oldest_title = dated.loc[years == oldest, "title"].iloc[0] or "Unknown"

    eras = years.map(get_era)
    recent = int((years >= RECENT_YEAR).sum())
    pre_1900 = int((years < CLASSIC_YEAR).sum())
    ancient = int((years < ANCIENT_YEAR).sum())

    return PublicationStats(
        avg_pub_year=round_half_up(safe_divide(float(years.sum()), total)),
        oldest_book_year=oldest,
        newest_book_year=newest,
        time_span_years=newest - oldest,
        oldest_book_title=oldest_title,
        era_breakdown=ordered_counts(eras),
        favorite_era=first_mode(eras),
        books_2020_plus=recent,
        books_pre_1900=pre_1900,
        books_ancient=ancient,
        reading_personality=reading_personality(
            safe_divide(pre_1900, total), safe_divide(recent, total)
        ),
    )
