"""
Safe math helpers and the parsed-book frame shared by all analytics passes.
"""
from __future__ import annotations

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

import numpy as np
import pandas as pd

from recap.data.parsers import parse_rating, parse_publication_year, infer_genre
from recap.data.schemas import Book


FRAME_COLUMNS = ["title", "author", "rating", "avg_rating", "pub_year", "pages", "genre"]


def books_frame(books: Sequence[Book]) -> pd.DataFrame:
    """One row per book with every derived field parsed once.

    rating / pub_year are float columns with NaN where unparseable.
    """
    records = [
        {
            "title": b.title,
            "author": b.author,
            "rating": parse_rating(b.rating),
            "avg_rating": b.avg_rating,
            "pub_year": parse_publication_year(b.date_published),
            "pages": b.pages,
            "genre": infer_genre(b.title),
        }
        for b in books
    ]
    df = pd.DataFrame.from_records(records, columns=FRAME_COLUMNS)
    for col in ["rating", "avg_rating", "pub_year", "pages"]:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype("float64")
    df["avg_rating"] = df["avg_rating"].fillna(0.0)
    df["pages"] = df["pages"].fillna(0)
    return df


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def pct_of_total(part: float, total: float) -> float:
    """Percentage of total."""
    return safe_divide(part, total) * 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (-2.5 → -2, 2.5 → 3)."""
    return int(math.floor(value + 0.5))


def round_places(value: float, places: int = 2) -> float:
    """Round to *places* decimals with halves going away from zero (4.125 → 4.13)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def ordered_counts(values: pd.Series) -> dict:
    """Value → count, keyed in first-occurrence order."""
    if values.empty:
        return {}
    counts = values.groupby(values, sort=False).size()
    return {_native(k): int(v) for k, v in counts.items()}


def first_mode(values: pd.Series):
    """Most frequent value; ties go to the value seen first."""
    if values.empty:
        return None
    counts = values.groupby(values, sort=False).size()
    return _native(counts.idxmax())


def _native(value):
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        v = float(value)
        return int(v) if v.is_integer() else v
    return value


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        clean = {}
        for k, v in obj.items():
            if k is None:
                continue
            if isinstance(k, float) and (math.isnan(k) or math.isinf(k)):
                continue
            clean[k if isinstance(k, (str, int)) else str(k)] = sanitize_for_json(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
