"""
Canonical book record produced by the normalizer.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Union

from recap.data.parsers import parse_date_read

RawValue = Union[str, int, float, dt.date, None]


@dataclass(frozen=True)
class Book:
    """One normalized row of a reading-history export.

    Raw fields (rating, dates) are kept as exported; parsed values are
    derived on demand by recap.data.parsers.
    """
    title: str
    author: str = ""
    rating: RawValue = ""
    avg_rating: float = 0.0
    date_read: RawValue = ""
    date_published: RawValue = ""
    isbn: str = ""
    shelves: str = ""
    pages: int = 0

    @property
    def read_on(self) -> dt.date | None:
        """Parsed read date, or None if the field is blank/unparseable."""
        return parse_date_read(self.date_read)
