"""
Export file reading: CSV / Excel → raw rows → Book records.
"""
from __future__ import annotations

import io
from pathlib import Path

import pandas as pd

from recap.config import CSV_EXTENSIONS, EXCEL_EXTENSIONS
from recap.data.normalize import normalize_rows
from recap.data.schemas import Book


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class RecapInputError(ValueError):
    """An uploaded export cannot be turned into a recap."""


class UnsupportedFormatError(RecapInputError):
    def __init__(self, filename: str) -> None:
        super().__init__(
            f"Unsupported file format '{Path(filename).suffix or filename}'. "
            "Please upload CSV or Excel file."
        )


class MalformedFileError(RecapInputError):
    """The underlying CSV/Excel reader failed."""


class NoBooksFoundError(RecapInputError):
    def __init__(self) -> None:
        super().__init__("No books found in file. Please check your export.")


class NoDatedBooksError(RecapInputError):
    def __init__(self) -> None:
        super().__init__(
            'No books with "Date Read" found. '
            "Make sure your export includes read books with dates."
        )


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def _suffix(filename: str | Path) -> str:
    return Path(str(filename)).suffix.lower()


def _read_csv(source) -> pd.DataFrame:
    try:
        return pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        raise MalformedFileError(f"Failed to parse CSV: {exc}") from exc


def _read_excel(source) -> pd.DataFrame:
    try:
        df = pd.read_excel(source, sheet_name=0, dtype=object)
    except Exception as exc:  # openpyxl/xlrd raise a wide range of errors
        raise MalformedFileError(f"Failed to parse Excel: {exc}") from exc
    # Blank cells come back as NaN/NaT; the normalizer treats "" as missing
    return df.astype(object).where(df.notna(), "")


def read_rows(source: str | Path | bytes, filename: str | Path | None = None) -> list[dict]:
    """Read the first table of a CSV/Excel export into header → value rows.

    *source* is a path or the raw file bytes; *filename* decides the reader
    and defaults to the path itself.
    """
    name = filename if filename is not None else source
    if isinstance(name, bytes):
        raise UnsupportedFormatError("<bytes>")

    suffix = _suffix(name)
    if suffix not in CSV_EXTENSIONS and suffix not in EXCEL_EXTENSIONS:
        raise UnsupportedFormatError(str(name))

    if isinstance(source, bytes):
        source = io.BytesIO(source)

    if suffix in CSV_EXTENSIONS:
        df = _read_csv(source)
    else:
        df = _read_excel(source)

    # Drop fully blank rows left by spreadsheets
    if not df.empty:
        df = df[(df.astype(str).apply(lambda col: col.str.strip()) != "").any(axis=1)]

    return df.to_dict("records")


def load_books(source: str | Path | bytes, filename: str | Path | None = None) -> list[Book]:
    """Read an export and normalize it; raises NoBooksFoundError if no row has a title."""
    rows = read_rows(source, filename)
    books = normalize_rows(rows)
    if not books:
        raise NoBooksFoundError()
    return books
