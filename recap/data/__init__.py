"""Export loading, normalization, and the per-year library store."""
from .schemas import Book
from .loader import (
    load_books, read_rows,
    RecapInputError, UnsupportedFormatError, MalformedFileError, NoBooksFoundError, NoDatedBooksError,
)
from .normalize import normalize, normalize_rows, HeaderIndex
from .parsers import parse_rating, parse_publication_year, parse_date_read, infer_genre, get_era
from .store import LibraryStore, available_years, filter_by_year, year_counts
