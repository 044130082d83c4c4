"""
Reading Recap configuration: paths, header aliases, heuristics, thresholds.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with RECAP_DATA_DIR env var for cloud deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("RECAP_DATA_DIR", str(Path.home() / "Reading Recap")))
BASE_FOLDER = _data_dir
UPLOADS_FOLDER = _data_dir / "uploads"
SHARES_FOLDER = _data_dir / "shares"

# ---------------------------------------------------------------------------
# Accepted input files (extension → reader)
# ---------------------------------------------------------------------------
CSV_EXTENSIONS = {".csv"}
EXCEL_EXTENSIONS = {".xlsx", ".xls"}
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS | EXCEL_EXTENSIONS

# ---------------------------------------------------------------------------
# Header aliases: canonical field → accepted headers, matched
# case-insensitively. Order matters: first non-blank match wins.
# ---------------------------------------------------------------------------
COLUMN_ALIASES = {
    "title": ["title"],
    "author": ["author"],
    "rating": ["my rating", "rating"],
    "avg_rating": ["average rating", "avg rating"],
    "date_read": ["date read", "date   read"],
    "date_published": ["original publication year", "date pub"],
    "isbn": ["isbn", "isbn13"],
    "shelves": ["bookshelves", "shelves"],
    "pages": ["number of pages", "num pages", "pages"],
}

# ---------------------------------------------------------------------------
# Text-rating vocabulary (exact, case-insensitive)
# ---------------------------------------------------------------------------
TEXT_RATINGS = {
    "it was amazing": 5,
    "really liked it": 4,
    "liked it": 3,
    "it was ok": 2,
    "did not like it": 1,
}

MIN_RATING = 1
MAX_RATING = 5

# ---------------------------------------------------------------------------
# Genre keyword rules (order matters: first match wins)
# ---------------------------------------------------------------------------
GENRE_RULES = [
    (r"theology|god|christ|gospel|faith|prayer|christian|holy|doxology", "Theology/Religion"),
    (r"philosophy|ethics|republic|nicomachean", "Philosophy"),
    (r"history|war|political|world", "History/Politics"),
    (r"love|heart|romance|kiss|rose|fates|blood|vampire|fae|fate|stars", "Romance/Fantasy"),
    (
        r"guide|how to|handbook|manual|empathy|toxic|discipline|parenting|pregnancy|childbirth|leadership",
        "Self-Help/Practical",
    ),
]
DEFAULT_GENRE = "Fiction/Other"

# ---------------------------------------------------------------------------
# Publication years & eras (upper bound exclusive → label)
# ---------------------------------------------------------------------------
MIN_PUBLICATION_YEAR = -5000
MAX_PUBLICATION_YEAR = 2025

ERA_THRESHOLDS = [
    (0, "Ancient (BC)"),
    (500, "Ancient"),
    (1500, "Medieval"),
    (1800, "Early Modern"),
    (1900, "19th Century"),
    (2000, "20th Century"),
]
LATEST_ERA = "21st Century"

RECENT_YEAR = 2020
CLASSIC_YEAR = 1900
ANCIENT_YEAR = 500

# ---------------------------------------------------------------------------
# Personality thresholds
# ---------------------------------------------------------------------------
RATING_PERSONALITY_MARGIN = 0.3       # mean (user - community) delta
TIME_TRAVELER_SHARE = 0.3             # share of pre-1900 books
TREND_CHASER_SHARE = 0.7              # share of 2020+ books
LOYALTY_MIN_BOOKS = 5
SUPERFAN_BOOKS_PER_AUTHOR = 2.0
EXPLORER_BOOKS_PER_AUTHOR = 1.2
MAINSTREAM_MARGIN = 0.3

# Rating analysis
SAME_RATING_TOLERANCE = 0.1
TOP_DISAGREEMENTS = 3
GEM_MAX_COMMUNITY = 4.0
OVERRATED_MAX_USER = 2
OVERRATED_MIN_COMMUNITY = 4.0
PREDICTABLE_STD = 0.5
UNPREDICTABLE_STD = 1.0
POPULAR_MIN_COMMUNITY = 4.2
UNDERDOG_MAX_COMMUNITY = 3.8
TRAIT_MARGIN = 0.3

# ---------------------------------------------------------------------------
# Presentation defaults
# ---------------------------------------------------------------------------
DEFAULT_READER_NAME = "Reader"

# ---------------------------------------------------------------------------
# Share link defaults
# ---------------------------------------------------------------------------
SHARE_EXPIRY_DAYS = 30
