"""Tests for the statistics engine and report serialization."""
import json

from recap.analytics.statistics import compute_statistics
from recap.data.normalize import normalize
from recap.data.schemas import Book
from recap.data.store import LibraryStore


def test_five_book_scenario(five_books_2023):
    report = compute_statistics(five_books_2023, name="Sam", year=2023)
    data = report.to_dict()

    assert data["name"] == "Sam"
    assert data["year"] == 2023
    assert data["totalBooks"] == 5
    assert data["totalPages"] == 1500
    assert data["avgRating"] == 4.4
    assert data["fiveStarPct"] == 60.0
    assert data["fourPlusPct"] == 80.0
    assert data["mostCommonRating"] == 5
    assert data["ratingDistribution"] == {3: 1, 4: 1, 5: 3}
    assert data["ratingAnalysis"]["ratedHigherCount"] == 3


def test_rating_comparison_and_analysis(five_books_2023):
    data = compute_statistics(five_books_2023, year=2023).to_dict()

    assert data["ratingVsGoodreads"] == 0.62
    assert data["ratingPersonality"] == "Generous Reviewer"

    analysis = data["ratingAnalysis"]
    assert analysis["totalCompared"] == 5
    assert analysis["ratedLowerCount"] == 1
    assert analysis["ratedSameCount"] == 1
    assert analysis["ratedHigherPct"] == 60.0
    assert analysis["ratedLowerPct"] == 20.0
    assert [b["title"] for b in analysis["mostLoved"]] == ["Book Three", "Book One", "Book Five"]
    assert analysis["mostLoved"][2]["difference"] == 1.1
    assert [b["title"] for b in analysis["mostCritical"]] == ["Book Four"]
    assert len(analysis["underratedGems"]) == 3
    assert analysis["overratedBooks"] == []
    assert analysis["consistencyScore"] == 1.25
    assert analysis["consistencyType"] == "Unpredictable"
    assert analysis["harshOnPopular"] is True
    assert analysis["championOfUnderdogs"] is True


def test_author_genre_and_community_passes(five_books_2023):
    data = compute_statistics(five_books_2023, year=2023).to_dict()

    assert data["uniqueAuthors"] == 4
    assert data["booksPerAuthor"] == 1.25
    assert data["topAuthorName"] == "Author A"
    assert data["topAuthorCount"] == 2
    assert data["authorLoyalty"] == "Balanced"

    assert data["topGenre"] == "Fiction/Other"
    assert data["genreDiversity"] == 1

    assert data["goodreadsAvg"] == 3.78
    assert data["tasteAlignment"] == "Optimist"


def test_publication_pass(goodreads_file):
    store = LibraryStore().load(goodreads_file)
    data = store.statistics(year=2023).to_dict()

    assert data["avgPubYear"] == 1215
    assert data["oldestBookYear"] == -380
    assert data["newestBookYear"] == 2023
    assert data["timeSpanYears"] == 2403
    assert data["oldestBookTitle"] == "The Republic"
    assert data["eraBreakdown"] == {"Ancient (BC)": 1, "21st Century": 2}
    assert data["favoriteEra"] == "21st Century"
    assert data["books2020Plus"] == 1
    assert data["booksPre1900"] == 1
    assert data["booksAncient"] == 1
    assert data["readingPersonality"] == "Time Traveler"

    assert data["genreBreakdown"] == {
        "Philosophy": 1,
        "Fiction/Other": 1,
        "History/Politics": 1,
    }
    assert data["topGenre"] == "Philosophy"
    # Fewer than five authored books: no loyalty label
    assert "authorLoyalty" not in data


def test_republic_scenario_report():
    books = normalize([{
        "Title": "Republic",
        "My Rating": "[5 of 5 stars]",
        "Average Rating": "3.8",
        "Date Read": "2023/06/15",
        "Original Publication Year": "-380",
    }])
    data = compute_statistics(books, name="Reader", year=2023).to_dict()

    assert data["avgRating"] == 5
    assert data["favoriteEra"] == "Ancient (BC)"
    assert data["topGenre"] == "Philosophy"
    assert data["ratingAnalysis"]["underratedGems"][0]["title"] == "Republic"
    # 3.8 is neither popular (>= 4.2) nor an underdog (< 3.8)
    assert "championOfUnderdogs" not in data["ratingAnalysis"]
    assert "harshOnPopular" not in data["ratingAnalysis"]


def test_sections_omitted_without_source_data():
    books = [Book(title="Untitled Draft", date_read="2023/01/01")]
    data = compute_statistics(books, year=2023).to_dict()

    assert set(data) == {
        "name", "year", "totalBooks", "totalPages",
        "topGenre", "genreBreakdown", "genreDiversity",
    }


def test_empty_selection_has_only_required_keys():
    data = compute_statistics([], name="Sam", year=2019).to_dict()
    assert data == {"name": "Sam", "year": 2019, "totalBooks": 0, "totalPages": 0}


def test_ratings_without_community_skip_comparison():
    books = [Book(title="X", rating="4"), Book(title="Y", rating="2")]
    data = compute_statistics(books).to_dict()
    assert data["avgRating"] == 3.0
    assert "ratingVsGoodreads" not in data
    assert "ratingAnalysis" not in data
    assert "goodreadsAvg" not in data


def test_community_without_ratings_has_no_alignment():
    books = [Book(title="X", avg_rating=4.1)]
    data = compute_statistics(books).to_dict()
    assert data["goodreadsAvg"] == 4.1
    assert "tasteAlignment" not in data
    assert "avgRating" not in data


def test_mode_ties_go_to_first_seen():
    books = [
        Book(title="1", author="B", rating="4"),
        Book(title="2", author="A", rating="5"),
        Book(title="3", author="A", rating="4"),
        Book(title="4", author="B", rating="5"),
    ]
    data = compute_statistics(books).to_dict()
    assert data["mostCommonRating"] == 4
    assert data["topAuthorName"] == "B"


def test_rating_histogram_sums_to_rated_books(five_books_2023):
    extra = five_books_2023 + [Book(title="Unrated", rating="0")]
    data = compute_statistics(extra).to_dict()
    assert sum(data["ratingDistribution"].values()) == 5
    assert data["totalBooks"] == 6


def test_report_is_strict_json(five_books_2023):
    data = compute_statistics(five_books_2023, year=2023).to_dict()
    json.dumps(data, allow_nan=False)


def test_harsh_and_predictable_reader():
    books = [
        Book(title=f"Hyped {i}", author="Same", rating="3", avg_rating=4.4)
        for i in range(6)
    ]
    data = compute_statistics(books).to_dict()
    analysis = data["ratingAnalysis"]
    assert analysis["consistencyType"] == "Predictable"
    assert analysis["harshOnPopular"] is True
    assert "championOfUnderdogs" not in analysis
    assert data["ratingPersonality"] == "Tough Critic"
    assert data["authorLoyalty"] == "Superfan"
    assert data["tasteAlignment"] == "Contrarian"


def _rated(ratings, avg_rating=0.0):
    return [Book(title=f"Book {i}", rating=str(r), avg_rating=avg_rating) for i, r in enumerate(ratings)]


def test_averages_round_halves_up():
    """33 / 8 = 4.125 rounds to 4.13."""
    data = compute_statistics(_rated([5, 5, 4, 4, 4, 4, 4, 3])).to_dict()
    assert data["avgRating"] == 4.13


def test_percentages_round_halves_up():
    """1 five-star out of 16 is 6.25%, shown as 6.3."""
    data = compute_statistics(_rated([5] + [3] * 15)).to_dict()
    assert data["fiveStarPct"] == 6.3
    assert data["fourPlusPct"] == 6.3


def test_avg_rating_within_rating_range():
    ratings = [1, 5, 3, 2, 2, 4]
    data = compute_statistics(_rated(ratings)).to_dict()
    assert min(ratings) <= data["avgRating"] <= max(ratings)


def _published(years):
    return [Book(title=f"Book {i}", date_published=str(y)) for i, y in enumerate(years)]


def test_trend_chaser():
    data = compute_statistics(_published([2021, 2022, 2023, 2010])).to_dict()
    assert data["books2020Plus"] == 3
    assert data["readingPersonality"] == "Trend Chaser"


def test_balanced_reader():
    data = compute_statistics(_published([2021, 1990])).to_dict()
    assert data["readingPersonality"] == "Balanced Reader"


def test_explorer_loyalty():
    books = [Book(title=f"Book {i}", author=f"Author {i}") for i in range(5)]
    data = compute_statistics(books).to_dict()
    assert data["booksPerAuthor"] == 1.0
    assert data["authorLoyalty"] == "Explorer"


def test_mainstream_balanced_judge():
    books = [Book(title="Close Call", rating="4", avg_rating=4.1)]
    data = compute_statistics(books).to_dict()
    assert data["ratingVsGoodreads"] == -0.1
    assert data["ratingPersonality"] == "Balanced Judge"
    assert data["tasteAlignment"] == "Mainstream"


def test_moderate_consistency():
    books = [
        Book(title="Warm", rating="4", avg_rating=3.5),
        Book(title="Cool", rating="3", avg_rating=3.9),
    ]
    analysis = compute_statistics(books).to_dict()["ratingAnalysis"]
    assert analysis["consistencyScore"] == 0.7
    assert analysis["consistencyType"] == "Moderate"


def test_overrated_books_listed():
    books = [
        Book(title="Hyped", author="Someone", rating="2", avg_rating=4.3),
        Book(title="Fine", rating="4", avg_rating=4.0),
    ]
    analysis = compute_statistics(books).to_dict()["ratingAnalysis"]
    assert analysis["overratedBooks"] == [{
        "title": "Hyped",
        "author": "Someone",
        "userRating": 2,
        "avgRating": 4.3,
        "difference": -2.3,
    }]


def test_traits_can_be_false():
    books = [
        Book(title="Popular", rating="5", avg_rating=4.5),
        Book(title="Underdog", rating="3", avg_rating=3.5),
    ]
    analysis = compute_statistics(books).to_dict()["ratingAnalysis"]
    assert analysis["harshOnPopular"] is False
    assert analysis["championOfUnderdogs"] is False
