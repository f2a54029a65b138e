"""
Unit tests for MovieRecord.
"""

from moviesearch.lookup.record import MovieRecord


OMDB_PAYLOAD = {
    "Title": "Inception",
    "Year": "2010",
    "Released": "16 Jul 2010",
    "Genre": "Action, Adventure, Sci-Fi",
    "Director": "Christopher Nolan",
    "Actors": "Leonardo DiCaprio, Joseph Gordon-Levitt, Elliot Page",
    "Plot": "A thief who steals corporate secrets through the use of dream-sharing technology...",
    "Language": "English, Japanese, French",
    "Poster": "https://m.media-amazon.com/images/M/inception.jpg",
    "imdbRating": "8.8",
    "Response": "True",
}


class TestMovieRecord:
    """Tests for MovieRecord."""

    def test_from_mapping(self):
        record = MovieRecord.from_mapping(OMDB_PAYLOAD)

        assert record.title == "Inception"
        assert record.poster == "https://m.media-amazon.com/images/M/inception.jpg"
        assert record.released == "16 Jul 2010"
        assert record.director == "Christopher Nolan"
        assert record.language == "English, Japanese, French"
        assert record.missing_fields() == []

    def test_absent_keys_are_none(self):
        record = MovieRecord.from_mapping({"Title": "Alien"})

        assert record.title == "Alien"
        assert record.poster is None
        assert record.missing_fields() == [
            "poster", "released", "genre", "director", "actors", "language", "plot",
        ]

    def test_not_available_and_blank_are_none(self):
        record = MovieRecord.from_mapping({"Title": "Alien", "Poster": "N/A", "Plot": "  "})

        assert record.poster is None
        assert record.plot is None

    def test_values_are_stripped(self):
        assert MovieRecord.from_mapping({"Title": "  Alien \n"}).title == "Alien"

    def test_unknown_keys_ignored(self):
        record = MovieRecord.from_mapping(OMDB_PAYLOAD)
        assert not hasattr(record, "imdbRating")
