"""
=============================================================================
MOVIE RECORD
=============================================================================

The lookup service answers with a flat JSON object:

    {
        "Title": "Inception",
        "Poster": "https://m.media-amazon.com/...jpg",
        "Released": "16 Jul 2010",
        "Genre": "Action, Adventure, Sci-Fi",
        "Director": "Christopher Nolan",
        "Actors": "Leonardo DiCaprio, Joseph Gordon-Levitt, Elliot Page",
        "Language": "English, Japanese, French",
        "Plot": "A thief who steals corporate secrets...",
        "imdbRating": "8.8",
        ...
    }

MovieRecord keeps the eight fields the detail page shows, each optional.
An absent key and the service's "N/A" placeholder both become None, so a
missing field is a value the page can render rather than a KeyError.

=============================================================================
"""

from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional


NOT_AVAILABLE = "N/A"

# record attribute → upstream key
FIELD_KEYS = {
    "title": "Title",
    "poster": "Poster",
    "released": "Released",
    "genre": "Genre",
    "director": "Director",
    "actors": "Actors",
    "language": "Language",
    "plot": "Plot",
}


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == NOT_AVAILABLE:
        return None
    return text


@dataclass(frozen=True)
class MovieRecord:
    """Metadata of one film. Every field may be missing."""

    title: Optional[str] = None
    poster: Optional[str] = None
    released: Optional[str] = None
    genre: Optional[str] = None
    director: Optional[str] = None
    actors: Optional[str] = None
    language: Optional[str] = None
    plot: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MovieRecord":
        """
        Build a record from an upstream-keyed mapping.

        Unknown keys are ignored. Absent keys, blanks and "N/A" become None.
        """
        return cls(**{attr: _clean(data.get(key)) for attr, key in FIELD_KEYS.items()})

    def missing_fields(self) -> List[str]:
        """Names of the attributes that have no value."""
        return [f.name for f in fields(self) if getattr(self, f.name) is None]
