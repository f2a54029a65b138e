"""
Request handlers and the HTML they render.

- MovieHandler: /movie?name=... lookup and detail page
- SearchFormHandler: the search form, for every other target
"""

from .movie import MovieHandler, SearchFormHandler
from .pages import (
    SEARCH_FORM_HTML,
    render_search_form,
    render_movie_page,
    render_message_page,
)

__all__ = [
    "MovieHandler",
    "SearchFormHandler",
    "SEARCH_FORM_HTML",
    "render_search_form",
    "render_movie_page",
    "render_message_page",
]
