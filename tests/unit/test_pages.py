"""
Unit tests for the HTML pages.
"""

from dataclasses import astuple

from moviesearch.handlers.pages import (
    SEARCH_FORM_HTML,
    render_message_page,
    render_movie_page,
    render_search_form,
)
from moviesearch.lookup.record import MovieRecord


class TestSearchForm:
    """Tests for the search form page."""

    def test_heading(self):
        assert "<title>Buscador de peliculas</title>" in SEARCH_FORM_HTML
        assert "<h1>Buscador de peliculas</h1>" in SEARCH_FORM_HTML

    def test_form_controls(self):
        assert '<input type="text" id="name" name="name"' in SEARCH_FORM_HTML
        assert 'value="Buscar"' in SEARCH_FORM_HTML
        assert '<div id="getrespmsg"></div>' in SEARCH_FORM_HTML

    def test_async_lookup_script(self):
        assert "new XMLHttpRequest()" in SEARCH_FORM_HTML
        assert 'xhttp.open("GET", "/movie?name=" + encodeURIComponent(nameVar));' in SEARCH_FORM_HTML
        assert "this.responseText" in SEARCH_FORM_HTML

    def test_render_is_static(self):
        assert render_search_form() == render_search_form() == SEARCH_FORM_HTML


class TestMoviePage:
    """Tests for render_movie_page()."""

    def test_structure(self, inception):
        page = render_movie_page(inception)

        assert '<img src="http://x/p.jpg" alt="Movie Poster" class="poster">' in page
        assert '<h2 class="title">Inception</h2>' in page
        assert "<span>Released: 2010</span>" in page
        assert "<span>Genre: Sci-Fi</span>" in page
        assert "<span>Director: Nolan</span>" in page
        assert "<span>Actors: DiCaprio</span>" in page
        assert "<span>Language: English</span>" in page
        assert '<p class="plot">A thief...</p>' in page
        assert '<a href="/">' in page

    def test_each_field_exactly_once(self, inception):
        page = render_movie_page(inception)

        for value in astuple(inception):
            assert page.count(value) == 1, value

    def test_missing_fields_render_empty(self):
        page = render_movie_page(MovieRecord(title="Alien"))

        assert '<h2 class="title">Alien</h2>' in page
        assert "<img" not in page
        assert "<span>Released: </span>" in page
        assert '<p class="plot"></p>' in page
        assert "None" not in page

    def test_empty_record(self):
        page = render_movie_page(MovieRecord())
        assert '<h2 class="title"></h2>' in page

    def test_values_are_escaped_by_default(self):
        record = MovieRecord(
            title="Tom & Jerry",
            poster='http://x/p.jpg" onerror="alert(1)',
            plot="<script>alert(1)</script>",
        )

        page = render_movie_page(record)

        assert '<h2 class="title">Tom &amp; Jerry</h2>' in page
        assert 'src="http://x/p.jpg&quot; onerror=&quot;alert(1)"' in page
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in page
        assert "<script>" not in page

    def test_raw_interpolation(self):
        record = MovieRecord(title="<em>Alien</em>", plot="<b>bold</b>")

        page = render_movie_page(record, escape=False)

        assert '<h2 class="title"><em>Alien</em></h2>' in page
        assert '<p class="plot"><b>bold</b></p>' in page


class TestMessagePage:
    """Tests for render_message_page()."""

    def test_content(self):
        page = render_message_page("Pelicula no encontrada", "Nada por aqui")

        assert page.startswith("<!DOCTYPE html>")
        assert '<h2 class="title">Pelicula no encontrada</h2>' in page
        assert "Nada por aqui" in page

    def test_escaped(self):
        page = render_message_page("<x>", 'No "<script>"')

        assert "<x>" not in page
        assert "<script>" not in page
