"""
=============================================================================
HTML PAGES
=============================================================================

Two fixed documents and one small message page:

    SEARCH_FORM_HTML     "/" and every other non-movie target. Static.
    render_movie_page()  "/movie?name=..." when the lookup succeeds.
    render_message_page() Not found, upstream failure, bad request.

The search form never navigates: its button sends an XMLHttpRequest to
/movie?name=<value> and drops the response text into #getrespmsg. So the
detail page and the message page end up spliced inside the form page.

=============================================================================
ESCAPING
=============================================================================

Movie fields come from a third party and go straight into HTML. With
escape=True (the default) every value passes through html.escape() before
it is placed, quotes included since the poster URL sits in an attribute:

    Plot: <script>alert(1)</script>
      →   <p class="plot">&lt;script&gt;alert(1)&lt;/script&gt;</p>

escape=False interpolates raw, byte for byte what the service sent.

Templates use string.Template ($name placeholders) because the inline
CSS is full of braces that str.format() would choke on.

=============================================================================
"""

import html
from string import Template
from typing import Optional

from ..lookup.record import MovieRecord


SEARCH_FORM_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Buscador de peliculas</title>
    <style>
        body {
            font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
            background-color: #f4f4f4;
            margin: 0;
            padding: 0;
            display: flex;
            flex-direction: column;
            align-items: center;
            justify-content: center;
            min-height: 100vh;
        }
        h1 {
            font-size: 2rem;
            margin-bottom: 20px;
        }
        form {
            display: flex;
            flex-direction: column;
            align-items: center;
        }
        label, input[type="text"], input[type="button"] {
            margin-bottom: 10px;
        }
        input[type="text"] {
            padding: 8px;
            border: 1px solid #ccc;
            border-radius: 5px;
        }
        input[type="button"] {
            padding: 10px 20px;
            background-color: #4CAF50;
            color: white;
            border: none;
            border-radius: 5px;
            cursor: pointer;
            transition: background-color 0.3s;
        }
        input[type="button"]:hover {
            background-color: #45a049;
        }
        #getrespmsg {
            margin-top: 20px;
            font-weight: bold;
        }
    </style>
</head>
<body>
    <h1>Buscador de peliculas</h1>
    <form action="/movie">
        <label for="name">Nombre de la pelicula:</label>
        <input type="text" id="name" name="name" placeholder="Escribe aqui">
        <input type="button" value="Buscar" onclick="loadGetMsg()">
    </form>
    <div id="getrespmsg"></div>
    <script>
        function loadGetMsg() {
            let nameVar = document.getElementById("name").value;
            const xhttp = new XMLHttpRequest();
            xhttp.onload = function() {
                document.getElementById("getrespmsg").innerHTML = this.responseText;
            }
            xhttp.open("GET", "/movie?name=" + encodeURIComponent(nameVar));
            xhttp.send();
        }
    </script>
</body>
</html>
"""


_PAGE_STYLE = """
        body {
            font-family: Arial, sans-serif;
            background-color: #f4f4f4;
            margin: 0;
            padding: 0;
        }
        .container {
            max-width: 800px;
            margin: 20px auto;
            padding: 20px;
            background-color: #fff;
            border-radius: 10px;
            box-shadow: 0 0 10px rgba(0, 0, 0, 0.1);
        }
        .poster {
            max-width: 100%;
            height: auto;
            border-radius: 10px;
            margin-bottom: 20px;
        }
        .movie-details {
            display: flex;
            align-items: flex-start;
        }
        .details {
            flex: 1;
        }
        .title {
            font-size: 24px;
            margin: 0 0 10px;
        }
        .info span {
            display: block;
            margin-bottom: 5px;
        }
        .plot {
            font-style: italic;
            margin-top: 20px;
        }
        .clear-button {
            text-align: center;
        }
        .clear-button button {
            padding: 10px 20px;
            background-color: #4CAF50;
            color: white;
            border: none;
            border-radius: 5px;
            cursor: pointer;
            transition: background-color 0.3s;
        }
        .clear-button button:hover {
            background-color: #45a049;
        }"""


_MOVIE_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Pelicula</title>
    <style>$style
    </style>
</head>
<body>
    <div class="container">
        <div class="movie-details">
$poster
            <div class="details">
                <h2 class="title">$title</h2>
                <div class="info">
                    <span>Released: $released</span>
                    <span>Genre: $genre</span>
                    <span>Director: $director</span>
                    <span>Actors: $actors</span>
                    <span>Language: $language</span>
                </div>
                <p class="plot">$plot</p>
            </div>
        </div>
        <div class="clear-button">
            <a href="/">
                <button>Limpiar</button>
            </a>
        </div>
    </div>
</body>
</html>
""")

_POSTER_TEMPLATE = Template(
    '            <img src="$poster" alt="Movie Poster" class="poster">'
)

_MESSAGE_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>$title</title>
    <style>$style
    </style>
</head>
<body>
    <div class="container">
        <h2 class="title">$title</h2>
        <p class="message">$message</p>
        <div class="clear-button">
            <a href="/">
                <button>Limpiar</button>
            </a>
        </div>
    </div>
</body>
</html>
""")


def _field(value: Optional[str], escape: bool) -> str:
    if value is None:
        return ""
    return html.escape(value, quote=True) if escape else value


def render_search_form() -> str:
    return SEARCH_FORM_HTML


def render_movie_page(record: MovieRecord, escape: bool = True) -> str:
    """
    Render the detail page for one movie.

    Each field of the record appears exactly once. Missing fields render
    as empty text, and the poster image is left out when there is no
    poster URL.
    """
    poster = ""
    if record.poster:
        poster = _POSTER_TEMPLATE.substitute(poster=_field(record.poster, escape))

    return _MOVIE_TEMPLATE.substitute(
        style=_PAGE_STYLE,
        poster=poster,
        title=_field(record.title, escape),
        released=_field(record.released, escape),
        genre=_field(record.genre, escape),
        director=_field(record.director, escape),
        actors=_field(record.actors, escape),
        language=_field(record.language, escape),
        plot=_field(record.plot, escape),
    )


def render_message_page(title: str, message: str) -> str:
    """Small page for not-found and error answers. Always escaped."""
    return _MESSAGE_TEMPLATE.substitute(
        style=_PAGE_STYLE,
        title=html.escape(title),
        message=html.escape(message),
    )
