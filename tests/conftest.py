from datetime import timedelta

import pytest

from quickshow import create_app
from quickshow.config import TestingConfig
from quickshow.errors import UpstreamNotFound
from quickshow.extensions import db
from quickshow.models import Movie, Show
from quickshow.utils.catalog import normalize_omdb
from quickshow.utils.dates import utcnow

INCEPTION = {
    "Title": "Inception", "Year": "2010", "Released": "16 Jul 2010", "Runtime": "148 min",
    "Genre": "Action, Adventure, Sci-Fi", "Actors": "Leonardo DiCaprio, Joseph Gordon-Levitt, Elliot Page",
    "Plot": "A thief who steals corporate secrets through dream-sharing technology.",
    "Language": "English, Japanese, French", "Poster": "https://m.media-amazon.com/images/inception.jpg",
    "imdbRating": "8.8", "imdbID": "tt1375666", "Type": "movie", "Response": "True",
}

DUNE = {
    "Title": "Dune: Part Two", "Released": "01 Mar 2024", "Runtime": "166 min",
    "Genre": "Action, Adventure, Drama", "Actors": "Timothée Chalamet, Zendaya, Rebecca Ferguson",
    "Plot": "Paul Atreides unites with the Fremen.", "Language": "English",
    "Poster": "https://m.media-amazon.com/images/dune2.jpg", "imdbRating": "8.5",
    "imdbID": "tt15239678", "Response": "True",
}


class FakeCatalog:
    def __init__(self, payloads=(INCEPTION, DUNE)):
        self.movies = {p["imdbID"]: normalize_omdb(p) for p in payloads}
        self.calls = []

    def fetch_movie(self, imdb_id):
        self.calls.append(imdb_id)
        if imdb_id not in self.movies:
            raise UpstreamNotFound("Movie not found: Incorrect IMDb ID.")
        return dict(self.movies[imdb_id])

    def fetch_trending(self):
        return [dict(m) for m in self.movies.values()]


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def app(catalog):
    app = create_app(TestingConfig, catalog=catalog)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def add_movie(app, catalog):
    def _add(imdb_id="tt1375666"):
        movie = Movie(**catalog.movies[imdb_id])
        db.session.add(movie)
        db.session.commit()
        return movie
    return _add


@pytest.fixture
def add_show(app):
    def _add(movie_id="tt1375666", hours_from_now=24, price=12.5):
        show = Show(movie_id=movie_id, show_date_time=utcnow() + timedelta(hours=hours_from_now), show_price=price)
        db.session.add(show)
        db.session.commit()
        return show
    return _add
