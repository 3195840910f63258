# quickshow/services/movies.py
from flask import current_app
from sqlalchemy.exc import IntegrityError

from quickshow.errors import NotFound, UpstreamNotFound
from quickshow.extensions import db
from quickshow.models import Movie


def get_movie(movie_id):
    return db.session.get(Movie, movie_id)


def ensure_movie(movie_id, catalog):
    """Return the stored movie, fetching and saving it on first reference."""
    movie = get_movie(movie_id)
    if movie:
        return movie

    try:
        data = catalog.fetch_movie(movie_id)
    except UpstreamNotFound as e:
        raise NotFound(e.message) from e

    # Shows reference the id the caller used, not whatever OMDb echoes back.
    data["id"] = movie_id
    movie = Movie(**data)
    db.session.add(movie)
    try:
        db.session.commit()
    except IntegrityError:
        # Another request saved it first
        db.session.rollback()
        movie = get_movie(movie_id)
        if movie is None:
            raise
        return movie

    current_app.logger.info("New movie saved: %s", movie.title)
    return movie
