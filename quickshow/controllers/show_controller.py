# quickshow/controllers/show_controller.py
from flask import request, jsonify, current_app

from quickshow.extensions import cache
from quickshow.services.shows import create_shows, list_upcoming, get_by_movie
from quickshow.utils.auth import admin_required
from quickshow.utils.catalog import get_catalog


def show_routes(app):

    @app.route("/api/show/now-playing")
    @cache.cached(timeout=600, key_prefix="now_playing_movies")
    def now_playing():
        movies = get_catalog().fetch_trending()
        return jsonify({"success": True, "movies": movies})

    @app.route("/api/show/add", methods=["POST"])
    @admin_required
    def add_show():
        data = request.get_json(silent=True) or {}
        shows = create_shows(
            data.get("movieId"),
            data.get("showsInput"),
            data.get("showPrice"),
            get_catalog(),
        )
        current_app.logger.info("Added %d show(s) for %s", len(shows), data.get("movieId"))
        return jsonify({"success": True, "message": "Show added successfully"}), 201

    @app.route("/api/show/all")
    def all_shows():
        shows = list_upcoming()
        return jsonify({"success": True, "shows": [show.movie.to_dict() for show in shows]})

    @app.route("/api/show/<movie_id>")
    def show_detail(movie_id):
        movie, date_time = get_by_movie(movie_id)
        return jsonify({"success": True, "movie": movie.to_dict(), "dateTime": date_time})
