# quickshow/errors.py
from flask import jsonify
from werkzeug.exceptions import HTTPException

from quickshow.extensions import db


class ApiError(Exception):
    """Base error rendered as ``{"success": false, "message": ...}``."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ApiError):
    status_code = 400


class Unauthorized(ApiError):
    status_code = 401


class Forbidden(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class SeatConflict(ApiError):
    status_code = 409

    def __init__(self, seats):
        self.seats = sorted(seats)
        super().__init__(f"Seats already booked: {', '.join(self.seats)}")


class UpstreamNotFound(ApiError):
    """The detail upstream answered, but has no record for the id."""
    status_code = 404


class UpstreamUnavailable(ApiError):
    status_code = 502


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify({"success": False, "message": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"success": False, "message": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception("Unhandled error: %s", error)
        return jsonify({"success": False, "message": "Internal Server Error"}), 500
