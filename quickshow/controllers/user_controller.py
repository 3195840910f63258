from flask import jsonify

from quickshow.services.bookings import list_user_bookings
from quickshow.utils.auth import current_user_id


def user_routes(app):

    @app.route("/api/user/bookings")
    def user_bookings():
        bookings = list_user_bookings(current_user_id())
        return jsonify({"success": True, "bookings": [b.to_dict() for b in bookings]})
