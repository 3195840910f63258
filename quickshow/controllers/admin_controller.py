# quickshow/controllers/admin_controller.py
from flask import jsonify, current_app

from quickshow.extensions import db
from quickshow.models import Booking
from quickshow.services.bookings import list_all_bookings
from quickshow.services.shows import show_status, upcoming_shows_query
from quickshow.utils.auth import admin_required


def admin_routes(app):

    @app.route("/api/admin/is-admin")
    @admin_required
    def is_admin():
        return jsonify({"success": True, "isAdmin": True})

    @app.route("/api/admin/dashboard")
    @admin_required
    def dashboard():
        paid = Booking.query.filter_by(is_paid=True)
        total_revenue = paid.with_entities(db.func.coalesce(db.func.sum(Booking.amount), 0)).scalar()
        active_shows = upcoming_shows_query().all()
        return jsonify({
            "success": True,
            "dashboardData": {
                "totalBookings": paid.count(),
                "totalRevenue": float(total_revenue),
                "activeShows": [show.to_dict() for show in active_shows],
            },
        })

    @app.route("/api/admin/all-shows")
    @admin_required
    def admin_all_shows():
        capacity = current_app.config.get("SEATS_PER_SHOW", 90)
        shows = []
        for show in upcoming_shows_query().all():
            data = show.to_dict()
            data["status"] = show_status(show, capacity)
            shows.append(data)
        return jsonify({"success": True, "shows": shows})

    @app.route("/api/admin/all-bookings")
    @admin_required
    def admin_all_bookings():
        return jsonify({"success": True, "bookings": [b.to_dict() for b in list_all_bookings()]})
