# quickshow/controllers/booking_controller.py
from flask import request, jsonify

from quickshow.errors import ValidationError
from quickshow.services.bookings import book_seats, get_occupied_seats, mark_paid, release_booking
from quickshow.utils.auth import current_user_id


def booking_routes(app):

    @app.route("/api/booking/create", methods=["POST"])
    def create_booking():
        user_id = current_user_id()
        data = request.get_json(silent=True) or {}
        show_id = data.get("showId")
        if show_id is None:
            raise ValidationError("showId is required")
        try:
            show_id = int(show_id)
        except (TypeError, ValueError):
            raise ValidationError("showId must be an integer")

        booking = book_seats(show_id, data.get("selectedSeats"), user_id)
        return jsonify({
            "success": True,
            "message": "Booked successfully",
            "bookingId": booking.id,
            "amount": booking.amount,
        }), 201

    @app.route("/api/booking/seats/<int:show_id>")
    def occupied_seats(show_id):
        return jsonify({"success": True, "occupiedSeats": get_occupied_seats(show_id)})

    @app.route("/api/booking/<int:booking_id>/pay", methods=["POST"])
    def pay_booking(booking_id):
        mark_paid(booking_id, current_user_id())
        return jsonify({"success": True, "message": "Payment confirmed"})

    @app.route("/api/booking/<int:booking_id>", methods=["DELETE"])
    def cancel_booking(booking_id):
        release_booking(booking_id, current_user_id())
        return jsonify({"success": True, "message": "Booking cancelled"})
