# quickshow/services/bookings.py
from flask import current_app
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from quickshow.errors import Forbidden, NotFound, SeatConflict, ValidationError
from quickshow.extensions import db
from quickshow.models import Booking, Show, ShowSeat
from quickshow.models.show import SEAT_LABEL_MAX_LENGTH
from quickshow.services.shows import get_show
from quickshow.utils.dates import utcnow


def clean_seat_labels(seat_labels):
    if not isinstance(seat_labels, list) or not seat_labels:
        raise ValidationError("selectedSeats must be a non-empty list")
    labels = []
    for label in seat_labels:
        if not isinstance(label, str) or not label.strip():
            raise ValidationError("Seat labels must be non-empty strings")
        label = label.strip().upper()
        if len(label) > SEAT_LABEL_MAX_LENGTH:
            raise ValidationError(f"Seat labels are at most {SEAT_LABEL_MAX_LENGTH} characters")
        if label in labels:
            raise ValidationError(f"Seat {label} requested twice")
        labels.append(label)
    return labels


def _lock_show(show_id):
    """Bump the show's seat_version; holds the show row lock until commit/rollback."""
    result = db.session.execute(
        update(Show)
        .where(Show.id == show_id)
        .values(seat_version=Show.seat_version + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def book_seats(show_id, seat_labels, holder, now=None):
    """Claim ``seat_labels`` on a show for ``holder``, all or nothing.

    Bookings on the same show are serialized by the row update in
    ``_lock_show``; the unique (show_id, seat_label) constraint backs it up.
    """
    labels = clean_seat_labels(seat_labels)
    if not holder:
        raise ValidationError("holder is required")

    try:
        if not _lock_show(show_id):
            raise NotFound("Show not found")
        show = db.session.get(Show, show_id)
        if show.show_date_time < (now or utcnow()):
            raise ValidationError("Show has already started")

        taken = db.session.execute(
            select(ShowSeat.seat_label)
            .where(ShowSeat.show_id == show_id, ShowSeat.seat_label.in_(labels))
        ).scalars().all()
        if taken:
            raise SeatConflict(taken)

        booking = Booking(
            user_id=holder,
            show_id=show.id,
            booked_seats=labels,
            amount=round(len(labels) * show.show_price, 2),
        )
        booking.seats = [ShowSeat(show=show, seat_label=label, holder=holder) for label in labels]
        db.session.add(booking)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise SeatConflict(labels)
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info("Booking %s: show=%s seats=%s", booking.id, show_id, ",".join(labels))
    return booking


def get_occupied_seats(show_id):
    get_show(show_id)
    return db.session.execute(
        select(ShowSeat.seat_label)
        .where(ShowSeat.show_id == show_id)
        .order_by(ShowSeat.seat_label)
    ).scalars().all()


def get_booking(booking_id, user_id=None):
    booking = db.session.get(Booking, booking_id)
    if booking is None:
        raise NotFound("Booking not found")
    if user_id is not None and booking.user_id != user_id:
        raise Forbidden("Booking belongs to another user")
    return booking


def mark_paid(booking_id, user_id=None):
    booking = get_booking(booking_id, user_id)
    booking.is_paid = True
    booking.payment_link = None
    db.session.commit()
    return booking


def release_booking(booking_id, user_id=None):
    """Delete an unpaid booking and free its seats."""
    booking = get_booking(booking_id, user_id)
    if booking.is_paid:
        raise ValidationError("Paid bookings cannot be released")
    show_id = booking.show_id
    _lock_show(show_id)
    db.session.delete(booking)
    db.session.commit()
    current_app.logger.info("Released booking %s on show %s", booking_id, show_id)


def list_user_bookings(user_id):
    return (Booking.query
            .filter_by(user_id=user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .all())


def list_all_bookings():
    return Booking.query.order_by(Booking.created_at.desc(), Booking.id.desc()).all()
