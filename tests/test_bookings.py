import threading
from datetime import timedelta

import pytest

from quickshow import create_app
from quickshow.config import TestingConfig
from quickshow.errors import Forbidden, NotFound, SeatConflict, ValidationError
from quickshow.extensions import db
from quickshow.models import Booking, Movie, Show, ShowSeat
from quickshow.services.bookings import (
    book_seats, get_occupied_seats, list_user_bookings, mark_paid, release_booking,
)
from quickshow.utils.dates import utcnow

from .conftest import FakeCatalog


@pytest.fixture
def show(app, add_movie, add_show):
    add_movie()
    return add_show(price=12.5)


def test_book_free_seats(app, show):
    booking = book_seats(show.id, ["a1", "A2"], "user_1")

    assert booking.booked_seats == ["A1", "A2"]
    assert booking.amount == 25.0
    assert booking.is_paid is False
    assert db.session.get(Show, show.id).occupied_seats == {"A1": "user_1", "A2": "user_1"}
    assert get_occupied_seats(show.id) == ["A1", "A2"]


def test_book_occupied_seat_conflicts(app, show):
    book_seats(show.id, ["A1"], "user_1")

    with pytest.raises(SeatConflict) as exc:
        book_seats(show.id, ["A2", "A1"], "user_2")

    assert exc.value.seats == ["A1"]
    assert exc.value.status_code == 409
    # nothing from the failed request is kept
    assert get_occupied_seats(show.id) == ["A1"]
    assert Booking.query.count() == 1


def test_booking_bumps_seat_version(app, show):
    book_seats(show.id, ["B1"], "user_1")
    book_seats(show.id, ["B2"], "user_2")
    assert db.session.get(Show, show.id).seat_version == 2


@pytest.mark.parametrize("seats", [[], None, "A1", ["A1", "a1"], [""], [7], ["A" * 11]])
def test_book_seats_validation(app, show, seats):
    with pytest.raises(ValidationError):
        book_seats(show.id, seats, "user_1")


def test_book_unknown_show(app):
    with pytest.raises(NotFound):
        book_seats(999, ["A1"], "user_1")


def test_book_past_show(app, add_movie, add_show):
    add_movie()
    past = add_show(hours_from_now=-2)
    with pytest.raises(ValidationError):
        book_seats(past.id, ["A1"], "user_1")
    assert ShowSeat.query.count() == 0


def test_release_booking_frees_seats(app, show):
    booking = book_seats(show.id, ["C1", "C2"], "user_1")

    release_booking(booking.id, "user_1")

    assert get_occupied_seats(show.id) == []
    assert Booking.query.count() == 0
    assert book_seats(show.id, ["C1"], "user_2").booked_seats == ["C1"]


def test_release_paid_booking_rejected(app, show):
    booking = book_seats(show.id, ["D1"], "user_1")
    mark_paid(booking.id, "user_1")

    with pytest.raises(ValidationError):
        release_booking(booking.id, "user_1")
    assert get_occupied_seats(show.id) == ["D1"]


def test_other_users_cannot_touch_booking(app, show):
    booking = book_seats(show.id, ["E1"], "user_1")
    with pytest.raises(Forbidden):
        mark_paid(booking.id, "user_2")
    with pytest.raises(Forbidden):
        release_booking(booking.id, "user_2")


def test_list_user_bookings(app, show):
    first = book_seats(show.id, ["F1"], "user_1")
    book_seats(show.id, ["F2"], "user_2")
    second = book_seats(show.id, ["F3"], "user_1")

    assert [b.id for b in list_user_bookings("user_1")] == [second.id, first.id]


def test_get_occupied_seats_unknown_show(app):
    with pytest.raises(NotFound):
        get_occupied_seats(42)


@pytest.fixture
def file_app(tmp_path):
    db_path = tmp_path / "concurrent.db"

    class FileConfig(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{db_path}"
        SQLALCHEMY_ENGINE_OPTIONS = {"connect_args": {"check_same_thread": False, "timeout": 30}}

    app = create_app(FileConfig, catalog=FakeCatalog())
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


def test_concurrent_bookings_for_same_seat(file_app):
    with file_app.app_context():
        movie = Movie(**FakeCatalog().movies["tt1375666"])
        db.session.add(movie)
        show = Show(movie_id=movie.id, show_date_time=utcnow() + timedelta(days=1), show_price=10)
        db.session.add(show)
        db.session.commit()
        show_id = show.id

    barrier = threading.Barrier(2)
    outcomes = []

    def attempt(holder):
        with file_app.app_context():
            barrier.wait()
            try:
                book_seats(show_id, ["A1"], holder)
                outcomes.append("booked")
            except SeatConflict:
                outcomes.append("conflict")
            finally:
                db.session.remove()

    threads = [threading.Thread(target=attempt, args=(f"user_{i}",)) for i in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=60)

    assert sorted(outcomes) == ["booked", "conflict"]
    with file_app.app_context():
        assert get_occupied_seats(show_id) == ["A1"]
        assert Booking.query.count() == 1
