# quickshow/services/shows.py
import math

from sqlalchemy.orm import joinedload

from quickshow.errors import NotFound, ValidationError
from quickshow.extensions import db
from quickshow.models import Show
from quickshow.services.movies import ensure_movie, get_movie
from quickshow.utils.dates import parse_show_datetime, to_iso, utcnow

SCHEDULED = "scheduled"
PARTIALLY_BOOKED = "partially_booked"
FULLY_BOOKED = "fully_booked"


def parse_price(value):
    if isinstance(value, bool) or value is None:
        raise ValidationError("showPrice must be a positive number")
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise ValidationError("showPrice must be a positive number")
    if not math.isfinite(price) or price <= 0:
        raise ValidationError("showPrice must be a positive number")
    return price


def build_show_date_times(shows_input):
    """Expand ``[{date, time: [...]}, ...]`` into one datetime per (date, time) pair."""
    if not isinstance(shows_input, list):
        raise ValidationError("showsInput must be a list of {date, time[]}")

    date_times = []
    for entry in shows_input:
        if not isinstance(entry, dict):
            raise ValidationError("showsInput must be a list of {date, time[]}")
        date = entry.get("date")
        times = entry.get("time")
        if not isinstance(date, str) or not isinstance(times, list):
            raise ValidationError("Each showsInput entry needs a date and a time list")
        for time in times:
            try:
                date_times.append(parse_show_datetime(date, time))
            except (TypeError, ValueError):
                raise ValidationError(f"Invalid show date/time: {date} {time}")
    return date_times


def create_shows(movie_id, shows_input, price, catalog):
    """Insert one show per (date, time) pair, each with an empty occupancy map.

    Overlapping shows for the same movie are allowed.
    """
    if not movie_id or not isinstance(movie_id, str):
        raise ValidationError("movieId is required")
    price = parse_price(price)
    date_times = build_show_date_times(shows_input)

    movie = ensure_movie(movie_id, catalog)

    shows = [Show(movie_id=movie.id, show_date_time=dt, show_price=price) for dt in date_times]
    if shows:
        db.session.add_all(shows)
        db.session.commit()
    return shows


def upcoming_shows_query(now=None):
    now = now or utcnow()
    return (Show.query.options(joinedload(Show.movie))
            .filter(Show.show_date_time >= now)
            .order_by(Show.show_date_time, Show.id))


def list_upcoming(now=None):
    """First upcoming show of every movie, earliest first."""
    seen = set()
    shows = []
    for show in upcoming_shows_query(now).all():
        if show.movie_id in seen:
            continue
        seen.add(show.movie_id)
        shows.append(show)
    return shows


def get_by_movie(movie_id, now=None):
    """Return ``(movie, {date: [{time, showId}]})`` for the movie's future shows."""
    movie = get_movie(movie_id)
    if movie is None:
        raise NotFound("Movie not found")

    now = now or utcnow()
    shows = (Show.query
             .filter(Show.movie_id == movie_id, Show.show_date_time >= now)
             .order_by(Show.show_date_time, Show.id)
             .all())

    date_time = {}
    for show in shows:
        date_key = show.show_date_time.date().isoformat()
        date_time.setdefault(date_key, []).append({
            "time": to_iso(show.show_date_time),
            "showId": show.id,
        })
    return movie, date_time


def get_show(show_id):
    show = db.session.get(Show, show_id)
    if show is None:
        raise NotFound("Show not found")
    return show


def show_status(show, capacity):
    occupied = len(show.seats)
    if occupied == 0:
        return SCHEDULED
    if occupied >= capacity:
        return FULLY_BOOKED
    return PARTIALLY_BOOKED
