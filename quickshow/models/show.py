from quickshow.extensions import db
from quickshow.utils.dates import utcnow, to_iso

SEAT_LABEL_MAX_LENGTH = 10


class Show(db.Model):
    __tablename__ = 'shows'

    id = db.Column(db.Integer, primary_key=True)
    movie_id = db.Column(db.String(20), db.ForeignKey('movies.id'), nullable=False, index=True)
    show_date_time = db.Column(db.DateTime, nullable=False, index=True)
    show_price = db.Column(db.Float, nullable=False)
    # Bumped by every booking; the UPDATE doubles as the per-show write lock.
    seat_version = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=utcnow)

    movie = db.relationship('Movie', backref=db.backref('shows', lazy=True))
    seats = db.relationship('ShowSeat', backref='show', lazy=True, cascade="all, delete")

    @property
    def occupied_seats(self):
        """Occupancy map: seat label -> holder."""
        return {seat.seat_label: seat.holder for seat in self.seats}

    def to_dict(self, with_movie=True):
        data = {
            "_id": self.id,
            "movie": self.movie.to_dict() if with_movie and self.movie else self.movie_id,
            "showDateTime": to_iso(self.show_date_time),
            "showPrice": self.show_price,
            "occupiedSeats": self.occupied_seats,
        }
        return data


class ShowSeat(db.Model):
    """One claimed seat of a show. At most one row per (show, seat label)."""
    __tablename__ = 'show_seats'

    id = db.Column(db.Integer, primary_key=True)
    show_id = db.Column(db.Integer, db.ForeignKey('shows.id'), nullable=False)
    seat_label = db.Column(db.String(SEAT_LABEL_MAX_LENGTH), nullable=False)
    holder = db.Column(db.String(120), nullable=False)
    booking_id = db.Column(db.Integer, db.ForeignKey('bookings.id'), nullable=True)

    __table_args__ = (
        db.UniqueConstraint('show_id', 'seat_label', name='uq_show_seat'),
    )
