from quickshow.extensions import db
from quickshow.utils.dates import utcnow, to_iso


class Booking(db.Model):
    __tablename__ = 'bookings'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(120), nullable=False, index=True)
    show_id = db.Column(db.Integer, db.ForeignKey('shows.id'), nullable=False)
    booked_seats = db.Column(db.JSON, nullable=False, default=list)
    amount = db.Column(db.Float, nullable=False)
    is_paid = db.Column(db.Boolean, nullable=False, default=False)
    payment_link = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    show = db.relationship('Show', backref=db.backref('bookings', lazy=True))
    seats = db.relationship('ShowSeat', backref='booking', lazy=True, cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "_id": self.id,
            "user": self.user_id,
            "show": self.show.to_dict() if self.show else self.show_id,
            "amount": self.amount,
            "bookedSeats": self.booked_seats or [],
            "isPaid": self.is_paid,
            "paymentLink": self.payment_link,
            "createdAt": to_iso(self.created_at),
        }
