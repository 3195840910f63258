from quickshow.extensions import db
from quickshow.utils.dates import utcnow, to_iso


class Movie(db.Model):
    """Movie record keyed by its external (IMDb) id. Written once, never refreshed."""
    __tablename__ = 'movies'

    id = db.Column(db.String(20), primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    overview = db.Column(db.Text, default="")
    poster_path = db.Column(db.String(500), default="")
    backdrop_path = db.Column(db.String(500), default="")
    release_date = db.Column(db.String(40), default="")
    original_language = db.Column(db.String(120), default="")
    tagline = db.Column(db.String(255), default="")
    genres = db.Column(db.JSON, default=list)
    casts = db.Column(db.JSON, default=list)
    vote_average = db.Column(db.Float, default=0)
    runtime = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            "_id": self.id,
            "title": self.title,
            "overview": self.overview,
            "poster_path": self.poster_path,
            "backdrop_path": self.backdrop_path,
            "release_date": self.release_date,
            "original_language": self.original_language,
            "tagline": self.tagline,
            "genres": self.genres or [],
            "casts": self.casts or [],
            "vote_average": self.vote_average,
            "runtime": self.runtime,
            "createdAt": to_iso(self.created_at),
        }

    def __repr__(self):
        return f'<Movie {self.id} {self.title}>'
