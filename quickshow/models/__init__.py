from .movie import Movie
from .show import Show, ShowSeat
from .booking import Booking
