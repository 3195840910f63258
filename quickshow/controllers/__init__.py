from .show_controller import show_routes
from .booking_controller import booking_routes
from .user_controller import user_routes
from .admin_controller import admin_routes


def register_controllers(app):
    @app.route("/")
    def index():
        return "Server is live"

    show_routes(app)
    booking_routes(app)
    user_routes(app)
    admin_routes(app)
