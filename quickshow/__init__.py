# quickshow/__init__.py
from flask import Flask

from quickshow.config import Config
from quickshow.controllers import register_controllers
from quickshow.errors import register_error_handlers
from quickshow.extensions import db, cache, cors
from quickshow.utils.catalog import CatalogConfig, CatalogGateway


def create_app(config_object=Config, catalog=None):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    cache.init_app(app)
    cors.init_app(app)

    app.extensions["catalog"] = catalog or CatalogGateway(CatalogConfig.from_app_config(app.config))

    if not app.config.get("ADMIN_API_KEY"):
        app.logger.warning("ADMIN_API_KEY is not set; admin routes are open to every caller")

    register_error_handlers(app)
    register_controllers(app)

    with app.app_context():
        db.create_all()

    return app
