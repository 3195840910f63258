# quickshow/extensions.py
from flask_caching import Cache
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
cache = Cache()
cors = CORS()
