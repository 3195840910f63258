# quickshow/utils/auth.py
# Identity comes from the external provider's proxy; nothing here verifies tokens.
import hmac
from functools import wraps

from flask import current_app, request

from quickshow.errors import Forbidden, Unauthorized

USER_HEADER = "X-User-Id"
ADMIN_HEADER = "X-Admin-Key"


def current_user_id():
    user_id = (request.headers.get(USER_HEADER) or "").strip()
    if not user_id:
        raise Unauthorized("Not authorized, login required")
    return user_id


def is_admin_request():
    expected = current_app.config.get("ADMIN_API_KEY")
    if not expected:
        return True
    supplied = request.headers.get(ADMIN_HEADER) or ""
    return hmac.compare_digest(supplied.encode(), expected.encode())


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not is_admin_request():
            raise Forbidden("Not authorized")
        return view(*args, **kwargs)
    return wrapper
