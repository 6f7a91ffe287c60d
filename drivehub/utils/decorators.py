from functools import wraps
from flask import abort
from flask_login import current_user

from ..services.result import Actor


def roles_required(*roles):
    """Reject with 403 unless the logged-in user holds one of ``roles``."""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401)
            if current_user.role_name not in roles:
                abort(403)
            return view(*args, **kwargs)
        return wrapped
    return decorator


def current_actor():
    return Actor.from_user(current_user)
