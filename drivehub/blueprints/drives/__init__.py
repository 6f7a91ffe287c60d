from flask import Blueprint

bp = Blueprint("drives", __name__)

from . import routes  # noqa: E402,F401
