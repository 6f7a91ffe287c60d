from flask import abort, jsonify, request

from ..services.patch import Patch
from ..services.result import Failure


def respond(result):
    """200 with data and warnings, or 400 with the failure list."""
    return jsonify(result.to_dict()), (200 if result.ok else 400)


def form_failures(form):
    return [Failure(field, message) for field, errors in form.errors.items() for message in errors]


def reject(failures):
    return jsonify({"errors": [f.to_dict() for f in failures], "warnings": []}), 400


def json_patch():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400)
    return Patch.from_json(payload)


def arg_int(name, default=None):
    return request.args.get(name, default, type=int)


def arg_bool(name):
    return request.args.get(name, "").lower() in ("1", "true", "yes")


def arg_optional_bool(name):
    """True/False when the query string says so, None when it is absent."""
    raw = request.args.get(name)
    if raw is None or raw == "":
        return None
    return raw.lower() in ("1", "true", "yes")
