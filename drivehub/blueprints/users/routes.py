from flask import abort, jsonify, request
from flask_login import current_user, login_required

from . import bp
from .forms import CreateUserForm
from ...services import queries, users
from ...services.projections import user_to_dict
from ...services.status import UserRole
from ...utils.decorators import current_actor, roles_required
from ...utils.http import arg_int, arg_optional_bool, form_failures, json_patch, reject, respond


def _found(data):
    if data is None:
        abort(404)
    return jsonify(data)


@bp.get("/me")
@login_required
def me():
    return jsonify(user_to_dict(current_user))


@bp.get("")
@roles_required(UserRole.ADMIN.value, UserRole.HR.value)
def list_users():
    return jsonify(queries.list_users(
        role=request.args.get("role"),
        is_active=arg_optional_bool("is_active"),
        latest_first=arg_optional_bool("latest_first"),
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
        page=arg_int("page", 1),
        per_page=arg_int("per_page"),
    ))


@bp.post("")
@roles_required(UserRole.ADMIN.value)
def create_user():
    form = CreateUserForm()
    if not form.validate_on_submit():
        return reject(form_failures(form))
    return respond(users.create_user(
        current_actor(),
        full_name=form.full_name.data,
        email=form.email.data,
        phone=form.phone.data,
        role_name=form.role_name.data,
        password=form.password.data or None,
    ))


@bp.get("/available")
@roles_required(UserRole.ADMIN.value, UserRole.HR.value)
def available_users():
    return jsonify(queries.users_available_on(request.args.get("date")))


@bp.get("/<int:user_id>")
@login_required
def get_user(user_id):
    return _found(queries.get_user(user_id))


@bp.patch("/<int:user_id>")
@roles_required(UserRole.ADMIN.value)
def edit_user(user_id):
    return respond(users.edit_user(current_actor(), user_id, json_patch()))


@bp.post("/<int:user_id>/availability")
@login_required
def set_availability(user_id):
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400)
    return respond(users.set_availability(current_actor(), user_id, payload.get("dates")))


@bp.get("/<int:user_id>/panel-availability")
@roles_required(UserRole.ADMIN.value, UserRole.HR.value)
def panel_availability(user_id):
    return _found(queries.panel_availability(user_id))


@bp.get("/<int:user_id>/assigned-candidates")
@login_required
def assigned_candidates(user_id):
    if queries.get_user(user_id) is None:
        abort(404)
    return jsonify(queries.panel_assigned_candidates(user_id))


@bp.get("/<int:user_id>/mentor-drives")
@login_required
def mentor_drives(user_id):
    return _found(queries.mentor_drives(user_id))
