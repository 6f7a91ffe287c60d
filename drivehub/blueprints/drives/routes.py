from flask import abort, jsonify, request
from flask_login import login_required

from . import bp
from .forms import AddMemberForm, CandidateIdsForm, CreateDriveForm, ReassignForm
from ...services import drives, panel, queries, rounds
from ...services.status import UserRole
from ...utils.decorators import current_actor, roles_required
from ...utils.http import arg_bool, arg_int, form_failures, json_patch, reject, respond


def _found(data):
    if data is None:
        abort(404)
    return jsonify(data)


@bp.get("")
@login_required
def list_drives():
    return jsonify(queries.list_drives(
        status=request.args.get("status"),
        creator_email=request.args.get("created_by"),
        technical_rounds=arg_int("technical_rounds"),
        include_past=arg_bool("include_past"),
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
        page=arg_int("page", 1),
        per_page=arg_int("per_page"),
    ))


@bp.post("")
@roles_required(UserRole.ADMIN.value, UserRole.HR.value)
def create_drive():
    form = CreateDriveForm()
    if not form.validate_on_submit():
        return reject(form_failures(form))
    payload = request.get_json(silent=True) or {}
    return respond(drives.create_drive(
        current_actor(),
        name=form.name.data,
        drive_date=form.drive_date.data,
        technical_rounds=form.technical_rounds.data,
        hr_ids=form.hr_ids.data or [],
        panel_ids=form.panel_ids.data or [],
        mentor_ids=form.mentor_ids.data or [],
        config=payload.get("config"),
    ))


@bp.get("/<int:drive_id>")
@login_required
def get_drive(drive_id):
    return _found(queries.get_drive(drive_id))


@bp.patch("/<int:drive_id>")
@login_required
def edit_drive(drive_id):
    return respond(drives.edit_drive(current_actor(), drive_id, json_patch()))


@bp.get("/<int:drive_id>/config")
@login_required
def get_drive_config(drive_id):
    return _found(queries.get_drive_config(drive_id))


@bp.patch("/<int:drive_id>/config")
@login_required
def edit_drive_config(drive_id):
    return respond(drives.edit_drive_config(current_actor(), drive_id, json_patch()))


@bp.get("/<int:drive_id>/members")
@login_required
def list_members(drive_id):
    return jsonify(queries.list_drive_members(
        drive_id=drive_id,
        role=request.args.get("role"),
        user_id=arg_int("user_id"),
        page=arg_int("page", 1),
        per_page=arg_int("per_page"),
    ))


@bp.post("/<int:drive_id>/members")
@login_required
def add_member(drive_id):
    form = AddMemberForm()
    if not form.validate_on_submit():
        return reject(form_failures(form))
    return respond(drives.add_member(current_actor(), drive_id, form.user_id.data, form.role.data))


@bp.delete("/<int:drive_id>/members/<int:user_id>")
@login_required
def remove_member(drive_id, user_id):
    return respond(drives.remove_member(current_actor(), drive_id, user_id))


@bp.get("/<int:drive_id>/candidates")
@login_required
def list_candidates(drive_id):
    return jsonify(queries.list_drive_candidates(
        drive_id=drive_id,
        status=request.args.get("status"),
        candidate_id=arg_int("candidate_id"),
        attendance_status=request.args.get("attendance_status"),
        page=arg_int("page", 1),
        per_page=arg_int("per_page"),
        actor=current_actor(),
    ))


@bp.post("/<int:drive_id>/candidates")
@login_required
def add_candidates(drive_id):
    form = CandidateIdsForm()
    if not form.validate_on_submit():
        return reject(form_failures(form))
    return respond(drives.add_candidates(current_actor(), drive_id, form.candidate_ids.data or []))


@bp.delete("/<int:drive_id>/candidates")
@login_required
def remove_candidates(drive_id):
    form = CandidateIdsForm()
    if not form.validate_on_submit():
        return reject(form_failures(form))
    return respond(drives.remove_candidates(current_actor(), drive_id, form.candidate_ids.data or []))


@bp.post("/<int:drive_id>/candidates/<int:candidate_id>/attendance")
@login_required
def mark_attendance(drive_id, candidate_id):
    return respond(drives.mark_attendance(current_actor(), drive_id, candidate_id))


@bp.patch("/candidates/<int:drive_candidate_id>")
@login_required
def edit_drive_candidate(drive_candidate_id):
    return respond(drives.edit_drive_candidate(current_actor(), drive_candidate_id, json_patch()))


@bp.post("/<int:drive_id>/auto-assign")
@login_required
def auto_assign(drive_id):
    return respond(panel.auto_assign_panel(current_actor(), drive_id))


@bp.get("/rounds")
@login_required
def list_rounds():
    return jsonify(queries.list_rounds(
        drive_id=arg_int("drive_id"),
        drive_candidate_id=arg_int("drive_candidate_id"),
        interviewer_user_id=arg_int("interviewer_user_id"),
        round_type=request.args.get("round_type"),
        status=request.args.get("status"),
        result=request.args.get("result"),
        page=arg_int("page", 1),
        per_page=arg_int("per_page"),
    ))


@bp.get("/rounds/<int:round_id>")
@login_required
def get_round(round_id):
    return _found(queries.get_round(round_id))


@bp.patch("/rounds/<int:round_id>")
@login_required
def edit_round(round_id):
    return respond(rounds.edit_round(current_actor(), round_id, json_patch()))


@bp.post("/rounds/<int:round_id>/feedback")
@login_required
def add_feedback(round_id):
    return respond(rounds.add_feedback(current_actor(), round_id, json_patch()))


@bp.patch("/rounds/<int:round_id>/feedback")
@login_required
def edit_feedback(round_id):
    return respond(rounds.edit_feedback(current_actor(), round_id, json_patch()))


@bp.post("/rounds/<int:round_id>/reassign")
@login_required
def reassign(round_id):
    form = ReassignForm()
    if not form.validate_on_submit():
        return reject(form_failures(form))
    return respond(panel.reassign_interviewer(
        current_actor(), round_id,
        form.old_interviewer_id.data or 0,
        form.new_interviewer_id.data or 0,
        require_approval=form.require_approval.data,
    ))


@bp.get("/feedback/<int:feedback_id>")
@login_required
def get_feedback(feedback_id):
    return _found(queries.get_feedback(feedback_id))
