from flask import abort, jsonify, request
from flask_login import login_required

from . import bp
from .forms import CreateCandidateForm
from ...services import candidates, queries
from ...services.status import UserRole
from ...utils.decorators import current_actor, roles_required
from ...utils.http import arg_int, arg_optional_bool, form_failures, json_patch, reject, respond


@bp.get("")
@login_required
def list_candidates():
    return jsonify(queries.list_candidates(
        experience_level=request.args.get("experience_level"),
        latest_first=arg_optional_bool("latest_first"),
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
        page=arg_int("page", 1),
        per_page=arg_int("per_page"),
    ))


@bp.post("")
@roles_required(UserRole.ADMIN.value, UserRole.HR.value)
def create_candidate():
    form = CreateCandidateForm()
    if not form.validate_on_submit():
        return reject(form_failures(form))
    return respond(candidates.create_candidate(
        current_actor(),
        full_name=form.full_name.data,
        email=form.email.data,
        phone=form.phone.data,
        experience_level=form.experience_level.data,
        college=form.college.data or None,
        previous_company=form.previous_company.data or None,
        address=form.address.data or None,
        tech_stack=form.tech_stack.data,
        resume_url=form.resume_url.data or None,
        linkedin_url=form.linkedin_url.data or None,
        github_url=form.github_url.data or None,
    ))


@bp.get("/<int:candidate_id>")
@login_required
def get_candidate(candidate_id):
    data = queries.get_candidate(candidate_id)
    if data is None:
        abort(404)
    return jsonify(data)


@bp.patch("/<int:candidate_id>")
@roles_required(UserRole.ADMIN.value, UserRole.HR.value)
def edit_candidate(candidate_id):
    return respond(candidates.edit_candidate(current_actor(), candidate_id, json_patch()))
