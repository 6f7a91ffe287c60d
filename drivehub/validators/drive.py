"""Rule sets for drive-level commands.

Ordering inside each validator: the drive must exist, the caller must be
allowed to act on it, the drive must still be open. Any of those failing
ends the check; field rules after that are collected.
"""
from collections import Counter

from ..models import Candidate, Drive, DriveCandidate, DriveMember, User
from ..services import messages
from ..services.result import Failure
from ..services.roles import MEMBER_ROLES
from ..services.status import (CANDIDATE_STATUS_TRANSITIONS, DRIVE_TRANSITIONS,
                               CandidateStatus, DriveStatus, UserRole,
                               can_add_or_remove_members_or_candidates,
                               can_edit_drive_field, check_transition, parse)
from .common import (closed_drive_failure, coerce_date, is_admin_or_owner,
                     is_hr_interviewer, is_strict_int, load, membership,
                     today_or, users_busy_on)

EDITABLE_DRIVE_FIELDS = ("name", "drive_date", "technical_rounds", "status")
EDITABLE_DRIVE_CANDIDATE_FIELDS = ("status",)
TECHNICAL_ROUND_COUNTS = (1, 2)

# section -> editable keys
CONFIG_SECTIONS = {
    "panel_visibility": (
        "show_phone", "show_email", "show_previous_company", "show_resume",
        "show_college", "show_address", "show_linkedin", "show_github",
    ),
    "notification_settings": ("email_notification_enabled",),
    "feedback_configuration": (
        "overall_rating_required", "technical_skill_required", "communication_required",
        "problem_solving_required", "recommendation_required", "overall_feedback_required",
    ),
    "hr_configuration": (
        "allow_bulk_upload", "can_edit_submitted_feedback",
        "allow_panel_reassign", "require_approval_for_reassignment",
    ),
    "panel_configuration": (
        "can_edit_submitted_feedback", "allow_panel_reassign", "require_approval_for_reassignment",
    ),
    "mentor_configuration": (
        "can_view_feedback", "allow_panel_reassign", "require_approval_for_reassignment",
    ),
}

# role configuration section -> role name
ROLE_SECTIONS = {
    "hr_configuration": UserRole.HR.value,
    "panel_configuration": UserRole.PANEL.value,
    "mentor_configuration": UserRole.MENTOR.value,
}


def _name_taken(name, exclude_id=None):
    q = Drive.query.filter(Drive.name == name)
    if exclude_id is not None:
        q = q.filter(Drive.id != exclude_id)
    return q.first() is not None


def validate_config_sections(config):
    """Shape check for a ``{section: {key: bool}}`` mapping."""
    failures = []
    for section, values in (config or {}).items():
        if section not in CONFIG_SECTIONS:
            failures.append(Failure(section, messages.UNKNOWN_CONFIG_SECTION))
            continue
        if not isinstance(values, dict):
            failures.append(Failure(section, messages.CONFIG_VALUE_MUST_BE_BOOLEAN))
            continue
        for key, value in values.items():
            path = f"{section}.{key}"
            if key not in CONFIG_SECTIONS[section]:
                failures.append(Failure(path, messages.UNKNOWN_CONFIG_KEY))
            elif not isinstance(value, bool):
                failures.append(Failure(path, messages.CONFIG_VALUE_MUST_BE_BOOLEAN))
    return failures


def validate_create_drive(actor, name, drive_date, technical_rounds, hr_ids, panel_ids, mentor_ids,
                          config=None, today=None):
    if not (actor.is_admin or actor.is_hr):
        return [Failure.main(messages.ONLY_ADMIN_OR_HR_CAN_CREATE)]

    today = today_or(today)
    failures = []
    if not isinstance(name, str) or not name.strip():
        failures.append(Failure("name", messages.DRIVE_NAME_REQUIRED))
    elif _name_taken(name):
        failures.append(Failure("name", messages.DRIVE_NAME_ALREADY_EXISTS))

    parsed_date = coerce_date(drive_date)
    if drive_date is None:
        failures.append(Failure("drive_date", messages.DRIVE_DATE_REQUIRED))
    elif parsed_date is None:
        failures.append(Failure("drive_date", messages.INVALID_DATE))
    elif parsed_date < today:
        failures.append(Failure("drive_date", messages.FUTURE_DATE_ONLY))

    if not is_strict_int(technical_rounds) or technical_rounds not in TECHNICAL_ROUND_COUNTS:
        failures.append(Failure("technical_rounds", messages.TECH_ROUNDS_SHOULD_BE))

    failures.extend(validate_config_sections(config))

    lists = (
        (UserRole.HR.value, "hr_ids", list(hr_ids or []), messages.NO_HRS),
        (UserRole.PANEL.value, "panel_ids", list(panel_ids or []), messages.NO_PANEL_MEMBERS),
        (UserRole.MENTOR.value, "mentor_ids", list(mentor_ids or []), messages.NO_MENTORS),
    )
    list_failures = []
    for role, field, ids, empty_message in lists:
        if not ids:
            list_failures.append(Failure(field, empty_message))
        elif any(n > 1 for n in Counter(ids).values()):
            list_failures.append(Failure(field, messages.DUPLICATE_USERS_IN_LIST.format(role)))
    everyone = [uid for _, _, ids, _ in lists for uid in set(ids)]
    if any(n > 1 for n in Counter(everyone).values()):
        list_failures.append(Failure.main(messages.USER_IN_MULTIPLE_LISTS))
    failures.extend(list_failures)
    if list_failures:
        return failures

    users = {u.id: u for u in User.query.filter(User.id.in_(everyone)).all()}
    if len(users) != len(everyone):
        failures.append(Failure.main(messages.SOME_USERS_NOT_FOUND))
        return failures
    if any(not u.is_active for u in users.values()):
        failures.append(Failure.main(messages.SOME_USERS_INACTIVE))
    if any(users[uid].role_name != role for role, _, ids, _ in lists for uid in ids):
        failures.append(Failure.main(messages.SOME_USERS_NOT_IN_ROLE))
    if parsed_date is not None and users_busy_on(parsed_date, everyone):
        failures.append(Failure.main(messages.SOME_USERS_ON_ANOTHER_DRIVE))
    return failures


def validate_edit_drive(actor, drive_id, patch, today=None):
    drive = load(Drive, drive_id)
    if drive is None:
        return [Failure.main(messages.DRIVE_NOT_FOUND)]
    if not is_admin_or_owner(actor, drive):
        return [Failure.main(messages.ADMIN_OR_OWNER_CAN_EDIT)]
    failure = closed_drive_failure(drive)
    if failure:
        return [failure]

    today = today_or(today)
    failures = patch.check_fields(EDITABLE_DRIVE_FIELDS)
    status = drive.status

    # re-submitting a stored value is a no-op, even on a locked field
    if "name" in patch and patch.get("name") != drive.name:
        name = patch.get("name")
        if not can_edit_drive_field("name", status):
            failures.append(Failure("name", messages.DRIVE_NAME_CANNOT_CHANGE))
        elif not isinstance(name, str) or not name.strip():
            failures.append(Failure("name", messages.DRIVE_NAME_REQUIRED))
        elif _name_taken(name, exclude_id=drive.id):
            failures.append(Failure("name", messages.DRIVE_NAME_ALREADY_EXISTS))

    effective_date = drive.drive_date
    if "drive_date" in patch and coerce_date(patch.get("drive_date")) != drive.drive_date:
        new_date = coerce_date(patch.get("drive_date"))
        if not can_edit_drive_field("drive_date", status):
            failures.append(Failure("drive_date", messages.DRIVE_DATE_CANNOT_CHANGE))
        elif new_date is None:
            failures.append(Failure("drive_date", messages.INVALID_DATE))
        elif new_date < today:
            failures.append(Failure("drive_date", messages.FUTURE_DATE_ONLY))
        else:
            effective_date = new_date

    if "technical_rounds" in patch and patch.get("technical_rounds") != drive.technical_rounds:
        rounds = patch.get("technical_rounds")
        if not can_edit_drive_field("technical_rounds", status):
            failures.append(Failure("technical_rounds", messages.DRIVE_TECH_ROUNDS_CANNOT_CHANGE))
        elif not is_strict_int(rounds) or rounds not in TECHNICAL_ROUND_COUNTS:
            failures.append(Failure("technical_rounds", messages.TECH_ROUNDS_SHOULD_BE))

    if "status" in patch:
        target = parse(DriveStatus, patch.get("status"))
        if target is None:
            failures.append(Failure("status", messages.INVALID_DRIVE_STATUS))
        else:
            reason = check_transition(DRIVE_TRANSITIONS, status, target,
                                      {"drive_date": effective_date, "today": today})
            if reason == "":
                if target == DriveStatus.IN_PROPOSAL:
                    reason = messages.DRIVE_STATUS_CANNOT_BE_IN_PROPOSAL
                elif target == DriveStatus.HALTED:
                    reason = messages.DRIVE_NEEDS_TO_START_FIRST
                else:
                    reason = messages.DRIVE_STATUS_TRANSITION_ILLEGAL.format(current=status, target=target.value)
            if reason is not None:
                failures.append(Failure("status", reason))
    return failures


def validate_edit_drive_config(actor, drive_id, patch):
    drive = load(Drive, drive_id)
    if drive is None:
        return [Failure.main(messages.DRIVE_NOT_FOUND)]
    if not is_admin_or_owner(actor, drive):
        return [Failure.main(messages.ADMIN_OR_OWNER_CAN_EDIT)]
    failure = closed_drive_failure(drive)
    if failure:
        return [failure]
    failures = patch.check_fields(CONFIG_SECTIONS)
    sections = {k: v for k, v in patch.items() if k in CONFIG_SECTIONS}
    failures.extend(validate_config_sections(sections))
    return failures


def validate_add_member(actor, drive_id, user_id, role_name, today=None):
    drive = load(Drive, drive_id)
    if drive is None:
        return [Failure.main(messages.DRIVE_NOT_FOUND)]
    if not is_admin_or_owner(actor, drive):
        return [Failure.main(messages.ADMIN_OR_OWNER_CAN_ADD)]
    if not can_add_or_remove_members_or_candidates(drive.status):
        return [Failure.main(messages.CANNOT_ADD_MEMBER_ON_CLOSED_DRIVE)]
    if role_name not in MEMBER_ROLES:
        return [Failure("role", messages.INVALID_MEMBER_ROLE)]
    user = load(User, user_id)
    if user is None:
        return [Failure("user_id", messages.USER_NOT_FOUND)]
    if not user.is_active:
        return [Failure("user_id", messages.USER_INACTIVE)]

    failures = []
    if membership(drive, user.id) is not None:
        failures.append(Failure.main(messages.ALREADY_MEMBER))
    if user.role_name != role_name:
        failures.append(Failure("role", messages.USER_NOT_IN_ROLE))
    if users_busy_on(drive.drive_date, [user.id], exclude_drive_id=drive.id):
        failures.append(Failure.main(messages.USER_ON_ANOTHER_DRIVE))
    return failures


def _removal_preconditions(actor, drive):
    if drive is None:
        return [Failure.main(messages.DRIVE_NOT_FOUND)]
    if not is_admin_or_owner(actor, drive):
        return [Failure.main(messages.ADMIN_OR_OWNER_CAN_REMOVE)]
    failure = closed_drive_failure(drive)
    if failure:
        return [failure]
    if not can_add_or_remove_members_or_candidates(drive.status, removal=True):
        return [Failure.main(messages.CANNOT_REMOVE_ON_STARTED_DRIVE)]
    return []


def validate_remove_member(actor, drive_id, user_id):
    drive = load(Drive, drive_id)
    failures = _removal_preconditions(actor, drive)
    if failures:
        return failures
    if membership(drive, user_id) is None:
        return [Failure.main(messages.DRIVE_MEMBER_NOT_FOUND)]
    return []


def validate_add_candidates(actor, drive_id, candidate_ids):
    drive = load(Drive, drive_id)
    if drive is None:
        return [Failure.main(messages.DRIVE_NOT_FOUND)]
    if not is_admin_or_owner(actor, drive):
        return [Failure.main(messages.ADMIN_OR_OWNER_CAN_ADD)]
    if not can_add_or_remove_members_or_candidates(drive.status):
        return [Failure.main(messages.CANNOT_ADD_CANDIDATES_ON_CLOSED_DRIVE)]
    ids = list(candidate_ids or [])
    if not ids:
        return [Failure("candidate_ids", messages.CANDIDATE_IDS_REQUIRED)]

    failures = []
    unique_ids = set(ids)
    found = Candidate.query.filter(Candidate.id.in_(unique_ids)).count()
    if found != len(unique_ids):
        failures.append(Failure("candidate_ids", messages.SOME_CANDIDATES_NOT_FOUND))
    already = (
        DriveCandidate.query
        .filter(DriveCandidate.drive_id == drive.id, DriveCandidate.candidate_id.in_(unique_ids))
        .first()
    )
    if already is not None:
        failures.append(Failure.main(messages.SOME_CANDIDATE_ALREADY_ADDED))
    return failures


def validate_remove_candidates(actor, drive_id, candidate_ids):
    drive = load(Drive, drive_id)
    failures = _removal_preconditions(actor, drive)
    if failures:
        return failures
    ids = set(candidate_ids or [])
    if not ids:
        return [Failure("candidate_ids", messages.CANDIDATE_IDS_REQUIRED)]
    linked = {dc.candidate_id for dc in drive.candidates}
    if not ids <= linked:
        return [Failure.main(messages.DRIVE_CANDIDATE_NOT_FOUND)]
    return []


def validate_edit_drive_candidate(actor, drive_candidate_id, patch):
    drive_candidate = load(DriveCandidate, drive_candidate_id)
    if drive_candidate is None:
        return [Failure.main(messages.DRIVE_CANDIDATE_NOT_FOUND)]
    drive = drive_candidate.drive
    if drive is None:
        return [Failure.main(messages.DRIVE_NOT_FOUND)]
    if not (is_admin_or_owner(actor, drive) or is_hr_interviewer(actor, drive_candidate)):
        return [Failure.main(messages.ADMIN_OR_OWNER_OR_HR_INTERVIEWER_CAN_EDIT)]
    failure = closed_drive_failure(drive)
    if failure:
        return [failure]

    failures = patch.check_fields(EDITABLE_DRIVE_CANDIDATE_FIELDS)
    if "status" in patch:
        target = parse(CandidateStatus, patch.get("status"))
        if target is None:
            failures.append(Failure("status", messages.INVALID_CANDIDATE_STATUS))
        elif target == CandidateStatus.PENDING:
            failures.append(Failure("status", messages.CANDIDATE_STATUS_CANNOT_BE_PENDING))
        else:
            reason = check_transition(CANDIDATE_STATUS_TRANSITIONS, drive_candidate.status, target,
                                      {"drive_status": drive.status})
            if reason:
                failures.append(Failure("status", reason))
    return failures


def validate_mark_attendance(actor, drive_id, candidate_id, today=None):
    drive_candidate = (
        DriveCandidate.query.filter_by(drive_id=drive_id, candidate_id=candidate_id).first()
        if drive_id and candidate_id else None
    )
    if drive_candidate is None:
        return [Failure.main(messages.DRIVE_CANDIDATE_NOT_FOUND)]
    drive = drive_candidate.drive
    if drive.status != DriveStatus.STARTED.value:
        return [Failure.main(messages.ATTENDANCE_NOT_ALLOWED)]
    if drive.drive_date != today_or(today):
        return [Failure.main(messages.DRIVE_NOT_SCHEDULED_TODAY)]
    if not actor.is_admin and membership(drive, actor.user_id) is None:
        return [Failure.main(messages.NOT_A_DRIVE_MEMBER)]
    if drive_candidate.attendance_status == "Present":
        return [Failure.main(messages.ATTENDANCE_ALREADY_MARKED)]
    return []
