"""Plain-dict views of the models, as returned by commands and queries."""
from .status import UserRole

CANDIDATE_VISIBILITY = {
    "phone": "show_phone",
    "email": "show_email",
    "previous_company": "show_previous_company",
    "college": "show_college",
    "address": "show_address",
    "resume_url": "show_resume",
    "linkedin_url": "show_linkedin",
    "github_url": "show_github",
}


def _iso(value):
    return value.isoformat() if value is not None else None


def user_to_dict(user):
    return {
        "id": user.id,
        "full_name": user.full_name,
        "email": user.email,
        "phone": user.phone,
        "role": user.role_name,
        "is_active": user.is_active,
    }


def drive_to_dict(drive):
    return {
        "id": drive.id,
        "name": drive.name,
        "drive_date": _iso(drive.drive_date),
        "technical_rounds": drive.technical_rounds,
        "status": drive.status,
        "created_by": drive.created_by,
        "created_by_email": drive.creator.email if drive.creator else None,
        "created_date": _iso(drive.created_date),
    }


def member_to_dict(member):
    user = member.user
    return {
        "id": member.id,
        "drive_id": member.drive_id,
        "user_id": member.user_id,
        "role": member.role.name if member.role else None,
        "full_name": user.full_name if user else None,
        "email": user.email if user else None,
    }


def candidate_to_dict(candidate, visibility=None):
    data = {
        "id": candidate.id,
        "full_name": candidate.full_name,
        "email": candidate.email,
        "phone": candidate.phone,
        "college": candidate.college,
        "previous_company": candidate.previous_company,
        "experience_level": candidate.experience_level,
        "address": candidate.address,
        "tech_stack": list(candidate.tech_stack or []),
        "resume_url": candidate.resume_url,
        "linkedin_url": candidate.linkedin_url,
        "github_url": candidate.github_url,
        "created_at": _iso(candidate.created_at),
    }
    if visibility is not None:
        for key, flag in CANDIDATE_VISIBILITY.items():
            if not getattr(visibility, flag):
                data.pop(key)
    return data


def availability_to_dict(availability):
    return {
        "id": availability.id,
        "user_id": availability.user_id,
        "availability_date": _iso(availability.availability_date),
    }


def mentor_candidate_to_dict(drive_candidate):
    """A drive candidate with its latest round and that round's interviewer."""
    candidate = drive_candidate.candidate
    latest = max(drive_candidate.rounds, key=lambda r: r.id, default=None)
    interviewer = latest.interviewer.user if latest is not None and latest.interviewer else None
    return {
        "candidate_id": candidate.id,
        "full_name": candidate.full_name,
        "email": candidate.email,
        "phone": candidate.phone,
        "address": candidate.address,
        "college": candidate.college,
        "previous_company": candidate.previous_company,
        "attendance_status": drive_candidate.attendance_status,
        "status": drive_candidate.status,
        "round_type": latest.round_type if latest else None,
        "round_status": latest.status if latest else None,
        "round_result": latest.result if latest else None,
        "interviewer": user_to_dict(interviewer) if interviewer else None,
    }


def drive_candidate_to_dict(drive_candidate, visibility=None):
    return {
        "id": drive_candidate.id,
        "drive_id": drive_candidate.drive_id,
        "candidate": candidate_to_dict(drive_candidate.candidate, visibility),
        "status": drive_candidate.status,
        "status_set_by": drive_candidate.status_set_by,
        "attendance_status": drive_candidate.attendance_status,
        "created_date": _iso(drive_candidate.created_date),
    }


def feedback_to_dict(feedback):
    if feedback is None:
        return None
    return {
        "id": feedback.id,
        "overall_rating": feedback.overall_rating,
        "technical_skill": feedback.technical_skill,
        "communication": feedback.communication,
        "problem_solving": feedback.problem_solving,
        "overall_feedback": feedback.overall_feedback,
        "recommendation": feedback.recommendation,
        "submitted_date": _iso(feedback.submitted_date),
    }


def round_to_dict(rnd, include_feedback=True):
    data = {
        "id": rnd.id,
        "drive_id": rnd.drive_id,
        "drive_candidate_id": rnd.drive_candidate_id,
        "candidate_id": rnd.drive_candidate.candidate_id if rnd.drive_candidate else None,
        "interviewer_id": rnd.interviewer_id,
        "interviewer_user_id": rnd.interviewer.user_id if rnd.interviewer else None,
        "round_type": rnd.round_type,
        "status": rnd.status,
        "result": rnd.result,
        "feedback_id": rnd.feedback_id,
    }
    if include_feedback:
        data["feedback"] = feedback_to_dict(rnd.feedback)
    return data


def reassignment_to_dict(row):
    return {
        "id": row.id,
        "drive_candidate_id": row.drive_candidate_id,
        "previous_member_id": row.previous_member_id,
        "new_member_id": row.new_member_id,
        "requested_by": row.requested_by,
        "require_approval": row.require_approval,
        "requested_date": _iso(row.requested_date),
        "approved_by": row.approved_by,
        "approved_date": _iso(row.approved_date),
    }


def _columns(obj, keys):
    return {key: getattr(obj, key) for key in keys} if obj is not None else None


def drive_config_to_dict(drive, sections, role_sections):
    data = {"drive_id": drive.id}
    data["panel_visibility"] = _columns(drive.panel_visibility, sections["panel_visibility"])
    data["notification_settings"] = _columns(drive.notification_settings, sections["notification_settings"])
    data["feedback_configuration"] = _columns(drive.feedback_configuration, sections["feedback_configuration"])
    for section, role in role_sections.items():
        config = next((c for c in drive.role_configurations if c.role and c.role.name == role), None)
        data[section] = _columns(config, ("allow_bulk_upload", "can_view_feedback", "can_edit_submitted_feedback",
                                          "allow_panel_reassign", "require_approval_for_reassignment"))
    return data


def visibility_for(actor, drive):
    """Panel interviewers only see the candidate fields the drive exposes."""
    if actor is not None and actor.role == UserRole.PANEL.value:
        return drive.panel_visibility
    return None
