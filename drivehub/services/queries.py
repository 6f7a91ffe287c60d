"""Read projections. Nothing in here mutates state."""
from datetime import date, datetime, time, timedelta

from flask import current_app

from ..extensions import db
from ..models import (Availability, Candidate, Drive, DriveCandidate, DriveMember, Feedback, Role,
                      Round, User)
from ..validators.common import coerce_date, users_busy_on
from ..validators.drive import CONFIG_SECTIONS, ROLE_SECTIONS
from .projections import (availability_to_dict, candidate_to_dict, drive_candidate_to_dict,
                          drive_config_to_dict, drive_to_dict, feedback_to_dict, member_to_dict,
                          mentor_candidate_to_dict, round_to_dict, user_to_dict, visibility_for)
from .status import DriveStatus, UserRole


def _page(query, page, per_page, to_dict):
    per_page = per_page or current_app.config.get("DEFAULT_PAGE_SIZE", 20)
    pagination = query.paginate(page=page or 1, per_page=per_page, error_out=False)
    return {
        "items": [to_dict(row) for row in pagination.items],
        "page": pagination.page,
        "per_page": pagination.per_page,
        "total": pagination.total,
    }


def list_drives(status=None, creator_email=None, technical_rounds=None, include_past=False,
                start_date=None, end_date=None, page=1, per_page=None, today=None):
    q = Drive.query
    if status:
        q = q.filter(Drive.status == status)
    if creator_email:
        q = q.join(User, Drive.created_by == User.id).filter(User.email == creator_email)
    if technical_rounds:
        q = q.filter(Drive.technical_rounds == technical_rounds)
    if not include_past:
        q = q.filter(Drive.drive_date >= (today or date.today()))
    if coerce_date(start_date):
        q = q.filter(Drive.drive_date >= coerce_date(start_date))
    if coerce_date(end_date):
        q = q.filter(Drive.drive_date <= coerce_date(end_date))
    q = q.order_by(Drive.drive_date.desc(), Drive.id.desc())
    return _page(q, page, per_page, drive_to_dict)


def get_drive(drive_id):
    drive = db.session.get(Drive, drive_id)
    return drive_to_dict(drive) if drive else None


def get_drive_config(drive_id):
    drive = db.session.get(Drive, drive_id)
    if drive is None:
        return None
    return drive_config_to_dict(drive, CONFIG_SECTIONS, ROLE_SECTIONS)


def list_drive_members(drive_id=None, role=None, user_id=None, page=1, per_page=None):
    q = DriveMember.query
    if drive_id:
        q = q.filter(DriveMember.drive_id == drive_id)
    if user_id:
        q = q.filter(DriveMember.user_id == user_id)
    if role:
        q = q.join(Role, DriveMember.role_id == Role.id).filter(Role.name == role)
    q = q.order_by(DriveMember.id.desc())
    return _page(q, page, per_page, member_to_dict)


def list_drive_candidates(drive_id=None, status=None, candidate_id=None, attendance_status=None,
                          page=1, per_page=None, actor=None):
    q = DriveCandidate.query
    if drive_id:
        q = q.filter(DriveCandidate.drive_id == drive_id)
    if status:
        q = q.filter(DriveCandidate.status == status)
    if candidate_id:
        q = q.filter(DriveCandidate.candidate_id == candidate_id)
    if attendance_status:
        q = q.filter(DriveCandidate.attendance_status == attendance_status)
    q = q.order_by(DriveCandidate.created_date.desc(), DriveCandidate.id.desc())
    return _page(q, page, per_page,
                 lambda dc: drive_candidate_to_dict(dc, visibility_for(actor, dc.drive)))


def list_rounds(drive_id=None, drive_candidate_id=None, interviewer_user_id=None, round_type=None,
                status=None, result=None, page=1, per_page=None):
    q = Round.query.join(DriveCandidate, Round.drive_candidate_id == DriveCandidate.id)
    if drive_id:
        q = q.filter(DriveCandidate.drive_id == drive_id)
    if drive_candidate_id:
        q = q.filter(Round.drive_candidate_id == drive_candidate_id)
    if interviewer_user_id:
        q = q.join(DriveMember, Round.interviewer_id == DriveMember.id).filter(
            DriveMember.user_id == interviewer_user_id)
    if round_type:
        q = q.filter(Round.round_type == round_type)
    if status:
        q = q.filter(Round.status == status)
    if result:
        q = q.filter(Round.result == result)
    q = q.order_by(Round.id.desc())
    return _page(q, page, per_page, lambda r: round_to_dict(r, include_feedback=False))


def get_round(round_id):
    rnd = db.session.get(Round, round_id)
    return round_to_dict(rnd) if rnd else None


def get_feedback(feedback_id):
    return feedback_to_dict(db.session.get(Feedback, feedback_id))


def _created_window(q, column, start_date, end_date):
    start, end = coerce_date(start_date), coerce_date(end_date)
    if start:
        q = q.filter(column >= datetime.combine(start, time.min))
    if end:
        q = q.filter(column < datetime.combine(end + timedelta(days=1), time.min))
    return q


def _by_age(q, created, name, latest_first):
    """None sorts by name; True newest first; False oldest first."""
    if latest_first is None:
        return q.order_by(name, created.desc())
    if latest_first:
        return q.order_by(created.desc(), name)
    return q.order_by(created, name)


# -- candidates -------------------------------------------------------------

def list_candidates(experience_level=None, latest_first=None, start_date=None, end_date=None,
                    page=1, per_page=None):
    q = Candidate.query
    if experience_level:
        q = q.filter(Candidate.experience_level == experience_level)
    q = _created_window(q, Candidate.created_at, start_date, end_date)
    q = _by_age(q, Candidate.created_at, Candidate.full_name, latest_first)
    return _page(q, page, per_page, candidate_to_dict)


def get_candidate(candidate_id):
    candidate = db.session.get(Candidate, candidate_id)
    return candidate_to_dict(candidate) if candidate else None


def panel_assigned_candidates(user_id):
    """Distinct candidates the user interviews, or interviewed, as a Panel member."""
    interviewed = (
        db.select(DriveCandidate.candidate_id)
        .join(Round, Round.drive_candidate_id == DriveCandidate.id)
        .join(DriveMember, Round.interviewer_id == DriveMember.id)
        .join(Role, DriveMember.role_id == Role.id)
        .where(DriveMember.user_id == user_id, Role.name == UserRole.PANEL.value)
    )
    rows = (Candidate.query.filter(Candidate.id.in_(interviewed))
            .order_by(Candidate.full_name, Candidate.id).all())
    return [candidate_to_dict(c) for c in rows]


# -- users ------------------------------------------------------------------

def list_users(role=None, is_active=None, latest_first=None, start_date=None, end_date=None,
               page=1, per_page=None):
    q = User.query
    if role:
        q = q.join(Role, User.role_id == Role.id).filter(Role.name == role)
    if is_active is not None:
        q = q.filter(User.is_active == is_active)
    q = _created_window(q, User.created_at, start_date, end_date)
    q = _by_age(q, User.created_at, User.full_name, latest_first)
    return _page(q, page, per_page, user_to_dict)


def get_user(user_id):
    user = db.session.get(User, user_id)
    return user_to_dict(user) if user else None


def users_available_on(on_date):
    """Active users who offered ``on_date`` and sit on no open drive that day."""
    day = coerce_date(on_date)
    if day is None:
        return []
    users = (
        User.query.join(Availability, Availability.user_id == User.id)
        .filter(Availability.availability_date == day, User.is_active.is_(True))
        .order_by(User.full_name, User.id)
        .all()
    )
    busy = users_busy_on(day, [u.id for u in users])
    return [user_to_dict(u) for u in users if u.id not in busy]


def panel_availability(user_id):
    """Panel members of the proposed or started drives ``user_id`` belongs to.

    Each entry carries the user, the drives they share with ``user_id`` and
    every day they have offered. None when the user does not exist.
    """
    if db.session.get(User, user_id) is None:
        return None
    open_statuses = (DriveStatus.IN_PROPOSAL.value, DriveStatus.STARTED.value)
    drive_ids = [
        row[0] for row in
        db.session.query(DriveMember.drive_id)
        .join(Drive, DriveMember.drive_id == Drive.id)
        .filter(DriveMember.user_id == user_id, Drive.status.in_(open_statuses))
        .distinct()
    ]
    if not drive_ids:
        return []

    members = (
        DriveMember.query
        .join(Role, DriveMember.role_id == Role.id)
        .filter(DriveMember.drive_id.in_(drive_ids), Role.name == UserRole.PANEL.value)
        .order_by(DriveMember.user_id, DriveMember.drive_id)
        .all()
    )
    grouped = {}
    for member in members:
        grouped.setdefault(member.user_id, []).append(member)
    days = {}
    for row in (Availability.query.filter(Availability.user_id.in_(list(grouped)))
                .order_by(Availability.availability_date)):
        days.setdefault(row.user_id, []).append(availability_to_dict(row))

    return [
        {
            "user": user_to_dict(rows[0].user),
            "drives": [drive_to_dict(m.drive) for m in rows],
            "availabilities": days.get(uid, []),
        }
        for uid, rows in grouped.items()
    ]


def mentor_drives(user_id):
    """Drives the user mentors, each with its candidates and their latest round."""
    if db.session.get(User, user_id) is None:
        return None
    drives = (
        Drive.query
        .join(DriveMember, DriveMember.drive_id == Drive.id)
        .join(Role, DriveMember.role_id == Role.id)
        .filter(DriveMember.user_id == user_id, Role.name == UserRole.MENTOR.value)
        .order_by(Drive.drive_date.desc(), Drive.id.desc())
        .all()
    )
    return [
        {
            "drive_id": drive.id,
            "name": drive.name,
            "drive_date": drive.drive_date.isoformat(),
            "status": drive.status,
            "candidates": [mentor_candidate_to_dict(dc) for dc in drive.candidates],
        }
        for drive in drives
    ]
