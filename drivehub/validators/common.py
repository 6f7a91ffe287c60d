"""Lookups and authorization checks shared by the validators."""
from datetime import date

from ..extensions import db
from ..models import Drive, DriveMember, Round
from ..services import messages
from ..services.result import Failure
from ..services.status import (CLOSED_DRIVE_STATUSES, DriveStatus, RoundType,
                               can_edit_drive, can_edit_round, parse)


def today_or(today):
    return today or date.today()


def load(model, ident):
    if ident is None:
        return None
    try:
        ident = int(ident)
    except (TypeError, ValueError):
        return None
    return db.session.get(model, ident)


def is_admin_or_owner(actor, drive):
    return actor.is_admin or actor.owns(drive)


def is_round_interviewer(actor, rnd):
    return rnd.interviewer is not None and rnd.interviewer.user_id == actor.user_id


def is_hr_interviewer(actor, drive_candidate):
    return (
        Round.query.join(DriveMember, Round.interviewer_id == DriveMember.id)
        .filter(Round.drive_candidate_id == drive_candidate.id,
                Round.round_type == RoundType.HR.value,
                DriveMember.user_id == actor.user_id)
        .first()
        is not None
    )


def membership(drive, user_id):
    return next((m for m in drive.members if m.user_id == user_id), None)


def users_busy_on(drive_date, user_ids, exclude_drive_id=None):
    """Ids among ``user_ids`` that sit on another open drive dated ``drive_date``."""
    if not user_ids or drive_date is None:
        return set()
    q = (
        db.session.query(DriveMember.user_id)
        .join(Drive, DriveMember.drive_id == Drive.id)
        .filter(DriveMember.user_id.in_(list(user_ids)),
                Drive.drive_date == drive_date,
                Drive.status.notin_([s.value for s in CLOSED_DRIVE_STATUSES]))
    )
    if exclude_drive_id is not None:
        q = q.filter(Drive.id != exclude_drive_id)
    return {row[0] for row in q.all()}


def closed_drive_failure(drive):
    if not can_edit_drive(drive.status):
        return Failure.main(messages.CLOSED_DRIVE_CANNOT_BE_EDITED)
    return None


def round_window_failure(drive, rnd):
    """The first reason the round cannot be touched right now, or None."""
    if can_edit_round(drive.status, rnd.status):
        return None
    status = parse(DriveStatus, drive.status)
    if status in CLOSED_DRIVE_STATUSES:
        return Failure.main(messages.CLOSED_DRIVE_CANNOT_BE_EDITED)
    if status == DriveStatus.HALTED:
        return Failure.main(messages.HALTED_DRIVE_CANNOT_BE_EDITED)
    if status == DriveStatus.IN_PROPOSAL:
        return Failure.main(messages.DRIVE_NEEDS_TO_START_FIRST)
    return Failure.main(messages.ROUND_CLOSED)


def load_round_context(actor, round_id):
    """Resolve round and drive and run the shared round/feedback preconditions.

    Returns ``(round, drive, failures)``; a non-empty ``failures`` means the
    rest of the rule group must not run.
    """
    rnd = load(Round, round_id)
    if rnd is None:
        return None, None, [Failure.main(messages.ROUND_NOT_FOUND)]
    drive = rnd.drive_candidate.drive if rnd.drive_candidate else None
    if drive is None:
        return rnd, None, [Failure.main(messages.DRIVE_NOT_FOUND)]
    if not (is_admin_or_owner(actor, drive) or is_round_interviewer(actor, rnd)):
        return rnd, drive, [Failure.main(messages.ADMIN_OR_OWNER_OR_INTERVIEWER_CAN_EDIT)]
    failure = round_window_failure(drive, rnd)
    if failure is not None:
        return rnd, drive, [failure]
    return rnd, drive, []


def coerce_date(value):
    """Accept a ``date`` or an ISO string; anything else returns None."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def is_strict_int(value):
    return isinstance(value, int) and not isinstance(value, bool)
