"""Panel assignment: round-robin auto-assign and single-round reassignment."""
from datetime import datetime

from flask import current_app

from ..extensions import db, rq
from ..jobs.notify import notify_panel_assignment
from ..models import CandidateReassignment, Drive, DriveMember, Round
from ..validators import validate_auto_assign, validate_reassign
from ..validators.panel import panel_members
from . import messages
from .projections import reassignment_to_dict, round_to_dict
from .result import CommandResult, command
from .status import RoundResult, RoundStatus, RoundType
from .store import unit_of_work


def round_robin(candidates, panel):
    """Pair candidate ``i`` with ``panel[i mod len(panel)]``."""
    return [(candidate, panel[i % len(panel)]) for i, candidate in enumerate(candidates)]


def _notifications_enabled(drive):
    settings = drive.notification_settings
    return bool(settings and settings.email_notification_enabled)


def _notify(assignments):
    """assignments: {member_id: [drive_candidate_id, ...]}"""
    for member_id, drive_candidate_ids in assignments.items():
        rq.enqueue(notify_panel_assignment, member_id, drive_candidate_ids, job_timeout=120)


@command
def auto_assign_panel(actor, drive_id, today=None):
    failures = validate_auto_assign(actor, drive_id, today=today)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work() as session:
        drive = db.session.get(Drive, drive_id)
        candidates = sorted(drive.candidates, key=lambda dc: dc.id)
        rounds = []
        for drive_candidate, member in round_robin(candidates, panel_members(drive)):
            rnd = Round(drive_candidate=drive_candidate, interviewer=member,
                        round_type=RoundType.TECH1.value, status=RoundStatus.SCHEDULED.value,
                        result=RoundResult.PENDING.value)
            session.add(rnd)
            rounds.append(rnd)

    current_app.logger.info("Assigned %d candidates on drive %s", len(rounds), drive_id)
    if _notifications_enabled(drive):
        assignments = {}
        for rnd in rounds:
            assignments.setdefault(rnd.interviewer_id, []).append(rnd.drive_candidate_id)
        _notify(assignments)
    return CommandResult(data=[round_to_dict(rnd, include_feedback=False) for rnd in rounds])


@command
def reassign_interviewer(actor, round_id, old_member_id, new_member_id, require_approval=False):
    """Move a round to another panel member of the same drive.

    The swap is applied immediately whatever ``require_approval`` says; the
    flag is only recorded on the audit row.
    """
    failures = validate_reassign(actor, round_id, old_member_id, new_member_id)
    if failures:
        return CommandResult.rejected(failures)

    warnings = []
    with unit_of_work() as session:
        rnd = db.session.get(Round, round_id)
        rnd.interviewer = db.session.get(DriveMember, new_member_id)
        now = datetime.now()
        audit = CandidateReassignment(drive_candidate_id=rnd.drive_candidate_id,
                                      previous_member_id=old_member_id, new_member_id=new_member_id,
                                      requested_by=actor.user_id, require_approval=bool(require_approval),
                                      requested_date=now)
        if require_approval:
            warnings.append(messages.REASSIGNMENT_APPROVAL_PENDING)
        else:
            audit.approved_by = actor.user_id
            audit.approved_date = now
        session.add(audit)

    drive = rnd.drive_candidate.drive
    if _notifications_enabled(drive):
        _notify({new_member_id: [rnd.drive_candidate_id]})
    data = round_to_dict(rnd)
    data["reassignment"] = reassignment_to_dict(audit)
    return CommandResult(data=data, warnings=warnings)
