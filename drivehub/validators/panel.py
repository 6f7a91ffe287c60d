from ..models import Drive, DriveMember, Round
from ..services import messages
from ..services.result import Failure
from ..services.status import DriveStatus, RoundType, UserRole
from .common import (closed_drive_failure, is_admin_or_owner, is_strict_int,
                     load, membership, today_or)


def panel_members(drive):
    return sorted((m for m in drive.members if m.role and m.role.name == UserRole.PANEL.value),
                  key=lambda m: m.id)


def tech1_assigned(drive):
    return any(r.round_type == RoundType.TECH1.value for dc in drive.candidates for r in dc.rounds)


def validate_auto_assign(actor, drive_id, today=None):
    drive = load(Drive, drive_id)
    if drive is None:
        return [Failure.main(messages.DRIVE_NOT_FOUND)]
    if not is_admin_or_owner(actor, drive):
        return [Failure.main(messages.ADMIN_OR_OWNER_CAN_EDIT)]

    failures = []
    if drive.drive_date <= today_or(today):
        failures.append(Failure.main(messages.DRIVE_DATE_NOT_IN_FUTURE))
    if drive.status != DriveStatus.IN_PROPOSAL.value:
        failures.append(Failure.main(messages.DRIVE_NOT_IN_PROPOSAL))
    if failures:
        return failures

    if not drive.candidates:
        failures.append(Failure.main(messages.NO_CANDIDATES_IN_DRIVE))
    if not panel_members(drive):
        failures.append(Failure.main(messages.NO_PANEL_MEMBERS_IN_DRIVE))
    if not failures and tech1_assigned(drive):
        failures.append(Failure.main(messages.PANEL_ALREADY_ASSIGNED))
    return failures


def can_reassign(actor, drive):
    if is_admin_or_owner(actor, drive):
        return True
    member = membership(drive, actor.user_id)
    if member is None or member.role is None or member.role.name != UserRole.HR.value:
        return False
    config = drive.role_configuration(member.role_id)
    return bool(config and config.allow_panel_reassign)


def validate_reassign(actor, round_id, old_member_id, new_member_id):
    failures = []
    if not is_strict_int(round_id) or round_id <= 0:
        failures.append(Failure("round_id", messages.ROUND_ID_INVALID))
    if not is_strict_int(old_member_id) or old_member_id <= 0:
        failures.append(Failure("old_interviewer_id", messages.OLD_INTERVIEWER_REQUIRED))
    if not is_strict_int(new_member_id) or new_member_id <= 0:
        failures.append(Failure("new_interviewer_id", messages.NEW_INTERVIEWER_REQUIRED))
    elif new_member_id == old_member_id:
        failures.append(Failure("new_interviewer_id", messages.NEW_INTERVIEWER_SAME_AS_OLD))
    if failures:
        return failures

    rnd = load(Round, round_id)
    if rnd is None:
        return [Failure.main(messages.ROUND_NOT_FOUND)]
    drive = rnd.drive_candidate.drive
    if not can_reassign(actor, drive):
        return [Failure.main(messages.NOT_ALLOWED_TO_REASSIGN)]
    failure = closed_drive_failure(drive)
    if failure:
        return [failure]
    if rnd.interviewer_id != old_member_id:
        return [Failure.main(messages.INTERVIEWER_NOT_ASSIGNED)]

    new_member = load(DriveMember, new_member_id)
    if (new_member is None or new_member.drive_id != drive.id
            or new_member.role is None or new_member.role.name != UserRole.PANEL.value):
        return [Failure("new_interviewer_id", messages.INVALID_PANEL_INTERVIEWER)]
    return []
