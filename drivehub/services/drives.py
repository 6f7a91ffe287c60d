"""Drive-level commands: creation, staffing, candidate intake, configuration."""
from ..extensions import db
from ..models import (Drive, DriveCandidate, DriveMember, DriveRoleConfiguration,
                      FeedbackConfiguration, NotificationSettings, PanelVisibilitySettings)
from ..validators import (validate_add_candidates, validate_add_member, validate_create_drive,
                          validate_edit_drive, validate_edit_drive_candidate, validate_edit_drive_config,
                          validate_mark_attendance, validate_remove_candidates, validate_remove_member)
from ..validators.common import coerce_date
from ..validators.drive import CONFIG_SECTIONS, ROLE_SECTIONS
from .projections import (drive_candidate_to_dict, drive_config_to_dict, drive_to_dict,
                          member_to_dict)
from .result import CommandResult, command
from .roles import role_id
from .status import CandidateStatus, DriveStatus, UserRole, parse
from .store import unit_of_work

ROLE_CONFIG_DEFAULTS = {
    UserRole.HR.value: {"can_view_feedback": True, "allow_bulk_upload": True},
    UserRole.PANEL.value: {"can_view_feedback": True, "allow_bulk_upload": False},
    UserRole.MENTOR.value: {"allow_bulk_upload": False, "can_edit_submitted_feedback": False},
}

SINGLE_SECTIONS = {
    "panel_visibility": PanelVisibilitySettings,
    "notification_settings": NotificationSettings,
    "feedback_configuration": FeedbackConfiguration,
}

PRESENT = "Present"


def _apply_section(drive, section, values):
    if section in SINGLE_SECTIONS:
        target = getattr(drive, section)
        if target is None:
            target = SINGLE_SECTIONS[section]()
            setattr(drive, section, target)
    else:
        rid = role_id(ROLE_SECTIONS[section])
        target = drive.role_configuration(rid)
        if target is None:
            target = DriveRoleConfiguration(role_id=rid, **ROLE_CONFIG_DEFAULTS[ROLE_SECTIONS[section]])
            drive.role_configurations.append(target)
    for key, value in values.items():
        setattr(target, key, value)


@command
def create_drive(actor, name, drive_date, technical_rounds, hr_ids, panel_ids, mentor_ids,
                 config=None, today=None):
    """Create a drive with its members and every configuration record.

    ``config`` is an optional ``{section: {key: bool}}`` mapping using the
    same sections as :func:`edit_drive_config`; anything omitted takes the
    defaults.
    """
    failures = validate_create_drive(actor, name, drive_date, technical_rounds,
                                     hr_ids, panel_ids, mentor_ids, config=config, today=today)
    if failures:
        return CommandResult.rejected(failures)

    config = config or {}
    with unit_of_work() as session:
        drive = Drive(name=name.strip(), drive_date=coerce_date(drive_date),
                      technical_rounds=technical_rounds, status=DriveStatus.IN_PROPOSAL.value,
                      created_by=actor.user_id)
        for role, ids in ((UserRole.HR.value, hr_ids), (UserRole.MENTOR.value, mentor_ids),
                          (UserRole.PANEL.value, panel_ids)):
            rid = role_id(role)
            for user_id in ids:
                drive.members.append(DriveMember(user_id=user_id, role_id=rid))
        for role, defaults in ROLE_CONFIG_DEFAULTS.items():
            drive.role_configurations.append(DriveRoleConfiguration(role_id=role_id(role), **defaults))
        for section, model in SINGLE_SECTIONS.items():
            setattr(drive, section, model())
        for section, values in config.items():
            _apply_section(drive, section, values)
        session.add(drive)
    return CommandResult(data=drive_to_dict(drive))


@command
def edit_drive(actor, drive_id, patch, today=None):
    failures = validate_edit_drive(actor, drive_id, patch, today=today)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work():
        drive = db.session.get(Drive, drive_id)
        if "name" in patch:
            drive.name = patch.get("name").strip()
        if "drive_date" in patch:
            drive.drive_date = coerce_date(patch.get("drive_date"))
        if "technical_rounds" in patch:
            drive.technical_rounds = patch.get("technical_rounds")
        if "status" in patch:
            drive.status = parse(DriveStatus, patch.get("status")).value
    return CommandResult(data=drive_to_dict(drive))


@command
def edit_drive_config(actor, drive_id, patch):
    failures = validate_edit_drive_config(actor, drive_id, patch)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work():
        drive = db.session.get(Drive, drive_id)
        for section, values in patch.items():
            _apply_section(drive, section, values)
    return CommandResult(data=drive_config_to_dict(drive, CONFIG_SECTIONS, ROLE_SECTIONS))


@command
def add_member(actor, drive_id, user_id, role_name, today=None):
    failures = validate_add_member(actor, drive_id, user_id, role_name, today=today)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work() as session:
        member = DriveMember(drive_id=drive_id, user_id=user_id, role_id=role_id(role_name))
        session.add(member)
    return CommandResult(data=member_to_dict(member))


@command
def remove_member(actor, drive_id, user_id):
    failures = validate_remove_member(actor, drive_id, user_id)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work() as session:
        member = DriveMember.query.filter_by(drive_id=drive_id, user_id=user_id).one()
        data = member_to_dict(member)
        # rounds held by the member go with it
        session.delete(member)
    return CommandResult(data=data)


@command
def add_candidates(actor, drive_id, candidate_ids):
    failures = validate_add_candidates(actor, drive_id, candidate_ids)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work() as session:
        rows = [DriveCandidate(drive_id=drive_id, candidate_id=cid, status=CandidateStatus.PENDING.value)
                for cid in candidate_ids]
        session.add_all(rows)
    return CommandResult(data=[drive_candidate_to_dict(row) for row in rows])


@command
def remove_candidates(actor, drive_id, candidate_ids):
    failures = validate_remove_candidates(actor, drive_id, candidate_ids)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work() as session:
        rows = (DriveCandidate.query
                .filter(DriveCandidate.drive_id == drive_id, DriveCandidate.candidate_id.in_(set(candidate_ids)))
                .order_by(DriveCandidate.id)
                .all())
        data = [drive_candidate_to_dict(row) for row in rows]
        for row in rows:
            session.delete(row)
    return CommandResult(data=data)


@command
def edit_drive_candidate(actor, drive_candidate_id, patch):
    failures = validate_edit_drive_candidate(actor, drive_candidate_id, patch)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work():
        drive_candidate = db.session.get(DriveCandidate, drive_candidate_id)
        if "status" in patch:
            drive_candidate.status = parse(CandidateStatus, patch.get("status")).value
            drive_candidate.status_set_by = actor.user_id
    return CommandResult(data=drive_candidate_to_dict(drive_candidate))


@command
def mark_attendance(actor, drive_id, candidate_id, today=None):
    failures = validate_mark_attendance(actor, drive_id, candidate_id, today=today)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work():
        drive_candidate = DriveCandidate.query.filter_by(drive_id=drive_id, candidate_id=candidate_id).one()
        drive_candidate.attendance_status = PRESENT
    return CommandResult(data=drive_candidate_to_dict(drive_candidate))
