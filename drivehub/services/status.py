"""Status enumerations and the legality tables for every stateful entity.

Everything in here is pure: no database access, no Flask. Validators and
tests both go through :func:`is_transition_legal` so there is exactly one
place that decides whether ``current -> target`` is allowed.

A transition table maps a current state to ``{target: guard}``. ``guard`` is
either ``None`` (always allowed) or a ``(predicate, message)`` pair; the
predicate receives the context mapping passed by the caller.
"""
from datetime import date, timedelta
from enum import Enum


class DriveStatus(str, Enum):
    IN_PROPOSAL = "InProposal"
    STARTED = "Started"
    HALTED = "Halted"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


class CandidateStatus(str, Enum):
    PENDING = "Pending"
    SELECTED = "Selected"
    REJECTED = "Rejected"


class RoundType(str, Enum):
    HR = "Hr"
    TECH1 = "Tech1"
    TECH2 = "Tech2"


class RoundStatus(str, Enum):
    SCHEDULED = "Scheduled"
    ON_PROCESS = "OnProcess"
    COMPLETED = "Completed"
    SKIPPED = "Skipped"


class RoundResult(str, Enum):
    PENDING = "Pending"
    SELECTED = "Selected"
    REJECTED = "Rejected"


class Recommendation(str, Enum):
    NA = "NA"
    NO_HIRE = "NoHire"
    MAYBE = "Maybe"
    HIRE = "Hire"


class UserRole(str, Enum):
    ADMIN = "Admin"
    HR = "HR"
    PANEL = "Panel"
    MENTOR = "Mentor"


class ExperienceLevel(str, Enum):
    FRESHER = "Fresher"
    INTERMEDIATE = "Intermediate"
    EXPERIENCED = "Experienced"


RATING_NUMBERS = (1, 2, 3, 4, 5)
CLOSED_DRIVE_STATUSES = (DriveStatus.COMPLETED, DriveStatus.CANCELLED)
CLOSED_ROUND_STATUSES = (RoundStatus.COMPLETED, RoundStatus.SKIPPED)
DRIVE_FIELDS_LOCKED_AFTER_PROPOSAL = ("name", "drive_date", "technical_rounds")


def next_monday(today):
    """The first Monday strictly after ``today``."""
    return today + timedelta(days=(7 - today.weekday()) or 7)


def values(enum_cls):
    return [member.value for member in enum_cls]


def parse(enum_cls, raw):
    """Return the member of ``enum_cls`` whose value is ``raw``, or None."""
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(raw)
    except ValueError:
        return None


# -- guards ---------------------------------------------------------------

def _drive_date_reached(ctx):
    return ctx["drive_date"] <= ctx["today"]


def _round_result_set(ctx):
    return ctx["result"] != RoundResult.PENDING


def _round_started(ctx):
    return ctx["round_status"] != RoundStatus.SCHEDULED


def _drive_started(ctx):
    return ctx["drive_status"] != DriveStatus.IN_PROPOSAL


NOT_BEFORE_DRIVE_DATE = (_drive_date_reached, "Drive cannot start before scheduled date")
RESULT_BEFORE_CLOSE = (_round_result_set, "Need to set Round Result before closing Round")
ROUND_STARTED = (_round_started, "Need to start Round before setting Round Result")
DRIVE_STARTED = (_drive_started, "Drive needs to be started first")


# -- tables ---------------------------------------------------------------

DRIVE_TRANSITIONS = {
    DriveStatus.IN_PROPOSAL: {
        DriveStatus.STARTED: NOT_BEFORE_DRIVE_DATE,
        DriveStatus.COMPLETED: None,
        DriveStatus.CANCELLED: None,
    },
    DriveStatus.STARTED: {
        DriveStatus.STARTED: None,
        DriveStatus.HALTED: None,
        DriveStatus.COMPLETED: None,
        DriveStatus.CANCELLED: None,
    },
    DriveStatus.HALTED: {
        DriveStatus.HALTED: None,
        DriveStatus.STARTED: NOT_BEFORE_DRIVE_DATE,
        DriveStatus.COMPLETED: None,
        DriveStatus.CANCELLED: None,
    },
    DriveStatus.COMPLETED: {},
    DriveStatus.CANCELLED: {},
}

ROUND_STATUS_TRANSITIONS = {
    RoundStatus.SCHEDULED: {
        RoundStatus.SCHEDULED: None,
        RoundStatus.ON_PROCESS: None,
        RoundStatus.SKIPPED: None,
    },
    RoundStatus.ON_PROCESS: {
        RoundStatus.ON_PROCESS: None,
        RoundStatus.COMPLETED: RESULT_BEFORE_CLOSE,
    },
    RoundStatus.COMPLETED: {},
    RoundStatus.SKIPPED: {},
}

ROUND_RESULT_TRANSITIONS = {
    RoundResult.PENDING: {
        RoundResult.SELECTED: ROUND_STARTED,
        RoundResult.REJECTED: ROUND_STARTED,
    },
    RoundResult.SELECTED: {
        RoundResult.SELECTED: ROUND_STARTED,
        RoundResult.REJECTED: ROUND_STARTED,
    },
    RoundResult.REJECTED: {
        RoundResult.REJECTED: ROUND_STARTED,
        RoundResult.SELECTED: ROUND_STARTED,
    },
}

CANDIDATE_STATUS_TRANSITIONS = {
    CandidateStatus.PENDING: {
        CandidateStatus.SELECTED: DRIVE_STARTED,
        CandidateStatus.REJECTED: DRIVE_STARTED,
    },
    CandidateStatus.SELECTED: {
        CandidateStatus.SELECTED: DRIVE_STARTED,
        CandidateStatus.REJECTED: DRIVE_STARTED,
    },
    CandidateStatus.REJECTED: {
        CandidateStatus.REJECTED: DRIVE_STARTED,
        CandidateStatus.SELECTED: DRIVE_STARTED,
    },
}


def check_transition(table, current, target, context=None):
    """Return None when ``current -> target`` is legal, else the reason.

    The reason is the guard's message when the edge exists but its guard
    fails, or ``""`` when the edge does not exist at all. Raw strings loaded
    from the database are accepted for both states.
    """
    enum_cls = type(next(iter(table)))
    edges = table.get(parse(enum_cls, current), {})
    target = parse(enum_cls, target)
    if target not in edges:
        return ""
    guard = edges[target]
    if guard is None:
        return None
    predicate, message = guard
    if predicate(context or {}):
        return None
    return message


def is_transition_legal(table, current, target, context=None):
    return check_transition(table, current, target, context) is None


# -- decision functions ---------------------------------------------------

def can_edit_drive(status):
    return status not in CLOSED_DRIVE_STATUSES


def can_edit_drive_field(field, status, target_status=None, drive_date=None, today=None):
    """Field-level editability of a drive.

    ``name``, ``drive_date`` and ``technical_rounds`` are frozen once the
    drive leaves InProposal. ``status`` goes through the drive table.
    """
    if not can_edit_drive(status):
        return False
    if field in DRIVE_FIELDS_LOCKED_AFTER_PROPOSAL:
        return status == DriveStatus.IN_PROPOSAL
    if field == "status":
        context = {"drive_date": drive_date, "today": today or date.today()}
        return is_transition_legal(DRIVE_TRANSITIONS, status, target_status, context)
    return False


def can_add_or_remove_members_or_candidates(status, removal=False):
    if not can_edit_drive(status):
        return False
    if removal:
        return status == DriveStatus.IN_PROPOSAL
    return True


def can_edit_round(drive_status, round_status):
    if drive_status in CLOSED_DRIVE_STATUSES:
        return False
    if drive_status in (DriveStatus.HALTED, DriveStatus.IN_PROPOSAL):
        return False
    return round_status not in CLOSED_ROUND_STATUSES


def round_status_transition_legal(new_status, current_result):
    if new_status == RoundStatus.COMPLETED:
        return current_result != RoundResult.PENDING
    return True


def round_result_transition_legal(new_result, current_round_status):
    return current_round_status != RoundStatus.SCHEDULED


def derive_round_result(recommendation):
    return {
        Recommendation.HIRE: RoundResult.SELECTED,
        Recommendation.MAYBE: RoundResult.SELECTED,
        Recommendation.NO_HIRE: RoundResult.REJECTED,
    }.get(parse(Recommendation, recommendation), RoundResult.PENDING)


def derive_candidate_status(round_type, round_result):
    """Candidate status implied by a round result, or None for non-Hr rounds."""
    if round_type != RoundType.HR:
        return None
    return {
        RoundResult.SELECTED: CandidateStatus.SELECTED,
        RoundResult.REJECTED: CandidateStatus.REJECTED,
    }.get(parse(RoundResult, round_result), CandidateStatus.PENDING)


def candidate_status_transition_legal(new_status, drive_status):
    if new_status == CandidateStatus.PENDING:
        return False
    return drive_status != DriveStatus.IN_PROPOSAL
