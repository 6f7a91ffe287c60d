"""Entity store adapter over the Flask-SQLAlchemy session.

Each command runs inside :func:`unit_of_work`: a single commit at the end,
rollback on any exception. Unique violations raised by the database are
matched against the known constraints and re-raised as
:class:`ConflictError`, carrying the same failure the pre-check produces.
"""
from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from . import messages
from .result import Failure, Rejected

# (constraint name, sqlite column list) -> failure
UNIQUE_VIOLATIONS = [
    (("uq_availabilities_user_date", "availabilities.user_id, availabilities.availability_date"),
     Failure("dates", messages.AVAILABILITY_ALREADY_SET)),
    (("uq_candidates_email", "candidates.email"),
     Failure.main(messages.EMAIL_OR_PHONE_ALREADY_EXISTS)),
    (("uq_candidates_phone", "candidates.phone"),
     Failure.main(messages.EMAIL_OR_PHONE_ALREADY_EXISTS)),
    (("uq_drive_candidates_drive_candidate", "drive_candidates.drive_id, drive_candidates.candidate_id"),
     Failure.main(messages.SOME_CANDIDATE_ALREADY_ADDED)),
    (("uq_drive_members_drive_user", "drive_members.drive_id, drive_members.user_id"),
     Failure.main(messages.ALREADY_MEMBER)),
    (("uq_drives_name", "drives.name"),
     Failure("name", messages.DRIVE_NAME_ALREADY_EXISTS)),
    (("uq_rounds_feedback_id", "rounds.feedback_id"),
     Failure.main(messages.FEEDBACK_ALREADY_PROVIDED)),
    (("uq_users_email", "users.email"),
     Failure("email", messages.EMAIL_ALREADY_EXISTS)),
]


class ConflictError(Rejected):
    """A unique constraint lost a race at commit time."""

    def __init__(self, failure):
        super().__init__([failure])
        self.failure = failure


def translate_integrity_error(exc):
    text = str(getattr(exc, "orig", exc))
    for signatures, failure in UNIQUE_VIOLATIONS:
        if any(sig in text for sig in signatures):
            return failure
    return None


@contextmanager
def unit_of_work():
    session = db.session
    try:
        yield session
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        failure = translate_integrity_error(exc)
        if failure is None:
            raise
        current_app.logger.warning("Unique violation translated: %s", failure.message)
        raise ConflictError(failure) from exc
    except Exception:
        session.rollback()
        raise
