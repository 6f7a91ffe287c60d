"""Rule sets for the candidate pool."""
from email_validator import EmailNotValidError, validate_email
from sqlalchemy import or_

from ..models import Candidate
from ..services import messages
from ..services.result import Failure
from ..services.status import ExperienceLevel, parse
from .common import load

EDITABLE_CANDIDATE_FIELDS = (
    "full_name", "email", "phone", "address", "college", "previous_company",
    "experience_level", "tech_stack", "resume_url", "linkedin_url", "github_url",
)


def _blank(value):
    return not isinstance(value, str) or not value.strip()


def _email_failure(email):
    if _blank(email):
        return Failure("email", messages.EMAIL_REQUIRED)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return Failure("email", messages.INVALID_EMAIL)
    return None


def _contact_taken(email, phone, exclude_id=None):
    clauses = []
    if email is not None:
        clauses.append(Candidate.email == email)
    if phone is not None:
        clauses.append(Candidate.phone == phone)
    if not clauses:
        return False
    q = Candidate.query.filter(or_(*clauses))
    if exclude_id is not None:
        q = q.filter(Candidate.id != exclude_id)
    return q.first() is not None


def _tech_stack_failure(value):
    if value is None:
        return None
    if not isinstance(value, list) or any(_blank(item) for item in value):
        return Failure("tech_stack", messages.TECH_STACK_MUST_BE_LIST)
    return None


def _can_manage(actor):
    return actor.is_admin or actor.is_hr


def validate_create_candidate(actor, full_name, email, phone, experience_level, tech_stack=None):
    if not _can_manage(actor):
        return [Failure.main(messages.ONLY_ADMIN_OR_HR_CAN_MANAGE_CANDIDATES)]

    failures = []
    if _blank(full_name):
        failures.append(Failure("full_name", messages.FULL_NAME_REQUIRED))
    email_failure = _email_failure(email)
    if email_failure:
        failures.append(email_failure)
    if _blank(phone):
        failures.append(Failure("phone", messages.PHONE_REQUIRED))
    if parse(ExperienceLevel, experience_level) is None:
        failures.append(Failure("experience_level", messages.INVALID_EXPERIENCE_LEVEL))
    stack_failure = _tech_stack_failure(tech_stack)
    if stack_failure:
        failures.append(stack_failure)

    if not email_failure and not _blank(phone) and _contact_taken(email.strip(), phone.strip()):
        failures.append(Failure.main(messages.EMAIL_OR_PHONE_ALREADY_EXISTS))
    return failures


def validate_edit_candidate(actor, candidate_id, patch):
    if not _can_manage(actor):
        return [Failure.main(messages.ONLY_ADMIN_OR_HR_CAN_MANAGE_CANDIDATES)]
    candidate = load(Candidate, candidate_id)
    if candidate is None:
        return [Failure.main(messages.CANDIDATE_NOT_FOUND)]

    failures = patch.check_fields(EDITABLE_CANDIDATE_FIELDS)
    if "full_name" in patch and _blank(patch.get("full_name")):
        failures.append(Failure("full_name", messages.VALUE_REQUIRED.format("Full name")))

    new_email = new_phone = None
    if "email" in patch and patch.get("email") != candidate.email:
        failure = _email_failure(patch.get("email"))
        if failure:
            failures.append(failure)
        else:
            new_email = patch.get("email")
    if "phone" in patch and patch.get("phone") != candidate.phone:
        if _blank(patch.get("phone")):
            failures.append(Failure("phone", messages.PHONE_REQUIRED))
        else:
            new_phone = patch.get("phone")
    if _contact_taken(new_email, new_phone, exclude_id=candidate.id):
        failures.append(Failure.main(messages.EMAIL_OR_PHONE_ALREADY_EXISTS))

    if "experience_level" in patch and parse(ExperienceLevel, patch.get("experience_level")) is None:
        failures.append(Failure("experience_level", messages.INVALID_EXPERIENCE_LEVEL))
    if "tech_stack" in patch:
        failure = _tech_stack_failure(patch.get("tech_stack"))
        if failure:
            failures.append(failure)
    return failures
