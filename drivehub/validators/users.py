from email_validator import EmailNotValidError, validate_email

from ..models import User
from ..services import messages
from ..services.result import Failure
from ..services.roles import role_by_name
from .common import load

EDITABLE_USER_FIELDS = ("full_name", "email", "phone", "role_name", "is_active")


def _email_failure(email, exclude_id=None):
    if not isinstance(email, str) or not email.strip():
        return Failure("email", messages.EMAIL_REQUIRED)
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return Failure("email", messages.INVALID_EMAIL)
    q = User.query.filter(User.email == email)
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    if q.first() is not None:
        return Failure("email", messages.EMAIL_ALREADY_EXISTS)
    return None


def validate_create_user(actor, full_name, email, phone, role_name):
    if not actor.is_admin:
        return [Failure.main(messages.ONLY_ADMIN)]
    failures = []
    if not isinstance(full_name, str) or not full_name.strip():
        failures.append(Failure("full_name", messages.FULL_NAME_REQUIRED))
    failure = _email_failure(email)
    if failure:
        failures.append(failure)
    if role_by_name(role_name) is None:
        failures.append(Failure("role_name", messages.INVALID_ROLE))
    return failures


def validate_edit_user(actor, user_id, patch):
    if not actor.is_admin:
        return [Failure.main(messages.ONLY_ADMIN)]
    user = load(User, user_id)
    if user is None:
        return [Failure.main(messages.USER_NOT_FOUND)]

    failures = patch.check_fields(EDITABLE_USER_FIELDS)
    if "full_name" in patch:
        name = patch.get("full_name")
        if not isinstance(name, str) or not name.strip():
            failures.append(Failure("full_name", messages.VALUE_REQUIRED.format("Full name")))
    if "email" in patch and patch.get("email") != user.email:
        failure = _email_failure(patch.get("email"), exclude_id=user.id)
        if failure:
            failures.append(failure)
    if "role_name" in patch and role_by_name(patch.get("role_name")) is None:
        failures.append(Failure("role_name", messages.INVALID_ROLE))
    if "is_active" in patch and not isinstance(patch.get("is_active"), bool):
        failures.append(Failure("is_active", messages.IS_ACTIVE_MUST_BE_BOOLEAN))
    return failures
