"""User account commands.

Creation and e-mail changes send mail once the change is committed. A
recipient SendGrid refuses undoes the change in a second unit of work.
"""
import secrets

from flask import current_app

from ..jobs.notify import record_notification
from ..models import Availability, User
from ..validators import validate_create_user, validate_edit_user, validate_set_availability
from ..validators.common import coerce_date
from . import messages
from .mail import InvalidRecipientError, send_mail
from .projections import availability_to_dict, user_to_dict
from .result import CommandResult, Failure, Rejected, command
from .roles import role_by_name
from .store import unit_of_work

USER_FIELDS = ("full_name", "email", "phone", "is_active")


def _deliver(user, kind, subject, body_html, undo):
    """Send after commit; on a refused recipient run ``undo(session, user)`` and reject."""
    try:
        status, headers = send_mail(user.email, subject, body_html)
    except InvalidRecipientError:
        current_app.logger.warning("Recipient refused for user %s, undoing %s", user.id, kind)
        with unit_of_work() as session:
            undo(session, session.get(User, user.id))
        raise Rejected([Failure("email", messages.INVALID_EMAIL)])
    with unit_of_work():
        record_notification(user.id, kind, user.email, subject, body_html, status, headers)


def _welcome_body(user, password):
    login_url = current_app.config.get("LOGIN_URL")
    return (f"<p>Hello {user.full_name},</p>"
            f"<p>An account was created for you as {user.role_name}.</p>"
            f"<p>Login: {user.email}<br>Temporary password: {password}</p>"
            f'<p><a href="{login_url}">Sign in</a> and change it after the first login.</p>')


@command
def create_user(actor, full_name, email, phone, role_name, password=None):
    failures = validate_create_user(actor, full_name, email, phone, role_name)
    if failures:
        return CommandResult.rejected(failures)

    password = password or secrets.token_urlsafe(12)
    with unit_of_work() as session:
        user = User(full_name=full_name.strip(), email=email, phone=phone,
                    role=role_by_name(role_name), is_active=True)
        user.set_password(password)
        session.add(user)

    def forget(session, stored):
        session.delete(stored)

    _deliver(user, "welcome", "Welcome to HireHub", _welcome_body(user, password), forget)
    return CommandResult(data=user_to_dict(user))


@command
def edit_user(actor, user_id, patch):
    failures = validate_edit_user(actor, user_id, patch)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work() as session:
        user = session.get(User, user_id)
        email_changed = "email" in patch and patch.get("email") != user.email
        previous = {f: getattr(user, f) for f in USER_FIELDS}
        previous_role = user.role
        patch.apply(user, USER_FIELDS)
        if "role_name" in patch:
            user.role = role_by_name(patch.get("role_name"))

    if email_changed:
        def restore(session, stored):
            for field, value in previous.items():
                setattr(stored, field, value)
            stored.role = previous_role

        _deliver(user, "email_changed", "Your HireHub login e-mail changed",
                 f"<p>Hello {user.full_name},</p><p>Your login e-mail is now {user.email}.</p>",
                 restore)
    return CommandResult(data=user_to_dict(user))


@command
def set_availability(actor, user_id, dates, today=None):
    """Record the days ``user_id`` can interview; days already on file are kept as is."""
    failures = validate_set_availability(actor, user_id, dates, today=today)
    if failures:
        return CommandResult.rejected(failures)

    wanted = sorted({coerce_date(value) for value in dates})
    with unit_of_work() as session:
        stored = {
            row.availability_date
            for row in Availability.query.filter(Availability.user_id == user_id,
                                                 Availability.availability_date.in_(wanted))
        }
        for day in wanted:
            if day not in stored:
                session.add(Availability(user_id=user_id, availability_date=day))
    rows = (Availability.query.filter_by(user_id=user_id)
            .order_by(Availability.availability_date).all())
    current_app.logger.info("Availability for user %s now covers %d day(s)", user_id, len(rows))
    return CommandResult(data=[availability_to_dict(row) for row in rows])
