from ..models import User
from ..services import messages
from ..services.result import Failure
from ..services.status import next_monday
from .common import coerce_date, load, today_or


def validate_set_availability(actor, user_id, dates, today=None):
    """Dates are offered a week at a time, starting from the coming Monday."""
    user = load(User, user_id)
    if user is None:
        return [Failure.main(messages.USER_NOT_FOUND)]
    if not actor.is_admin and actor.user_id != user.id:
        return [Failure.main(messages.AVAILABILITY_ONLY_FOR_SELF)]
    if not isinstance(dates, (list, tuple)) or not dates:
        return [Failure("dates", messages.AVAILABILITY_DATES_REQUIRED)]

    earliest = next_monday(today_or(today))
    parsed = [coerce_date(value) for value in dates]
    failures = []
    if any(d is None for d in parsed):
        failures.append(Failure("dates", messages.INVALID_DATE))
    if any(d is not None and d < earliest for d in parsed):
        failures.append(Failure("dates", messages.AVAILABILITY_BEFORE_NEXT_MONDAY))
    return failures
