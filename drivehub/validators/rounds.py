"""Rule sets for round and feedback commands."""
from ..services import messages
from ..services.result import Failure
from ..services.status import (RATING_NUMBERS, ROUND_RESULT_TRANSITIONS,
                               ROUND_STATUS_TRANSITIONS, Recommendation,
                               RoundResult, RoundStatus, check_transition, parse)
from .common import is_admin_or_owner, is_strict_int, load_round_context

EDITABLE_ROUND_FIELDS = ("status", "result")

RATING_FIELDS = {
    "overall_rating": ("Overall rating", "overall_rating_required"),
    "technical_skill": ("Technical skill", "technical_skill_required"),
    "communication": ("Communication", "communication_required"),
    "problem_solving": ("Problem solving", "problem_solving_required"),
}
FEEDBACK_FIELDS = tuple(RATING_FIELDS) + ("overall_feedback", "recommendation")


def validate_edit_round(actor, round_id, patch):
    rnd, _, failures = load_round_context(actor, round_id)
    if failures:
        return failures

    failures = patch.check_fields(EDITABLE_ROUND_FIELDS)
    if "status" in patch:
        target = parse(RoundStatus, patch.get("status"))
        if target is None:
            failures.append(Failure("status", messages.INVALID_ROUND_STATUS))
        else:
            reason = check_transition(ROUND_STATUS_TRANSITIONS, rnd.status, target, {"result": rnd.result})
            if reason == "":
                reason = messages.ROUND_STATUS_TRANSITION_ILLEGAL.format(current=rnd.status, target=target.value)
            if reason is not None:
                failures.append(Failure("status", reason))

    if "result" in patch:
        target = parse(RoundResult, patch.get("result"))
        if target is None:
            failures.append(Failure("result", messages.INVALID_ROUND_RESULT))
        elif target == RoundResult.PENDING:
            failures.append(Failure("result", messages.ROUND_RESULT_CANNOT_BE_PENDING))
        else:
            reason = check_transition(ROUND_RESULT_TRANSITIONS, rnd.result, target, {"round_status": rnd.status})
            if reason:
                failures.append(Failure("result", reason))
    return failures


def _feedback_field_failures(patch, config, creating):
    failures = patch.check_fields(FEEDBACK_FIELDS)
    for field, (label, required_flag) in RATING_FIELDS.items():
        value = patch.get(field, None)
        if value is None:
            # an edit that omits the key leaves the stored rating alone
            if (creating or field in patch) and config is not None and getattr(config, required_flag):
                failures.append(Failure(field, messages.RATING_REQUIRED.format(label)))
        elif not is_strict_int(value) or value not in RATING_NUMBERS:
            failures.append(Failure(field, messages.INVALID_RATING))

    if creating or "recommendation" in patch:
        value = patch.get("recommendation", None)
        if value is None:
            failures.append(Failure("recommendation", messages.RECOMMENDATION_REQUIRED))
        elif parse(Recommendation, value) is None:
            failures.append(Failure("recommendation", messages.INVALID_RECOMMENDATION))

    if creating or "overall_feedback" in patch:
        text = patch.get("overall_feedback")
        if config is not None and config.overall_feedback_required and not (text and str(text).strip()):
            failures.append(Failure("overall_feedback", messages.OVERALL_FEEDBACK_REQUIRED))
    return failures


def validate_add_feedback(actor, round_id, patch):
    rnd, drive, failures = load_round_context(actor, round_id)
    if failures:
        return failures
    if rnd.feedback_id is not None:
        return [Failure.main(messages.FEEDBACK_ALREADY_PROVIDED)]
    if rnd.status == RoundStatus.SCHEDULED:
        return [Failure.main(messages.ROUND_BEFORE_RESULT)]
    return _feedback_field_failures(patch, drive.feedback_configuration, creating=True)


def validate_edit_feedback(actor, round_id, patch):
    rnd, drive, failures = load_round_context(actor, round_id)
    if failures:
        return failures
    if rnd.feedback_id is None:
        return [Failure.main(messages.NO_FEEDBACK_FOR_ROUND)]
    if not is_admin_or_owner(actor, drive):
        config = drive.role_configuration(rnd.interviewer.role_id)
        if config is None or not config.can_edit_submitted_feedback:
            return [Failure.main(messages.FEEDBACK_EDIT_NOT_ALLOWED)]
    if rnd.status == RoundStatus.SCHEDULED:
        return [Failure.main(messages.ROUND_BEFORE_RESULT)]
    return _feedback_field_failures(patch, drive.feedback_configuration, creating=False)
