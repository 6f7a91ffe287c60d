"""Round and feedback commands.

Every site that can change a round's result ends in
:func:`~drivehub.services.propagation.propagate_round_result`.
"""
from datetime import datetime

from ..extensions import db
from ..models import Feedback, Round
from ..validators import validate_add_feedback, validate_edit_feedback, validate_edit_round
from ..validators.rounds import FEEDBACK_FIELDS
from . import messages
from .projections import round_to_dict
from .propagation import apply_recommendation, propagate_round_result
from .result import CommandResult, Failure, Rejected, command
from .status import Recommendation, RoundResult, RoundStatus, parse
from .store import unit_of_work


@command
def edit_round(actor, round_id, patch):
    failures = validate_edit_round(actor, round_id, patch)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work():
        rnd = db.session.get(Round, round_id)
        if "status" in patch:
            rnd.status = parse(RoundStatus, patch.get("status")).value
        if "result" in patch:
            rnd.result = parse(RoundResult, patch.get("result")).value
            propagate_round_result(rnd, actor)
    return CommandResult(data=round_to_dict(rnd))


@command
def add_feedback(actor, round_id, patch):
    failures = validate_add_feedback(actor, round_id, patch)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work() as session:
        rnd = db.session.get(Round, round_id)
        if rnd.feedback_id is not None:
            raise Rejected([Failure.main(messages.FEEDBACK_ALREADY_PROVIDED)])
        feedback = Feedback(submitted_date=datetime.now())
        patch.apply(feedback, FEEDBACK_FIELDS)
        feedback.recommendation = parse(Recommendation, feedback.recommendation).value
        session.add(feedback)
        rnd.feedback = feedback
        apply_recommendation(rnd, feedback.recommendation, actor)
    return CommandResult(data=round_to_dict(rnd))


@command
def edit_feedback(actor, round_id, patch):
    failures = validate_edit_feedback(actor, round_id, patch)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work():
        rnd = db.session.get(Round, round_id)
        feedback = rnd.feedback
        patch.apply(feedback, FEEDBACK_FIELDS)
        feedback.recommendation = parse(Recommendation, feedback.recommendation).value
        feedback.submitted_date = datetime.now()
        apply_recommendation(rnd, feedback.recommendation, actor)
    return CommandResult(data=round_to_dict(rnd))
