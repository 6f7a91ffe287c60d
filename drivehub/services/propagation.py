"""Feedback -> round result -> candidate status.

Every mutation that can change a round's result ends in
:func:`propagate_round_result`, so the candidate status of an Hr round is
always derived from one place.
"""
from .result import Failure, Rejected
from .status import ROUND_STARTED, derive_candidate_status, derive_round_result


def propagate_round_result(rnd, actor):
    """Push ``rnd.result`` into the owning drive candidate.

    Only Hr rounds move the candidate; for any other round type nothing is
    touched and None is returned.
    """
    status = derive_candidate_status(rnd.round_type, rnd.result)
    if status is None:
        return None
    drive_candidate = rnd.drive_candidate
    drive_candidate.status = status.value
    drive_candidate.status_set_by = actor.user_id
    return drive_candidate


def apply_recommendation(rnd, recommendation, actor):
    """Set the round result a recommendation implies; the round must be started."""
    started, message = ROUND_STARTED
    if not started({"round_status": rnd.status}):
        raise Rejected([Failure.main(message)])
    rnd.result = derive_round_result(recommendation).value
    return propagate_round_result(rnd, actor)
