"""Candidate pool commands. Candidates exist independently of any drive."""
from ..models import Candidate
from ..validators import validate_create_candidate, validate_edit_candidate
from ..validators.candidates import EDITABLE_CANDIDATE_FIELDS
from .projections import candidate_to_dict
from .result import CommandResult, command
from .status import ExperienceLevel, parse
from .store import unit_of_work


@command
def create_candidate(actor, full_name, email, phone, experience_level=ExperienceLevel.FRESHER.value,
                     college=None, previous_company=None, address=None, tech_stack=None,
                     resume_url=None, linkedin_url=None, github_url=None):
    failures = validate_create_candidate(actor, full_name, email, phone, experience_level, tech_stack)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work() as session:
        candidate = Candidate(full_name=full_name.strip(), email=email.strip(), phone=phone.strip(),
                              experience_level=parse(ExperienceLevel, experience_level).value,
                              college=college, previous_company=previous_company, address=address,
                              tech_stack=list(tech_stack or []), resume_url=resume_url,
                              linkedin_url=linkedin_url, github_url=github_url)
        session.add(candidate)
    return CommandResult(data=candidate_to_dict(candidate))


@command
def edit_candidate(actor, candidate_id, patch):
    failures = validate_edit_candidate(actor, candidate_id, patch)
    if failures:
        return CommandResult.rejected(failures)

    with unit_of_work() as session:
        candidate = session.get(Candidate, candidate_id)
        patch.apply(candidate, EDITABLE_CANDIDATE_FIELDS)
        if "experience_level" in patch:
            candidate.experience_level = parse(ExperienceLevel, patch.get("experience_level")).value
        if "tech_stack" in patch:
            candidate.tech_stack = list(patch.get("tech_stack") or [])
    return CommandResult(data=candidate_to_dict(candidate))
