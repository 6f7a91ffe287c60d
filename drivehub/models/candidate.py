from ..extensions import db
from ..services.status import ExperienceLevel
from .base import TimestampMixin

class Candidate(db.Model, TimestampMixin):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    full_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(254), index=True, nullable=False)
    phone = db.Column(db.String(40))
    address = db.Column(db.String(300))
    college = db.Column(db.String(200))
    previous_company = db.Column(db.String(200))
    experience_level = db.Column(db.String(20), default=ExperienceLevel.FRESHER.value)
    tech_stack = db.Column(db.JSON, default=list)
    resume_url = db.Column(db.String(500))
    linkedin_url = db.Column(db.String(500))
    github_url = db.Column(db.String(500))

    __table_args__ = (
        db.UniqueConstraint("email", name="uq_candidates_email"),
        db.UniqueConstraint("phone", name="uq_candidates_phone"),
    )

    def __repr__(self) -> str:
        return f"<Candidate id={self.id} name={self.full_name!r}>"
