from datetime import datetime

from ..extensions import db
from ..services.status import RoundResult, RoundStatus, RoundType


class Round(db.Model):
    __tablename__ = "rounds"

    id = db.Column(db.Integer, primary_key=True)
    interviewer_id = db.Column(db.Integer, db.ForeignKey("drive_members.id"), nullable=False, index=True)
    drive_candidate_id = db.Column(db.Integer, db.ForeignKey("drive_candidates.id"), nullable=False, index=True)
    round_type = db.Column(db.String(10), nullable=False, default=RoundType.TECH1.value)
    status = db.Column(db.String(20), nullable=False, default=RoundStatus.SCHEDULED.value)
    result = db.Column(db.String(20), nullable=False, default=RoundResult.PENDING.value)
    feedback_id = db.Column(db.Integer, db.ForeignKey("feedbacks.id"))

    interviewer = db.relationship("DriveMember", back_populates="rounds")
    drive_candidate = db.relationship("DriveCandidate", back_populates="rounds")
    feedback = db.relationship("Feedback", back_populates="round", cascade="all, delete-orphan",
                               single_parent=True)

    __table_args__ = (
        db.UniqueConstraint("feedback_id", name="uq_rounds_feedback_id"),
    )

    @property
    def drive_id(self):
        return self.drive_candidate.drive_id if self.drive_candidate else None

    def __repr__(self) -> str:
        return f"<Round id={self.id} type={self.round_type} status={self.status} result={self.result}>"


class Feedback(db.Model):
    __tablename__ = "feedbacks"

    id = db.Column(db.Integer, primary_key=True)
    overall_rating = db.Column(db.Integer)
    technical_skill = db.Column(db.Integer)
    communication = db.Column(db.Integer)
    problem_solving = db.Column(db.Integer)
    overall_feedback = db.Column(db.Text)
    recommendation = db.Column(db.String(10), nullable=False)
    submitted_date = db.Column(db.DateTime, nullable=False, default=datetime.now)

    round = db.relationship("Round", back_populates="feedback", uselist=False)

    def __repr__(self) -> str:
        return f"<Feedback id={self.id} recommendation={self.recommendation}>"
