from datetime import datetime

from ..extensions import db


class CandidateReassignment(db.Model):
    __tablename__ = "candidate_reassignments"

    id = db.Column(db.Integer, primary_key=True)
    drive_candidate_id = db.Column(db.Integer, db.ForeignKey("drive_candidates.id"), nullable=False, index=True)
    # plain ids: the audit row outlives a removed membership
    previous_member_id = db.Column(db.Integer, nullable=False)
    new_member_id = db.Column(db.Integer, nullable=False)
    requested_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    require_approval = db.Column(db.Boolean, nullable=False, default=False)
    requested_date = db.Column(db.DateTime, nullable=False, default=datetime.now)
    approved_by = db.Column(db.Integer, db.ForeignKey("users.id"))
    approved_date = db.Column(db.DateTime)

    def __repr__(self) -> str:
        return (f"<CandidateReassignment id={self.id} drive_candidate_id={self.drive_candidate_id} "
                f"{self.previous_member_id}->{self.new_member_id}>")
