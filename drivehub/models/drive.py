from datetime import datetime

from ..extensions import db
from ..services.status import CandidateStatus, DriveStatus


class Drive(db.Model):
    __tablename__ = "drives"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    drive_date = db.Column(db.Date, nullable=False)
    technical_rounds = db.Column(db.Integer, nullable=False, default=1)  # 1 or 2
    status = db.Column(db.String(20), nullable=False, default=DriveStatus.IN_PROPOSAL.value, index=True)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    created_date = db.Column(db.DateTime, nullable=False, default=datetime.now)

    creator = db.relationship("User", lazy="joined")
    members = db.relationship("DriveMember", back_populates="drive", cascade="all, delete-orphan",
                              order_by="DriveMember.id")
    candidates = db.relationship("DriveCandidate", back_populates="drive", cascade="all, delete-orphan",
                                 order_by="DriveCandidate.id")
    role_configurations = db.relationship("DriveRoleConfiguration", back_populates="drive",
                                          cascade="all, delete-orphan")
    panel_visibility = db.relationship("PanelVisibilitySettings", uselist=False, back_populates="drive",
                                       cascade="all, delete-orphan")
    notification_settings = db.relationship("NotificationSettings", uselist=False, back_populates="drive",
                                            cascade="all, delete-orphan")
    feedback_configuration = db.relationship("FeedbackConfiguration", uselist=False, back_populates="drive",
                                             cascade="all, delete-orphan")

    __table_args__ = (
        db.UniqueConstraint("name", name="uq_drives_name"),
    )

    def role_configuration(self, role_id):
        return next((c for c in self.role_configurations if c.role_id == role_id), None)

    def __repr__(self) -> str:
        return f"<Drive id={self.id} name={self.name!r} status={self.status}>"


class DriveMember(db.Model):
    __tablename__ = "drive_members"

    id = db.Column(db.Integer, primary_key=True)
    drive_id = db.Column(db.Integer, db.ForeignKey("drives.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    role_id = db.Column(db.Integer, db.ForeignKey("roles.id"), nullable=False)

    drive = db.relationship("Drive", back_populates="members")
    user = db.relationship("User")
    role = db.relationship("Role", lazy="joined")
    rounds = db.relationship("Round", back_populates="interviewer", cascade="all, delete-orphan")

    __table_args__ = (
        db.UniqueConstraint("drive_id", "user_id", name="uq_drive_members_drive_user"),
    )

    def __repr__(self) -> str:
        return f"<DriveMember id={self.id} drive_id={self.drive_id} user_id={self.user_id}>"


class DriveCandidate(db.Model):
    __tablename__ = "drive_candidates"

    id = db.Column(db.Integer, primary_key=True)
    drive_id = db.Column(db.Integer, db.ForeignKey("drives.id"), nullable=False, index=True)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default=CandidateStatus.PENDING.value)
    status_set_by = db.Column(db.Integer, db.ForeignKey("users.id"))
    attendance_status = db.Column(db.String(20))  # e.g. Present
    created_date = db.Column(db.DateTime, nullable=False, default=datetime.now)

    drive = db.relationship("Drive", back_populates="candidates")
    candidate = db.relationship("Candidate", lazy="joined")
    rounds = db.relationship("Round", back_populates="drive_candidate", cascade="all, delete-orphan")
    reassignments = db.relationship("CandidateReassignment", cascade="all, delete-orphan",
                                    order_by="CandidateReassignment.id")

    __table_args__ = (
        db.UniqueConstraint("drive_id", "candidate_id", name="uq_drive_candidates_drive_candidate"),
    )

    def __repr__(self) -> str:
        return f"<DriveCandidate id={self.id} drive_id={self.drive_id} candidate_id={self.candidate_id}>"
