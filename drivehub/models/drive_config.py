from ..extensions import db


class DriveRoleConfiguration(db.Model):
    __tablename__ = "drive_role_configurations"

    id = db.Column(db.Integer, primary_key=True)
    drive_id = db.Column(db.Integer, db.ForeignKey("drives.id"), nullable=False, index=True)
    role_id = db.Column(db.Integer, db.ForeignKey("roles.id"), nullable=False)
    allow_bulk_upload = db.Column(db.Boolean, nullable=False, default=False)
    can_view_feedback = db.Column(db.Boolean, nullable=False, default=False)
    can_edit_submitted_feedback = db.Column(db.Boolean, nullable=False, default=False)
    allow_panel_reassign = db.Column(db.Boolean, nullable=False, default=False)
    require_approval_for_reassignment = db.Column(db.Boolean, nullable=False, default=False)

    drive = db.relationship("Drive", back_populates="role_configurations")
    role = db.relationship("Role", lazy="joined")

    __table_args__ = (
        db.UniqueConstraint("drive_id", "role_id", name="uq_drive_role_configurations_drive_role"),
    )


class PanelVisibilitySettings(db.Model):
    __tablename__ = "panel_visibility_settings"

    id = db.Column(db.Integer, primary_key=True)
    drive_id = db.Column(db.Integer, db.ForeignKey("drives.id"), nullable=False, unique=True)
    show_phone = db.Column(db.Boolean, nullable=False, default=False)
    show_email = db.Column(db.Boolean, nullable=False, default=False)
    show_previous_company = db.Column(db.Boolean, nullable=False, default=True)
    show_resume = db.Column(db.Boolean, nullable=False, default=True)
    show_college = db.Column(db.Boolean, nullable=False, default=True)
    show_address = db.Column(db.Boolean, nullable=False, default=False)
    show_linkedin = db.Column(db.Boolean, nullable=False, default=True)
    show_github = db.Column(db.Boolean, nullable=False, default=True)

    drive = db.relationship("Drive", back_populates="panel_visibility")


class NotificationSettings(db.Model):
    __tablename__ = "notification_settings"

    id = db.Column(db.Integer, primary_key=True)
    drive_id = db.Column(db.Integer, db.ForeignKey("drives.id"), nullable=False, unique=True)
    email_notification_enabled = db.Column(db.Boolean, nullable=False, default=False)

    drive = db.relationship("Drive", back_populates="notification_settings")


class FeedbackConfiguration(db.Model):
    __tablename__ = "feedback_configurations"

    id = db.Column(db.Integer, primary_key=True)
    drive_id = db.Column(db.Integer, db.ForeignKey("drives.id"), nullable=False, unique=True)
    overall_rating_required = db.Column(db.Boolean, nullable=False, default=True)
    technical_skill_required = db.Column(db.Boolean, nullable=False, default=True)
    communication_required = db.Column(db.Boolean, nullable=False, default=True)
    problem_solving_required = db.Column(db.Boolean, nullable=False, default=True)
    recommendation_required = db.Column(db.Boolean, nullable=False, default=True)
    overall_feedback_required = db.Column(db.Boolean, nullable=False, default=False)

    drive = db.relationship("Drive", back_populates="feedback_configuration")
