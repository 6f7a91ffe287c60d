from ..extensions import db


class Availability(db.Model):
    """A day a user has offered to interview on."""
    __tablename__ = "availabilities"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    availability_date = db.Column(db.Date, nullable=False, index=True)

    user = db.relationship("User")

    __table_args__ = (
        db.UniqueConstraint("user_id", "availability_date", name="uq_availabilities_user_date"),
    )

    def __repr__(self) -> str:
        return f"<Availability user_id={self.user_id} date={self.availability_date}>"
