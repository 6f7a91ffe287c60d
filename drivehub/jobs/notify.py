from datetime import datetime

from flask import current_app

from ..extensions import db
from ..models import Candidate, DriveCandidate, DriveMember
from ..models.notification import Notification
from ..services.mail import send_mail


def record_notification(user_id, kind, to_email, subject, body_html, status=None, headers=None):
    n = Notification(user_id=user_id, kind=kind, sent_to=to_email, subject=subject,
                     body=body_html, provider_message_id=str(headers or ""),
                     sent_at=datetime.now() if status is not None else None)
    db.session.add(n)
    return n


def notify_panel_assignment(member_id: int, drive_candidate_ids: list, kind: str = "panel_assignment"):
    """Tell a panel member which candidates they were given on a drive."""
    member = db.session.get(DriveMember, member_id)
    if member is None:
        current_app.logger.warning("Panel notification skipped, member %s is gone", member_id)
        return None
    user = member.user
    rows = (
        db.session.query(Candidate.full_name)
        .join(DriveCandidate, DriveCandidate.candidate_id == Candidate.id)
        .filter(DriveCandidate.id.in_(drive_candidate_ids))
        .order_by(DriveCandidate.id)
        .all()
    )
    names = "".join(f"<li>{name}</li>" for (name,) in rows)
    subject = f"Interview assignment: {member.drive.name}"
    body_html = (f"<p>Hello {user.full_name},</p>"
                 f"<p>You have been assigned to interview on {member.drive.drive_date.isoformat()}:</p>"
                 f"<ul>{names}</ul>")
    status, headers = send_mail(user.email, subject, body_html)
    n = record_notification(user.id, kind, user.email, subject, body_html, status, headers)
    db.session.commit()
    return n.id
