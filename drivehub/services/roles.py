from ..extensions import db
from ..models.user import Role
from .status import UserRole, values

MEMBER_ROLES = (UserRole.HR.value, UserRole.PANEL.value, UserRole.MENTOR.value)


def ensure_roles():
    """Insert any missing role rows. Returns the names that were created."""
    existing = {r.name for r in Role.query.all()}
    created = []
    for name in values(UserRole):
        if name not in existing:
            db.session.add(Role(name=name))
            created.append(name)
    if created:
        db.session.flush()
    return created


def role_by_name(name):
    if not name:
        return None
    return Role.query.filter_by(name=name).first()


def role_id(name):
    role = role_by_name(name)
    return role.id if role else None


def role_name(role_id):
    role = db.session.get(Role, role_id) if role_id else None
    return role.name if role else None
