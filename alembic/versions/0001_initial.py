"""Initial schema: drives, membership, candidates, availability, rounds, feedback, settings.

Builds every table from the SQLAlchemy metadata and seeds the four roles.

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

ROLES = ('Admin', 'HR', 'Panel', 'Mentor')


def upgrade() -> None:
    bind = op.get_bind()
    # tables come from the models so the schema and the ORM cannot drift
    from drivehub.extensions import db
    import drivehub.models  # noqa: F401

    db.metadata.create_all(bind=bind)

    roles = sa.table('roles', sa.column('name', sa.String))
    existing = {row[0] for row in bind.execute(sa.text('SELECT name FROM roles'))}
    missing = [{'name': name} for name in ROLES if name not in existing]
    if missing:
        op.bulk_insert(roles, missing)


def downgrade() -> None:
    bind = op.get_bind()
    from drivehub.extensions import db
    import drivehub.models  # noqa: F401

    db.metadata.drop_all(bind=bind)
