"""Insert the Admin/HR/Panel/Mentor roles, and optionally a first admin.

Usage:
  python scripts/seed_roles.py
  python scripts/seed_roles.py --admin-email admin@example.com --admin-password 'secret123'
"""

import argparse
import sys
import os

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from drivehub import create_app
from drivehub.extensions import db
from drivehub.models import User
from drivehub.services.roles import ensure_roles, role_by_name
from drivehub.services.status import UserRole


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--admin-email')
    parser.add_argument('--admin-password')
    parser.add_argument('--admin-name', default='Administrator')
    args = parser.parse_args(argv)

    app = create_app()
    with app.app_context():
        created = ensure_roles()
        app.logger.info('roles created: %s', ', '.join(created) or 'none')
        if args.admin_email:
            if User.query.filter_by(email=args.admin_email).first():
                app.logger.info('admin %s already exists', args.admin_email)
            else:
                if not args.admin_password:
                    parser.error('--admin-password is required with --admin-email')
                user = User(full_name=args.admin_name, email=args.admin_email,
                            role=role_by_name(UserRole.ADMIN.value), is_active=True)
                user.set_password(args.admin_password)
                db.session.add(user)
                app.logger.info('admin %s created', args.admin_email)
        db.session.commit()


if __name__ == '__main__':
    main()
