import os
import sys
from datetime import date, timedelta

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from drivehub import create_app
from drivehub.extensions import db
from drivehub.models import Candidate, Drive, DriveCandidate, DriveMember, Round, User
from drivehub.services.drives import create_drive
from drivehub.services.result import Actor
from drivehub.services.roles import ensure_roles, role_by_name, role_id

TODAY = date.today()
TOMORROW = TODAY + timedelta(days=1)
YESTERDAY = TODAY - timedelta(days=1)


@pytest.fixture
def app():
    app = create_app('config.TestingConfig')
    with app.app_context():
        db.create_all()
        ensure_roles()
        db.session.commit()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


class Factory:
    def __init__(self):
        self._seq = 0

    def _next(self):
        self._seq += 1
        return self._seq

    def user(self, role, name=None, active=True, password='password123'):
        n = self._next()
        user = User(full_name=name or f'{role} {n}', email=f'{role.lower()}{n}@example.com',
                    role=role_by_name(role), is_active=active)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user

    def actor(self, user):
        return Actor.from_user(user)

    def candidate(self, name=None):
        n = self._next()
        c = Candidate(full_name=name or f'Candidate {n}', email=f'candidate{n}@example.com',
                      phone=f'555-01{n:02d}', college='State College', previous_company='Acme')
        db.session.add(c)
        db.session.commit()
        return c

    def drive(self, owner, drive_date=TOMORROW, status='InProposal', technical_rounds=1, name=None):
        """A bare drive row; use :meth:`staffed_drive` to go through the command."""
        d = Drive(name=name or f'Drive {self._next()}', drive_date=drive_date, status=status,
                  technical_rounds=technical_rounds, created_by=owner.id)
        db.session.add(d)
        db.session.commit()
        return d

    def member(self, drive, user, role=None):
        m = DriveMember(drive_id=drive.id, user_id=user.id, role_id=role_id(role or user.role_name))
        db.session.add(m)
        db.session.commit()
        return m

    def link(self, drive, candidate, status='Pending'):
        dc = DriveCandidate(drive_id=drive.id, candidate_id=candidate.id, status=status)
        db.session.add(dc)
        db.session.commit()
        return dc

    def round(self, drive_candidate, member, round_type='Tech1', status='Scheduled', result='Pending'):
        r = Round(drive_candidate_id=drive_candidate.id, interviewer_id=member.id,
                  round_type=round_type, status=status, result=result)
        db.session.add(r)
        db.session.commit()
        return r

    def staffed_drive(self, owner, hrs, panels, mentors, drive_date=TOMORROW, **kwargs):
        result = create_drive(self.actor(owner), kwargs.pop('name', f'Drive {self._next()}'), drive_date,
                              kwargs.pop('technical_rounds', 1), [u.id for u in hrs],
                              [u.id for u in panels], [u.id for u in mentors], **kwargs)
        assert result.ok, result.errors
        return db.session.get(Drive, result.data['id'])


@pytest.fixture
def make(app):
    return Factory()


@pytest.fixture
def people(make):
    """admin, hr, two panelists and a mentor."""
    return {
        'admin': make.user('Admin'),
        'hr': make.user('HR'),
        'panel1': make.user('Panel'),
        'panel2': make.user('Panel'),
        'mentor': make.user('Mentor'),
    }


@pytest.fixture
def started(make, people):
    """A started drive dated today with one candidate and one Hr + one Tech1 round."""
    hr, panel = people['hr'], people['panel1']
    drive = make.drive(hr, drive_date=TODAY, status='Started')
    hr_member = make.member(drive, hr)
    panel_member = make.member(drive, panel)
    dc = make.link(drive, make.candidate())
    return {
        'drive': drive,
        'hr_member': hr_member,
        'panel_member': panel_member,
        'drive_candidate': dc,
        'hr_round': make.round(dc, hr_member, round_type='Hr'),
        'tech_round': make.round(dc, panel_member, round_type='Tech1'),
    }
