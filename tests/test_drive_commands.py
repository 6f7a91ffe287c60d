from conftest import TODAY, TOMORROW, YESTERDAY

from drivehub.extensions import db
from drivehub.models import Drive, DriveCandidate, Round
from drivehub.services import drives, messages
from drivehub.services.drives import (add_candidates, add_member, create_drive, edit_drive,
                                      edit_drive_candidate, edit_drive_config, mark_attendance,
                                      remove_candidates, remove_member)
from drivehub.services.patch import Patch
from drivehub.services.result import Failure


def _messages(result):
    return [f.message for f in result.errors]


# -- create ---------------------------------------------------------------

def test_create_drive_builds_members_and_configuration(make, people):
    drive = make.staffed_drive(people['hr'], [people['hr']], [people['panel1'], people['panel2']],
                               [people['mentor']])
    assert drive.status == 'InProposal'
    assert drive.created_by == people['hr'].id
    assert sorted(m.role.name for m in drive.members) == ['HR', 'Mentor', 'Panel', 'Panel']

    configs = {c.role.name: c for c in drive.role_configurations}
    assert configs['HR'].can_view_feedback and configs['HR'].allow_bulk_upload
    assert configs['Panel'].can_view_feedback and not configs['Panel'].allow_bulk_upload
    assert not configs['Mentor'].allow_bulk_upload
    assert not configs['Mentor'].can_edit_submitted_feedback
    assert drive.panel_visibility is not None
    assert drive.notification_settings.email_notification_enabled is False
    assert drive.feedback_configuration.recommendation_required is True


def test_create_drive_applies_supplied_configuration(make, people):
    drive = make.staffed_drive(people['admin'], [people['hr']], [people['panel1']], [people['mentor']],
                               config={'notification_settings': {'email_notification_enabled': True},
                                       'hr_configuration': {'allow_panel_reassign': True}})
    assert drive.notification_settings.email_notification_enabled is True
    hr_config = next(c for c in drive.role_configurations if c.role.name == 'HR')
    assert hr_config.allow_panel_reassign is True


def test_create_drive_collects_field_failures(make, people):
    p1, p2 = people['panel1'], people['panel2']
    result = create_drive(make.actor(people['hr']), 'Campus', YESTERDAY, 3, [], [p1.id, p1.id], [p2.id])
    assert not result.ok
    by_field = {f.field: f.message for f in result.errors}
    assert by_field['drive_date'] == messages.FUTURE_DATE_ONLY
    assert by_field['technical_rounds'] == messages.TECH_ROUNDS_SHOULD_BE
    assert by_field['hr_ids'] == messages.NO_HRS
    assert by_field['panel_ids'] == 'Some duplicate users found in Panel list'
    assert Drive.query.count() == 0


def test_create_drive_checks_the_people(make, people):
    actor = make.actor(people['admin'])
    hr, mentor, panel = people['hr'], people['mentor'], people['panel1']

    result = create_drive(actor, 'Swapped', TOMORROW, 1, [hr.id], [mentor.id], [panel.id])
    assert _messages(result) == [messages.SOME_USERS_NOT_IN_ROLE]

    inactive = make.user('Panel', active=False)
    result = create_drive(actor, 'Inactive', TOMORROW, 1, [hr.id], [inactive.id], [mentor.id])
    assert _messages(result) == [messages.SOME_USERS_INACTIVE]

    result = create_drive(actor, 'Ghost', TOMORROW, 1, [hr.id], [9999], [mentor.id])
    assert _messages(result) == [messages.SOME_USERS_NOT_FOUND]

    result = create_drive(actor, 'Twice', TOMORROW, 1, [hr.id], [hr.id], [mentor.id])
    assert messages.USER_IN_MULTIPLE_LISTS in _messages(result)


def test_create_drive_rejects_busy_people_and_duplicate_names(make, people):
    make.staffed_drive(people['admin'], [people['hr']], [people['panel1']], [people['mentor']], name='Spring')
    other_hr = make.user('HR')
    result = create_drive(make.actor(people['admin']), 'Spring', TOMORROW, 1,
                          [other_hr.id], [people['panel1'].id], [make.user('Mentor').id])
    assert Failure('name', messages.DRIVE_NAME_ALREADY_EXISTS) in result.errors
    assert Failure.main(messages.SOME_USERS_ON_ANOTHER_DRIVE) in result.errors


def test_only_admin_or_hr_create_drives(make, people):
    result = create_drive(make.actor(people['panel1']), 'Nope', TOMORROW, 1,
                          [people['hr'].id], [people['panel2'].id], [people['mentor'].id])
    assert _messages(result) == [messages.ONLY_ADMIN_OR_HR_CAN_CREATE]


# -- edit -----------------------------------------------------------------

def test_technical_rounds_stay_in_range(make, people):
    drive = make.drive(people['hr'])
    actor = make.actor(people['hr'])
    for bad in (0, 3, '2', None):
        result = edit_drive(actor, drive.id, Patch(technical_rounds=bad))
        assert _messages(result) == [messages.TECH_ROUNDS_SHOULD_BE]
        assert db.session.get(Drive, drive.id).technical_rounds == 1
    assert edit_drive(actor, drive.id, Patch(technical_rounds=2)).ok
    assert db.session.get(Drive, drive.id).technical_rounds == 2


def test_drive_cannot_start_before_its_date(make, people):
    drive = make.drive(people['hr'], drive_date=TOMORROW)
    result = edit_drive(make.actor(people['hr']), drive.id, Patch(status='Started'))
    assert result.errors == [Failure('status', 'Drive cannot start before scheduled date')]
    assert db.session.get(Drive, drive.id).status == 'InProposal'


def test_start_uses_the_patched_date(make, people):
    drive = make.drive(people['hr'], drive_date=TOMORROW)
    result = edit_drive(make.actor(people['hr']), drive.id, Patch(status='Started', drive_date=TODAY.isoformat()))
    assert result.ok
    drive = db.session.get(Drive, drive.id)
    assert (drive.status, drive.drive_date) == ('Started', TODAY)


def test_same_patch_twice_is_idempotent(make, people):
    drive = make.drive(people['hr'], drive_date=TODAY)
    actor = make.actor(people['hr'])
    patch = Patch(name='Renamed', technical_rounds=2, status='Started')
    first = edit_drive(actor, drive.id, patch)
    second = edit_drive(actor, drive.id, patch)
    assert first.ok and second.ok
    assert first.data == second.data
    assert (second.data['name'], second.data['technical_rounds'], second.data['status']) == ('Renamed', 2, 'Started')


def test_fields_lock_once_the_drive_leaves_proposal(make, people):
    drive = make.drive(people['hr'], drive_date=TODAY, status='Started')
    result = edit_drive(make.actor(people['hr']), drive.id,
                        Patch(name='Other', drive_date=TOMORROW, technical_rounds=2))
    assert _messages(result) == [messages.DRIVE_NAME_CANNOT_CHANGE, messages.DRIVE_DATE_CANNOT_CHANGE,
                                 messages.DRIVE_TECH_ROUNDS_CANNOT_CHANGE]


def test_drive_status_edges(make, people):
    actor = make.actor(people['hr'])
    proposal = make.drive(people['hr'], drive_date=TODAY)
    assert _messages(edit_drive(actor, proposal.id, Patch(status='Halted'))) == [messages.DRIVE_NEEDS_TO_START_FIRST]

    running = make.drive(people['hr'], drive_date=TODAY, status='Started')
    assert _messages(edit_drive(actor, running.id, Patch(status='InProposal'))) == \
        [messages.DRIVE_STATUS_CANNOT_BE_IN_PROPOSAL]
    assert _messages(edit_drive(actor, running.id, Patch(status='Paused'))) == [messages.INVALID_DRIVE_STATUS]
    assert edit_drive(actor, running.id, Patch(status='Halted')).ok
    assert edit_drive(actor, running.id, Patch(status='Started')).ok
    assert edit_drive(actor, running.id, Patch(status='Completed')).ok
    assert _messages(edit_drive(actor, running.id, Patch(status='Started'))) == \
        [messages.CLOSED_DRIVE_CANNOT_BE_EDITED]


def test_in_proposal_drive_cannot_move_to_in_proposal(make, people):
    actor = make.actor(people['hr'])
    proposal = make.drive(people['hr'], drive_date=TOMORROW)
    result = edit_drive(actor, proposal.id, Patch(status='InProposal'))
    assert result.errors == [Failure('status', messages.DRIVE_STATUS_CANNOT_BE_IN_PROPOSAL)]
    assert db.session.get(Drive, proposal.id).status == 'InProposal'


def test_drive_name_must_be_text(make, people):
    hr = make.actor(people['hr'])
    drive = make.drive(people['hr'], name='Winter')
    result = edit_drive(hr, drive.id, Patch(name=123))
    assert result.errors == [Failure('name', messages.DRIVE_NAME_REQUIRED)]
    assert db.session.get(Drive, drive.id).name == 'Winter'

    result = create_drive(hr, 123, TOMORROW, 1, [people['hr'].id], [people['panel1'].id],
                          [people['mentor'].id])
    assert result.errors == [Failure('name', messages.DRIVE_NAME_REQUIRED)]
    assert Drive.query.filter(Drive.id != drive.id).count() == 0


def test_edit_drive_rejects_strangers_and_bad_fields(make, people):
    drive = make.drive(people['hr'])
    assert _messages(edit_drive(make.actor(people['panel1']), drive.id, Patch(name='X'))) == \
        [messages.ADMIN_OR_OWNER_CAN_EDIT]
    assert _messages(edit_drive(make.actor(people['hr']), 12345, Patch(name='X'))) == [messages.DRIVE_NOT_FOUND]
    result = edit_drive(make.actor(people['admin']), drive.id, Patch(created_by=5, color='red'))
    assert result.errors == [Failure('created_by', 'Created by cannot be updated'),
                             Failure('color', messages.UNKNOWN_FIELD)]


def test_name_uniqueness_race_gives_the_precheck_failure(make, people, monkeypatch):
    make.drive(people['hr'], name='Taken')
    drive = make.drive(people['hr'], name='Mine')
    actor = make.actor(people['hr'])

    prechecked = edit_drive(actor, drive.id, Patch(name='Taken'))
    monkeypatch.setattr(drives, 'validate_edit_drive', lambda *args, **kwargs: [])
    raced = edit_drive(actor, drive.id, Patch(name='Taken'))

    assert prechecked.errors == raced.errors == [Failure('name', messages.DRIVE_NAME_ALREADY_EXISTS)]
    assert db.session.get(Drive, drive.id).name == 'Mine'


# -- members --------------------------------------------------------------

def test_add_member(make, people):
    drive = make.staffed_drive(people['hr'], [people['hr']], [people['panel1']], [people['mentor']])
    actor = make.actor(people['hr'])
    result = add_member(actor, drive.id, people['panel2'].id, 'Panel')
    assert result.ok
    assert result.data['role'] == 'Panel'
    assert _messages(add_member(actor, drive.id, people['panel2'].id, 'Panel')) == [messages.ALREADY_MEMBER]
    other_mentor = make.user('Mentor')
    assert _messages(add_member(actor, drive.id, other_mentor.id, 'Panel')) == [messages.USER_NOT_IN_ROLE]
    assert _messages(add_member(actor, drive.id, other_mentor.id, 'Admin')) == [messages.INVALID_MEMBER_ROLE]
    inactive = make.user('Panel', active=False)
    assert _messages(add_member(actor, drive.id, inactive.id, 'Panel')) == [messages.USER_INACTIVE]


def test_add_member_rejects_people_busy_elsewhere(make, people):
    first = make.drive(people['admin'], drive_date=TOMORROW)
    make.member(first, people['panel2'])
    second = make.drive(people['admin'], drive_date=TOMORROW)
    result = add_member(make.actor(people['admin']), second.id, people['panel2'].id, 'Panel')
    assert _messages(result) == [messages.USER_ON_ANOTHER_DRIVE]

    first.status = 'Cancelled'
    db.session.commit()
    assert add_member(make.actor(people['admin']), second.id, people['panel2'].id, 'Panel').ok


def test_add_member_on_closed_drive(make, people):
    drive = make.drive(people['hr'], status='Completed')
    result = add_member(make.actor(people['hr']), drive.id, people['panel1'].id, 'Panel')
    assert _messages(result) == [messages.CANNOT_ADD_MEMBER_ON_CLOSED_DRIVE]


def test_remove_member_takes_its_rounds(make, people):
    drive = make.drive(people['hr'])
    member = make.member(drive, people['panel1'])
    dc = make.link(drive, make.candidate())
    make.round(dc, member)
    result = remove_member(make.actor(people['hr']), drive.id, people['panel1'].id)
    assert result.ok
    assert Round.query.count() == 0
    assert _messages(remove_member(make.actor(people['hr']), drive.id, people['panel1'].id)) == \
        [messages.DRIVE_MEMBER_NOT_FOUND]


def test_members_are_frozen_once_started(make, started, people):
    result = remove_member(make.actor(people['hr']), started['drive'].id, people['panel1'].id)
    assert _messages(result) == [messages.CANNOT_REMOVE_ON_STARTED_DRIVE]
    assert _messages(remove_member(make.actor(people['panel1']), started['drive'].id, people['panel1'].id)) == \
        [messages.ADMIN_OR_OWNER_CAN_REMOVE]


# -- candidates -----------------------------------------------------------

def test_add_candidates(make, people):
    drive = make.drive(people['hr'])
    c1, c2 = make.candidate(), make.candidate()
    result = add_candidates(make.actor(people['hr']), drive.id, [c1.id, c2.id])
    assert result.ok
    assert [row['status'] for row in result.data] == ['Pending', 'Pending']
    assert _messages(add_candidates(make.actor(people['hr']), drive.id, [9999])) == \
        [messages.SOME_CANDIDATES_NOT_FOUND]


def test_duplicate_candidate_prechecked_and_raced_fail_alike(make, people, monkeypatch):
    drive = make.drive(people['hr'])
    candidate = make.candidate()
    actor = make.actor(people['hr'])
    assert add_candidates(actor, drive.id, [candidate.id]).ok

    prechecked = add_candidates(actor, drive.id, [candidate.id])
    monkeypatch.setattr(drives, 'validate_add_candidates', lambda *args, **kwargs: [])
    raced = add_candidates(actor, drive.id, [candidate.id])

    expected = [Failure.main('Some candidate already added to the drive')]
    assert prechecked.errors == expected
    assert raced.errors == expected
    assert DriveCandidate.query.count() == 1


def test_duplicate_inside_one_request_rolls_back_everything(make, people):
    drive = make.drive(people['hr'])
    c1, c2 = make.candidate(), make.candidate()
    result = add_candidates(make.actor(people['hr']), drive.id, [c1.id, c2.id, c1.id])
    assert _messages(result) == [messages.SOME_CANDIDATE_ALREADY_ADDED]
    assert DriveCandidate.query.count() == 0


def test_remove_candidates(make, people):
    drive = make.drive(people['hr'])
    member = make.member(drive, people['panel1'])
    dc = make.link(drive, make.candidate())
    make.round(dc, member)
    actor = make.actor(people['hr'])
    assert _messages(remove_candidates(actor, drive.id, [9999])) == [messages.DRIVE_CANDIDATE_NOT_FOUND]
    result = remove_candidates(actor, drive.id, [dc.candidate_id])
    assert result.ok
    assert DriveCandidate.query.count() == 0
    assert Round.query.count() == 0


def test_candidates_are_frozen_once_started(make, started, people):
    result = remove_candidates(make.actor(people['hr']), started['drive'].id,
                               [started['drive_candidate'].candidate_id])
    assert _messages(result) == [messages.CANNOT_REMOVE_ON_STARTED_DRIVE]


# -- configuration --------------------------------------------------------

def test_edit_drive_config(make, people):
    drive = make.staffed_drive(people['hr'], [people['hr']], [people['panel1']], [people['mentor']])
    actor = make.actor(people['hr'])
    result = edit_drive_config(actor, drive.id, Patch({
        'notification_settings': {'email_notification_enabled': True},
        'mentor_configuration': {'can_view_feedback': True},
    }))
    assert result.ok
    assert result.data['notification_settings'] == {'email_notification_enabled': True}
    assert result.data['mentor_configuration']['can_view_feedback'] is True
    assert result.data['panel_visibility']['show_phone'] is False


def test_edit_drive_config_rejects_bad_shapes(make, people):
    drive = make.staffed_drive(people['hr'], [people['hr']], [people['panel1']], [people['mentor']])
    result = edit_drive_config(make.actor(people['hr']), drive.id, Patch({
        'panel_visibility': {'show_phone': 'yes'},
        'panel_configuration': {'allow_bulk_upload': True},
        'colors': {'red': True},
    }))
    assert set(result.errors) == {
        Failure('panel_visibility.show_phone', messages.CONFIG_VALUE_MUST_BE_BOOLEAN),
        Failure('panel_configuration.allow_bulk_upload', messages.UNKNOWN_CONFIG_KEY),
        Failure('colors', messages.UNKNOWN_FIELD),
    }


# -- drive candidate status -----------------------------------------------

def test_owner_sets_candidate_status(make, started, people):
    dc = started['drive_candidate']
    result = edit_drive_candidate(make.actor(people['hr']), dc.id, Patch(status='Selected'))
    assert result.ok
    dc = db.session.get(DriveCandidate, dc.id)
    assert (dc.status, dc.status_set_by) == ('Selected', people['hr'].id)
    result = edit_drive_candidate(make.actor(people['hr']), dc.id, Patch(status='Pending'))
    assert _messages(result) == [messages.CANDIDATE_STATUS_CANNOT_BE_PENDING]
    result = edit_drive_candidate(make.actor(people['hr']), dc.id, Patch(status='Hired'))
    assert _messages(result) == [messages.INVALID_CANDIDATE_STATUS]


def test_candidate_status_waits_for_drive_start(make, people):
    drive = make.drive(people['hr'])
    dc = make.link(drive, make.candidate())
    result = edit_drive_candidate(make.actor(people['hr']), dc.id, Patch(status='Selected'))
    assert _messages(result) == ['Drive needs to be started first']
    assert db.session.get(DriveCandidate, dc.id).status == 'Pending'


def test_hr_interviewer_may_set_candidate_status(make, people):
    drive = make.drive(people['admin'], drive_date=TODAY, status='Started')
    hr_member = make.member(drive, people['hr'])
    panel_member = make.member(drive, people['panel1'])
    dc = make.link(drive, make.candidate())
    make.round(dc, hr_member, round_type='Hr')
    make.round(dc, panel_member, round_type='Tech1')

    assert edit_drive_candidate(make.actor(people['hr']), dc.id, Patch(status='Rejected')).ok
    result = edit_drive_candidate(make.actor(people['panel1']), dc.id, Patch(status='Selected'))
    assert _messages(result) == [messages.ADMIN_OR_OWNER_OR_HR_INTERVIEWER_CAN_EDIT]


# -- attendance -----------------------------------------------------------

def test_mark_attendance(make, started, people):
    drive, dc = started['drive'], started['drive_candidate']
    result = mark_attendance(make.actor(people['panel1']), drive.id, dc.candidate_id)
    assert result.ok
    assert result.data['attendance_status'] == 'Present'
    again = mark_attendance(make.actor(people['admin']), drive.id, dc.candidate_id)
    assert _messages(again) == [messages.ATTENDANCE_ALREADY_MARKED]


def test_attendance_needs_membership_and_a_running_drive(make, started, people):
    drive, dc = started['drive'], started['drive_candidate']
    assert _messages(mark_attendance(make.actor(people['mentor']), drive.id, dc.candidate_id)) == \
        [messages.NOT_A_DRIVE_MEMBER]

    old = make.drive(people['hr'], drive_date=YESTERDAY, status='Started')
    old_dc = make.link(old, make.candidate())
    assert _messages(mark_attendance(make.actor(people['admin']), old.id, old_dc.candidate_id)) == \
        [messages.DRIVE_NOT_SCHEDULED_TODAY]

    proposal = make.drive(people['hr'], drive_date=TODAY)
    p_dc = make.link(proposal, make.candidate())
    assert _messages(mark_attendance(make.actor(people['admin']), proposal.id, p_dc.candidate_id)) == \
        [messages.ATTENDANCE_NOT_ALLOWED]
    assert _messages(mark_attendance(make.actor(people['admin']), proposal.id, 9999)) == \
        [messages.DRIVE_CANDIDATE_NOT_FOUND]
