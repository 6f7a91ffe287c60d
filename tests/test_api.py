from conftest import TOMORROW

from drivehub.models import Notification


def login(client, user, password='password123'):
    return client.post('/auth/login', json={'email': user.email, 'password': password})


def test_health(client):
    assert client.get('/health').get_json() == {'status': 'ok'}


def test_login_required(client):
    resp = client.get('/drives')
    assert resp.status_code == 401
    assert resp.get_json()['errors'][0]['field'] == 'Main'


def test_login_failures(client, make, people):
    resp = login(client, people['hr'], password='wrong')
    assert resp.status_code == 401
    assert resp.get_json()['errors'] == [{'field': 'Main', 'message': 'Invalid credentials'}]

    resp = client.post('/auth/login', json={'email': 'nobody', 'password': 'x'})
    assert resp.status_code == 400
    assert resp.get_json()['errors'][0]['field'] == 'email'

    inactive = make.user('Panel', active=False)
    assert login(client, inactive).status_code == 403


def test_login_and_me(client, people):
    resp = login(client, people['hr'])
    assert resp.status_code == 200
    assert resp.get_json()['data']['role'] == 'HR'
    assert client.get('/users/me').get_json()['email'] == people['hr'].email
    assert client.post('/auth/logout').status_code == 200
    assert client.get('/users/me').status_code == 401


def _drive_payload(people, **overrides):
    payload = {
        'name': 'Campus Spring',
        'drive_date': TOMORROW.isoformat(),
        'technical_rounds': 1,
        'hr_ids': [people['hr'].id],
        'panel_ids': [people['panel1'].id, people['panel2'].id],
        'mentor_ids': [people['mentor'].id],
    }
    payload.update(overrides)
    return payload


def test_create_and_edit_drive_over_http(client, people):
    login(client, people['hr'])
    resp = client.post('/drives', json=_drive_payload(people, config={'hr_configuration': {'allow_panel_reassign': True}}))
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['warnings'] == []
    drive_id = body['data']['id']

    config = client.get(f'/drives/{drive_id}/config').get_json()
    assert config['hr_configuration']['allow_panel_reassign'] is True

    resp = client.patch(f'/drives/{drive_id}', json={'technical_rounds': 3})
    assert resp.status_code == 400
    assert resp.get_json()['errors'] == [{'field': 'technical_rounds',
                                          'message': 'Technical rounds should be 1 or 2'}]

    resp = client.patch(f'/drives/{drive_id}', json={'technical_rounds': 2})
    assert resp.get_json()['data']['technical_rounds'] == 2

    members = client.get(f'/drives/{drive_id}/members?role=Panel').get_json()
    assert members['total'] == 2
    listed = client.get('/drives').get_json()
    assert [d['id'] for d in listed['items']] == [drive_id]


def test_create_drive_form_errors(client, people):
    login(client, people['hr'])
    resp = client.post('/drives', json=_drive_payload(people, drive_date='not a date', panel_ids=['x']))
    assert resp.status_code == 400
    fields = {e['field'] for e in resp.get_json()['errors']}
    assert fields == {'drive_date', 'panel_ids'}


def test_create_drive_is_for_admin_and_hr(client, people):
    login(client, people['panel1'])
    assert client.post('/drives', json=_drive_payload(people)).status_code == 403


def test_patch_body_must_be_an_object(client, make, people):
    drive = make.drive(people['hr'])
    login(client, people['hr'])
    assert client.patch(f'/drives/{drive.id}', json=['name']).status_code == 400


def test_candidates_over_http(client, make, people):
    drive = make.drive(people['hr'])
    c1, c2 = make.candidate(), make.candidate()
    login(client, people['hr'])
    resp = client.post(f'/drives/{drive.id}/candidates', json={'candidate_ids': [c1.id, c2.id]})
    assert resp.status_code == 200
    resp = client.post(f'/drives/{drive.id}/candidates', json={'candidate_ids': [c1.id]})
    assert resp.status_code == 400
    assert resp.get_json()['errors'] == [{'field': 'Main', 'message': 'Some candidate already added to the drive'}]

    resp = client.delete(f'/drives/{drive.id}/candidates', json={'candidate_ids': [c2.id]})
    assert resp.status_code == 200
    assert client.get(f'/drives/{drive.id}/candidates').get_json()['total'] == 1


def test_round_flow_over_http(client, make, started, people):
    tech_id = started['tech_round'].id
    login(client, people['panel1'])
    assert client.patch(f'/drives/rounds/{tech_id}', json={'status': 'OnProcess'}).status_code == 200
    resp = client.post(f'/drives/rounds/{tech_id}/feedback', json={'recommendation': 'NoHire', 'overall_rating': 2})
    assert resp.status_code == 200
    feedback_id = resp.get_json()['data']['feedback_id']
    assert client.get(f'/drives/feedback/{feedback_id}').get_json()['recommendation'] == 'NoHire'
    resp = client.patch(f'/drives/rounds/{tech_id}', json={'status': 'Completed'})
    assert resp.get_json()['data']['result'] == 'Rejected'
    assert client.get('/drives/rounds/9999').status_code == 404


def test_reassign_over_http(client, make, started, people):
    new = make.member(started['drive'], people['panel2'])
    login(client, people['hr'])
    resp = client.post(f"/drives/rounds/{started['tech_round'].id}/reassign",
                       json={'old_interviewer_id': started['panel_member'].id,
                             'new_interviewer_id': new.id, 'require_approval': True})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['data']['interviewer_id'] == new.id
    assert len(body['warnings']) == 1


def test_attendance_over_http(client, started, people):
    login(client, people['panel1'])
    url = f"/drives/{started['drive'].id}/candidates/{started['drive_candidate'].candidate_id}/attendance"
    assert client.post(url).get_json()['data']['attendance_status'] == 'Present'
    assert client.post(url).status_code == 400


def test_admin_manages_users_over_http(client, people):
    login(client, people['admin'])
    resp = client.post('/users', json={'full_name': 'Kim Lane', 'email': 'kim@example.com', 'role_name': 'Mentor'})
    assert resp.status_code == 200
    user_id = resp.get_json()['data']['id']
    assert Notification.query.filter_by(user_id=user_id, kind='welcome').count() == 1

    resp = client.patch(f'/users/{user_id}', json={'phone': '555-0199'})
    assert resp.get_json()['data']['phone'] == '555-0199'


def test_users_endpoints_are_admin_only(client, people):
    login(client, people['hr'])
    assert client.post('/users', json={'full_name': 'X', 'email': 'x@example.com', 'role_name': 'HR'}).status_code == 403


def test_numeric_drive_name_is_a_validation_error(client, make, people):
    drive = make.drive(people['hr'])
    login(client, people['hr'])
    resp = client.patch(f'/drives/{drive.id}', json={'name': 123})
    assert resp.status_code == 400
    assert resp.get_json()['errors'] == [{'field': 'name', 'message': 'Drive name is required'}]
    resp = client.post('/drives', json=_drive_payload(people, name=123))
    assert resp.status_code == 400
    assert resp.get_json()['errors'] == [{'field': 'name', 'message': 'Drive name is required'}]


def test_candidate_pool_over_http(client, people):
    login(client, people['hr'])
    resp = client.post('/candidates', json={'full_name': 'Kim Lee', 'email': 'kim@example.com',
                                            'phone': '555-3000', 'tech_stack': ['java', 'kotlin']})
    assert resp.status_code == 200
    candidate = resp.get_json()['data']
    assert (candidate['experience_level'], candidate['tech_stack'], candidate['address']) == \
        ('Fresher', ['java', 'kotlin'], None)

    resp = client.post('/candidates', json={'full_name': 'Kim Twin', 'email': 'twin@example.com',
                                            'phone': '555-3000'})
    assert resp.get_json()['errors'] == [{'field': 'Main', 'message': 'Email or Phone number already exist'}]

    resp = client.patch(f"/candidates/{candidate['id']}", json={'experience_level': 'Intermediate'})
    assert resp.get_json()['data']['experience_level'] == 'Intermediate'
    assert client.get(f"/candidates/{candidate['id']}").get_json()['full_name'] == 'Kim Lee'
    assert client.get('/candidates/9999').status_code == 404
    assert client.get('/candidates?experience_level=Intermediate').get_json()['total'] == 1

    login(client, people['panel1'])
    assert client.post('/candidates', json={'full_name': 'X'}).status_code == 403


def test_user_directory_and_availability_over_http(client, people):
    login(client, people['panel1'])
    assert client.get('/users').status_code == 403
    resp = client.post(f"/users/{people['panel1'].id}/availability", json={'dates': ['2000-01-03']})
    assert resp.status_code == 400
    assert resp.get_json()['errors'][0]['field'] == 'dates'
    assert client.post(f"/users/{people['panel1'].id}/availability", json=['x']).status_code == 400
    assert client.get(f"/users/{people['panel1'].id}/assigned-candidates").get_json() == []

    login(client, people['hr'])
    listed = client.get('/users?role=Panel&is_active=true').get_json()
    assert listed['total'] == 2
    assert client.get(f"/users/{people['mentor'].id}").get_json()['role'] == 'Mentor'
    assert client.get('/users/9999').status_code == 404
    assert client.get(f"/users/{people['hr'].id}/panel-availability").get_json() == []
    assert client.get(f"/users/{people['mentor'].id}/mentor-drives").get_json() == []
    assert client.get('/users/9999/mentor-drives').status_code == 404
    assert client.get(f'/users/available?date={TOMORROW.isoformat()}').get_json() == []
