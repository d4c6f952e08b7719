"""
Integration tests for volunteer management routes
"""

from urllib.parse import urlparse
from casa_database import Volunteer, CaseAssignment
from tests.fixtures.factories import (
    VolunteerFactory, SupervisorFactory, SupervisorVolunteerFactory, CaseAssignmentFactory
)


def _path(response):
    return urlparse(response.headers['Location']).path


class TestUnassignedVolunteers:

    def test_lists_unsupervised_volunteers(self, client, login, supervisor, casa_org):
        VolunteerFactory(casa_org=casa_org, display_name='Unsupervised Una')
        supervised = VolunteerFactory(casa_org=casa_org, display_name='Supervised Sam')
        SupervisorVolunteerFactory(volunteer=supervised, supervisor=supervisor)
        login(supervisor)

        response = client.get('/volunteers/unassigned')

        assert response.status_code == 200
        assert b'Unsupervised Una' in response.data
        assert b'Supervised Sam' not in response.data

    def test_volunteers_are_turned_away(self, client, login, volunteer):
        login(volunteer)

        response = client.get('/volunteers/unassigned')

        assert response.status_code == 302
        assert _path(response) == '/'

    def test_display_names_are_escaped(self, client, login, casa_admin, casa_org):
        VolunteerFactory(casa_org=casa_org, display_name="<script>alert('x')</script>")
        login(casa_admin)

        response = client.get('/volunteers/unassigned')

        assert b"<script>alert" not in response.data
        assert b"&lt;script&gt;" in response.data


class TestActivation:

    def test_deactivate(self, client, login, supervisor, casa_org, db_session):
        volunteer = VolunteerFactory(casa_org=casa_org)
        assignment = CaseAssignmentFactory(volunteer=volunteer)
        login(supervisor)

        response = client.post(f'/volunteers/{volunteer.id}/deactivate')

        assert response.status_code == 302
        db_session.expire_all()
        assert db_session.get(Volunteer, volunteer.id).active is False
        assert db_session.get(CaseAssignment, assignment.id).is_active is False

    def test_activate(self, client, login, casa_admin, casa_org, db_session):
        volunteer = VolunteerFactory(casa_org=casa_org, active=False)
        login(casa_admin)

        client.post(f'/volunteers/{volunteer.id}/activate')

        db_session.expire_all()
        assert db_session.get(Volunteer, volunteer.id).active is True

    def test_cannot_touch_other_org(self, client, login, supervisor, db_session):
        outsider = VolunteerFactory()
        login(supervisor)

        response = client.post(f'/volunteers/{outsider.id}/deactivate')

        assert _path(response) == '/'
        db_session.expire_all()
        assert db_session.get(Volunteer, outsider.id).active is True


class TestAssignSupervisor:

    def test_assign_and_unassign(self, client, login, supervisor, casa_org, db_session):
        volunteer = VolunteerFactory(casa_org=casa_org)
        login(supervisor)

        client.post(f'/volunteers/{volunteer.id}/supervisor', data={'supervisor_id': supervisor.id})
        db_session.expire_all()
        assert db_session.get(Volunteer, volunteer.id).supervised_by(supervisor) is True

        client.post(f'/volunteers/{volunteer.id}/supervisor', data={'supervisor_id': ''})
        db_session.expire_all()
        assert db_session.get(Volunteer, volunteer.id).has_supervisor() is False

    def test_reassign(self, client, login, casa_admin, casa_org, db_session):
        old_supervisor = SupervisorFactory(casa_org=casa_org)
        new_supervisor = SupervisorFactory(casa_org=casa_org)
        volunteer = VolunteerFactory(casa_org=casa_org)
        volunteer_id = volunteer.id
        SupervisorVolunteerFactory(volunteer=volunteer, supervisor=old_supervisor)
        login(casa_admin)

        client.post(f'/volunteers/{volunteer_id}/supervisor', data={'supervisor_id': new_supervisor.id})

        db_session.expire_all()
        volunteer = db_session.get(Volunteer, volunteer_id)
        assert volunteer.supervised_by(old_supervisor) is False
        assert volunteer.supervised_by(new_supervisor) is True
