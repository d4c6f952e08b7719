"""
Tests for the authorization decorators in auth_utils
"""

from urllib.parse import urlparse
from unittest.mock import patch
import pytest
from flask import Blueprint
from auth_utils import supervisor_required


@pytest.fixture
def probe_client(app):
    """A client for a throwaway endpoint guarded by supervisor_required"""
    probe = Blueprint('probe', __name__)

    @probe.route('/probe')
    @supervisor_required
    def guarded():
        return 'ok'

    app.register_blueprint(probe)
    return app.test_client()


class TestSupervisorRequired:

    def test_anonymous_is_sent_to_login(self, probe_client):
        response = probe_client.get('/probe')
        assert urlparse(response.headers['Location']).path == '/auth/login'

    def test_volunteer_is_refused_and_logged(self, probe_client, volunteer):
        probe_client.post('/auth/login', data={'email': volunteer.email, 'password': 'password123'})

        with patch('auth_utils.security_logger') as security_logger:
            response = probe_client.get('/probe')

        assert urlparse(response.headers['Location']).path == '/'
        security_logger.log_role_denied.assert_called_once_with(volunteer.id, 'Volunteer', 'probe.guarded')

    @pytest.mark.parametrize('user_fixture', ['supervisor', 'casa_admin'])
    def test_staff_allowed(self, request, probe_client, user_fixture):
        user = request.getfixturevalue(user_fixture)
        probe_client.post('/auth/login', data={'email': user.email, 'password': 'password123'})

        response = probe_client.get('/probe')

        assert response.status_code == 200
        assert response.data == b'ok'
