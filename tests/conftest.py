# tests/conftest.py
"""
Shared fixtures for the pytest suite.

Every test gets a fresh application and an empty in-memory database, so
factories can commit freely without leaking state between tests.
"""
import os
import pytest
from app import create_app
from extensions import db
from tests.fixtures.factories import (
    CasaOrgFactory, VolunteerFactory, SupervisorFactory, CasaAdminFactory, CasaCaseFactory
)
from tests.fixtures.factories.user_factory import TEST_PASSWORD


@pytest.fixture
def app():
    """
    A Flask application with the testing configuration and all tables created.

    The application context stays pushed for the whole test, so db.session,
    the service registry and the factories all share one session.
    """
    os.environ['FLASK_ENV'] = 'testing'

    app = create_app(config_name='testing', test_config={
        'SERVER_NAME': 'localhost.localdomain'  # Required for url_for in tests
    })

    with app.app_context():
        db.create_all()

        yield app

        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Test client for the application"""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """The session the application and the factories write through"""
    return db.session


@pytest.fixture
def login(client):
    """
    Log a user in through the real login form.

    Usage:
        login(volunteer)
    """
    def _login(user, password=TEST_PASSWORD):
        return client.post('/auth/login', data={
            'email': user.email,
            'password': password
        })
    return _login


@pytest.fixture
def casa_org(db_session):
    return CasaOrgFactory()


@pytest.fixture
def other_casa_org(db_session):
    return CasaOrgFactory()


@pytest.fixture
def volunteer(casa_org):
    return VolunteerFactory(casa_org=casa_org)


@pytest.fixture
def supervisor(casa_org):
    return SupervisorFactory(casa_org=casa_org)


@pytest.fixture
def casa_admin(casa_org):
    return CasaAdminFactory(casa_org=casa_org)


@pytest.fixture
def casa_case(casa_org):
    return CasaCaseFactory(casa_org=casa_org)
