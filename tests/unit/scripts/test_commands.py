"""
Tests for the flask CLI commands
"""

import pytest
from casa_database import CasaOrg, CasaAdmin
from tests.fixtures.factories import VolunteerFactory, SupervisorVolunteerFactory


class TestCommands:

    @pytest.fixture
    def runner(self, app):
        return app.test_cli_runner()

    def test_create_org(self, runner, db_session):
        result = runner.invoke(args=['create-org', 'Howard County CASA', '--fund-request-email', 'funds@example.org'])

        assert 'Organization created: Howard County CASA' in result.output
        org = db_session.query(CasaOrg).filter_by(name='Howard County CASA').one()
        assert org.fund_request_email == 'funds@example.org'

    def test_create_org_twice(self, runner):
        runner.invoke(args=['create-org', 'Dup CASA'])
        result = runner.invoke(args=['create-org', 'Dup CASA'])

        assert 'already exists' in result.output

    def test_create_admin(self, runner, db_session, casa_org):
        result = runner.invoke(args=[
            'create-admin', '--org', casa_org.name, '--email', 'Boss@Example.org',
            '--password', 'secret', '--display-name', 'Boss'
        ])

        assert 'Admin user created successfully: boss@example.org' in result.output
        admin = db_session.query(CasaAdmin).one()
        assert admin.casa_org_id == casa_org.id
        assert admin.role == 'Casa Admin'

    def test_create_admin_unknown_org(self, runner):
        result = runner.invoke(args=[
            'create-admin', '--org', 'Nowhere', '--email', 'a@example.org',
            '--password', 'secret', '--display-name', 'A'
        ])

        assert 'does not exist' in result.output

    def test_unsupervised_volunteers(self, runner, casa_org):
        VolunteerFactory(casa_org=casa_org, display_name='Alone')
        supervised = VolunteerFactory(casa_org=casa_org, display_name='Watched')
        SupervisorVolunteerFactory(volunteer=supervised)

        result = runner.invoke(args=['unsupervised-volunteers', str(casa_org.id)])

        assert 'Alone' in result.output
        assert 'Watched' not in result.output
