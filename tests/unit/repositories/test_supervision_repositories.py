"""
Tests for SupervisorVolunteerRepository, CaseAssignmentRepository and CasaCaseRepository
"""

import pytest
from repositories.supervisor_volunteer_repository import SupervisorVolunteerRepository
from repositories.case_assignment_repository import CaseAssignmentRepository
from repositories.casa_case_repository import CasaCaseRepository
from tests.fixtures.factories import (
    SupervisorVolunteerFactory, SupervisorFactory, CaseAssignmentFactory, CasaCaseFactory
)


class TestSupervisorVolunteerRepository:

    @pytest.fixture
    def repository(self, db_session):
        return SupervisorVolunteerRepository(session=db_session)

    def test_find_active_by_volunteer(self, repository, volunteer):
        SupervisorVolunteerFactory(volunteer=volunteer, is_active=False)
        active = SupervisorVolunteerFactory(volunteer=volunteer, is_active=True)

        assert repository.find_active_by_volunteer(volunteer.id) == active

    def test_find_active_by_volunteer_none(self, repository, volunteer):
        SupervisorVolunteerFactory(volunteer=volunteer, is_active=False)
        assert repository.find_active_by_volunteer(volunteer.id) is None

    def test_retire_active_for_volunteer(self, repository, db_session, volunteer):
        SupervisorVolunteerFactory(volunteer=volunteer, is_active=True)
        SupervisorVolunteerFactory(volunteer=volunteer, is_active=False)

        retired = repository.retire_active_for_volunteer(volunteer.id)
        db_session.commit()

        assert retired == 1
        assert all(not record.is_active for record in repository.find_by_volunteer(volunteer.id))

    def test_find_by_pair(self, repository, volunteer):
        supervisor = SupervisorFactory(casa_org=volunteer.casa_org)
        record = SupervisorVolunteerFactory(volunteer=volunteer, supervisor=supervisor)

        assert repository.find_by_pair(supervisor.id, volunteer.id) == record
        assert repository.find_by_pair(supervisor.id, volunteer.id + 999) is None


class TestCaseAssignmentRepository:

    @pytest.fixture
    def repository(self, db_session):
        return CaseAssignmentRepository(session=db_session)

    def test_deactivate_all_for_volunteer(self, repository, db_session, volunteer):
        # Arrange - a mix of active and inactive assignments, plus someone else's
        CaseAssignmentFactory(volunteer=volunteer, is_active=True)
        CaseAssignmentFactory(volunteer=volunteer, is_active=False)
        CaseAssignmentFactory(volunteer=volunteer, is_active=True)
        untouched = CaseAssignmentFactory(is_active=True)

        # Act
        count = repository.deactivate_all_for_volunteer(volunteer.id)
        db_session.commit()

        # Assert
        assert count == 3
        assert repository.find_active_by_volunteer(volunteer.id) == []
        assert repository.get_by_id(untouched.id).is_active is True


class TestCasaCaseRepository:

    @pytest.fixture
    def repository(self, db_session):
        return CasaCaseRepository(session=db_session)

    def test_find_by_identifier_id_or_slug(self, repository):
        casa_case = CasaCaseFactory(case_number='CINA-24-0007')

        assert repository.find_by_identifier(casa_case.id) == casa_case
        assert repository.find_by_identifier(str(casa_case.id)) == casa_case
        assert repository.find_by_identifier('cina-24-0007') == casa_case
        assert repository.find_by_identifier('missing') is None
        assert repository.find_by_identifier(None) is None

    def test_same_slug_resolves_within_each_org(self, repository, casa_org, other_casa_org):
        ours = CasaCaseFactory(casa_org=casa_org, case_number='CINA-21-1001')
        theirs = CasaCaseFactory(casa_org=other_casa_org, case_number='CINA-21-1001')

        assert repository.find_by_identifier('cina-21-1001', casa_org.id) == ours
        assert repository.find_by_identifier('cina-21-1001', other_casa_org.id) == theirs

    def test_slug_from_another_org_still_found(self, repository, casa_org, other_casa_org):
        theirs = CasaCaseFactory(casa_org=other_casa_org, case_number='TPR-22-0001')

        assert repository.find_by_identifier('tpr-22-0001', casa_org.id) == theirs

    def test_numeric_case_number_reachable_by_slug(self, repository, casa_org):
        casa_case = CasaCaseFactory(casa_org=casa_org, case_number='1001')

        assert casa_case.slug == 'case-1001'
        assert repository.find_by_identifier('case-1001', casa_org.id) == casa_case

    def test_find_by_org_active_only(self, repository, casa_org):
        CasaCaseFactory(casa_org=casa_org, case_number='B', active=True)
        CasaCaseFactory(casa_org=casa_org, case_number='A', active=False)

        assert [c.case_number for c in repository.find_by_org(casa_org.id)] == ['A', 'B']
        assert [c.case_number for c in repository.find_by_org(casa_org.id, active_only=True)] == ['B']
