"""
Unit tests for FundRequestService
"""

import pytest
from unittest.mock import Mock
from sqlalchemy.exc import SQLAlchemyError

from services.fund_request_service import (
    FundRequestService, permitted_params, validate_fund_request
)
from services.fund_request_mailer import FundRequestMailer
from repositories.fund_request_repository import FundRequestRepository
from casa_database import CasaCase, FundRequest


class TestPermittedParams:

    def test_drops_unknown_fields(self):
        params = {
            'submitter_email': 'a@example.org',
            'payment_amount': '$20',
            'casa_case_id': '999',
            'id': '1',
            'is_admin': 'true',
        }

        assert permitted_params(params) == {
            'submitter_email': 'a@example.org',
            'payment_amount': '$20',
        }

    def test_keeps_every_form_field(self):
        params = {field: 'x' for field in FundRequest.PERMITTED_FIELDS}
        assert permitted_params(params) == params


class TestValidateFundRequest:

    @pytest.mark.parametrize('email, message', [
        (None, "Submitter email can't be blank"),
        ('', "Submitter email can't be blank"),
        ('   ', "Submitter email can't be blank"),
        ('not-an-email', "Submitter email is invalid"),
        ('a@b', "Submitter email is invalid"),
    ])
    def test_invalid_submitter_email(self, email, message):
        assert validate_fund_request({'submitter_email': email}) == {'submitter_email': message}

    def test_valid_when_only_email_given(self):
        assert validate_fund_request({'submitter_email': 'casa@example.org'}) == {}


class TestFundRequestService:

    @pytest.fixture
    def repository(self):
        return Mock(spec=FundRequestRepository)

    @pytest.fixture
    def mailer(self):
        mailer = Mock(spec=FundRequestMailer)
        mailer.send_request.return_value = (True, "Email sent successfully")
        return mailer

    @pytest.fixture
    def service(self, repository, mailer):
        return FundRequestService(fund_request_repository=repository, mailer=mailer)

    @pytest.fixture
    def casa_case(self):
        return CasaCase(id=4, case_number='CINA-1', casa_org_id=1)

    def test_requires_repository(self):
        with pytest.raises(ValueError):
            FundRequestService()

    def test_create_saves_and_mails(self, service, repository, mailer, casa_case):
        # Arrange
        saved = FundRequest(id=1, casa_case_id=4, submitter_email='casa@example.org')
        repository.create.return_value = saved

        # Act
        result = service.create_fund_request(casa_case, {
            'submitter_email': 'casa@example.org',
            'youth_name': 'Sam',
            'casa_case_id': '12345',
        })

        # Assert
        assert result.is_success
        assert result.data is saved
        repository.create.assert_called_once_with(
            casa_case_id=4, submitter_email='casa@example.org', youth_name='Sam'
        )
        repository.commit.assert_called_once()
        mailer.send_request.assert_called_once_with(saved, casa_case)

    def test_validation_failure_returns_errors_and_attributes(self, service, repository, mailer, casa_case):
        result = service.create_fund_request(casa_case, {'submitter_email': '', 'youth_name': 'Sam'})

        assert result.is_failure
        assert result.error_code == 'VALIDATION_ERROR'
        assert result.metadata['errors'] == {'submitter_email': "Submitter email can't be blank"}
        assert result.metadata['attributes'] == {'submitter_email': '', 'youth_name': 'Sam'}
        repository.create.assert_not_called()
        mailer.send_request.assert_not_called()

    def test_database_error_is_a_failure(self, service, repository, mailer, casa_case):
        repository.create.side_effect = SQLAlchemyError("disk full")

        result = service.create_fund_request(casa_case, {'submitter_email': 'casa@example.org'})

        assert result.error_code == 'DATABASE_ERROR'
        mailer.send_request.assert_not_called()

    def test_mail_failure_does_not_undo_request(self, service, repository, mailer, casa_case):
        repository.create.return_value = FundRequest(id=1, submitter_email='casa@example.org')
        mailer.send_request.return_value = (False, "Email service not configured")

        result = service.create_fund_request(casa_case, {'submitter_email': 'casa@example.org'})

        assert result.is_success
        repository.commit.assert_called_once()
