"""
FundRequestService - whitelists, validates and records fund requests
"""

from typing import Any, Dict, Mapping, Optional
from sqlalchemy.exc import SQLAlchemyError
from repositories.fund_request_repository import FundRequestRepository
from services.common.result import Result
from services.email_service import is_valid_email
from services.fund_request_mailer import FundRequestMailer
from casa_database import FundRequest, CasaCase
from logging_config import get_logger

logger = get_logger(__name__)


def permitted_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only the fund request form fields; everything else is dropped."""
    return {field: params[field] for field in FundRequest.PERMITTED_FIELDS if field in params}


def validate_fund_request(attributes: Mapping[str, Any]) -> Dict[str, str]:
    """
    Field-level errors for a fund request.

    Returns:
        Mapping of field name to message, empty when valid
    """
    errors = {}
    submitter_email = (attributes.get('submitter_email') or '').strip()
    if not submitter_email:
        errors['submitter_email'] = "Submitter email can't be blank"
    elif not is_valid_email(submitter_email):
        errors['submitter_email'] = "Submitter email is invalid"
    return errors


class FundRequestService:
    """Service for fund request submission"""

    def __init__(self, fund_request_repository: Optional[FundRequestRepository] = None,
                 mailer: Optional[FundRequestMailer] = None):
        if not fund_request_repository:
            raise ValueError("FundRequestRepository must be provided via dependency injection")
        self.fund_request_repository = fund_request_repository
        self.mailer = mailer

    def create_fund_request(self, casa_case: CasaCase, params: Mapping[str, Any]) -> Result[FundRequest]:
        """
        Record a fund request filed from a case, then send the notice.

        Args:
            casa_case: Case the form was submitted from
            params: Raw submitted form data

        Returns:
            Result with the saved FundRequest. On a validation failure the
            metadata holds 'errors' (field -> message) and 'attributes'
            (the permitted values, for re-rendering the form).
        """
        attributes = permitted_params(params)
        errors = validate_fund_request(attributes)
        if errors:
            return Result.failure(
                "Fund request is invalid",
                code="VALIDATION_ERROR",
                metadata={'errors': errors, 'attributes': attributes}
            )

        try:
            fund_request = self.fund_request_repository.create(
                casa_case_id=casa_case.id if casa_case is not None else None,
                **attributes
            )
            self.fund_request_repository.commit()
        except SQLAlchemyError as e:
            return Result.failure(
                f"Failed to save fund request: {e}",
                code="DATABASE_ERROR",
                metadata={'errors': {}, 'attributes': attributes}
            )

        logger.info("Fund request created",
                    fund_request_id=fund_request.id,
                    casa_case_id=fund_request.casa_case_id)

        if self.mailer is not None:
            sent, message = self.mailer.send_request(fund_request, casa_case)
            if not sent:
                logger.warning("Fund request notice not sent",
                               fund_request_id=fund_request.id,
                               reason=message)

        return Result.success(fund_request)
