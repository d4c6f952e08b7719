"""
CasaCaseService - case lookup scoped to the signed-in user's organization
"""

from typing import Any, Dict, List, Optional, Union
from repositories.casa_case_repository import CasaCaseRepository
from repositories.case_assignment_repository import CaseAssignmentRepository
from repositories.case_contact_repository import CaseContactRepository
from repositories.fund_request_repository import FundRequestRepository
from services.common.result import Result
from casa_database import CasaCase


class CasaCaseService:
    """Service for reading cases"""

    def __init__(self,
                 casa_case_repository: Optional[CasaCaseRepository] = None,
                 case_assignment_repository: Optional[CaseAssignmentRepository] = None,
                 case_contact_repository: Optional[CaseContactRepository] = None,
                 fund_request_repository: Optional[FundRequestRepository] = None):
        if not casa_case_repository:
            raise ValueError("CasaCaseRepository must be provided via dependency injection")
        self.casa_case_repository = casa_case_repository
        self.case_assignment_repository = case_assignment_repository
        self.case_contact_repository = case_contact_repository
        self.fund_request_repository = fund_request_repository

    def find_for_org(self, identifier: Union[int, str], casa_org_id: Optional[int]) -> Result[CasaCase]:
        """
        Resolve a case by id or slug and confirm it belongs to the organization.

        Failure codes:
            NOT_FOUND: no such case
            ORG_MISMATCH: the case belongs to another organization
                (metadata carries the case's casa_org_id)
        """
        casa_case = self.casa_case_repository.find_by_identifier(identifier, casa_org_id)
        if casa_case is None:
            return Result.failure(f"Case {identifier} not found", code="NOT_FOUND")
        if casa_case.casa_org_id != casa_org_id:
            return Result.failure(
                "Case belongs to a different organization",
                code="ORG_MISMATCH",
                metadata={'casa_case_id': casa_case.id, 'casa_org_id': casa_case.casa_org_id}
            )
        return Result.success(casa_case)

    def cases_for_org(self, casa_org_id: int) -> List[CasaCase]:
        return self.casa_case_repository.find_by_org(casa_org_id, active_only=True)

    def case_overview(self, casa_case: CasaCase) -> Dict[str, Any]:
        """Everything the case page shows."""
        return {
            'casa_case': casa_case,
            'assignments': self.case_assignment_repository.find_by_case(casa_case.id, active_only=True)
            if self.case_assignment_repository else [],
            'contacts': self.case_contact_repository.find_by_case(casa_case.id)
            if self.case_contact_repository else [],
            'fund_requests': self.fund_request_repository.find_by_case(casa_case.id)
            if self.fund_request_repository else [],
        }
