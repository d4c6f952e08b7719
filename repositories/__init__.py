"""
Repository Layer - Data Access Abstraction
Implements the Repository Pattern for database isolation
"""

from .base_repository import BaseRepository
from .casa_case_repository import CasaCaseRepository
from .casa_org_repository import CasaOrgRepository
from .case_assignment_repository import CaseAssignmentRepository
from .case_contact_repository import CaseContactRepository
from .fund_request_repository import FundRequestRepository
from .supervisor_volunteer_repository import SupervisorVolunteerRepository
from .user_repository import UserRepository
from .volunteer_repository import VolunteerRepository

__all__ = [
    'BaseRepository',
    'CasaCaseRepository',
    'CasaOrgRepository',
    'CaseAssignmentRepository',
    'CaseContactRepository',
    'FundRequestRepository',
    'SupervisorVolunteerRepository',
    'UserRepository',
    'VolunteerRepository',
]
