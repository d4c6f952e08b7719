"""
Test Data Factories for the CASA volunteer tracker

Factory Boy + Faker factories for every model.

Usage:
    from tests.fixtures.factories import VolunteerFactory, CasaCaseFactory

    # Create single instance (committed)
    volunteer = VolunteerFactory()

    # Create with specific attributes
    volunteer = VolunteerFactory(display_name='aaa', active=False)

    # Build without saving
    volunteer = VolunteerFactory.build()
"""

from .base import BaseFactory
from .casa_org_factory import CasaOrgFactory
from .user_factory import VolunteerFactory, SupervisorFactory, CasaAdminFactory
from .casa_case_factory import (
    CasaCaseFactory,
    CaseAssignmentFactory,
    CaseContactFactory,
    SupervisorVolunteerFactory,
    FundRequestFactory
)

__all__ = [
    'BaseFactory',
    'CasaOrgFactory',
    'VolunteerFactory',
    'SupervisorFactory',
    'CasaAdminFactory',
    'CasaCaseFactory',
    'CaseAssignmentFactory',
    'CaseContactFactory',
    'SupervisorVolunteerFactory',
    'FundRequestFactory'
]
