"""
CasaOrgRepository - Data access layer for CasaOrg model
"""

from typing import Optional
from repositories.base_repository import BaseRepository
from casa_database import CasaOrg


class CasaOrgRepository(BaseRepository):
    """Repository for CasaOrg data access"""

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, CasaOrg)

    def find_by_name(self, name: str) -> Optional[CasaOrg]:
        return self.find_one_by(name=name)
