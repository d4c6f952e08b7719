"""
FundRequestRepository - Data access layer for FundRequest model
"""

from typing import List
from repositories.base_repository import BaseRepository
from casa_database import FundRequest


class FundRequestRepository(BaseRepository):
    """Repository for FundRequest data access"""

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, FundRequest)

    def find_by_case(self, casa_case_id: int) -> List[FundRequest]:
        """Fund requests filed from a case, newest first."""
        return self.session.query(self.model_class)\
            .filter_by(casa_case_id=casa_case_id)\
            .order_by(self.model_class.created_at.desc())\
            .all()
