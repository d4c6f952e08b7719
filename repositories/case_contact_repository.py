"""
CaseContactRepository - Data access layer for CaseContact model
"""

from datetime import date
from typing import List, Optional
from repositories.base_repository import BaseRepository
from casa_database import CaseContact


class CaseContactRepository(BaseRepository):
    """Repository for CaseContact data access"""

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, CaseContact)

    def _case_and_creator_query(self, casa_case_id: int, creator_id: int,
                                start_date: date, end_date: date,
                                contact_made: Optional[bool] = None):
        query = self.session.query(self.model_class).filter(
            self.model_class.casa_case_id == casa_case_id,
            self.model_class.creator_id == creator_id,
            self.model_class.occurred_at >= start_date,
            self.model_class.occurred_at <= end_date
        )
        if contact_made is not None:
            query = query.filter(self.model_class.contact_made.is_(contact_made))
        return query

    def find_by_case_and_creator(self, casa_case_id: int, creator_id: int,
                                 start_date: date, end_date: date,
                                 contact_made: Optional[bool] = None) -> List[CaseContact]:
        """
        Contacts on a case logged by one creator within an inclusive date range.

        Args:
            casa_case_id: Case the contact belongs to
            creator_id: Volunteer who logged the contact
            start_date: First day of the range (inclusive)
            end_date: Last day of the range (inclusive)
            contact_made: Filter on the contact_made flag; None means attempts
                and completed contacts alike

        Returns:
            Matching contacts, most recent first
        """
        return self._case_and_creator_query(
            casa_case_id, creator_id, start_date, end_date, contact_made
        ).order_by(self.model_class.occurred_at.desc()).all()

    def exists_for_case_and_creator(self, casa_case_id: int, creator_id: int,
                                    start_date: date, end_date: date,
                                    contact_made: Optional[bool] = None) -> bool:
        """Whether find_by_case_and_creator would return anything."""
        return self._case_and_creator_query(
            casa_case_id, creator_id, start_date, end_date, contact_made
        ).first() is not None

    def find_by_case(self, casa_case_id: int, limit: int = 50) -> List[CaseContact]:
        """Most recent contacts on a case."""
        return self.session.query(self.model_class)\
            .filter_by(casa_case_id=casa_case_id)\
            .order_by(self.model_class.occurred_at.desc())\
            .limit(limit)\
            .all()
