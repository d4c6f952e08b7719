"""
CaseAssignmentRepository - Data access layer for CaseAssignment model
"""

from typing import List, Optional
from repositories.base_repository import BaseRepository
from casa_database import CaseAssignment


class CaseAssignmentRepository(BaseRepository):
    """Repository for CaseAssignment data access"""

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, CaseAssignment)

    def find_by_volunteer(self, volunteer_id: int) -> List[CaseAssignment]:
        """
        Find every assignment of a volunteer, active or not.

        Args:
            volunteer_id: ID of the volunteer
        """
        return self.session.query(self.model_class)\
            .filter_by(volunteer_id=volunteer_id)\
            .all()

    def find_active_by_volunteer(self, volunteer_id: int) -> List[CaseAssignment]:
        """
        Find the assignments a volunteer is currently responsible for.

        Args:
            volunteer_id: ID of the volunteer
        """
        return self.session.query(self.model_class)\
            .filter_by(volunteer_id=volunteer_id, is_active=True)\
            .all()

    def find_by_case(self, casa_case_id: int, active_only: bool = False) -> List[CaseAssignment]:
        """Find assignments on a case."""
        query = self.session.query(self.model_class).filter_by(casa_case_id=casa_case_id)
        if active_only:
            query = query.filter_by(is_active=True)
        return query.all()

    def set_active(self, assignment_id: int, is_active: bool) -> Optional[CaseAssignment]:
        """
        Update the active flag of a single assignment (flushed, not committed).

        Returns:
            Updated assignment or None if not found
        """
        assignment = self.get_by_id(assignment_id)
        if assignment:
            self.update(assignment, is_active=is_active)
        return assignment

    def deactivate_all_for_volunteer(self, volunteer_id: int) -> int:
        """
        Set is_active = False on every assignment of the volunteer,
        whatever its current value (flushed, not committed).

        Returns:
            Number of rows touched
        """
        return self.update_many({'volunteer_id': volunteer_id}, {'is_active': False})
