"""
SupervisorVolunteerRepository - Data access layer for supervision records
"""

from typing import List, Optional
from repositories.base_repository import BaseRepository
from casa_database import SupervisorVolunteer, current_supervisor_volunteer


class SupervisorVolunteerRepository(BaseRepository):
    """Repository for SupervisorVolunteer data access"""

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, SupervisorVolunteer)

    def find_by_volunteer(self, volunteer_id: int) -> List[SupervisorVolunteer]:
        """Full supervision history of a volunteer, oldest first."""
        return self.session.query(self.model_class)\
            .filter_by(volunteer_id=volunteer_id)\
            .order_by(self.model_class.created_at.asc(), self.model_class.id.asc())\
            .all()

    def find_active_by_volunteer(self, volunteer_id: int) -> Optional[SupervisorVolunteer]:
        """
        The supervision record currently in force for a volunteer.

        Args:
            volunteer_id: ID of the volunteer

        Returns:
            Active record, or None when nobody supervises the volunteer
        """
        records = self.session.query(self.model_class)\
            .filter_by(volunteer_id=volunteer_id, is_active=True)\
            .all()
        return current_supervisor_volunteer(records)

    def find_by_supervisor(self, supervisor_id: int, active_only: bool = False) -> List[SupervisorVolunteer]:
        """
        Supervision records held by a supervisor.

        Args:
            supervisor_id: ID of the supervisor
            active_only: Only return records currently in force
        """
        query = self.session.query(self.model_class).filter_by(supervisor_id=supervisor_id)
        if active_only:
            query = query.filter_by(is_active=True)
        return query.all()

    def find_by_pair(self, supervisor_id: int, volunteer_id: int) -> Optional[SupervisorVolunteer]:
        """Most recent record linking this supervisor and volunteer, if any."""
        return self.session.query(self.model_class)\
            .filter_by(supervisor_id=supervisor_id, volunteer_id=volunteer_id)\
            .order_by(self.model_class.created_at.desc(), self.model_class.id.desc())\
            .first()

    def retire_active_for_volunteer(self, volunteer_id: int) -> int:
        """
        Mark the volunteer's active supervision records inactive
        (flushed, not committed).

        Returns:
            Number of records retired
        """
        return self.update_many(
            {'volunteer_id': volunteer_id, 'is_active': True},
            {'is_active': False}
        )
