"""
VolunteerRepository - Data access layer for Volunteer users
"""

from typing import List
from sqlalchemy import and_
from repositories.base_repository import BaseRepository
from casa_database import Volunteer, SupervisorVolunteer


class VolunteerRepository(BaseRepository):
    """Repository for Volunteer data access"""

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, Volunteer)

    def find_by_org(self, casa_org_id: int, include_inactive: bool = True) -> List[Volunteer]:
        """
        Find volunteers belonging to an organization.

        Args:
            casa_org_id: Owning organization
            include_inactive: Whether deactivated volunteers are returned

        Returns:
            Volunteers ordered by display name
        """
        query = self.session.query(self.model_class).filter_by(casa_org_id=casa_org_id)
        if not include_inactive:
            query = query.filter_by(active=True)
        return query.order_by(self.model_class.display_name).all()

    def find_with_no_supervisor(self, casa_org_id: int) -> List[Volunteer]:
        """
        Find active volunteers of an organization nobody currently supervises.

        A volunteer whose supervision records are all inactive counts as
        unsupervised. Volunteers of other organizations never match.

        Args:
            casa_org_id: Owning organization

        Returns:
            Volunteers ordered by display name
        """
        return self.session.query(self.model_class)\
            .outerjoin(
                SupervisorVolunteer,
                and_(
                    SupervisorVolunteer.volunteer_id == self.model_class.id,
                    SupervisorVolunteer.is_active.is_(True)
                )
            )\
            .filter(self.model_class.casa_org_id == casa_org_id)\
            .filter(self.model_class.active.is_(True))\
            .filter(SupervisorVolunteer.id.is_(None))\
            .order_by(self.model_class.display_name)\
            .all()

    def set_active(self, volunteer: Volunteer, active: bool) -> Volunteer:
        """
        Flip the volunteer's active flag (flushed, not committed).

        Args:
            volunteer: Volunteer to update
            active: New flag value
        """
        return self.update(volunteer, active=active)
