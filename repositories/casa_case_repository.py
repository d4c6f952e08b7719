"""
CasaCaseRepository - Data access layer for CasaCase model
"""

from typing import List, Optional, Union
from repositories.base_repository import BaseRepository
from casa_database import CasaCase


class CasaCaseRepository(BaseRepository):
    """Repository for CasaCase data access"""

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, CasaCase)

    def find_by_identifier(self, identifier: Union[int, str],
                           casa_org_id: Optional[int] = None) -> Optional[CasaCase]:
        """
        Resolve a case from a URL identifier.

        Numeric identifiers are primary keys; anything else is a slug.
        Slugs are only unique within an organization, so a match in
        casa_org_id is preferred over one in another organization.
        """
        if identifier is None:
            return None
        identifier = str(identifier).strip()
        if identifier.isdigit():
            return self.get_by_id(int(identifier))

        query = self.session.query(self.model_class).filter_by(slug=identifier)
        if casa_org_id is not None:
            own = query.filter_by(casa_org_id=casa_org_id).first()
            if own is not None:
                return own
        return query.order_by(self.model_class.id).first()

    def find_by_org(self, casa_org_id: int, active_only: bool = False) -> List[CasaCase]:
        """Cases owned by an organization, ordered by case number."""
        query = self.session.query(self.model_class).filter_by(casa_org_id=casa_org_id)
        if active_only:
            query = query.filter_by(active=True)
        return query.order_by(self.model_class.case_number).all()
