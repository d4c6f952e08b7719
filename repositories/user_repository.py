"""
UserRepository - Data access layer for all user types
"""

from typing import Optional
from repositories.base_repository import BaseRepository
from casa_database import User
from utils.datetime_utils import utc_now


class UserRepository(BaseRepository):
    """Repository for User data access (volunteers, supervisors and admins)"""

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, User)

    def find_by_email(self, email: str) -> Optional[User]:
        """
        Find a user by email, ignoring case and surrounding whitespace.

        Args:
            email: Email address

        Returns:
            User of whatever subtype, or None
        """
        if not email:
            return None
        return self.session.query(self.model_class)\
            .filter(self.model_class.email == email.strip().lower())\
            .first()

    def record_sign_in(self, user: User) -> User:
        """Stamp last_sign_in_at and commit."""
        user.last_sign_in_at = utc_now()
        self.commit()
        return user
