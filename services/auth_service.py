"""
AuthService - sign in and sign out with the Result pattern
"""

from typing import Optional
from flask_login import login_user as flask_login_user, logout_user as flask_logout_user
from flask_bcrypt import check_password_hash
from repositories.user_repository import UserRepository
from services.common.result import Result
from casa_database import User
from logging_config import get_logger, security_logger

logger = get_logger(__name__)


class AuthService:
    """Service for authentication using the Result pattern"""

    def __init__(self, user_repository: Optional[UserRepository] = None):
        if not user_repository:
            raise ValueError("UserRepository must be provided via dependency injection")
        self.user_repository = user_repository

    def authenticate_user(self, email: str, password: str,
                          ip_address: Optional[str] = None) -> Result[User]:
        """
        Check credentials.

        Deactivated users are refused even with the right password.
        """
        if not email or not password:
            return Result.failure("Email and password are required", code="VALIDATION_ERROR")

        user = self.user_repository.find_by_email(email)
        if user is None or not user.password_hash or \
                not check_password_hash(user.password_hash, password):
            security_logger.log_authentication_attempt(email, False, ip_address)
            return Result.failure("Invalid email or password", code="INVALID_CREDENTIALS")

        if not user.is_active:
            security_logger.log_authentication_attempt(email, False, ip_address)
            return Result.failure("This account has been deactivated", code="ACCOUNT_INACTIVE")

        security_logger.log_authentication_attempt(email, True, ip_address)
        return Result.success(user)

    def login_user(self, user: User, remember: bool = False) -> Result[bool]:
        """Start a Flask-Login session for an authenticated user"""
        if not flask_login_user(user, remember=remember):
            return Result.failure("Failed to log in", code="LOGIN_FAILED")
        self.user_repository.record_sign_in(user)
        logger.info("User logged in", user_id=user.id, role=user.role)
        return Result.success(True)

    def logout_user(self) -> Result[bool]:
        flask_logout_user()
        return Result.success(True)
