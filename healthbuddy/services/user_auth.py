# services/user_auth.py
import logging
from typing import Optional
from sqlalchemy.orm import Session

from healthbuddy.core.exceptions import (
    ConflictError,
    DatabaseConflictError,
    ServiceError,
    UnauthorizedError,
)
from healthbuddy.crud.profile import crud_profile
from healthbuddy.crud.user_auth import crud_user_auth
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.user_auth import LoginRequest, SignUpRequest

logger = logging.getLogger(__name__)


# =====================================================================
# SERVICE CLASS
# =====================================================================


class UserAuthService:
    """Service layer for sign-up and sign-in."""

    def __init__(self):
        self.crud = crud_user_auth
        self.profile_crud = crud_profile

    # =====================================================================
    # REGISTRATION
    # =====================================================================

    def sign_up(self, db: Session, data: SignUpRequest) -> UserAuth:
        """
        Create the auth identity, then the profile row.

        The two steps commit separately. If the profile insert fails the
        identity is left in place and a ServiceError is raised.

        Raises:
            ConflictError: If the email is already registered
            ServiceError: If the profile row could not be created
        """
        if self.crud.get_by_email(db, email=data.email):
            raise ConflictError("Email already registered")

        try:
            user = self.crud.create(db, email=data.email, password=data.password)
        except DatabaseConflictError as e:
            raise ConflictError("Email already registered") from e

        try:
            self.profile_crud.create(
                db, user_id=user.id, name=data.name, email=user.email
            )
        except Exception as e:
            db.rollback()
            logger.error(f"Profile creation failed for user {user.id}: {e}")
            raise ServiceError("Account created but profile setup failed") from e

        logger.info(f"New account registered: {user.id}")
        return user

    # =====================================================================
    # AUTHENTICATION & LOGIN
    # =====================================================================

    def authenticate(self, db: Session, login_data: LoginRequest) -> UserAuth:
        """
        Authenticate user with email and password.

        Raises:
            UnauthorizedError: If credentials are invalid
        """
        user: Optional[UserAuth] = self.crud.get_by_email(db, email=login_data.email)
        if not user or not self.crud.verify_password(login_data.password, user.password_hash):
            logger.info(f"Failed sign-in attempt for {login_data.email}")
            raise UnauthorizedError("Invalid email or password")

        return self.crud.record_login(db, db_obj=user)


user_auth_service = UserAuthService()
