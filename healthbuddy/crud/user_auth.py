# crud/user_auth.py
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from passlib.context import CryptContext

from healthbuddy.core.exceptions import DatabaseConflictError
from healthbuddy.models.user_auth import UserAuth

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UserAuthCRUD:
    """CRUD operations for UserAuth model."""

    # =====================================================================
    # HELPER METHODS
    # =====================================================================

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(self, db: Session, *, email: str, password: str) -> UserAuth:
        """
        Create a new auth identity.

        Args:
            db: Database session
            email: Login email (unique)
            password: Plain password, hashed before storage

        Returns:
            Created UserAuth instance

        Raises:
            DatabaseConflictError: If the email is already registered
        """
        db_obj = UserAuth(
            email=email.lower(),
            password_hash=self.hash_password(password),
        )

        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise DatabaseConflictError(f"Email already registered: {email}") from e
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, id: UUID) -> Optional[UserAuth]:
        """Get user by ID."""
        return db.query(UserAuth).filter(UserAuth.id == id).first()

    def get_by_email(self, db: Session, email: str) -> Optional[UserAuth]:
        """Get user by email (case-insensitive)."""
        return db.query(UserAuth).filter(UserAuth.email == email.lower()).first()

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def record_login(self, db: Session, *, db_obj: UserAuth) -> UserAuth:
        """Stamp the last successful login."""
        db_obj.last_login_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(db_obj)
        return db_obj


crud_user_auth = UserAuthCRUD()
