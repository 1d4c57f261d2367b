# crud/profile.py
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from healthbuddy.models.profile import Profile


class CRUDProfile:
    """CRUD operations for Profile model."""

    def create(
        self, db: Session, *, user_id: UUID, name: Optional[str], email: str
    ) -> Profile:
        """Create a profile for a freshly registered user."""
        db_obj = Profile(id=user_id, name=name, email=email, has_seen_welcome=False)

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get(self, db: Session, id: UUID) -> Optional[Profile]:
        """Get profile by user ID."""
        return db.query(Profile).filter(Profile.id == id).first()

    def update_name(self, db: Session, *, db_obj: Profile, name: Optional[str]) -> Profile:
        db_obj.name = name
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def mark_welcome_seen(self, db: Session, *, db_obj: Profile) -> Profile:
        """Flip has_seen_welcome to true. Idempotent."""
        if not db_obj.has_seen_welcome:
            db_obj.has_seen_welcome = True
            db.commit()
            db.refresh(db_obj)
        return db_obj


crud_profile = CRUDProfile()
