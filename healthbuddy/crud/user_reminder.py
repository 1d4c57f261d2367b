# crud/user_reminder.py

from typing import Optional
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from healthbuddy.models.user_reminder import UserReminder


class CRUDUserReminder:
    """CRUD operations for the per-user reminders singleton."""

    def get(self, db: Session, *, user_id: UUID) -> Optional[UserReminder]:
        return db.query(UserReminder).filter(UserReminder.user_id == user_id).first()

    def upsert(self, db: Session, *, user_id: UUID, reminders: str) -> UserReminder:
        """Insert the user's reminders row, or overwrite it if present."""
        db_obj = self.get(db, user_id=user_id)
        if db_obj is None:
            db_obj = UserReminder(user_id=user_id, reminders=reminders)
            db.add(db_obj)
        else:
            db_obj.reminders = reminders
            db_obj.updated_at = datetime.now(timezone.utc)

        db.commit()
        db.refresh(db_obj)
        return db_obj


crud_user_reminder = CRUDUserReminder()
