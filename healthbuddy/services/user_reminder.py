# services/user_reminder.py
import logging
from uuid import UUID
from sqlalchemy.orm import Session

from healthbuddy.core.exceptions import NotFoundError, PermissionError
from healthbuddy.crud.user_reminder import crud_user_reminder
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.models.user_reminder import UserReminder
from healthbuddy.schemas.reminder import ReminderSave

logger = logging.getLogger(__name__)


class UserReminderService:
    """Service layer for the "things to keep in mind" singleton."""

    def __init__(self):
        self.crud = crud_user_reminder

    def save_reminders(
        self, db: Session, data: ReminderSave, requesting_user: UserAuth
    ) -> UserReminder:
        if data.user_id is not None and data.user_id != requesting_user.id:
            logger.warning(
                f"User {requesting_user.id} tried to save reminders for {data.user_id}"
            )
            raise PermissionError("Cannot save reminders for another user")

        return self.crud.upsert(db, user_id=requesting_user.id, reminders=data.reminders)

    def get_reminders_text(
        self, db: Session, user_id: UUID, requesting_user: UserAuth
    ) -> str:
        """Reminders text for the caller; empty if never saved."""
        if user_id != requesting_user.id:
            raise NotFoundError("Reminders not found")

        row = self.crud.get(db, user_id=user_id)
        return row.reminders if row else ""


user_reminder_service = UserReminderService()
