# healthbuddy/api/routers/reminders.py

from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthbuddy.core.config import get_db
from healthbuddy.core.security import get_current_user
from healthbuddy.services.user_reminder import user_reminder_service
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.reminder import ReminderSave, ReminderOut, RemindersText

router = APIRouter(prefix="/api/reminders", tags=["Reminders"])


@router.post("", response_model=ReminderOut, summary="Save my reminders")
def save_reminders(
    data: ReminderSave,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Insert or overwrite the caller's "things to keep in mind" text.
    """
    return user_reminder_service.save_reminders(db=db, data=data, requesting_user=current_user)


@router.get("/{user_id}", response_model=RemindersText, summary="Get reminders")
def get_reminders(
    user_id: UUID,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Get the reminders text. Only the caller's own id is visible; any other
    id answers 404.
    """
    text = user_reminder_service.get_reminders_text(
        db=db, user_id=user_id, requesting_user=current_user
    )
    return RemindersText(reminders=text)
