# services/activity.py
import logging
from typing import List
from uuid import UUID
from sqlalchemy.orm import Session

from healthbuddy.core.exceptions import NotFoundError
from healthbuddy.crud.activity import crud_activity
from healthbuddy.models.activity import Activity
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.activity import ActivityCreate, ActivityUpdate

logger = logging.getLogger(__name__)


class ActivityService:
    """
    Service layer for the activity log.

    Ownership failures raise NotFoundError, so "not found" and "not yours"
    look the same to the caller.
    """

    def __init__(self):
        self.crud = crud_activity

    def list_my_activities(self, db: Session, requesting_user: UserAuth) -> List[Activity]:
        return self.crud.list_for_user(db, user_id=requesting_user.id)

    def create_activity(
        self, db: Session, activity_data: ActivityCreate, requesting_user: UserAuth
    ) -> Activity:
        activity = self.crud.create(db, user_id=requesting_user.id, obj_in=activity_data)
        logger.info(f"Activity {activity.id} created for user {requesting_user.id}")
        return activity

    def update_activity(
        self,
        db: Session,
        activity_id: UUID,
        update_data: ActivityUpdate,
        requesting_user: UserAuth,
    ) -> Activity:
        """Re-verify ownership, then apply the edit."""
        activity = self.crud.get_owned(db, id=activity_id, user_id=requesting_user.id)
        if not activity:
            raise NotFoundError("Activity not found")

        return self.crud.update(db, db_obj=activity, obj_in=update_data)

    def delete_activity(
        self, db: Session, activity_id: UUID, requesting_user: UserAuth
    ) -> None:
        deleted = self.crud.delete_owned(db, id=activity_id, user_id=requesting_user.id)
        if deleted == 0:
            raise NotFoundError("Activity not found")
        logger.info(f"Activity {activity_id} deleted for user {requesting_user.id}")


activity_service = ActivityService()
