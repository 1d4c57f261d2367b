# crud/activity.py

from typing import Optional, List
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy import desc
from sqlalchemy.orm import Session

from healthbuddy.models.activity import Activity
from healthbuddy.schemas.activity import ActivityCreate, ActivityUpdate


class CRUDActivity:
    """CRUD operations for Activity model. Every query is scoped to one user."""

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(
        self, db: Session, *, user_id: UUID, obj_in: ActivityCreate
    ) -> Activity:
        """Create an activity; `date` falls back to the creation time (naive UTC)."""
        db_obj = Activity(
            user_id=user_id,
            description=obj_in.description,
            date=obj_in.date or datetime.now(timezone.utc).replace(tzinfo=None),
        )

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get_owned(self, db: Session, *, id: UUID, user_id: UUID) -> Optional[Activity]:
        """Get an activity only if it belongs to the given user."""
        return (
            db.query(Activity)
            .filter(Activity.id == id, Activity.user_id == user_id)
            .first()
        )

    def list_for_user(
        self, db: Session, *, user_id: UUID, limit: Optional[int] = None
    ) -> List[Activity]:
        """List a user's activities, most recent first."""
        query = (
            db.query(Activity)
            .filter(Activity.user_id == user_id)
            .order_by(desc(Activity.date), desc(Activity.created_at))
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def update(
        self, db: Session, *, db_obj: Activity, obj_in: ActivityUpdate
    ) -> Activity:
        update_data = obj_in.model_dump(exclude_unset=True, exclude_none=True)

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # DELETE OPERATIONS
    # =====================================================================

    def delete_owned(self, db: Session, *, id: UUID, user_id: UUID) -> int:
        """Delete an activity owned by the user. Returns the affected row count."""
        deleted = (
            db.query(Activity)
            .filter(Activity.id == id, Activity.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


crud_activity = CRUDActivity()
