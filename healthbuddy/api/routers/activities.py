# healthbuddy/api/routers/activities.py

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from healthbuddy.core.config import get_db
from healthbuddy.core.security import get_current_user
from healthbuddy.services.activity import activity_service
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.activity import ActivityCreate, ActivityUpdate, ActivityOut
from healthbuddy.schemas.user_auth import SuccessResponse

router = APIRouter(prefix="/api/activities", tags=["Activities"])


@router.get("", response_model=List[ActivityOut], summary="List my activities")
def list_activities(
    current_user: UserAuth = Depends(get_current_user), db: Session = Depends(get_db)
):
    """
    List the authenticated user's activities, most recent first.
    """
    return activity_service.list_my_activities(db=db, requesting_user=current_user)


@router.post(
    "",
    response_model=ActivityOut,
    status_code=status.HTTP_201_CREATED,
    summary="Log an activity",
)
def create_activity(
    activity_data: ActivityCreate,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create an activity. `date` defaults to now.
    """
    return activity_service.create_activity(
        db=db, activity_data=activity_data, requesting_user=current_user
    )


@router.put("/{activity_id}", response_model=ActivityOut, summary="Edit an activity")
def update_activity(
    activity_id: UUID,
    update_data: ActivityUpdate,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Update description and/or date.

    Returns 404 if the activity does not exist or belongs to someone else.
    """
    return activity_service.update_activity(
        db=db,
        activity_id=activity_id,
        update_data=update_data,
        requesting_user=current_user,
    )


@router.delete("/{activity_id}", response_model=SuccessResponse, summary="Delete an activity")
def delete_activity(
    activity_id: UUID,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Delete an activity. 404 if not found or not owned.
    """
    activity_service.delete_activity(
        db=db, activity_id=activity_id, requesting_user=current_user
    )
    return SuccessResponse(message="Activity deleted successfully")
