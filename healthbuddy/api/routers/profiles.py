# healthbuddy/api/routers/profiles.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthbuddy.core.config import get_db
from healthbuddy.core.security import get_current_user
from healthbuddy.services.profile import profile_service
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.profile import ProfileOut, ProfileUpdate

router = APIRouter(prefix="/api/profiles", tags=["Profiles"])


@router.get("/me", response_model=ProfileOut, summary="Get my profile")
def get_my_profile(
    current_user: UserAuth = Depends(get_current_user), db: Session = Depends(get_db)
):
    return profile_service.get_my_profile(db=db, requesting_user=current_user)


@router.put("/me", response_model=ProfileOut, summary="Update my profile")
def update_my_profile(
    update_data: ProfileUpdate,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return profile_service.update_my_profile(
        db=db, update_data=update_data, requesting_user=current_user
    )


@router.post("/me/welcome-seen", response_model=ProfileOut, summary="Dismiss welcome modal")
def mark_welcome_seen(
    current_user: UserAuth = Depends(get_current_user), db: Session = Depends(get_db)
):
    """
    Set `has_seen_welcome` to true. Calling it again is a no-op.
    """
    return profile_service.mark_welcome_seen(db=db, requesting_user=current_user)
