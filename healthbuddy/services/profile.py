# services/profile.py
import logging
from sqlalchemy.orm import Session

from healthbuddy.core.exceptions import NotFoundError
from healthbuddy.crud.profile import crud_profile
from healthbuddy.models.profile import Profile
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.profile import ProfileUpdate

logger = logging.getLogger(__name__)


class ProfileService:
    """Service layer for the caller's profile."""

    def __init__(self):
        self.crud = crud_profile

    def get_my_profile(self, db: Session, requesting_user: UserAuth) -> Profile:
        profile = self.crud.get(db, id=requesting_user.id)
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    def update_my_profile(
        self, db: Session, update_data: ProfileUpdate, requesting_user: UserAuth
    ) -> Profile:
        profile = self.get_my_profile(db, requesting_user)
        return self.crud.update_name(db, db_obj=profile, name=update_data.name)

    def mark_welcome_seen(self, db: Session, requesting_user: UserAuth) -> Profile:
        """Record that the welcome modal was dismissed. Never reset."""
        profile = self.get_my_profile(db, requesting_user)
        if not profile.has_seen_welcome:
            logger.info(f"User {requesting_user.id} dismissed the welcome modal")
        return self.crud.mark_welcome_seen(db, db_obj=profile)


profile_service = ProfileService()
