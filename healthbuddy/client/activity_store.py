# healthbuddy/client/activity_store.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional
from uuid import UUID

from healthbuddy.client.api import HealthBuddyAPI
from healthbuddy.client.errors import ActivityNotFoundError, ApiError, ValidationError
from healthbuddy.schemas.activity import ActivityOut

logger = logging.getLogger(__name__)

# Summary card windows, in days
STAT_WINDOWS = {"week": 7, "month": 30, "year": 365}


def _aware(value: datetime) -> datetime:
    """Stored timestamps come back naive; they are UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _newest_first(activities: List[ActivityOut]) -> List[ActivityOut]:
    return sorted(activities, key=lambda a: _aware(a.date), reverse=True)


class ActivityStore:
    """
    Local copy of the signed-in user's activity log.

    Each mutation is its own round trip. The row the server returns is
    authoritative and is merged into local state by id, so a later
    refresh() never produces duplicates.
    """

    def __init__(self, api: HealthBuddyAPI):
        self.api = api
        self.activities: List[ActivityOut] = []
        self.loaded = False

    # =====================================================================
    # READ
    # =====================================================================

    async def load(self) -> List[ActivityOut]:
        """Replace local state with the server's list (server order wins)."""
        self.activities = await self.api.list_activities()
        self.loaded = True
        return self.activities

    refresh = load

    def clear(self) -> None:
        self.activities = []
        self.loaded = False

    def recent(self, limit: int = 5) -> List[ActivityOut]:
        """The `limit` most recent activities by date."""
        return _newest_first(self.activities)[:limit]

    def stats(self, now: Optional[datetime] = None) -> Dict[str, int]:
        """Activity counts for the last 7, 30 and 365 days."""
        now = _aware(now or datetime.now(timezone.utc))
        counts = {}
        for label, days in STAT_WINDOWS.items():
            start = now - timedelta(days=days)
            counts[label] = sum(
                1 for a in self.activities if start <= _aware(a.date) <= now
            )
        return counts

    # =====================================================================
    # MUTATIONS
    # =====================================================================

    def _merge(self, activity: ActivityOut) -> None:
        """Replace any row with the same id and insert at its date position (newest first)."""
        rows = [a for a in self.activities if a.id != activity.id]
        when = _aware(activity.date)
        index = next((i for i, a in enumerate(rows) if _aware(a.date) <= when), len(rows))
        rows.insert(index, activity)
        self.activities = rows

    async def create(self, description: str, date: Optional[datetime] = None) -> ActivityOut:
        """
        Log a new activity.

        Raises:
            ValidationError: If the description is blank (no request is sent)
        """
        description = (description or "").strip()
        if not description:
            raise ValidationError("Please enter an activity description")

        activity = await self.api.create_activity(description, date)
        self._merge(activity)
        logger.info(f"Activity {activity.id} added")
        return activity

    async def edit(
        self,
        activity_id: UUID,
        description: Optional[str] = None,
        date: Optional[datetime] = None,
    ) -> ActivityOut:
        """
        Apply an edit and replace the local row with the server's copy.

        Raises:
            ValidationError: If a blank description is given
            ActivityNotFoundError: If the server reports 404
        """
        if description is not None:
            description = description.strip()
            if not description:
                raise ValidationError("Please enter an activity description")

        try:
            updated = await self.api.update_activity(activity_id, description, date)
        except ApiError as e:
            if e.status_code == 404:
                raise ActivityNotFoundError(e.detail) from e
            raise

        self._merge(updated)
        return updated

    async def delete(
        self, activity_id: UUID, confirm: Optional[Callable[[str], bool]] = None
    ) -> bool:
        """
        Delete an activity after confirmation.

        Returns False without any request if `confirm` declines.

        Raises:
            ActivityNotFoundError: If the server reports 404
        """
        if confirm is not None and not confirm("Are you sure you want to delete this activity?"):
            return False

        try:
            await self.api.delete_activity(activity_id)
        except ApiError as e:
            if e.status_code == 404:
                raise ActivityNotFoundError(e.detail) from e
            raise

        self.activities = [a for a in self.activities if a.id != activity_id]
        return True
