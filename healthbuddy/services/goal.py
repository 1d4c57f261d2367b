# services/goal.py
from typing import List
from uuid import UUID
from sqlalchemy.orm import Session

from healthbuddy.core.exceptions import NotFoundError
from healthbuddy.crud.goal import crud_goal
from healthbuddy.models.goal import Goal
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.goal import GoalCreate, GoalUpdate


class GoalService:
    """Service layer for goals."""

    def __init__(self):
        self.crud = crud_goal

    def list_my_goals(self, db: Session, requesting_user: UserAuth) -> List[Goal]:
        return self.crud.list_for_user(db, user_id=requesting_user.id)

    def create_goal(
        self, db: Session, goal_data: GoalCreate, requesting_user: UserAuth
    ) -> Goal:
        return self.crud.create(db, user_id=requesting_user.id, goal_text=goal_data.goal_text)

    def update_goal(
        self, db: Session, goal_id: UUID, goal_data: GoalUpdate, requesting_user: UserAuth
    ) -> Goal:
        goal = self.crud.get_owned(db, id=goal_id, user_id=requesting_user.id)
        if not goal:
            raise NotFoundError("Goal not found")
        return self.crud.update_text(db, db_obj=goal, goal_text=goal_data.goal_text)

    def delete_goal(self, db: Session, goal_id: UUID, requesting_user: UserAuth) -> None:
        if self.crud.delete_owned(db, id=goal_id, user_id=requesting_user.id) == 0:
            raise NotFoundError("Goal not found")


goal_service = GoalService()
