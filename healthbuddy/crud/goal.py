# crud/goal.py

from typing import Optional, List
from uuid import UUID
from sqlalchemy import desc
from sqlalchemy.orm import Session

from healthbuddy.models.goal import Goal


class CRUDGoal:
    """CRUD operations for Goal model."""

    def create(self, db: Session, *, user_id: UUID, goal_text: str) -> Goal:
        db_obj = Goal(user_id=user_id, goal_text=goal_text)

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_owned(self, db: Session, *, id: UUID, user_id: UUID) -> Optional[Goal]:
        return db.query(Goal).filter(Goal.id == id, Goal.user_id == user_id).first()

    def list_for_user(self, db: Session, *, user_id: UUID) -> List[Goal]:
        """List a user's goals, newest first."""
        return (
            db.query(Goal)
            .filter(Goal.user_id == user_id)
            .order_by(desc(Goal.created_at))
            .all()
        )

    def update_text(self, db: Session, *, db_obj: Goal, goal_text: str) -> Goal:
        db_obj.goal_text = goal_text
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete_owned(self, db: Session, *, id: UUID, user_id: UUID) -> int:
        deleted = (
            db.query(Goal)
            .filter(Goal.id == id, Goal.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted


crud_goal = CRUDGoal()
