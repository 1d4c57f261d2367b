# healthbuddy/api/routers/goals.py

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from healthbuddy.core.config import get_db
from healthbuddy.core.security import get_current_user
from healthbuddy.services.goal import goal_service
from healthbuddy.models.user_auth import UserAuth
from healthbuddy.schemas.goal import GoalCreate, GoalUpdate, GoalOut
from healthbuddy.schemas.user_auth import SuccessResponse

router = APIRouter(prefix="/api/goals", tags=["Goals"])


@router.get("", response_model=List[GoalOut], summary="List my goals")
def list_goals(
    current_user: UserAuth = Depends(get_current_user), db: Session = Depends(get_db)
):
    return goal_service.list_my_goals(db=db, requesting_user=current_user)


@router.post(
    "", response_model=GoalOut, status_code=status.HTTP_201_CREATED, summary="Add a goal"
)
def create_goal(
    goal_data: GoalCreate,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return goal_service.create_goal(db=db, goal_data=goal_data, requesting_user=current_user)


@router.put("/{goal_id}", response_model=GoalOut, summary="Edit a goal")
def update_goal(
    goal_id: UUID,
    goal_data: GoalUpdate,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return goal_service.update_goal(
        db=db, goal_id=goal_id, goal_data=goal_data, requesting_user=current_user
    )


@router.delete("/{goal_id}", response_model=SuccessResponse, summary="Delete a goal")
def delete_goal(
    goal_id: UUID,
    current_user: UserAuth = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal_service.delete_goal(db=db, goal_id=goal_id, requesting_user=current_user)
    return SuccessResponse(message="Goal deleted successfully")
