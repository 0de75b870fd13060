from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.database import MAX_ID, get_db
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.goal import GoalCreate, GoalResponse, GoalReview, GoalUpdate
from app.services.goal_service import GoalService

router = APIRouter(prefix="/goals", tags=["goals"])


@router.post("", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
def create_goal(
    data: GoalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return GoalService(db).create(current_user, data)


@router.get("", response_model=List[GoalResponse])
def list_goals(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Own goals; managers also see their direct reports'; HR admins see all."""
    return GoalService(db).list_visible(current_user)


@router.get("/{goal_id}", response_model=GoalResponse)
def get_goal(
    goal_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return GoalService(db).get_for(current_user, goal_id)


@router.put("/{goal_id}", response_model=GoalResponse)
def update_goal(
    data: GoalUpdate,
    goal_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return GoalService(db).update(current_user, goal_id, data)


@router.delete("/{goal_id}")
def delete_goal(
    goal_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    GoalService(db).delete(current_user, goal_id)
    return {"message": "Goal deleted successfully"}


@router.put("/{goal_id}/review", response_model=GoalResponse)
def review_goal(
    data: GoalReview,
    goal_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Manager/HR Admin review: sets status, rating, feedback and reviewer together."""
    return GoalService(db).review(current_user, goal_id, data)
