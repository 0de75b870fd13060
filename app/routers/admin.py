from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.policy import Action
from app.database import MAX_ID, get_db
from app.models.evaluation import Evaluation
from app.models.goal import Goal
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_action
from app.schemas.auth import UserResponse, UserRoleUpdate
from app.schemas.dashboard import SystemStats
from app.services.identity import IdentityService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_action(Action.MANAGE_USERS))]
)


@router.get("/users", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return IdentityService(db).list_users(current_user)


@router.put("/users/{user_id}/role", response_model=UserResponse)
def update_user_role(
    data: UserRoleUpdate,
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Change a user's role and/or reporting line."""
    return IdentityService(db).update_role(current_user, user_id, data)


@router.delete("/users/{user_id}")
def delete_user(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Remove a user account. Their goals, evaluations and notifications are
    left in place.
    """
    IdentityService(db).delete_user(current_user, user_id)
    return {"message": "User deleted successfully"}


@router.get("/stats", response_model=SystemStats)
def get_stats(db: Session = Depends(get_db)):
    return SystemStats(
        users=db.query(func.count(User.id)).scalar(),
        goals=db.query(func.count(Goal.id)).scalar(),
        evaluations=db.query(func.count(Evaluation.id)).scalar(),
    )
