from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.policy import Action
from app.database import get_db
from app.models.user import User
from app.routers.auth_deps import require_action
from app.schemas.auth import UserResponse
from app.services.identity import IdentityService

router = APIRouter(prefix="/manager", tags=["manager"])


@router.get("/team", response_model=List[UserResponse])
def get_team(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(Action.VIEW_TEAM))
):
    """Direct reports of the caller."""
    return IdentityService(db).direct_reports(current_user)
