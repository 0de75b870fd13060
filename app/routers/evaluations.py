from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.schemas.evaluation import EvaluationResponse, ManagerReviewCreate, SelfAssessmentCreate
from app.services.evaluation_service import PREDEFINED_COMPETENCIES, EvaluationService

router = APIRouter(prefix="/evaluations", tags=["evaluations"])


@router.post("/self-assessment", response_model=EvaluationResponse, status_code=status.HTTP_201_CREATED)
def create_self_assessment(
    data: SelfAssessmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return EvaluationService(db).create_self_assessment(current_user, data)


@router.post("/manager-review", response_model=EvaluationResponse, status_code=status.HTTP_201_CREATED)
def create_manager_review(
    data: ManagerReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Managers may only evaluate their direct reports; HR admins anyone."""
    return EvaluationService(db).create_manager_review(current_user, data)


@router.get("", response_model=List[EvaluationResponse])
def list_evaluations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return EvaluationService(db).list_visible(current_user)


@router.get("/competencies", response_model=List[str])
def list_competencies(current_user: User = Depends(get_current_user)):
    return PREDEFINED_COMPETENCIES
