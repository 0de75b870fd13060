from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from app.core.schemas import CamelModel
from app.database import MAX_ID
from app.models.evaluation import EvaluationStatus, EvaluationType


class CompetencyRating(CamelModel):
    name: str = Field(..., min_length=1)
    self_rating: float = Field(0, ge=0, le=5)
    manager_rating: float = Field(0, ge=0, le=5)


class SelfAssessmentCreate(CamelModel):
    review_period: str = Field(..., min_length=1)
    competencies: Optional[List[CompetencyRating]] = None
    self_feedback: Optional[str] = None


class ManagerCompetencyInput(CamelModel):
    """
    Raw manager rating as sent by the client. The rating is coerced during
    sanitization, so any JSON value is accepted here; unknown keys such as
    selfRating are ignored.
    """
    name: str = Field(..., min_length=1)
    manager_rating: Any = None


class ManagerReviewCreate(CamelModel):
    user_id: int = Field(..., ge=1, le=MAX_ID)
    review_period: str = Field(..., min_length=1)
    competencies: List[ManagerCompetencyInput] = []
    manager_feedback: Optional[str] = None
    overall_score: Any = None


class CompetencyResponse(CamelModel):
    name: str
    self_rating: float = 0
    manager_rating: float = 0


class EvaluationResponse(CamelModel):
    id: int
    user_id: int
    evaluator_id: Optional[int] = None
    evaluation_type: EvaluationType
    review_period: str
    competencies: List[CompetencyResponse] = []
    self_feedback: Optional[str] = None
    manager_feedback: Optional[str] = None
    overall_score: Optional[float] = None
    status: EvaluationStatus
    created_at: Optional[datetime] = None
