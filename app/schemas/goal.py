from datetime import date, datetime
from typing import Optional

from pydantic import Field

from app.core.schemas import CamelModel
from app.models.goal import GoalStatus


class GoalCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    success_criteria: Optional[str] = None
    due_date: date
    status: GoalStatus = GoalStatus.DRAFT


class GoalUpdate(CamelModel):
    """Partial update; only the fields sent are applied."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    success_criteria: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[GoalStatus] = None


class GoalReview(CamelModel):
    """All three fields are required: a review never sets a subset."""
    status: GoalStatus
    achievement_rating: int = Field(..., ge=1, le=5)
    manager_feedback: str


class GoalResponse(CamelModel):
    id: int
    user_id: int
    employee_name: str
    department: Optional[str] = None
    title: str
    description: Optional[str] = None
    success_criteria: Optional[str] = None
    due_date: date
    status: GoalStatus
    achievement_rating: Optional[int] = None
    manager_feedback: Optional[str] = None
    reviewed_by: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
