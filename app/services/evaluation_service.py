"""
Evaluation recorder: self-assessments and manager reviews.

Evaluations are write-once; there is no update or delete path.
"""
import math
from typing import Any, Dict, Iterable, List

from app.core import policy
from app.core.exceptions import ValidationFailedError
from app.models.evaluation import (
    Evaluation,
    EvaluationCompetency,
    EvaluationStatus,
    EvaluationType,
)
from app.models.notification import NotificationType
from app.models.user import User
from app.schemas.evaluation import (
    ManagerCompetencyInput,
    ManagerReviewCreate,
    SelfAssessmentCreate,
)
from app.services.base import BaseService
from app.services.identity import IdentityService
from app.services.notification import NotificationService

PREDEFINED_COMPETENCIES = [
    "Communication",
    "Teamwork",
    "Problem Solving",
    "Leadership",
    "Technical Skills",
    "Adaptability",
    "Time Management",
]

RATING_MIN, RATING_MAX = 0, 5


def coerce_number(value: Any) -> float:
    """
    Lenient numeric coercion for client-supplied scores: numbers pass
    through, numeric strings are parsed, anything else (NaN and infinities too)
    becomes 0.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip()) if value.strip() else 0.0
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def sanitize_manager_competencies(competencies: Iterable[ManagerCompetencyInput]) -> List[Dict[str, Any]]:
    """Reduce each entry to {name, manager_rating}; self ratings are never taken from a manager."""
    sanitized = []
    for index, competency in enumerate(competencies):
        rating = coerce_number(competency.manager_rating)
        if not RATING_MIN <= rating <= RATING_MAX:
            raise ValidationFailedError(
                "Competency rating out of range",
                fields=[{
                    "field": f"competencies.{index}.managerRating",
                    "msg": f"must be between {RATING_MIN} and {RATING_MAX}",
                }],
            )
        sanitized.append({"name": competency.name, "manager_rating": rating})
    return sanitized


def default_self_competencies() -> List[Dict[str, Any]]:
    return [{"name": name, "self_rating": 0} for name in PREDEFINED_COMPETENCIES]


class EvaluationService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.notifications = NotificationService(db)
        self.identity = IdentityService(db)

    def create_self_assessment(self, actor: User, data: SelfAssessmentCreate) -> Evaluation:
        policy.authorize(actor, policy.Action.CREATE_SELF_EVALUATION)

        if data.competencies:
            # Manager ratings are only ever set by a manager review
            competencies = [{"name": c.name, "self_rating": c.self_rating} for c in data.competencies]
        else:
            competencies = default_self_competencies()

        evaluation = Evaluation(
            user_id=actor.id,
            evaluation_type=EvaluationType.SELF,
            review_period=data.review_period,
            self_feedback=data.self_feedback,
            status=EvaluationStatus.COMPLETED,
            competencies=[EvaluationCompetency(**c) for c in competencies],
        )
        self.db.add(evaluation)
        self._commit()
        self.db.refresh(evaluation)
        self._logger.info(f"Self-assessment {evaluation.id} recorded for user {actor.id}")

        if actor.manager_id is not None:
            self.notifications.notify(
                actor.manager_id,
                NotificationType.EVALUATION_DUE,
                f"{actor.name} submitted a self-assessment for {data.review_period}; your review is due",
                evaluation.id,
            )
        return evaluation

    def create_manager_review(self, actor: User, data: ManagerReviewCreate) -> Evaluation:
        policy.authorize(actor, policy.Action.CREATE_MANAGER_EVALUATION)
        subject = self.identity.get(data.user_id)
        policy.authorize(actor, policy.Action.CREATE_MANAGER_EVALUATION, subject)

        competencies = sanitize_manager_competencies(data.competencies)
        evaluation = Evaluation(
            user_id=subject.id,
            evaluator_id=actor.id,
            evaluation_type=EvaluationType.MANAGER,
            review_period=data.review_period,
            manager_feedback=data.manager_feedback,
            overall_score=coerce_number(data.overall_score),
            status=EvaluationStatus.COMPLETED,
            competencies=[EvaluationCompetency(**c) for c in competencies],
        )
        self.db.add(evaluation)
        self._commit()
        self.db.refresh(evaluation)
        self._logger.info(f"Manager review {evaluation.id} for user {subject.id} by {actor.id}")

        self.notifications.notify(
            subject.id,
            NotificationType.EVALUATION_COMPLETED,
            f"Your performance evaluation for {data.review_period} has been completed",
            evaluation.id,
        )
        return evaluation

    def list_visible(self, actor: User) -> List[Evaluation]:
        return (
            self.db.query(Evaluation)
            .filter(policy.visibility_filter(actor, Evaluation.user_id))
            .order_by(Evaluation.id)
            .all()
        )
