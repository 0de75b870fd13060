"""
Goal lifecycle: creation, visibility-scoped reads, owner edits before
review, and the manager review transition.
"""
from typing import List

from app.core import policy
from app.core.exceptions import NotFoundError
from app.models.goal import Goal
from app.models.notification import NotificationType
from app.models.user import User
from app.schemas.goal import GoalCreate, GoalReview, GoalUpdate
from app.services.base import BaseService
from app.services.notification import NotificationService


class GoalService(BaseService):
    def __init__(self, db):
        super().__init__(db)
        self.notifications = NotificationService(db)

    def create(self, actor: User, data: GoalCreate) -> Goal:
        policy.authorize(actor, policy.Action.CREATE_GOAL)
        goal = Goal(
            **data.model_dump(),
            user_id=actor.id,
            # Snapshot: later profile changes do not rewrite past goals
            employee_name=actor.name,
            department=actor.department,
        )
        self.db.add(goal)
        self._commit()
        self.db.refresh(goal)
        self._logger.info(f"Goal {goal.id} created by user {actor.id}")

        self.notifications.notify(
            actor.id,
            NotificationType.GOAL_CREATED,
            f"New goal created: {goal.title}",
            goal.id,
        )
        return goal

    def list_visible(self, actor: User) -> List[Goal]:
        return (
            self.db.query(Goal)
            .filter(policy.visibility_filter(actor, Goal.user_id))
            .order_by(Goal.id)
            .all()
        )

    def get(self, goal_id: int) -> Goal:
        goal = self.db.get(Goal, goal_id)
        if goal is None:
            raise NotFoundError("Goal", goal_id)
        return goal

    def get_for(self, actor: User, goal_id: int) -> Goal:
        goal = self.get(goal_id)
        policy.authorize(actor, policy.Action.READ_GOAL, goal)
        return goal

    def update(self, actor: User, goal_id: int, data: GoalUpdate) -> Goal:
        goal = self.get(goal_id)
        policy.authorize(actor, policy.Action.EDIT_GOAL, goal)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("title", "due_date", "status"):
                continue  # required columns cannot be cleared
            setattr(goal, field, value)
        self._commit()
        self.db.refresh(goal)
        return goal

    def delete(self, actor: User, goal_id: int) -> None:
        goal = self.get(goal_id)
        policy.authorize(actor, policy.Action.DELETE_GOAL, goal)
        self.db.delete(goal)
        self._commit()
        self._logger.info(f"Goal {goal_id} deleted by user {actor.id}")

    def review(self, actor: User, goal_id: int, data: GoalReview) -> Goal:
        """
        Set status, rating, feedback and reviewer in a single commit, then
        tell the owner. The notification is best effort.
        """
        policy.authorize(actor, policy.Action.REVIEW_GOAL)
        goal = self.get(goal_id)

        goal.status = data.status
        goal.achievement_rating = data.achievement_rating
        goal.manager_feedback = data.manager_feedback
        goal.reviewed_by = actor.id
        self._commit()
        self.db.refresh(goal)
        self._logger.info(f"Goal {goal.id} reviewed by user {actor.id}: {goal.status.value}")

        self.notifications.notify(
            goal.user_id,
            NotificationType.GOAL_REVIEWED,
            f'Your goal "{goal.title}" has been reviewed',
            goal.id,
        )
        return goal
