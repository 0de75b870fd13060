# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, goal, evaluation, notification

# Explicit class exports for cleaner imports
from .user import User, UserRole
from .goal import Goal, GoalStatus
from .evaluation import Evaluation, EvaluationCompetency, EvaluationStatus, EvaluationType
from .notification import Notification, NotificationType

__all__ = [
    "User",
    "UserRole",
    "Goal",
    "GoalStatus",
    "Evaluation",
    "EvaluationCompetency",
    "EvaluationStatus",
    "EvaluationType",
    "Notification",
    "NotificationType",
]
