"""
Authorization policy.

Every allow/deny decision in the API goes through `can()`; the rule for each
action lives in `_RULES`. List endpoints use `visibility_filter()` to restrict
queries to the rows an actor may see.

Reporting lines are one level deep: a manager's team is the set of users whose
`manager_id` equals the manager's id.
"""
import enum
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from sqlalchemy import or_, select, true
from sqlalchemy.sql.elements import ColumnElement

from app.core.exceptions import AccessDeniedError, AuthenticationError
from app.models.goal import Goal
from app.models.notification import Notification
from app.models.user import User, UserRole


class Action(str, enum.Enum):
    CREATE_GOAL = "goal:create"
    READ_GOAL = "goal:read"
    EDIT_GOAL = "goal:edit"
    DELETE_GOAL = "goal:delete"
    REVIEW_GOAL = "goal:review"
    CREATE_SELF_EVALUATION = "evaluation:create_self"
    CREATE_MANAGER_EVALUATION = "evaluation:create_manager"
    MANAGE_USERS = "user:manage"
    UPDATE_NOTIFICATION = "notification:update"
    VIEW_EMPLOYEE_DASHBOARD = "dashboard:employee"
    VIEW_MANAGER_DASHBOARD = "dashboard:manager"
    VIEW_ADMIN_DASHBOARD = "dashboard:admin"
    VIEW_TEAM = "team:read"
    VIEW_USER_REPORT = "report:user"
    EXPORT_REPORTS = "report:export"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    rule: Optional[str] = None
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, rule: str, reason: str) -> "Decision":
        return cls(False, rule, reason)


MANAGER_ROLES = (UserRole.MANAGER, UserRole.HR_ADMIN)
ADMIN_ROLES = (UserRole.HR_ADMIN,)


def _role_names(roles) -> str:
    return ", ".join(r.value for r in roles)


def _require_roles(rule: str, roles) -> Callable[[User, Any], Decision]:
    def check(actor: User, resource: Any = None) -> Decision:
        if actor.role in roles:
            return Decision.allow()
        return Decision.deny(
            rule,
            f"Role {actor.role.value} is not authorized. Required roles: {_role_names(roles)}",
        )
    return check


def _allow_all(actor: User, resource: Any = None) -> Decision:
    return Decision.allow()


def _owner_manager_id(owner: Optional[User]) -> Optional[int]:
    return owner.manager_id if owner is not None else None


def _in_reporting_line(actor: User, owner_id: int, owner: Optional[User]) -> bool:
    """Own record, or the owner reports directly to the actor."""
    if owner_id == actor.id:
        return True
    return actor.role == UserRole.MANAGER and _owner_manager_id(owner) == actor.id


# --- Goal rules ---

def _read_goal(actor: User, goal: Goal) -> Decision:
    if actor.is_hr_admin or _in_reporting_line(actor, goal.user_id, goal.owner):
        return Decision.allow()
    return Decision.deny("goal.read.not_visible", "Not authorized to view this goal")


def _modify_goal(verb: str) -> Callable[[User, Goal], Decision]:
    def check(actor: User, goal: Goal) -> Decision:
        if actor.is_hr_admin:
            return Decision.allow()
        if goal.user_id == actor.id:
            if goal.is_reviewed:
                return Decision.deny(f"goal.{verb}.reviewed", f"Cannot {verb} reviewed goals")
            return Decision.allow()
        if actor.role == UserRole.MANAGER and _owner_manager_id(goal.owner) == actor.id:
            return Decision.allow()
        return Decision.deny(f"goal.{verb}.not_owner", f"Not authorized to {verb} this goal")
    return check


# --- Evaluation rules ---

def _create_manager_evaluation(actor: User, subject: Optional[User]) -> Decision:
    """Without a subject only the role is checked."""
    if actor.role not in MANAGER_ROLES:
        return Decision.deny(
            "evaluation.manager_review.role",
            f"Role {actor.role.value} is not authorized. Required roles: {_role_names(MANAGER_ROLES)}",
        )
    if subject is None or actor.is_hr_admin or actor.manages(subject):
        return Decision.allow()
    return Decision.deny(
        "evaluation.manager_review.not_direct_report",
        "Not authorized for this employee: not a direct report",
    )


# --- Notification rules ---

def _own_notification(verb: str) -> Callable[[User, Notification], Decision]:
    def check(actor: User, notification: Notification) -> Decision:
        if notification.user_id == actor.id:
            return Decision.allow()
        return Decision.deny(f"notification.{verb}.not_recipient", "Not authorized for this notification")
    return check


# --- Reports ---

def _user_report(actor: User, subject_id: int) -> Decision:
    if actor.is_hr_admin or actor.id == subject_id:
        return Decision.allow()
    return Decision.deny("report.user.not_self", "Not authorized to view this report")


_RULES: Dict[Action, Callable[..., Decision]] = {
    Action.CREATE_GOAL: _allow_all,
    Action.READ_GOAL: _read_goal,
    Action.EDIT_GOAL: _modify_goal("edit"),
    Action.DELETE_GOAL: _modify_goal("delete"),
    Action.REVIEW_GOAL: _require_roles("goal.review.role", MANAGER_ROLES),
    Action.CREATE_SELF_EVALUATION: _allow_all,
    Action.CREATE_MANAGER_EVALUATION: _create_manager_evaluation,
    Action.MANAGE_USERS: _require_roles("user.manage.role", ADMIN_ROLES),
    Action.UPDATE_NOTIFICATION: _own_notification("update"),
    Action.VIEW_EMPLOYEE_DASHBOARD: _allow_all,
    Action.VIEW_MANAGER_DASHBOARD: _require_roles("dashboard.manager.role", MANAGER_ROLES),
    Action.VIEW_ADMIN_DASHBOARD: _require_roles("dashboard.admin.role", ADMIN_ROLES),
    Action.VIEW_TEAM: _require_roles("team.read.role", MANAGER_ROLES),
    Action.VIEW_USER_REPORT: _user_report,
    Action.EXPORT_REPORTS: _require_roles("report.export.role", ADMIN_ROLES),
}


def can(actor: Optional[User], action: Action, resource: Any = None) -> Decision:
    if actor is None:
        return Decision.deny("auth.unauthenticated", "Not authenticated")
    return _RULES[action](actor, resource)


def authorize(actor: Optional[User], action: Action, resource: Any = None) -> None:
    """Raise AccessDeniedError naming the violated rule when `can()` denies."""
    if actor is None:
        raise AuthenticationError("Not authenticated")
    decision = can(actor, action, resource)
    if not decision:
        raise AccessDeniedError(decision.reason, rule=decision.rule)


def team_ids_select(manager: User):
    return select(User.id).where(User.manager_id == manager.id)


def visibility_filter(actor: User, owner_column) -> ColumnElement:
    """
    WHERE clause restricting a list read to what `actor` may see.

    Employee: own rows. Manager: own rows plus direct reports' rows.
    HR Admin: everything.
    """
    if actor.is_hr_admin:
        return true()
    if actor.role == UserRole.MANAGER:
        return or_(owner_column == actor.id, owner_column.in_(team_ids_select(actor)))
    return owner_column == actor.id
