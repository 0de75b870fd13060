import pytest
from datetime import date

from app.core import policy
from app.core.exceptions import AccessDeniedError, AuthenticationError
from app.core.policy import Action
from app.models.goal import Goal, GoalStatus
from app.models.notification import Notification, NotificationType
from app.models.user import User, UserRole


def _goal(db_session, owner, **fields):
    goal = Goal(
        user_id=owner.id,
        employee_name=owner.name,
        department=owner.department,
        title="Reduce churn",
        due_date=date(2026, 12, 31),
        **fields,
    )
    db_session.add(goal)
    db_session.commit()
    db_session.refresh(goal)
    return goal


def test_role_gates():
    employee = User(id=1, name="E", role=UserRole.EMPLOYEE)
    manager = User(id=2, name="M", role=UserRole.MANAGER)
    admin = User(id=3, name="A", role=UserRole.HR_ADMIN)

    assert not policy.can(employee, Action.REVIEW_GOAL)
    assert policy.can(manager, Action.REVIEW_GOAL)
    assert policy.can(admin, Action.REVIEW_GOAL)

    assert not policy.can(manager, Action.MANAGE_USERS)
    assert policy.can(admin, Action.MANAGE_USERS)

    assert not policy.can(employee, Action.VIEW_MANAGER_DASHBOARD)
    assert policy.can(manager, Action.VIEW_TEAM)
    assert not policy.can(manager, Action.EXPORT_REPORTS)
    assert policy.can(employee, Action.CREATE_GOAL)
    assert policy.can(employee, Action.VIEW_EMPLOYEE_DASHBOARD)


def test_every_action_has_a_rule():
    assert set(policy._RULES) == set(Action)


def test_deny_names_rule():
    employee = User(id=1, name="E", role=UserRole.EMPLOYEE)
    decision = policy.can(employee, Action.MANAGE_USERS)
    assert not decision.allowed
    assert decision.rule == "user.manage.role"

    with pytest.raises(AccessDeniedError) as exc_info:
        policy.authorize(employee, Action.MANAGE_USERS)
    assert exc_info.value.rule == "user.manage.role"
    assert exc_info.value.status_code == 403


def test_missing_actor_is_unauthenticated():
    assert not policy.can(None, Action.CREATE_GOAL)
    with pytest.raises(AuthenticationError):
        policy.authorize(None, Action.CREATE_GOAL)


def test_goal_read_scope(db_session, employee_user, manager_user, other_employee, admin_user):
    goal = _goal(db_session, employee_user)
    assert policy.can(employee_user, Action.READ_GOAL, goal)
    assert policy.can(manager_user, Action.READ_GOAL, goal)
    assert policy.can(admin_user, Action.READ_GOAL, goal)
    assert not policy.can(other_employee, Action.READ_GOAL, goal)


def test_owner_cannot_modify_reviewed_goal(db_session, employee_user, manager_user):
    goal = _goal(db_session, employee_user)
    assert policy.can(employee_user, Action.EDIT_GOAL, goal)

    goal.reviewed_by = manager_user.id
    decision = policy.can(employee_user, Action.EDIT_GOAL, goal)
    assert not decision
    assert decision.rule == "goal.edit.reviewed"
    assert not policy.can(employee_user, Action.DELETE_GOAL, goal)

    # the direct manager and HR keep access at any state
    assert policy.can(manager_user, Action.EDIT_GOAL, goal)
    assert policy.can(manager_user, Action.DELETE_GOAL, goal)


def test_approved_goal_is_locked_for_owner(db_session, employee_user, admin_user):
    goal = _goal(db_session, employee_user, status=GoalStatus.APPROVED)
    assert not policy.can(employee_user, Action.DELETE_GOAL, goal)
    assert policy.can(admin_user, Action.DELETE_GOAL, goal)


def test_manager_cannot_modify_outside_team(db_session, manager_user, other_employee):
    goal = _goal(db_session, other_employee)
    assert not policy.can(manager_user, Action.EDIT_GOAL, goal)
    assert not policy.can(manager_user, Action.READ_GOAL, goal)


def test_manager_evaluation_requires_direct_report(employee_user, manager_user, other_employee, admin_user):
    assert policy.can(manager_user, Action.CREATE_MANAGER_EVALUATION)
    assert policy.can(manager_user, Action.CREATE_MANAGER_EVALUATION, employee_user)
    decision = policy.can(manager_user, Action.CREATE_MANAGER_EVALUATION, other_employee)
    assert decision.rule == "evaluation.manager_review.not_direct_report"
    assert policy.can(admin_user, Action.CREATE_MANAGER_EVALUATION, other_employee)
    assert not policy.can(employee_user, Action.CREATE_MANAGER_EVALUATION)


def test_notification_is_recipient_only(employee_user, other_employee):
    notification = Notification(user_id=employee_user.id, type=NotificationType.GOAL_CREATED, message="hi")
    assert policy.can(employee_user, Action.UPDATE_NOTIFICATION, notification)
    assert not policy.can(other_employee, Action.UPDATE_NOTIFICATION, notification)


def test_user_report_self_or_admin(employee_user, manager_user, admin_user):
    assert policy.can(employee_user, Action.VIEW_USER_REPORT, employee_user.id)
    assert not policy.can(manager_user, Action.VIEW_USER_REPORT, employee_user.id)
    assert policy.can(admin_user, Action.VIEW_USER_REPORT, employee_user.id)


def test_visibility_filter(db_session, employee_user, manager_user, other_employee, admin_user):
    alice_goal = _goal(db_session, employee_user)
    bob_goal = _goal(db_session, manager_user)
    carol_goal = _goal(db_session, other_employee)

    def visible_to(actor):
        rows = db_session.query(Goal).filter(policy.visibility_filter(actor, Goal.user_id)).all()
        return {g.id for g in rows}

    assert visible_to(employee_user) == {alice_goal.id}
    assert visible_to(manager_user) == {alice_goal.id, bob_goal.id}
    assert visible_to(other_employee) == {carol_goal.id}
    assert visible_to(admin_user) >= {alice_goal.id, bob_goal.id, carol_goal.id}
