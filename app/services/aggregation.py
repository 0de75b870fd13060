"""
Read-only dashboard and report views.

Everything here is a pure function of rows already fetched (and already
visibility-filtered) by the caller: no session, no writes.
"""
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from app.models.evaluation import Evaluation
from app.models.goal import Goal, GoalStatus
from app.models.user import User
from app.schemas.auth import UserResponse
from app.schemas.dashboard import (
    AdminDashboard,
    DepartmentStat,
    EmployeeDashboard,
    EmployeeStats,
    ManagerDashboard,
    RecentActivity,
    ReportRow,
    TeamMemberPerformance,
)
from app.schemas.evaluation import EvaluationResponse
from app.schemas.goal import GoalResponse

UNASSIGNED_DEPARTMENT = "Unassigned"
NOT_AVAILABLE = "N/A"


def average_score(evaluations: Iterable[Evaluation]) -> float:
    """Mean overall score, missing scores counted as 0; 0 when there are no evaluations."""
    scores = [e.overall_score or 0 for e in evaluations]
    if not scores:
        return 0.0
    return round(sum(scores) / len(scores), 2)


def count_status(goals: Iterable[Goal], status: GoalStatus) -> int:
    return sum(1 for g in goals if g.status == status)


def most_recent(rows: Sequence, limit: int) -> list:
    """Newest first, by creation order."""
    return sorted(rows, key=lambda row: row.id, reverse=True)[:limit]


def group_by_owner(rows: Iterable) -> Dict[int, list]:
    grouped = defaultdict(list)
    for row in rows:
        grouped[row.user_id].append(row)
    return grouped


def _goals_out(goals) -> List[GoalResponse]:
    return [GoalResponse.model_validate(g) for g in goals]


def _evaluations_out(evaluations) -> List[EvaluationResponse]:
    return [EvaluationResponse.model_validate(e) for e in evaluations]


def employee_dashboard(user: User, goals: Sequence[Goal], evaluations: Sequence[Evaluation]) -> EmployeeDashboard:
    return EmployeeDashboard(
        user=UserResponse.model_validate(user),
        stats=EmployeeStats(
            total_goals=len(goals),
            goals_completed=count_status(goals, GoalStatus.COMPLETED),
            goals_in_progress=count_status(goals, GoalStatus.IN_PROGRESS),
            average_score=average_score(evaluations),
        ),
        recent_goals=_goals_out(most_recent(goals, 5)),
        recent_evaluations=_evaluations_out(most_recent(evaluations, 3)),
    )


def manager_dashboard(team: Sequence[User], goals: Sequence[Goal], evaluations: Sequence[Evaluation]) -> ManagerDashboard:
    """`goals` and `evaluations` are those owned by members of `team`."""
    goals_by_member = group_by_owner(goals)
    evaluations_by_member = group_by_owner(evaluations)

    team_performance = []
    for member in team:
        member_goals = goals_by_member.get(member.id, [])
        team_performance.append(TeamMemberPerformance(
            id=member.id,
            name=member.name,
            department=member.department,
            total_goals=len(member_goals),
            completed_goals=count_status(member_goals, GoalStatus.COMPLETED),
            average_score=average_score(evaluations_by_member.get(member.id, [])),
        ))

    return ManagerDashboard(
        team_size=len(team),
        total_goals=len(goals),
        pending_reviews=count_status(goals, GoalStatus.UNDER_REVIEW),
        team_performance=team_performance,
    )


def _department_key(department: Optional[str]) -> str:
    return department or UNASSIGNED_DEPARTMENT


def department_stats(users: Sequence[User], goals: Sequence[Goal], evaluations: Sequence[Evaluation]) -> Dict[str, DepartmentStat]:
    """
    Per-department counters. Goals are attributed to the department captured
    when they were created; evaluations to their subject's current department.
    """
    stats: Dict[str, DepartmentStat] = defaultdict(DepartmentStat)
    department_of = {}
    for user in users:
        key = _department_key(user.department)
        department_of[user.id] = key
        stats[key].employees += 1
    for goal in goals:
        stats[_department_key(goal.department)].goals += 1
    for evaluation in evaluations:
        stats[department_of.get(evaluation.user_id, UNASSIGNED_DEPARTMENT)].evaluations += 1
    return dict(stats)


def admin_dashboard(users: Sequence[User], goals: Sequence[Goal], evaluations: Sequence[Evaluation]) -> AdminDashboard:
    return AdminDashboard(
        total_users=len(users),
        total_goals=len(goals),
        total_evaluations=len(evaluations),
        department_stats=department_stats(users, goals, evaluations),
        recent_activity=RecentActivity(
            recent_goals=_goals_out(most_recent(goals, 10)),
            recent_evaluations=_evaluations_out(most_recent(evaluations, 10)),
        ),
    )


def export_rows(users: Sequence[User], goals: Sequence[Goal], evaluations: Sequence[Evaluation]) -> List[ReportRow]:
    """Flatten every user × goal, with the user's mean evaluation score on each line."""
    goals_by_user = group_by_owner(goals)
    evaluations_by_user = group_by_owner(evaluations)

    rows = []
    for user in users:
        user_evaluations = evaluations_by_user.get(user.id, [])
        score = f"{average_score(user_evaluations):.2f}" if user_evaluations else NOT_AVAILABLE
        for goal in sorted(goals_by_user.get(user.id, []), key=lambda g: g.id):
            rows.append(ReportRow(
                employee=user.name,
                department=user.department or "",
                goal_title=goal.title,
                status=goal.status.value,
                achievement_rating=str(goal.achievement_rating) if goal.achievement_rating else NOT_AVAILABLE,
                overall_evaluation_score=score,
            ))
    return rows
