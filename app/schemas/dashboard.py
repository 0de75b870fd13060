from typing import Dict, List, Optional

from app.core.schemas import CamelModel
from app.schemas.auth import UserResponse
from app.schemas.evaluation import EvaluationResponse
from app.schemas.goal import GoalResponse


class EmployeeStats(CamelModel):
    total_goals: int
    goals_completed: int
    goals_in_progress: int
    average_score: float


class EmployeeDashboard(CamelModel):
    user: UserResponse
    stats: EmployeeStats
    recent_goals: List[GoalResponse]
    recent_evaluations: List[EvaluationResponse]


class TeamMemberPerformance(CamelModel):
    id: int
    name: str
    department: Optional[str] = None
    total_goals: int
    completed_goals: int
    average_score: float


class ManagerDashboard(CamelModel):
    team_size: int
    total_goals: int
    pending_reviews: int
    team_performance: List[TeamMemberPerformance]


class DepartmentStat(CamelModel):
    employees: int = 0
    goals: int = 0
    evaluations: int = 0


class RecentActivity(CamelModel):
    recent_goals: List[GoalResponse]
    recent_evaluations: List[EvaluationResponse]


class AdminDashboard(CamelModel):
    total_users: int
    total_goals: int
    total_evaluations: int
    department_stats: Dict[str, DepartmentStat]
    recent_activity: RecentActivity


class SystemStats(CamelModel):
    users: int
    goals: int
    evaluations: int


class ReportRow(CamelModel):
    """One flattened user × goal line of the HR export."""
    employee: str
    department: str
    goal_title: str
    status: str
    achievement_rating: str
    overall_evaluation_score: str
