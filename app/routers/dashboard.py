from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.policy import Action
from app.database import get_db
from app.models.evaluation import Evaluation
from app.models.goal import Goal
from app.models.user import User
from app.routers.auth_deps import require_action
from app.schemas.dashboard import AdminDashboard, EmployeeDashboard, ManagerDashboard
from app.services import aggregation
from app.services.identity import IdentityService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/employee", response_model=EmployeeDashboard)
def employee_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(Action.VIEW_EMPLOYEE_DASHBOARD))
):
    goals = db.query(Goal).filter(Goal.user_id == current_user.id).all()
    evaluations = db.query(Evaluation).filter(Evaluation.user_id == current_user.id).all()
    return aggregation.employee_dashboard(current_user, goals, evaluations)


@router.get("/manager", response_model=ManagerDashboard)
def manager_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(Action.VIEW_MANAGER_DASHBOARD))
):
    """Aggregates over the caller's direct reports."""
    team = IdentityService(db).direct_reports(current_user)
    team_ids = [member.id for member in team]
    goals = db.query(Goal).filter(Goal.user_id.in_(team_ids)).all() if team_ids else []
    evaluations = db.query(Evaluation).filter(Evaluation.user_id.in_(team_ids)).all() if team_ids else []
    return aggregation.manager_dashboard(team, goals, evaluations)


@router.get("/admin", response_model=AdminDashboard)
def admin_dashboard(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(Action.VIEW_ADMIN_DASHBOARD))
):
    users = db.query(User).all()
    goals = db.query(Goal).all()
    evaluations = db.query(Evaluation).all()
    return aggregation.admin_dashboard(users, goals, evaluations)
