from fastapi import APIRouter, Depends, Path, Response
from sqlalchemy.orm import Session

from app.core import policy
from app.core.policy import Action
from app.database import MAX_ID, get_db
from app.models.evaluation import Evaluation
from app.models.goal import Goal
from app.models.user import User
from app.routers.auth_deps import get_current_user, require_action
from app.services import aggregation, report_renderer
from app.services.identity import IdentityService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/pdf/{user_id}")
def user_pdf_report(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Performance report for one user: their own, or anyone's for HR admins."""
    policy.authorize(current_user, Action.VIEW_USER_REPORT, user_id)
    user = IdentityService(db).get(user_id)
    goals = db.query(Goal).filter(Goal.user_id == user.id).order_by(Goal.id).all()
    evaluations = db.query(Evaluation).filter(Evaluation.user_id == user.id).order_by(Evaluation.id).all()

    content = report_renderer.render_user_pdf(user, goals, evaluations)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="performance-report-{user.id}.pdf"'},
    )


@router.get("/export/csv")
def export_csv(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_action(Action.EXPORT_REPORTS))
):
    users = db.query(User).order_by(User.id).all()
    goals = db.query(Goal).all()
    evaluations = db.query(Evaluation).all()

    rows = aggregation.export_rows(users, goals, evaluations)
    return Response(
        content=report_renderer.render_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="performance-report.csv"'},
    )
