from fastapi import APIRouter
from app.routers import (
    auth, goals, evaluations, dashboard, manager, admin, notifications, reports
)

# Routers are aggregated here; main.py only imports this hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(goals.router, tags=["Goals"])
api_router.include_router(evaluations.router, tags=["Evaluations"])
api_router.include_router(dashboard.router, tags=["Dashboard"])
api_router.include_router(manager.router, tags=["Manager"])
api_router.include_router(admin.router, tags=["Administration"])
api_router.include_router(notifications.router, tags=["Notifications"])
api_router.include_router(reports.router, tags=["Reports"])
