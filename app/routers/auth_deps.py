"""
Authentication and policy dependencies for FastAPI endpoints.
"""
import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core import policy
from app.core.exceptions import AuthenticationError
from app.database import get_db
from app.models.user import User
from app.services import auth as auth_service

logger = logging.getLogger(__name__)

# auto_error off: a missing header goes through the same gate as a bad token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    """
    Extracts and validates the current user from the bearer token.
    """
    outcome = auth_service.authenticate(token, db)
    if isinstance(outcome, auth_service.Unauthenticated):
        logger.info(f"Authentication failed: {outcome.reason}")
        raise AuthenticationError(outcome.reason)
    return outcome.actor


def require_action(action: policy.Action) -> Callable:
    """
    Dependency factory for actions that need no resource to decide.

    Usage:
        @router.get("/admin-only")
        def admin_endpoint(user: User = Depends(require_action(Action.MANAGE_USERS))):
            ...
    """
    def action_checker(current_user: User = Depends(get_current_user)) -> User:
        policy.authorize(current_user, action)
        return current_user
    return action_checker
