from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
import logging
from app.core.limiter import AUTH_RATE_LIMIT, limiter
from app.database import get_db
from app.models.user import User
from app.routers.auth_deps import get_current_user
from app.services import auth as auth_service
from app.services.identity import IdentityService
from app.schemas.auth import LoginRequest, ProfileUpdate, RegisterRequest, Token, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


def _token_response(user: User) -> Token:
    return Token(
        access_token=auth_service.create_token_for(user),
        token_type="bearer",
        user=UserResponse.model_validate(user),
    )


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_RATE_LIMIT)
def register(request: Request, data: RegisterRequest, db: Session = Depends(get_db)):
    user = IdentityService(db).register(data)
    return _token_response(user)


@router.post("/login", response_model=Token)
@limiter.limit(AUTH_RATE_LIMIT)
def login(request: Request, login_data: LoginRequest, db: Session = Depends(get_db)):
    user = IdentityService(db).login(login_data.email, login_data.password)
    if user is None:
        logger.info(f"Failed login for {login_data.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _token_response(user)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    update_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update current user's name, department, picture or password."""
    return IdentityService(db).update_profile(current_user, update_data)
