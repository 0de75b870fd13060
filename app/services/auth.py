"""
Authentication gate: password hashing, token issuing/verification, and
resolution of a bearer token to an actor.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.user import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

ACCESS_TOKEN_TYPE = "access"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Malformed stored hash
        return False


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode.update({"exp": expire, "type": to_encode.get("type", ACCESS_TOKEN_TYPE)})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def create_token_for(user: User) -> str:
    return create_access_token(data={
        "sub": user.email,
        "user_id": user.id,
        "role": user.role.value,
    })


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Returns the payload, {"error": "TOKEN_EXPIRED"} for an expired token,
    or None when the token cannot be verified.
    """
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        return {"error": "TOKEN_EXPIRED"}
    except JWTError:
        return None


@dataclass(frozen=True)
class Authenticated:
    actor: User


@dataclass(frozen=True)
class Unauthenticated:
    reason: str


AuthOutcome = Union[Authenticated, Unauthenticated]


def authenticate(token: Optional[str], db: Session) -> AuthOutcome:
    """
    Resolve a bearer token to the acting user.

    Never yields a null actor: a valid token whose user has since been
    deleted is Unauthenticated just like a forged one.
    """
    if not token:
        return Unauthenticated("Missing credentials")

    payload = decode_access_token(token)
    if payload is None:
        return Unauthenticated("Could not validate credentials")
    if payload.get("error") == "TOKEN_EXPIRED":
        return Unauthenticated("TOKEN_EXPIRED")
    if payload.get("type") != ACCESS_TOKEN_TYPE:
        return Unauthenticated("Invalid token type")

    user_id = payload.get("user_id")
    if user_id is None:
        return Unauthenticated("Missing subject in token")

    user = db.get(User, user_id)
    if user is None:
        logger.warning(f"Authentication failed: user {user_id} no longer exists")
        return Unauthenticated("User not found")
    return Authenticated(user)
