"""
Identity store: registration, profile and HR administration of users.
"""
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from app.core import policy
from app.core.exceptions import ConflictError, NotFoundError, ValidationFailedError
from app.models.user import User
from app.schemas.auth import ProfileUpdate, RegisterRequest, UserRoleUpdate
from app.services import auth as auth_service
from app.services.base import BaseService


class IdentityService(BaseService):
    def get(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def _check_manager_reference(self, manager_id: Optional[int], user_id: Optional[int] = None):
        if manager_id is None:
            return
        if user_id is not None and manager_id == user_id:
            raise ValidationFailedError(
                "A user cannot be their own manager",
                fields=[{"field": "managerId", "msg": "must not reference the user itself"}],
            )
        if self.db.get(User, manager_id) is None:
            raise ValidationFailedError(
                "Manager does not exist",
                fields=[{"field": "managerId", "msg": "does not reference an existing user"}],
            )

    def register(self, data: RegisterRequest) -> User:
        if self.get_by_email(data.email):
            raise ConflictError("User already exists")
        self._check_manager_reference(data.manager_id)

        user = User(
            name=data.name,
            email=data.email,
            hashed_password=auth_service.get_password_hash(data.password),
            role=data.role,
            department=data.department,
            manager_id=data.manager_id,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            self.db.rollback()
            raise ConflictError("User already exists")
        self.db.refresh(user)
        self._logger.info(f"Registered user {user.id} ({user.role.value})")
        return user

    def login(self, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(email)
        if user is None or not auth_service.verify_password(password, user.hashed_password):
            return None
        return user

    def update_profile(self, actor: User, data: ProfileUpdate) -> User:
        """Self-service update. Empty values leave the current value in place."""
        if data.name:
            actor.name = data.name
        if data.department:
            actor.department = data.department
        if data.profile_picture:
            actor.profile_picture = data.profile_picture
        if data.password:
            actor.hashed_password = auth_service.get_password_hash(data.password)
        self._commit()
        self.db.refresh(actor)
        return actor

    # --- HR administration ---

    def list_users(self, actor: User) -> List[User]:
        policy.authorize(actor, policy.Action.MANAGE_USERS)
        return self.db.query(User).order_by(User.id).all()

    def update_role(self, actor: User, user_id: int, data: UserRoleUpdate) -> User:
        policy.authorize(actor, policy.Action.MANAGE_USERS)
        user = self.get(user_id)
        changes = data.model_dump(exclude_unset=True)
        if "manager_id" in changes:
            self._check_manager_reference(changes["manager_id"], user.id)
            user.manager_id = changes["manager_id"]
        if changes.get("role") is not None:
            user.role = changes["role"]
        self._commit()
        self.db.refresh(user)
        self._logger.info(f"User {user.id} updated by {actor.id}: {sorted(changes)}")
        return user

    def delete_user(self, actor: User, user_id: int) -> None:
        """Hard delete. Goals, evaluations and notifications keep their now-orphaned user_id."""
        policy.authorize(actor, policy.Action.MANAGE_USERS)
        user = self.get(user_id)
        self.db.delete(user)
        self._commit()
        self._logger.info(f"User {user_id} deleted by {actor.id}")

    def direct_reports(self, manager: User) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.manager_id == manager.id)
            .order_by(User.id)
            .all()
        )
