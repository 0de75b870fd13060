"""
User model: identity, role and single-level reporting line.
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from app.database import Base, value_enum


class UserRole(str, enum.Enum):
    """
    Closed set of roles.

    - EMPLOYEE: self-service goals and self-assessments
    - MANAGER: reviews goals, evaluates direct reports
    - HR_ADMIN: manages users, sees everything, exports reports
    """
    EMPLOYEE = "Employee"
    MANAGER = "Manager"
    HR_ADMIN = "HR Admin"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)

    role = Column(value_enum(UserRole, "user_role"), default=UserRole.EMPLOYEE, nullable=False)
    department = Column(String, nullable=True)

    # Plain column, not a foreign key: deleting a manager leaves the reference dangling.
    manager_id = Column(Integer, nullable=True, index=True)
    profile_picture = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    manager = relationship(
        "User",
        primaryjoin="foreign(User.manager_id) == remote(User.id)",
        viewonly=True,
        uselist=False,
    )

    def __repr__(self):
        return f"<User {self.email} ({self.role.value})>"

    @property
    def is_hr_admin(self) -> bool:
        return self.role == UserRole.HR_ADMIN

    @property
    def manager_name(self):
        return self.manager.name if self.manager else None

    def manages(self, other: "User") -> bool:
        """True when `other` is a direct report (one level, no transitivity)."""
        return other is not None and other.manager_id is not None and other.manager_id == self.id
