from sqlalchemy import Column, Integer, String, Text, Date, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from app.database import Base, value_enum


class GoalStatus(str, enum.Enum):
    DRAFT = "Draft"
    UNDER_REVIEW = "Under Review"
    APPROVED = "Approved"
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class Goal(Base):
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    # Owner reference survives deletion of the user (no cascade).
    user_id = Column(Integer, nullable=False, index=True)
    # Snapshots of the owner at creation time
    employee_name = Column(String, nullable=False)
    department = Column(String, nullable=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    success_criteria = Column(Text, nullable=True)
    due_date = Column(Date, nullable=False)
    status = Column(value_enum(GoalStatus, "goal_status"), default=GoalStatus.DRAFT, nullable=False, index=True)

    achievement_rating = Column(Integer, nullable=True)  # 1-5
    manager_feedback = Column(Text, nullable=True)
    reviewed_by = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship(
        "User",
        primaryjoin="foreign(Goal.user_id) == User.id",
        viewonly=True,
        uselist=False,
    )

    def __repr__(self):
        return f"<Goal {self.id}: {self.title} [{self.status.value}]>"

    @property
    def is_reviewed(self) -> bool:
        """Once true the owner can no longer edit or delete the goal."""
        return self.reviewed_by is not None or self.status == GoalStatus.APPROVED
