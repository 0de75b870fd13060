from sqlalchemy import Column, Integer, Boolean, DateTime, Text
from sqlalchemy.sql import func
import enum
from app.database import Base, value_enum


class NotificationType(str, enum.Enum):
    GOAL_CREATED = "goal_created"
    EVALUATION_DUE = "evaluation_due"
    EVALUATION_COMPLETED = "evaluation_completed"
    GOAL_REVIEWED = "goal_reviewed"


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    type = Column(value_enum(NotificationType, "notification_type"), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False, nullable=False, index=True)
    # Weak reference to a goal or evaluation, depending on type; may dangle.
    related_id = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
