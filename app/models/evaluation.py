from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from app.database import Base, value_enum


class EvaluationType(str, enum.Enum):
    SELF = "Self"
    MANAGER = "Manager"


class EvaluationStatus(str, enum.Enum):
    # PENDING is kept for stored-data compatibility; every API path creates COMPLETED.
    PENDING = "Pending"
    COMPLETED = "Completed"


class Evaluation(Base):
    __tablename__ = "evaluations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    evaluator_id = Column(Integer, nullable=True)
    evaluation_type = Column(value_enum(EvaluationType, "evaluation_type"), nullable=False)
    review_period = Column(String, nullable=False)

    self_feedback = Column(Text, nullable=True)
    manager_feedback = Column(Text, nullable=True)
    overall_score = Column(Float, nullable=True)
    status = Column(value_enum(EvaluationStatus, "evaluation_status"), default=EvaluationStatus.COMPLETED, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    competencies = relationship(
        "EvaluationCompetency",
        order_by="EvaluationCompetency.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
        back_populates="evaluation",
    )
    subject = relationship(
        "User",
        primaryjoin="foreign(Evaluation.user_id) == User.id",
        viewonly=True,
        uselist=False,
    )

    def __repr__(self):
        return f"<Evaluation {self.id}: {self.evaluation_type.value} {self.review_period}>"


class EvaluationCompetency(Base):
    __tablename__ = "evaluation_competencies"

    id = Column(Integer, primary_key=True, index=True)
    evaluation_id = Column(Integer, ForeignKey("evaluations.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    self_rating = Column(Float, default=0, nullable=False)
    manager_rating = Column(Float, default=0, nullable=False)

    evaluation = relationship("Evaluation", back_populates="competencies")
