import enum
from typing import Type

from sqlalchemy import Enum, create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from app.core.config import settings

# Support both PostgreSQL and SQLite via centralized settings
DATABASE_URL = settings.database_url

if DATABASE_URL.startswith("postgresql"):
    engine = create_engine(DATABASE_URL)
else:
    # SQLite configuration for local development/testing
    engine = create_engine(
        DATABASE_URL, connect_args={"check_same_thread": False}
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Largest value an INTEGER primary key can hold (SQLite and PostgreSQL BIGINT)
MAX_ID = 2**63 - 1


def value_enum(enum_cls: Type[enum.Enum], name: str) -> Enum:
    """Enum column type that stores member values ("HR Admin") rather than names."""
    return Enum(enum_cls, name=name, values_callable=lambda members: [m.value for m in members])


def get_db():
    """
    Session Provider: Provides a database session per request.
    Transaction management is handled explicitly in the Service Layer.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    """
    Registers all domain models and initializes the database schema.
    This should be called during the application startup lifespan.
    """
    # Import all models to ensure they are registered with Base.metadata before create_all
    from app.models import user, goal, evaluation, notification  # noqa: F401
    Base.metadata.create_all(bind=engine)
