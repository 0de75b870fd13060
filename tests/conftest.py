import pytest
import os
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"

from app.database import Base, get_db
from app.main import app
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# pysqlite emits no BEGIN of its own, so SAVEPOINT release would commit for real.
# Let SQLAlchemy drive the transaction so the per-test rollback holds.
@event.listens_for(engine, "connect")
def _disable_pysqlite_transactions(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None


@event.listens_for(engine, "begin")
def _emit_begin(conn):
    conn.exec_driver_sql("BEGIN")


# Service-level commits release a SAVEPOINT; the outer transaction is rolled back per test
TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    join_transaction_mode="create_savepoint",
)

DEFAULT_PASSWORD = "Password123!"


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="session")
def db_engine():
    return engine


@pytest.fixture(scope="session")
def session_factory():
    return TestingSessionLocal


@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def make_user(db_session):
    """Factory for persisted users."""
    from app.models.user import User, UserRole
    from app.services import auth as auth_service

    def _make_user(name, role=UserRole.EMPLOYEE, department="Engineering", manager=None, email=None):
        user = User(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@acme.com",
            hashed_password=auth_service.get_password_hash(DEFAULT_PASSWORD),
            role=role,
            department=department,
            manager_id=manager.id if manager is not None else None,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture(scope="function")
def manager_user(make_user):
    from app.models.user import UserRole
    return make_user("Bob", role=UserRole.MANAGER)


@pytest.fixture(scope="function")
def employee_user(make_user, manager_user):
    """Reports directly to manager_user."""
    return make_user("Alice", manager=manager_user)


@pytest.fixture(scope="function")
def other_employee(make_user):
    """Not in manager_user's team."""
    return make_user("Carol", department="Sales")


@pytest.fixture(scope="function")
def admin_user(make_user):
    from app.models.user import UserRole
    return make_user("Harriet", role=UserRole.HR_ADMIN, department="People")


@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to create access tokens."""
    from app.services.auth import create_token_for
    return create_token_for


@pytest.fixture(scope="function")
def auth_headers(get_token):
    def _auth_headers(user):
        return {"Authorization": f"Bearer {get_token(user)}"}
    return _auth_headers


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def create_goal(client, auth_headers):
    def _create_goal(user, title="Ship the appraisal module", **fields):
        payload = {"title": title, "dueDate": "2026-12-31", **fields}
        response = client.post("/api/goals", json=payload, headers=auth_headers(user))
        assert response.status_code == 201, response.text
        return response.json()
    return _create_goal
