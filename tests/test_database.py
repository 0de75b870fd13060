from sqlalchemy import func

from app.models.user import User, UserRole


def _count_users(db_engine, session_factory, email):
    with db_engine.connect() as connection:
        session = session_factory(bind=connection)
        try:
            return session.query(func.count(User.id)).filter(User.email == email).scalar()
        finally:
            session.close()


def test_committed_rows_are_discarded_with_outer_transaction(db_engine, session_factory):
    """A service-level commit inside a test must not outlive the test's transaction."""
    email = "isolation@acme.com"
    connection = db_engine.connect()
    transaction = connection.begin()
    session = session_factory(bind=connection)

    session.add(User(name="Isolation", email=email, hashed_password="x", role=UserRole.EMPLOYEE))
    session.commit()
    assert session.query(func.count(User.id)).filter(User.email == email).scalar() == 1

    session.close()
    transaction.rollback()
    connection.close()

    assert _count_users(db_engine, session_factory, email) == 0


def test_session_rollback_keeps_earlier_commits(db_session, make_user):
    """Rolling back after a commit only discards work since that commit."""
    user = make_user("Kept")
    db_session.add(User(name="Dropped", email="dropped@acme.com", hashed_password="x"))
    db_session.rollback()

    assert db_session.get(User, user.id) is not None
    assert db_session.query(User).filter(User.email == "dropped@acme.com").first() is None
