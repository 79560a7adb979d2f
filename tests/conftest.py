import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_PASSWORD"] = "admin-pass"

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ideaboard.auth.access import Principal
from ideaboard.auth.tokens import TokenIssuer
from ideaboard.database import Base, get_db
from ideaboard.main import app
from ideaboard.models import *  # noqa: register all models
from ideaboard.models.user import Role, User

from fastapi.testclient import TestClient

# Placeholder hash for users that never log in
FAST_HASH = "$2b$04$" + "a" * 53


@pytest.fixture
def db_engine():
    # Use StaticPool to keep the same in-memory db across connections
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def client(db_engine):
    Session = sessionmaker(bind=db_engine)

    def _override():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def issuer():
    return TokenIssuer("test-secret")


@pytest.fixture
def make_user(db_session):
    """Insert a user directly and return its principal."""

    def _make(username: str, role: Role = Role.USER) -> Principal:
        user = User(username=username, password_hash=FAST_HASH, role=role.value)
        db_session.add(user)
        db_session.flush()
        principal = Principal(id=user.id, username=user.username, role=user.role)
        db_session.commit()
        return principal

    return _make


@pytest.fixture
def auth_headers(issuer):
    def _headers(principal: Principal) -> dict[str, str]:
        return {"Authorization": f"Bearer {issuer.issue(principal)}"}

    return _headers
