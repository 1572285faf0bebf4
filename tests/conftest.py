"""
Shared test fixtures.

Sets up an isolated SQLite database so tests never touch the
real one. Tables are created before and dropped after every
test, so each test starts empty.
"""

import os

# Must be set before lms_admin is imported: the engine and the
# settings are created at import time.
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from lms_admin.main import app
from lms_admin.models import Base, ForumPost, PostStatus, User, UserRole
from lms_admin.models.base import get_db
from lms_admin.security import create_access_token


TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client bound to the test session.

    get_db is overridden so the app and the test see the
    same session and therefore the same rows.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, name, email, role=UserRole.STUDENT, is_active=True):
    user = User(name=name, email=email, role=role, is_active=is_active)
    db.add(user)
    db.commit()
    return user


def make_post(db, author, status=PostStatus.PENDING, title="Test post"):
    post = ForumPost(
        title=title,
        content="Content waiting for a moderator",
        author_id=author.id,
        status=status,
    )
    db.add(post)
    db.commit()
    return post


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def admin_user(db_session):
    return make_user(db_session, "Admin User", "admin@lms.test", UserRole.ADMIN)


@pytest.fixture
def student_user(db_session):
    return make_user(db_session, "Student User", "student@lms.test")


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def pending_post(db_session, student_user):
    return make_post(db_session, student_user)
