"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from lms_admin.config import get_settings

settings = get_settings()

# pool_pre_ping=True tests connections before handing them out,
# which covers database restarts and stale connections.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
)

# autocommit=False: handlers decide when changes are committed.
# Moderation commits the post before the audit entry is written,
# so the two writes are deliberately separate commits.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


def get_db():
    """
    Provide a database session for a single request.

    The try/finally guarantees the session is closed when the
    request finishes, even if the handler raised.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
