"""
Audit Trail Storage
===================

SQLAlchemy plumbing for the stored audit trail. The trail lives in
access_audit.db beside the project unless CAMPUS_ACCESS_DATABASE_URL
names another database (tests use in-memory SQLite).

Grants are never written here; they only exist for one run.
"""

import os
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

DB_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'access_audit.db')
DATABASE_URL = os.environ.get('CAMPUS_ACCESS_DATABASE_URL', f"sqlite:///{DB_PATH}")

# SQLite rejects connections used across threads unless check_same_thread is off
engine = create_engine(
    DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@contextmanager
def get_session():
    """
    Open a session for reading or writing audit events.

    Everything written inside the block is committed together; an
    exception rolls the block back and propagates.

    Usage:
        with get_session() as session:
            SqlAuditLogger(session).get_statistics()
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db():
    """Create the audit_events table if it is missing."""
    from . import entities  # noqa: F401 - registers AuditEvent on Base
    Base.metadata.create_all(bind=engine)


def reset_db():
    """Drop and recreate the audit_events table, discarding the trail."""
    from . import entities  # noqa: F401
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
