"""
Database engine, session and transaction boundary for the admin server.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from admin_server.config import DATABASE_URL
from admin_server.errors import translate_store_error
from admin_server.models import Base

logger = logging.getLogger(__name__)

# SQLite: in-memory needs StaticPool so all connections share the same DB (for tests)
# File-based SQLite needs check_same_thread=False for FastAPI
if DATABASE_URL.startswith("sqlite:///:memory:"):
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    connect_args = {"check_same_thread": False} if "sqlite" in DATABASE_URL else {}
    engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Create all tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency: yield a DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """
    One unit of work: commit when the block completes, roll back on any exception.
    Commit failures are translated like any other store failure.
    """
    try:
        yield db
        try:
            db.commit()
        except SQLAlchemyError as e:
            raise translate_store_error(e) from e
    except BaseException:
        db.rollback()
        logger.debug("Transaction rolled back")
        raise
