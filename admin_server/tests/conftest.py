"""
Pytest configuration for admin_server. Use in-memory SQLite so tests don't touch the filesystem.
"""
import os

import pytest

# In-memory SQLite; database.py uses StaticPool so all connections share the same DB
os.environ["ADMIN_DATABASE_URL"] = "sqlite:///:memory:"
# Keep startup seeding out of the tests unless a test sets these explicitly
for _name in [n for n in os.environ if n.startswith("ADMIN_SEED_")]:
    del os.environ[_name]


@pytest.fixture
def db():
    """Fresh schema per test; yields a session."""
    from admin_server.database import SessionLocal, engine, init_db
    from admin_server.models import Base

    Base.metadata.drop_all(bind=engine)
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
