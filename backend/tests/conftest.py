import os
import sys
from pathlib import Path

import pytest

# Ensure backend/ is on sys.path for `import credit_engine` and `import main`
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Force a throwaway SQLite file for tests
test_db_path = ROOT / "test_run.db"
if test_db_path.exists():
    test_db_path.unlink()

os.environ.setdefault("DATABASE_URL", f"sqlite:///{test_db_path}")
os.environ.setdefault("AUTO_CREATE_TABLES", "1")

from credit_engine.cache import TTLCache, get_resolver_cache
from credit_engine.db.database import Base, SessionLocal, engine
from credit_engine.models.models import Role, Team, User

Base.metadata.create_all(bind=engine)


@pytest.fixture
def db():
    """Fresh schema per test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    get_resolver_cache().clear_all()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def cache():
    return TTLCache(ttl_seconds=60)


@pytest.fixture
def directory(db):
    """
    Two teams and an owner:

    t-alpha: lead u-lead-a (admin), u-admin-a2 (admin), u-ana and u-amir (members)
    t-beta:  lead u-lead-b (admin), u-bo (member)
    u-owner: owner, no team
    """
    db.add_all([
        Team(id="t-alpha", name="Alpha", lead_id="u-lead-a"),
        Team(id="t-beta", name="Beta", lead_id="u-lead-b"),
    ])
    db.flush()
    db.add_all([
        User(id="u-owner", name="Owner", email="owner@example.com", role=Role.OWNER.value),
        User(id="u-lead-a", name="Lead A", email="lead-a@example.com", role=Role.ADMIN.value, team_id="t-alpha"),
        User(id="u-admin-a2", name="Admin A2", email="admin-a2@example.com", role=Role.ADMIN.value, team_id="t-alpha"),
        User(id="u-ana", name="Ana", email="ana@example.com", role=Role.MEMBER.value, team_id="t-alpha"),
        User(id="u-amir", name="Amir", email="amir@example.com", role=Role.MEMBER.value, team_id="t-alpha"),
        User(id="u-lead-b", name="Lead B", email="lead-b@example.com", role=Role.ADMIN.value, team_id="t-beta"),
        User(id="u-bo", name="Bo", email="bo@example.com", role=Role.MEMBER.value, team_id="t-beta"),
    ])
    db.commit()
    return db
