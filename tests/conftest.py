import os
import sys
from pathlib import Path

import pytest

# Keep test runs off the rotating log files and the real database schema
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("CREATE_DB", "false")

# Add the project root directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session

from activity_log.db.base import Base
from activity_log.db.models import (
    ActivitySystemModel,
    AdminModel,
    ClientModel,
)


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite database with the activity schema and a few log rows."""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)

    with Session(engine) as session:
        session.add_all([
            AdminModel(id=1, name="Jane Staff", email="jane@example.com"),
            ClientModel(id=1, first_name="John", last_name="Doe", email="john@example.com"),
        ])
        session.flush()
        session.add_all([
            ActivitySystemModel(id=1, priority=6, client_id=1, message="Client logged in", ip="10.0.0.1"),
            ActivitySystemModel(id=2, priority=7, admin_id=1, message="Debug cache warmup"),
            ActivitySystemModel(id=3, priority=3, client_id=1, message="Payment failed for invoice 42"),
            ActivitySystemModel(id=4, priority=2, admin_id=1, message="Staff changed settings", ip="192.168.1.5"),
            ActivitySystemModel(id=5, priority=5, client_id=1, admin_id=1, message="Staff impersonated client"),
        ])
        session.commit()

    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
async def async_sqlite_session():
    """Async session on a fresh in-memory SQLite database with the activity schema."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await engine.dispose()
