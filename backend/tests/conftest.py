"""
Root conftest for backend tests.

Adds the backend directory to sys.path so tests can use
``from app.services...`` imports, points the app at an in-memory database
and clears provider keys so no test ever reaches the network.
"""
import os
import random
import sys
from pathlib import Path

# Must be set before anything imports app.config / app.database
os.environ["DATABASE_URL"] = "sqlite://"
for _key in ("ANTHROPIC_API_KEY", "GROQ_API_KEY", "POLYGON_API_KEY", "FINNHUB_API_KEY", "ALPHA_VANTAGE_API_KEY"):
    os.environ[_key] = ""

# backend/ directory  (supports `from app.services...`)
backend_dir = str(Path(__file__).resolve().parents[1])
if backend_dir not in sys.path:
    sys.path.insert(0, backend_dir)

# tests/ directory  (supports `from factories import ...`)
tests_dir = str(Path(__file__).resolve().parent)
if tests_dir not in sys.path:
    sys.path.insert(0, tests_dir)

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.config import Settings  # noqa: E402
from app.database import Base  # noqa: E402
from app.services.storage import IndexRepository  # noqa: E402
import app.models  # noqa: E402,F401  - registers models on Base.metadata
from factories import RecordingPublisher  # noqa: E402


@pytest.fixture
def settings():
    """Settings with no provider keys and short timeouts."""
    return Settings(
        ANTHROPIC_API_KEY="",
        GROQ_API_KEY="",
        POLYGON_API_KEY="",
        FINNHUB_API_KEY="",
        ALPHA_VANTAGE_API_KEY="",
        AI_PROVIDER_TIMEOUT_SECONDS=1.0,
        PROVIDER_TIMEOUT_SECONDS=1.0,
    )


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repository(db_session):
    return IndexRepository(db_session)


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def seeded_rng():
    return random.Random(42)
