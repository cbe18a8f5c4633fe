import os
import random

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from fixturedesk.database import get_session  # noqa: E402
from fixturedesk.main import app  # noqa: E402
from fixturedesk.schemas import Player, Tournament, TournamentSettings  # noqa: E402

TEST_DATABASE_URL = "sqlite:///:memory:"

# ============================================================================
# Test Database Setup with StaticPool
# ============================================================================
# 1. sqlite:///:memory: with StaticPool so ALL sessions share same DB
# 2. check_same_thread=False required for TestClient/threaded access
# 3. Models imported before create_all() (see session_fixture)
# 4. App dependency overridden to use test_engine (see client_fixture)
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


def override_get_session():
    """Override session to use test engine"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="session", scope="function")
def session_fixture():
    """Fresh tables per test on the shared in-memory database"""
    from fixturedesk.models.tournament_document import TournamentDocument  # noqa: F401

    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)

    with Session(test_engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Test client with the session dependency pointed at test_engine"""
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


# ============================================================================
# Document builders
# ============================================================================


def make_players(count: int, category: str = "Open", prefix: str = "p") -> list:
    return [
        Player(
            id=f"{prefix}{i}",
            name=f"Player {i}",
            mobile_number=f"90000{i:05d}",
            categories=[category],
        )
        for i in range(1, count + 1)
    ]


def make_tournament(players=None, **settings) -> Tournament:
    settings.setdefault("name", "Club Open")
    settings.setdefault("types", ["Men Singles", "Men Doubles"])
    settings.setdefault("categories", ["Open", "40+"])
    return Tournament(settings=TournamentSettings(**settings), players=players or [])


@pytest.fixture
def rng():
    return random.Random(1234)
