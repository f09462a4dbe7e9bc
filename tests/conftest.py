"""
Shared test fixtures — SQLite test database, test client, in-memory store.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point settings at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from calcbuild.database import Base, get_db
from calcbuild.main import app
from calcbuild.schemas import Project
from calcbuild.storage import MemoryStorage
from calcbuild.store import ProjectStore


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def store(memory_storage):
    """Project store over an in-memory key-value backing."""
    return ProjectStore(memory_storage)


@pytest.fixture
def sample_project():
    """The two-room reference project (Living room + Bedroom, default prices)."""
    return Project.model_validate({
        "projectName": "Maison Dupont",
        "wallHeight": 2.5,
        "paintCoverage": 10,
        "paintPrice": 18,
        "plasterPrice": 12,
        "insulationPrice": 25,
        "wallWaste": 7.5,
        "rooms": [
            {"name": "Living Room", "L": 6, "W": 4, "openings": 3},
            {"name": "Bedroom", "L": 3.5, "W": 3, "openings": 2},
        ],
    })
