"""Configuration partagee des tests : base SQLite en memoire et client HTTP."""
import os

# Doit etre defini avant l'import de l'application
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from exercise_tracker.core.database import build_engine, get_session
from exercise_tracker.main import app


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(client):
    """Inscrit un utilisateur et retourne la reponse JSON."""
    def _create(username: str) -> dict:
        response = client.post("/api/users", json={"username": username})
        assert response.status_code == 200
        return response.json()
    return _create
