"""Pytest fixtures and configuration."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
import fakeredis

from risk_scoring.database import get_db
from risk_scoring.database.connection import build_engine
from risk_scoring.database.orm import Base
from risk_scoring.services import redis_cache
from risk_scoring.services.redis_cache import RedisCache


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Session bound to the in-memory database."""
    session = Session(bind=engine, autoflush=False, expire_on_commit=False)
    yield session
    session.close()


@pytest.fixture
def cache(monkeypatch):
    """Redis cache backed by fakeredis, installed as the app singleton."""
    cache = RedisCache(client=fakeredis.FakeRedis(decode_responses=True))
    monkeypatch.setattr(redis_cache, "_redis_cache", cache)
    return cache


@pytest.fixture
def client(engine, cache):
    """Test client wired to the in-memory database and fake cache."""
    from risk_scoring.main import app

    def override_get_db():
        session = Session(bind=engine, autoflush=False, expire_on_commit=False)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def organization_id():
    """Tenant used by most tests."""
    return 1


@pytest.fixture
def org_headers(organization_id):
    """Request headers scoping calls to ``organization_id``."""
    return {"X-Organization-Id": str(organization_id)}


@pytest.fixture
def sample_impacts():
    """Three-level impact scale."""
    return [
        {"label": "Low", "score": 1, "color": "#22c55e", "order": 1},
        {"label": "Medium", "score": 2, "color": "#eab308", "order": 2},
        {"label": "High", "score": 3, "color": "#ef4444", "order": 3},
    ]


@pytest.fixture
def sample_probabilities():
    """Three-level probability scale."""
    return [
        {"label": "Rare", "score": 1, "order": 1},
        {"label": "Possible", "score": 2, "order": 2},
        {"label": "Likely", "score": 3, "order": 3},
    ]


@pytest.fixture
def sample_score_bands():
    """Bands covering [1, 9] for a 3×3 configuration."""
    return [
        {"label": "Low", "min": 1, "max": 3, "color": "#22c55e", "order": 1},
        {"label": "Medium", "min": 4, "max": 6, "color": "#f97316", "order": 2},
        {"label": "High", "min": 7, "max": 9, "color": "#ef4444", "order": 3},
    ]


@pytest.fixture
def sample_criteria():
    """One flat and one wrapped criterion, each with its own impact scale."""
    return [
        {
            "name": "Financial",
            "description": "Monetary loss",
            "order": 1,
            "impacts": [
                {"label": "Minor", "score": 1, "order": 1},
                {"label": "Major", "score": 3, "order": 2},
            ],
        },
        {
            "criteria": {"name": "Reputational", "order": 2},
            "impacts": [
                {"impact_label": "Local", "score": 1, "order": 1},
                {"impact_label": "National", "score": 2, "order": 2},
                {"impact_label": "Global", "score": 3, "order": 3},
            ],
        },
    ]


@pytest.fixture
def sample_config_data(organization_id):
    """Root record of a standard configuration."""
    return {
        "organization_id": organization_id,
        "name": "Default risk scale",
        "impact_scale_max": 3,
        "probability_scale_max": 3,
        "calculation_method": "average",
        "use_criteria": False,
    }


@pytest.fixture
def sample_configuration_payload(sample_impacts, sample_probabilities, sample_score_bands):
    """Full API payload for a standard configuration."""
    return {
        "name": "Default risk scale",
        "impact_scale_max": 3,
        "probability_scale_max": 3,
        "calculation_method": "average",
        "use_criteria": False,
        "impacts": sample_impacts,
        "probabilities": sample_probabilities,
        "score_bands": sample_score_bands,
    }


@pytest.fixture
def sample_criteria_payload(sample_configuration_payload, sample_criteria):
    """Full API payload for a criteria configuration scored by max."""
    return {
        **sample_configuration_payload,
        "name": "Criteria scale",
        "calculation_method": "max",
        "use_criteria": True,
        "criteria": sample_criteria,
    }
