"""
Pytest fixtures for census generator and API testing.
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from api.config import Settings
from census.pipeline import CensusGenerator


FIXED_NOW = datetime(2024, 3, 15, 9, 7)


# Override settings for testing
def get_settings_override():
    return Settings(
        debug=True,
        archive_prefix="TestCensus"
    )


def get_generator_factory_override():
    def factory(seed=None):
        return CensusGenerator(seed=seed, now=FIXED_NOW)
    return factory


@pytest.fixture
def client():
    """
    FastAPI test client with a fixed generation time.
    """
    from api.main import app
    from api.dependencies import get_settings, get_generator_factory
    
    app.dependency_overrides[get_settings] = get_settings_override
    app.dependency_overrides[get_generator_factory] = get_generator_factory_override
    
    with TestClient(app) as test_client:
        yield test_client
    
    app.dependency_overrides.clear()


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def generator(fixed_now):
    """Seeded generator with a fixed clock"""
    return CensusGenerator(seed=42, now=fixed_now)
