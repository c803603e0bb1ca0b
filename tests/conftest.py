"""
Shared fixtures for API tests
"""

import fakeredis
import pytest

from shrinkdeck_api import create_app


@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis()


@pytest.fixture
def app(redis_client):
    return create_app({"TESTING": True, "REDIS_CLIENT": redis_client})


@pytest.fixture
def client(app):
    """Create test client"""
    with app.test_client() as client:
        yield client
