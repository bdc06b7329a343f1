"""
Shared fixtures for vsl-player tests.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ["DATABASE_URL"] = "sqlite://"

from app import app as flask_app  # noqa: E402
from database.connection import engine  # noqa: E402
from database.models import Base  # noqa: E402


@pytest.fixture(autouse=True)
def clean_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    flask_app.config['TESTING'] = True
    with flask_app.test_client() as client:
        yield client


@pytest.fixture
def auth_headers(client):
    response = client.post('/api/auth/login', json={
        'email': 'owner@example.com',
        'password': 'secret'
    })
    token = response.get_json()['token']
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def demo_config():
    from services.vsl_player import PlayerConfig
    return PlayerConfig(
        videoUrl="https://example.com/v.mp4",
        ratio="16:9",
        primaryColor="#2563eb",
        retentionSpeed=0.5,
        name="Demo",
    )
