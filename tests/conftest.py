"""
Shared test fixtures — test client and admin auth helpers.
"""

import os

import pytest
from fastapi.testclient import TestClient

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "moving-day-2025"

# Configure admin credentials before importing app modules
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["ADMIN_USERNAME"] = ADMIN_USERNAME

from murray_moving.auth import hash_password
from murray_moving.config import settings

# settings is already loaded, so the hash goes straight onto it
settings.ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)

from murray_moving.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def admin_headers(client):
    """Log in as the admin and return auth headers."""
    response = client.post("/api/auth/login", json={
        "username": ADMIN_USERNAME,
        "password": ADMIN_PASSWORD,
    })
    assert response.status_code == 200
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD
