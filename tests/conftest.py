"""Shared fixtures for Storefront API tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from storefront_api.app.core.config import Settings
from storefront_api.app.main import create_app


@pytest.fixture
def settings():
    """In-memory settings with every optional middleware disabled."""
    return Settings(middleware=(), data_dir=None)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user_payload():
    return {"username": "alice", "email": "alice@example.com", "password": "wonderland"}


@pytest.fixture
def product_payload():
    return {"name": "Desk lamp", "price": 24.99, "quantity": 10, "image": "lamp.png"}


@pytest.fixture
def registered_user(client, user_payload):
    """A user created through the API; returns the ``newUser`` envelope body."""
    response = client.post("/register", json=user_payload)
    assert response.status_code == 201
    return response.json()["newUser"]
