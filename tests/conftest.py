"""Pytest configuration and fixtures."""

from dataclasses import replace
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from franchise_api.app.core.config import Settings
from franchise_api.app.main import create_app
from franchise_api.app.services.franchise_service import FranchiseStore

# Use an in-memory SQLite store for tests
TEST_DATABASE_URL = ":memory:"


@pytest.fixture
def settings() -> Settings:
    return replace(Settings.from_env(), database_url=TEST_DATABASE_URL, store_fail_fast=False)


@pytest.fixture
def store() -> Generator[FranchiseStore, None, None]:
    """A connected store, for tests that bypass HTTP."""
    store = FranchiseStore(TEST_DATABASE_URL)
    store.connect()
    yield store
    store.close()


@pytest.fixture
def app(settings):
    return create_app(settings, store=FranchiseStore(TEST_DATABASE_URL))


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    # Entering the client runs the lifespan, which connects the store.
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def franchise_payload() -> dict:
    return {
        "name": "Acme Burgers Downtown",
        "company": "Acme Corp",
        "contactName": "Jane Doe",
        "contactEmail": "jane@acme.test",
        "contactPhone": "+1 555 0100",
    }


@pytest.fixture
def create_franchise(client):
    """Create a franchise through the API and return the response body."""
    def _create(**fields) -> dict:
        body = {"name": "Test Franchise", "company": "Test Co", "contactName": "Tester"}
        body.update(fields)
        res = client.post("/api/franchises", json=body)
        assert res.status_code == 201, res.text
        return res.json()
    return _create
