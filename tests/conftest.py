import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
from fastapi.testclient import TestClient

from offer_api.main import app
from offer_api.services.offer_store import OfferStore, get_offer_store


@pytest.fixture
def store():
    return OfferStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_offer_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
