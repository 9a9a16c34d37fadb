import pytest
from fastapi.testclient import TestClient

from soulchat import store as store_module
from soulchat.config import settings
from soulchat.main import app


@pytest.fixture(autouse=True)
def no_search_key(monkeypatch):
    monkeypatch.setattr(settings, "tavily_api_key", None)


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(settings, "seed_demo_data", True)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def store(client):
    return store_module.get_store()
