import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client() -> TestClient:
    from chat_markdown.main import app

    return TestClient(app)


@pytest.fixture()
def small_limit(monkeypatch):
    # Shrink the request size limit so oversize handling is cheap to test.
    from chat_markdown import config

    monkeypatch.setattr(config, "MAX_TEXT_CHARS", 50)
    yield 50
