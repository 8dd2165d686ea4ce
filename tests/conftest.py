import pytest
from fastapi.testclient import TestClient

from latinium.app import create_app
from latinium.config import Settings

from tests.utils import GALLIA_RESULT, FakeClock, StubModel, fenced


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stub_model():
    return StubModel(fenced(GALLIA_RESULT))


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key")


@pytest.fixture
def app(settings, stub_model):
    return create_app(settings, model=stub_model)


@pytest.fixture
def client(app):
    return TestClient(app)
