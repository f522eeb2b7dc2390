import pytest
from fastapi.testclient import TestClient

from studybot.app import create_app
from studybot.generate import EchoDevClient
from studybot.settings import Settings


def make_settings(**overrides) -> Settings:
    values = {"GEMINI_API_KEY": "test-key", "ENV": "test"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def stub():
    return EchoDevClient()


@pytest.fixture
def client(settings, stub):
    return TestClient(create_app(settings, model_client=stub))
