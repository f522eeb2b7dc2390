import pytest
import requests

from studybot.errors import TransportError, UpstreamError
from studybot.generate import GeminiClient
from studybot.generate import normalize
from studybot.generate.types import GenerationConfig

CONFIG = GenerationConfig(temperature=0.7, topK=40, topP=0.95, maxOutputTokens=1024)


class FakeResponse:
    def __init__(self, status_code=200, data=None, text=""):
        self.status_code = status_code
        self._data = data
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._data is None:
            raise ValueError("No JSON object could be decoded")
        return self._data


@pytest.fixture
def gemini():
    return GeminiClient(api_key="secret", model="gemini-test", base_url="https://example.test/v1beta/models/", timeout=5)


def test_posts_body_with_key_and_timeout(monkeypatch, gemini):
    seen = {}

    def fake_post(url, **kwargs):
        seen["url"] = url
        seen.update(kwargs)
        return FakeResponse(data={"candidates": [{"content": {"parts": [{"text": "hi"}]}}]})

    monkeypatch.setattr(requests, "post", fake_post)
    resp = gemini.generate(normalize.normalize_simple("hello", CONFIG))

    assert resp.first_text() == "hi"
    assert seen["url"] == "https://example.test/v1beta/models/gemini-test:generateContent"
    assert seen["params"] == {"key": "secret"}
    assert seen["timeout"] == 5
    assert seen["json"]["contents"][0]["parts"][0]["text"] == "hello"
    assert seen["json"]["generationConfig"]["maxOutputTokens"] == 1024


def test_non_2xx_relays_status(monkeypatch, gemini):
    monkeypatch.setattr(requests, "post", lambda url, **kw: FakeResponse(status_code=429, text='{"error": "quota"}'))
    with pytest.raises(UpstreamError) as exc:
        gemini.generate(normalize.normalize_simple("hello", CONFIG))
    assert exc.value.status_code == 429
    assert exc.value.error == "Gemini API error: 429"
    assert "quota" in exc.value.detail


def test_network_failure_is_transport_error(monkeypatch, gemini):
    def boom(url, **kw):
        raise requests.exceptions.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "post", boom)
    with pytest.raises(TransportError) as exc:
        gemini.generate(normalize.normalize_simple("hello", CONFIG))
    assert exc.value.status_code == 500


def test_undecodable_body_is_transport_error(monkeypatch, gemini):
    monkeypatch.setattr(requests, "post", lambda url, **kw: FakeResponse(data=None, text="<html>"))
    with pytest.raises(TransportError):
        gemini.generate(normalize.normalize_simple("hello", CONFIG))


def test_partial_body_parses_as_empty_response(monkeypatch, gemini):
    monkeypatch.setattr(requests, "post", lambda url, **kw: FakeResponse(data={"candidates": None}))
    resp = gemini.generate(normalize.normalize_simple("hello", CONFIG))
    assert resp.candidates == []


@pytest.mark.parametrize(
    "data",
    [
        {"candidates": None},
        {"candidates": "nope"},
        {"candidates": [{"content": {"parts": [{"text": 5}]}}]},
        ["not", "an", "object"],
    ],
)
def test_partial_body_gets_fallback_text_through_app(monkeypatch, data):
    from fastapi.testclient import TestClient

    from studybot.app import create_app
    from conftest import make_settings

    monkeypatch.setattr(requests, "post", lambda url, **kw: FakeResponse(data=data))
    client = TestClient(create_app(make_settings()))
    r = client.post("/", json={"prompt": "hi"})
    assert r.status_code == 200
    assert r.json() == {"text": "No response from AI"}


def test_upstream_error_relayed_through_app(monkeypatch):
    from fastapi.testclient import TestClient

    from studybot.app import create_app
    from conftest import make_settings

    monkeypatch.setattr(requests, "post", lambda url, **kw: FakeResponse(status_code=503, text="overloaded"))
    client = TestClient(create_app(make_settings(ENV="production")))
    r = client.post("/api/chat", json={"message": "hi", "topic": "t", "history": []})
    assert r.status_code == 503
    body = r.json()
    assert body["error"] == "Gemini API error: 503"
    assert body["text"]
    assert "detail" not in body
