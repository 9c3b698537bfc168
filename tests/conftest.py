"""
Pytest fixtures shared by the transkit tests.
"""

import json

import pytest

from transkit.cache import open_store
from transkit.settings import Settings


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Point the user config dir at a temp directory and clear credentials."""
    home = tmp_path / "config"
    monkeypatch.setenv("TRANSKIT_HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for name in ("TRANSLATOR_API_KEY", "TRANSLATOR_REGION", "TRANSLATOR_ENDPOINT", "TRANSLATOR_TIMEOUT"):
        # setenv first so values loaded from .env files during a test are undone afterwards
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return home


@pytest.fixture
def cache_file(isolated_home):
    isolated_home.mkdir(parents=True, exist_ok=True)
    return isolated_home / "cache.json"


@pytest.fixture
def store(cache_file):
    return open_store(cache_file)


@pytest.fixture
def write_cache(cache_file):
    def _write(document):
        cache_file.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
        return cache_file
    return _write


@pytest.fixture
def settings():
    return Settings(api_key="test-key", region="westus2")


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


@pytest.fixture
def fake_api(monkeypatch):
    """Replace requests.post with a recorder that answers with a canned translation."""
    import requests

    calls = []
    state = {"response": None, "exc": None}

    def respond(text="你好", detected="en", status_code=200, payload=None, body=""):
        if payload is None and status_code < 300:
            payload = [{"detectedLanguage": {"language": detected, "score": 1.0},
                        "translations": [{"text": text, "to": "zh-Hans"}]}]
        state["response"] = FakeResponse(status_code, payload, body)
        state["exc"] = None

    def fail_with(exc):
        state["exc"] = exc

    def fake_post(url, params=None, headers=None, json=None, timeout=None):
        calls.append({"url": url, "params": params, "headers": headers, "json": json, "timeout": timeout})
        if state["exc"] is not None:
            raise state["exc"]
        return state["response"]

    respond()
    monkeypatch.setattr(requests, "post", fake_post)
    fake_post.calls = calls
    fake_post.respond = respond
    fake_post.fail_with = fail_with
    return fake_post
