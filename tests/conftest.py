import json
import random

import httpx
import pytest
from fastapi.testclient import TestClient

from yako.config import Settings
from yako.main import build_chat_service, create_app
from yako.services.ai_service import ProviderClient
from yako.services.fallback_service import FallbackGenerator

KNOWLEDGE = [
    {"question": "What toppings go on a margherita pizza?", "answer": "Tomato, mozzarella and basil."},
    {"question": "How long should pasta boil?", "answer": "Usually eight to twelve minutes."},
]


def completion_body(content="Hello from the model!"):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "test-model",
        "choices": [
            {"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": content}}
        ],
    }


@pytest.fixture
def knowledge_file(tmp_path):
    path = tmp_path / "knowledge_base.json"
    path.write_text(json.dumps(KNOWLEDGE), encoding="utf-8")
    return path


@pytest.fixture
def static_dir(tmp_path):
    d = tmp_path / "static"
    d.mkdir()
    (d / "index.html").write_text("<html><body>Yako</body></html>", encoding="utf-8")
    (d / "robots.txt").write_text("User-agent: *\nAllow: /\n", encoding="utf-8")
    (d / "sitemap.xml").write_text('<?xml version="1.0"?><urlset></urlset>', encoding="utf-8")
    return d


@pytest.fixture
def make_settings(knowledge_file, static_dir):
    def _make(**overrides):
        values = {
            "GROQ_API_KEY": "",
            "KNOWLEDGE_BASE_PATH": str(knowledge_file),
            "STATIC_DIR": str(static_dir),
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


class ProviderStub:
    """Records every request sent to the fake provider and answers with a canned response."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = completion_body() if body is None else body
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payloads(self):
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def provider_stub():
    return ProviderStub()


def _provider(handler, api_key="gsk_test_key"):
    return ProviderClient(
        api_key=api_key,
        base_url="http://provider.test/v1",
        model="test-model",
        timeout=5.0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def make_provider():
    return _provider


@pytest.fixture
def client(make_settings):
    """App without a provider key: every unmatched message uses the fallback."""
    settings = make_settings()
    provider = ProviderClient.from_settings(settings)
    service = build_chat_service(settings, provider, fallback=FallbackGenerator(rng=random.Random(7)))
    with TestClient(create_app(settings, provider=provider, chat_service=service)) as c:
        yield c


@pytest.fixture
def provider_client(make_settings, provider_stub):
    """App wired to a fake provider reachable through ``provider_stub``."""
    settings = make_settings(GROQ_API_KEY="gsk_test_key")
    provider = _provider(provider_stub)
    with TestClient(create_app(settings, provider=provider)) as c:
        yield c
