"""Model adapter: JSON handling, failover, fallbacks. The OpenAI client is faked."""
from types import SimpleNamespace

import httpx
import pytest
from openai import AuthenticationError

from hermetrix.core.config import settings
from hermetrix.schemas.ai import RiskResult
from hermetrix.services import ai_client
from hermetrix.services.chat_fallback import HEALTH_KNOWLEDGE_BASE


class FakeClient:
    def __init__(self, content=None, exc=None):
        self.calls = []
        self._content = content
        self._exc = exc
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self._exc is not None:
            raise self._exc
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self._content))])


@pytest.fixture
def fake_client(monkeypatch):
    def install(content=None, exc=None):
        client = FakeClient(content, exc)
        monkeypatch.setattr(ai_client, "_get_client_for_key", lambda key: client)
        return client

    return install


def _auth_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return AuthenticationError("bad key", response=httpx.Response(401, request=request), body=None)


def test_empty_body_is_an_error(fake_client):
    fake_client(content="")
    with pytest.raises(ai_client.AIResponseError):
        ai_client.score_risk({}, {"a": 1})


def test_invalid_json_is_an_error(fake_client):
    fake_client(content="not json")
    with pytest.raises(ai_client.AIResponseError):
        ai_client.generate_insights({}, {"a": 1})


def test_json_mode_requested(fake_client):
    client = fake_client(content='{"score": 10, "riskLevel": "Low", "interpretation": "ok"}')
    ai_client.score_risk({"parameters": []}, {"a": 1})
    assert client.calls[0]["response_format"] == {"type": "json_object"}
    assert client.calls[0]["model"] == settings.openai_model


def test_risk_score_clamped_and_level_derived(fake_client):
    fake_client(content='{"score": 140.6, "riskLevel": "extreme", "interpretation": "x"}')
    risk = ai_client.score_risk({}, {"a": 1})
    assert risk.score == 100
    assert risk.risk_level == "High"


@pytest.mark.parametrize(
    "score,level",
    [(-5, "Low"), (33, "Low"), (34, "Moderate"), (66, "Moderate"), (67, "High")],
)
def test_risk_level_from_score(score, level):
    risk = RiskResult.model_validate({"score": score, "riskLevel": "", "interpretation": "x"})
    assert risk.risk_level == level
    assert 0 <= risk.score <= 100


def test_tasks_wrapped_or_bare(fake_client):
    fake_client(content='{"tasks": [{"taskType": "Water", "description": "Drink", "target": "2L"}, {"target": "x"}]}')
    risk = RiskResult(score=50, risk_level="Moderate", interpretation="x")
    tasks = ai_client.generate_tasks({}, risk)
    # Item without a description is skipped
    assert [(t.task_type, t.description) for t in tasks] == [("water", "Drink")]

    fake_client(content='[{"description": "Walk"}]')
    tasks = ai_client.generate_tasks({}, risk)
    assert tasks[0].task_type == "general"


def test_extract_image_uses_vision_input(fake_client):
    client = fake_client(content='{"parameters": [{"name": "TSH", "value": 4.2, "unit": ""}], "reportType": "Thyroid"}')
    payload, result = ai_client.extract_parameters(b"\x89PNG....", "image/png")
    assert payload["reportType"] == "Thyroid"
    assert result.parameters[0].value == "4.2"
    assert result.parameters[0].unit is None
    parts = client.calls[0]["messages"][-1]["content"]
    assert parts[1]["image_url"]["url"].startswith("data:image/png;base64,")


def test_extract_pdf_without_text_fails(fake_client, monkeypatch):
    fake_client(content="{}")
    monkeypatch.setattr(ai_client, "extract_text_from_pdf", lambda content: "")
    with pytest.raises(ai_client.AIResponseError):
        ai_client.extract_parameters(b"%PDF-1.4", "application/pdf")


def test_key_failover(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_keys", "sk-first,sk-second")
    bad = FakeClient(exc=_auth_error())
    good = FakeClient(content='{"insights": []}')
    monkeypatch.setattr(ai_client, "_get_client_for_key", lambda key: bad if key == "sk-first" else good)
    assert ai_client.generate_insights({}, {"a": 1}) == []
    assert len(bad.calls) == 1
    assert len(good.calls) == 1


def test_all_keys_fail(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_keys", "sk-first,sk-second")
    monkeypatch.setattr(ai_client, "_get_client_for_key", lambda key: FakeClient(exc=_auth_error()))
    with pytest.raises(ai_client.AIServiceError):
        ai_client.score_risk({}, {"a": 1})


def test_not_configured(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "")
    monkeypatch.setattr(settings, "openai_api_keys", "")
    with pytest.raises(ai_client.AINotConfigured):
        ai_client.score_risk({}, {"a": 1})


def test_chat_reply_sends_history(fake_client):
    client = fake_client(content="Drink more water.")
    history = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]
    assert ai_client.chat_reply("How much water?", history) == "Drink more water."
    roles = [m["role"] for m in client.calls[0]["messages"]]
    assert roles == ["system", "user", "assistant", "user"]


def test_chat_reply_falls_back(fake_client):
    fake_client(exc=RuntimeError("network down"))
    assert ai_client.chat_reply("any stress tips?", []) == HEALTH_KNOWLEDGE_BASE["stress"]


def test_unreadable_pdf_is_an_extraction_error(fake_client):
    client = fake_client(content="{}")
    with pytest.raises(ai_client.AIResponseError, match="Could not read PDF"):
        ai_client.extract_parameters(b"this is not a pdf", "application/pdf")
    assert client.calls == []
