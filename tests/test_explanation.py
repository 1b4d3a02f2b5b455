from types import SimpleNamespace

import pytest

from conftest import make_product

from ecocart.core.config import Settings
from ecocart.core.errors import ExternalServiceError
from ecocart.domain.models.product import KeywordEvidence
from ecocart.domain.services import explanation_svc


def _settings(**kw) -> Settings:
    return Settings(_env_file=None, **kw)


def _fake_openai(content=None, error=None, calls=None):
    async def create(**kwargs):
        if calls is not None:
            calls.append(kwargs)
        if error:
            raise error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])

    class FakeClient:
        def __init__(self, api_key=None):
            self.chat = SimpleNamespace(completions=SimpleNamespace(create=create))

    return FakeClient


@pytest.fixture
def product():
    return make_product(
        "tee",
        category="apparel",
        eco_score=85,
        ai_label="high",
        ai_confidence=0.9,
        ai_keywords=KeywordEvidence(positive=["organic", "fair trade"]),
    )


async def test_template_by_default(product):
    out = await explanation_svc.explain_product(product, _settings())
    assert out == {
        "product_id": "tee",
        "label": "high",
        "confidence": 0.9,
        "evidence": {"positive": ["organic", "fair trade"], "negative": []},
        "explanation": "This product is likely sustainable because it mentions: organic, fair trade.",
        "source": "template",
    }


async def test_llm_rewrite(product, monkeypatch):
    calls = []
    monkeypatch.setattr(explanation_svc, "AsyncOpenAI", _fake_openai(content="  Made from organic, fair trade cotton.  ", calls=calls))

    out = await explanation_svc.explain_product(product, _settings(OPENAI_API_KEY="sk-test"), use_llm=True)

    assert out["explanation"] == "Made from organic, fair trade cotton."
    assert out["source"] == "llm"
    assert calls[0]["model"] == "gpt-4o-mini"
    assert '"eco_score":85' in calls[0]["messages"][1]["content"]


async def test_llm_without_key_falls_back(product):
    out = await explanation_svc.explain_product(product, _settings(OPENAI_API_KEY=""), use_llm=True)
    assert out["source"] == "template"
    assert out["explanation"].startswith("This product is likely sustainable")


async def test_llm_error_falls_back(product, monkeypatch):
    monkeypatch.setattr(explanation_svc, "AsyncOpenAI", _fake_openai(error=TimeoutError("slow")))
    out = await explanation_svc.explain_product(product, _settings(OPENAI_API_KEY="sk-test"), use_llm=True)
    assert out["source"] == "template"


async def test_rewrite_rejects_empty_answer(product, monkeypatch):
    monkeypatch.setattr(explanation_svc, "AsyncOpenAI", _fake_openai(content="   "))
    with pytest.raises(ExternalServiceError):
        await explanation_svc.rewrite_explanation(product, "text", _settings(OPENAI_API_KEY="sk-test"))
