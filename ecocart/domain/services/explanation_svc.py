# ecocart/domain/services/explanation_svc.py

from __future__ import annotations
from typing import Any, Dict
import json
import logging
from time import monotonic as _now

from openai import AsyncOpenAI

from ecocart.core.config import Settings
from ecocart.core.errors import ExternalServiceError
from ecocart.domain.models.product import Product
from ecocart.domain.services.explainability import explain
from ecocart.domain.services.prompts import system_prompt, user_task

logger = logging.getLogger(__name__)

MAX_TOKENS = 200

def _compact_product(product: Product, explanation: str) -> Dict[str, Any]:
    """Minimal context for the LLM: scores, label, evidence and the template text."""
    return {
        "name": product.name,
        "category": product.category,
        "eco_score": product.eco_score,
        "label": product.ai_label,
        "breakdown": product.eco_breakdown.model_dump(),
        "keywords": product.ai_keywords.model_dump(),
        "explanation": explanation,
    }

async def rewrite_explanation(product: Product, explanation: str, settings: Settings) -> str:
    """
    Ask the LLM for a friendlier version of `explanation`.
    Any failure (no key, timeout, API error, empty answer) is an ExternalServiceError.
    """
    if not settings.OPENAI_API_KEY:
        raise ExternalServiceError("OPENAI_API_KEY not configured")

    payload = json.dumps(
        {"context": _compact_product(product, explanation), "task": user_task()},
        ensure_ascii=False, separators=(",", ":"),
    )
    messages = [
        {"role": "system", "content": system_prompt()},
        {"role": "user", "content": payload},
    ]

    t0 = _now()
    try:
        client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        resp = await client.chat.completions.create(
            model=settings.OPENAI_EXPLAIN_MODEL,
            messages=messages,
            max_tokens=MAX_TOKENS,
            temperature=0.0,
            timeout=settings.openai_timeout_s,
        )
        content = (resp.choices[0].message.content or "").strip()
    except Exception as e:
        raise ExternalServiceError(f"Explanation rewrite failed: {e}") from e

    logger.info("LLM explanation model=%s duration=%.3fs", settings.OPENAI_EXPLAIN_MODEL, _now() - t0)
    if not content:
        raise ExternalServiceError("Explanation rewrite returned empty content")
    return content

async def explain_product(product: Product, settings: Settings, *, use_llm: bool = False) -> Dict[str, Any]:
    """
    Explanation for a stored product, from its persisted label and keyword evidence.
    With use_llm, tries the LLM rewrite and falls back to the template on failure.
    """
    text = explain(product.ai_label, product.ai_keywords)
    result = {
        "product_id": product.product_id,
        "label": product.ai_label,
        "confidence": product.ai_confidence,
        "evidence": product.ai_keywords.model_dump(),
        "explanation": text,
        "source": "template",
    }
    if not use_llm:
        return result

    try:
        result["explanation"] = await rewrite_explanation(product, text, settings)
        result["source"] = "llm"
    except ExternalServiceError as e:
        logger.warning("Explanation rewrite unavailable for product_id=%s, serving template: %s", product.product_id, e)
    return result
