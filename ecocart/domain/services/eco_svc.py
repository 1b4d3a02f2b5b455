# ecocart/domain/services/eco_svc.py
import logging
from typing import Any, Dict, Optional

from ecocart.core.errors import ClassifierUnavailable
from ecocart.domain.models.product import ClassificationResult, KeywordEvidence
from ecocart.domain.services import explainability, keywords, rule_scorer
from ecocart.domain.services.constants import DEFAULT_CONFIDENCE, DEFAULT_LABEL
from ecocart.ml.classifier import ClassifierHandle

logger = logging.getLogger(__name__)


def _get(product, field: str):
    return product.get(field) if isinstance(product, dict) else getattr(product, field, None)


def classification_text(product) -> str:
    """description + materials + eco_tags, lower-cased. Accepts a Product or a dict."""
    parts = [_get(product, "description") or ""]
    parts += [str(m) for m in (_get(product, "materials") or [])]
    parts += [str(t) for t in (_get(product, "eco_tags") or [])]
    return " ".join(p for p in parts if p).lower()


def classify_text(handle: Optional[ClassifierHandle], text: str) -> ClassificationResult:
    """
    Full classification of free text: label, probabilities, evidence, explanation.
    Raises ClassifierUnavailable when no model was loaded at startup.
    """
    if handle is None:
        raise ClassifierUnavailable("Sustainability classifier is not loaded")

    label, probabilities = handle.classify(text)
    evidence = keywords.extract(text)
    confidence = max(probabilities.values()) if probabilities else DEFAULT_CONFIDENCE
    return ClassificationResult(
        label=label,
        probabilities=probabilities,
        confidence=min(1.0, max(0.0, confidence)),
        evidence=evidence,
        explanation=explainability.explain(label, evidence),
    )


def default_classification() -> ClassificationResult:
    evidence = KeywordEvidence()
    return ClassificationResult(
        label=DEFAULT_LABEL,
        probabilities={},
        confidence=DEFAULT_CONFIDENCE,
        evidence=evidence,
        explanation=explainability.explain(DEFAULT_LABEL, evidence),
    )


def classify_product_safe(handle: Optional[ClassifierHandle], product) -> ClassificationResult:
    """
    Best-effort classification for persistence and listings:
    a failing or missing model yields medium / 0.0 / no evidence instead of an error.
    """
    try:
        return classify_text(handle, classification_text(product))
    except Exception as e:
        logger.warning(
            "Classification failed for product_id=%s, using default label: %s",
            _get(product, "product_id"), e,
        )
        return default_classification()


def derive_eco_fields(product, handle: Optional[ClassifierHandle]) -> Dict[str, Any]:
    """
    Derived sustainability fields stored on a product document
    (computed on create and on every explicit update).
    """
    result = classify_product_safe(handle, product)
    return {
        "eco_score": rule_scorer.score(product),
        "eco_breakdown": rule_scorer.breakdown(product).model_dump(),
        "ai_label": result.label,
        "ai_confidence": result.confidence,
        "ai_keywords": result.evidence.model_dump(),
    }
