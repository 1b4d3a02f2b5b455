from typing import Dict, List

from ecocart.domain.models.product import EcoBreakdown
from ecocart.domain.services.constants import (
    ALL_RULES,
    BASELINE_SCORE,
    BREAKDOWN_BASE,
    BREAKDOWN_COMPONENT,
    BREAKDOWN_MAX,
    LIST_FIELDS,
    SCORE_MAX,
    SCORE_MIN,
)


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def _field_text(product, field: str) -> str:
    """
    Lower-cased text of a product attribute.
    Works on Product models and plain dicts (API payloads, raw documents).
    """
    value = product.get(field) if isinstance(product, dict) else getattr(product, field, None)
    if value is None:
        return ""
    if field in LIST_FIELDS:
        return " ".join(str(v) for v in value).lower()
    return str(value).strip().lower()


def rule_matches(product, rule) -> bool:
    field, keyword, _ = rule
    text = _field_text(product, field)
    if field in LIST_FIELDS:
        return keyword in text
    return text == keyword


def matched_rules(product) -> List[tuple]:
    return [rule for rule in ALL_RULES if rule_matches(product, rule)]


def score(product) -> int:
    """
    Deterministic eco-score in [0, 100].
    Baseline plus every matching rule adjustment, clamped once at the end.
    """
    total = BASELINE_SCORE + sum(points for _, _, points in matched_rules(product))
    return _clamp(total, SCORE_MIN, SCORE_MAX)


def breakdown(product) -> EcoBreakdown:
    parts: Dict[str, int] = {c: BREAKDOWN_BASE for c in ("materials", "ethics", "packaging", "shipping", "lifespan")}
    for rule in matched_rules(product):
        parts[BREAKDOWN_COMPONENT[rule]] += rule[2]
    return EcoBreakdown(**{k: _clamp(v, 0, BREAKDOWN_MAX) for k, v in parts.items()})
