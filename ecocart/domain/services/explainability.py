from ecocart.domain.models.product import KeywordEvidence
from ecocart.domain.services.constants import LABEL_HIGH, LABEL_LOW


def explain(label: str, evidence: KeywordEvidence) -> str:
    """Deterministic justification for a label, keyed on the label."""
    positive = ", ".join(evidence.positive)
    negative = ", ".join(evidence.negative)

    if label == LABEL_HIGH:
        return f"This product is likely sustainable because it mentions: {positive or 'eco-friendly terms'}."

    if label == LABEL_LOW:
        return f"This product may have a higher environmental impact due to: {negative or 'several risk factors'}."

    if evidence.positive or evidence.negative:
        return f"This product shows mixed signals — positive indicators: {positive}; concerns: {negative}."
    return "This product shows mixed signals."
