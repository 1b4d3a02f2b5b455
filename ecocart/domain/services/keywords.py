from ecocart.domain.models.product import KeywordEvidence

POSITIVE_KEYWORDS = [
    "recycled",
    "recyclable",
    "organic",
    "biodegradable",
    "compostable",
    "sustainable",
    "eco friendly",
    "eco-friendly",
    "renewable",
    "reusable",
    "refillable",
    "zero waste",
    "low carbon",
    "carbon neutral",
    "fair trade",
    "fair-trade",
    "ethical",
    "locally sourced",
    "local",
]

NEGATIVE_KEYWORDS = [
    "plastic",
    "single use",
    "single-use",
    "disposable",
    "synthetic",
    "toxic",
    "chemical",
    "non recyclable",
    "non-recyclable",
    "landfill",
    "waste",
    "polluting",
    "air freight",
    "air shipped",
    "fast fashion",
]


def extract(text: str) -> KeywordEvidence:
    """
    Keywords found anywhere in `text` (case-insensitive substring).
    Lists keep lexicon order and hold each keyword at most once.
    """
    lower = (text or "").lower()
    return KeywordEvidence(
        positive=[k for k in POSITIVE_KEYWORDS if k in lower],
        negative=[k for k in NEGATIVE_KEYWORDS if k in lower],
    )
