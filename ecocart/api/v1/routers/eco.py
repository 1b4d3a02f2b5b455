# ecocart/api/v1/routers/eco.py
from fastapi import APIRouter, Depends
from typing import Optional
import logging

from ecocart.api.deps import classifier_dep
from ecocart.api.v1.schemas.eco import ClassifyIn, ClassifyOut, EcoAttributesIn, EcoScoreOut
from ecocart.domain.services import rule_scorer
from ecocart.domain.services.eco_svc import classification_text, classify_text
from ecocart.ml.classifier import ClassifierHandle

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eco", tags=["eco"])


@router.post("/score", response_model=EcoScoreOut)
async def eco_score(body: EcoAttributesIn):
    """Rule-based eco-score for ad-hoc attributes (no persistence, no classifier needed)."""
    attrs = body.model_dump()
    return {"eco_score": rule_scorer.score(attrs), "eco_breakdown": rule_scorer.breakdown(attrs)}


@router.post("/classify", response_model=ClassifyOut)
async def classify(body: ClassifyIn, classifier: Optional[ClassifierHandle] = Depends(classifier_dep)):
    """
    Sustainability label for free text (or description + materials + eco_tags).
    503 when the classifier artifact was not loaded at startup.
    """
    text = body.text if body.text is not None else classification_text(body.model_dump())
    result = classify_text(classifier, text)
    logger.info("Response: classify label=%s confidence=%.3f", result.label, result.confidence)
    return result
