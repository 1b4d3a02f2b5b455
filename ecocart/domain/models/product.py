from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Literal
from datetime import datetime

EcoLabel = Literal["high", "medium", "low"]

class EcoBreakdown(BaseModel):
    materials: int = 0
    ethics: int = 0
    packaging: int = 0
    shipping: int = 0
    lifespan: int = 0
    model_config = {"frozen": True}

class KeywordEvidence(BaseModel):
    positive: List[str] = Field(default_factory=list)
    negative: List[str] = Field(default_factory=list)
    model_config = {"frozen": True}

class Product(BaseModel):
    product_id: str
    name: str
    brand: Optional[str] = None
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    description: str = ""
    materials: List[str] = []
    packaging: Optional[str] = None
    shipping_type: Optional[str] = None
    eco_tags: List[str] = []
    image_url: Optional[str] = None

    # Derived, recomputed only on create/update
    eco_score: int = Field(50, ge=0, le=100)
    eco_breakdown: EcoBreakdown = EcoBreakdown()
    ai_label: EcoLabel = "medium"
    ai_confidence: float = Field(0.0, ge=0, le=1)
    ai_keywords: KeywordEvidence = KeywordEvidence()

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"frozen": True}  # immuable = safe

    @field_validator("materials", "eco_tags", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        # Older documents store null instead of []
        return [] if v is None else v

class ClassificationResult(BaseModel):
    label: EcoLabel
    probabilities: Dict[str, float]
    confidence: float = Field(..., ge=0, le=1)
    evidence: KeywordEvidence
    explanation: str
    model_config = {"frozen": True}

class Alternative(BaseModel):
    product_id: str
    name: str
    price: float
    eco_score: int
    improvement: int
    model_config = {"frozen": True}
