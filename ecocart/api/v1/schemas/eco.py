# ecocart/api/v1/schemas/eco.py
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from ecocart.domain.models.product import Alternative, EcoBreakdown, KeywordEvidence, Product

# Domain rules (non-negative price, non-empty category, positive quantity) are
# checked in the service layer and answered with 400, not here.

class ProductIn(BaseModel):
    product_id: Optional[str] = None
    name: str
    brand: Optional[str] = None
    category: str
    price: float
    description: str = ""
    materials: Optional[List[str]] = None
    packaging: Optional[str] = None
    shipping_type: Optional[str] = None
    eco_tags: Optional[List[str]] = None
    image_url: Optional[str] = None

class ProductUpdate(BaseModel):
    name: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    materials: Optional[List[str]] = None
    packaging: Optional[str] = None
    shipping_type: Optional[str] = None
    eco_tags: Optional[List[str]] = None
    image_url: Optional[str] = None

class ProductListOut(BaseModel):
    page: int
    total: int
    pages: int
    products: List[Product]

class AlternativeBase(BaseModel):
    product_id: str
    name: str
    price: float
    eco_score: int

class AlternativesOut(BaseModel):
    base: AlternativeBase
    alternatives: List[Alternative]
    count: int

class ExplanationOut(BaseModel):
    product_id: str
    label: str
    confidence: float
    evidence: KeywordEvidence
    explanation: str
    source: str  # "template" | "llm"

class EcoAttributesIn(BaseModel):
    materials: Optional[List[str]] = None
    packaging: Optional[str] = None
    shipping_type: Optional[str] = None
    eco_tags: Optional[List[str]] = None

class EcoScoreOut(BaseModel):
    eco_score: int
    eco_breakdown: EcoBreakdown

class ClassifyIn(BaseModel):
    """Either raw `text`, or product fields the text is built from."""
    text: Optional[str] = None
    description: Optional[str] = None
    materials: Optional[List[str]] = None
    eco_tags: Optional[List[str]] = None

class ClassifyOut(BaseModel):
    label: str
    probabilities: Dict[str, float]
    confidence: float
    evidence: KeywordEvidence
    explanation: str

class CartAddIn(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, description="Quantity to add (must be > 0)")

class CartQuantityIn(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., description="New quantity; <= 0 removes the line")

class SwapIn(BaseModel):
    old_product_id: str = Field(..., min_length=1)
    new_product_id: str = Field(..., min_length=1)

class CartRefreshIn(BaseModel):
    product_id: str = Field(..., min_length=1)
