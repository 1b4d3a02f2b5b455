from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

class CartLine(BaseModel):
    product_id: str
    quantity: int = Field(..., gt=0)
    locked_price: float = Field(..., ge=0)
    eco_score_snapshot: Optional[int] = Field(None, ge=0, le=100)
    model_config = {"frozen": True}

class Cart(BaseModel):
    """
    One cart per user. `version` is the optimistic-concurrency counter:
    0 means "never persisted", each successful write bumps it by one.
    """
    user_id: str
    items: List[CartLine] = []
    cart_eco_score: int = 0
    version: int = 0
    updated_at: Optional[datetime] = None
    model_config = {"frozen": True}

    def line_for(self, product_id: str) -> Optional[CartLine]:
        return next((i for i in self.items if i.product_id == product_id), None)
