from typing import Iterable, List, Tuple

from ecocart.domain.models.product import Alternative, Product
from ecocart.domain.services.constants import PRICE_BAND_HIGH, PRICE_BAND_LOW, PRICE_DECIMALS


def price_band(price: float) -> Tuple[float, float]:
    """
    Inclusive price range a greener alternative must fall into.
    Bounds are rounded to currency precision: 3.00 * 1.2 is 3.5999999999999996 in floats.
    """
    return round(price * PRICE_BAND_LOW, PRICE_DECIMALS), round(price * PRICE_BAND_HIGH, PRICE_DECIMALS)


def is_alternative(base: Product, candidate: Product) -> bool:
    lo, hi = price_band(base.price)
    return (
        candidate.product_id != base.product_id
        and candidate.category == base.category
        and candidate.eco_score > base.eco_score
        and lo <= candidate.price <= hi
    )


def rank_alternatives(base: Product, candidates: Iterable[Product], limit: int) -> List[Alternative]:
    """
    Greener substitutes for `base`: same category, strictly higher eco-score,
    price within +/-20%. Ordered by eco_score desc, ties by product_id asc,
    truncated to `limit`. No match (or no category) gives an empty list.
    """
    if not base.category or limit <= 0:
        return []

    kept = [c for c in candidates if is_alternative(base, c)]
    kept.sort(key=lambda c: (-c.eco_score, c.product_id))

    return [
        Alternative(
            product_id=c.product_id,
            name=c.name,
            price=c.price,
            eco_score=c.eco_score,
            improvement=c.eco_score - base.eco_score,
        )
        for c in kept[:limit]
    ]
