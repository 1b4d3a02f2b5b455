import math
from typing import Iterable

from ecocart.domain.models.cart import CartLine


def round_half_up(value: float) -> int:
    # round() would give banker's rounding (72.5 -> 72)
    return int(math.floor(value + 0.5))


def cart_score(lines: Iterable[CartLine]) -> int:
    """
    Quantity-weighted average of the pinned eco_score snapshots, rounded half up.
    Empty cart -> 0; a line without snapshot counts as 0.
    Never looks up the live product score.
    """
    lines = list(lines)
    qty = sum(i.quantity for i in lines)
    if not qty:
        return 0
    total = sum((i.eco_score_snapshot or 0) * i.quantity for i in lines)
    return round_half_up(total / qty)
