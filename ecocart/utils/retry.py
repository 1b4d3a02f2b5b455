# ecocart/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ecocart.core.config import get_settings
from ecocart.core.errors import CartConflict

def cart_conflict_retry():
    """Re-run a whole read-modify-write when the cart version moved underneath us."""
    return retry(
        reraise=True,
        stop=stop_after_attempt(get_settings().cart_update_retries),
        wait=wait_exponential(multiplier=0.02, min=0.02, max=0.2),
        retry=retry_if_exception_type(CartConflict),
    )
