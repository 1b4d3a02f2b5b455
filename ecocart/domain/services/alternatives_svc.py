# ecocart/domain/services/alternatives_svc.py
import logging
import time
from typing import List, Optional

from ecocart.core.config import get_settings
from ecocart.domain.models.product import Alternative, Product
from ecocart.domain.repositories.alternatives_cache_repo import AlternativesCacheRepo
from ecocart.domain.repositories.product_repo import ProductRepo
from ecocart.domain.services.alternatives import price_band, rank_alternatives

logger = logging.getLogger(__name__)


async def find_alternatives(
    prod_repo: ProductRepo,
    base: Product,
    *,
    limit: int,
    redis=None,
) -> List[Alternative]:
    """
    Greener alternatives for `base`, best first.

    Flow:
      1) Try the Redis list cache (skipped when Redis is not configured).
      2) Query the catalog's category / price-band / min-score neighborhood.
      3) Re-apply filter + ordering (eco_score desc, product_id asc) and cap to `limit`.
      4) Cache the list, including an empty one.
    Cache errors are logged and never fail the request.
    """
    settings = get_settings()
    t0 = time.perf_counter()

    cache: Optional[AlternativesCacheRepo] = AlternativesCacheRepo(redis) if redis is not None else None
    cache_key: Optional[str] = None

    if cache:
        try:
            cache_key = await cache.key(base, limit)
            if (cached := await cache.get(cache_key)) is not None:
                logger.info("alternatives cache_hit product_id=%s items=%s", base.product_id, len(cached))
                return cached
        except Exception as e:
            logger.warning("alternatives cache get error key=%s err=%s", cache_key, e)

    lo, hi = price_band(base.price)
    candidates = await prod_repo.find_by_category_price_range(
        base.category,
        lo,
        hi,
        exclude_id=base.product_id,
        min_score=base.eco_score,
        limit=limit,
    )
    items = rank_alternatives(base, candidates, limit)

    if cache_key:
        try:
            await cache.set(cache_key, items, ttl=settings.alternatives_cache_ttl)
        except Exception as e:
            logger.warning("alternatives cache set error key=%s err=%s", cache_key, e)

    logger.info(
        "alternatives product_id=%s category=%s band=[%.2f, %.2f] candidates=%s kept=%s time=%.3fs",
        base.product_id, base.category, lo, hi, len(candidates), len(items), time.perf_counter() - t0,
    )
    return items


async def invalidate_categories(redis, *categories: str) -> None:
    """
    Called after a product write: bumps the cache version of each touched category
    so a new or re-scored candidate shows up before cached lists expire.
    """
    if redis is None:
        return
    cache = AlternativesCacheRepo(redis)
    for category in {c for c in categories if c}:
        try:
            await cache.bump_category(category)
        except Exception as e:
            logger.warning("alternatives cache invalidation error category=%s err=%s", category, e)
