from typing import Optional, Iterable
from ecocart.domain.models.product import Alternative, Product
import hashlib
import json

def _h(base: Product, limit: int, category_version: int) -> str:
    """
    Short hash of everything the alternatives list depends on for the base product.
    A re-scored or re-priced base gets a new key; a write to any product of the
    category bumps `category_version`, so candidate changes also get a new key.
    """
    s = json.dumps(
        {"c": base.category, "p": base.price, "s": base.eco_score, "k": limit, "v": category_version},
        sort_keys=True, separators=(",", ":"),
    )
    return hashlib.sha1(s.encode()).hexdigest()[:10]

class AlternativesCacheRepo:
    """
    Adapter for caching greener-alternative lists in Redis.
    Stores and retrieves lists of Alternative objects.
    """
    def __init__(self, redis, key_prefix: str = "alt"):
        self.cache = redis
        self.prefix = key_prefix

    def _version_key(self, category: str) -> str:
        return f"{self.prefix}:ver:{category}"

    async def category_version(self, category: str) -> int:
        raw = await self.cache.get(self._version_key(category))
        return int(raw) if raw is not None else 0

    async def bump_category(self, category: str) -> None:
        """Invalidate every cached list of `category` (old entries expire by TTL)."""
        await self.cache.incr(self._version_key(category))

    async def key(self, base: Product, limit: int) -> str:
        version = await self.category_version(base.category)
        return f"{self.prefix}:{base.product_id}:{_h(base, limit, version)}"

    async def get(self, key: str) -> Optional[list[Alternative]]:
        """
        Retrieve a list of Alternative from cache by key.
        Returns None if not found (an empty list is a valid cached value).
        """
        raw = await self.cache.get(key)
        if raw is not None:
            data = json.loads(raw)
            return [Alternative.model_validate(x) for x in data]
        return None

    async def set(self, key: str, items: Iterable[Alternative], ttl: int) -> None:
        payload = [i.model_dump() for i in items]
        await self.cache.set(key, json.dumps(payload), ex=ttl)
