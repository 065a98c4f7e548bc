"""
Cache Layer

메모리 + 영속 저장소 2단 TTL 캐시
"""

from .cache_store import CacheStore, KeyMatcher
from .keys import CacheKeys, CacheTTL

__all__ = [
    "CacheStore",
    "KeyMatcher",
    "CacheKeys",
    "CacheTTL",
]
