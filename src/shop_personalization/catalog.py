"""
Cached Catalog

카탈로그 제공자 결과를 CacheStore에 보관 (기본 5분)

카탈로그 자체는 외부 제공자가 소유하며 이 모듈은 읽기만 함
"""

from typing import Callable, Iterable, List, Optional

from loguru import logger

from .cache import CacheKeys, CacheStore, CacheTTL
from .models import Product, ProductLike, as_products

CatalogProvider = Callable[[], Iterable[ProductLike]]


class CachedCatalog:
    """
    캐시를 거치는 카탈로그 조회

    사용 예시:
        catalog = CachedCatalog(cache, provider=fetch_products, fallback=LOCAL_PRODUCTS)
        products = catalog.load()

        # 실시간 업데이트 수신 시
        catalog.invalidate()
    """

    def __init__(
        self,
        cache: CacheStore,
        provider: CatalogProvider,
        key: str = CacheKeys.PRODUCTS_CATALOG,
        ttl_ms: int = CacheTTL.PRODUCTS_CATALOG,
        fallback: Iterable[ProductLike] = (),
    ):
        self.cache = cache
        self.provider = provider
        self.key = key
        self.ttl_ms = ttl_ms
        self.fallback = as_products(fallback)

    def _cached(self) -> Optional[List[Product]]:
        cached = self.cache.get(self.key)
        if not isinstance(cached, list) or not cached:
            return None
        try:
            return as_products(cached)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"[Catalog] 캐시된 카탈로그 형식 오류: {e}")
            self.cache.remove(self.key)
            return None

    def load(self, force_refresh: bool = False) -> List[Product]:
        """
        카탈로그 로드

        Args:
            force_refresh: True면 캐시를 무시하고 제공자에서 다시 조회

        Returns:
            상품 리스트 (제공자 실패 시 fallback)
        """
        if not force_refresh:
            cached = self._cached()
            if cached is not None:
                return cached

        try:
            products = as_products(self.provider())
        except Exception as e:
            logger.error(f"[Catalog] 카탈로그 조회 실패, fallback 사용: {e}")
            return list(self.fallback)

        if products:
            self.cache.set(self.key, [p.to_dict() for p in products], self.ttl_ms)
        logger.info(f"[Catalog] Loaded {len(products)} products from provider")
        return products

    def invalidate(self):
        """캐시된 카탈로그 삭제"""
        self.cache.remove(self.key)
