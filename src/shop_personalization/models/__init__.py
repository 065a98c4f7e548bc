"""
개인화 서브시스템 데이터 모델

이벤트, 선호도 프로필, 상품, 캐시 엔트리 구조 정의
"""

from .preference import (
    PriceBucket,
    PreferenceProfile,
    price_bucket_for,
)

from .event import (
    EventKind,
    EVENT_WEIGHTS,
    UserEvent,
)

from .product import (
    Product,
    ProductLike,
    as_product,
    as_products,
)

from .cache_entry import CacheEntry

__all__ = [
    # preference.py
    "PriceBucket",
    "PreferenceProfile",
    "price_bucket_for",
    # event.py
    "EventKind",
    "EVENT_WEIGHTS",
    "UserEvent",
    # product.py
    "Product",
    "ProductLike",
    "as_product",
    "as_products",
    # cache_entry.py
    "CacheEntry",
]
