"""
Shop Personalization - 개인화 추천 + 2단 캐시

행동 이벤트 기반 선호도 프로필, 휴리스틱 추천 엔진, TTL 캐시

사용 예시:
    from shop_personalization import (
        # Services
        create_services, RecommendationService,

        # Cache
        CacheStore, CacheKeys, CacheTTL,

        # Models
        EventKind, Product,

        # Storage
        MemoryKeyValueStore, JsonFileKeyValueStore,
    )

    services = create_services(provider=fetch_products)
    products = services.catalog.load()

    services.recommender.track_event("view", product_id="p-1", category="robes")
    recs = services.recommender.get_recommendations(products)
"""

# Models
from .models import (
    EventKind,
    EVENT_WEIGHTS,
    UserEvent,
    PriceBucket,
    PreferenceProfile,
    price_bucket_for,
    Product,
    CacheEntry,
)

# Storage
from .storage import (
    KeyValueStore,
    StorageError,
    StorageQuotaExceededError,
    StorageUnavailableError,
    StorageResult,
    MemoryKeyValueStore,
    UnavailableKeyValueStore,
    JsonFileKeyValueStore,
    SqliteKeyValueStore,
    KeyValueStoreFactory,
    StorageBackend,
)

# Cache
from .cache import (
    CacheStore,
    CacheKeys,
    CacheTTL,
)

# Tracking / Engines
from .tracker import EventTracker
from .engines import (
    ScoringEngine,
    SimilarityEngine,
    score_product,
    similarity,
)

# Services
from .catalog import CachedCatalog
from .recommender import (
    RecommendationService,
    PersonalizationServices,
    ServiceNotInitializedError,
    ConcurrencyViolationError,
    create_services,
)

# Config
from .config import PersonalizationConfig, get_config

__all__ = [
    # Models
    "EventKind",
    "EVENT_WEIGHTS",
    "UserEvent",
    "PriceBucket",
    "PreferenceProfile",
    "price_bucket_for",
    "Product",
    "CacheEntry",
    # Storage
    "KeyValueStore",
    "StorageError",
    "StorageQuotaExceededError",
    "StorageUnavailableError",
    "StorageResult",
    "MemoryKeyValueStore",
    "UnavailableKeyValueStore",
    "JsonFileKeyValueStore",
    "SqliteKeyValueStore",
    "KeyValueStoreFactory",
    "StorageBackend",
    # Cache
    "CacheStore",
    "CacheKeys",
    "CacheTTL",
    # Tracking / Engines
    "EventTracker",
    "ScoringEngine",
    "SimilarityEngine",
    "score_product",
    "similarity",
    # Services
    "CachedCatalog",
    "RecommendationService",
    "PersonalizationServices",
    "ServiceNotInitializedError",
    "ConcurrencyViolationError",
    "create_services",
    # Config
    "PersonalizationConfig",
    "get_config",
]
