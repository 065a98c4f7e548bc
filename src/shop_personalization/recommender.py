"""
Recommendation Service

EventTracker + ScoringEngine + SimilarityEngine을 묶은 UI용 facade

생명주기:
    service = RecommendationService(store)
    service.init()      # 저장된 상태 로드, 호출한 스레드를 소유 스레드로 기록
    ...
    service.reset()     # 메모리 상태만 비움 (다시 init() 필요)

NOTE: 모든 상태는 단일 스레드 실행을 전제로 락 없이 공유됨.
      ENFORCE_SINGLE_THREAD가 켜져 있으면 소유 스레드 외의 호출은 ConcurrencyViolationError.
"""

import threading
from dataclasses import dataclass
from typing import Collection, Dict, Iterable, List, Optional

from loguru import logger

from .cache import CacheStore
from .catalog import CachedCatalog, CatalogProvider
from .clock import Clock
from .config import PersonalizationConfig, get_config
from .engines import ScoringEngine, SimilarityEngine
from .models import (
    PreferenceProfile,
    Product,
    ProductLike,
    UserEvent,
    as_product,
    as_products,
)
from .storage import KeyValueStore, KeyValueStoreFactory, StorageResult
from .tracker import EventTracker


class ServiceNotInitializedError(RuntimeError):
    """init() 전에 호출됨"""


class ConcurrencyViolationError(RuntimeError):
    """소유 스레드가 아닌 스레드에서 호출됨"""


class RecommendationService:
    """
    추천 서비스

    사용 예시:
        service = RecommendationService(MemoryKeyValueStore()).init()

        service.track_event("view", product_id="p-1", category="robes")
        recs = service.get_recommendations(products, limit=10)
        similar = service.get_similar_products(products[0], products)
    """

    def __init__(
        self,
        store: KeyValueStore,
        config: Optional[PersonalizationConfig] = None,
        clock: Optional[Clock] = None,
    ):
        self.config = config or get_config()
        self.tracker = EventTracker(store, self.config.tracker, clock)
        self.scoring = ScoringEngine(self.tracker)
        self.similarity = SimilarityEngine()

        self._initialized = False
        self._owner_thread: Optional[int] = None

    # ==================== 생명주기 ====================

    def init(self) -> "RecommendationService":
        """저장된 상태 로드 (저장소 오류 시 빈 상태로 시작)"""
        restored = self.tracker.load()
        self._owner_thread = threading.get_ident()
        self._initialized = True
        logger.info(f"[Recommender] Initialized (restored={restored})")
        return self

    def reset(self):
        """메모리 상태 초기화 (저장소는 그대로)"""
        self.tracker.reset()
        self._initialized = False
        self._owner_thread = None
        logger.info("[Recommender] Reset")

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _ensure_ready(self):
        if not self._initialized:
            raise ServiceNotInitializedError("RecommendationService.init()을 먼저 호출해야 합니다")
        if (
            self.config.recommendation.ENFORCE_SINGLE_THREAD
            and threading.get_ident() != self._owner_thread
        ):
            raise ConcurrencyViolationError(
                "RecommendationService는 init()을 호출한 스레드에서만 사용할 수 있습니다"
            )

    # ==================== 상태 조회 ====================

    @property
    def profile(self) -> PreferenceProfile:
        return self.tracker.profile

    @property
    def recently_viewed_ids(self) -> List[str]:
        return self.tracker.recently_viewed

    @property
    def last_persist_result(self) -> Optional[StorageResult]:
        return self.tracker.last_persist_result

    # ==================== 이벤트 ====================

    def track_event(self, kind, payload: Optional[Dict] = None, **fields) -> UserEvent:
        """행동 이벤트 기록 (EventTracker.track_event 참고)"""
        self._ensure_ready()
        return self.tracker.track_event(kind, payload, **fields)

    def clear_user_data(self) -> StorageResult:
        """선호도 / 이벤트 / 최근 본 상품을 메모리와 저장소에서 삭제"""
        self._ensure_ready()
        result = self.tracker.clear()
        logger.info("[Recommender] User data cleared")
        return result

    # ==================== 추천 ====================

    def score(self, product: ProductLike) -> float:
        self._ensure_ready()
        return self.scoring.score(as_product(product))

    def get_recommendations(
        self,
        products: Iterable[ProductLike],
        limit: Optional[int] = None,
        exclude_ids: Collection = (),
        category: Optional[str] = None,
    ) -> List[Product]:
        """
        개인화 추천

        Args:
            products: 카탈로그
            limit: 최대 개수 (기본 10)
            exclude_ids: 제외할 상품 ID
            category: 지정 시 해당 카테고리만

        Returns:
            점수 내림차순 상품 리스트
        """
        self._ensure_ready()
        if limit is None:
            limit = self.config.recommendation.DEFAULT_LIMIT
        return self.scoring.recommend(as_products(products), limit, exclude_ids, category)

    def get_similar_products(
        self,
        product: ProductLike,
        products: Iterable[ProductLike],
        limit: Optional[int] = None,
    ) -> List[Product]:
        """비슷한 상품 (기본 4개)"""
        self._ensure_ready()
        if limit is None:
            limit = self.config.recommendation.SIMILAR_LIMIT
        return self.similarity.similar_products(as_product(product), as_products(products), limit)

    def get_frequently_bought_together(
        self,
        product: ProductLike,
        products: Iterable[ProductLike],
    ) -> List[Product]:
        """함께 구매한 상품 (최대 3개)"""
        self._ensure_ready()
        rec = self.config.recommendation
        return self.similarity.frequently_bought_together(
            as_product(product),
            as_products(products),
            limit=rec.BOUGHT_TOGETHER_LIMIT,
            min_rating=rec.BOUGHT_TOGETHER_MIN_RATING,
        )

    def get_recently_viewed(self, products: Iterable[ProductLike]) -> List[Product]:
        """최근 본 상품 (최신순)"""
        self._ensure_ready()
        return self.similarity.recently_viewed(as_products(products), self.tracker.recently_viewed)

    def get_based_on_browsing(
        self,
        products: Iterable[ProductLike],
        limit: Optional[int] = None,
    ) -> List[Product]:
        """최근 둘러본 카테고리 기반 추천 (기록 없으면 인기 상품)"""
        self._ensure_ready()
        if limit is None:
            limit = self.config.recommendation.BROWSING_LIMIT
        return self.similarity.based_on_browsing(as_products(products), self.tracker.recently_viewed, limit)

    def get_trending_products(
        self,
        products: Iterable[ProductLike],
        limit: Optional[int] = None,
    ) -> List[Product]:
        """판매량 순 인기 상품"""
        self._ensure_ready()
        if limit is None:
            limit = self.config.recommendation.BROWSING_LIMIT
        return self.similarity.trending(as_products(products), limit)


# ==================== 조립 ====================

@dataclass
class PersonalizationServices:
    """애플리케이션 시작 시 한 번 만들어 주입하는 서비스 묶음"""
    store: KeyValueStore
    cache: CacheStore
    recommender: RecommendationService
    catalog: Optional[CachedCatalog] = None


def create_services(
    config: Optional[PersonalizationConfig] = None,
    store: Optional[KeyValueStore] = None,
    clock: Optional[Clock] = None,
    provider: Optional[CatalogProvider] = None,
    fallback: Iterable[ProductLike] = (),
) -> PersonalizationServices:
    """
    저장소 / 캐시 / 추천 서비스 / 카탈로그 생성

    Args:
        config: 설정 (기본 get_config())
        store: 저장소 (기본 StorageConfig.BACKEND로 생성)
        clock: 시간 함수 (테스트용)
        provider: 카탈로그 제공자 (없으면 catalog=None)
        fallback: 제공자 실패 시 사용할 상품
    """
    config = config or get_config()
    if store is None:
        store = KeyValueStoreFactory.from_config(config.storage)

    cache = CacheStore(store, config.cache, clock)
    recommender = RecommendationService(store, config, clock).init()
    catalog = CachedCatalog(cache, provider, fallback=fallback) if provider else None

    return PersonalizationServices(
        store=store,
        cache=cache,
        recommender=recommender,
        catalog=catalog,
    )
