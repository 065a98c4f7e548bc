"""
Event Tracker

행동 이벤트를 기록하고 선호도 프로필 / 최근 본 상품을 갱신

영속화 형식 (STATE_KEY 하나에 JSON 한 덩어리):
{
  "events": [...],              # 최근 MAX_PERSISTED_EVENTS개
  "preferences": {"categories": {}, "brands": {}, "tags": {}, "priceRanges": {}},
  "recentlyViewed": ["p-3", "p-1"]
}

NOTE: 메모리상의 이벤트 로그는 제한 없이 쌓이고, 영속화할 때만 잘림.
      잘린 이벤트도 이번 세션의 프로필에는 이미 반영되어 있음.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from ..clock import Clock, now_ms
from ..config import TrackerConfig
from ..models import EventKind, PreferenceProfile, UserEvent
from ..storage import KeyValueStore, StorageError, StorageResult


class EventTracker:
    """
    행동 이벤트 트래커

    사용 예시:
        tracker = EventTracker(MemoryKeyValueStore())
        tracker.load()

        tracker.track_event("view", product_id="p-1", category="robes", price=4500)
        tracker.track_event(EventKind.PURCHASE, {"category": "robes", "brand": "Kreyol"})

        profile = tracker.profile
        recent = tracker.recently_viewed
    """

    def __init__(
        self,
        store: KeyValueStore,
        config: Optional[TrackerConfig] = None,
        clock: Optional[Clock] = None,
    ):
        self.store = store
        self.config = config or TrackerConfig()
        self.clock = clock or now_ms

        self._events: List[UserEvent] = []
        self._profile = PreferenceProfile()
        self._recently_viewed: List[str] = []
        self.last_persist_result: Optional[StorageResult] = None

    # ==================== 상태 조회 ====================

    @property
    def events(self) -> Tuple[UserEvent, ...]:
        return tuple(self._events)

    @property
    def profile(self) -> PreferenceProfile:
        """선호도 프로필 (복사본)"""
        return self._profile.copy()

    @property
    def recently_viewed(self) -> List[str]:
        """최근 본 상품 ID (최신순)"""
        return list(self._recently_viewed)

    # ==================== 이벤트 기록 ====================

    def track_event(self, kind, payload: Optional[Dict[str, Any]] = None, **fields) -> UserEvent:
        """
        이벤트 기록

        Args:
            kind: EventKind 또는 "view", "purchase" 등
            payload: product_id, category, brand, tags, price, price_range, query
            **fields: payload와 같은 필드 (payload보다 우선)

        Returns:
            기록된 UserEvent

        Raises:
            ValueError: 알 수 없는 이벤트 종류 또는 필드
        """
        merged = dict(payload or {})
        merged.update(fields)
        event = UserEvent.from_payload(kind, merged, self.clock())

        self._events.append(event)
        self._profile.apply(event)

        if event.kind == EventKind.VIEW and event.product_id:
            self._add_to_recently_viewed(event.product_id)

        self.persist()
        return event

    def _add_to_recently_viewed(self, product_id: str):
        """맨 앞으로 이동 (중복 제거) 후 최대 개수로 자름"""
        recent = [pid for pid in self._recently_viewed if pid != product_id]
        recent.insert(0, product_id)
        self._recently_viewed = recent[: self.config.MAX_RECENT_ITEMS]

    # ==================== 영속화 ====================

    def snapshot(self) -> Dict[str, Any]:
        """영속화 대상 상태"""
        max_events = self.config.MAX_PERSISTED_EVENTS
        events = self._events[-max_events:] if max_events > 0 else []
        return {
            "events": [e.to_dict() for e in events],
            "preferences": self._profile.to_dict(),
            "recentlyViewed": list(self._recently_viewed),
        }

    def persist(self) -> StorageResult:
        """
        현재 상태를 저장소에 기록

        실패해도 메모리 상태는 그대로 유지

        Returns:
            StorageResult (last_persist_result에도 보관)
        """
        try:
            payload = json.dumps(self.snapshot(), ensure_ascii=False)
            self.store.set_item(self.config.STATE_KEY, payload)
            result = StorageResult.success()
        except StorageError as e:
            logger.warning(f"[Tracker] 추천 상태 저장 실패: {e}")
            result = StorageResult.failure(e)
        except (TypeError, ValueError) as e:
            logger.warning(f"[Tracker] 추천 상태 직렬화 실패: {e}")
            result = StorageResult.failure(StorageError(f"not serializable: {e}"))

        self.last_persist_result = result
        return result

    def load(self) -> bool:
        """
        저장된 상태 복원

        키가 없거나, 저장소 오류, 파싱 실패 시 빈 상태로 시작 (예외 없음)

        Returns:
            이전 상태 복원 여부
        """
        self.reset()
        try:
            raw = self.store.get_item(self.config.STATE_KEY)
        except StorageError as e:
            logger.warning(f"[Tracker] 추천 상태 로드 실패: {e}")
            return False

        if raw is None:
            return False

        try:
            self.restore(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"[Tracker] 손상된 추천 상태 무시: {e}")
            self.reset()
            return False

        logger.info(
            f"[Tracker] Restored {len(self._events)} events, "
            f"{len(self._recently_viewed)} recently viewed"
        )
        return True

    def restore(self, data: Dict[str, Any]):
        """
        snapshot() 형식의 상태를 메모리에 반영

        형식이 잘못된 개별 이벤트는 건너뜀

        Raises:
            TypeError: data가 dict가 아님
        """
        if not isinstance(data, dict):
            raise TypeError(f"state must be an object, got {type(data).__name__}")

        events = []
        skipped = 0
        for raw_event in data.get("events") or []:
            try:
                events.append(UserEvent.from_dict(raw_event))
            except (ValueError, KeyError, TypeError, AttributeError):
                skipped += 1
        if skipped:
            logger.warning(f"[Tracker] Skipped {skipped} malformed events")

        profile = PreferenceProfile.from_dict(data.get("preferences"))

        recent: List[str] = []
        for pid in data.get("recentlyViewed") or []:
            pid = str(pid)
            if pid not in recent:
                recent.append(pid)

        max_events = self.config.MAX_PERSISTED_EVENTS
        self._events = events[-max_events:] if max_events > 0 else []
        self._profile = profile
        self._recently_viewed = recent[: self.config.MAX_RECENT_ITEMS]

    def reset(self):
        """메모리 상태 초기화 (저장소는 그대로)"""
        self._events = []
        self._profile = PreferenceProfile()
        self._recently_viewed = []
        self.last_persist_result = None

    def clear(self) -> StorageResult:
        """메모리 + 저장소 상태 모두 삭제"""
        self.reset()
        try:
            self.store.remove_item(self.config.STATE_KEY)
        except StorageError as e:
            logger.warning(f"[Tracker] 추천 상태 삭제 실패: {e}")
            return StorageResult.failure(e)
        return StorageResult.success()
