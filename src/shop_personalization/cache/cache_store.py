"""
Cache Store

메모리(fast tier) + 영속 저장소(durable tier) 2단 TTL 캐시

- set: 두 계층 모두 기록. 영속 계층 실패 시 해당 키는 메모리 전용으로 동작
- get: 메모리 -> 영속 계층 순으로 조회, 영속 계층 hit이면 메모리로 승격
- 만료(now > expiry)된 엔트리는 조회 시점에 두 계층에서 삭제

NOTE: 메모리 계층 축출은 삽입 순서 FIFO (get이 순서를 갱신하지 않음).
      "LRU-like"라고 불려 왔지만 실제 LRU가 아님.
"""

import json
import re
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Union

from loguru import logger

from ..clock import Clock, now_ms
from ..config import CacheConfig
from ..models import CacheEntry
from ..storage import KeyValueStore, StorageError, StorageResult

KeyMatcher = Union[str, "re.Pattern", Callable[[str], bool]]

_MISSING = object()


def _as_predicate(matcher: KeyMatcher) -> Callable[[str], bool]:
    """regex 문자열 / 컴파일된 패턴 / predicate를 predicate로 변환"""
    if isinstance(matcher, str):
        return re.compile(matcher).search
    if isinstance(matcher, re.Pattern):
        return matcher.search
    if callable(matcher):
        return matcher
    raise TypeError(f"지원하지 않는 matcher 타입: {type(matcher).__name__}")


class CacheStore:
    """
    2단 TTL 캐시

    사용 예시:
        cache = CacheStore(MemoryKeyValueStore())

        cache.set("products_catalog", products, ttl_ms=5 * 60 * 1000)
        products = cache.get("products_catalog")

        # 카테고리 캐시 전체 무효화
        cache.invalidate_pattern(r"^category:")

    어떤 메서드도 저장소 오류를 호출자에게 전달하지 않음 (최악의 경우 cache miss)
    """

    def __init__(
        self,
        store: KeyValueStore,
        config: Optional[CacheConfig] = None,
        clock: Optional[Clock] = None,
    ):
        self.store = store
        self.config = config or CacheConfig()
        self.clock = clock or now_ms
        self._memory: "OrderedDict[str, CacheEntry]" = OrderedDict()

    @property
    def capacity(self) -> int:
        return self.config.MEMORY_CAPACITY

    def _durable_key(self, key: str) -> str:
        return f"{self.config.KEY_PREFIX}{key}"

    # ==================== Fast tier ====================

    def _remember(self, key: str, entry: CacheEntry):
        """메모리 계층 기록 + 용량 초과 시 가장 먼저 들어온 키 하나 축출"""
        self._memory[key] = entry
        if len(self._memory) > self.capacity:
            evicted, _ = self._memory.popitem(last=False)
            logger.debug(f"[Cache] evicted from memory: {evicted}")

    # ==================== Durable tier ====================

    def _read_durable(self, key: str) -> Optional[CacheEntry]:
        try:
            raw = self.store.get_item(self._durable_key(key))
        except StorageError as e:
            logger.warning(f"[Cache] 영속 캐시 조회 실패 ({key}): {e}")
            return None

        if raw is None:
            return None

        try:
            return CacheEntry.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"[Cache] 손상된 캐시 엔트리 무시 ({key}): {e}")
            return None

    # ==================== Public API ====================

    def set(self, key: str, value: Any, ttl_ms: Optional[int] = None) -> StorageResult:
        """
        캐시 저장

        Args:
            key: 캐시 키
            value: 캐시할 값 (영속 계층에는 JSON으로 저장)
            ttl_ms: 유효 시간 (ms, 기본 CacheConfig.DEFAULT_TTL_MS)

        Returns:
            영속 계층 저장 결과 (실패해도 메모리 계층은 기록됨)
        """
        if ttl_ms is None:
            ttl_ms = self.config.DEFAULT_TTL_MS

        now = self.clock()
        entry = CacheEntry(value=value, expiry=now + ttl_ms, timestamp=now)
        self._remember(key, entry)

        try:
            payload = json.dumps(entry.to_dict(), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.warning(f"[Cache] JSON 직렬화 불가, 메모리 전용으로 저장 ({key}): {e}")
            return StorageResult.failure(StorageError(f"not serializable: {e}"))

        try:
            self.store.set_item(self._durable_key(key), payload)
        except StorageError as e:
            logger.warning(f"[Cache] 영속 캐시 저장 실패 ({key}): {e}")
            return StorageResult.failure(e)

        return StorageResult.success()

    def get(self, key: str, default: Any = None) -> Any:
        """
        캐시 조회

        Returns:
            캐시된 값 또는 default (없거나 만료된 경우)
        """
        now = self.clock()
        entry = self._memory.get(key)

        if entry is None:
            entry = self._read_durable(key)
            if entry is not None and not entry.is_expired(now):
                self._remember(key, entry)

        if entry is None:
            logger.debug(f"[Cache] MISS: {key}")
            return default

        if entry.is_expired(now):
            logger.debug(f"[Cache] EXPIRED: {key}")
            self.remove(key)
            return default

        logger.debug(f"[Cache] HIT: {key}")
        return entry.value

    def get_or_set(self, key: str, fetcher: Callable[[], Any], ttl_ms: Optional[int] = None) -> Any:
        """
        캐시 조회, 없으면 fetcher() 결과를 저장 후 반환

        fetcher 예외는 그대로 전파
        """
        cached = self.get(key, _MISSING)
        if cached is not _MISSING:
            return cached

        value = fetcher()
        self.set(key, value, ttl_ms)
        return value

    def remove(self, key: str):
        """두 계층에서 키 삭제"""
        self._memory.pop(key, None)
        try:
            self.store.remove_item(self._durable_key(key))
        except StorageError as e:
            logger.warning(f"[Cache] 영속 캐시 삭제 실패 ({key}): {e}")

    def clear(self):
        """캐시 전체 삭제 (영속 계층은 prefix가 붙은 키만)"""
        self._memory.clear()
        prefix = self.config.KEY_PREFIX
        try:
            for durable_key in list(self.store.keys()):
                if durable_key.startswith(prefix):
                    self.store.remove_item(durable_key)
        except StorageError as e:
            logger.warning(f"[Cache] 영속 캐시 전체 삭제 실패: {e}")

    def invalidate_pattern(self, matcher: KeyMatcher) -> int:
        """
        패턴에 매칭되는 키를 두 계층에서 삭제

        Args:
            matcher: regex 문자열, 컴파일된 패턴(search 기준) 또는 predicate.
                     영속 계층은 prefix를 뗀 키로 매칭

        Returns:
            삭제된 논리 키 개수
        """
        predicate = _as_predicate(matcher)
        removed = set()

        for key in list(self._memory.keys()):
            if predicate(key):
                del self._memory[key]
                removed.add(key)

        prefix = self.config.KEY_PREFIX
        try:
            for durable_key in list(self.store.keys()):
                if not durable_key.startswith(prefix):
                    continue
                key = durable_key[len(prefix):]
                if predicate(key):
                    self.store.remove_item(durable_key)
                    removed.add(key)
        except StorageError as e:
            logger.warning(f"[Cache] 영속 캐시 패턴 무효화 실패: {e}")

        logger.info(f"[Cache] Invalidated {len(removed)} keys")
        return len(removed)

    def get_stats(self) -> Dict[str, Any]:
        """메모리 계층 통계"""
        return {
            "memory_size": len(self._memory),
            "memory_keys": list(self._memory.keys()),
        }
