"""
Key-Value Store Interface

브라우저 localStorage에 대응하는 동기식 영속 저장소 추상화

NOTE: 모든 구현체는 실패 시 StorageError를 raise 해야 함
      호출 측(CacheStore, EventTracker)이 항상 잡아서 로그만 남김
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional


class StorageError(Exception):
    """영속 저장소 오류 (용량 초과, 비활성화 등)"""


class StorageQuotaExceededError(StorageError):
    """저장 용량 초과"""


class StorageUnavailableError(StorageError):
    """저장소 사용 불가 (비활성화, 프라이빗 모드 등)"""


@dataclass
class StorageResult:
    """
    영속화 결과

    정상 흐름을 막지 않으며, 호출자가 관측 목적으로만 확인
    """
    ok: bool
    error: Optional[StorageError] = None

    @classmethod
    def success(cls) -> "StorageResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: StorageError) -> "StorageResult":
        return cls(ok=False, error=error)


class KeyValueStore(ABC):
    """
    영속 Key-Value 저장소 (Abstract)

    사용 예시:
        store = MemoryKeyValueStore()
        store.set_item("cache_products", '{"value": []}')
        raw = store.get_item("cache_products")
        for key in store.keys():
            ...
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        값 조회

        Returns:
            저장된 문자열 또는 None (없을 경우)
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str):
        """
        값 저장

        Raises:
            StorageError: 저장 실패
        """
        pass

    @abstractmethod
    def remove_item(self, key: str):
        """값 삭제 (없는 키면 무시)"""
        pass

    @abstractmethod
    def keys(self) -> Iterable[str]:
        """저장된 모든 키"""
        pass
