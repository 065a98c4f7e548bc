"""
In-Memory Key-Value Store

프로세스 메모리 dict 기반 저장소 (개발/테스트용)
"""

from typing import Dict, Iterable, List, Optional

from .base import (
    KeyValueStore,
    StorageQuotaExceededError,
    StorageUnavailableError,
)


class MemoryKeyValueStore(KeyValueStore):
    """
    dict 기반 저장소

    quota_bytes 지정 시 전체 크기(키+값 문자 수)가 초과되면
    StorageQuotaExceededError (브라우저 저장소 가득 참 재현)
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self._data: Dict[str, str] = {}
        self.quota_bytes = quota_bytes

    def _size_with(self, key: str, value: str) -> int:
        size = sum(len(k) + len(v) for k, v in self._data.items() if k != key)
        return size + len(key) + len(value)

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str):
        if self.quota_bytes is not None and self._size_with(key, value) > self.quota_bytes:
            raise StorageQuotaExceededError(
                f"quota exceeded: {key} ({len(value)} chars, quota {self.quota_bytes})"
            )
        self._data[key] = value

    def remove_item(self, key: str):
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def __len__(self) -> int:
        return len(self._data)


class UnavailableKeyValueStore(KeyValueStore):
    """
    테스트용: 항상 실패하는 저장소

    모든 호출에서 StorageUnavailableError (저장소 비활성화 재현)
    """

    def get_item(self, key: str) -> Optional[str]:
        raise StorageUnavailableError("storage disabled")

    def set_item(self, key: str, value: str):
        raise StorageUnavailableError("storage disabled")

    def remove_item(self, key: str):
        raise StorageUnavailableError("storage disabled")

    def keys(self) -> Iterable[str]:
        raise StorageUnavailableError("storage disabled")
