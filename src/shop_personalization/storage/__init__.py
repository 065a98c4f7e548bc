"""
Storage Layer

캐시 엔트리와 추천 상태를 보관하는 영속 Key-Value 저장소
"""

from .base import (
    KeyValueStore,
    StorageError,
    StorageQuotaExceededError,
    StorageUnavailableError,
    StorageResult,
)
from .memory_store import MemoryKeyValueStore, UnavailableKeyValueStore
from .json_store import JsonFileKeyValueStore
from .sqlite_store import SqliteKeyValueStore
from .factory import KeyValueStoreFactory, StorageBackend

__all__ = [
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
]
