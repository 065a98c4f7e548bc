"""
Key-Value Store Factory

설정값(StorageConfig.BACKEND)에 따라 저장소 구현체 생성
"""

from enum import Enum
from typing import Optional

from ..config import StorageConfig
from .base import KeyValueStore


class StorageBackend(Enum):
    """지원하는 저장소 백엔드"""
    MEMORY = "memory"
    JSON = "json"
    SQLITE = "sqlite"


class KeyValueStoreFactory:
    """
    저장소 인스턴스 생성 팩토리

    사용 예시:
        store = KeyValueStoreFactory.create(StorageBackend.JSON, StorageConfig())
        store = KeyValueStoreFactory.from_config()
    """

    @staticmethod
    def create(backend: StorageBackend, config: Optional[StorageConfig] = None) -> KeyValueStore:
        """
        저장소 인스턴스 생성

        Args:
            backend: 저장소 백엔드
            config: 경로 설정

        Returns:
            KeyValueStore 구현체
        """
        config = config or StorageConfig()

        if backend == StorageBackend.MEMORY:
            from .memory_store import MemoryKeyValueStore
            return MemoryKeyValueStore()

        elif backend == StorageBackend.JSON:
            from .json_store import JsonFileKeyValueStore
            return JsonFileKeyValueStore(config.DATA_DIR / "kv")

        elif backend == StorageBackend.SQLITE:
            from .sqlite_store import SqliteKeyValueStore
            config.DATA_DIR.mkdir(parents=True, exist_ok=True)
            return SqliteKeyValueStore(config.sqlite_path)

        else:
            raise ValueError(f"지원하지 않는 저장소 백엔드: {backend}")

    @staticmethod
    def from_config(config: Optional[StorageConfig] = None) -> KeyValueStore:
        """StorageConfig.BACKEND 문자열로 생성"""
        config = config or StorageConfig()
        try:
            backend = StorageBackend(config.BACKEND)
        except ValueError:
            raise ValueError(f"지원하지 않는 저장소 백엔드: {config.BACKEND}") from None
        return KeyValueStoreFactory.create(backend, config)
