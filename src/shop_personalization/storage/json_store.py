"""
JSON File Key-Value Store

키마다 하나의 파일로 저장

디렉토리 구조:
data/
└── kv/
    ├── cache_products_catalog.json
    └── ud_recommendation_events.json

NOTE: 키는 percent-encoding 하여 파일명으로 사용
"""

from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import quote, unquote

from loguru import logger

from .base import KeyValueStore, StorageError

_SUFFIX = ".json"


class JsonFileKeyValueStore(KeyValueStore):
    """
    파일 기반 저장소

    사용 예시:
        store = JsonFileKeyValueStore("./data/kv")
        store.set_item("cache_products", '{"value": []}')
    """

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir)
        self._ensure_directories()

    def _ensure_directories(self):
        """기본 디렉토리 생성"""
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # 디렉토리를 만들 수 없어도 생성자는 실패하지 않음 (이후 호출이 StorageError)
            logger.warning(f"[Storage] 디렉토리 생성 실패: {self.base_dir} ({e})")

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{quote(key, safe='')}{_SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            if not path.exists():
                return None
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeError) as e:
            raise StorageError(f"read failed: {key} ({e})") from e

    def set_item(self, key: str, value: str):
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(value)
            tmp_path.replace(path)
        except (OSError, UnicodeError) as e:
            self._discard(tmp_path)
            raise StorageError(f"write failed: {key} ({e})") from e

    def _discard(self, tmp_path: Path):
        """쓰다 만 임시 파일 제거"""
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError as e:
            logger.warning(f"[Storage] 임시 파일 삭제 실패: {tmp_path} ({e})")

    def remove_item(self, key: str):
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"remove failed: {key} ({e})") from e

    def keys(self) -> List[str]:
        try:
            return [unquote(p.name[: -len(_SUFFIX)]) for p in self.base_dir.glob(f"*{_SUFFIX}")]
        except (OSError, UnicodeError) as e:
            raise StorageError(f"list failed: {self.base_dir} ({e})") from e
