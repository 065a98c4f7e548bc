"""
개인화/캐시 서브시스템 설정

모든 상수 및 설정값을 중앙 관리
환경변수(.env 포함) 및 YAML 파일로 오버라이드 가능
"""

import os
from pathlib import Path
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

# .env 파일 로드
load_dotenv()


def get_project_root() -> Path:
    """
    프로젝트 루트 디렉토리 반환

    src/shop_personalization/config.py 기준으로 상위 2단계
    """
    return Path(__file__).parent.parent.parent


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


@dataclass
class CacheConfig:
    """캐시 설정"""
    # 메모리(fast tier) 최대 키 개수
    MEMORY_CAPACITY: int = 50

    # 기본 TTL (ms, 5분)
    DEFAULT_TTL_MS: int = 5 * 60 * 1000

    # 영속 저장소 키 prefix
    KEY_PREFIX: str = "cache_"

    def __post_init__(self):
        """환경변수에서 오버라이드"""
        self.MEMORY_CAPACITY = _env_int("CACHE_MEMORY_CAPACITY", self.MEMORY_CAPACITY)
        self.DEFAULT_TTL_MS = _env_int("CACHE_DEFAULT_TTL_MS", self.DEFAULT_TTL_MS)
        self.KEY_PREFIX = os.getenv("CACHE_KEY_PREFIX", self.KEY_PREFIX)


@dataclass
class TrackerConfig:
    """이벤트 트래커 설정"""
    # 추천 상태 저장 키 (events + preferences + recentlyViewed)
    STATE_KEY: str = "ud_recommendation_events"

    # 영속화 시 유지하는 최근 이벤트 수
    MAX_PERSISTED_EVENTS: int = 100

    # 최근 본 상품 최대 개수
    MAX_RECENT_ITEMS: int = 20

    def __post_init__(self):
        self.STATE_KEY = os.getenv("RECOMMENDATION_STATE_KEY", self.STATE_KEY)


@dataclass
class RecommendationConfig:
    """추천 설정"""
    DEFAULT_LIMIT: int = 10
    SIMILAR_LIMIT: int = 4
    BOUGHT_TOGETHER_LIMIT: int = 3
    BOUGHT_TOGETHER_MIN_RATING: float = 4.0
    BROWSING_LIMIT: int = 6

    # 서비스를 init()한 스레드 외의 호출 차단
    ENFORCE_SINGLE_THREAD: bool = True


@dataclass
class StorageConfig:
    """영속 저장소 설정"""
    # "memory", "json", "sqlite"
    BACKEND: str = "memory"

    DATA_DIR: Path = None
    SQLITE_FILENAME: str = "kv_store.sqlite3"

    def __post_init__(self):
        """환경변수 또는 기본값으로 초기화"""
        self.BACKEND = os.getenv("STORAGE_BACKEND", self.BACKEND)
        default_dir = self.DATA_DIR or get_project_root() / "data"
        self.DATA_DIR = Path(os.getenv("DATA_DIR", default_dir))

    @property
    def sqlite_path(self) -> Path:
        return self.DATA_DIR / self.SQLITE_FILENAME


@dataclass
class PersonalizationConfig:
    """통합 설정"""
    cache: CacheConfig = field(default_factory=CacheConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    recommendation: RecommendationConfig = field(default_factory=RecommendationConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    @classmethod
    def load(cls) -> "PersonalizationConfig":
        """환경변수 기반 전체 설정 로드"""
        return cls()

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "PersonalizationConfig":
        """
        yaml 파일에서 설정 로드

        형식:
            cache:
              MEMORY_CAPACITY: 100
            storage:
              BACKEND: json

        Raises:
            ValueError: 알 수 없는 그룹 또는 필드
        """
        with open(yaml_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        config = cls.load()
        config.apply_overrides(raw)
        return config

    def apply_overrides(self, raw: Dict[str, Any]):
        """{group: {FIELD: value}} 형식의 값 덮어쓰기"""
        group_names = {f.name for f in fields(self)}
        for group_name, values in raw.items():
            if group_name not in group_names:
                raise ValueError(f"알 수 없는 설정 그룹: {group_name}")
            group = getattr(self, group_name)
            field_names = {f.name for f in fields(group)}
            for name, value in (values or {}).items():
                if name not in field_names:
                    raise ValueError(f"알 수 없는 설정 필드: {group_name}.{name}")
                if name == "DATA_DIR":
                    value = Path(value)
                setattr(group, name, value)


# 전역 설정 인스턴스 (lazy init)
_config: Optional[PersonalizationConfig] = None


def get_config() -> PersonalizationConfig:
    """
    전체 설정 반환

    사용 예시:
        from shop_personalization.config import get_config
        config = get_config()
        print(config.cache.MEMORY_CAPACITY)
    """
    global _config
    if _config is None:
        _config = PersonalizationConfig.load()
    return _config
