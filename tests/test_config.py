from pathlib import Path

import pytest

from shop_personalization.config import (
    CacheConfig,
    PersonalizationConfig,
    StorageConfig,
    TrackerConfig,
    get_config,
)


def test_defaults():
    config = PersonalizationConfig()

    assert config.cache.MEMORY_CAPACITY == 50
    assert config.cache.DEFAULT_TTL_MS == 300_000
    assert config.cache.KEY_PREFIX == "cache_"
    assert config.tracker.STATE_KEY == "ud_recommendation_events"
    assert config.tracker.MAX_PERSISTED_EVENTS == 100
    assert config.tracker.MAX_RECENT_ITEMS == 20
    assert config.recommendation.DEFAULT_LIMIT == 10
    assert config.storage.BACKEND == "memory"
    assert config.storage.DATA_DIR.name == "data"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CACHE_MEMORY_CAPACITY", "5")
    monkeypatch.setenv("CACHE_KEY_PREFIX", "c_")
    monkeypatch.setenv("RECOMMENDATION_STATE_KEY", "state")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))

    assert CacheConfig().MEMORY_CAPACITY == 5
    assert CacheConfig().KEY_PREFIX == "c_"
    assert TrackerConfig().STATE_KEY == "state"
    assert StorageConfig().sqlite_path == tmp_path / "kv_store.sqlite3"


def test_from_yaml(tmp_path):
    path = tmp_path / "personalization.yaml"
    path.write_text(
        "cache:\n"
        "  MEMORY_CAPACITY: 3\n"
        "recommendation:\n"
        "  SIMILAR_LIMIT: 8\n"
        "storage:\n"
        "  BACKEND: sqlite\n"
        f"  DATA_DIR: {tmp_path}\n",
        encoding="utf-8",
    )

    config = PersonalizationConfig.from_yaml(str(path))

    assert config.cache.MEMORY_CAPACITY == 3
    assert config.cache.DEFAULT_TTL_MS == 300_000
    assert config.recommendation.SIMILAR_LIMIT == 8
    assert config.storage.BACKEND == "sqlite"
    assert config.storage.DATA_DIR == Path(tmp_path)


def test_empty_yaml_keeps_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert PersonalizationConfig.from_yaml(str(path)) == PersonalizationConfig()


@pytest.mark.parametrize(
    "overrides",
    [
        {"metrics": {"ENABLED": True}},
        {"cache": {"MAX_SIZE": 10}},
    ],
)
def test_unknown_overrides_rejected(overrides):
    with pytest.raises(ValueError):
        PersonalizationConfig().apply_overrides(overrides)


def test_get_config_is_shared():
    assert get_config() is get_config()
