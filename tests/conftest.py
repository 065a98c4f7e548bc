import pytest

from shop_personalization import (
    MemoryKeyValueStore,
    PersonalizationConfig,
    Product,
    UnavailableKeyValueStore,
)


class ManualClock:
    """테스트용 수동 시계 (ms)"""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int):
        self.now += ms


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "CACHE_MEMORY_CAPACITY",
        "CACHE_DEFAULT_TTL_MS",
        "CACHE_KEY_PREFIX",
        "RECOMMENDATION_STATE_KEY",
        "STORAGE_BACKEND",
        "DATA_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock():
    return ManualClock(start=1_000_000)


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def failing_store():
    return UnavailableKeyValueStore()


@pytest.fixture
def config():
    return PersonalizationConfig()


@pytest.fixture
def catalog():
    return [
        Product(id="1", category="robes", brand="Kreyol", tags=["coton", "ete"], price=4500, rating=4.6, sales=320),
        Product(id="2", category="robes", brand="Lakay", tags=["lin", "ete"], price=5200, rating=4.1, sales=85),
        Product(id="3", category="chaussures", brand="Kreyol", tags=["cuir"], price=3800, rating=4.8, sales=510),
        Product(id="4", category="chemises", brand="Lakay", tags=["coton"], price=2900, rating=3.9, sales=40),
        Product(id="5", category="accessoires", brand="Atelier", tags=["ete"], price=900, rating=4.4, sales=150),
        Product(id="6", category="robes", brand="Maison Jacmel", tags=["soie"], price=24000, rating=4.9, sales=12),
    ]
