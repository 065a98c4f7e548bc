"""
행동 이벤트 데이터 모델

UI에서 발생한 사용자 행동(조회, 장바구니, 구매 등)을 기록

영속화 형식 (localStorage 호환):
{
  "type": "purchase",
  "timestamp": 1718000000000,
  "productId": "p-101",
  "category": "robes",
  "brand": "Kreyol",
  "tags": ["coton", "ete"],
  "price": 4500,
  "query": "robe ete"            # search 이벤트만
}
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .preference import PriceBucket, price_bucket_for


class EventKind(Enum):
    """행동 이벤트 종류"""
    VIEW = "view"
    ADD_TO_CART = "add_to_cart"
    PURCHASE = "purchase"
    WISHLIST = "wishlist"
    SEARCH = "search"
    CLICK = "click"
    REVIEW = "review"

    @property
    def weight(self) -> float:
        """선호도 누적 가중치"""
        return EVENT_WEIGHTS[self]

    @classmethod
    def parse(cls, value: Union[str, "EventKind"]) -> "EventKind":
        """
        문자열 또는 EventKind를 EventKind로 변환

        Raises:
            ValueError: 알 수 없는 이벤트 종류
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"지원하지 않는 이벤트 종류: {value!r}") from None


# 이벤트 가중치 (런타임 변경 불가)
EVENT_WEIGHTS: Mapping[EventKind, float] = MappingProxyType({
    EventKind.PURCHASE: 10,
    EventKind.ADD_TO_CART: 5,
    EventKind.WISHLIST: 4,
    EventKind.REVIEW: 3,
    EventKind.SEARCH: 2,
    EventKind.VIEW: 1,
    EventKind.CLICK: 0.5,
})

# payload 필드명 -> UserEvent 필드명
_PAYLOAD_FIELDS = {
    "product_id": "product_id",
    "productId": "product_id",
    "category": "category",
    "brand": "brand",
    "tags": "tags",
    "price": "price",
    "price_range": "price_range",
    "priceRange": "price_range",
    "query": "query",
}


@dataclass(frozen=True)
class UserEvent:
    """
    사용자 행동 이벤트 (불변)

    Attributes:
        kind: 이벤트 종류
        timestamp: 발생 시각 (ms)
        product_id: 대상 상품 ID (조회 이벤트면 최근 본 상품에 반영)
        category / brand / tags: 선호도 프로필에 누적되는 facet
        price: 가격 (price bucket으로 일반화되어 누적)
        price_range: 명시적 price bucket (없으면 price에서 계산)
        query: 검색어 (search 이벤트, 선호도에는 반영되지 않음)
    """
    kind: EventKind
    timestamp: int
    product_id: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    price: Optional[float] = None
    price_range: Optional[PriceBucket] = None
    query: Optional[str] = None

    @classmethod
    def from_payload(
        cls,
        kind: Union[str, EventKind],
        payload: Optional[Dict[str, Any]],
        timestamp: int,
    ) -> "UserEvent":
        """
        trackEvent payload에서 이벤트 생성

        Args:
            kind: 이벤트 종류
            payload: product_id, category, brand, tags, price, price_range, query
            timestamp: 발생 시각 (ms)

        Raises:
            ValueError: 알 수 없는 이벤트 종류 또는 payload 필드
        """
        values: Dict[str, Any] = {}
        for key, value in (payload or {}).items():
            if key not in _PAYLOAD_FIELDS:
                raise ValueError(f"알 수 없는 이벤트 필드: {key!r}")
            if value is not None:
                values[_PAYLOAD_FIELDS[key]] = value

        if "product_id" in values:
            values["product_id"] = str(values["product_id"])
        if "query" in values:
            values["query"] = str(values["query"])
        if "tags" in values:
            values["tags"] = tuple(values["tags"])
        if "price_range" in values:
            values["price_range"] = PriceBucket(values["price_range"])

        return cls(kind=EventKind.parse(kind), timestamp=timestamp, **values)

    def price_bucket(self) -> Optional[PriceBucket]:
        """누적 대상 price bucket"""
        if self.price_range is not None:
            return self.price_range
        if self.price is not None:
            return price_bucket_for(self.price)
        return None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "type": self.kind.value,
            "timestamp": self.timestamp,
        }
        if self.product_id is not None:
            result["productId"] = self.product_id
        if self.category is not None:
            result["category"] = self.category
        if self.brand is not None:
            result["brand"] = self.brand
        if self.tags:
            result["tags"] = list(self.tags)
        if self.price is not None:
            result["price"] = self.price
        if self.price_range is not None:
            result["priceRange"] = self.price_range.value
        if self.query is not None:
            result["query"] = self.query
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserEvent":
        """영속화된 이벤트 복원 (스키마 밖의 필드는 버림)"""
        payload = {k: v for k, v in data.items() if k in _PAYLOAD_FIELDS}
        return cls.from_payload(data["type"], payload, int(data["timestamp"]))
