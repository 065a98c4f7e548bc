"""
선호도 프로필 데이터 모델

행동 이벤트에서 누적한 방문자별 category/brand/tag/price bucket 가중치
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .event import UserEvent


class PriceBucket(Enum):
    """가격대 구간"""
    BUDGET = "budget"       # < 1000
    MID = "mid"             # < 5000
    PREMIUM = "premium"     # < 20000
    LUXURY = "luxury"       # 그 이상


def price_bucket_for(price: float) -> PriceBucket:
    """가격 -> price bucket"""
    if price < 1000:
        return PriceBucket.BUDGET
    if price < 5000:
        return PriceBucket.MID
    if price < 20000:
        return PriceBucket.PREMIUM
    return PriceBucket.LUXURY


def _add(weights: Dict[Any, float], key: Any, amount: float):
    weights[key] = weights.get(key, 0) + amount


@dataclass
class PreferenceProfile:
    """
    방문자 선호도 프로필

    모든 가중치는 가산 누적만 되며 감쇠하지 않음.
    clear_user_data 외에는 초기화되지 않음.
    """
    categories: Dict[str, float] = field(default_factory=dict)
    brands: Dict[str, float] = field(default_factory=dict)
    tags: Dict[str, float] = field(default_factory=dict)
    price_ranges: Dict[PriceBucket, float] = field(default_factory=dict)

    def apply(self, event: "UserEvent"):
        """
        이벤트 가중치를 각 facet에 누적

        한 이벤트의 모든 facet은 동일한 가중치를 받음 (facet 수로 나누지 않음)
        """
        weight = event.kind.weight

        if event.category:
            _add(self.categories, event.category, weight)
        if event.brand:
            _add(self.brands, event.brand, weight)
        for tag in event.tags:
            _add(self.tags, tag, weight)

        bucket = event.price_bucket()
        if bucket is not None:
            _add(self.price_ranges, bucket, weight)

    def is_empty(self) -> bool:
        return not (self.categories or self.brands or self.tags or self.price_ranges)

    def copy(self) -> "PreferenceProfile":
        return PreferenceProfile(
            categories=dict(self.categories),
            brands=dict(self.brands),
            tags=dict(self.tags),
            price_ranges=dict(self.price_ranges),
        )

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "categories": dict(self.categories),
            "brands": dict(self.brands),
            "tags": dict(self.tags),
            "priceRanges": {b.value: w for b, w in self.price_ranges.items()},
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PreferenceProfile":
        data = data or {}
        price_ranges = {}
        for name, weight in (data.get("priceRanges") or {}).items():
            # 알 수 없는 bucket은 버림
            try:
                bucket = PriceBucket(name)
            except ValueError:
                continue
            price_ranges[bucket] = float(weight)

        return cls(
            categories={k: float(v) for k, v in (data.get("categories") or {}).items()},
            brands={k: float(v) for k, v in (data.get("brands") or {}).items()},
            tags={k: float(v) for k, v in (data.get("tags") or {}).items()},
            price_ranges=price_ranges,
        )
