"""
상품 데이터 모델

카탈로그 제공자가 넘겨주는 상품 (이 서브시스템에서는 읽기 전용)

카탈로그 스키마 예시:
{
  "id": "p-101",
  "category": "robes",
  "brand": "Kreyol",
  "tags": ["coton", "ete"],
  "price": 4500,
  "rating": 4.5,
  "sales": 120,
  "name": "Robe madras"
}

NOTE: id는 항상 str로 정규화 (최근 본 상품 목록과 비교하기 위함)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

_KNOWN_FIELDS = ("id", "category", "brand", "tags", "price", "rating", "sales")


@dataclass(frozen=True)
class Product:
    """카탈로그 상품"""
    id: str
    price: Optional[float] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    rating: Optional[float] = None
    sales: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict, hash=False)    # name, image 등 나머지 필드

    def __post_init__(self):
        if not isinstance(self.id, str):
            object.__setattr__(self, "id", str(self.id))
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = dict(self.extra)
        result["id"] = self.id
        if self.price is not None:
            result["price"] = self.price
        if self.category is not None:
            result["category"] = self.category
        if self.brand is not None:
            result["brand"] = self.brand
        if self.tags:
            result["tags"] = list(self.tags)
        if self.rating is not None:
            result["rating"] = self.rating
        if self.sales is not None:
            result["sales"] = self.sales
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Product":
        return cls(
            id=data["id"],
            price=data.get("price"),
            category=data.get("category"),
            brand=data.get("brand"),
            tags=tuple(data.get("tags") or ()),
            rating=data.get("rating"),
            sales=data.get("sales"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_FIELDS},
        )


ProductLike = Union[Product, Mapping[str, Any]]


def as_product(item: ProductLike) -> Product:
    """Product 또는 dict를 Product로 변환"""
    if isinstance(item, Product):
        return item
    return Product.from_dict(item)


def as_products(items) -> List[Product]:
    return [as_product(item) for item in items]
