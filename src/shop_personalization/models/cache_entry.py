"""
캐시 엔트리 데이터 모델
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class CacheEntry:
    """
    캐시 엔트리

    Attributes:
        value: 캐시된 값 (영속 계층에는 JSON으로 저장)
        expiry: 만료 시각 (ms)
        timestamp: 저장 시각 (ms)
    """
    value: Any
    expiry: int
    timestamp: int

    def is_expired(self, now: int) -> bool:
        """now > expiry 이면 물리적으로 남아 있어도 없는 것으로 취급"""
        return now > self.expiry

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "expiry": self.expiry,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheEntry":
        return cls(
            value=data["value"],
            expiry=int(data["expiry"]),
            timestamp=int(data.get("timestamp", 0)),
        )
