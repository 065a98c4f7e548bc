"""
Event Tracking

행동 이벤트 기록 및 선호도 프로필 관리
"""

from .event_tracker import EventTracker

__all__ = [
    "EventTracker",
]
