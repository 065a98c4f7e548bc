"""
시간 유틸리티

모든 타임스탬프는 epoch 기준 밀리초(int)
"""

import time
from typing import Callable

Clock = Callable[[], int]


def now_ms() -> int:
    """현재 시각 (ms)"""
    return int(time.time() * 1000)
