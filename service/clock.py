"""
시계 (Clock Provider)

엔진은 현재 시각을 항상 주입된 Clock에서 읽습니다.
테스트에서는 FixedClock으로 시각을 고정/이동합니다.
"""
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """시스템 시계 (tz가 주어지면 해당 시간대의 현지 시각, tzinfo 없음)"""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now()
        return datetime.now(self.tz).replace(tzinfo=None)


class FixedClock:
    """고정 시계 (테스트용)"""

    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, **kwargs) -> datetime:
        """timedelta 인자만큼 시각 이동"""
        self._now = self._now + timedelta(**kwargs)
        return self._now
