"""
DailyWinService

데일리 윈(mental/physical/spiritual/intelligence) 달성, 일일 초기화, 연속 접속을 관리합니다.
"""
import logging
import math
from datetime import datetime

from config import PROGRESSION
from service.event.event_bus import EventBus, GameEventType
from service.progression.progression_service import ProgressionCalculator
from service.scheduler.calendar import is_yesterday
from service.state.enums import DAILY_WIN_STAT, DailyWinCategory
from service.state.game_state import GameState

logger = logging.getLogger(__name__)


class DailyWinService:
    """데일리 윈 / 스트릭 비즈니스 로직"""

    def __init__(self, state: GameState, bus: EventBus, progression: ProgressionCalculator):
        self.state = state
        self.bus = bus
        self.progression = progression

    def is_daily_win_completed(self, category: DailyWinCategory) -> bool:
        return self.state.user.daily_wins.is_completed(category)

    def are_all_daily_wins_completed(self) -> bool:
        return self.state.user.daily_wins.all_completed()

    def mark_daily_win(self, category: DailyWinCategory) -> bool:
        """
        데일리 윈 달성 처리

        하루에 한 번만 달성되며, 달성 시 floor(10 × 페널티 배율) 능력치 경험치를
        매핑된 능력치에 지급합니다.

        Returns:
            이번 호출로 새로 달성되었으면 True
        """
        wins = self.state.user.daily_wins
        if wins.is_completed(category):
            return False

        wins.completed[category] = True
        stat_exp = int(math.floor(PROGRESSION.DAILY_WIN_STAT_EXP * self.progression.multiplier_provider()))
        self.progression.increase_stat_free(DAILY_WIN_STAT[category], stat_exp)

        logger.info(f"Daily win completed: {category.value} (+{stat_exp} {DAILY_WIN_STAT[category].value})")
        self.bus.emit(GameEventType.DAILY_WIN_COMPLETED, category=category, stat_exp=stat_exp)
        return True

    def check_reset_daily_wins(self, now: datetime) -> bool:
        """날짜가 바뀌었으면 데일리 윈 초기화 (같은 날 재호출 시 변화 없음)"""
        user = self.state.user
        today = now.date()
        if user.last_daily_reset == today:
            return False

        user.daily_wins.clear()
        user.last_daily_reset = today
        logger.info(f"Daily wins reset for {today}")
        self.bus.emit(GameEventType.DAILY_RESET, day=today)
        return True

    def update_streak(self, now: datetime) -> int:
        """
        연속 접속 갱신

        - 마지막 접속이 오늘: 변화 없음
        - 어제: +1
        - 그 외: 1로 초기화
        """
        user = self.state.user
        today = now.date()
        last_day = user.last_login.date()

        if last_day == today:
            return user.streak_days

        if is_yesterday(last_day, today):
            user.streak_days += 1
        else:
            user.streak_days = 1

        user.longest_streak = max(user.longest_streak, user.streak_days)
        user.last_login = now
        self.check_reset_daily_wins(now)

        logger.info(f"Streak updated: {user.streak_days} (longest {user.longest_streak})")
        return user.streak_days
