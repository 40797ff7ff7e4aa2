"""
ResetScheduler

주기 틱마다 페널티 점검, 일일 리셋, 주간 리셋을 순서대로 호출합니다.
명령/조회 직전에는 catch_up 으로 틱 사이에 지난 마감과 날짜 변경을 반영합니다.
자체 비즈니스 로직은 없으며 날짜/주 경계만 추적합니다.
"""
import logging
from datetime import datetime

from service.daily.daily_win_service import DailyWinService
from service.penalty.penalty_service import PenaltyService
from service.quest.quest_rules import completion_grace
from service.scheduler.calendar import week_start
from service.state.game_state import GameState

logger = logging.getLogger(__name__)


class ResetScheduler:

    def __init__(self, state: GameState, penalty: PenaltyService, daily_wins: DailyWinService):
        self.state = state
        self.penalty = penalty
        self.daily_wins = daily_wins

    def catch_up(self, now: datetime) -> bool:
        """
        명령/조회 직전 점검

        완료 허용 시간을 넘긴 마감을 처리하고, 날짜가 바뀌었으면 데일리 윈을 초기화합니다.
        주간 리셋은 틱에서만 실행됩니다.

        Returns:
            상태가 바뀌었으면 True
        """
        swept = self.penalty.check_curse_status(now, quest_grace=completion_grace())
        reset = self.daily_wins.check_reset_daily_wins(now)
        return swept or reset

    def on_tick(self, now: datetime) -> None:
        """
        틱 처리

        1. 저주 상태 점검 (마감 처리 포함, 지난 주 마감 실패도 주간 리셋 전에 반영)
        2. 날짜가 바뀌면 데일리 윈 초기화
        3. 주가 바뀌면 (일요일 시작) 주간 페널티 리셋
        """
        self.penalty.check_curse_status(now)

        today = now.date()
        if self.state.last_tick_day != today:
            self.daily_wins.check_reset_daily_wins(now)
            self.state.last_tick_day = today

        current_week = week_start(today)
        last_week = self.state.last_weekly_reset_week
        if last_week is None:
            self.state.last_weekly_reset_week = current_week
        elif last_week != current_week:
            logger.info(f"Week rollover: {last_week} -> {current_week}")
            self.penalty.weekly_reset(now)
            self.state.last_weekly_reset_week = current_week
