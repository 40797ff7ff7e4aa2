"""
RewardJournalService

보상 일지: 사용자가 날짜별로 정한 자기 보상을 그날의 목표를 모두 달성하면 수령합니다.

목표:
- 데일리 윈 4종 모두 달성
- 능력치 5종 각각 완료한 플래너 작업 1개 이상
- 메인 퀘스트, 사이드 퀘스트, 데일리 퀘스트 각각 1개 이상 완료
"""
import logging
from datetime import date, datetime, timedelta
from typing import Optional

from exceptions import InvalidArgumentError, InvalidTransitionError, RewardNotFoundError
from service.daily.daily_win_service import DailyWinService
from service.event.event_bus import EventBus, GameEventType
from service.planner.task_service import TaskService
from service.quest.quest_service import QuestService
from service.result import DailyCompletionDetails, RewardJournalStats
from service.state.enums import DailyWinCategory, Stat
from service.state.game_state import GameState
from service.state.journal_state import RewardJournalEntry
from service.state.quest_state import new_id

logger = logging.getLogger(__name__)

# 주간 통계 집계 기간
WEEKLY_STATS_DAYS = 7


class RewardJournalService:
    """보상 일지 비즈니스 로직"""

    def __init__(
        self,
        state: GameState,
        bus: EventBus,
        quests: QuestService,
        tasks: TaskService,
        daily_wins: DailyWinService,
    ):
        self.state = state
        self.bus = bus
        self.quests = quests
        self.tasks = tasks
        self.daily_wins = daily_wins

    # =========================================================================
    # 명령
    # =========================================================================

    def set_daily_reward(self, day: date, custom_reward: str, now: datetime) -> RewardJournalEntry:
        """
        날짜별 보상 설정

        같은 날짜에 이미 보상이 있으면 내용을 바꿉니다. 수령한 보상은 바꿀 수 없습니다.

        Raises:
            InvalidArgumentError: 빈 보상, 지난 날짜
            InvalidTransitionError: 이미 수령한 보상
        """
        if not custom_reward or not custom_reward.strip():
            raise InvalidArgumentError("custom_reward", "보상 내용이 비어 있습니다")
        if day < now.date():
            raise InvalidArgumentError("day", "지난 날짜에는 보상을 설정할 수 없습니다")

        entry = self.state.find_reward_entry(day)
        if entry is not None and entry.claimed:
            raise InvalidTransitionError("보상을 변경", "이미 수령한 보상입니다")

        if entry is None:
            entry = RewardJournalEntry(id=new_id(), day=day, custom_reward=custom_reward.strip())
            self.state.reward_journal.append(entry)
        else:
            entry.custom_reward = custom_reward.strip()
            entry.completed = False

        logger.info(f"Daily reward set for {day}")
        self.bus.emit(GameEventType.REWARD_SET, entry=entry)
        return entry

    def claim_daily_reward(self, day: date, now: datetime) -> RewardJournalEntry:
        """
        보상 수령

        오늘 목표를 모두 달성한 경우에만 수령할 수 있습니다.

        Raises:
            InvalidArgumentError: 미래 날짜
            RewardNotFoundError: 설정된 보상 없음
            InvalidTransitionError: 이미 수령했거나 목표 미달성
        """
        if day > now.date():
            raise InvalidArgumentError("day", "미래의 보상은 수령할 수 없습니다")

        entry = self.state.find_reward_entry(day)
        if entry is None:
            raise RewardNotFoundError(day)
        if entry.claimed:
            raise InvalidTransitionError("보상을 수령", "이미 수령한 보상입니다")
        if not self.check_daily_completion(day, now):
            raise InvalidTransitionError("보상을 수령", "오늘의 목표를 모두 달성하지 않았습니다")

        entry.completed = True
        entry.claimed = True
        entry.claimed_at = now

        logger.info(f"Daily reward claimed for {day}")
        self.bus.emit(GameEventType.REWARD_CLAIMED, entry=entry)
        return entry

    # =========================================================================
    # 조회
    # =========================================================================

    def get_daily_reward_entry(self, day: date) -> Optional[RewardJournalEntry]:
        return self.state.find_reward_entry(day)

    def check_daily_completion(self, day: date, now: datetime) -> bool:
        """오늘의 목표 달성 여부 (오늘이 아닌 날짜는 항상 False)"""
        if day != now.date():
            return False
        return self.get_daily_completion_details(day, now).overall

    def get_daily_completion_details(self, day: date, now: datetime) -> DailyCompletionDetails:
        """
        날짜별 목표 달성 현황

        오늘의 데일리 윈은 현재 달성 상태를, 다른 날짜는 그날 완료한 데일리 윈 작업을 기준으로 합니다.
        """
        completed_tasks = self.tasks.get_completed_tasks_for_date(day)
        task_categories = {task.category for task in completed_tasks if isinstance(task.category, Stat)}
        task_daily_wins = {
            task.category for task in completed_tasks if isinstance(task.category, DailyWinCategory)
        }

        if day == now.date():
            won = [c for c in DailyWinCategory if self.daily_wins.is_daily_win_completed(c)]
        else:
            won = [c for c in DailyWinCategory if c in task_daily_wins]

        status = self.quests.get_daily_quest_completion_status(datetime.combine(day, datetime.min.time()))
        return DailyCompletionDetails(
            completed_daily_wins=won,
            missing_daily_wins=[c for c in DailyWinCategory if c not in won],
            completed_attributes=[s for s in Stat if s in task_categories],
            missing_attributes=[s for s in Stat if s not in task_categories],
            main_quest=status.main_completed >= 1,
            side_quest=status.side_completed >= 1,
            daily_quests=status.daily_completed >= 1,
        )

    def get_reward_journal_stats(self, now: datetime) -> RewardJournalStats:
        """
        보상 일지 통계

        - 연속 수령: 날짜순으로 이어진 수령 기록 수 (오늘 아직 수령하지 않은 보상은 연속을 끊지 않음)
        - 주간: 최근 7일 동안 수령한 수와 수령하지 못하고 지나간 수
        """
        today = now.date()
        journal = sorted(self.state.reward_journal, key=lambda entry: entry.day)

        settled = [entry for entry in journal if entry.day < today or (entry.day == today and entry.claimed)]

        current_streak = 0
        for entry in reversed(settled):
            if not entry.claimed:
                break
            current_streak += 1

        longest_streak = 0
        run = 0
        for entry in settled:
            run = run + 1 if entry.claimed else 0
            longest_streak = max(longest_streak, run)

        week_from = today - timedelta(days=WEEKLY_STATS_DAYS)
        weekly = [entry for entry in settled if entry.day >= week_from]

        return RewardJournalStats(
            total_rewards=len(journal),
            claimed_rewards=sum(1 for entry in journal if entry.claimed),
            current_streak=current_streak,
            longest_streak=longest_streak,
            weekly_earned=sum(1 for entry in weekly if entry.claimed),
            weekly_missed=sum(1 for entry in weekly if not entry.claimed),
        )
