"""
SoloistEngine

성장/페널티 규칙 엔진의 공개 진입점입니다.

모든 명령은 하나의 재진입 잠금 아래에서 동기적으로 실행되고,
성공한 명령 뒤에는 스냅샷이 비동기로 저장됩니다. 메모리 상태가 항상 기준입니다.
"""
import logging
import threading
from datetime import date, datetime
from typing import Optional

from decorator.command import engine_command, engine_query
from exceptions import InvalidArgumentError
from service.clock import Clock, SystemClock
from service.daily.daily_win_service import DailyWinService
from service.event.event_bus import EventBus
from service.journal.reward_journal_service import RewardJournalService
from service.penalty.penalty_service import PenaltyService
from service.persistence.snapshot_writer import SnapshotWriter
from service.persistence.state_store import InMemoryStateStore, StateStore
from service.planner.task_service import TaskService
from service.progression.progression_service import GoldFormula, ProgressionCalculator
from service.quest.quest_service import QuestService
from service.result import DailyCompletionDetails, DailyQuestCompletionStatus, RewardJournalStats
from service.scheduler.reset_scheduler import ResetScheduler
from service.state.enums import DailyWinCategory, DangerLevel, Difficulty, Stat
from service.state.game_state import GameState
from service.state.journal_state import RewardJournalEntry
from service.state.quest_state import TaskCategory
from service.state.task_state import PlannerTask

logger = logging.getLogger(__name__)

# update_user 로 수정 가능한 프로필 필드
EDITABLE_USER_FIELDS = frozenset({"name"})


class SoloistEngine:

    def __init__(
        self,
        state: Optional[GameState] = None,
        clock: Optional[Clock] = None,
        store: Optional[StateStore] = None,
        gold_formula: Optional[GoldFormula] = None,
    ):
        self.clock = clock or SystemClock()
        self.state = state or GameState.new(self.clock.now())
        self.lock = threading.RLock()
        self.bus = EventBus()

        self.progression = ProgressionCalculator(self.state, self.bus, gold_formula=gold_formula)
        self.daily_wins = DailyWinService(self.state, self.bus, self.progression)
        self.quests = QuestService(self.state, self.bus, self.progression)
        self.tasks = TaskService(self.state, self.bus, self.progression, self.daily_wins)
        self.penalty = PenaltyService(self.state, self.bus, self.quests, self.tasks)
        self.progression.multiplier_provider = self.penalty.get_exp_modifier
        self.journal = RewardJournalService(self.state, self.bus, self.quests, self.tasks, self.daily_wins)
        self.scheduler = ResetScheduler(self.state, self.penalty, self.daily_wins)

        self.writer = SnapshotWriter(store or InMemoryStateStore())

    @classmethod
    async def load(
        cls,
        store: StateStore,
        clock: Optional[Clock] = None,
        gold_formula: Optional[GoldFormula] = None,
    ) -> "SoloistEngine":
        """
        저장소에서 상태를 불러와 엔진 생성

        저장된 상태가 없으면 새 게임을 시작합니다. 로드 직후 저주 상태 점검을 실행합니다.

        Raises:
            PersistenceUnavailableError: 저장소에 접근할 수 없음
            SnapshotVersionError: 지원하지 않는 스냅샷 버전
        """
        data = await store.load()
        state = GameState.from_dict(data) if data is not None else None
        engine = cls(state=state, clock=clock, store=store, gold_formula=gold_formula)
        if state is None:
            logger.info("No saved state; starting a new game")
        engine.check_curse_status()
        return engine

    # =========================================================================
    # 저장
    # =========================================================================

    def snapshot(self) -> dict:
        with self.lock:
            return self.state.to_dict()

    def persist(self) -> None:
        self.writer.submit(self.snapshot())

    async def flush(self) -> bool:
        return await self.writer.flush()

    # =========================================================================
    # 퀘스트
    # =========================================================================

    @engine_command()
    def add_quest(
        self,
        now: datetime,
        title: str,
        description: str = "",
        is_main_quest: bool = False,
        exp_reward: int = 0,
        deadline: Optional[datetime] = None,
        difficulty: Difficulty = Difficulty.NORMAL,
        category: Optional[DailyWinCategory] = None,
        is_daily: bool = False,
    ):
        return self.quests.add_quest(
            now, title, description, is_main_quest, exp_reward, deadline, difficulty, category, is_daily
        )

    @engine_command()
    def start_quest(self, now: datetime, quest_id: str):
        return self.quests.start_quest(quest_id, now)

    @engine_command()
    def complete_quest(self, now: datetime, quest_id: str):
        return self.quests.complete_quest(quest_id, now)

    @engine_command()
    def add_quest_task(
        self,
        now: datetime,
        quest_id: str,
        title: str,
        description: str = "",
        category: Optional[TaskCategory] = None,
        difficulty: Optional[Difficulty] = None,
        deadline: Optional[datetime] = None,
    ):
        return self.quests.add_quest_task(quest_id, title, description, category, difficulty, deadline)

    @engine_command()
    def complete_quest_task(self, now: datetime, quest_id: str, task_id: str):
        return self.quests.complete_quest_task(quest_id, task_id, now)

    @engine_command()
    def delete_quest(self, now: datetime, quest_id: str):
        return self.quests.delete_quest(quest_id)

    @engine_query
    def can_start_quest(self, now: datetime, quest_id: str) -> bool:
        return self.quests.can_start_quest(quest_id, now)

    @engine_query
    def can_complete_quest(self, now: datetime, quest_id: str) -> bool:
        return self.quests.can_complete_quest(quest_id, now)

    @engine_query
    def get_daily_quest_completion_status(self, now: datetime) -> DailyQuestCompletionStatus:
        return self.quests.get_daily_quest_completion_status(now)

    @engine_query
    def has_reached_daily_limit(self, now: datetime, is_main_quest: bool) -> bool:
        return self.quests.has_reached_daily_limit(is_main_quest, now)

    # =========================================================================
    # 플래너 작업
    # =========================================================================

    @engine_command()
    def add_task(
        self,
        now: datetime,
        title: str,
        category: TaskCategory,
        difficulty: Difficulty = Difficulty.NORMAL,
        scheduled_for: Optional[date] = None,
        deadline: Optional[datetime] = None,
        description: str = "",
    ):
        return self.tasks.add_task(now, title, category, difficulty, scheduled_for, deadline, description)

    @engine_command()
    def delete_task(self, now: datetime, task_id: str):
        return self.tasks.delete_task(task_id)

    @engine_command()
    def complete_task(self, now: datetime, task_id: str):
        return self.tasks.complete_task(task_id, now)

    @engine_query
    def get_tasks_for_date(self, now: datetime, day: Optional[date] = None) -> list[PlannerTask]:
        return self.tasks.get_tasks_for_date(day or now.date())

    @engine_query
    def get_completed_tasks_for_date(self, now: datetime, day: Optional[date] = None) -> list[PlannerTask]:
        return self.tasks.get_completed_tasks_for_date(day or now.date())

    @engine_query
    def get_incomplete_tasks_for_date(self, now: datetime, day: Optional[date] = None) -> list[PlannerTask]:
        return self.tasks.get_incomplete_tasks_for_date(day or now.date())

    # =========================================================================
    # 성장
    # =========================================================================

    @engine_command()
    def add_exp(self, now: datetime, amount: int):
        return self.progression.add_exp(amount)

    @engine_command()
    def add_gold(self, now: datetime, amount: int):
        return self.progression.add_gold(amount)

    @engine_command()
    def increase_stat_free(self, now: datetime, stat: Stat, amount: int):
        return self.progression.increase_stat_free(stat, amount)

    # =========================================================================
    # 사용자 / 데일리 윈
    # =========================================================================

    @engine_command()
    def update_user(self, now: datetime, **fields):
        """프로필 필드만 수정 가능 (레벨, 경험치 등 규칙이 관리하는 필드는 거부)"""
        for field_name in fields:
            if field_name not in EDITABLE_USER_FIELDS:
                raise InvalidArgumentError(field_name, "직접 수정할 수 없는 필드입니다")

        name = fields.get("name")
        if name is not None:
            if not isinstance(name, str) or not name.strip():
                raise InvalidArgumentError("name", "이름이 비어 있습니다")
            self.state.user.name = name.strip()
        return self.state.user

    @engine_command()
    def update_streak(self, now: datetime):
        return self.daily_wins.update_streak(now)

    @engine_command(sweep=False)
    def check_reset_daily_wins(self, now: datetime):
        return self.daily_wins.check_reset_daily_wins(now)

    @engine_query
    def is_daily_win_completed(self, now: datetime, category: DailyWinCategory) -> bool:
        return self.daily_wins.is_daily_win_completed(category)

    @engine_query
    def are_all_daily_wins_completed(self, now: datetime) -> bool:
        return self.daily_wins.are_all_daily_wins_completed()

    # =========================================================================
    # 보상 일지
    # =========================================================================

    @engine_command()
    def set_daily_reward(self, now: datetime, day: date, custom_reward: str):
        return self.journal.set_daily_reward(day, custom_reward, now)

    @engine_command()
    def claim_daily_reward(self, now: datetime, day: Optional[date] = None):
        return self.journal.claim_daily_reward(day or now.date(), now)

    @engine_query
    def get_daily_reward_entry(self, now: datetime, day: Optional[date] = None) -> Optional[RewardJournalEntry]:
        return self.journal.get_daily_reward_entry(day or now.date())

    @engine_query
    def check_daily_completion(self, now: datetime, day: Optional[date] = None) -> bool:
        return self.journal.check_daily_completion(day or now.date(), now)

    @engine_query
    def get_daily_completion_details(self, now: datetime, day: Optional[date] = None) -> DailyCompletionDetails:
        return self.journal.get_daily_completion_details(day or now.date(), now)

    @engine_query
    def get_reward_journal_stats(self, now: datetime) -> RewardJournalStats:
        return self.journal.get_reward_journal_stats(now)

    # =========================================================================
    # 페널티 / 스케줄
    # =========================================================================

    @engine_command(sweep=False)
    def check_curse_status(self, now: datetime):
        self.penalty.check_curse_status(now)
        return self.penalty.danger_level()

    @engine_query
    def can_use_redemption(self, now: datetime) -> bool:
        return self.penalty.can_use_redemption()

    @engine_query
    def danger_level(self, now: datetime) -> DangerLevel:
        return self.penalty.danger_level()

    @engine_query
    def get_exp_modifier(self, now: datetime) -> float:
        return self.penalty.get_exp_modifier()

    @engine_command(sweep=False)
    def on_tick(self, now: datetime):
        self.scheduler.on_tick(now)
