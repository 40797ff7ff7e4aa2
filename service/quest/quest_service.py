"""
QuestService

퀘스트 상태 머신 (NotStarted → Started → Completed / Missed) 과
하위 작업, 일일 한도, 마감 처리를 담당합니다.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from config import PROGRESSION, QUEST, RECOVERY_QUEST_TASKS
from exceptions import InvalidArgumentError, InvalidTransitionError, RuleViolationError
from service.event.event_bus import EventBus, GameEventType
from service.progression.progression_service import ProgressionCalculator
from service.quest import quest_rules
from service.result import DailyQuestCompletionStatus
from service.scheduler.calendar import end_of_day
from service.state.enums import (
    DAILY_WIN_STAT, DailyWinCategory, Difficulty, QuestKind, QuotaSlot, Stat,
)
from service.state.game_state import GameState
from service.state.quest_state import Quest, QuestTask, TaskCategory, new_id

logger = logging.getLogger(__name__)


def _quest_kind(is_main_quest: bool, is_daily: bool) -> QuestKind:
    if is_main_quest:
        return QuestKind.MAIN
    if is_daily:
        return QuestKind.DAILY
    return QuestKind.SIDE


class QuestService:
    """퀘스트 비즈니스 로직"""

    def __init__(self, state: GameState, bus: EventBus, progression: ProgressionCalculator):
        self.state = state
        self.bus = bus
        self.progression = progression

    # =========================================================================
    # 생성 / 삭제
    # =========================================================================

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
    ) -> Quest:
        """
        퀘스트 추가

        데일리 퀘스트의 마감은 입력과 관계없이 생성일 23:59:59로 고정되고,
        카테고리가 없으면 mental로 지정됩니다.
        """
        quest_rules.enforce_quest_arguments(title, exp_reward, is_main_quest, is_daily)

        if is_daily:
            deadline = end_of_day(now)
            category = category or DailyWinCategory(QUEST.DAILY_QUEST_DEFAULT_CATEGORY)

        quest = Quest(
            id=new_id(),
            title=title.strip(),
            description=description,
            exp_reward=exp_reward,
            kind=_quest_kind(is_main_quest, is_daily),
            created_at=now,
            difficulty=difficulty,
            category=category,
            deadline=deadline,
        )
        self.state.quests.append(quest)
        logger.info(f"Quest added: {quest.id} '{quest.title}' kind={quest.kind.value}")
        self.bus.emit(GameEventType.QUEST_ADDED, quest=quest)
        return quest

    def spawn_recovery_quest(self, now: datetime) -> Quest:
        """회복 퀘스트 생성 (도전 과제 4개, 마감 없음)"""
        quest = Quest(
            id=new_id(),
            title=QUEST.RECOVERY_QUEST_TITLE,
            description=QUEST.RECOVERY_QUEST_DESCRIPTION,
            exp_reward=QUEST.RECOVERY_QUEST_EXP,
            kind=QuestKind.RECOVERY,
            created_at=now,
            difficulty=Difficulty.HARD,
            tasks=[QuestTask(id=new_id(), title=title) for title in RECOVERY_QUEST_TASKS],
        )
        self.state.quests.append(quest)
        logger.info(f"Recovery quest spawned: {quest.id}")
        self.bus.emit(GameEventType.QUEST_ADDED, quest=quest)
        return quest

    def active_recovery_quest(self) -> Optional[Quest]:
        return next(
            (quest for quest in self.state.quests if quest.is_recovery_quest and not quest.is_terminal),
            None,
        )

    def discard_pending_recovery_quests(self) -> int:
        pending = [q for q in self.state.quests if q.is_recovery_quest and not q.completed]
        for quest in pending:
            self.state.quests.remove(quest)
        return len(pending)

    def delete_quest(self, quest_id: str) -> Quest:
        quest = quest_rules.enforce_quest_exists(self.state, quest_id)
        quest_rules.enforce_deletable(self.state, quest)
        self.state.quests.remove(quest)
        logger.info(f"Quest deleted: {quest.id}")
        return quest

    # =========================================================================
    # 상태 전이
    # =========================================================================

    def can_start_quest(self, quest_id: str, now: datetime) -> bool:
        try:
            quest = quest_rules.enforce_quest_exists(self.state, quest_id)
            quest_rules.enforce_startable(self.state, quest, now)
        except RuleViolationError:
            return False
        return True

    def start_quest(self, quest_id: str, now: datetime) -> Quest:
        quest = quest_rules.enforce_quest_exists(self.state, quest_id)
        quest_rules.enforce_startable(self.state, quest, now)

        quest.started = True
        quest.started_at = now
        logger.info(f"Quest started: {quest.id}")
        self.bus.emit(GameEventType.QUEST_STARTED, quest=quest)
        return quest

    def can_complete_quest(self, quest_id: str, now: datetime) -> bool:
        try:
            quest = quest_rules.enforce_quest_exists(self.state, quest_id)
            quest_rules.enforce_completable(self.state, quest, now)
        except RuleViolationError:
            return False
        return True

    def complete_quest(self, quest_id: str, now: datetime) -> Quest:
        """
        퀘스트 완료 및 보상 지급

        보상 순서: 경험치(페널티 배율 적용) → 골드(원본 경험치 기준) → 능력치 경험치.
        보상 지급 후 QUEST_COMPLETED 이벤트를 발행합니다.
        """
        quest = quest_rules.enforce_quest_exists(self.state, quest_id)
        quest_rules.enforce_completable(self.state, quest, now)

        quest.started = True
        quest.completed = True
        quest.completed_at = now

        gold = self.progression.gold_for_exp(quest.exp_reward)
        grant = self.progression.add_exp(quest.exp_reward)
        self.progression.add_gold(gold)
        self._grant_stat_exp(quest)

        logger.info(
            f"Quest completed: {quest.id} kind={quest.kind.value}, "
            f"exp +{grant.effective} (x{grant.multiplier}), gold +{gold}"
        )
        self.bus.emit(GameEventType.QUEST_COMPLETED, quest=quest, grant=grant, gold=gold)
        return quest

    def _grant_stat_exp(self, quest: Quest) -> None:
        if quest.category is not None:
            self.progression.increase_stat_free(DAILY_WIN_STAT[quest.category], PROGRESSION.QUEST_CATEGORY_STAT_EXP)
            return
        for stat in Stat:
            self.progression.increase_stat_free(stat, PROGRESSION.QUEST_ALL_STATS_EXP)

    # =========================================================================
    # 하위 작업
    # =========================================================================

    def add_quest_task(
        self,
        quest_id: str,
        title: str,
        description: str = "",
        category: Optional[TaskCategory] = None,
        difficulty: Optional[Difficulty] = None,
        deadline: Optional[datetime] = None,
    ) -> QuestTask:
        quest = quest_rules.enforce_quest_exists(self.state, quest_id)
        quest_rules.enforce_not_terminal(quest, "하위 작업을 추가")
        if not title or not title.strip():
            raise InvalidArgumentError("title", "제목이 비어 있습니다")

        task = QuestTask(
            id=new_id(),
            title=title.strip(),
            description=description,
            category=category,
            difficulty=difficulty,
            deadline=deadline,
        )
        quest.tasks.append(task)
        return task

    def complete_quest_task(self, quest_id: str, task_id: str, now: datetime) -> QuestTask:
        """하위 작업 완료 (직접 보상 없음)"""
        quest = quest_rules.enforce_quest_exists(self.state, quest_id)
        task = quest_rules.enforce_quest_task_exists(quest, task_id)
        quest_rules.enforce_not_terminal(quest, "하위 작업을 완료")
        if task.completed:
            raise InvalidTransitionError("하위 작업을 완료", "이미 완료된 작업입니다")

        task.completed = True
        task.completed_at = now
        self.bus.emit(GameEventType.QUEST_TASK_COMPLETED, quest=quest, task=task)
        return task

    # =========================================================================
    # 조회
    # =========================================================================

    def get_daily_quest_completion_status(self, now: datetime) -> DailyQuestCompletionStatus:
        today = now.date()
        status = DailyQuestCompletionStatus()
        for quest in self.state.quests:
            if not quest.completed or quest.completed_at is None or quest.completed_at.date() != today:
                continue
            if quest.quota_slot == QuotaSlot.MAIN:
                status.main_completed += 1
            elif quest.quota_slot == QuotaSlot.SIDE:
                status.side_completed += 1
            else:
                status.daily_completed += 1
        return status

    def has_reached_daily_limit(self, is_main_quest: bool, now: datetime) -> bool:
        slot = QuotaSlot.MAIN if is_main_quest else QuotaSlot.SIDE
        limit = QUEST.MAIN_QUESTS_PER_DAY if is_main_quest else QUEST.SIDE_QUESTS_PER_DAY
        return quest_rules.completed_in_slot(self.state, slot, now.date()) >= limit

    # =========================================================================
    # 마감 처리
    # =========================================================================

    def sweep_deadlines(self, now: datetime, grace: timedelta = timedelta(0)) -> list[Quest]:
        """
        마감이 지난 퀘스트를 실패 처리

        대상: deadline < now - grace, (시작됨 또는 데일리), 미완료, 미실패.
        이미 실패 처리된 퀘스트는 다시 처리하지 않습니다.
        """
        cutoff = now - grace
        missed = [
            quest for quest in self.state.quests
            if quest.deadline is not None and quest.deadline < cutoff
            and (quest.started or quest.is_daily)
            and not quest.is_terminal
        ]
        for quest in missed:
            quest.missed = True
            quest.missed_at = now
            logger.info(f"Quest missed: {quest.id} kind={quest.kind.value}, deadline={quest.deadline}")
            self.bus.emit(GameEventType.QUEST_MISSED, quest=quest)
        return missed
