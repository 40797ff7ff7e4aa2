"""
TaskService

플래너 작업(퀘스트와 별개의 독립 작업)의 생성, 완료, 마감 처리를 담당합니다.
"""
import logging
import math
from datetime import date, datetime
from typing import Optional

from config import DEFAULT_DIFFICULTY_EXP, DIFFICULTY_EXP, PLANNER
from exceptions import (
    InvalidArgumentError,
    InvalidTransitionError,
    QuotaExceededError,
    TaskNotFoundError,
)
from service.daily.daily_win_service import DailyWinService
from service.event.event_bus import EventBus, GameEventType
from service.progression.leveling import rank_exp_bonus
from service.progression.progression_service import ProgressionCalculator
from service.state.enums import DAILY_WIN_STAT, DailyWinCategory, Difficulty, Stat
from service.state.game_state import GameState
from service.state.quest_state import TaskCategory, new_id
from service.state.task_state import PlannerTask

logger = logging.getLogger(__name__)


def stat_for_category(category: TaskCategory) -> Stat:
    if isinstance(category, DailyWinCategory):
        return DAILY_WIN_STAT[category]
    return category


class TaskService:
    """플래너 작업 비즈니스 로직"""

    def __init__(
        self,
        state: GameState,
        bus: EventBus,
        progression: ProgressionCalculator,
        daily_wins: DailyWinService,
    ):
        self.state = state
        self.bus = bus
        self.progression = progression
        self.daily_wins = daily_wins

    def _enforce_task_exists(self, task_id: str) -> PlannerTask:
        task = self.state.find_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def _enforce_category_limit(self, category: TaskCategory, day: date, today: date) -> None:
        """
        (카테고리, 날짜) 별 작업 수 제한

        - 데일리 윈 카테고리: 대기/완료 작업 1개, 오늘 이미 달성했으면 추가 불가
        - 능력치 카테고리: 최대 5개
        """
        same_slot = [
            task for task in self.state.tasks
            if task.category == category and task.scheduled_for == day and not task.missed
            and isinstance(task.category, type(category))
        ]

        if isinstance(category, DailyWinCategory):
            if day == today and self.daily_wins.is_daily_win_completed(category):
                raise QuotaExceededError(f"{category.value} 데일리 윈", PLANNER.MAX_DAILY_WIN_TASKS_PER_DAY)
            if len(same_slot) >= PLANNER.MAX_DAILY_WIN_TASKS_PER_DAY:
                raise QuotaExceededError(f"{category.value} 데일리 윈 작업", PLANNER.MAX_DAILY_WIN_TASKS_PER_DAY)
        elif len(same_slot) >= PLANNER.MAX_ATTRIBUTE_TASKS_PER_DAY:
            raise QuotaExceededError(f"{category.value} 작업", PLANNER.MAX_ATTRIBUTE_TASKS_PER_DAY)

    def add_task(
        self,
        now: datetime,
        title: str,
        category: TaskCategory,
        difficulty: Difficulty = Difficulty.NORMAL,
        scheduled_for: Optional[date] = None,
        deadline: Optional[datetime] = None,
        description: str = "",
    ) -> PlannerTask:
        """
        작업 추가

        scheduled_for가 없으면 마감일(없으면 오늘)로 지정합니다.
        경험치 보상은 난이도 테이블에서 결정됩니다.
        """
        if not title or not title.strip():
            raise InvalidArgumentError("title", "제목이 비어 있습니다")
        if not isinstance(category, (DailyWinCategory, Stat)):
            raise InvalidArgumentError("category", f"알 수 없는 카테고리입니다: {category}")

        if scheduled_for is None:
            scheduled_for = deadline.date() if deadline is not None else now.date()
        self._enforce_category_limit(category, scheduled_for, now.date())

        task = PlannerTask(
            id=new_id(),
            title=title.strip(),
            description=description,
            category=category,
            difficulty=difficulty,
            exp_reward=DIFFICULTY_EXP.get(difficulty.value, DEFAULT_DIFFICULTY_EXP),
            scheduled_for=scheduled_for,
            created_at=now,
            deadline=deadline,
        )
        self.state.tasks.append(task)
        logger.info(f"Task added: {task.id} '{task.title}' {category.value}/{difficulty.value}")
        return task

    def delete_task(self, task_id: str) -> PlannerTask:
        task = self._enforce_task_exists(task_id)
        self.state.tasks.remove(task)
        logger.info(f"Task deleted: {task.id}")
        return task

    def complete_task(self, task_id: str, now: datetime) -> PlannerTask:
        """
        작업 완료 및 보상 지급

        - 경험치: floor(보상 × 랭크 보너스) 를 add_exp로 지급 (페널티 배율 적용)
        - 골드: 랭크 보너스 적용 경험치 기준
        - 능력치 경험치: 실제 획득 경험치 // 2
        - 데일리 윈 카테고리는 해당 데일리 윈 달성
        """
        task = self._enforce_task_exists(task_id)
        if task.completed:
            raise InvalidTransitionError("작업을 완료", "이미 완료된 작업입니다")
        if task.missed:
            raise InvalidTransitionError("작업을 완료", "마감이 지난 작업입니다")
        if task.deadline is not None and task.deadline < now:
            raise InvalidTransitionError("작업을 완료", "마감 시간이 지났습니다")

        task.completed = True
        task.completed_at = now

        bonus = rank_exp_bonus(self.state.user.rank)
        raw = int(math.floor(task.exp_reward * bonus))
        gold = self.progression.gold_for_exp(raw)
        grant = self.progression.add_exp(raw)
        self.progression.add_gold(gold)
        self.progression.increase_stat_free(
            stat_for_category(task.category), grant.effective // PLANNER.STAT_EXP_DIVISOR
        )

        if task.is_daily_win_task:
            self.daily_wins.mark_daily_win(task.category)

        logger.info(
            f"Task completed: {task.id}, exp +{grant.effective} (bonus x{bonus}, penalty x{grant.multiplier}), "
            f"gold +{gold}"
        )
        self.bus.emit(GameEventType.TASK_COMPLETED, task=task, grant=grant, gold=gold)
        return task

    def sweep_deadlines(self, now: datetime) -> list[PlannerTask]:
        """마감이 지난 대기 작업을 실패 처리"""
        missed = [
            task for task in self.state.tasks
            if task.deadline is not None and task.deadline < now and not task.is_terminal
        ]
        for task in missed:
            task.missed = True
            task.missed_at = now
            logger.info(f"Task missed: {task.id}, deadline={task.deadline}")
            self.bus.emit(GameEventType.TASK_MISSED, task=task)
        return missed

    # =========================================================================
    # 조회
    # =========================================================================

    def get_tasks_for_date(self, day: date) -> list[PlannerTask]:
        return [task for task in self.state.tasks if task.scheduled_for == day]

    def get_completed_tasks_for_date(self, day: date) -> list[PlannerTask]:
        return [task for task in self.get_tasks_for_date(day) if task.completed]

    def get_incomplete_tasks_for_date(self, day: date) -> list[PlannerTask]:
        return [task for task in self.get_tasks_for_date(day) if not task.completed]
