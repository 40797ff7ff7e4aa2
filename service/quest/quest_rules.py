"""
퀘스트 규칙 검증

모든 검증은 상태를 변경하지 않으며, 위반 시 RuleViolationError 하위 예외를 던집니다.
"""
from datetime import date, datetime, timedelta
from typing import Optional

from config import QUEST
from exceptions import (
    InvalidArgumentError,
    InvalidTransitionError,
    QuestNotFoundError,
    QuotaExceededError,
    SideQuestsLockedError,
    TaskNotFoundError,
)
from service.state.enums import QuestKind, QuotaSlot
from service.state.game_state import GameState
from service.state.quest_state import Quest, QuestTask

_SLOT_LIMITS = {
    QuotaSlot.MAIN: ("메인 퀘스트", QUEST.MAIN_QUESTS_PER_DAY),
    QuotaSlot.SIDE: ("사이드 퀘스트", QUEST.SIDE_QUESTS_PER_DAY),
}


def completion_grace() -> timedelta:
    """마감 직후 완료가 허용되는 시간"""
    return timedelta(minutes=QUEST.COMPLETION_GRACE_MINUTES)


def completed_in_slot(state: GameState, slot: QuotaSlot, day: date) -> int:
    """해당 날짜에 완료된 슬롯 퀘스트 수"""
    return sum(
        1 for quest in state.quests
        if quest.quota_slot == slot and quest.completed
        and quest.completed_at is not None and quest.completed_at.date() == day
    )


def in_progress_in_slot(state: GameState, slot: QuotaSlot, exclude_id: Optional[str] = None) -> int:
    return sum(
        1 for quest in state.quests
        if quest.quota_slot == slot and quest.in_progress and quest.id != exclude_id
    )


def enforce_quest_arguments(title: str, exp_reward: int, is_main_quest: bool, is_daily: bool) -> None:
    if is_main_quest and is_daily:
        raise InvalidArgumentError("is_daily", "메인 퀘스트는 데일리 퀘스트가 될 수 없습니다")
    if not title or not title.strip():
        raise InvalidArgumentError("title", "제목이 비어 있습니다")
    if exp_reward <= 0:
        raise InvalidArgumentError("exp_reward", "경험치 보상은 0보다 커야 합니다")


def enforce_quest_exists(state: GameState, quest_id: str) -> Quest:
    quest = state.find_quest(quest_id)
    if quest is None:
        raise QuestNotFoundError(quest_id)
    return quest


def enforce_quest_task_exists(quest: Quest, task_id: str) -> QuestTask:
    task = quest.find_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


def enforce_not_terminal(quest: Quest, action: str) -> None:
    if quest.completed:
        raise InvalidTransitionError(action, "이미 완료된 퀘스트입니다")
    if quest.missed:
        raise InvalidTransitionError(action, "마감이 지난 퀘스트입니다")


def enforce_startable(state: GameState, quest: Quest, now: datetime) -> None:
    """
    퀘스트 시작 가능 여부 검증

    - NotStarted 상태에서만 시작 가능
    - 회복 퀘스트는 저주 상태에서만, 진행 중인 사이드 퀘스트가 없을 때만 시작 가능
    - 사이드 퀘스트는 잠금 중 시작 불가
    - 슬롯에 진행 중이거나 오늘 완료된 퀘스트가 있으면 시작 불가
    """
    enforce_not_terminal(quest, "퀘스트를 시작")
    if quest.started:
        raise InvalidTransitionError("퀘스트를 시작", "이미 시작된 퀘스트입니다")

    if quest.is_recovery_quest and not state.penalty.is_cursed:
        raise InvalidTransitionError("회복 퀘스트를 시작", "저주 상태가 아닙니다")

    if quest.kind == QuestKind.SIDE and state.penalty.side_quests_locked(now):
        raise SideQuestsLockedError(state.penalty.side_quests_locked_until)

    slot = quest.quota_slot
    if slot is None:
        return

    name, limit = _SLOT_LIMITS[slot]
    if in_progress_in_slot(state, slot, exclude_id=quest.id) >= limit:
        raise QuotaExceededError(name, limit)
    if completed_in_slot(state, slot, now.date()) >= limit:
        raise QuotaExceededError(name, limit)


def enforce_completable(state: GameState, quest: Quest, now: datetime) -> None:
    """
    퀘스트 완료 가능 여부 검증

    데일리 퀘스트는 시작하지 않아도 마감 전이면 완료 가능합니다.
    일반 퀘스트는 마감 후 COMPLETION_GRACE_MINUTES 이내까지만 완료 가능합니다.
    """
    enforce_not_terminal(quest, "퀘스트를 완료")

    if quest.is_daily:
        if quest.deadline is not None and now > quest.deadline:
            raise InvalidTransitionError("퀘스트를 완료", "데일리 퀘스트 마감이 지났습니다")
    elif not quest.started:
        raise InvalidTransitionError("퀘스트를 완료", "시작하지 않은 퀘스트입니다")
    elif quest.deadline is not None and now - quest.deadline > completion_grace():
        raise InvalidTransitionError("퀘스트를 완료", "마감이 지난 퀘스트입니다")

    if not quest.all_tasks_completed():
        raise InvalidTransitionError("퀘스트를 완료", "완료하지 않은 하위 작업이 있습니다")

    slot = quest.quota_slot
    if slot is not None:
        name, limit = _SLOT_LIMITS[slot]
        if completed_in_slot(state, slot, now.date()) >= limit:
            raise QuotaExceededError(name, limit)


def enforce_deletable(state: GameState, quest: Quest) -> None:
    if quest.is_recovery_quest and not quest.completed and state.penalty.is_cursed:
        raise InvalidTransitionError("회복 퀘스트를 삭제", "저주 상태에서는 삭제할 수 없습니다")
