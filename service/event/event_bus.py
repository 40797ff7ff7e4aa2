"""
이벤트 버스 (Event Bus)

옵저버 패턴을 사용하여 엔진 내부 이벤트를 발행하고 구독합니다.
퀘스트 상태 머신은 이벤트를 발행하기만 하고, 구독자(페널티 엔진 등)가 처리합니다.
엔진 인스턴스마다 버스를 하나씩 가지며, 발행은 동기적으로 처리됩니다.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Any

logger = logging.getLogger(__name__)


class GameEventType(Enum):
    """게임 이벤트 타입"""

    # 퀘스트 이벤트
    QUEST_ADDED = "quest_added"                 # 퀘스트 추가
    QUEST_STARTED = "quest_started"             # 퀘스트 시작
    QUEST_COMPLETED = "quest_completed"         # 퀘스트 완료
    QUEST_MISSED = "quest_missed"               # 퀘스트 마감 실패
    QUEST_TASK_COMPLETED = "quest_task_done"    # 퀘스트 하위 작업 완료

    # 플래너 작업 이벤트
    TASK_COMPLETED = "task_completed"           # 작업 완료
    TASK_MISSED = "task_missed"                 # 작업 마감 실패

    # 성장 이벤트
    EXP_GAINED = "exp_gained"                   # 경험치 획득
    GOLD_GAINED = "gold_gained"                 # 골드 획득
    LEVEL_UP = "level_up"                       # 레벨업
    RANK_UP = "rank_up"                         # 랭크 상승
    STAT_LEVEL_UP = "stat_level_up"             # 능력치 레벨업
    DAILY_WIN_COMPLETED = "daily_win"           # 데일리 윈 달성

    # 페널티 이벤트
    CURSE_ACTIVATED = "curse_activated"         # 저주 발동
    CURSE_LIFTED = "curse_lifted"               # 저주 해제
    SIDE_QUESTS_LOCKED = "side_quests_locked"   # 사이드 퀘스트 잠금

    # 리셋 이벤트
    DAILY_RESET = "daily_reset"                 # 일일 리셋
    WEEKLY_RESET = "weekly_reset"               # 주간 리셋

    # 보상 일지 이벤트
    REWARD_SET = "reward_set"                   # 보상 설정
    REWARD_CLAIMED = "reward_claimed"           # 보상 수령


@dataclass
class GameEvent:
    """게임 이벤트"""

    type: GameEventType
    data: Dict[str, Any]

    def __repr__(self) -> str:
        return f"GameEvent(type={self.type.value}, data={self.data})"


class EventBus:
    """
    이벤트 버스

    Example:
        >>> event_bus = EventBus()
        >>>
        >>> def on_quest_missed(event: GameEvent):
        ...     print(f"Quest missed: {event.data['quest'].title}")
        >>>
        >>> event_bus.subscribe(GameEventType.QUEST_MISSED, on_quest_missed)
        >>> event_bus.publish(GameEvent(
        ...     type=GameEventType.QUEST_MISSED,
        ...     data={"quest": quest},
        ... ))
    """

    def __init__(self):
        self._subscribers: Dict[GameEventType, List[Callable]] = {}

    def subscribe(self, event_type: GameEventType, callback: Callable) -> None:
        """
        이벤트 구독

        Args:
            event_type: 구독할 이벤트 타입
            callback: 이벤트 발생 시 호출할 콜백 함수
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []

        if callback not in self._subscribers[event_type]:
            self._subscribers[event_type].append(callback)
            logger.debug(f"Subscribed to {event_type.value}: {callback.__name__}")

    def unsubscribe(self, event_type: GameEventType, callback: Callable) -> None:
        """구독 취소"""
        if event_type in self._subscribers and callback in self._subscribers[event_type]:
            self._subscribers[event_type].remove(callback)
            logger.debug(f"Unsubscribed from {event_type.value}: {callback.__name__}")

    def publish(self, event: GameEvent) -> None:
        """
        이벤트 발행

        구독 순서대로 콜백을 호출합니다. 콜백의 예외는 호출한 명령까지 전파됩니다.

        Args:
            event: 발행할 이벤트
        """
        callbacks = self._subscribers.get(event.type)
        if not callbacks:
            logger.debug(f"No subscribers for event: {event.type.value}")
            return

        logger.debug(f"Publishing event: {event}")
        for callback in list(callbacks):
            callback(event)

    def emit(self, event_type: GameEventType, **data: Any) -> None:
        """publish 단축형"""
        self.publish(GameEvent(type=event_type, data=data))

    def get_subscriber_count(self, event_type: GameEventType) -> int:
        """특정 이벤트 타입의 구독자 수 반환"""
        return len(self._subscribers.get(event_type, []))
