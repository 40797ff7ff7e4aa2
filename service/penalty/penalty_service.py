"""
PenaltyService

그림자 페널티 엔진: 기회 카운터, 그림자 피로, 저주, 회복 퀘스트, 사이드 퀘스트 잠금.

퀘스트/작업 상태 머신이 발행하는 이벤트를 구독해 동작합니다:
- QUEST_MISSED / TASK_MISSED → 스트라이크 적용
- QUEST_COMPLETED → 피로 해제, 회복 퀘스트면 저주 해제, 메인 퀘스트면 연속 실패 초기화
"""
import logging
from datetime import datetime, timedelta

from config import PENALTY
from service.event.event_bus import EventBus, GameEvent, GameEventType
from service.planner.task_service import TaskService
from service.quest.quest_service import QuestService
from service.state.enums import DangerLevel
from service.state.game_state import GameState

logger = logging.getLogger(__name__)


class PenaltyService:
    """페널티/저주 비즈니스 로직"""

    def __init__(self, state: GameState, bus: EventBus, quests: QuestService, tasks: TaskService):
        self.state = state
        self.bus = bus
        self.quests = quests
        self.tasks = tasks

        bus.subscribe(GameEventType.QUEST_MISSED, self._on_quest_missed)
        bus.subscribe(GameEventType.TASK_MISSED, self._on_task_missed)
        bus.subscribe(GameEventType.QUEST_COMPLETED, self._on_quest_completed)

    # =========================================================================
    # 조회
    # =========================================================================

    def get_exp_modifier(self) -> float:
        """현재 경험치 배율 (저주가 피로보다 우선, 중첩 없음)"""
        penalty = self.state.penalty
        if penalty.is_cursed:
            return PENALTY.CURSE_EXP_MULTIPLIER
        if penalty.has_shadow_fatigue:
            return PENALTY.SHADOW_FATIGUE_EXP_MULTIPLIER
        return 1.0

    def danger_level(self) -> DangerLevel:
        penalty = self.state.penalty
        if penalty.is_cursed:
            return DangerLevel.CURSED
        if penalty.chance_counter >= PENALTY.DANGER_THRESHOLD:
            return DangerLevel.DANGER
        if penalty.chance_counter >= PENALTY.WARNING_THRESHOLD:
            return DangerLevel.WARNING
        return DangerLevel.SAFE

    def can_use_redemption(self) -> bool:
        if not self.state.penalty.is_cursed:
            return False
        return any(quest.is_recovery_quest and not quest.completed for quest in self.state.quests)

    # =========================================================================
    # 스트라이크 / 저주
    # =========================================================================

    def apply_strike(self, now: datetime) -> None:
        """
        마감 실패 1회 적용

        기회 카운터 +1 (최대 5), 그림자 피로 24시간.
        최대치 도달 시 저주가 걸리고 회복 퀘스트가 생성됩니다.
        """
        penalty = self.state.penalty
        penalty.chance_counter = min(penalty.chance_counter + 1, PENALTY.MAX_CHANCES)
        penalty.has_shadow_fatigue = True
        penalty.shadow_fatigue_until = now + timedelta(hours=PENALTY.SHADOW_FATIGUE_HOURS)
        logger.info(f"Strike applied: chances used {penalty.chance_counter}/{PENALTY.MAX_CHANCES}")

        if penalty.chance_counter >= PENALTY.MAX_CHANCES:
            self._activate_curse(now)

    def _activate_curse(self, now: datetime) -> bool:
        penalty = self.state.penalty
        activated = not penalty.is_cursed
        if activated:
            penalty.is_cursed = True
            penalty.cursed_at = now
            logger.warning(f"Curse activated at {now}")
            self.bus.emit(GameEventType.CURSE_ACTIVATED, cursed_at=now)
        return self.ensure_recovery_quest(now) or activated

    def ensure_recovery_quest(self, now: datetime) -> bool:
        """저주 상태인데 진행 가능한 회복 퀘스트가 없으면 하나 생성 (생성 시 True)"""
        if self.state.penalty.is_cursed and self.quests.active_recovery_quest() is None:
            self.quests.spawn_recovery_quest(now)
            return True
        return False

    def lift_curse(self) -> None:
        penalty = self.state.penalty
        was_cursed = penalty.is_cursed
        penalty.is_cursed = False
        penalty.cursed_at = None
        penalty.chance_counter = 0
        self._clear_fatigue()
        if was_cursed:
            logger.info("Curse lifted")
            self.bus.emit(GameEventType.CURSE_LIFTED)

    def _clear_fatigue(self) -> None:
        self.state.penalty.has_shadow_fatigue = False
        self.state.penalty.shadow_fatigue_until = None

    def check_curse_status(self, now: datetime, quest_grace: timedelta = timedelta(0)) -> bool:
        """
        주기 점검 (로드 시, 5분마다, 명령/조회 직전)

        만료된 피로/사이드 잠금을 해제하고 퀘스트/작업 마감 처리를 실행합니다.

        Args:
            now: 현재 시각
            quest_grace: 퀘스트 마감 후 실패 처리를 미루는 시간 (작업에는 적용하지 않음)

        Returns:
            상태가 바뀌었으면 True
        """
        changed = False
        penalty = self.state.penalty
        if penalty.has_shadow_fatigue and (
            penalty.shadow_fatigue_until is None or penalty.shadow_fatigue_until <= now
        ):
            self._clear_fatigue()
            logger.info("Shadow fatigue expired")
            changed = True

        if penalty.side_quests_locked_until is not None and not penalty.side_quests_locked(now):
            penalty.side_quests_locked_until = None
            logger.info("Side quest lock expired")
            changed = True

        if self.quests.sweep_deadlines(now, quest_grace):
            changed = True
        if self.tasks.sweep_deadlines(now):
            changed = True

        if penalty.chance_counter >= PENALTY.MAX_CHANCES and self._activate_curse(now):
            changed = True
        return self.ensure_recovery_quest(now) or changed

    def weekly_reset(self, now: datetime) -> None:
        """주간 초기화: 기회 카운터, 저주, 피로, 대기 중인 회복 퀘스트"""
        penalty = self.state.penalty
        penalty.chance_counter = 0
        penalty.is_cursed = False
        penalty.cursed_at = None
        self._clear_fatigue()
        discarded = self.quests.discard_pending_recovery_quests()

        logger.info(f"Weekly penalty reset (discarded {discarded} recovery quests)")
        self.bus.emit(GameEventType.WEEKLY_RESET, week_of=now.date())

    # =========================================================================
    # 이벤트 핸들러
    # =========================================================================

    def _on_quest_missed(self, event: GameEvent) -> None:
        quest = event.data["quest"]
        now = quest.missed_at
        penalty = self.state.penalty

        if quest.is_main_quest:
            penalty.missed_main_quest_streak += 1
            if penalty.missed_main_quest_streak >= PENALTY.MAIN_QUEST_MISS_LOCK_STREAK:
                penalty.side_quests_locked_until = now + timedelta(days=PENALTY.SIDE_QUEST_LOCK_DAYS)
                penalty.missed_main_quest_streak = 0
                logger.warning(f"Side quests locked until {penalty.side_quests_locked_until}")
                self.bus.emit(GameEventType.SIDE_QUESTS_LOCKED, until=penalty.side_quests_locked_until)
        else:
            penalty.missed_main_quest_streak = 0

        self.apply_strike(now)

    def _on_task_missed(self, event: GameEvent) -> None:
        self.apply_strike(event.data["task"].missed_at)

    def _on_quest_completed(self, event: GameEvent) -> None:
        quest = event.data["quest"]
        if quest.is_recovery_quest:
            self.lift_curse()
            return

        self._clear_fatigue()
        if quest.is_main_quest:
            self.state.penalty.missed_main_quest_streak = 0
