"""엔진 명령 결과 타입"""
from dataclasses import dataclass, field
from typing import Any, Optional

from service.state.enums import DailyWinCategory, FailureReason, Stat


@dataclass
class CommandResult:
    """
    엔진 명령 결과

    규칙 위반은 예외 대신 ok=False와 거부 사유로 전달됩니다.
    """
    ok: bool
    reason: Optional[FailureReason] = None
    message: str = ""
    value: Any = None

    @classmethod
    def success(cls, value: Any = None) -> "CommandResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: FailureReason, message: str) -> "CommandResult":
        return cls(ok=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.ok


@dataclass
class DailyQuestCompletionStatus:
    """오늘 완료한 퀘스트 수 (회복 퀘스트는 사이드로 집계)"""
    main_completed: int = 0
    side_completed: int = 0
    daily_completed: int = 0


@dataclass
class DailyCompletionDetails:
    """하루 목표 달성 현황 (보상 일지 수령 조건)"""
    completed_daily_wins: list[DailyWinCategory] = field(default_factory=list)
    missing_daily_wins: list[DailyWinCategory] = field(default_factory=list)
    completed_attributes: list[Stat] = field(default_factory=list)
    missing_attributes: list[Stat] = field(default_factory=list)
    main_quest: bool = False
    side_quest: bool = False
    daily_quests: bool = False

    @property
    def overall(self) -> bool:
        return (
            not self.missing_daily_wins and not self.missing_attributes
            and self.main_quest and self.side_quest and self.daily_quests
        )


@dataclass
class RewardJournalStats:
    total_rewards: int = 0
    claimed_rewards: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    weekly_earned: int = 0
    weekly_missed: int = 0
