"""
도메인 열거형

퀘스트 종류, 랭크, 카테고리 등 상태 모델에서 공유하는 열거형을 정의합니다.
"""
from enum import Enum


class Rank(str, Enum):
    """랭크 (레벨로부터만 계산됨)"""
    F = "F"
    E = "E"
    D = "D"
    C = "C"
    B = "B"
    A = "A"
    S = "S"
    SS = "SS"
    SSS = "SSS"


class Stat(str, Enum):
    """능력치 (능력치 카테고리)"""
    PHYSICAL = "physical"
    COGNITIVE = "cognitive"
    EMOTIONAL = "emotional"
    SPIRITUAL = "spiritual"
    SOCIAL = "social"


class DailyWinCategory(str, Enum):
    """데일리 윈 카테고리"""
    MENTAL = "mental"
    PHYSICAL = "physical"
    SPIRITUAL = "spiritual"
    INTELLIGENCE = "intelligence"


class Difficulty(str, Enum):
    """난이도"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    BOSS = "boss"
    NORMAL = "normal"


class QuestKind(str, Enum):
    """퀘스트 종류"""
    MAIN = "main"
    SIDE = "side"
    DAILY = "daily"
    RECOVERY = "recovery"


class QuestStatus(str, Enum):
    """퀘스트 진행 상태"""
    NOT_STARTED = "not_started"
    STARTED = "started"
    COMPLETED = "completed"
    MISSED = "missed"


class QuotaSlot(str, Enum):
    """일일 한도 슬롯"""
    MAIN = "main"
    SIDE = "side"


class DangerLevel(str, Enum):
    """페널티 단계"""
    SAFE = "safe"            # 0-1
    WARNING = "warning"      # 2-3
    DANGER = "danger"        # 4
    CURSED = "cursed"        # 5


class FailureReason(str, Enum):
    """명령 거부 사유"""
    INVALID_TRANSITION = "invalid_transition"
    QUOTA_EXCEEDED = "quota_exceeded"
    NOT_FOUND = "not_found"
    SIDE_QUESTS_LOCKED = "side_quests_locked"
    INVALID_ARGUMENT = "invalid_argument"


# 데일리 윈 → 능력치 매핑
DAILY_WIN_STAT: dict[DailyWinCategory, Stat] = {
    DailyWinCategory.MENTAL: Stat.EMOTIONAL,
    DailyWinCategory.PHYSICAL: Stat.PHYSICAL,
    DailyWinCategory.SPIRITUAL: Stat.SPIRITUAL,
    DailyWinCategory.INTELLIGENCE: Stat.COGNITIVE,
}
