"""그림자 페널티(저주/피로) 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class PenaltyConfig:
    """페널티 설정"""

    MAX_CHANCES: int = 5
    """주간 기회 (마감 실패 허용) 횟수, 도달 시 저주"""

    CURSE_EXP_MULTIPLIER: float = 0.5
    """저주 상태 경험치 배율"""

    SHADOW_FATIGUE_EXP_MULTIPLIER: float = 0.75
    """그림자 피로 상태 경험치 배율"""

    SHADOW_FATIGUE_HOURS: int = 24
    """그림자 피로 지속 시간"""

    MAIN_QUEST_MISS_LOCK_STREAK: int = 3
    """연속 메인 퀘스트 실패 시 사이드 퀘스트 잠금 기준"""

    SIDE_QUEST_LOCK_DAYS: int = 7
    """사이드 퀘스트 잠금 기간"""

    WARNING_THRESHOLD: int = 2
    """경고 단계 시작 횟수"""

    DANGER_THRESHOLD: int = 4
    """위험 단계 시작 횟수"""

    CURSE_CHECK_INTERVAL_MINUTES: int = 5
    """저주 상태 점검 주기"""


PENALTY = PenaltyConfig()
