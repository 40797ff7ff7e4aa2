"""퀘스트/플래너 작업 관련 설정"""
from dataclasses import dataclass


# 난이도별 플래너 작업 경험치
DIFFICULTY_EXP: dict[str, int] = {
    "easy": 15,
    "medium": 30,
    "normal": 30,
    "hard": 60,
    "boss": 100,
}

DEFAULT_DIFFICULTY_EXP = 30
"""테이블에 없는 난이도의 기본 경험치"""


# 회복 퀘스트 도전 과제
RECOVERY_QUEST_TASKS: tuple[str, ...] = (
    "Take a cold shower",
    "Complete 10,000 steps",
    "Full digital detox for 4 hours",
    "Complete 3 delayed tasks today",
)


@dataclass(frozen=True)
class QuestConfig:
    """퀘스트 설정"""

    MAIN_QUESTS_PER_DAY: int = 1
    """하루 메인 퀘스트 시작/완료 한도"""

    SIDE_QUESTS_PER_DAY: int = 1
    """하루 사이드 퀘스트 시작/완료 한도 (회복 퀘스트 포함)"""

    DAILY_QUEST_DEFAULT_CATEGORY: str = "mental"
    """데일리 퀘스트 기본 카테고리"""

    RECOVERY_QUEST_TITLE: str = "Redemption Challenge"
    """회복 퀘스트 제목"""

    RECOVERY_QUEST_DESCRIPTION: str = (
        "Complete this challenge to lift your curse and restore your experience gain rate."
    )
    """회복 퀘스트 설명"""

    RECOVERY_QUEST_EXP: int = 100
    """회복 퀘스트 경험치 (저주 배율 적용)"""

    COMPLETION_GRACE_MINUTES: int = 5
    """마감 직후 완료를 허용하는 시간 (주기 점검 간격과 같음)"""


@dataclass(frozen=True)
class PlannerConfig:
    """플래너 작업 설정"""

    MAX_ATTRIBUTE_TASKS_PER_DAY: int = 5
    """능력치 카테고리별 하루 최대 작업 수"""

    MAX_DAILY_WIN_TASKS_PER_DAY: int = 1
    """데일리 윈 카테고리별 하루 최대 (대기/완료) 작업 수"""

    STAT_EXP_DIVISOR: int = 2
    """작업 완료 시 능력치 경험치 = 획득 경험치 // 2"""


QUEST = QuestConfig()
PLANNER = PlannerConfig()
