"""레벨/랭크/경험치 곡선 설정"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ExpCurveTier:
    """
    경험치 곡선 구간

    EXP(L) = coefficient × (L - offset)² + base  (L ≤ max_level)
    """
    max_level: int
    coefficient: int
    offset: int
    base: int


# 구간별 2차 곡선. 271 구간부터는 이전 구간 끝값을 base로 사용해 단조 증가를 보장한다.
EXP_CURVE_TIERS: tuple[ExpCurveTier, ...] = (
    ExpCurveTier(max_level=30, coefficient=20, offset=0, base=0),
    ExpCurveTier(max_level=60, coefficient=18, offset=30, base=18_000),
    ExpCurveTier(max_level=90, coefficient=22, offset=60, base=45_000),
    ExpCurveTier(max_level=120, coefficient=25, offset=90, base=90_000),
    ExpCurveTier(max_level=150, coefficient=30, offset=120, base=180_000),
    ExpCurveTier(max_level=180, coefficient=35, offset=150, base=315_000),
    ExpCurveTier(max_level=270, coefficient=40, offset=180, base=495_000),
    ExpCurveTier(max_level=365, coefficient=45, offset=270, base=819_000),
)

EXP_CURVE_FINAL_TIER = ExpCurveTier(max_level=0, coefficient=50, offset=365, base=1_225_125)
"""366레벨 이상 구간 (max_level 미사용)"""


# (랭크, 최소 레벨) - 높은 랭크부터
RANK_THRESHOLDS: tuple[tuple[str, int], ...] = (
    ("SSS", 200),
    ("SS", 150),
    ("S", 100),
    ("A", 80),
    ("B", 60),
    ("C", 40),
    ("D", 25),
    ("E", 15),
    ("F", 1),
)

# 랭크별 작업 경험치 보너스 배율
RANK_EXP_BONUS: dict[str, float] = {
    "F": 1.0,
    "E": 1.1,
    "D": 1.2,
    "C": 1.3,
    "B": 1.4,
    "A": 1.5,
    "S": 1.6,
    "SS": 1.7,
    "SSS": 1.8,
}


@dataclass(frozen=True)
class ProgressionConfig:
    """성장 설정"""

    INITIAL_LEVEL: int = 1
    """초기 레벨"""

    INITIAL_GOLD: int = 100
    """초기 골드"""

    INITIAL_STAT_LEVEL: int = 1
    """초기 능력치 레벨"""

    STAT_EXP_PER_LEVEL: int = 100
    """능력치 레벨당 필요 경험치"""

    GOLD_PER_BLOCK: int = 2
    """경험치 블록당 골드"""

    EXP_PER_GOLD_BLOCK: int = 5
    """골드 블록 하나에 해당하는 경험치 (5 EXP = 2 골드)"""

    QUEST_CATEGORY_STAT_EXP: int = 10
    """카테고리가 있는 퀘스트 완료 시 해당 능력치 경험치"""

    QUEST_ALL_STATS_EXP: int = 5
    """카테고리가 없는 퀘스트 완료 시 모든 능력치 경험치"""

    DAILY_WIN_STAT_EXP: int = 10
    """데일리 윈 달성 시 능력치 경험치 (페널티 배율 적용)"""


PROGRESSION = ProgressionConfig()
