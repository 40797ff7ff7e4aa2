"""
Soloist 게임 설정 상수

모든 매직 넘버와 성장/페널티 밸런스 관련 상수를 여기서 관리합니다.
각 도메인별 설정은 config/ 하위 모듈에 정의되어 있습니다.
"""
from config.progression import (
    ExpCurveTier, EXP_CURVE_TIERS, EXP_CURVE_FINAL_TIER,
    RANK_THRESHOLDS, RANK_EXP_BONUS,
    ProgressionConfig, PROGRESSION,
)
from config.quest import (
    DIFFICULTY_EXP, DEFAULT_DIFFICULTY_EXP, RECOVERY_QUEST_TASKS,
    QuestConfig, QUEST,
    PlannerConfig, PLANNER,
)
from config.penalty import PenaltyConfig, PENALTY

__all__ = [
    # progression
    "ExpCurveTier", "EXP_CURVE_TIERS", "EXP_CURVE_FINAL_TIER",
    "RANK_THRESHOLDS", "RANK_EXP_BONUS",
    "ProgressionConfig", "PROGRESSION",
    # quest & planner
    "DIFFICULTY_EXP", "DEFAULT_DIFFICULTY_EXP", "RECOVERY_QUEST_TASKS",
    "QuestConfig", "QUEST",
    "PlannerConfig", "PLANNER",
    # penalty
    "PenaltyConfig", "PENALTY",
]
