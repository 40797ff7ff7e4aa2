"""
레벨 곡선 / 랭크 계산

EXP(L) 구간별 2차 곡선 (config.progression.EXP_CURVE_TIERS):
    20L²                 (1 ≤ L ≤ 30)
    18(L-30)² + 18,000   (31 ≤ L ≤ 60)
    ...
    50(L-365)² + base    (366 ≤ L)
"""
from config import EXP_CURVE_FINAL_TIER, EXP_CURVE_TIERS, RANK_EXP_BONUS, RANK_THRESHOLDS
from service.state.enums import Rank


def exp_to_next_level(level: int) -> int:
    """
    다음 레벨까지 필요한 경험치

    Args:
        level: 현재 레벨

    Returns:
        필요 경험치 (레벨에 대해 순증가)
    """
    level = max(1, level)
    for tier in EXP_CURVE_TIERS:
        if level <= tier.max_level:
            return tier.coefficient * (level - tier.offset) ** 2 + tier.base
    tier = EXP_CURVE_FINAL_TIER
    return tier.coefficient * (level - tier.offset) ** 2 + tier.base


def rank_for_level(level: int) -> Rank:
    """레벨로부터 랭크 계산"""
    for rank, min_level in RANK_THRESHOLDS:
        if level >= min_level:
            return Rank(rank)
    return Rank.F


def rank_exp_bonus(rank: Rank) -> float:
    """랭크별 작업 경험치 보너스 배율"""
    return RANK_EXP_BONUS.get(rank.value, 1.0)
