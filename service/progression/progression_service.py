"""
ProgressionCalculator

경험치 적용, 레벨업, 랭크 재계산, 골드 및 능력치 경험치를 담당합니다.
"""
import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from config import PROGRESSION
from exceptions import InvalidArgumentError
from service.event.event_bus import EventBus, GameEventType
from service.progression.leveling import exp_to_next_level
from service.state.enums import Rank, Stat
from service.state.game_state import GameState

logger = logging.getLogger(__name__)

# (획득 경험치, 현재 레벨, 현재 랭크) -> 골드
GoldFormula = Callable[[int, int, Rank], int]


def default_gold_formula(exp: int, level: int, rank: Rank) -> int:
    """기본 골드 환산: 5 EXP 당 2 골드"""
    return (exp // PROGRESSION.EXP_PER_GOLD_BLOCK) * PROGRESSION.GOLD_PER_BLOCK


@dataclass
class LevelUpResult:
    """레벨업 결과"""
    old_level: int
    new_level: int
    old_rank: Rank
    new_rank: Rank

    @property
    def levels_gained(self) -> int:
        return self.new_level - self.old_level

    @property
    def rank_changed(self) -> bool:
        return self.old_rank != self.new_rank


@dataclass
class ExpGrant:
    """경험치 적용 결과"""
    raw: int
    multiplier: float
    effective: int
    level_up: Optional[LevelUpResult] = None


@dataclass
class StatExpResult:
    """능력치 경험치 적용 결과"""
    stat: Stat
    gained: int
    old_level: int
    new_level: int

    @property
    def leveled_up(self) -> bool:
        return self.new_level > self.old_level


class ProgressionCalculator:
    """경험치/레벨/골드 비즈니스 로직"""

    def __init__(
        self,
        state: GameState,
        bus: EventBus,
        multiplier_provider: Optional[Callable[[], float]] = None,
        gold_formula: Optional[GoldFormula] = None,
    ):
        self.state = state
        self.bus = bus
        self.multiplier_provider = multiplier_provider or (lambda: 1.0)
        self.gold_formula = gold_formula or default_gold_formula

    @staticmethod
    def enforce_non_negative(field_name: str, amount: int) -> None:
        if amount < 0:
            raise InvalidArgumentError(field_name, "음수는 허용되지 않습니다")

    def add_exp(self, raw_amount: int) -> ExpGrant:
        """
        경험치 적용 및 레벨업 처리

        실제 적용량 = floor(raw × 페널티 배율). 넘친 경험치는 모두 레벨업으로 전환됩니다.

        Args:
            raw_amount: 배율 적용 전 경험치

        Returns:
            경험치 적용 결과
        """
        self.enforce_non_negative("exp", raw_amount)
        user = self.state.user

        multiplier = self.multiplier_provider()
        effective = int(math.floor(raw_amount * multiplier))

        old_level = user.level
        old_rank = user.rank

        user.exp += effective
        while user.exp >= user.exp_to_next_level:
            user.exp -= user.exp_to_next_level
            user.level += 1
            user.exp_to_next_level = exp_to_next_level(user.level)

        grant = ExpGrant(raw=raw_amount, multiplier=multiplier, effective=effective)
        self.bus.emit(GameEventType.EXP_GAINED, raw=raw_amount, effective=effective, multiplier=multiplier)

        if user.level > old_level:
            grant.level_up = LevelUpResult(
                old_level=old_level,
                new_level=user.level,
                old_rank=old_rank,
                new_rank=user.rank,
            )
            logger.info(
                f"Level up: user={user.id}, {old_level} -> {user.level}, "
                f"rank={user.rank.value}"
            )
            self.bus.emit(GameEventType.LEVEL_UP, level_up=grant.level_up)
            if grant.level_up.rank_changed:
                self.bus.emit(GameEventType.RANK_UP, old_rank=old_rank, new_rank=user.rank)

        logger.debug(
            f"EXP applied: user={user.id}, raw={raw_amount}, x{multiplier} -> +{effective} "
            f"(exp {user.exp}/{user.exp_to_next_level})"
        )
        return grant

    def add_gold(self, amount: int) -> int:
        """골드 누적 (배율 없음)"""
        self.enforce_non_negative("gold", amount)
        user = self.state.user
        user.gold += amount
        if amount:
            self.bus.emit(GameEventType.GOLD_GAINED, amount=amount, total=user.gold)
        return user.gold

    def gold_for_exp(self, exp: int) -> int:
        """현재 레벨/랭크 기준 경험치 → 골드 환산"""
        user = self.state.user
        return max(0, self.gold_formula(exp, user.level, user.rank))

    def increase_stat_free(self, stat: Stat, amount: int) -> StatExpResult:
        """
        능력치 경험치 적용

        능력치마다 독립적으로 STAT_EXP_PER_LEVEL 단위로 레벨업합니다.

        Args:
            stat: 대상 능력치
            amount: 능력치 경험치

        Returns:
            능력치 경험치 적용 결과
        """
        self.enforce_non_negative("stat_exp", amount)
        stats = self.state.user.stats
        step = PROGRESSION.STAT_EXP_PER_LEVEL

        old_level = stats.levels[stat]
        stats.exp[stat] += amount
        while stats.exp[stat] >= step:
            stats.exp[stat] -= step
            stats.levels[stat] += 1

        result = StatExpResult(stat=stat, gained=amount, old_level=old_level, new_level=stats.levels[stat])
        if result.leveled_up:
            logger.info(f"Stat level up: {stat.value} {old_level} -> {result.new_level}")
            self.bus.emit(GameEventType.STAT_LEVEL_UP, result=result)
        return result
