"""
레벨 곡선 / 경험치 / 골드 / 능력치 테스트
"""
import pytest

from service.event.event_bus import GameEventType
from service.progression.leveling import exp_to_next_level, rank_exp_bonus, rank_for_level
from service.progression.progression_service import default_gold_formula
from service.state.enums import FailureReason, Rank, Stat


class TestExpCurve:

    def test_first_tier(self):
        assert exp_to_next_level(1) == 20
        assert exp_to_next_level(2) == 80
        assert exp_to_next_level(30) == 18_000

    def test_second_tier_starts_from_base(self):
        assert exp_to_next_level(31) == 18 * 1 + 18_000

    def test_strictly_increasing(self):
        values = [exp_to_next_level(level) for level in range(1, 500)]
        assert all(a < b for a, b in zip(values, values[1:]))


class TestRank:

    @pytest.mark.parametrize(
        "level, rank",
        [
            (1, Rank.F), (14, Rank.F), (15, Rank.E), (24, Rank.E), (25, Rank.D),
            (40, Rank.C), (60, Rank.B), (80, Rank.A), (100, Rank.S),
            (150, Rank.SS), (199, Rank.SS), (200, Rank.SSS), (999, Rank.SSS),
        ],
    )
    def test_rank_for_level(self, level, rank):
        assert rank_for_level(level) == rank

    def test_rank_bonus(self):
        assert rank_exp_bonus(Rank.F) == 1.0
        assert rank_exp_bonus(Rank.C) == pytest.approx(1.3)
        assert rank_exp_bonus(Rank.SSS) == pytest.approx(1.8)


class TestAddExp:

    def test_overflow_into_level_up(self, engine):
        """레벨 1, 90/100 에서 30 획득 → 레벨 2, 20"""
        user = engine.state.user
        user.level, user.exp, user.exp_to_next_level = 1, 90, 100

        result = engine.add_exp(30)

        assert result.ok
        assert user.level == 2
        assert user.exp == 20
        assert user.exp_to_next_level == exp_to_next_level(2)

    def test_multiple_level_ups(self, engine):
        result = engine.add_exp(20 + 80 + 180)

        assert result.value.level_up.levels_gained == 3
        assert engine.state.user.level == 4
        assert engine.state.user.exp == 0

    def test_cursed_credits_half(self, engine):
        engine.state.penalty.is_cursed = True

        grant = engine.add_exp(100).value

        assert grant.multiplier == 0.5
        assert grant.effective == 50

    def test_shadow_fatigue_floor(self, engine):
        engine.state.penalty.has_shadow_fatigue = True
        engine.state.penalty.shadow_fatigue_until = engine.clock.now().replace(hour=23)

        assert engine.add_exp(30).value.effective == 22

    def test_curse_dominates_fatigue(self, engine):
        engine.state.penalty.is_cursed = True
        engine.state.penalty.has_shadow_fatigue = True
        engine.state.penalty.shadow_fatigue_until = engine.clock.now().replace(hour=23)

        assert engine.add_exp(10).value.multiplier == 0.5

    def test_negative_rejected_without_change(self, engine):
        before = engine.snapshot()

        result = engine.add_exp(-5)

        assert not result.ok
        assert result.reason == FailureReason.INVALID_ARGUMENT
        assert engine.snapshot() == before

    def test_rank_up_event(self, engine):
        ranks = []
        engine.bus.subscribe(GameEventType.RANK_UP, lambda event: ranks.append(event.data["new_rank"]))
        user = engine.state.user
        user.level, user.exp, user.exp_to_next_level = 14, 0, exp_to_next_level(14)

        engine.add_exp(exp_to_next_level(14))

        assert user.level == 15
        assert user.rank == Rank.E
        assert ranks == [Rank.E]


class TestGold:

    def test_default_formula(self):
        assert default_gold_formula(52, 1, Rank.F) == 20
        assert default_gold_formula(4, 1, Rank.F) == 0

    def test_add_gold(self, engine):
        assert engine.add_gold(50).value == 150

    def test_negative_gold_rejected(self, engine):
        result = engine.add_gold(-1)

        assert result.reason == FailureReason.INVALID_ARGUMENT
        assert engine.state.user.gold == 100


class TestStatExp:

    def test_overflow_into_stat_levels(self, engine):
        result = engine.increase_stat_free(Stat.PHYSICAL, 250).value

        stats = engine.state.user.stats
        assert result.leveled_up
        assert stats.levels[Stat.PHYSICAL] == 3
        assert stats.exp[Stat.PHYSICAL] == 50
        assert stats.levels[Stat.SOCIAL] == 1

    def test_no_penalty_multiplier(self, engine):
        engine.state.penalty.is_cursed = True

        engine.increase_stat_free(Stat.COGNITIVE, 40)

        assert engine.state.user.stats.exp[Stat.COGNITIVE] == 40
