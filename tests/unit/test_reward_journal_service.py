"""
보상 일지 테스트
"""
from datetime import date, datetime

from service.state.enums import DailyWinCategory, Difficulty, FailureReason, Stat
from service.state.game_state import GameState
from service.state.journal_state import RewardJournalEntry

TODAY = date(2024, 1, 3)


def _complete_day(engine, quest_factory):
    """데일리 윈 4종, 능력치 작업 5종, 메인/사이드/데일리 퀘스트 완료"""
    for category in DailyWinCategory:
        engine.daily_wins.mark_daily_win(category)
    for stat in Stat:
        task = engine.add_task(f"{stat.value} 작업", stat, Difficulty.EASY).value
        assert engine.complete_task(task.id).ok

    main = quest_factory(title="메인", is_main_quest=True)
    side = quest_factory(title="사이드")
    for quest in (main, side):
        engine.start_quest(quest.id)
        assert engine.complete_quest(quest.id).ok
    daily = quest_factory(title="데일리", is_daily=True)
    assert engine.complete_quest(daily.id).ok


class TestSetDailyReward:

    def test_set_and_replace(self, engine):
        """같은 날짜에 다시 설정하면 내용만 교체"""
        first = engine.set_daily_reward(TODAY, "  케이크 한 조각 ").value
        second = engine.set_daily_reward(TODAY, "영화 보기").value

        assert first is second
        assert second.custom_reward == "영화 보기"
        assert len(engine.state.reward_journal) == 1
        assert engine.get_daily_reward_entry() is second

    def test_blank_reward_rejected(self, engine):
        assert engine.set_daily_reward(TODAY, " ").reason == FailureReason.INVALID_ARGUMENT

    def test_past_day_rejected(self, engine):
        result = engine.set_daily_reward(date(2024, 1, 2), "어제 보상")

        assert result.reason == FailureReason.INVALID_ARGUMENT
        assert engine.state.reward_journal == []

    def test_future_day_allowed(self, engine):
        assert engine.set_daily_reward(date(2024, 1, 10), "주말 여행").ok
        assert engine.get_daily_reward_entry() is None


class TestClaimDailyReward:

    def test_no_reward_set(self, engine):
        assert engine.claim_daily_reward().reason == FailureReason.NOT_FOUND

    def test_future_claim_rejected(self, engine):
        engine.set_daily_reward(date(2024, 1, 4), "내일 보상")

        assert engine.claim_daily_reward(date(2024, 1, 4)).reason == FailureReason.INVALID_ARGUMENT

    def test_incomplete_day_rejected(self, engine, quest_factory):
        """목표를 하나라도 못 채우면 수령 불가"""
        engine.set_daily_reward(TODAY, "게임 1시간")
        for category in DailyWinCategory:
            engine.daily_wins.mark_daily_win(category)

        result = engine.claim_daily_reward()

        assert result.reason == FailureReason.INVALID_TRANSITION
        assert not engine.get_daily_reward_entry().claimed

    def test_claim_after_completing_day(self, engine, clock, quest_factory):
        engine.set_daily_reward(TODAY, "게임 1시간")
        _complete_day(engine, quest_factory)

        assert engine.check_daily_completion()
        result = engine.claim_daily_reward()

        entry = result.value
        assert result.ok
        assert entry.claimed and entry.completed
        assert entry.claimed_at == clock.now()
        assert engine.claim_daily_reward().reason == FailureReason.INVALID_TRANSITION
        assert engine.set_daily_reward(TODAY, "다른 보상").reason == FailureReason.INVALID_TRANSITION

    def test_past_day_cannot_be_claimed(self, engine, clock, quest_factory):
        """자정이 지나면 어제 보상은 수령 불가"""
        engine.set_daily_reward(TODAY, "게임 1시간")
        _complete_day(engine, quest_factory)
        clock.set(datetime(2024, 1, 4, 0, 10))

        assert not engine.check_daily_completion(TODAY)
        assert engine.claim_daily_reward(TODAY).reason == FailureReason.INVALID_TRANSITION


class TestCompletionDetails:

    def test_partial_progress(self, engine, quest_factory):
        engine.daily_wins.mark_daily_win(DailyWinCategory.MENTAL)
        task = engine.add_task("산책", Stat.PHYSICAL, Difficulty.EASY).value
        engine.complete_task(task.id)
        main = quest_factory(is_main_quest=True)
        engine.start_quest(main.id)
        engine.complete_quest(main.id)

        details = engine.get_daily_completion_details()

        assert details.completed_daily_wins == [DailyWinCategory.MENTAL]
        assert DailyWinCategory.PHYSICAL in details.missing_daily_wins
        assert details.completed_attributes == [Stat.PHYSICAL]
        assert (details.main_quest, details.side_quest, details.daily_quests) == (True, False, False)
        assert not details.overall

    def test_daily_win_task_does_not_count_as_attribute(self, engine):
        """데일리 윈 physical 작업은 능력치 physical 목표로 집계되지 않음"""
        task = engine.add_task("달리기", DailyWinCategory.PHYSICAL, Difficulty.EASY).value
        engine.complete_task(task.id)

        details = engine.get_daily_completion_details()

        assert DailyWinCategory.PHYSICAL in details.completed_daily_wins
        assert Stat.PHYSICAL in details.missing_attributes

    def test_full_day(self, engine, quest_factory):
        _complete_day(engine, quest_factory)

        details = engine.get_daily_completion_details()

        assert details.missing_daily_wins == []
        assert details.missing_attributes == []
        assert details.overall


class TestJournalStats:

    def test_empty(self, engine):
        stats = engine.get_reward_journal_stats()

        assert (stats.total_rewards, stats.current_streak, stats.weekly_missed) == (0, 0, 0)

    def test_streaks_and_weekly(self, engine):
        """오늘 아직 수령하지 않은 보상과 미래 보상은 연속/주간 집계에서 제외"""
        history = [
            (date(2023, 12, 25), True),
            (date(2023, 12, 26), True),
            (date(2023, 12, 27), True),
            (date(2023, 12, 30), False),
            (date(2024, 1, 1), True),
            (date(2024, 1, 2), True),
            (date(2024, 1, 3), False),
            (date(2024, 1, 5), False),
        ]
        engine.state.reward_journal = [
            RewardJournalEntry(id=f"r{i}", day=day, custom_reward="보상", completed=claimed, claimed=claimed)
            for i, (day, claimed) in enumerate(reversed(history))
        ]

        stats = engine.get_reward_journal_stats()

        assert stats.total_rewards == 8
        assert stats.claimed_rewards == 5
        assert stats.current_streak == 2
        assert stats.longest_streak == 3
        assert stats.weekly_earned == 3
        assert stats.weekly_missed == 1

    def test_journal_in_snapshot(self, engine):
        engine.set_daily_reward(TODAY, "케이크")

        restored = GameState.from_dict(engine.snapshot())

        assert restored.find_reward_entry(TODAY).custom_reward == "케이크"
