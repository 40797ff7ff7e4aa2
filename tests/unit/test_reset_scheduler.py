"""
주기 틱 / 일간·주간 리셋 테스트
"""
from datetime import date, datetime, timedelta

from service.scheduler.calendar import end_of_day, is_yesterday, week_start
from service.state.enums import DailyWinCategory, QuestKind, Stat


class TestCalendar:

    def test_week_starts_sunday(self):
        assert week_start(date(2024, 1, 3)) == date(2023, 12, 31)
        assert week_start(date(2023, 12, 31)) == date(2023, 12, 31)
        assert week_start(date(2024, 1, 6)) == date(2023, 12, 31)
        assert week_start(date(2024, 1, 7)) == date(2024, 1, 7)

    def test_end_of_day(self):
        assert end_of_day(datetime(2024, 1, 3, 10, 0)) == datetime(2024, 1, 3, 23, 59, 59)

    def test_is_yesterday(self):
        assert is_yesterday(date(2023, 12, 31), date(2024, 1, 1))
        assert not is_yesterday(date(2024, 1, 1), date(2024, 1, 1))


class TestOnTick:

    def test_same_day_keeps_daily_wins(self, engine):
        engine.daily_wins.mark_daily_win(DailyWinCategory.MENTAL)

        engine.on_tick()

        assert engine.is_daily_win_completed(DailyWinCategory.MENTAL)

    def test_day_rollover_resets_daily_wins(self, engine, clock):
        engine.daily_wins.mark_daily_win(DailyWinCategory.MENTAL)
        clock.set(datetime(2024, 1, 4, 0, 3))

        engine.on_tick()

        assert not engine.is_daily_win_completed(DailyWinCategory.MENTAL)
        assert engine.state.last_tick_day == date(2024, 1, 4)

    def test_week_rollover_resets_penalties(self, engine, clock, curse):
        curse()
        clock.set(datetime(2024, 1, 7, 0, 2))

        engine.on_tick()

        penalty = engine.state.penalty
        assert penalty.chance_counter == 0
        assert not penalty.is_cursed
        assert not any(q.kind == QuestKind.RECOVERY for q in engine.state.quests)
        assert engine.state.last_weekly_reset_week == date(2024, 1, 7)

    def test_previous_week_misses_swept_before_reset(self, engine, clock, quest_factory):
        quest = quest_factory(deadline=datetime(2024, 1, 6, 23, 0))
        engine.start_quest(quest.id)
        clock.set(datetime(2024, 1, 7, 0, 1))

        engine.on_tick()

        assert quest.missed
        assert engine.state.penalty.chance_counter == 0

    def test_missing_week_marker_recorded_without_reset(self, engine):
        engine.state.last_weekly_reset_week = None
        engine.state.penalty.chance_counter = 3

        engine.on_tick()

        assert engine.state.last_weekly_reset_week == date(2023, 12, 31)
        assert engine.state.penalty.chance_counter == 3

    def test_tick_sweeps_deadlines(self, engine, clock, quest_factory):
        quest = quest_factory(is_daily=True)
        clock.set(datetime(2024, 1, 4, 0, 5))

        engine.on_tick()

        assert quest.missed
        assert engine.state.penalty.chance_counter == 1


class TestCatchUp:

    def test_nothing_to_do(self, engine, clock):
        """바뀐 것이 없으면 False"""
        assert engine.scheduler.catch_up(clock.now()) is False

    def test_quest_grace_window(self, engine, quest_factory, clock):
        """완료 허용 시간 동안은 실패 처리를 미루고, 지나면 처리"""
        quest = quest_factory(deadline=clock.now() + timedelta(minutes=10))
        engine.start_quest(quest.id)

        clock.advance(minutes=14)
        assert engine.scheduler.catch_up(clock.now()) is False
        assert not quest.missed

        clock.advance(minutes=2)
        assert engine.scheduler.catch_up(clock.now()) is True
        assert quest.missed

    def test_planner_task_has_no_grace(self, engine, clock):
        task = engine.add_task("보고서", Stat.COGNITIVE, deadline=clock.now() + timedelta(minutes=10)).value
        clock.advance(minutes=11)

        assert engine.scheduler.catch_up(clock.now()) is True
        assert task.missed
