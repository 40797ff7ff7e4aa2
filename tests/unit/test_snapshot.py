"""
스냅샷 직렬화 / 엔진 로드 테스트
"""
from datetime import timedelta

import pytest

from exceptions import SnapshotVersionError
from service.engine import SoloistEngine
from service.persistence.state_store import InMemoryStateStore
from service.state.enums import DailyWinCategory, Difficulty, QuestKind, Stat
from service.state.game_state import SNAPSHOT_VERSION, GameState


def _populated(engine, clock, quest_factory):
    quest = quest_factory(is_main_quest=True, deadline=clock.now() + timedelta(hours=5))
    engine.add_quest_task(quest.id, "하위 작업", category=Stat.SOCIAL, difficulty=Difficulty.EASY)
    engine.start_quest(quest.id)
    engine.add_task("명상", DailyWinCategory.MENTAL, Difficulty.EASY)
    engine.add_task("코딩", Stat.COGNITIVE, Difficulty.HARD)
    engine.state.penalty.chance_counter = 2
    engine.state.penalty.side_quests_locked_until = clock.now() + timedelta(days=1)


class TestSnapshotFormat:

    def test_versioned_snake_case(self, engine):
        data = engine.snapshot()

        assert data["version"] == SNAPSHOT_VERSION
        assert set(data) == {"version", "user", "quests", "tasks", "penalty", "reward_journal", "schedule"}
        assert "exp_to_next_level" in data["user"]
        assert data["user"]["last_login"] == "2024-01-03T10:00:00"
        assert data["user"]["rank"] == "F"

    def test_round_trip(self, engine, clock, quest_factory):
        _populated(engine, clock, quest_factory)
        data = engine.snapshot()

        restored = GameState.from_dict(data)

        assert restored.to_dict() == data
        assert restored.tasks[0].category == DailyWinCategory.MENTAL
        assert restored.tasks[1].category == Stat.COGNITIVE
        assert restored.quests[0].tasks[0].category == Stat.SOCIAL

    def test_unknown_version_rejected(self, engine):
        data = engine.snapshot()
        data["version"] = 99

        with pytest.raises(SnapshotVersionError):
            GameState.from_dict(data)


class TestEngineLoad:

    async def test_new_game_when_store_empty(self, clock):
        store = InMemoryStateStore()

        engine = await SoloistEngine.load(store, clock=clock)
        await engine.flush()

        assert engine.state.user.name == "Hunter"
        assert engine.state.user.gold == 100
        assert (await store.load())["version"] == SNAPSHOT_VERSION

    async def test_restores_saved_state(self, engine, clock, quest_factory):
        _populated(engine, clock, quest_factory)
        store = InMemoryStateStore(engine.snapshot())

        loaded = await SoloistEngine.load(store, clock=clock)

        assert loaded.snapshot() == engine.snapshot()

    async def test_load_runs_curse_check(self, engine, clock, quest_factory):
        quest = quest_factory(deadline=clock.now() + timedelta(hours=1))
        engine.start_quest(quest.id)
        store = InMemoryStateStore(engine.snapshot())
        clock.advance(hours=3)

        loaded = await SoloistEngine.load(store, clock=clock)

        assert loaded.state.find_quest(quest.id).missed
        assert loaded.state.penalty.chance_counter == 1

    async def test_cursed_snapshot_without_recovery_gets_one(self, engine, clock):
        engine.state.penalty.is_cursed = True
        engine.state.penalty.chance_counter = 5
        store = InMemoryStateStore(engine.state.to_dict())

        loaded = await SoloistEngine.load(store, clock=clock)

        assert [q.kind for q in loaded.state.quests] == [QuestKind.RECOVERY]
