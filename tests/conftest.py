"""
pytest 설정 및 공통 픽스처 정의
"""
import sys
from datetime import datetime
from pathlib import Path
from typing import AsyncGenerator

import pytest

# 프로젝트 루트를 Python 경로에 추가
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from service.clock import FixedClock  # noqa: E402
from service.engine import SoloistEngine  # noqa: E402
from service.persistence.state_store import InMemoryStateStore  # noqa: E402

# 2024-01-03 (수요일) 10:00, 주 시작일은 2023-12-31 (일요일)
BASE_TIME = datetime(2024, 1, 3, 10, 0, 0)


# =============================================================================
# pytest 설정
# =============================================================================


def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


# =============================================================================
# 데이터베이스 픽스처
# =============================================================================


@pytest.fixture(scope="function")
async def test_db() -> AsyncGenerator[None, None]:
    """
    테스트용 인메모리 SQLite 데이터베이스
    각 테스트 함수마다 새로운 DB 생성
    """
    from tortoise import Tortoise

    await Tortoise.init(
        db_url="sqlite://:memory:",
        modules={"models": ["models"]}
    )
    await Tortoise.generate_schemas()

    yield

    await Tortoise.close_connections()


# =============================================================================
# 엔진 픽스처
# =============================================================================


@pytest.fixture
def clock() -> FixedClock:
    """BASE_TIME 으로 고정된 시계"""
    return FixedClock(BASE_TIME)


@pytest.fixture
def store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def engine(clock, store) -> SoloistEngine:
    """새 게임 상태의 엔진"""
    return SoloistEngine(clock=clock, store=store)


@pytest.fixture
def quest_factory(engine):
    """퀘스트 생성 후 Quest 객체 반환"""

    def _create_quest(
        title: str = "테스트 퀘스트",
        is_main_quest: bool = False,
        exp_reward: int = 50,
        deadline: datetime | None = None,
        is_daily: bool = False,
        **kwargs,
    ):
        result = engine.add_quest(
            title=title,
            is_main_quest=is_main_quest,
            exp_reward=exp_reward,
            deadline=deadline,
            is_daily=is_daily,
            **kwargs,
        )
        assert result.ok, result.message
        return result.value

    return _create_quest


@pytest.fixture
def curse(engine, clock):
    """마감 실패 5회로 저주 상태 만들기"""

    def _curse():
        for i in range(5):
            quest = engine.add_quest(
                title=f"실패 퀘스트 {i}", exp_reward=10, deadline=clock.now(), is_daily=False,
            ).value
            engine.state.find_quest(quest.id).started = True
            clock.advance(seconds=1)
            engine.check_curse_status()
        assert engine.state.penalty.is_cursed

    return _curse
