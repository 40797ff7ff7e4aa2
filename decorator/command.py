"""
엔진 명령 데코레이터

모든 공개 명령은 엔진 잠금 안에서 실행되며, 주입된 시계의 현재 시각을 받습니다.
명령/조회 직전에 틱 사이에 지난 마감과 날짜 변경을 먼저 반영합니다.
규칙 위반 예외는 CommandResult로 변환됩니다.
"""
import functools
import logging
from typing import Callable

from exceptions import RuleViolationError
from service.result import CommandResult

logger = logging.getLogger(__name__)


def engine_command(sweep: bool = True):
    """
    상태 변경 명령

    실행 전 점검(마감 처리, 데일리 윈 초기화) 후 명령을 실행합니다.
    성공 시 마감 점검을 한 번 더 실행하고 스냅샷 저장을 예약합니다.
    실패 시 명령에 의한 상태 변경은 없으며 거부 사유가 담긴 결과를 반환합니다.

    Args:
        sweep: 명령 전후 점검 실행 여부 (점검 자체를 수행하는 명령은 False)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(engine, *args, **kwargs) -> CommandResult:
            with engine.lock:
                now = engine.clock.now()
                caught_up = sweep and engine.scheduler.catch_up(now)
                try:
                    value = func(engine, now, *args, **kwargs)
                except RuleViolationError as e:
                    logger.info(f"Command rejected: {func.__name__} [{e.reason.value}] {e.message}")
                    if caught_up:
                        engine.persist()
                    return CommandResult.failure(e.reason, e.message)

                if sweep:
                    engine.penalty.check_curse_status(now)
                engine.persist()
                return CommandResult.success(value)

        return wrapper

    return decorator


def engine_query(func: Callable) -> Callable:
    """조회 (잠금 + 현재 시각 주입, 실행 전 점검으로 상태가 바뀐 경우에만 저장)"""
    @functools.wraps(func)
    def wrapper(engine, *args, **kwargs):
        with engine.lock:
            now = engine.clock.now()
            if engine.scheduler.catch_up(now):
                engine.persist()
            return func(engine, now, *args, **kwargs)

    return wrapper
