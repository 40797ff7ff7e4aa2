"""
상태 저장소 인터페이스

엔진은 스냅샷 dict를 저장소에 넘기기만 하며, 메모리 상태가 항상 기준입니다.
"""
import copy
import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class StateStore(ABC):
    """스냅샷 저장소"""

    @abstractmethod
    async def load(self) -> Optional[dict]:
        """
        저장된 스냅샷 조회

        Returns:
            스냅샷 dict 또는 None (저장된 상태 없음)

        Raises:
            PersistenceUnavailableError: 저장소에 접근할 수 없음
        """

    @abstractmethod
    async def save(self, snapshot: dict) -> bool:
        """
        스냅샷 저장

        Returns:
            저장 성공 여부 (실패는 예외 대신 False)
        """


class InMemoryStateStore(StateStore):
    """메모리 저장소 (테스트 및 저장소 없이 실행할 때 사용)"""

    def __init__(self, snapshot: Optional[dict] = None):
        self._snapshot = copy.deepcopy(snapshot)
        self.save_count = 0

    async def load(self) -> Optional[dict]:
        return copy.deepcopy(self._snapshot)

    async def save(self, snapshot: dict) -> bool:
        self._snapshot = copy.deepcopy(snapshot)
        self.save_count += 1
        logger.debug(f"Snapshot saved in memory (#{self.save_count})")
        return True
