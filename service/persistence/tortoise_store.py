"""
Tortoise ORM 상태 저장소

소유자 키 하나당 game_snapshot 행 하나를 유지합니다.
Tortoise.init 은 호출자(bot.py 또는 테스트)가 담당합니다.
"""
import logging
from typing import Optional

from tortoise.exceptions import BaseORMException

from exceptions import PersistenceUnavailableError
from models.repos.snapshot_repo import get_snapshot, upsert_snapshot
from service.persistence.state_store import StateStore

logger = logging.getLogger(__name__)


class TortoiseStateStore(StateStore):

    def __init__(self, owner_key: str = "default"):
        self.owner_key = owner_key

    async def load(self) -> Optional[dict]:
        try:
            snapshot = await get_snapshot(self.owner_key)
        except BaseORMException as e:
            raise PersistenceUnavailableError("tortoise", str(e)) from e

        if snapshot is None:
            logger.info(f"No stored snapshot for owner '{self.owner_key}'")
            return None
        return snapshot.payload

    async def save(self, snapshot: dict) -> bool:
        try:
            await upsert_snapshot(self.owner_key, snapshot)
        except BaseORMException as e:
            logger.error(f"Failed to save snapshot for owner '{self.owner_key}': {e}", exc_info=True)
            return False
        return True
