"""
스냅샷 비동기 저장

명령은 동기적으로 끝나고, 저장은 실행 중인 이벤트 루프에 작업으로 예약됩니다.
루프가 없으면 가장 최근 스냅샷만 보관했다가 flush() 때 저장합니다.
"""
import asyncio
import logging
from typing import Optional

from service.persistence.state_store import StateStore

logger = logging.getLogger(__name__)


class SnapshotWriter:

    def __init__(self, store: StateStore):
        self.store = store
        self._pending: Optional[dict] = None
        self._tasks: set[asyncio.Task] = set()
        self._lock = asyncio.Lock()

    @property
    def has_pending(self) -> bool:
        return self._pending is not None or bool(self._tasks)

    def submit(self, snapshot: dict) -> None:
        """스냅샷 저장 예약 (제출 순서대로 저장됨)"""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._pending = snapshot
            return

        self._pending = None
        task = loop.create_task(self._save(snapshot))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _save(self, snapshot: dict) -> bool:
        async with self._lock:
            saved = await self.store.save(snapshot)
        if not saved:
            logger.warning("Snapshot save failed; in-memory state remains authoritative")
        return saved

    async def flush(self) -> bool:
        """예약된 저장과 보류 중인 스냅샷을 모두 저장"""
        results = []
        if self._tasks:
            results.extend(await asyncio.gather(*list(self._tasks)))
        if self._pending is not None:
            snapshot, self._pending = self._pending, None
            results.append(await self._save(snapshot))
        return all(results)
