"""
GameSnapshot Repository

스냅샷 데이터 접근 레이어입니다.
"""
from typing import Optional

from models import GameSnapshot


async def get_snapshot(owner_key: str) -> Optional[GameSnapshot]:
    """
    소유자 키로 스냅샷 조회

    Args:
        owner_key: 스냅샷 소유자 키

    Returns:
        GameSnapshot 객체 또는 None
    """
    return await GameSnapshot.get_or_none(owner_key=owner_key)


async def upsert_snapshot(owner_key: str, payload: dict) -> GameSnapshot:
    """
    스냅샷 저장 (없으면 생성, 있으면 덮어쓰기)

    Args:
        owner_key: 스냅샷 소유자 키
        payload: 버전이 포함된 스냅샷 dict

    Returns:
        저장된 GameSnapshot 객체
    """
    snapshot, _ = await GameSnapshot.update_or_create(
        owner_key=owner_key,
        defaults={"version": payload.get("version", 0), "payload": payload},
    )
    return snapshot
