"""
실행 환경 설정

.env / 환경변수에서 봇 실행에 필요한 값을 읽어옵니다.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """런타임 설정"""

    discord_token: Optional[str]
    database_url: str
    owner_key: str
    timezone: Optional[str]
    tick_minutes: int
    log_level: int


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    환경변수에서 설정 로드

    Args:
        env_file: .env 파일 경로 (None이면 기본 탐색)

    Returns:
        Settings
    """
    load_dotenv(env_file)

    log_level_name = (os.getenv("LOG_LEVEL") or "INFO").upper()
    log_level = logging.getLevelName(log_level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    return Settings(
        discord_token=os.getenv("DISCORD_TOKEN"),
        database_url=os.getenv("DATABASE_URL") or "sqlite://soloist.sqlite3",
        owner_key=os.getenv("SOLOIST_OWNER_KEY") or "default",
        timezone=os.getenv("SOLOIST_TIMEZONE") or None,
        tick_minutes=int(os.getenv("SOLOIST_TICK_MINUTES") or 5),
        log_level=log_level,
    )
