"""스냅샷 직렬화 보조 함수"""
from datetime import date, datetime
from typing import Optional


def dt_to_str(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def str_to_dt(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def date_to_str(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def str_to_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None
