"""날짜 경계 계산 (일/주 단위)"""
from datetime import date, datetime, time, timedelta


def week_start(day: date) -> date:
    """해당 날짜가 속한 주의 시작일 (일요일)"""
    # weekday(): 월=0 ... 일=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_day(moment: datetime) -> datetime:
    """같은 날 23:59:59 (tzinfo 유지)"""
    return datetime.combine(moment.date(), time(23, 59, 59), tzinfo=moment.tzinfo)


def is_yesterday(day: date, today: date) -> bool:
    return today - day == timedelta(days=1)
