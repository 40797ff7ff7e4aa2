"""
사용자(플레이어) 상태 모델
"""
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from config import PROGRESSION
from service.progression.leveling import exp_to_next_level, rank_for_level
from service.state.codec import date_to_str, dt_to_str, str_to_date, str_to_dt
from service.state.enums import DailyWinCategory, Rank, Stat


@dataclass
class CharacterStats:
    """능력치 레벨과 능력치별 경험치 누적값"""

    levels: dict[Stat, int] = field(
        default_factory=lambda: {stat: PROGRESSION.INITIAL_STAT_LEVEL for stat in Stat}
    )
    exp: dict[Stat, int] = field(default_factory=lambda: {stat: 0 for stat in Stat})

    def to_dict(self) -> dict:
        data = {}
        for stat in Stat:
            data[stat.value] = self.levels[stat]
            data[f"{stat.value}_exp"] = self.exp[stat]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CharacterStats":
        stats = cls()
        for stat in Stat:
            stats.levels[stat] = int(data.get(stat.value, PROGRESSION.INITIAL_STAT_LEVEL))
            stats.exp[stat] = int(data.get(f"{stat.value}_exp", 0))
        return stats


@dataclass
class DailyWins:
    """오늘의 데일리 윈 달성 여부"""

    completed: dict[DailyWinCategory, bool] = field(
        default_factory=lambda: {category: False for category in DailyWinCategory}
    )

    def is_completed(self, category: DailyWinCategory) -> bool:
        return self.completed[category]

    def all_completed(self) -> bool:
        return all(self.completed.values())

    def clear(self) -> None:
        for category in DailyWinCategory:
            self.completed[category] = False

    def to_dict(self) -> dict:
        return {category.value: done for category, done in self.completed.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "DailyWins":
        wins = cls()
        for category in DailyWinCategory:
            wins.completed[category] = bool(data.get(category.value, False))
        return wins


@dataclass
class UserState:
    """
    플레이어 레코드

    rank는 저장하지 않고 level에서 매번 계산합니다.
    """

    id: str
    name: str
    level: int
    exp: int
    exp_to_next_level: int
    gold: int
    stats: CharacterStats
    streak_days: int
    longest_streak: int
    last_login: datetime
    daily_wins: DailyWins
    last_daily_reset: Optional[date] = None

    @classmethod
    def new(cls, now: datetime, name: str = "Hunter") -> "UserState":
        level = PROGRESSION.INITIAL_LEVEL
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            level=level,
            exp=0,
            exp_to_next_level=exp_to_next_level(level),
            gold=PROGRESSION.INITIAL_GOLD,
            stats=CharacterStats(),
            streak_days=0,
            longest_streak=0,
            last_login=now,
            daily_wins=DailyWins(),
            last_daily_reset=now.date(),
        )

    @property
    def rank(self) -> Rank:
        return rank_for_level(self.level)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "exp": self.exp,
            "exp_to_next_level": self.exp_to_next_level,
            "gold": self.gold,
            "rank": self.rank.value,
            "stats": self.stats.to_dict(),
            "streak_days": self.streak_days,
            "longest_streak": self.longest_streak,
            "last_login": dt_to_str(self.last_login),
            "daily_wins": self.daily_wins.to_dict(),
            "last_daily_reset": date_to_str(self.last_daily_reset),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserState":
        # rank는 level에서 다시 계산되므로 읽지 않음
        return cls(
            id=data["id"],
            name=data.get("name", "Hunter"),
            level=int(data["level"]),
            exp=int(data["exp"]),
            exp_to_next_level=int(data["exp_to_next_level"]),
            gold=int(data.get("gold", 0)),
            stats=CharacterStats.from_dict(data.get("stats", {})),
            streak_days=int(data.get("streak_days", 0)),
            longest_streak=int(data.get("longest_streak", 0)),
            last_login=str_to_dt(data["last_login"]),
            daily_wins=DailyWins.from_dict(data.get("daily_wins", {})),
            last_daily_reset=str_to_date(data.get("last_daily_reset")),
        )
