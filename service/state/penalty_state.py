"""그림자 페널티 상태 모델"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from service.state.codec import dt_to_str, str_to_dt


@dataclass
class PenaltyState:
    """
    페널티 상태

    chance_counter: 이번 주 마감 실패 횟수 (0..5)
    """

    chance_counter: int = 0
    is_cursed: bool = False
    has_shadow_fatigue: bool = False
    shadow_fatigue_until: Optional[datetime] = None
    cursed_at: Optional[datetime] = None
    side_quests_locked_until: Optional[datetime] = None
    missed_main_quest_streak: int = 0

    def side_quests_locked(self, now: datetime) -> bool:
        return self.side_quests_locked_until is not None and now < self.side_quests_locked_until

    def to_dict(self) -> dict:
        return {
            "chance_counter": self.chance_counter,
            "is_cursed": self.is_cursed,
            "has_shadow_fatigue": self.has_shadow_fatigue,
            "shadow_fatigue_until": dt_to_str(self.shadow_fatigue_until),
            "cursed_at": dt_to_str(self.cursed_at),
            "side_quests_locked_until": dt_to_str(self.side_quests_locked_until),
            "missed_main_quest_streak": self.missed_main_quest_streak,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PenaltyState":
        return cls(
            chance_counter=int(data.get("chance_counter", 0)),
            is_cursed=bool(data.get("is_cursed", False)),
            has_shadow_fatigue=bool(data.get("has_shadow_fatigue", False)),
            shadow_fatigue_until=str_to_dt(data.get("shadow_fatigue_until")),
            cursed_at=str_to_dt(data.get("cursed_at")),
            side_quests_locked_until=str_to_dt(data.get("side_quests_locked_until")),
            missed_main_quest_streak=int(data.get("missed_main_quest_streak", 0)),
        )
