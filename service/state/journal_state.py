"""보상 일지 상태 모델"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from service.state.codec import date_to_str, dt_to_str, str_to_date, str_to_dt


@dataclass
class RewardJournalEntry:
    """
    하루 단위 자기 보상

    day 의 목표(데일리 윈, 능력치, 퀘스트)를 모두 달성하면 수령할 수 있습니다.
    """

    id: str
    day: date
    custom_reward: str
    completed: bool = False
    claimed: bool = False
    claimed_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "day": date_to_str(self.day),
            "custom_reward": self.custom_reward,
            "completed": self.completed,
            "claimed": self.claimed,
            "claimed_at": dt_to_str(self.claimed_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RewardJournalEntry":
        return cls(
            id=data["id"],
            day=str_to_date(data["day"]),
            custom_reward=data["custom_reward"],
            completed=bool(data.get("completed", False)),
            claimed=bool(data.get("claimed", False)),
            claimed_at=str_to_dt(data.get("claimed_at")),
        )
