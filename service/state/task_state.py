"""플래너 작업(독립 작업) 상태 모델"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from service.state.codec import date_to_str, dt_to_str, str_to_date, str_to_dt
from service.state.enums import DailyWinCategory, Difficulty
from service.state.quest_state import TaskCategory, category_to_str, str_to_category


@dataclass
class PlannerTask:
    """플래너 작업"""

    id: str
    title: str
    category: TaskCategory
    difficulty: Difficulty
    exp_reward: int
    scheduled_for: date
    created_at: datetime
    description: str = ""
    deadline: Optional[datetime] = None
    completed: bool = False
    completed_at: Optional[datetime] = None
    missed: bool = False
    missed_at: Optional[datetime] = None

    @property
    def is_daily_win_task(self) -> bool:
        return isinstance(self.category, DailyWinCategory)

    @property
    def is_terminal(self) -> bool:
        return self.completed or self.missed

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": category_to_str(self.category),
            "difficulty": self.difficulty.value,
            "exp_reward": self.exp_reward,
            "scheduled_for": date_to_str(self.scheduled_for),
            "created_at": dt_to_str(self.created_at),
            "deadline": dt_to_str(self.deadline),
            "completed": self.completed,
            "completed_at": dt_to_str(self.completed_at),
            "missed": self.missed,
            "missed_at": dt_to_str(self.missed_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlannerTask":
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            category=str_to_category(data["category"]),
            difficulty=Difficulty(data["difficulty"]),
            exp_reward=int(data["exp_reward"]),
            scheduled_for=str_to_date(data["scheduled_for"]),
            created_at=str_to_dt(data["created_at"]),
            deadline=str_to_dt(data.get("deadline")),
            completed=bool(data.get("completed", False)),
            completed_at=str_to_dt(data.get("completed_at")),
            missed=bool(data.get("missed", False)),
            missed_at=str_to_dt(data.get("missed_at")),
        )
