"""
퀘스트 상태 모델

QuestKind로 종류를 구분하며, is_main_quest / is_daily / is_recovery_quest는
kind에서 파생됩니다.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

from service.state.codec import dt_to_str, str_to_dt
from service.state.enums import (
    DailyWinCategory, Difficulty, QuestKind, QuestStatus, QuotaSlot, Stat,
)

TaskCategory = Union[DailyWinCategory, Stat]


def category_to_str(category: Optional[TaskCategory]) -> Optional[dict]:
    if category is None:
        return None
    kind = "daily_win" if isinstance(category, DailyWinCategory) else "attribute"
    return {"type": kind, "value": category.value}


def str_to_category(data: Optional[dict]) -> Optional[TaskCategory]:
    if not data:
        return None
    if data["type"] == "daily_win":
        return DailyWinCategory(data["value"])
    return Stat(data["value"])


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class QuestTask:
    """퀘스트 하위 작업"""

    id: str
    title: str
    description: str = ""
    completed: bool = False
    completed_at: Optional[datetime] = None
    category: Optional[TaskCategory] = None
    difficulty: Optional[Difficulty] = None
    deadline: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "completed_at": dt_to_str(self.completed_at),
            "category": category_to_str(self.category),
            "difficulty": self.difficulty.value if self.difficulty else None,
            "deadline": dt_to_str(self.deadline),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuestTask":
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            completed=bool(data.get("completed", False)),
            completed_at=str_to_dt(data.get("completed_at")),
            category=str_to_category(data.get("category")),
            difficulty=Difficulty(data["difficulty"]) if data.get("difficulty") else None,
            deadline=str_to_dt(data.get("deadline")),
        )


@dataclass
class Quest:
    """퀘스트"""

    id: str
    title: str
    description: str
    exp_reward: int
    kind: QuestKind
    created_at: datetime
    difficulty: Difficulty = Difficulty.NORMAL
    category: Optional[DailyWinCategory] = None
    started: bool = False
    completed: bool = False
    missed: bool = False
    tasks: list[QuestTask] = field(default_factory=list)
    deadline: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    missed_at: Optional[datetime] = None

    @property
    def is_main_quest(self) -> bool:
        return self.kind == QuestKind.MAIN

    @property
    def is_daily(self) -> bool:
        return self.kind == QuestKind.DAILY

    @property
    def is_recovery_quest(self) -> bool:
        return self.kind == QuestKind.RECOVERY

    @property
    def quota_slot(self) -> Optional[QuotaSlot]:
        """일일 한도 슬롯 (데일리 퀘스트는 한도 없음)"""
        if self.kind == QuestKind.MAIN:
            return QuotaSlot.MAIN
        if self.kind in (QuestKind.SIDE, QuestKind.RECOVERY):
            return QuotaSlot.SIDE
        return None

    @property
    def status(self) -> QuestStatus:
        if self.completed:
            return QuestStatus.COMPLETED
        if self.missed:
            return QuestStatus.MISSED
        if self.started:
            return QuestStatus.STARTED
        return QuestStatus.NOT_STARTED

    @property
    def is_terminal(self) -> bool:
        return self.completed or self.missed

    @property
    def in_progress(self) -> bool:
        return self.started and not self.is_terminal

    def all_tasks_completed(self) -> bool:
        return all(task.completed for task in self.tasks)

    def find_task(self, task_id: str) -> Optional[QuestTask]:
        return next((task for task in self.tasks if task.id == task_id), None)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "exp_reward": self.exp_reward,
            "kind": self.kind.value,
            "difficulty": self.difficulty.value,
            "category": self.category.value if self.category else None,
            "started": self.started,
            "completed": self.completed,
            "missed": self.missed,
            "tasks": [task.to_dict() for task in self.tasks],
            "deadline": dt_to_str(self.deadline),
            "created_at": dt_to_str(self.created_at),
            "started_at": dt_to_str(self.started_at),
            "completed_at": dt_to_str(self.completed_at),
            "missed_at": dt_to_str(self.missed_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Quest":
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            exp_reward=int(data["exp_reward"]),
            kind=QuestKind(data["kind"]),
            difficulty=Difficulty(data.get("difficulty", Difficulty.NORMAL.value)),
            category=DailyWinCategory(data["category"]) if data.get("category") else None,
            started=bool(data.get("started", False)),
            completed=bool(data.get("completed", False)),
            missed=bool(data.get("missed", False)),
            tasks=[QuestTask.from_dict(task) for task in data.get("tasks", [])],
            deadline=str_to_dt(data.get("deadline")),
            created_at=str_to_dt(data["created_at"]),
            started_at=str_to_dt(data.get("started_at")),
            completed_at=str_to_dt(data.get("completed_at")),
            missed_at=str_to_dt(data.get("missed_at")),
        )
