"""
게임 상태 집합체

User, Quest, PlannerTask, PenaltyState, 보상 일지와 스케줄러 마커를 하나로 묶습니다.
스냅샷은 버전이 붙은 dict 형태로 직렬화됩니다.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from exceptions import SnapshotVersionError
from service.scheduler.calendar import week_start
from service.state.codec import date_to_str, str_to_date
from service.state.journal_state import RewardJournalEntry
from service.state.penalty_state import PenaltyState
from service.state.quest_state import Quest
from service.state.task_state import PlannerTask
from service.state.user_state import UserState

SNAPSHOT_VERSION = 1


@dataclass
class GameState:
    """User + Quest + Task + Penalty 집합체"""

    user: UserState
    quests: list[Quest] = field(default_factory=list)
    tasks: list[PlannerTask] = field(default_factory=list)
    penalty: PenaltyState = field(default_factory=PenaltyState)
    reward_journal: list[RewardJournalEntry] = field(default_factory=list)
    last_tick_day: Optional[date] = None
    last_weekly_reset_week: Optional[date] = None

    @classmethod
    def new(cls, now: datetime, name: str = "Hunter") -> "GameState":
        return cls(
            user=UserState.new(now, name=name),
            last_tick_day=now.date(),
            last_weekly_reset_week=week_start(now.date()),
        )

    def find_quest(self, quest_id: str) -> Optional[Quest]:
        return next((quest for quest in self.quests if quest.id == quest_id), None)

    def find_task(self, task_id: str) -> Optional[PlannerTask]:
        return next((task for task in self.tasks if task.id == task_id), None)

    def find_reward_entry(self, day: date) -> Optional[RewardJournalEntry]:
        return next((entry for entry in self.reward_journal if entry.day == day), None)

    def to_dict(self) -> dict:
        return {
            "version": SNAPSHOT_VERSION,
            "user": self.user.to_dict(),
            "quests": [quest.to_dict() for quest in self.quests],
            "tasks": [task.to_dict() for task in self.tasks],
            "penalty": self.penalty.to_dict(),
            "reward_journal": [entry.to_dict() for entry in self.reward_journal],
            "schedule": {
                "last_tick_day": date_to_str(self.last_tick_day),
                "last_weekly_reset_week": date_to_str(self.last_weekly_reset_week),
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GameState":
        version = data.get("version")
        if version != SNAPSHOT_VERSION:
            raise SnapshotVersionError(version, SNAPSHOT_VERSION)

        schedule = data.get("schedule", {})
        return cls(
            user=UserState.from_dict(data["user"]),
            quests=[Quest.from_dict(quest) for quest in data.get("quests", [])],
            tasks=[PlannerTask.from_dict(task) for task in data.get("tasks", [])],
            penalty=PenaltyState.from_dict(data.get("penalty", {})),
            reward_journal=[RewardJournalEntry.from_dict(entry) for entry in data.get("reward_journal", [])],
            last_tick_day=str_to_date(schedule.get("last_tick_day")),
            last_weekly_reset_week=str_to_date(schedule.get("last_weekly_reset_week")),
        )
