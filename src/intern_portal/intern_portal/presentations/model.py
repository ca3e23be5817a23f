from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Gender, GenderFilter, TimerPhase
from ..profiles.model import Candidate


@dataclass(frozen=True)
class FilterCriteria:
    """Which candidates are eligible for the next queue. Never persisted."""

    gender: GenderFilter = GenderFilter.ALL
    only_students: bool = False
    only_connectivity: bool = False

    def matches(self, candidate: Candidate) -> bool:
        if self.gender != GenderFilter.ALL and candidate.gender != Gender(self.gender.value):
            return False
        if self.only_students and not candidate.is_student:
            return False
        if self.only_connectivity and not candidate.has_connectivity:
            return False
        return True

    def to_dict(self) -> dict:
        return {
            "gender": self.gender.value,
            "only_students": self.only_students,
            "only_connectivity": self.only_connectivity,
        }


@dataclass(frozen=True)
class TimerState:
    """One of Idle, Running(remaining), Paused(remaining), Expired.

    `remaining` is None while Idle and 0 once Expired.
    """

    phase: TimerPhase
    remaining: Optional[int] = None

    @classmethod
    def idle(cls) -> "TimerState":
        return cls(TimerPhase.IDLE)

    @classmethod
    def running(cls, remaining: int) -> "TimerState":
        return cls(TimerPhase.RUNNING, max(0, int(remaining)))

    @classmethod
    def paused(cls, remaining: int) -> "TimerState":
        return cls(TimerPhase.PAUSED, max(0, int(remaining)))

    @classmethod
    def expired(cls) -> "TimerState":
        return cls(TimerPhase.EXPIRED, 0)

    @property
    def is_running(self) -> bool:
        return self.phase == TimerPhase.RUNNING


@dataclass(frozen=True)
class QueueSnapshot:
    """Read-model handed to renderers after every state change."""

    current: Optional[Candidate]
    upcoming: tuple[Candidate, ...]
    queue_length: int
    remaining_presenters: int
    duration_seconds: int
    estimated_total_seconds: int
    timer: TimerState
    presented_ids: tuple[str, ...]
    available_count: int
    filter: FilterCriteria

    @property
    def action_label(self) -> str:
        if self.timer.phase == TimerPhase.RUNNING:
            return "Pause"
        if self.timer.phase == TimerPhase.PAUSED:
            return "Resume"
        return "Start"

    def to_dict(self) -> dict:
        return {
            "current": self.current.to_dict() if self.current else None,
            "upcoming": [c.to_dict() for c in self.upcoming],
            "queue_length": self.queue_length,
            "remaining_presenters": self.remaining_presenters,
            "duration_seconds": self.duration_seconds,
            "estimated_total_seconds": self.estimated_total_seconds,
            "timer": {"phase": self.timer.phase.value, "remaining": self.timer.remaining},
            "action_label": self.action_label,
            "presented_ids": list(self.presented_ids),
            "available_count": self.available_count,
            "filter": self.filter.to_dict(),
        }
