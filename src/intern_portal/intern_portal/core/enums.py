from __future__ import annotations

from enum import Enum


class Gender(str, Enum):
    """Gender as stored on an intern profile."""

    MALE = "M"
    FEMALE = "F"
    UNSPECIFIED = "unspecified"

    @classmethod
    def parse(cls, value) -> "Gender":
        if isinstance(value, Gender):
            return value
        try:
            return cls(str(value).strip().upper() if value else cls.UNSPECIFIED.value)
        except ValueError:
            return cls.UNSPECIFIED


class GenderFilter(str, Enum):
    """Gender selector of the presentation filter."""

    ALL = "all"
    MALE = "M"
    FEMALE = "F"


class TimerPhase(str, Enum):
    """Countdown states of the presentation timer."""

    IDLE = "IDLE"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    EXPIRED = "EXPIRED"


class AudioCue(str, Enum):
    WARNING = "warning"
    LOW_TIME = "low_time"
    STOP = "stop"
