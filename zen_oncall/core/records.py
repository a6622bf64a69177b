"""
Input Records — Shifts, Mood, Sleep & Tasks
============================================
Read-only snapshots of the rows the data-access layer fetches for a user.

Timestamps are normalised on construction: aware values become naive
local time and log dates are plain ``date`` objects, whatever shape the
database client returned.  The scorer never mutates these and never
re-validates them; range checks live in ``RecordParser`` so that the
scoring core stays a total function.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from zen_oncall.utils.helpers import parse_date, parse_datetime


def _require(row: dict, key: str):
    if row.get(key) is None:
        raise ValueError(f"Missing required field: {key!r}")
    return row[key]


def _parse_due(value) -> Optional[Union[date, datetime]]:
    """Keep a bare date as a date; anything with a time part becomes a datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime) or (isinstance(value, str) and len(value.strip()) > 10):
        return parse_datetime(value)
    return parse_date(value)


def _parse_completed(value) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"completed must be true or false, got {value!r}")
    return value


@dataclass(frozen=True)
class Shift:
    """One scheduled work period."""

    start_time: datetime
    end_time: datetime
    shift_type: Optional[str] = None            # "day" / "night", optional label

    def __post_init__(self):
        object.__setattr__(self, "start_time", parse_datetime(self.start_time))
        object.__setattr__(self, "end_time", parse_datetime(self.end_time))

    @property
    def duration_hours(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 3600.0

    @classmethod
    def from_dict(cls, row: dict) -> "Shift":
        return cls(
            start_time=_require(row, "start_time"),
            end_time=_require(row, "end_time"),
            shift_type=row.get("shift_type"),
        )

    def to_dict(self) -> dict:
        return {
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "shift_type": self.shift_type,
        }


@dataclass(frozen=True)
class MoodLog:
    """Daily mood + energy check-in (both on a 1-5 scale)."""

    mood_score: int
    energy_level: int
    log_date: date

    def __post_init__(self):
        object.__setattr__(self, "log_date", parse_date(self.log_date))

    @classmethod
    def from_dict(cls, row: dict) -> "MoodLog":
        return cls(
            mood_score=int(_require(row, "mood_score")),
            energy_level=int(_require(row, "energy_level")),
            log_date=_require(row, "log_date"),
        )

    def to_dict(self) -> dict:
        return {
            "mood_score": self.mood_score,
            "energy_level": self.energy_level,
            "log_date": self.log_date.isoformat(),
        }


@dataclass(frozen=True)
class SleepLog:
    """One night of sleep: hours slept and a 1-5 quality rating."""

    sleep_hours: float
    sleep_quality: int
    log_date: date

    def __post_init__(self):
        object.__setattr__(self, "log_date", parse_date(self.log_date))

    @classmethod
    def from_dict(cls, row: dict) -> "SleepLog":
        return cls(
            sleep_hours=float(_require(row, "sleep_hours")),
            sleep_quality=int(_require(row, "sleep_quality")),
            log_date=_require(row, "log_date"),
        )

    def to_dict(self) -> dict:
        return {
            "sleep_hours": self.sleep_hours,
            "sleep_quality": self.sleep_quality,
            "log_date": self.log_date.isoformat(),
        }


@dataclass(frozen=True)
class Task:
    """A personal task; ``due_date`` may be a date or a full timestamp."""

    completed: bool
    due_date: Optional[date] = None

    def __post_init__(self):
        object.__setattr__(self, "due_date", _parse_due(self.due_date))

    def is_overdue(self, now: datetime) -> bool:
        if self.completed or self.due_date is None:
            return False
        if isinstance(self.due_date, datetime):
            return self.due_date < now
        # a bare date covers the whole day
        return self.due_date < now.date()

    @classmethod
    def from_dict(cls, row: dict) -> "Task":
        return cls(
            completed=_parse_completed(row.get("completed")),
            due_date=row.get("due_date") or None,
        )

    def to_dict(self) -> dict:
        return {
            "completed": self.completed,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }
