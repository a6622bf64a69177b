"""
User Patterns — Longer-Horizon Habits & Personalised Nudges
============================================================
Where the burnout scorer looks at the last week, this module looks at the
last 30 days to find habits worth nudging: how mood follows night versus
day shifts, average sleep and energy, runs of consecutive work days and
whether the week's mood is heading up or down.

The derived ``UserPattern`` feeds a small rule set that produces
``PatternRecommendation`` items.  These expire after a day so the caller
can refresh them on the next visit.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timedelta
from typing import Iterable, Optional

import numpy as np

from zen_oncall.core.records import MoodLog, Shift, SleepLog
from zen_oncall.utils.helpers import parse_datetime, setup_logging

logger = setup_logging()

_DEFAULTS = {
    "lookback_days": 30,
    "recent_days": 7,
    "mood_trend_delta": 0.5,
    "recommendation_ttl_hours": 24,
}


def _settings(config: Optional[dict]) -> dict:
    settings = dict(_DEFAULTS)
    settings.update((config or {}).get("patterns") or {})
    return settings


def _mean_or_zero(values) -> float:
    return float(np.mean(values)) if len(values) else 0.0


@dataclass
class UserPattern:
    """Aggregated 30-day habits for one user."""

    avg_mood_after_night_shift: float
    avg_mood_after_day_shift: float
    avg_sleep_duration: float
    avg_energy_level: float
    consecutive_work_days: int
    days_since_last_break: int
    total_weekly_hours: float
    night_shift_count: int
    recent_mood_trend: str                      # improving / stable / declining

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PatternRecommendation:
    """A nudge derived from ``UserPattern``."""

    user_id: str
    type: str                                   # rest / exercise / social / nutrition / sleep / mindfulness / task
    title: str
    description: str
    reason: str
    priority: str                               # low / medium / high
    action_url: Optional[str] = None
    expires_at: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


# ----------------------------------------------------------------------
# Pattern analysis
# ----------------------------------------------------------------------

def analyze_user_patterns(
    shifts: Iterable[Shift],
    mood_logs: Iterable[MoodLog],
    sleep_logs: Iterable[SleepLog],
    now: Optional[datetime] = None,
    config: Optional[dict] = None,
) -> UserPattern:
    """Summarise the last ``lookback_days`` of records into a ``UserPattern``.

    Empty inputs yield zeros and a ``stable`` mood trend.
    """
    settings = _settings(config)
    now = datetime.now() if now is None else parse_datetime(now)
    lookback_start = now - timedelta(days=int(settings["lookback_days"]))
    recent_start = now - timedelta(days=int(settings["recent_days"]))

    shifts = sorted(
        (s for s in shifts if s.start_time >= lookback_start),
        key=lambda s: s.start_time,
    )
    moods = sorted(
        (m for m in mood_logs if m.log_date >= lookback_start.date()),
        key=lambda m: m.log_date,
    )
    sleeps = [s for s in sleep_logs if s.log_date >= lookback_start.date()]

    mood_by_day = {}
    for m in moods:
        mood_by_day.setdefault(m.log_date, m.mood_score)

    night_shifts = [s for s in shifts if (s.shift_type or "").lower() == "night"]
    day_shifts = [s for s in shifts if (s.shift_type or "").lower() == "day"]

    recent_shifts = [s for s in shifts if s.start_time >= recent_start]
    consecutive, days_since_break = _work_streak(recent_shifts)

    recent_moods = [m.mood_score for m in moods if m.log_date >= recent_start.date()]

    pattern = UserPattern(
        avg_mood_after_night_shift=_mood_after(night_shifts, mood_by_day),
        avg_mood_after_day_shift=_mood_after(day_shifts, mood_by_day),
        avg_sleep_duration=_mean_or_zero([s.sleep_hours or 0 for s in sleeps]),
        avg_energy_level=_mean_or_zero([m.energy_level or 0 for m in moods]),
        consecutive_work_days=consecutive,
        days_since_last_break=days_since_break,
        total_weekly_hours=float(sum(s.duration_hours for s in recent_shifts)),
        night_shift_count=len(night_shifts),
        recent_mood_trend=_mood_trend(recent_moods, float(settings["mood_trend_delta"])),
    )
    logger.debug("User pattern: %s", pattern)
    return pattern


def _mood_after(shifts: list[Shift], mood_by_day: dict) -> float:
    """Average mood logged on the days these shifts started (unlogged days skipped)."""
    scores = [mood_by_day.get(s.start_time.date(), 0) for s in shifts]
    return _mean_or_zero([score for score in scores if score > 0])


def _work_streak(recent_shifts: list[Shift]) -> tuple[int, int]:
    """Count back from the latest shift while shifts are exactly one day apart.

    Returns (consecutive_work_days, days_since_last_break) where the latter
    is the first gap that breaks the run, or 0 when the run is unbroken.
    """
    if not recent_shifts:
        return 0, 0

    consecutive = 1
    days_since_break = 0
    last = recent_shifts[-1].start_time
    for shift in reversed(recent_shifts[:-1]):
        days_diff = int((last - shift.start_time).total_seconds() // 86400)
        if days_diff == 1:
            consecutive += 1
        else:
            days_since_break = days_diff
            break
        last = shift.start_time
    return consecutive, days_since_break


def _mood_trend(scores: list[int], delta: float) -> str:
    """Compare the second half of the week's moods with the first half."""
    half = len(scores) // 2
    first_avg = sum(scores[:half]) / (half or 1)
    second_avg = sum(scores[half:]) / ((len(scores) - half) or 1)
    if second_avg > first_avg + delta:
        return "improving"
    if second_avg < first_avg - delta:
        return "declining"
    return "stable"


# ----------------------------------------------------------------------
# Recommendations
# ----------------------------------------------------------------------

def generate_pattern_recommendations(
    pattern: UserPattern,
    user_id: str,
    now: Optional[datetime] = None,
    config: Optional[dict] = None,
) -> list[PatternRecommendation]:
    """Turn a ``UserPattern`` into personalised nudges.

    Always returns at least one item: when no rule fires, two onboarding
    tips are returned instead.
    """
    settings = _settings(config)
    now = datetime.now() if now is None else parse_datetime(now)
    expires_at = (now + timedelta(hours=int(settings["recommendation_ttl_hours"]))).isoformat()

    recs: list[PatternRecommendation] = []

    def add(type_, title, description, reason, priority, action_url):
        recs.append(PatternRecommendation(
            user_id=user_id,
            type=type_,
            title=title,
            description=description,
            reason=reason,
            priority=priority,
            action_url=action_url,
            expires_at=expires_at,
        ))

    if pattern.avg_sleep_duration < 6:
        add(
            "sleep", "Prioritize Sleep Tonight",
            f"Your average sleep is {pattern.avg_sleep_duration:.1f} hours. "
            "Aim for 7-9 hours tonight.",
            "Chronic sleep deprivation detected", "high", "/wellness-enhanced",
        )

    if pattern.consecutive_work_days >= 5:
        add(
            "rest", "Schedule a Day Off",
            f"You've worked {pattern.consecutive_work_days} consecutive days. "
            "Your body needs recovery time.",
            "Extended work period without break", "high", "/scheduler",
        )

    if pattern.recent_mood_trend == "declining" and pattern.avg_energy_level > 2:
        add(
            "exercise", "Take a 15-Minute Walk",
            "Your mood has been declining. Light exercise can boost endorphins "
            "and improve mental health.",
            "Declining mood trend detected", "medium", "/wellness-enhanced",
        )

    if pattern.night_shift_count > 2 and pattern.avg_mood_after_night_shift < 3:
        add(
            "rest", "Night Shift Recovery Plan",
            f"You've had {pattern.night_shift_count} night shifts recently and your "
            f"mood averages {pattern.avg_mood_after_night_shift:.1f}/5 afterward. "
            "Consider requesting day shifts or taking extra rest.",
            "Poor recovery after night shifts", "high", "/scheduler",
        )

    if pattern.total_weekly_hours > 50:
        add(
            "social", "Connect with Friends or Family",
            f"You worked {round(pattern.total_weekly_hours)} hours this week. "
            "Make time for social connections to prevent isolation.",
            "High weekly work hours", "medium", "/circles",
        )

    if pattern.avg_energy_level < 2.5:
        add(
            "mindfulness", "Try a 5-Minute Breathing Exercise",
            f"Your average energy is {pattern.avg_energy_level:.1f}/5. "
            "A quick mindfulness break can help reset.",
            "Low energy levels detected", "medium", "/wellness-enhanced",
        )

    if pattern.total_weekly_hours > 40:
        add(
            "nutrition", "Plan Healthy Meals",
            "Long work hours can lead to poor eating habits. "
            "Prep nutritious meals for the week.",
            "Extended work schedule", "low", "/scheduler",
        )

    if not recs:
        add(
            "mindfulness", "Start Your Wellness Journey",
            "Log your mood daily to get personalized recommendations. "
            "Track your sleep, work shifts, and energy levels.",
            "Building your wellness profile", "medium", "/wellness",
        )
        add(
            "task", "Schedule Your Week",
            "Add your upcoming shifts and personal tasks to help us identify "
            "patterns and optimize your schedule.",
            "Initial setup", "medium", "/scheduler",
        )

    return recs
