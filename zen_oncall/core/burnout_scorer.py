"""
Burnout Scorer — Weighted Composite Burnout Risk
=================================================
Turns a user's recent shifts, mood logs, sleep logs and tasks into a
``BurnoutAnalysis``:

  Input(shifts, mood_logs, sleep_logs, tasks, previous_score, now)
    -> Work Load        (max 25)
    -> Emotional Health (max 30)
    -> Sleep Health     (max 25)
    -> Task Load        (max 10)
    -> Recovery Time    (max 10)
    -> total score 0-100 -> level, message, trend, recommendations

Every sub-score is clamped to its own maximum before being summed, so the
total can never leave [0, 100].  Warnings are collected in the order the
conditions are detected.

The scorer is a pure computation: it reads only its arguments and the
``now`` instant (wall clock when not injected), holds no mutable state and
never raises for empty inputs or mixed timestamp shapes.  Sparse data
degrades into the default sub-scores and shows up as early warnings instead.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

import numpy as np

from zen_oncall.core.burnout_analysis import (
    BurnoutAnalysis,
    BurnoutFactor,
    Recommendation,
    PRIORITY_RANK,
)
from zen_oncall.core.records import MoodLog, Shift, SleepLog, Task
from zen_oncall.utils.helpers import parse_datetime, setup_logging

logger = setup_logging()

MAX_SCORE = 100

_DEFAULTS = {
    "recent_days": 7,
    "recovery_scan_days": 30,
    "trend_delta": 10,
}

# (upper bound inclusive, level, message)
_LEVELS = [
    (25, "Low", "You're maintaining excellent balance! Keep up the great work."),
    (50, "Moderate", "Mild stress detected. Focus on self-care and rest this week."),
    (75, "High", "High burnout risk! Take immediate action to reduce stress."),
]
_CRITICAL = ("Critical", "CRITICAL: Burnout imminent. Consider taking time off immediately.")

# Impact bands per factor: (exclusive lower bound, impact), checked in order
_WORK_BANDS = [(18, "critical"), (12, "high"), (6, "medium")]
_MOOD_BANDS = [(22, "critical"), (15, "high"), (8, "medium")]
_SLEEP_BANDS = [(18, "critical"), (12, "high"), (6, "medium")]
_TASK_BANDS = [(7, "high"), (4, "medium")]
_RECOVERY_BANDS = [(7, "high"), (4, "medium")]


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


def _impact(score: int, bands) -> str:
    for bound, label in bands:
        if score > bound:
            return label
    return "low"


def _mean_abs_deviation(values: np.ndarray, mean: float) -> float:
    return float(np.mean(np.abs(values - mean)))


class BurnoutScorer:
    """Deterministic burnout-risk scoring over recent wellness records."""

    def __init__(self, config: Optional[dict] = None):
        settings = dict(_DEFAULTS)
        settings.update((config or {}).get("burnout") or {})
        self.recent_days = int(settings["recent_days"])
        self.recovery_scan_days = int(settings["recovery_scan_days"])
        self.trend_delta = float(settings["trend_delta"])

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def analyze(
        self,
        shifts: Iterable[Shift],
        mood_logs: Iterable[MoodLog],
        sleep_logs: Iterable[SleepLog],
        tasks: Iterable[Task],
        previous_score: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> BurnoutAnalysis:
        """Score the given records relative to ``now``.

        Parameters
        ----------
        shifts, mood_logs, sleep_logs, tasks : iterables of records
            Any length, any order; nothing is pre-filtered by date.
        previous_score : float, optional
            Last persisted total score, only used for the trend.
        now : datetime, optional
            Evaluation instant.  Defaults to the current wall-clock time.

        Returns
        -------
        BurnoutAnalysis with 5 factors, sorted recommendations and trend.
        """
        now = datetime.now() if now is None else parse_datetime(now)
        ordered_shifts = sorted(shifts, key=lambda s: s.start_time)
        mood_logs = list(mood_logs)
        sleep_logs = list(sleep_logs)
        tasks = list(tasks)

        warnings: list[str] = []
        window_start = now - timedelta(days=self.recent_days)

        work, work_stats = self._work_load(ordered_shifts, window_start, warnings)
        mood = self._emotional_health(mood_logs, window_start, warnings)
        sleep = self._sleep_health(sleep_logs, window_start, warnings)
        task, task_stats = self._task_load(tasks, now)
        recovery, days_since_break = self._recovery_time(ordered_shifts, now, warnings)

        factors = [work, mood, sleep, task, recovery]
        score = sum(f.score for f in factors)

        trend = self._trend(score, previous_score, warnings)
        level, message = self._risk_level(score)

        recommendations = self._recommendations(
            score=score,
            work=work.score,
            mood=mood.score,
            sleep=sleep.score,
            task=task.score,
            recovery=recovery.score,
            work_stats=work_stats,
            task_stats=task_stats,
            days_since_break=days_since_break,
        )

        logger.debug(
            "Burnout score %d/%d (%s, trend=%s, warnings=%d)",
            score, MAX_SCORE, level, trend, len(warnings),
        )

        return BurnoutAnalysis(
            level=level,
            score=score,
            max_score=MAX_SCORE,
            percentage=score / MAX_SCORE * 100,
            message=message,
            factors=factors,
            recommendations=recommendations,
            trend=trend,
            early_warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def _work_load(
        self,
        shifts: Sequence[Shift],
        window_start: datetime,
        warnings: list[str],
    ) -> tuple[BurnoutFactor, dict]:
        recent = [s for s in shifts if s.start_time >= window_start]

        total_hours = 0.0
        night_shifts = 0
        double_shifts = 0
        consecutive_days = 0
        work_days = set()
        previous: Optional[Shift] = None

        for shift in recent:
            # whole hours, truncated toward zero
            hours = int(shift.duration_hours)
            total_hours += hours
            work_days.add(shift.start_time.date())
            if shift.start_time.hour >= 22 or shift.end_time.hour <= 6:
                night_shifts += 1
            if hours > 12:
                double_shifts += 1
            if previous is not None:
                gap = (shift.start_time.date() - previous.start_time.date()).days
                if gap == 1:
                    consecutive_days += 1
            previous = shift

        score = 0
        if total_hours > 60:
            score += 10
            warnings.append("Working excessive hours (60+ per week)")
        elif total_hours > 50:
            score += 7
        elif total_hours > 40:
            score += 4

        if night_shifts >= 4:
            score += 8
            warnings.append("Multiple night shifts detected")
        elif night_shifts >= 2:
            score += 5

        if double_shifts >= 2:
            score += 4
            warnings.append("Multiple double shifts (>12 hours)")

        if len(work_days) >= 7:
            score += 3
            warnings.append("No days off in the past week")

        score = _clamp(score, 25)
        if recent:
            description = (
                f"{total_hours:.1f} hours over {len(work_days)} day(s), "
                f"{night_shifts} night shift(s), {double_shifts} double shift(s)"
            )
        else:
            description = f"No shifts logged in the past {self.recent_days} days"

        factor = BurnoutFactor(
            category="Work Load",
            score=score,
            max_score=25,
            impact=_impact(score, _WORK_BANDS),
            description=description,
        )
        stats = {
            "total_hours": total_hours,
            "night_shifts": night_shifts,
            "double_shifts": double_shifts,
            "consecutive_days": consecutive_days,
            "work_days": len(work_days),
        }
        return factor, stats

    def _emotional_health(
        self,
        mood_logs: Sequence[MoodLog],
        window_start: datetime,
        warnings: list[str],
    ) -> BurnoutFactor:
        cutoff = window_start.date()
        recent = [m for m in mood_logs if m.log_date >= cutoff]

        score = 0
        if not recent:
            score += 5
            warnings.append("No mood tracking in the past week")
            description = "No mood check-ins this week"
        else:
            moods = np.array([m.mood_score for m in recent], dtype=float)
            energies = np.array([m.energy_level for m in recent], dtype=float)
            avg_mood = float(moods.mean())
            avg_energy = float(energies.mean())

            if avg_mood <= 2:
                score += 15
                warnings.append("Consistently low mood scores")
            elif avg_mood <= 3:
                score += 10
            elif avg_mood <= 3.5:
                score += 5

            if avg_energy <= 2:
                score += 12
                warnings.append("Consistently low energy levels")
            elif avg_energy <= 3:
                score += 7

            # large swings are a risk on their own
            if _mean_abs_deviation(moods, avg_mood) > 1.5:
                score += 3

            description = (
                f"Average mood {avg_mood:.1f}/5, energy {avg_energy:.1f}/5 "
                f"across {len(recent)} check-in(s)"
            )

        score = _clamp(score, 30)
        return BurnoutFactor(
            category="Emotional Health",
            score=score,
            max_score=30,
            impact=_impact(score, _MOOD_BANDS),
            description=description,
        )

    def _sleep_health(
        self,
        sleep_logs: Sequence[SleepLog],
        window_start: datetime,
        warnings: list[str],
    ) -> BurnoutFactor:
        cutoff = window_start.date()
        recent = [s for s in sleep_logs if s.log_date >= cutoff]

        score = 0
        if not recent:
            score += 5
            description = "No sleep data logged this week"
        else:
            hours = np.array([s.sleep_hours for s in recent], dtype=float)
            quality = np.array([s.sleep_quality for s in recent], dtype=float)
            avg_hours = float(hours.mean())
            avg_quality = float(quality.mean())

            if avg_hours < 5:
                score += 15
                warnings.append("Severe sleep deprivation (<5 hours avg)")
            elif avg_hours < 6:
                score += 12
                warnings.append("Insufficient sleep (<6 hours avg)")
            elif avg_hours < 7:
                score += 7

            if avg_quality <= 2:
                score += 8
            elif avg_quality <= 3:
                score += 4

            if _mean_abs_deviation(hours, avg_hours) > 2:
                score += 2

            description = (
                f"Average {avg_hours:.1f} hours of sleep, "
                f"quality {avg_quality:.1f}/5"
            )

        score = _clamp(score, 25)
        return BurnoutFactor(
            category="Sleep Health",
            score=score,
            max_score=25,
            impact=_impact(score, _SLEEP_BANDS),
            description=description,
        )

    @staticmethod
    def _task_load(tasks: Sequence[Task], now: datetime) -> tuple[BurnoutFactor, dict]:
        overdue = sum(1 for t in tasks if t.is_overdue(now))
        pending = sum(1 for t in tasks if not t.completed)

        score = 0
        if overdue > 10:
            score += 6
        elif overdue > 5:
            score += 4
        elif overdue > 0:
            score += 2

        if pending > 20:
            score += 4
        elif pending > 10:
            score += 2

        score = _clamp(score, 10)
        if pending:
            description = f"{overdue} overdue and {pending} pending task(s)"
        else:
            description = "No pending tasks"

        factor = BurnoutFactor(
            category="Task Load",
            score=score,
            max_score=10,
            impact=_impact(score, _TASK_BANDS),
            description=description,
        )
        return factor, {"overdue": overdue, "pending": pending}

    def _recovery_time(
        self,
        shifts: Sequence[Shift],
        now: datetime,
        warnings: list[str],
    ) -> tuple[BurnoutFactor, int]:
        days_since_break = self._days_since_last_break(shifts, now)

        score = 0
        if days_since_break > 14:
            score += 10
            warnings.append("No break in over 2 weeks")
        elif days_since_break > 10:
            score += 7
        elif days_since_break > 7:
            score += 4

        score = _clamp(score, 10)
        if shifts:
            description = f"{days_since_break} day(s) since your last 2-day break"
        else:
            description = "No shifts recorded to measure recovery"

        factor = BurnoutFactor(
            category="Recovery Time",
            score=score,
            max_score=10,
            impact=_impact(score, _RECOVERY_BANDS),
            description=description,
        )
        return factor, days_since_break

    def _days_since_last_break(self, shifts: Sequence[Shift], now: datetime) -> int:
        """Offset of the most recent worked day before a 2-day break.

        Walks back from today.  A worked day records its offset and resets
        the off-day run; the first run of 2 off days returns the recorded
        offset.  When the scan finds no such break it returns the last
        recorded offset, not the scan length.
        """
        shift_days = {s.start_time.date() for s in shifts}
        today = now.date()

        days_since_break = 0
        days_off = 0
        for offset in range(self.recovery_scan_days):
            if today - timedelta(days=offset) in shift_days:
                days_since_break = offset
                days_off = 0
            else:
                days_off += 1
                if days_off >= 2:
                    return days_since_break
        return days_since_break

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def _trend(
        self,
        score: int,
        previous_score: Optional[float],
        warnings: list[str],
    ) -> str:
        if previous_score is None:
            return "stable"
        diff = score - previous_score
        if diff > self.trend_delta:
            warnings.append("Burnout risk increasing rapidly")
            return "worsening"
        if diff < -self.trend_delta:
            return "improving"
        return "stable"

    @staticmethod
    def _risk_level(score: int) -> tuple[str, str]:
        for upper, level, message in _LEVELS:
            if score <= upper:
                return level, message
        return _CRITICAL

    @staticmethod
    def _recommendations(
        score: int,
        work: int,
        mood: int,
        sleep: int,
        task: int,
        recovery: int,
        work_stats: dict,
        task_stats: dict,
        days_since_break: int,
    ) -> list[Recommendation]:
        recs: list[Recommendation] = []

        if score >= 70:
            recs.append(Recommendation(
                "immediate",
                "Consider taking emergency time off",
                "Your burnout score is in the danger zone. Rest is not optional right now.",
            ))
        if work > 15:
            recs.append(Recommendation(
                "immediate",
                "Reduce your work hours this week",
                f"You worked {work_stats['total_hours']:.0f} hours in the past 7 days.",
            ))
        if work_stats["night_shifts"] >= 3:
            recs.append(Recommendation(
                "high",
                "Request day shifts for your next rotation",
                f"{work_stats['night_shifts']} night shifts this week disrupt your circadian rhythm.",
            ))
        if work_stats["consecutive_days"] >= 5:
            recs.append(Recommendation(
                "high",
                "Schedule a day off",
                f"You've worked {work_stats['consecutive_days']} consecutive days without a break.",
            ))
        if sleep > 10:
            recs.append(Recommendation(
                "immediate",
                "Prioritize 7-9 hours of sleep tonight",
                "Sleep debt is amplifying every other stress factor.",
            ))
            recs.append(Recommendation(
                "high",
                "Create a consistent bedtime routine",
                "Regular sleep timing improves recovery between shifts.",
            ))
        if mood > 15:
            recs.append(Recommendation(
                "immediate",
                "Talk to someone you trust today",
                "Your mood and energy have been consistently low.",
            ))
            recs.append(Recommendation(
                "high",
                "Consider professional support (EAP or counselor)",
                "Persistent low mood is a key burnout indicator.",
            ))
        if score > 40:
            recs.append(Recommendation(
                "high",
                "Schedule 30 minutes of daily self-care",
                "Regular downtime helps reverse rising stress.",
            ))
        if task > 5:
            recs.append(Recommendation(
                "medium",
                "Delegate or postpone non-essential tasks",
                f"{task_stats['overdue']} overdue and {task_stats['pending']} pending "
                "tasks are adding to your load.",
            ))
        if recovery > 5:
            recs.append(Recommendation(
                "high",
                "Plan a vacation or extended break",
                f"It has been {days_since_break} days since your last proper break.",
            ))
        if score < 30:
            recs.append(Recommendation(
                "low",
                "Keep up your healthy routines!",
                "Your current habits are protecting you from burnout.",
            ))

        # sorted() is stable: ties keep generation order
        return sorted(recs, key=lambda r: PRIORITY_RANK[r.priority])


_DEFAULT_SCORER = BurnoutScorer()


def compute_burnout_analysis(
    shifts: Iterable[Shift],
    mood_logs: Iterable[MoodLog],
    sleep_logs: Iterable[SleepLog],
    tasks: Iterable[Task],
    previous_score: Optional[float] = None,
    now: Optional[datetime] = None,
) -> BurnoutAnalysis:
    """Score records with the default windows (7-day / 30-day scan)."""
    return _DEFAULT_SCORER.analyze(
        shifts, mood_logs, sleep_logs, tasks,
        previous_score=previous_score, now=now,
    )
