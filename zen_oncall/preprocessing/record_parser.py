"""
Record Parser — Row Cleaning & Validation
==========================================
Turns raw rows (as returned by the hosted database or read from a JSON
export) into typed records before they reach the scorer.

Why a separate parser?
  The scorer is a total function and deliberately does not validate its
  inputs.  Range checks and malformed-row handling belong to the data
  layer, which is this module.

Graceful handling:
  The parser never blocks scoring.  Rows that cannot be interpreted are
  skipped, suspicious-but-usable rows are kept, and both are reported in
  a list of warnings for transparency.
"""

from __future__ import annotations

from typing import Optional

from zen_oncall.core.records import MoodLog, Shift, SleepLog, Task
from zen_oncall.utils.helpers import setup_logging

logger = setup_logging()

_SECTIONS = {
    "shifts": Shift,
    "mood_logs": MoodLog,
    "sleep_logs": SleepLog,
    "tasks": Task,
}


class RecordParser:
    """Parse and sanity-check a payload of wellness records."""

    def __init__(self, scale_min: int = 1, scale_max: int = 5):
        self.scale_min = scale_min
        self.scale_max = scale_max

    def process(self, payload: dict) -> dict:
        """Parse every section of ``payload``.

        Parameters
        ----------
        payload : dict
            ``{"shifts": [...], "mood_logs": [...], "sleep_logs": [...],
            "tasks": [...], "previous_score": x}``; any key may be missing.

        Returns
        -------
        dict with keys:
            shifts, mood_logs, sleep_logs, tasks : list of parsed records
            previous_score : float or None
            warnings       : list[str] - skipped rows and suspicious values
        """
        warnings: list[str] = []
        result: dict = {}

        for section, record_cls in _SECTIONS.items():
            records = []
            for idx, row in enumerate(payload.get(section) or []):
                if not isinstance(row, dict):
                    warnings.append(f"{section}[{idx}] skipped: not an object.")
                    continue
                try:
                    record = record_cls.from_dict(row)
                except (TypeError, ValueError) as exc:
                    logger.warning("Skipping %s[%d]: %s", section, idx, exc)
                    warnings.append(f"{section}[{idx}] skipped: {exc}")
                    continue
                warnings.extend(self._check(section, idx, record))
                records.append(record)
            result[section] = records

        result["previous_score"] = self._previous_score(payload, warnings)
        result["warnings"] = warnings
        return result

    def validate(self, payload: dict) -> dict:
        """Quick validation without keeping the parsed records.

        Returns
        -------
        dict with keys: valid (bool), issues (list)
        """
        if not isinstance(payload, dict):
            return {"valid": False, "issues": ["Payload must be an object."]}

        issues = []
        unknown = sorted(set(payload) - set(_SECTIONS) - {"previous_score"})
        if unknown:
            issues.append(f"Unknown keys: {', '.join(unknown)}")
        issues.extend(self.process(payload)["warnings"])
        return {"valid": len(issues) == 0, "issues": issues}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check(self, section: str, idx: int, record) -> list[str]:
        """Range checks; offending records are kept, only flagged."""
        issues = []
        label = f"{section}[{idx}]"

        if isinstance(record, Shift) and record.end_time < record.start_time:
            issues.append(f"{label}: shift ends before it starts.")
        elif isinstance(record, MoodLog):
            if not self._in_scale(record.mood_score):
                issues.append(f"{label}: mood_score {record.mood_score} outside 1-5.")
            if not self._in_scale(record.energy_level):
                issues.append(f"{label}: energy_level {record.energy_level} outside 1-5.")
        elif isinstance(record, SleepLog):
            if record.sleep_hours < 0:
                issues.append(f"{label}: negative sleep_hours.")
            if not self._in_scale(record.sleep_quality):
                issues.append(f"{label}: sleep_quality {record.sleep_quality} outside 1-5.")
        return issues

    def _in_scale(self, value: int) -> bool:
        return self.scale_min <= value <= self.scale_max

    @staticmethod
    def _previous_score(payload: dict, warnings: list[str]) -> Optional[float]:
        value = payload.get("previous_score")
        if value is None:
            return None
        try:
            score = float(value)
        except (TypeError, ValueError):
            warnings.append(f"previous_score ignored: {value!r} is not a number.")
            return None
        if score < 0:
            warnings.append("previous_score ignored: negative value.")
            return None
        return score
