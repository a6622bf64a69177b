"""
Generate Sample Data — for smoke testing the assessment CLI.

Creates:
  • sample_records.json — two weeks of shifts, mood, sleep and tasks
    ending today, for a nurse rotating onto night shifts
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, time, timedelta
from pathlib import Path

import numpy as np

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(_PROJECT_ROOT))

from zen_oncall.utils.helpers import ensure_dir


def generate_records(days: int = 14, seed: int = 7) -> dict:
    rng = np.random.default_rng(seed)
    today = datetime.now().date()

    shifts, moods, sleeps = [], [], []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        night = offset < days // 2          # second week on nights
        if offset % 6 != 5:                 # one day off in six
            start = datetime.combine(day, time(22 if night else 7))
            hours = int(rng.choice([8, 10, 12, 13]))
            shifts.append({
                "start_time": start.isoformat(),
                "end_time": (start + timedelta(hours=hours)).isoformat(),
                "shift_type": "night" if night else "day",
            })
        moods.append({
            "mood_score": int(np.clip(rng.normal(2.5 if night else 3.5, 0.8), 1, 5)),
            "energy_level": int(np.clip(rng.normal(2.2 if night else 3.4, 0.8), 1, 5)),
            "log_date": day.isoformat(),
        })
        sleeps.append({
            "sleep_hours": round(float(np.clip(rng.normal(5.5 if night else 7.0, 1.0), 2, 10)), 1),
            "sleep_quality": int(np.clip(rng.normal(2.5 if night else 3.5, 0.8), 1, 5)),
            "log_date": day.isoformat(),
        })

    tasks = [
        {
            "completed": bool(rng.random() < 0.4),
            "due_date": (today + timedelta(days=int(rng.integers(-5, 6)))).isoformat(),
        }
        for _ in range(12)
    ]
    return {"shifts": shifts, "mood_logs": moods, "sleep_logs": sleeps, "tasks": tasks}


def main() -> None:
    out_dir = ensure_dir(_PROJECT_ROOT / "data" / "samples")
    path = out_dir / "sample_records.json"
    path.write_text(json.dumps(generate_records(), indent=2), encoding="utf-8")
    print(f"Sample records written to {path}")


if __name__ == "__main__":
    main()
