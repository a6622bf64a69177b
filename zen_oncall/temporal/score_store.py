"""
Score Store — Persistent Burnout Score History via SQLite
==========================================================
Stores every computed ``BurnoutAnalysis`` so that:

1. The next analysis can compare against the previous score (trend)
2. Dashboards can chart the score over days/weeks
3. Escalation can be detected across many checks

Concurrency:
  Each call opens its own connection; SQLite serialises writers.  Two
  callers that read ``latest_score`` and then both save will each compute
  their trend against the same previous value.
"""

from __future__ import annotations

import json
import sqlite3
from collections import Counter
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

import numpy as np

from zen_oncall.core.burnout_analysis import BurnoutAnalysis
from zen_oncall.utils.helpers import setup_logging

logger = setup_logging()

_DEFAULT_DB_PATH = "data/burnout_history.db"

_JSON_FIELDS = ("factors", "recommendations", "early_warnings")


class ScoreStore:
    """Persistent storage for burnout score history."""

    def __init__(self, db_path: str = _DEFAULT_DB_PATH):
        self.db_path = str(db_path)
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()
        logger.info("Score store ready: %s", self.db_path)

    # ------------------------------------------------------------------
    # Database setup
    # ------------------------------------------------------------------

    def _init_db(self):
        """Create the burnout_scores table if it doesn't exist."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS burnout_scores (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    created_at TEXT NOT NULL,
                    user_id TEXT DEFAULT 'default',
                    score INTEGER NOT NULL,
                    level TEXT NOT NULL,
                    trend TEXT,
                    factors TEXT,
                    recommendations TEXT,
                    early_warnings TEXT
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_user_created
                ON burnout_scores(user_id, created_at)
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def save_analysis(
        self,
        analysis: BurnoutAnalysis,
        user_id: str = "default",
        created_at: Optional[datetime] = None,
    ) -> int:
        """Store a completed analysis.

        Parameters
        ----------
        analysis : BurnoutAnalysis
            Output of ``compute_burnout_analysis``.
        user_id : str
            Owner of the score.
        created_at : datetime, optional
            Timestamp to record; defaults to now.

        Returns
        -------
        int : the row ID of the inserted record.
        """
        data = analysis.to_dict()
        created_at = created_at or datetime.now()
        with self._connect() as conn:
            cursor = conn.execute("""
                INSERT INTO burnout_scores (
                    created_at, user_id, score, level, trend,
                    factors, recommendations, early_warnings
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                created_at.isoformat(),
                user_id,
                data["score"],
                data["level"],
                data["trend"],
                json.dumps(data["factors"]),
                json.dumps(data["recommendations"]),
                json.dumps(data["early_warnings"]),
            ))
            row_id = cursor.lastrowid
        logger.info("Burnout score saved (id=%d, score=%d, level=%s)",
                    row_id, data["score"], data["level"])
        return row_id

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def latest_score(self, user_id: str = "default") -> Optional[float]:
        """Most recently stored score, i.e. the next run's ``previous_score``."""
        with self._connect() as conn:
            row = conn.execute("""
                SELECT score FROM burnout_scores
                WHERE user_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT 1
            """, (user_id,)).fetchone()
        return float(row[0]) if row else None

    def get_history(
        self,
        user_id: str = "default",
        limit: int = 100,
        days: Optional[int] = None,
    ) -> list[dict]:
        """Retrieve score history, newest first.

        Parameters
        ----------
        user_id : str
            Filter by user.
        limit : int
            Maximum records to return.
        days : int, optional
            Only return records from the last N days.
        """
        query = "SELECT * FROM burnout_scores WHERE user_id = ?"
        params: list = [user_id]

        if days is not None:
            cutoff = (datetime.now() - timedelta(days=days)).isoformat()
            query += " AND created_at >= ?"
            params.append(cutoff)

        query += " ORDER BY created_at DESC, id DESC LIMIT ?"
        params.append(limit)

        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(query, params).fetchall()

        return [self._row_to_dict(row) for row in rows]

    def get_trend_data(self, user_id: str = "default", days: int = 30) -> list[dict]:
        """Time series of (created_at, score, level, trend), oldest first."""
        cutoff = (datetime.now() - timedelta(days=days)).isoformat()

        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute("""
                SELECT created_at, score, level, trend
                FROM burnout_scores
                WHERE user_id = ? AND created_at >= ?
                ORDER BY created_at ASC, id ASC
            """, (user_id, cutoff)).fetchall()

        return [dict(row) for row in rows]

    def get_statistics(self, user_id: str = "default", days: int = 30) -> dict:
        """Compute aggregate statistics for the dashboard.

        Returns
        -------
        dict with:
            total_assessments, level_distribution, avg_score, min_score,
            max_score, most_common_level, escalation_detected
        """
        records = self.get_history(user_id=user_id, days=days, limit=9999)

        if not records:
            return {
                "total_assessments": 0,
                "level_distribution": {},
                "avg_score": 0.0,
                "min_score": 0,
                "max_score": 0,
                "most_common_level": "N/A",
                "escalation_detected": False,
            }

        scores = np.array([r["score"] for r in records], dtype=float)
        level_counts = Counter(r["level"] for r in records)
        n = len(records)

        # Escalation: newest third scores clearly worse than the oldest third
        escalation = False
        if n >= 4:
            recent = scores[:n // 3]
            older = scores[2 * n // 3:]
            if recent.mean() > older.mean() + 10:
                escalation = True

        return {
            "total_assessments": n,
            "level_distribution": dict(level_counts),
            "avg_score": round(float(scores.mean()), 2),
            "min_score": int(scores.min()),
            "max_score": int(scores.max()),
            "most_common_level": level_counts.most_common(1)[0][0],
            "escalation_detected": escalation,
        }

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def clear_history(self, user_id: str = "default"):
        """Delete all stored scores for a user."""
        with self._connect() as conn:
            conn.execute("DELETE FROM burnout_scores WHERE user_id = ?", (user_id,))
        logger.info("History cleared for user: %s", user_id)

    def count(self, user_id: str = "default") -> int:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) FROM burnout_scores WHERE user_id = ?",
                (user_id,)
            ).fetchone()
            return row[0] if row else 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_dict(row: sqlite3.Row) -> dict:
        """Convert a sqlite3.Row to a plain dict with parsed JSON fields."""
        d = dict(row)
        for key in _JSON_FIELDS:
            if isinstance(d.get(key), str):
                d[key] = json.loads(d[key])
        return d
