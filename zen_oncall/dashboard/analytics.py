"""
Dashboard Analytics — Aggregated Burnout Score Statistics
==========================================================
Computes and formats analytics data from the ScoreStore for a dashboard.

Provides:
  - Level distribution and score trend lines
  - Escalation alerts
  - CSV/JSON report generation
"""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime

from zen_oncall.temporal.score_store import ScoreStore
from zen_oncall.utils.helpers import setup_logging

logger = setup_logging()

_HIGH_LEVELS = ("High", "Critical")


class DashboardAnalytics:
    """Compute analytics and generate reports from score history."""

    def __init__(self, store: ScoreStore):
        self.store = store

    # ------------------------------------------------------------------
    # Summary Statistics
    # ------------------------------------------------------------------

    def get_overview(self, user_id: str = "default", days: int = 30) -> dict:
        """Get a dashboard overview.

        Returns
        -------
        dict with:
            stats              - aggregate statistics
            trend_data         - time-series for line charts
            level_distribution - for pie/bar charts
            alerts             - escalation warnings
        """
        stats = self.store.get_statistics(user_id=user_id, days=days)
        trend_data = self.store.get_trend_data(user_id=user_id, days=days)
        alerts = self._check_alerts(stats)

        return {
            "stats": stats,
            "trend_data": trend_data,
            "level_distribution": stats.get("level_distribution", {}),
            "alerts": alerts,
        }

    # ------------------------------------------------------------------
    # Alert System
    # ------------------------------------------------------------------

    @staticmethod
    def _check_alerts(stats: dict) -> list[dict]:
        """Generate alerts based on concerning patterns in the history."""
        alerts = []

        if stats.get("escalation_detected"):
            alerts.append({
                "severity": "high",
                "message": "Burnout scores have been rising over recent checks.",
                "suggestion": (
                    "Look at what changed in your schedule and talk to your "
                    "manager about rebalancing shifts."
                ),
            })

        if stats.get("avg_score", 0) > 50:
            alerts.append({
                "severity": "high",
                "message": "Average burnout score is in the High range.",
                "suggestion": (
                    "Sustained high scores are a strong burnout signal. "
                    "Prioritise rest and consider professional support."
                ),
            })

        levels = stats.get("level_distribution", {})
        total = sum(levels.values())
        if total > 0:
            high_pct = sum(levels.get(lvl, 0) for lvl in _HIGH_LEVELS) / total
            if high_pct > 0.5:
                alerts.append({
                    "severity": "high",
                    "message": (
                        f"Over {high_pct:.0%} of recent checks were "
                        "High or Critical."
                    ),
                    "suggestion": (
                        "This pattern is concerning. Please consider taking "
                        "time off and speaking with a professional."
                    ),
                })

        if not alerts:
            alerts.append({
                "severity": "info",
                "message": "No concerning patterns detected.",
                "suggestion": "Keep logging your mood, sleep and shifts.",
            })

        return alerts

    # ------------------------------------------------------------------
    # Export: CSV
    # ------------------------------------------------------------------

    def export_csv(self, user_id: str = "default", days: int = 30) -> str:
        """Export score history as a CSV string."""
        records = self.store.get_history(user_id=user_id, days=days, limit=9999)

        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["Timestamp", "Score", "Level", "Trend", "Early Warnings"])

        for r in records:
            writer.writerow([
                r.get("created_at", ""),
                r.get("score", ""),
                r.get("level", ""),
                r.get("trend", ""),
                "; ".join(r.get("early_warnings") or []),
            ])

        return output.getvalue()

    # ------------------------------------------------------------------
    # Export: JSON Report
    # ------------------------------------------------------------------

    def export_report(self, user_id: str = "default", days: int = 30) -> str:
        """Generate a JSON report with statistics, alerts and history."""
        overview = self.get_overview(user_id=user_id, days=days)
        history = self.store.get_history(user_id=user_id, days=days, limit=9999)
        logger.info("Report generated for %s (%d records)", user_id, len(history))

        report = {
            "report_generated": datetime.now().isoformat(),
            "period_days": days,
            "user_id": user_id,
            "summary": overview["stats"],
            "alerts": overview["alerts"],
            "score_history": [
                {
                    "created_at": r.get("created_at"),
                    "score": r.get("score"),
                    "level": r.get("level"),
                    "trend": r.get("trend"),
                    "early_warnings": r.get("early_warnings"),
                }
                for r in history
            ],
            "disclaimer": (
                "This report is generated by an automated heuristic for "
                "self-awareness purposes only. It is not a medical or "
                "clinical assessment."
            ),
        }

        return json.dumps(report, indent=2, ensure_ascii=False)
