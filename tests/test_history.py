"""
Unit Tests for the Score Store and Dashboard Analytics
=======================================================
"""

import csv
import io
import json
import sys
import tempfile
import unittest
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from zen_oncall.core.burnout_analysis import BurnoutAnalysis, BurnoutFactor, Recommendation
from zen_oncall.core.burnout_scorer import compute_burnout_analysis
from zen_oncall.dashboard.analytics import DashboardAnalytics
from zen_oncall.temporal.score_store import ScoreStore


def make_analysis(score: int, level: str, trend: str = "stable") -> BurnoutAnalysis:
    return BurnoutAnalysis(
        level=level,
        score=score,
        max_score=100,
        percentage=float(score),
        message="",
        factors=[BurnoutFactor("Work Load", min(score, 25), 25, "low", "")],
        recommendations=[Recommendation("low", "Rest", "Because")],
        trend=trend,
        early_warnings=["No mood tracking in the past week"],
    )


class StoreTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = ScoreStore(str(Path(self.tmp.name) / "nested" / "history.db"))

    def tearDown(self):
        self.tmp.cleanup()

    def save_series(self, scores, levels, user_id="nurse"):
        start = datetime.now() - timedelta(days=len(scores))
        for i, (score, level) in enumerate(zip(scores, levels)):
            self.store.save_analysis(
                make_analysis(score, level), user_id=user_id,
                created_at=start + timedelta(days=i),
            )


class TestScoreStore(StoreTestCase):

    def test_empty_store(self):
        self.assertIsNone(self.store.latest_score("nurse"))
        self.assertEqual(self.store.count("nurse"), 0)
        stats = self.store.get_statistics("nurse")
        self.assertEqual(stats["total_assessments"], 0)
        self.assertFalse(stats["escalation_detected"])

    def test_save_and_latest(self):
        self.save_series([20, 45], ["Low", "Moderate"])
        self.assertEqual(self.store.latest_score("nurse"), 45.0)
        self.assertEqual(self.store.count("nurse"), 2)
        self.assertIsNone(self.store.latest_score("someone-else"))

    def test_history_round_trips_json_fields(self):
        analysis = compute_burnout_analysis([], [], [], [], now=datetime(2024, 5, 15, 12))
        row_id = self.store.save_analysis(analysis, user_id="nurse")
        record = self.store.get_history("nurse")[0]
        self.assertEqual(record["id"], row_id)
        self.assertEqual(record["score"], 10)
        self.assertEqual(record["level"], "Low")
        self.assertEqual(len(record["factors"]), 5)
        self.assertEqual(record["early_warnings"], ["No mood tracking in the past week"])

    def test_history_order_and_window(self):
        self.save_series([10, 20, 30], ["Low", "Low", "Moderate"])
        self.store.save_analysis(
            make_analysis(99, "Critical"), user_id="nurse",
            created_at=datetime.now() - timedelta(days=90),
        )
        scores = [r["score"] for r in self.store.get_history("nurse", days=30)]
        self.assertEqual(scores, [30, 20, 10])
        trend = [r["score"] for r in self.store.get_trend_data("nurse", days=30)]
        self.assertEqual(trend, [10, 20, 30])

    def test_statistics_and_escalation(self):
        self.save_series([10, 12, 15, 40, 60, 70], ["Low", "Low", "Low", "Moderate", "High", "High"])
        stats = self.store.get_statistics("nurse")
        self.assertEqual(stats["total_assessments"], 6)
        self.assertEqual(stats["level_distribution"], {"High": 2, "Moderate": 1, "Low": 3})
        self.assertEqual(stats["min_score"], 10)
        self.assertEqual(stats["max_score"], 70)
        self.assertEqual(stats["most_common_level"], "Low")
        self.assertTrue(stats["escalation_detected"])

    def test_clear_history(self):
        self.save_series([10, 20], ["Low", "Low"])
        self.save_series([30], ["Moderate"], user_id="other")
        self.store.clear_history("nurse")
        self.assertEqual(self.store.count("nurse"), 0)
        self.assertEqual(self.store.count("other"), 1)


class TestDashboardAnalytics(StoreTestCase):

    def setUp(self):
        super().setUp()
        self.analytics = DashboardAnalytics(self.store)

    def test_overview_without_history(self):
        overview = self.analytics.get_overview("nurse")
        self.assertEqual(overview["trend_data"], [])
        self.assertEqual(len(overview["alerts"]), 1)
        self.assertEqual(overview["alerts"][0]["severity"], "info")

    def test_high_risk_alerts(self):
        self.save_series([60, 65, 80], ["High", "High", "Critical"])
        alerts = self.analytics.get_overview("nurse")["alerts"]
        self.assertEqual(len(alerts), 2)
        self.assertTrue(all(a["severity"] == "high" for a in alerts))
        self.assertIn("100%", alerts[1]["message"])

    def test_export_csv(self):
        self.save_series([10, 20], ["Low", "Low"])
        rows = list(csv.reader(io.StringIO(self.analytics.export_csv("nurse"))))
        self.assertEqual(rows[0], ["Timestamp", "Score", "Level", "Trend", "Early Warnings"])
        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[1][1], "20")
        self.assertEqual(rows[1][4], "No mood tracking in the past week")

    def test_export_report(self):
        self.save_series([10], ["Low"])
        report = json.loads(self.analytics.export_report("nurse"))
        self.assertEqual(report["user_id"], "nurse")
        self.assertEqual(report["summary"]["total_assessments"], 1)
        self.assertEqual(len(report["score_history"]), 1)
        self.assertIn("disclaimer", report)


if __name__ == "__main__":
    unittest.main()
