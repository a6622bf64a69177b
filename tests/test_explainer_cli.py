"""
Unit Tests for the Explainer and the Assessment CLI
====================================================
"""

import contextlib
import io
import json
import sys
import tempfile
import unittest
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from zen_oncall.core.burnout_scorer import compute_burnout_analysis
from zen_oncall.core.explainer import Explainer
from zen_oncall.core.records import MoodLog, SleepLog

NOW = datetime(2024, 5, 15, 12, 0)


class TestExplainer(unittest.TestCase):

    def test_empty_analysis(self):
        explanation = Explainer().explain(compute_burnout_analysis([], [], [], [], now=NOW))
        self.assertEqual(len(explanation["factor_narratives"]), 5)
        self.assertIn("**Low**", explanation["overall_narrative"])
        self.assertEqual(explanation["top_factor"], "Sleep Health")   # 5/25 beats 5/30
        self.assertEqual(len(explanation["limitations"]), 4)
        self.assertIn("not", explanation["disclaimer"])

    def test_logged_data_has_fewer_limitations(self):
        moods = [MoodLog(1, 1, (NOW - timedelta(days=d)).date()) for d in range(3)]
        sleeps = [SleepLog(8, 5, (NOW - timedelta(days=d)).date()) for d in range(3)]
        analysis = compute_burnout_analysis([], moods, sleeps, [], previous_score=0, now=NOW)
        explanation = Explainer().explain(analysis)
        self.assertEqual(explanation["top_factor"], "Emotional Health")
        self.assertEqual(len(explanation["limitations"]), 2)
        self.assertIn("risen", explanation["trend_narrative"])


class TestAssessCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.input_path = Path(self.tmp.name) / "records.json"
        self.input_path.write_text(json.dumps({
            "shifts": [
                {"start_time": "2024-05-13T23:00:00", "end_time": "2024-05-14T12:00:00"},
                {"start_time": "2024-05-12T09:00:00", "end_time": "2024-05-12T17:00:00"},
            ],
            "mood_logs": [{"mood_score": 1, "energy_level": 1, "log_date": "2024-05-14"}],
            "sleep_logs": [],
            "tasks": [{"completed": False, "due_date": "2024-05-01"}],
        }), encoding="utf-8")

    def tearDown(self):
        self.tmp.cleanup()

    def run_cli(self, *extra):
        from scripts.assess_burnout import main
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main(["--input", str(self.input_path), "--now", "2024-05-15T12:00:00", *extra])
        return code, out.getvalue()

    def test_json_output(self):
        code, out = self.run_cli("--json")
        self.assertEqual(code, 0)
        data = json.loads(out)
        # emotional 27 + sleep default 5 + one overdue task 2
        self.assertEqual(data["score"], 34)
        self.assertEqual(data["level"], "Moderate")

    def test_text_report(self):
        code, out = self.run_cli("--patterns")
        self.assertEqual(code, 0)
        self.assertIn("BURNOUT RISK ASSESSMENT", out)
        self.assertIn("Consistently low mood scores", out)
        self.assertIn("Pattern nudges", out)

    def test_save_feeds_previous_score(self):
        db = str(Path(self.tmp.name) / "history.db")
        self.run_cli("--save", "--db", db, "--user", "nurse", "--json")
        code, out = self.run_cli("--save", "--db", db, "--user", "nurse", "--previous-score", "10", "--json")
        self.assertEqual(json.loads(out)["trend"], "worsening")

        from zen_oncall.temporal.score_store import ScoreStore
        self.assertEqual(ScoreStore(db).count("nurse"), 2)

    def test_saved_history_uses_evaluation_instant(self):
        db = str(Path(self.tmp.name) / "history.db")
        self.run_cli("--save", "--db", db, "--user", "nurse", "--json")

        from zen_oncall.temporal.score_store import ScoreStore
        record = ScoreStore(db).get_history("nurse")[0]
        self.assertEqual(record["created_at"], "2024-05-15T12:00:00")

    def test_malformed_json_input(self):
        self.input_path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(SystemExit):
            with contextlib.redirect_stderr(io.StringIO()):
                self.run_cli("--json")

    def test_top_level_array_input(self):
        self.input_path.write_text("[]", encoding="utf-8")
        err = io.StringIO()
        with self.assertRaises(SystemExit):
            with contextlib.redirect_stderr(err):
                self.run_cli("--json")
        self.assertIn("JSON object", err.getvalue())

    def test_missing_input(self):
        from scripts.assess_burnout import main
        with self.assertRaises(SystemExit):
            with contextlib.redirect_stderr(io.StringIO()):
                main(["--input", str(Path(self.tmp.name) / "missing.json")])


if __name__ == "__main__":
    unittest.main()
