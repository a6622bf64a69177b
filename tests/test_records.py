"""
Unit Tests for Records and the Record Parser
=============================================
"""

import sys
import unittest
from datetime import date, datetime, timezone
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from zen_oncall.core.records import MoodLog, Shift, SleepLog, Task
from zen_oncall.preprocessing.record_parser import RecordParser
from zen_oncall.utils.helpers import parse_date, parse_datetime


class TestParsing(unittest.TestCase):

    def test_naive_timestamp(self):
        self.assertEqual(parse_datetime("2024-05-14T22:30:00"), datetime(2024, 5, 14, 22, 30))

    def test_utc_suffix_becomes_local_naive(self):
        parsed = parse_datetime("2024-05-14T22:00:00Z")
        expected = datetime(2024, 5, 14, 22, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        self.assertIsNone(parsed.tzinfo)
        self.assertEqual(parsed, expected)

    def test_date_from_timestamp(self):
        self.assertEqual(parse_date("2024-05-14"), date(2024, 5, 14))
        self.assertEqual(parse_date(datetime(2024, 5, 14, 9)), date(2024, 5, 14))

    def test_invalid_timestamp(self):
        with self.assertRaises(ValueError):
            parse_datetime("yesterday")
        with self.assertRaises(ValueError):
            parse_datetime(12345)


class TestRecords(unittest.TestCase):

    def test_shift_from_dict(self):
        shift = Shift.from_dict({
            "start_time": "2024-05-14T22:00:00",
            "end_time": "2024-05-15T07:30:00",
            "shift_type": "night",
        })
        self.assertAlmostEqual(shift.duration_hours, 9.5)
        self.assertEqual(shift.shift_type, "night")
        self.assertEqual(Shift.from_dict(shift.to_dict()), shift)

    def test_shift_missing_end(self):
        with self.assertRaises(ValueError):
            Shift.from_dict({"start_time": "2024-05-14T22:00:00"})

    def test_logs_from_dict(self):
        m = MoodLog.from_dict({"mood_score": "3", "energy_level": 2, "log_date": "2024-05-14"})
        self.assertEqual((m.mood_score, m.energy_level, m.log_date), (3, 2, date(2024, 5, 14)))
        s = SleepLog.from_dict({"sleep_hours": 6, "sleep_quality": 4, "log_date": "2024-05-14"})
        self.assertEqual(s.sleep_hours, 6.0)

    def test_task_due_date_shapes(self):
        self.assertIsNone(Task.from_dict({"completed": False}).due_date)
        self.assertIsNone(Task.from_dict({"completed": False, "due_date": ""}).due_date)
        self.assertEqual(Task.from_dict({"due_date": "2024-05-20"}).due_date, date(2024, 5, 20))
        due = Task.from_dict({"due_date": "2024-05-20T09:00:00"}).due_date
        self.assertEqual(due, datetime(2024, 5, 20, 9))

    def test_task_overdue(self):
        now = datetime(2024, 5, 15, 12)
        self.assertTrue(Task(False, date(2024, 5, 14)).is_overdue(now))
        self.assertFalse(Task(False, date(2024, 5, 15)).is_overdue(now))
        self.assertFalse(Task(True, date(2024, 5, 1)).is_overdue(now))
        self.assertFalse(Task(False).is_overdue(now))

    def test_aware_shift_becomes_local_naive(self):
        start = datetime(2024, 5, 14, 8, tzinfo=timezone.utc)
        shift = Shift(start, start.replace(hour=18))
        self.assertIsNone(shift.start_time.tzinfo)
        self.assertIsNone(shift.end_time.tzinfo)
        self.assertEqual(shift.start_time, start.astimezone().replace(tzinfo=None))
        self.assertAlmostEqual(shift.duration_hours, 10.0)

    def test_datetime_log_date_becomes_date(self):
        m = MoodLog(3, 3, datetime(2024, 5, 14, 21, 15))
        s = SleepLog(7, 4, datetime(2024, 5, 14, 6))
        self.assertEqual(type(m.log_date), date)
        self.assertEqual(m.log_date, date(2024, 5, 14))
        self.assertEqual(type(s.log_date), date)

    def test_direct_due_date_shapes(self):
        aware = Task(False, datetime(2024, 5, 20, 9, tzinfo=timezone.utc))
        self.assertIsNone(aware.due_date.tzinfo)
        self.assertEqual(Task(False, "2024-05-20").due_date, date(2024, 5, 20))
        self.assertEqual(Task(False, date(2024, 5, 20)).due_date, date(2024, 5, 20))

    def test_completed_must_be_boolean(self):
        self.assertTrue(Task.from_dict({"completed": True}).completed)
        self.assertFalse(Task.from_dict({"completed": None}).completed)
        for value in ("false", "true", 0, 1):
            with self.assertRaises(ValueError):
                Task.from_dict({"completed": value})


class TestRecordParser(unittest.TestCase):

    def setUp(self):
        self.parser = RecordParser()

    def test_clean_payload(self):
        result = self.parser.process({
            "shifts": [{"start_time": "2024-05-14T08:00:00", "end_time": "2024-05-14T16:00:00"}],
            "mood_logs": [{"mood_score": 4, "energy_level": 3, "log_date": "2024-05-14"}],
            "sleep_logs": [{"sleep_hours": 7, "sleep_quality": 4, "log_date": "2024-05-14"}],
            "tasks": [{"completed": True}],
            "previous_score": "42",
        })
        self.assertEqual(result["warnings"], [])
        self.assertEqual(len(result["shifts"]), 1)
        self.assertEqual(len(result["tasks"]), 1)
        self.assertEqual(result["previous_score"], 42.0)

    def test_missing_sections(self):
        result = self.parser.process({})
        for key in ("shifts", "mood_logs", "sleep_logs", "tasks"):
            self.assertEqual(result[key], [])
        self.assertIsNone(result["previous_score"])

    def test_bad_rows_are_skipped(self):
        result = self.parser.process({
            "shifts": [{"start_time": "not a date", "end_time": "2024-05-14T16:00:00"}, "junk"],
            "mood_logs": [{"mood_score": 3, "log_date": "2024-05-14"}],
        })
        self.assertEqual(result["shifts"], [])
        self.assertEqual(result["mood_logs"], [])
        self.assertEqual(len(result["warnings"]), 3)

    def test_out_of_range_rows_are_kept(self):
        result = self.parser.process({
            "shifts": [{"start_time": "2024-05-14T16:00:00", "end_time": "2024-05-14T08:00:00"}],
            "mood_logs": [{"mood_score": 7, "energy_level": 0, "log_date": "2024-05-14"}],
            "sleep_logs": [{"sleep_hours": -1, "sleep_quality": 3, "log_date": "2024-05-14"}],
        })
        self.assertEqual(len(result["shifts"]), 1)
        self.assertEqual(len(result["mood_logs"]), 1)
        self.assertEqual(len(result["sleep_logs"]), 1)
        self.assertEqual(len(result["warnings"]), 4)

    def test_non_boolean_completed_is_skipped(self):
        result = self.parser.process({"tasks": [{"completed": "false"}, {"completed": False}]})
        self.assertEqual(len(result["tasks"]), 1)
        self.assertEqual(len(result["warnings"]), 1)
        self.assertIn("tasks[0] skipped", result["warnings"][0])

    def test_previous_score_rejected(self):
        self.assertIsNone(self.parser.process({"previous_score": "abc"})["previous_score"])
        self.assertIsNone(self.parser.process({"previous_score": -3})["previous_score"])

    def test_validate(self):
        self.assertTrue(self.parser.validate({"tasks": []})["valid"])
        check = self.parser.validate({"moods": []})
        self.assertFalse(check["valid"])
        self.assertIn("Unknown keys: moods", check["issues"])
        self.assertFalse(self.parser.validate([])["valid"])


class TestSampleGenerator(unittest.TestCase):

    def test_samples_parse_cleanly(self):
        from scripts.generate_samples import generate_records
        parsed = RecordParser().process(generate_records(days=14))
        self.assertEqual(parsed["warnings"], [])
        self.assertEqual(len(parsed["mood_logs"]), 14)
        self.assertEqual(len(parsed["sleep_logs"]), 14)
        self.assertEqual(len(parsed["tasks"]), 12)


if __name__ == "__main__":
    unittest.main()
