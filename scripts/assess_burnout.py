"""
CLI Assessment — Burnout Risk Score from the Command Line
==========================================================

The input file is a JSON export of a user's records::

    {
      "shifts":     [{"start_time": "...", "end_time": "...", "shift_type": "night"}],
      "mood_logs":  [{"mood_score": 3, "energy_level": 2, "log_date": "2024-05-01"}],
      "sleep_logs": [{"sleep_hours": 6.5, "sleep_quality": 3, "log_date": "2024-05-01"}],
      "tasks":      [{"completed": false, "due_date": "2024-05-03"}],
      "previous_score": 42
    }

Examples::

    # Print a report
    python scripts/assess_burnout.py --input data/records.json

    # Score as of a fixed instant and print JSON
    python scripts/assess_burnout.py --input data/records.json \
        --now 2024-05-02T08:00:00 --json

    # Persist the score and compare against the stored history
    python scripts/assess_burnout.py --input data/records.json --user nurse-42 --save
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(_PROJECT_ROOT))

from zen_oncall.utils.helpers import load_config, parse_datetime, setup_logging

logger = setup_logging()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Zen On-Call — burnout risk assessment")
    parser.add_argument("--input", type=str, required=True, help="Path to a JSON records file")
    parser.add_argument("--user", type=str, default="default", help="User id for stored history")
    parser.add_argument("--now", type=str, default=None, help="Evaluation instant (ISO-8601)")
    parser.add_argument("--previous-score", type=float, default=None,
                        help="Previous total score (overrides file and store)")
    parser.add_argument("--save", action="store_true", help="Persist the score to the history store")
    parser.add_argument("--db", type=str, default=None, help="SQLite history path")
    parser.add_argument("--config", type=str, default=None, help="Path to config.yaml")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a report")
    parser.add_argument("--patterns", action="store_true",
                        help="Also print 30-day pattern recommendations")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        parser.error(f"Input file not found: {input_path}")

    try:
        now = parse_datetime(args.now) if args.now else None
    except ValueError as exc:
        parser.error(str(exc))

    config = load_config(args.config)
    logger.setLevel(getattr(logging, str(config.get("logging", {}).get("level", "INFO")).upper(), logging.INFO))

    from zen_oncall.core.burnout_scorer import BurnoutScorer
    from zen_oncall.core.explainer import Explainer
    from zen_oncall.preprocessing.record_parser import RecordParser

    try:
        payload = json.loads(input_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        parser.error(f"Input file is not valid JSON: {exc}")
    if not isinstance(payload, dict):
        parser.error("Input file must contain a JSON object of record lists")

    parsed = RecordParser().process(payload)
    for warning in parsed["warnings"]:
        logger.warning("Input: %s", warning)

    store = None
    if args.save:
        from zen_oncall.temporal.score_store import ScoreStore
        db_path = args.db or config.get("storage", {}).get("db_path", "data/burnout_history.db")
        if not Path(db_path).is_absolute():
            db_path = str(_PROJECT_ROOT / db_path)
        store = ScoreStore(db_path)

    previous_score = args.previous_score
    if previous_score is None:
        previous_score = parsed["previous_score"]
    if previous_score is None and store is not None:
        previous_score = store.latest_score(args.user)

    # --- Score -----------------------------------------------------------
    analysis = BurnoutScorer(config).analyze(
        parsed["shifts"],
        parsed["mood_logs"],
        parsed["sleep_logs"],
        parsed["tasks"],
        previous_score=previous_score,
        now=now,
    )

    if store is not None:
        store.save_analysis(analysis, user_id=args.user, created_at=now)

    pattern_recs = []
    if args.patterns:
        from zen_oncall.patterns.user_patterns import (
            analyze_user_patterns,
            generate_pattern_recommendations,
        )
        pattern = analyze_user_patterns(
            parsed["shifts"], parsed["mood_logs"], parsed["sleep_logs"],
            now=now, config=config,
        )
        pattern_recs = generate_pattern_recommendations(pattern, args.user, now=now, config=config)

    # --- Output ----------------------------------------------------------
    if args.json:
        out = analysis.to_dict()
        if args.patterns:
            out["pattern_recommendations"] = [r.to_dict() for r in pattern_recs]
        print(json.dumps(out, indent=2, ensure_ascii=False))
        return 0

    explanation = Explainer().explain(analysis)

    print("\n" + "=" * 62)
    print("  BURNOUT RISK ASSESSMENT")
    print("=" * 62)
    print(f"  Level     : {analysis.level}")
    print(f"  Score     : {analysis.score}/{analysis.max_score}")
    print(f"  Trend     : {analysis.trend}")
    if previous_score is not None:
        print(f"  Previous  : {previous_score:g}")
    print("-" * 62)
    print(f"  {explanation['overall_narrative']}")

    if analysis.early_warnings:
        print("\n  Early warnings:")
        for warning in analysis.early_warnings:
            print(f"    ! {warning}")

    print("\n  Factors:")
    for line in explanation["factor_narratives"]:
        print(f"    - {line}")

    print("\n  Recommendations:")
    for rec in analysis.recommendations:
        print(f"    [{rec.priority.upper():>9s}] {rec.action}")
        print(f"                {rec.reason}")

    if pattern_recs:
        print("\n  Pattern nudges:")
        for rec in pattern_recs:
            print(f"    [{rec.priority.upper():>6s}] {rec.title}: {rec.description}")

    print("\n  " + explanation["disclaimer"])
    print("=" * 62)
    return 0


if __name__ == "__main__":
    sys.exit(main())
