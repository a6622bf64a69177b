"""
Zen On-Call — Burnout Risk Scoring for Healthcare Workers
==========================================================
Scores short-term burnout risk from shift schedules, mood, sleep and task
records, tracks the score over time, and surfaces pattern-based
recommendations.
"""

__version__ = "1.0.0"
