"""Temporal Module — persistent burnout score history."""

from zen_oncall.temporal.score_store import ScoreStore

__all__ = ["ScoreStore"]
