"""
Core Module — Records & Burnout Risk Scoring
=============================================
  - records:           Shift / MoodLog / SleepLog / Task input snapshots
  - BurnoutAnalysis:   data model holding one scoring result
  - BurnoutScorer:     weighted five-factor burnout scoring
  - Explainer:         human-readable explanations for an analysis
"""

from zen_oncall.core.records import Shift, MoodLog, SleepLog, Task
from zen_oncall.core.burnout_analysis import BurnoutAnalysis, BurnoutFactor, Recommendation
from zen_oncall.core.burnout_scorer import BurnoutScorer, compute_burnout_analysis
from zen_oncall.core.explainer import Explainer

__all__ = [
    "Shift", "MoodLog", "SleepLog", "Task",
    "BurnoutAnalysis", "BurnoutFactor", "Recommendation",
    "BurnoutScorer", "compute_burnout_analysis",
    "Explainer",
]
