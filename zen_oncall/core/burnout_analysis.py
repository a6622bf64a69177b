"""
Burnout Analysis Data Model
============================
Holds the **complete** result of one burnout-risk scoring run.

Only semantic values are kept here (level, impact, priority); mapping
them to icons or colours is the caller's business.  Keeping the data
model separate from the scoring logic makes it easy to serialise to
JSON, persist, or pass between components.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
import json


# Fixed category order of the factor breakdown
FACTOR_CATEGORIES = (
    "Work Load",
    "Emotional Health",
    "Sleep Health",
    "Task Load",
    "Recovery Time",
)

RISK_LEVELS = ("Low", "Moderate", "High", "Critical")
IMPACTS = ("low", "medium", "high", "critical")
TRENDS = ("improving", "stable", "worsening")

# Sort rank for recommendation priorities
PRIORITY_RANK = {"immediate": 0, "high": 1, "medium": 2, "low": 3}


@dataclass
class BurnoutFactor:
    """One weighted sub-score of the composite."""

    category: str                               # one of FACTOR_CATEGORIES
    score: int                                  # clamped to [0, max_score]
    max_score: int
    impact: str                                 # low / medium / high / critical
    description: str


@dataclass
class Recommendation:
    """An action item tied to a detected risk."""

    priority: str                               # immediate / high / medium / low
    action: str
    reason: str


@dataclass
class BurnoutAnalysis:
    """Structured result of ``compute_burnout_analysis``."""

    level: str                                  # Low / Moderate / High / Critical
    score: int                                  # 0-100
    max_score: int
    percentage: float
    message: str
    factors: list[BurnoutFactor] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    trend: str = "stable"
    early_warnings: list[str] = field(default_factory=list)

    def factor(self, category: str) -> BurnoutFactor:
        """Look up a factor by its category name."""
        for f in self.factors:
            if f.category == category:
                return f
        raise KeyError(category)

    def to_dict(self) -> dict:
        """Serialise to a plain dict (for JSON export, persistence)."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
