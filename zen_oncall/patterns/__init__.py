"""Pattern Module — 30-day habit analysis and personalised nudges."""

from zen_oncall.patterns.user_patterns import (
    UserPattern,
    PatternRecommendation,
    analyze_user_patterns,
    generate_pattern_recommendations,
)

__all__ = [
    "UserPattern",
    "PatternRecommendation",
    "analyze_user_patterns",
    "generate_pattern_recommendations",
]
