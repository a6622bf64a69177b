"""
Explainer — Human-Readable Reasoning for Burnout Analyses
==========================================================
Transforms a ``BurnoutAnalysis`` into plain-English explanations that
answer **why** the score came out the way it did.

The Explainer does NOT score anything — it reads the factors, warnings
and trend that the scorer already produced and narrates them.
"""

from __future__ import annotations

from zen_oncall.core.burnout_analysis import BurnoutAnalysis, BurnoutFactor


class Explainer:
    """Generate clear, honest explanations for burnout analyses."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def explain(self, analysis: BurnoutAnalysis) -> dict:
        """Build a full explanation package.

        Returns
        -------
        dict with keys:
            overall_narrative  - score, level and summary message
            trend_narrative    - how the score moved since last time
            factor_narratives  - one sentence per factor, in factor order
            top_factor         - category carrying the largest share, or None
            limitations        - caveats specific to this analysis
            disclaimer         - ethical/legal disclaimer
        """
        top = self._top_factor(analysis)
        return {
            "overall_narrative": self._overall_narrative(analysis),
            "trend_narrative": self._trend_narrative(analysis),
            "factor_narratives": [self._factor_narrative(f) for f in analysis.factors],
            "top_factor": top.category if top else None,
            "limitations": self._limitations(analysis),
            "disclaimer": self._disclaimer(),
        }

    # ------------------------------------------------------------------
    # Narratives
    # ------------------------------------------------------------------

    @staticmethod
    def _overall_narrative(analysis: BurnoutAnalysis) -> str:
        return (
            f"Burnout risk is **{analysis.level}** with a score of "
            f"{analysis.score}/{analysis.max_score}.  {analysis.message}"
        )

    @staticmethod
    def _trend_narrative(analysis: BurnoutAnalysis) -> str:
        if analysis.trend == "worsening":
            return "Your score has risen sharply since your last check."
        if analysis.trend == "improving":
            return "Your score has dropped noticeably since your last check."
        return "Your score is roughly where it was last time."

    @staticmethod
    def _factor_narrative(factor: BurnoutFactor) -> str:
        share = factor.score / factor.max_score if factor.max_score else 0.0
        return (
            f"**{factor.category}** ({factor.impact} impact, "
            f"{factor.score}/{factor.max_score}, {share:.0%}): {factor.description}."
        )

    @staticmethod
    def _top_factor(analysis: BurnoutAnalysis):
        """Factor with the highest share of its own maximum (first wins ties)."""
        best = None
        best_share = 0.0
        for f in analysis.factors:
            share = f.score / f.max_score if f.max_score else 0.0
            if share > best_share:
                best, best_share = f, share
        return best

    @staticmethod
    def _limitations(analysis: BurnoutAnalysis) -> list[str]:
        limits = []
        descriptions = {f.category: f.description for f in analysis.factors}

        if "No mood tracking in the past week" in analysis.early_warnings:
            limits.append(
                "No mood check-ins were logged this week, so emotional health "
                "was scored with a neutral default."
            )
        if descriptions.get("Sleep Health", "").startswith("No sleep data"):
            limits.append(
                "No sleep logs were found for this week, so sleep health "
                "was scored with a neutral default."
            )
        if descriptions.get("Work Load", "").startswith("No shifts"):
            limits.append(
                "No recent shifts were found; work load may be understated "
                "if your schedule is not up to date."
            )

        limits.append(
            "The weights are heuristic and have not been clinically validated.  "
            "Daily logging over several weeks gives a more reliable picture."
        )
        return limits

    @staticmethod
    def _disclaimer() -> str:
        return (
            "**Disclaimer:** This score is a self-awareness aid, **not** a "
            "medical or clinical diagnosis.  If you are struggling, please "
            "reach out to a qualified mental-health professional or your "
            "employee assistance programme."
        )
