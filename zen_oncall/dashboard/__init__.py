"""Dashboard Module — analytics and report export over score history."""

from zen_oncall.dashboard.analytics import DashboardAnalytics

__all__ = ["DashboardAnalytics"]
