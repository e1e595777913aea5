"""
Food / Glucose Dashboard - drill-down explorer for personal nutrition data.

This package provides modular components for:
- Loading food log, CGM and heart rate exports into a common schema
- Aggregating daily calorie totals by macronutrient
- Navigating calendar -> meal -> glucose response views
- Rendering each view as an interactive Plotly chart
"""

from food_glucose_dashboard.config import DashboardConfig, load_config

__version__ = "1.0.0"
__all__ = ["DashboardConfig", "load_config"]
