"""Visualization modules for the drill-down views."""

from food_glucose_dashboard.visualizers.plotly_viz import PlotlyVisualizer

__all__ = ["PlotlyVisualizer"]
