"""
Plotly Visualizer - Interactive charts for the drill-down views.

Each chart is built from a view object returned by the navigator and
carries nothing but presentation.
"""

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots
from typing import Optional

from food_glucose_dashboard.config import DashboardConfig
from food_glucose_dashboard.navigation import CalendarView, GlucoseView, MealView

# Meal times are plotted on one reference date so meals line up by clock time
REFERENCE_DATE = "2000-01-01"


def sqrt_scale(
    values: pd.Series,
    low: float,
    high: float,
) -> np.ndarray:
    """Map values onto [low, high] with a square-root scale.

    The smallest value maps to ``low`` and the largest to ``high``. When
    every value is the same the midpoint is used.
    """
    roots = np.sqrt(np.clip(np.asarray(values, dtype=float), 0, None))
    roots = np.nan_to_num(roots, nan=0.0)
    if roots.size == 0:
        return roots
    lo, hi = roots.min(), roots.max()
    if hi == lo:
        return np.full(roots.shape, (low + high) / 2)
    return low + (roots - lo) / (hi - lo) * (high - low)


class PlotlyVisualizer:
    """Interactive Plotly visualizations for Streamlit.

    Provides the calendar, meal and glucose detail charts with consistent
    styling.
    """

    def __init__(self, config: Optional[DashboardConfig] = None):
        """Initialize visualizer.

        Args:
            config: Optional configuration.
        """
        self.config = config or DashboardConfig()
        self.settings = self.config.visualization
        self.font_family = self.settings.font_family

    def _get_base_layout(self, **kwargs) -> dict:
        """Get base layout for consistent styling."""
        return {
            'height': self.settings.height,
            'margin': dict(l=100, r=100, t=50, b=120),
            'paper_bgcolor': 'rgba(0,0,0,0)',
            'plot_bgcolor': 'rgba(0,0,0,0)',
            'font': dict(family=self.font_family, size=14),
            'hoverlabel': dict(bgcolor='white', font_size=14, bordercolor='#ddd'),
            **kwargs
        }

    # =========================================================================
    # CALENDAR
    # =========================================================================

    def create_calendar_chart(self, view: CalendarView) -> go.Figure:
        """Create the daily calorie bar chart.

        Secondary-nutrient calories are drawn over the total. A day whose
        total is not a number gets a zero-height bar.

        Args:
            view: Calendar view.

        Returns:
            Plotly Figure.
        """
        label = view.nutrient.title()
        days = view.days

        hover = []
        for a in view.aggregates:
            percent = f"{a.percent:.1f}%" if a.has_percent else "n/a"
            hover.append(
                f"<b>Date:</b> {a.day}<br>"
                f"<b>Total Calories:</b> {a.total:g} kcal<br>"
                f"<b>{label} Calories:</b> {a.secondary_calories:g} kcal ({percent})"
            )

        fig = go.Figure()

        fig.add_trace(go.Bar(
            x=days,
            y=[a.plot_total for a in view.aggregates],
            name='Calories',
            marker_color=self.settings.calorie_color,
            hovertext=hover,
            hovertemplate='%{hovertext}<extra></extra>',
        ))

        fig.add_trace(go.Bar(
            x=days,
            y=[a.plot_secondary for a in view.aggregates],
            name=f'{label} Calories',
            marker_color=self.settings.secondary_color,
            hovertext=hover,
            hovertemplate='%{hovertext}<extra></extra>',
        ))

        fig.update_layout(
            **self._get_base_layout(),
            barmode='overlay',
            bargap=0.2,
            clickmode='event+select',
            xaxis_title='Date',
            yaxis_title='Calories',
            legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='right', x=1),
        )
        fig.update_xaxes(type='category', tickangle=-45)
        fig.update_yaxes(rangemode='tozero', showgrid=True, gridcolor='rgba(128,128,128,0.15)')

        return fig

    # =========================================================================
    # MEALS
    # =========================================================================

    def create_meal_scatter(self, view: MealView) -> go.Figure:
        """Create the meal scatterplot for one day.

        Meals are placed by clock time on the x axis and by food name on the
        y axis; marker radius follows a square-root scale of calories.

        Args:
            view: Meal view.

        Returns:
            Plotly Figure.
        """
        meals = view.meals
        s = self.settings

        clock = pd.to_datetime(REFERENCE_DATE + " " + meals['time'], errors='coerce')
        radii = sqrt_scale(meals['calorie'], s.marker_min_radius, s.marker_max_radius)

        hover = [
            f"<b>Meal:</b> {row.food}<br>"
            f"<b>Calories:</b> {row.calorie:g} kcal<br>"
            f"<b>Carb Calories:</b> {row.carb_calories:.1f} kcal<br>"
            f"<b>Sugar Calories:</b> {row.sugar_calories:.1f} kcal<br>"
            f"<b>Time:</b> {row.time}"
            for row in meals.itertuples()
        ]

        fig = go.Figure()

        fig.add_trace(go.Scatter(
            x=clock,
            y=meals['food'],
            mode='markers',
            name='Calories',
            marker=dict(
                size=radii * 2,
                color=s.calorie_color,
                line=dict(width=0),
            ),
            hovertext=hover,
            hovertemplate='%{hovertext}<extra></extra>',
        ))

        fig.update_layout(
            **self._get_base_layout(title=dict(text=view.day, font=dict(size=16))),
            clickmode='event+select',
            xaxis_title='Time',
            yaxis_title='Meals',
            showlegend=True,
            legend=dict(x=1, y=1, xanchor='right', bgcolor='white', bordercolor='#333', borderwidth=1.5),
        )
        fig.update_xaxes(
            range=[f"{REFERENCE_DATE} 00:00", f"{REFERENCE_DATE} 23:59"],
            tickformat='%H:%M',
            showgrid=True,
            gridcolor='rgba(128,128,128,0.15)',
        )
        fig.update_yaxes(type='category')

        return fig

    # =========================================================================
    # GLUCOSE DETAIL
    # =========================================================================

    def create_glucose_detail_chart(self, view: GlucoseView) -> go.Figure:
        """Create the glucose response chart around one meal.

        Readings inside the brushed range are highlighted and the range
        summary is written above it. Heart rate, when available, is drawn on
        a secondary axis.

        Args:
            view: Glucose view.

        Returns:
            Plotly Figure.
        """
        s = self.settings
        glucose = view.glucose
        clock = glucose['timestamp'].dt.floor('min')
        selected = view.selected_mask().to_numpy()

        fig = make_subplots(specs=[[{"secondary_y": True}]])

        fig.add_trace(
            go.Scatter(
                x=clock,
                y=glucose['level'],
                mode='lines+markers',
                name='Glucose Level',
                line=dict(color=s.glucose_color, width=2, shape='spline'),
                marker=dict(
                    size=10,
                    color=np.where(selected, s.selected_color, s.glucose_color).tolist(),
                ),
                customdata=glucose['time'],
                hovertemplate='<b>Time:</b> %{customdata}<br><b>Glucose:</b> %{y} mg/dL<extra></extra>',
            ),
            secondary_y=False,
        )

        if not view.heart_rate.empty:
            fig.add_trace(
                go.Scatter(
                    x=view.heart_rate['timestamp'].dt.floor('min'),
                    y=view.heart_rate['heart_rate'],
                    mode='lines',
                    name='Heart Rate',
                    line=dict(color=s.heart_rate_color, width=1, dash='dot'),
                    hovertemplate='%{x|%H:%M}<br><b>Heart Rate:</b> %{y:.0f} BPM<extra></extra>',
                ),
                secondary_y=True,
            )

        levels = glucose['level'].dropna()
        y_range = None
        if not levels.empty:
            y_range = [levels.min() - 5, levels.max() + 5]

        # Meal marker doubles as the hover target for the meal name
        marker_y = y_range or [0, 1]
        fig.add_trace(
            go.Scatter(
                x=[view.meal_timestamp, view.meal_timestamp],
                y=marker_y,
                mode='lines',
                name='Meal Time',
                line=dict(color=s.meal_marker_color, width=2, dash='dash'),
                hovertemplate=f'<b>{view.meal_name}</b> was eaten<extra></extra>',
            ),
            secondary_y=False,
        )

        if y_range is not None:
            self._add_glucose_references(fig, y_range)

        if view.selection is not None:
            fig.add_vrect(
                x0=view.selection.start,
                x1=view.selection.end,
                fillcolor=s.selected_color,
                opacity=0.1,
                line_width=0,
            )
            fig.add_annotation(
                x=view.selection.end,
                y=1.06,
                yref='paper',
                text=f"<b>{view.selection.label()}</b>",
                showarrow=False,
                font=dict(size=14, color='black'),
            )

        fig.update_layout(
            **self._get_base_layout(
                title=dict(text=f"{view.meal_name} ({view.day} {view.meal_time})", font=dict(size=16)),
            ),
            dragmode='select',
            selectdirection='h',
            legend=dict(x=1, y=1, xanchor='right', bgcolor='white', bordercolor='#333', borderwidth=1.5),
        )
        fig.update_xaxes(
            title_text='Time',
            range=[view.window_start, view.window_end],
            tickformat='%H:%M',
            showgrid=True,
            gridcolor='rgba(128,128,128,0.15)',
        )
        fig.update_yaxes(title_text='Glucose Level (mg/dL)', range=y_range, secondary_y=False)
        fig.update_yaxes(title_text='Heart Rate (BPM)', showgrid=False, secondary_y=True)

        return fig

    def _add_glucose_references(self, fig: go.Figure, y_range: list):
        """Add reference lines that fall inside the plotted glucose range."""
        t = self.config.glucose
        for value in (t.low, t.tight_high, t.target_high):
            if y_range[0] <= value <= y_range[1]:
                fig.add_hline(y=value, line_dash='dot', line_color='#9ca3af', opacity=0.6)
