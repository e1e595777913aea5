"""
Food / Glucose Drill-down Streamlit App

Interactive dashboard over a food log, CGM readings and heart rate:
daily calories -> meals of a day -> glucose response to a meal.
"""

import os
from dataclasses import replace
from pathlib import Path

import streamlit as st

from food_glucose_dashboard.analyzers import aggregates_to_frame
from food_glucose_dashboard.app_logging import configure_logging
from food_glucose_dashboard.config import NUTRIENTS, load_config
from food_glucose_dashboard.errors import DataLoadError, NoGlucoseDataError
from food_glucose_dashboard.loaders import load_dashboard_data, load_from_config
from food_glucose_dashboard.navigation import (
    CalendarView,
    DrilldownNavigator,
    GlucoseView,
    MealView,
)
from food_glucose_dashboard.visualizers import PlotlyVisualizer
from food_glucose_dashboard.visualizers.selection import (
    clicked_point_index,
    clicked_x,
    selected_x_range,
)

CONFIG_ENV_VAR = "FOOD_GLUCOSE_DASHBOARD_CONFIG"


# =============================================================================
# Page Config
# =============================================================================

st.set_page_config(
    page_title="Food & Glucose",
    page_icon="🍽️",
    layout="wide",
    initial_sidebar_state="expanded"
)


# =============================================================================
# Session State Initialization
# =============================================================================

def init_session_state():
    """Initialize session state variables."""
    if 'config' not in st.session_state:
        config_path = os.getenv(CONFIG_ENV_VAR)
        st.session_state.config = load_config(Path(config_path) if config_path else None)
        configure_logging(st.session_state.config.logging.level)
    if 'data' not in st.session_state:
        st.session_state.data = None
    if 'load_attempted' not in st.session_state:
        st.session_state.load_attempted = False
    if 'navigator' not in st.session_state:
        st.session_state.navigator = None
    if 'nav_epoch' not in st.session_state:
        st.session_state.nav_epoch = 0
    if 'notice' not in st.session_state:
        st.session_state.notice = None


init_session_state()


def load_data(uploads=None):
    """Load all three sources into the session, or report the failure.

    Uploaded files take precedence over the configured paths.
    """
    st.session_state.load_attempted = True
    st.session_state.navigator = None
    try:
        if uploads is None:
            st.session_state.data = load_from_config(st.session_state.config.data)
        else:
            st.session_state.data = load_dashboard_data(*uploads)
    except DataLoadError as e:
        st.session_state.data = None
        st.error(str(e))


def chart_key(view_name: str) -> str:
    """Widget key for a view's chart; changes on every navigation."""
    return f"{view_name}-chart-{st.session_state.nav_epoch}"


def navigated():
    """Start the next view with fresh chart selections."""
    st.session_state.nav_epoch += 1


def go_back():
    st.session_state.navigator.back()
    navigated()


def get_navigator(nutrient: str) -> DrilldownNavigator:
    """Get the session navigator, rebuilding it when the nutrient changes."""
    navigator = st.session_state.navigator
    if navigator is None or navigator.nutrient != nutrient:
        settings = replace(st.session_state.config.navigation, secondary_nutrient=nutrient)
        navigator = DrilldownNavigator.from_settings(st.session_state.data, settings)
        st.session_state.navigator = navigator
        navigated()
    return navigator


# =============================================================================
# Sidebar
# =============================================================================

def render_sidebar() -> str:
    """Render sidebar with data sources and the tracked nutrient."""
    config = st.session_state.config

    with st.sidebar:
        st.title("🍽️ Food & Glucose")

        st.subheader("Data")

        food_file = st.file_uploader("Food Log (CSV)", type=['csv'], key='food_upload')
        glucose_file = st.file_uploader("Dexcom Glucose (CSV)", type=['csv'], key='glucose_upload')
        hr_file = st.file_uploader("Heart Rate (CSV)", type=['csv'], key='hr_upload')

        uploads = (food_file, glucose_file, hr_file)
        if st.button("Load Uploaded Files", disabled=any(f is None for f in uploads)):
            load_data(uploads)
        elif not st.session_state.load_attempted:
            load_data()

        if st.session_state.data is not None:
            summary = st.session_state.data.summary()
            st.caption(
                f"{summary['food_log_rows']:,} food entries · "
                f"{summary['glucose_rows']:,} glucose readings · "
                f"{summary['heart_rate_rows']:,} heart rate readings"
            )

        st.divider()

        st.subheader("⚙️ Settings")
        default = config.navigation.secondary_nutrient
        nutrient = st.selectbox(
            "Compare calories from",
            NUTRIENTS,
            index=NUTRIENTS.index(default),
            format_func=str.title,
            key='nutrient',
        )
        st.caption(
            f"Glucose window: ±{config.navigation.glucose_window_minutes} minutes around a meal"
        )

    return nutrient


# =============================================================================
# Event Handling
# =============================================================================

def handle_chart_events(navigator: DrilldownNavigator):
    """Apply the last selection made on the current view's chart."""
    event = st.session_state.get(chart_key(navigator.state))
    view = navigator.current

    if isinstance(view, CalendarView):
        day = clicked_x(event)
        if day is not None:
            navigator.select_day(str(day))
            navigated()

    elif isinstance(view, MealView):
        index = clicked_point_index(event)
        if index is not None:
            try:
                navigator.select_meal(view.meal_at(index))
            except NoGlucoseDataError as e:
                st.session_state.notice = str(e)
            navigated()

    elif isinstance(view, GlucoseView):
        brushed = selected_x_range(event)
        current = view.selection
        if brushed is None:
            if current is not None:
                navigator.clear_brush()
        elif current is None or (current.start, current.end) != brushed:
            navigator.brush(*brushed)


# =============================================================================
# Views
# =============================================================================

def render_calendar(view: CalendarView, viz: PlotlyVisualizer):
    st.subheader("📅 Daily Calories")
    st.caption(f"Total calories with {view.nutrient} calories overlaid. Click a day to see its meals.")

    st.plotly_chart(
        viz.create_calendar_chart(view),
        use_container_width=True,
        on_select="rerun",
        selection_mode="points",
        key=chart_key(view.name),
    )

    table = aggregates_to_frame(list(view.aggregates))
    st.download_button(
        "📥 Download Daily Totals (CSV)",
        table.to_csv(index=False),
        file_name=f"daily_{view.nutrient}_calories.csv",
        mime="text/csv",
    )


def render_meals(view: MealView, viz: PlotlyVisualizer):
    st.button("← Back to Calendar", on_click=go_back)
    st.subheader(f"🍴 Meals on {view.day}")

    if view.is_empty:
        st.info("No meals logged on this day.")
    else:
        st.caption("Click a meal to see the glucose response.")

    st.plotly_chart(
        viz.create_meal_scatter(view),
        use_container_width=True,
        on_select="rerun",
        selection_mode="points",
        key=chart_key(view.name),
    )


def render_glucose(view: GlucoseView, viz: PlotlyVisualizer):
    st.button("← Back to Meal", on_click=go_back)
    st.subheader(f"📈 Glucose Response: {view.meal_name}")
    st.caption("Drag across the chart to summarize a time range.")

    response = view.response
    if response is not None:
        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric(
                "Baseline",
                f"{response.baseline:.0f} mg/dL" if response.baseline is not None else "N/A",
            )
        with col2:
            st.metric(
                "Peak",
                f"{response.peak:.0f} mg/dL" if response.peak is not None else "N/A",
                f"at {response.peak_time}" if response.peak_time else None,
            )
        with col3:
            rise = response.rise
            st.metric("Rise", f"{rise:+.0f} mg/dL" if rise is not None else "N/A")
        with col4:
            hr = response.heart_rate_at_meal
            st.metric("Heart Rate at Meal", f"{hr:.0f} BPM" if hr is not None else "N/A")

    st.plotly_chart(
        viz.create_glucose_detail_chart(view),
        use_container_width=True,
        on_select="rerun",
        selection_mode="box",
        key=chart_key(view.name),
    )

    if view.selection is not None:
        st.info(view.selection.label())

    st.download_button(
        "📥 Download Readings (CSV)",
        view.glucose.to_csv(index=False),
        file_name=f"glucose_{view.day}_{view.meal_time.replace(':', '')}.csv",
        mime="text/csv",
    )


# =============================================================================
# Main Content
# =============================================================================

def render_main():
    """Render main dashboard content."""
    nutrient = render_sidebar()

    if st.session_state.data is None:
        st.info("👈 Load a food log, glucose and heart rate export to begin")
        return

    navigator = get_navigator(nutrient)
    handle_chart_events(navigator)

    if st.session_state.notice:
        st.warning(st.session_state.notice)
        st.session_state.notice = None

    viz = PlotlyVisualizer(st.session_state.config)
    view = navigator.current

    if isinstance(view, CalendarView):
        render_calendar(view, viz)
    elif isinstance(view, MealView):
        render_meals(view, viz)
    else:
        render_glucose(view, viz)


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    render_main()
