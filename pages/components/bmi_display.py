"""BMI display components for Streamlit pages."""

import streamlit as st

from bmi_tracker.bmi_calculator import CATEGORY_RANGES
from bmi_tracker.models import Dashboard

CATEGORY_COLORS = {
    "underweight": "blue",
    "normal": "green",
    "overweight": "orange",
    "obese": "red",
}


def color_for_category(category: str) -> str:
    """Streamlit colour name for a BMI category (gray if unrecognised)."""
    return CATEGORY_COLORS.get(category.lower(), "gray")


def render_bmi_card(dashboard: Dashboard):
    """Render the current BMI, its category badge and advisory text."""
    latest = dashboard.latest
    color = color_for_category(latest.category)

    st.markdown("### Your BMI")
    st.markdown(f"# :{color}[{latest.bmi:.1f}]")
    st.markdown(f"**:{color}[{latest.category}]**")
    st.caption(dashboard.description)


def render_formula_card(dashboard: Dashboard):
    """Render the BMI formula, with the user's own numbers when available."""
    st.markdown("### BMI Formula")
    st.code("BMI = weight (kg) / (height (m))²", language=None)
    if dashboard.weight_kg is not None and dashboard.height_m is not None:
        st.caption(
            f"For you: {dashboard.weight_kg:.1f} kg / ({dashboard.height_m:.2f} m)² "
            f"= {dashboard.latest.bmi:.1f}"
        )


def render_category_reference():
    """Render the category ranges table."""
    st.markdown("### BMI Categories")
    for category, label in CATEGORY_RANGES:
        color = color_for_category(category.value)
        col1, col2 = st.columns([3, 1])
        col1.markdown(f":{color}[●] {category.value}")
        col2.caption(label)
