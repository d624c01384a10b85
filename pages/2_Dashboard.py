"""BMI Dashboard Page.

Current BMI, formula breakdown and weight/BMI trends.
"""

import streamlit as st

from bmi_tracker.config import DEFAULT_USER_ID
from bmi_tracker.tracker import load_dashboard
from pages.components.bmi_display import (
    render_bmi_card,
    render_category_reference,
    render_formula_card,
)
from pages.components.charts import create_bmi_trend_chart, create_weight_history_chart

st.set_page_config(page_title="Dashboard | BMI Tracker", page_icon="📊", layout="wide")
st.title("📊 BMI Dashboard")

user_id = st.session_state.get("user_id", DEFAULT_USER_ID)

if st.button("🔄 Refresh"):
    st.rerun()

dashboard = load_dashboard(user_id)

if not dashboard.has_data:
    st.info("📭 **No BMI Data**\n\nPlease enter your details in the Details page to calculate your BMI")
    st.stop()

col1, col2 = st.columns(2)
with col1:
    render_bmi_card(dashboard)
with col2:
    render_formula_card(dashboard)

st.divider()

if dashboard.weight_history:
    st.plotly_chart(create_weight_history_chart(dashboard.weight_history), use_container_width=True)

if dashboard.bmi_history:
    st.plotly_chart(create_bmi_trend_chart(dashboard.bmi_history), use_container_width=True)

st.divider()
render_category_reference()
