"""Streamlit frontend for the BMI Tracker.

Main entry point for the multi-page Streamlit application.
"""

import streamlit as st

from bmi_tracker.config import DEFAULT_USER_ID
from bmi_tracker.db import init_db
from bmi_tracker.log import configure_logging
from bmi_tracker.store import fetch_latest_bmi, fetch_user_profile

st.set_page_config(
    page_title="BMI Tracker",
    page_icon="⚖️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize DB and logging once per session
if 'db_initialized' not in st.session_state:
    configure_logging()
    init_db()
    st.session_state.db_initialized = True

# The signed-in user comes from the auth provider; locally we use the configured ID
if 'user_id' not in st.session_state:
    st.session_state.user_id = DEFAULT_USER_ID

user_id = st.session_state.user_id
profile = fetch_user_profile(user_id)
latest = fetch_latest_bmi(user_id)

with st.sidebar:
    st.markdown("## ⚖️ BMI Tracker")
    st.markdown("---")
    st.success(f"👤 **{user_id}**")
    if latest:
        st.metric("Latest BMI", f"{latest.bmi:.1f}", help=latest.category)
        st.caption(latest.category)
    else:
        st.warning("⚠️ No BMI recorded yet")

    st.markdown("---")
    st.markdown("### Navigation")
    st.markdown("- 📋 **Details** - Enter weight and height")
    st.markdown("- 📊 **Dashboard** - BMI and trends")

st.title("⚖️ BMI Tracker")

st.markdown("""
Track your weight and Body Mass Index over time.

### Getting Started

1. **📋 Details** - Enter your weight, height and gender, in metric or imperial units.
   Each save records your weight and a new BMI reading.
2. **📊 Dashboard** - See your current BMI and category, the formula applied to
   your numbers, your weight over the past week and your BMI over the past month.
""")

col1, col2 = st.columns(2)
with col1:
    st.markdown("#### 👤 Your Details")
    if profile:
        st.write(f"**Weight:** {profile.weight:g} {profile.weight_unit}")
        st.write(f"**Height:** {profile.height:g} {profile.height_unit}")
        st.write(f"**Gender:** {profile.gender}")
    else:
        st.info("No details yet. Go to the Details page to add them!")

with col2:
    st.markdown("#### 📊 Latest Reading")
    if latest:
        st.write(f"**BMI:** {latest.bmi:.1f} ({latest.category})")
        st.write(f"**Recorded:** {latest.calculated_at:%b %d, %Y %H:%M}")
    else:
        st.write("**BMI:** not calculated yet")

st.markdown("---")
st.caption(
    "BMI is a screening measure, not a diagnosis. The category text is "
    "informational only."
)
