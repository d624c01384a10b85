"""Body Details Page.

Enter weight, height and gender; saving records a new BMI reading.
"""

import streamlit as st

from bmi_tracker.bmi_calculator import ideal_weight_range
from bmi_tracker.config import DEFAULT_USER_ID, HEIGHT_RANGES, WEIGHT_RANGES
from bmi_tracker.exceptions import ValidationFailed
from bmi_tracker.models import Gender, HeightUnit, WeightUnit
from bmi_tracker.store import fetch_user_profile
from bmi_tracker.tracker import save_details
from bmi_tracker.units import kilograms_to_pounds

st.set_page_config(page_title="Details | BMI Tracker", page_icon="📋", layout="wide")
st.title("📋 Your Details")
st.caption("Enter your information to track your BMI")

user_id = st.session_state.get("user_id", DEFAULT_USER_ID)
profile = fetch_user_profile(user_id)

weight_units = [u.value for u in WeightUnit]
height_units = [u.value for u in HeightUnit]
genders = [g.value for g in Gender]

with st.form("details_form"):
    st.markdown("#### Weight")
    col1, col2 = st.columns([3, 1])
    with col2:
        weight_unit = st.radio(
            "Weight Unit",
            weight_units,
            index=weight_units.index(profile.weight_unit) if profile else 0,
            format_func=lambda u: WeightUnit(u).display_name,
            horizontal=True,
        )
    with col1:
        weight = st.text_input(
            "Weight*",
            value=f"{profile.weight:g}" if profile else "",
            placeholder="Enter weight",
        )
    low, high = WEIGHT_RANGES[weight_unit]
    st.caption(f"Range: {low:g}-{high:g} {weight_unit}")

    st.markdown("#### Height")
    col1, col2 = st.columns([3, 1])
    with col2:
        height_unit = st.radio(
            "Height Unit",
            height_units,
            index=height_units.index(profile.height_unit) if profile else 0,
            format_func=lambda u: HeightUnit(u).display_name,
            horizontal=True,
        )
    with col1:
        height = st.text_input(
            "Height*",
            value=f"{profile.height:g}" if profile else "",
            placeholder="Enter height",
        )
    low, high = HEIGHT_RANGES[height_unit]
    st.caption(f"Range: {low:g}-{high:g} {height_unit}")

    st.markdown("#### Gender")
    gender = st.radio(
        "Gender",
        genders,
        index=genders.index(profile.gender) if profile and profile.gender in genders else 0,
        horizontal=True,
    )

    st.markdown("---")
    submitted = st.form_submit_button("✅ Save Details", use_container_width=True)

    if submitted:
        try:
            result = save_details(user_id, weight.strip(), weight_unit,
                                  height.strip(), height_unit, gender)
        except ValidationFailed as e:
            st.error(f"⚠️ {e.outcome.message}")
        except Exception as e:
            st.error("❌ Failed to save profile")
            st.caption(str(e))
        else:
            st.success("✅ Profile saved successfully!")
            ideal = ideal_weight_range(float(height), height_unit)
            col1, col2 = st.columns(2)
            col1.metric("BMI", f"{result.value:.1f}", help=result.description)
            col1.caption(result.category.value)
            col2.metric(
                "Ideal Weight",
                f"{ideal.min_kg:.1f} - {ideal.max_kg:.1f} kg",
                help=f"{kilograms_to_pounds(ideal.min_kg):.1f} - "
                     f"{kilograms_to_pounds(ideal.max_kg):.1f} lbs",
            )
