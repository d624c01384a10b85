"""Chart components using Plotly for data visualization."""

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from bmi_tracker.config import NORMAL_MIN_BMI, OBESE_MIN_BMI, OVERWEIGHT_MIN_BMI

PRIMARY_BROWN = "#8C4512"
ACCENT_BROWN = "#B8850A"

# Reference lines drawn on the BMI trend: (value, label, color)
BMI_REFERENCE_LINES = [
    (NORMAL_MIN_BMI, "Normal Min", "green"),
    (OVERWEIGHT_MIN_BMI, "Overweight", "orange"),
    (OBESE_MIN_BMI, "Obese", "red"),
]


def _empty_chart(message: str):
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        xref="paper", yref="paper",
        x=0.5, y=0.5, showarrow=False
    )
    return fig


def create_weight_history_chart(entries: list):
    """Create line chart of recorded weights.

    Args:
        entries: List of WeightEntry objects, oldest first

    Returns:
        Plotly figure
    """
    if not entries:
        return _empty_chart("No weight entries found")

    df = pd.DataFrame(
        [(e.recorded_at, e.weight, e.unit) for e in entries],
        columns=['Date', 'Weight', 'Unit'],
    ).sort_values('Date')

    fig = px.line(
        df,
        x='Date',
        y='Weight',
        title='Weight History (Past Week)',
        markers=True,
        line_shape='spline',
        hover_data=['Unit'],
        color_discrete_sequence=[PRIMARY_BROWN],
    )
    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="Weight",
        hovermode='x unified'
    )
    return fig


def create_bmi_trend_chart(records: list):
    """Create line chart of BMI over time with category reference lines.

    Args:
        records: List of BMIRecord objects, oldest first

    Returns:
        Plotly figure
    """
    if not records:
        return _empty_chart("No BMI records found")

    df = pd.DataFrame(
        [(r.calculated_at, r.bmi, r.category) for r in records],
        columns=['Date', 'BMI', 'Category'],
    ).sort_values('Date')

    fig = px.line(
        df,
        x='Date',
        y='BMI',
        title='BMI Trend (Past Month)',
        markers=True,
        line_shape='spline',
        hover_data=['Category'],
        color_discrete_sequence=[ACCENT_BROWN],
    )

    for value, label, color in BMI_REFERENCE_LINES:
        fig.add_hline(
            y=value,
            line_dash="dash",
            line_color=color,
            opacity=0.3,
            annotation_text=label,
        )

    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="BMI",
        hovermode='x unified'
    )
    return fig
