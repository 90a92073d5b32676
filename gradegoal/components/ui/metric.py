"""Metric display component"""

import streamlit as st


def display_metric(value: str, label: str, caption: str = ""):
    """
    Display a metric with an optional caption underneath

    Args:
        value: Main value to display
        label: Label for the metric
        caption: Secondary line such as the weight it was computed over
    """
    st.metric(label=label, value=value)
    if caption:
        st.caption(caption)
