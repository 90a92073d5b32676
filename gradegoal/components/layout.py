"""Layout utilities for custom Streamlit styling"""

import streamlit as st


def setup_custom_layout():
    """Setup page config for the calculator"""
    st.set_page_config(
        page_title="GradeGoal - Grade Goal Calculator",
        page_icon="🎯",
        layout="wide",
        initial_sidebar_state="expanded"
    )


def create_custom_sidebar():
    """Create styled sidebar navigation"""
    st.sidebar.markdown("## 🎯 GradeGoal")
    st.sidebar.markdown("---")
    return st.sidebar


def flash(message: str, level: str = "success"):
    """Queue a notification to show after the next rerun"""
    st.session_state.flash_messages = st.session_state.get("flash_messages", []) + [(level, message)]


def show_flash_messages():
    """Render and clear queued notifications"""
    for level, message in st.session_state.pop("flash_messages", []):
        if level == "warning":
            st.warning(message)
        elif level == "error":
            st.error(message)
        else:
            st.success(message)
