"""Need/got pill shown next to each item"""

import html as _html
from typing import Optional

import streamlit as st

from gradegoal.utils.constants import ERROR_COLOR, PRIMARY_COLOR
from gradegoal.utils.helpers import format_need, format_number

_PILL_STYLE = (
    "display: inline-block; padding: 6px 12px; border-radius: 16px; "
    "font-size: 0.875rem; border: 1px solid {border}; background: {background}; color: {color};"
)


def pill_html(pending: bool, need: Optional[float], score: Optional[float]) -> str:
    """Markup for a pending item's 'need' pill or a graded item's 'got' pill"""
    if pending:
        value_color = ERROR_COLOR if need is not None and need > 100 else PRIMARY_COLOR
        style = _PILL_STYLE.format(
            border="rgba(249,115,22,0.3)", background="rgba(249,115,22,0.1)", color=PRIMARY_COLOR
        )
        return (
            f'<span style="{style}">NEED '
            f'<strong style="color: {value_color};">{_html.escape(format_need(need))}</strong></span>'
        )
    style = _PILL_STYLE.format(border="#3f3f46", background="#18181b", color="#e4e4e7")
    return f'<span style="{style}">got <strong>{_html.escape(format_number(score))}/100</strong></span>'


def render_pill(pending: bool, need: Optional[float], score: Optional[float]):
    st.markdown(pill_html(pending, need, score), unsafe_allow_html=True)
