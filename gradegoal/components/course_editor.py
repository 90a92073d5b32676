"""Course editor: summary cards, item rows and projected final"""

import streamlit as st

from gradegoal.components.ui.metric import display_metric
from gradegoal.components.ui.pill import render_pill
from gradegoal.services.course_store import CourseStore
from gradegoal.services.grade_calculator import (
    NEED_ACHIEVED,
    NEED_IMPOSSIBLE,
    NEED_POSSIBLE,
    compute,
    describe_needed,
    item_need,
)
from gradegoal.utils.helpers import format_number, format_pct


def _init_state(key: str, value: str):
    if key not in st.session_state:
        st.session_state[key] = value


EDITOR_KEY_PREFIXES = ("course_name_", "course_target_", "item_name_", "item_weight_", "item_score_")


def reset_editor_state():
    """Drop cached input values so the editor re-reads them from the store"""
    for key in [k for k in st.session_state.keys() if str(k).startswith(EDITOR_KEY_PREFIXES)]:
        del st.session_state[key]


def _on_name_change(store: CourseStore, course_id: str, key: str):
    store.rename_course(course_id, st.session_state[key])


def _on_target_change(store: CourseStore, course_id: str, key: str):
    course = store.set_target(course_id, st.session_state[key])
    # Show the clamped value back in the input
    st.session_state[key] = format_number(course.target)


def _on_item_change(store: CourseStore, course_id: str, item_id: str, field: str, key: str):
    item = store.update_item(course_id, item_id, **{field: st.session_state[key]})
    if field != "name":
        st.session_state[key] = format_number(getattr(item, field))


def _render_needed_summary(needed):
    status, value = describe_needed(needed)
    if status == NEED_ACHIEVED:
        st.success("🎉 Target already reached: you need 0% on the remaining weight.")
    elif status == NEED_POSSIBLE:
        st.info(f"📊 You need an average of **{format_pct(value)}** on the remaining weight.")
    elif status == NEED_IMPOSSIBLE:
        st.error(
            f"⚠️ You would need **{format_pct(value)}** on the remaining weight, "
            "which exceeds the maximum possible."
        )
    else:
        st.caption("No remaining weight or target set: nothing left to solve for.")


def render_course_editor(store: CourseStore):
    """Render the selected course with its computed results"""
    course = store.selected_course
    results = compute(course)

    col1, col2 = st.columns([4, 1])
    with col1:
        name_key = f"course_name_{course.id}"
        _init_state(name_key, course.name)
        st.text_input(
            "Course name",
            key=name_key,
            on_change=_on_name_change,
            args=(store, course.id, name_key),
        )
    with col2:
        st.caption(f"Total weight: {format_number(results.total_weight)}%")

    col1, col2 = st.columns(2)
    with col1:
        display_metric(
            format_pct(results.current_average),
            "Current grade",
            caption=f"completed weight: {format_number(results.completed_weight)}%",
        )
    with col2:
        target_key = f"course_target_{course.id}"
        _init_state(target_key, format_number(course.target))
        st.text_input(
            "Target grade (%)",
            key=target_key,
            on_change=_on_target_change,
            args=(store, course.id, target_key),
        )
        st.caption(f"remaining weight: {format_number(results.remaining_weight)}%")

    _render_needed_summary(results.needed_average_on_remaining)

    st.markdown("---")

    for index, row in enumerate(results.rows):
        item = row.item
        cols = st.columns([3, 2, 2, 2, 1])
        with cols[0]:
            key = f"item_name_{item.id}"
            _init_state(key, item.name)
            st.text_input(
                "Item",
                key=key,
                placeholder=f"Item {index + 1}",
                label_visibility="collapsed",
                on_change=_on_item_change,
                args=(store, course.id, item.id, "name", key),
            )
        with cols[1]:
            key = f"item_weight_{item.id}"
            _init_state(key, format_number(item.weight))
            st.text_input(
                "Weight",
                key=key,
                placeholder="weight %",
                label_visibility="collapsed",
                on_change=_on_item_change,
                args=(store, course.id, item.id, "weight", key),
            )
        with cols[2]:
            render_pill(row.pending, item_need(results, row), row.score)
        with cols[3]:
            key = f"item_score_{item.id}"
            _init_state(key, format_number(item.score))
            st.text_input(
                "Score",
                key=key,
                placeholder="score",
                label_visibility="collapsed",
                on_change=_on_item_change,
                args=(store, course.id, item.id, "score", key),
            )
        with cols[4]:
            if st.button("delete", key=f"remove_item_{item.id}"):
                store.remove_item(course.id, item.id)
                st.rerun()

    col1, col2 = st.columns([1, 2])
    with col1:
        if st.button("➕ Add item", key=f"add_item_{course.id}"):
            store.add_item(course.id)
            st.rerun()
    with col2:
        st.caption(f"Projected final with entered scores: **{format_pct(results.projected_final)}**")

    st.caption(
        "Tip: leave the score blank for future items. The pill shows a uniform % "
        "needed to hit your target across the remaining weight."
    )
