"""Course list, course actions and file import/export"""

import streamlit as st

from gradegoal.components.course_editor import reset_editor_state
from gradegoal.components.layout import flash
from gradegoal.services.course_store import CourseStore
from gradegoal.services.exceptions import LastCourseError, TransferError
from gradegoal.services.transfer_service import (
    export_all,
    export_course,
    parse_all_file,
    parse_course_file,
)
from gradegoal.utils.helpers import format_number


def _render_course_list(store: CourseStore):
    st.markdown("### Classes")
    if st.button("➕ Add", key="add_course", use_container_width=True):
        course = store.add_course()
        flash(f"Added {course.name}")
        st.rerun()

    selected = store.selected_course
    for course in store.courses:
        target = format_number(course.target) or "—"
        label = f"{course.name or 'Untitled'} · Target {target}%"
        is_selected = selected is not None and course.id == selected.id
        if st.button(
            label,
            key=f"select_course_{course.id}",
            type="primary" if is_selected else "secondary",
            use_container_width=True,
        ):
            store.select(course.id)
            st.rerun()


def _render_delete(store: CourseStore):
    selected = store.selected_course
    pending_id = st.session_state.get("confirm_delete_id")

    if pending_id and pending_id == selected.id:
        st.warning(f'Delete course "{selected.name or "Course"}"? This cannot be undone.')
        # Sidebar columns cannot nest, so the buttons stack
        if st.button("Delete", key="confirm_delete", type="primary", use_container_width=True):
            st.session_state.confirm_delete_id = None
            store.delete_course(selected.id)
            flash(f"Deleted {selected.name or 'course'}")
            st.rerun()
        if st.button("Cancel", key="cancel_delete", use_container_width=True):
            st.session_state.confirm_delete_id = None
            st.rerun()
        return

    if st.button("🗑️ Delete", key="delete_course", use_container_width=True):
        if len(store.courses) == 1:
            try:
                store.delete_course(selected.id)
            except LastCourseError as e:
                st.warning(str(e))
            return
        st.session_state.confirm_delete_id = selected.id
        st.rerun()


def import_course_file(store: CourseStore, content) -> bool:
    """Import one course file into the store; shows the error and returns False when it is rejected"""
    try:
        course = store.import_course(parse_course_file(content, store.id_factory))
    except TransferError as e:
        st.error(str(e))
        return False
    reset_editor_state()
    flash(f"Imported {course.name}")
    return True


def import_all_file(store: CourseStore, content) -> bool:
    """Replace every course with the file's courses; shows the error and returns False when it is rejected"""
    try:
        store.replace_all(parse_all_file(content, store.id_factory))
    except TransferError as e:
        st.error(str(e))
        return False
    reset_editor_state()
    flash(f"Imported {len(store.courses)} courses")
    return True


def _render_import(store: CourseStore):
    with st.form("import_course_form", clear_on_submit=True):
        uploaded = st.file_uploader("Import course", type=["json"], key="import_course_file")
        submitted = st.form_submit_button("Import")
    if submitted and uploaded is not None:
        if import_course_file(store, uploaded.getvalue()):
            st.rerun()

    with st.form("import_all_form", clear_on_submit=True):
        uploaded_all = st.file_uploader("Import all courses", type=["json"], key="import_all_file")
        submitted_all = st.form_submit_button("Import All")
    if submitted_all and uploaded_all is not None:
        if import_all_file(store, uploaded_all.getvalue()):
            st.rerun()


def render_course_sidebar(store: CourseStore, sidebar):
    """Render the course list and the course-level actions in the sidebar"""
    with sidebar:
        _render_course_list(store)
        st.markdown("---")

        selected = store.selected_course
        col1, col2 = st.columns(2)
        with col1:
            if st.button("📄 Duplicate", key="duplicate_course", use_container_width=True):
                copy = store.duplicate_course(selected.id)
                flash(f"Created {copy.name}")
                st.rerun()
        with col2:
            _render_delete(store)

        st.markdown("---")
        st.markdown("### Export")
        filename, text = export_course(selected)
        st.download_button(
            "⬇️ Export",
            text.encode(),
            file_name=filename,
            mime="application/json",
            use_container_width=True,
        )
        all_filename, all_text = export_all(store.courses)
        st.download_button(
            "⬇️ Export All",
            all_text.encode(),
            file_name=all_filename,
            mime="application/json",
            use_container_width=True,
        )

        st.markdown("### Import")
        _render_import(store)
