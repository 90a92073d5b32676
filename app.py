"""GradeGoal - Main Streamlit Application"""

import streamlit as st
from gradegoal.components.layout import setup_custom_layout, create_custom_sidebar, show_flash_messages
from gradegoal.database.database import init_db
from gradegoal.database.repository import SqlStateRepository
from gradegoal.services.course_store import CourseStore
from gradegoal.utils.logging_config import configure_logging, is_configured

# Initialize app
setup_custom_layout()

if not is_configured():
    configure_logging()

# Initialize database and session state
if 'course_store' not in st.session_state:
    init_db()
    st.session_state.course_store = CourseStore(SqlStateRepository()).load()

if 'confirm_delete_id' not in st.session_state:
    st.session_state.confirm_delete_id = None


def main():
    """Main application"""
    from gradegoal.components.course_editor import render_course_editor
    from gradegoal.components.course_sidebar import render_course_sidebar

    store = st.session_state.course_store
    sidebar = create_custom_sidebar()

    show_flash_messages()
    render_course_sidebar(store, sidebar)
    render_course_editor(store)


if __name__ == "__main__":
    main()
