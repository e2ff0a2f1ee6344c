import logging
import streamlit as st

from analysis_manager.dashboard_stats import get_user_summary, build_results_table
from resource_manager.catalog import list_resources, format_file_size
from test_manager.results import list_tests, list_user_results
from utils.database.db_setup import session_scope
from view_components.alerter import show_alert
from view_components.auth_guard import require_user

logger = logging.getLogger(__name__)

# Display alert if it exists in session state
if st.session_state.get('stored_alert'):
    show_alert()

user = require_user()

def load_summary() -> dict:
    """ Compute the dashboard summary for the signed-in user. """
    try:
        with session_scope() as session:
            resources = list_resources(session)
            tests = list_tests(session)
            results = list_user_results(session, user['uid'])
    except RuntimeError as e:
        logger.error(f"load_summary: {e}")
        st.error("Failed to load your dashboard.")
        st.stop()

    return get_user_summary(user['uid'], resources, tests, results)

# --- Streamlit Page Layout ---
st.title(f"Welcome back, {user['name']}")

summary = load_summary()

# --- Summary Metrics ---
uploads_col, tests_col, average_col, best_col = st.columns(4)
uploads_col.metric("Resources Uploaded", summary['resources_uploaded'])
tests_col.metric("Tests Taken", summary['tests_taken'])
average_col.metric("Average Score", f"{summary['average_score']}%")
best_col.metric("Best Score", f"{summary['best_score']}%")

# --- Test Results ---
st.header("Your Test Results")
df_results = build_results_table(summary['result_rows'])
if df_results.empty:
    st.info("You have not taken any tests yet.")
    st.page_link("views/tests_page.py", label="Browse tests", icon="📝")
else:
    st.dataframe(df_results, hide_index=True)

# --- Recent Uploads ---
st.header("Recent Uploads")
if not summary['recent_uploads']:
    st.info("You have not uploaded any resources yet.")
    st.page_link("views/upload_page.py", label="Upload a resource", icon="⬆️")
for resource in summary['recent_uploads']:
    with st.container(border=True):
        st.markdown(f"**{resource.get('title', 'Untitled')}**")
        st.caption(
            f"{resource.get('subject', '')} · {resource.get('type', '')} · "
            f"{format_file_size(resource.get('file_size'))} · {resource.get('created_at', '')[:10]}"
        )
