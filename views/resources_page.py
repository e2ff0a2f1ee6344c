import logging
import streamlit as st

from resource_manager.catalog import list_resources, filter_resources, ALL
from utils.database.db_setup import session_scope
from utils.settings_manager import get_setting
from view_components.alerter import show_alert
from view_components.resource_card import resource_card

logger = logging.getLogger(__name__)

RESOURCE_TYPES = get_setting('CATALOG', 'resource_types')
SUBJECTS = get_setting('CATALOG', 'subjects')

# Display alert if it exists in session state
if st.session_state.get('stored_alert'):
    show_alert()

def load_resources() -> list:
    """ Load every resource, stopping the page with an error if the store is unavailable. """
    try:
        with session_scope() as session:
            return list_resources(session)
    except RuntimeError as e:
        logger.error(f"load_resources: {e}")
        st.error("Failed to load resources.")
        st.stop()

# --- Streamlit Page Layout ---
st.title("Study Resources")
st.write("Browse and download materials shared by other students.")

# --- Filters ---
search_col, type_col, subject_col = st.columns([2, 1, 1])
with search_col:
    search = st.text_input("Search", placeholder="Search by title or description", key="resource_search")
with type_col:
    resource_type = st.selectbox("Type", [ALL] + RESOURCE_TYPES, format_func=str.title, key="resource_type")
with subject_col:
    subject = st.selectbox("Subject", [ALL] + SUBJECTS, format_func=lambda s: "All" if s == ALL else s,
                           key="resource_subject")

# --- Resource List ---
with st.spinner("Loading resources..."):
    resources = load_resources()
filtered = filter_resources(resources, search, resource_type, subject)

st.caption(f"Showing {len(filtered)} of {len(resources)} resources")

if not filtered:
    st.info("No resources found. Try different filters, or upload one yourself.")
else:
    columns = st.columns(3)
    for i, resource in enumerate(reversed(filtered)):
        with columns[i % 3]:
            resource_card(resource)
