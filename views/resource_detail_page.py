import logging
import streamlit as st

from resource_manager.catalog import get_resource, format_file_size
from utils.database.db_setup import session_scope
from view_components.resource_card import download_button

logger = logging.getLogger(__name__)

def display_resource(resource: dict) -> None:
    """ Display the full record of one resource. """
    st.title(resource.get('title', 'Untitled'))
    st.write(resource.get('description', ''))

    with st.container(border=True):
        subject_col, semester_col, type_col, size_col = st.columns(4)
        subject_col.metric("Subject", resource.get('subject', ''))
        semester_col.metric("Semester", resource.get('semester', ''))
        type_col.metric("Type", str(resource.get('type', '')).upper())
        size_col.metric("Size", format_file_size(resource.get('file_size')))

    st.caption(f"File: {resource.get('file_name', '')}")
    st.caption(f"Uploaded by {resource.get('uploader_email') or 'unknown'} on {resource.get('created_at', '')[:10]}")

    download_button(resource, key="detail_download")

# --- Streamlit Page Layout ---
st.page_link("views/resources_page.py", label="Back to Resources", icon="⬅️")

# The id comes from the URL, or from the card that was clicked
resource_id = st.query_params.get('id') or st.session_state.get('selected_resource_id')
if not resource_id:
    st.info("Select a resource from the Resources page to view its details.")
    st.stop()

try:
    with session_scope() as session:
        resource = get_resource(session, resource_id)
except RuntimeError as e:
    logger.error(f"resource_detail_page: {e}")
    st.error("Failed to load the resource.")
    st.stop()

if resource is None:
    st.error("Resource not found.")
else:
    st.query_params['id'] = resource_id
    display_resource(resource)
