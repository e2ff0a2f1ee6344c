import logging
import streamlit as st

from resource_manager.upload import save_resource, ALLOWED_EXTENSIONS, MAX_FILE_SIZE_MB
from utils.database.db_setup import session_scope
from utils.settings_manager import get_setting
from view_components.alerter import show_alert, store_alert
from view_components.auth_guard import require_user

logger = logging.getLogger(__name__)

RESOURCE_TYPES = get_setting('CATALOG', 'resource_types')
SUBJECTS = get_setting('CATALOG', 'subjects')
SEMESTERS = get_setting('CATALOG', 'semesters')

# Display alert if it exists in session state
if st.session_state.get('stored_alert'):
    show_alert()

user = require_user()

# Changing the form key clears the form after a successful upload
if 'upload_form_run' not in st.session_state:
    st.session_state.upload_form_run = 0

def upload_form() -> None:
    """ Display the upload form and save the resource on submit. """
    with st.form(key=f"upload_form_{st.session_state.upload_form_run}"):
        title = st.text_input("Title")
        description = st.text_area("Description")

        subject_col, semester_col, type_col = st.columns(3)
        with subject_col:
            subject = st.selectbox("Subject", SUBJECTS, index=None, placeholder="Select subject")
        with semester_col:
            semester = st.selectbox("Semester", SEMESTERS, index=None, placeholder="Select semester")
        with type_col:
            resource_type = st.selectbox("Type", RESOURCE_TYPES, format_func=str.title)

        uploaded_file = st.file_uploader(
            f"Choose a file (max {MAX_FILE_SIZE_MB}MB)", type=ALLOWED_EXTENSIONS
        )
        submitted = st.form_submit_button("Upload Resource", icon="⬆️", type="primary")

    if not submitted:
        return

    fields = {
        'title': title,
        'description': description,
        'subject': subject,
        'semester': semester,
        'type': resource_type
    }
    file_name = uploaded_file.name if uploaded_file else None
    data = uploaded_file.getvalue() if uploaded_file else b''
    mime_type = uploaded_file.type if uploaded_file else None

    try:
        with st.spinner("Uploading..."):
            with session_scope() as session:
                save_resource(session, fields, file_name, data, mime_type, user)
    except ValueError as e:
        st.error(str(e))
        return
    except RuntimeError as e:
        logger.error(f"upload_form: {e}")
        st.error(f"Failed to upload resource: {e}")
        return

    store_alert('success', "Resource uploaded successfully!")
    st.session_state.upload_form_run += 1
    st.rerun()

# --- Streamlit Page Layout ---
st.title("Upload a Resource")
st.write("Share notes, papers and videos with other students.")

upload_form()
