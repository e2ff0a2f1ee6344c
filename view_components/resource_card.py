"""
Resource Card Component

Displays one resource in a bordered container with its download button.
"""

import logging
import streamlit as st

from resource_manager.catalog import decode_file_data, format_file_size

logger = logging.getLogger(__name__)

TYPE_ICONS = {'pdf': '📄', 'video': '🎬', 'notes': '📝'}

def download_button(resource: dict, key: str):
    """ Download button for the embedded file, or an error if it cannot be decoded. """
    try:
        data, mime_type = decode_file_data(resource.get('file_data', ''))
    except ValueError as e:
        logger.warning(f"download_button: Resource {resource.get('id')} - {e}")
        st.error("Download not available for this resource.")
        return

    st.download_button(
        "Download",
        data=data,
        file_name=resource.get('file_name') or 'resource',
        mime=mime_type,
        icon="⬇️",
        key=key
    )

def resource_card(resource: dict):
    """ Display a resource summary with links to its detail page and file. """
    with st.container(border=True):
        icon = TYPE_ICONS.get(resource.get('type'), '📁')
        st.markdown(f"#### {icon} {resource.get('title', 'Untitled')}")
        st.caption(f"{resource.get('subject', '')} · {resource.get('semester', '')} semester")
        st.write(resource.get('description', ''))
        st.caption(format_file_size(resource.get('file_size')))

        left_col, right_col = st.columns(2)
        with left_col:
            if st.button("View details", icon="🔎", key=f"details_{resource['id']}"):
                st.session_state.selected_resource_id = resource['id']
                st.switch_page("views/resource_detail_page.py")
        with right_col:
            download_button(resource, key=f"download_{resource['id']}")
