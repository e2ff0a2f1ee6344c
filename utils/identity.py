"""
Current-user access on top of Streamlit's OIDC authentication.

The auth provider is configured in .streamlit/secrets.toml under [auth].
Pages only see a plain user dict: uid, email and name.
"""

import logging
from typing import Dict, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

logger = logging.getLogger(__name__)

def get_current_user() -> Optional[Dict]:
    """
    Get the signed-in user.

    Returns:
        Optional[Dict]: {'uid', 'email', 'name'} or None if nobody is signed in.
    """
    if not st.user.get('is_logged_in', False):
        return None

    uid = st.user.get('sub') or st.user.get('email')
    if not uid:
        logger.warning("get_current_user: Signed-in user has no subject or email claim")
        return None

    return {
        'uid': uid,
        'email': st.user.get('email') or '',
        'name': st.user.get('name') or st.user.get('email') or 'Student'
    }

def login():
    """
    Redirect to the configured identity provider.

    Raises:
        RuntimeError: If authentication is not configured.
    """
    try:
        st.login()
    except StreamlitAPIException as e:
        logger.error(f"login: Authentication is not available - {e}")
        raise RuntimeError(f"Sign-in is not available: {e}") from e

def logout():
    st.logout()
