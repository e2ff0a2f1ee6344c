"""
Sign-in Component

Pages that need a signed-in user call require_user() at the top.
Signed-out visitors see a sign-in prompt and the rest of the page is skipped.
"""

from typing import Dict

import streamlit as st

from utils.identity import get_current_user, login

def sign_in_button(key: str = 'sign_in'):
    """ Button that starts the sign-in redirect, showing an error if auth is unavailable. """
    if st.button("Sign in", icon="🔑", key=key):
        try:
            login()
        except RuntimeError as e:
            st.error(str(e))

def require_user() -> Dict:
    """ Return the signed-in user, or stop the page with a sign-in prompt. """
    user = get_current_user()
    if user is None:
        st.info("Please sign in to use this page.")
        sign_in_button(key='guard_sign_in')
        st.stop()
    return user
