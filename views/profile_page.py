import streamlit as st

from utils.identity import logout
from view_components.auth_guard import require_user

user = require_user()

# --- Streamlit Page Layout ---
st.title("Profile")

with st.container(border=True):
    st.metric("Name", user['name'])
    st.metric("Email", user['email'] or '-')
    st.caption(f"User ID: {user['uid']}")

st.button("Sign out", icon="🚪", on_click=logout)
