"""
Alert Component

This component can be added as part of a Streamlit page.
It stores an alert in the session state so it survives a rerun,
then displays it once and clears it.
"""

import streamlit as st

def store_alert(alert_type: str, message: str):
    """ Keep an alert ('success', 'info', 'warning' or 'error') for the next run. """
    st.session_state.stored_alert = {'type': alert_type, 'message': message}

def show_alert():
    # Display alert if present in session state
    if st.session_state.get('stored_alert'):
        alert_type = st.session_state.stored_alert['type']
        message = st.session_state.stored_alert['message']
        getattr(st, alert_type)(message)

    # Clear the alert
    st.session_state.stored_alert = None
