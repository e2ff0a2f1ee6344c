import logging
import streamlit as st

from test_manager.attempt import TestAttempt, AttemptState
from test_manager.results import list_tests, list_user_results, find_latest_result, save_test_result
from utils.database.db_setup import session_scope
from utils.identity import get_current_user
from view_components.alerter import show_alert, store_alert
from view_components.auth_guard import sign_in_button
from view_components.test_runner import question_view, results_view, start_attempt

logger = logging.getLogger(__name__)

# One attempt per browser session
if 'test_attempt' not in st.session_state:
    st.session_state.test_attempt = TestAttempt(save_result=save_test_result)

attempt = st.session_state.test_attempt
user = get_current_user()

# Display alert if it exists in session state
if st.session_state.get('stored_alert'):
    show_alert()

def load_tests_and_results() -> tuple:
    """ Load every test and the signed-in user's results. """
    try:
        with session_scope() as session:
            tests = list_tests(session)
            results = list_user_results(session, user['uid']) if user else []
        return tests, results
    except RuntimeError as e:
        logger.error(f"load_tests_and_results: {e}")
        st.error("Failed to load tests.")
        st.stop()

def on_start(test: dict) -> None:
    try:
        start_attempt(attempt, test, user)
    except ValueError as e:
        store_alert('error', str(e))

def test_card(test: dict, latest_result: dict) -> None:
    """ Display a test summary with its start button and the user's last score. """
    with st.container(border=True):
        st.markdown(f"#### 📘 {test['title']}")
        st.caption(test['subject'])
        st.write(f"🕒 {test['duration']} minutes")
        st.write(f"📄 {len(test['questions'])} questions · {test['total_marks']} marks")

        if latest_result:
            st.success(f"Last score: {latest_result['score']}/{test['total_marks']}")

        if user:
            st.button("Start Test", key=f"start_{test['id']}", icon="▶️", type="primary",
                      on_click=on_start, args=(test,))

def display_test_list() -> None:
    st.title("Test Platform")
    st.write("Take MCQ tests and check your performance.")

    with st.spinner("Loading test platform..."):
        tests, results = load_tests_and_results()

    if not user:
        st.info("Sign in to take tests and track your results.")
        sign_in_button()

    st.header("Available Tests")
    if not tests:
        st.info("No tests available yet.")
        return

    columns = st.columns(3)
    for i, test in enumerate(tests):
        with columns[i % 3]:
            test_card(test, find_latest_result(results, test['id']))

# --- Streamlit Page Layout ---
if attempt.state == AttemptState.IN_PROGRESS:
    question_view(attempt)
elif attempt.state == AttemptState.SUBMITTED:
    results_view(attempt)
else:
    display_test_list()
