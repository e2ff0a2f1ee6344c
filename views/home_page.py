import logging
import streamlit as st

from resource_manager.catalog import list_resources
from test_manager.results import list_tests
from utils.database.db_setup import session_scope
from view_components.alerter import show_alert

logger = logging.getLogger(__name__)

# Display alert if it exists in session state
if st.session_state.get('stored_alert'):
    show_alert()

FEATURES = [
    ("📄", "Curated Resources",
     "PDFs, lecture notes and reference materials organized by subject and semester."),
    ("🎬", "Video Lectures",
     "Video tutorials for complex topics and practical demonstrations."),
    ("📝", "MCQ Tests",
     "Timed multiple choice tests with instant scoring and answer explanations."),
    ("🤖", "AI Question Generation",
     "Generate practice questions for any topic, or read them from a photographed paper."),
    ("🔍", "Smart Search",
     "Find what you need by filtering on subject, type and keywords."),
    ("🤝", "Community Driven",
     "Contribute your own materials to help build the library."),
]

def display_features() -> None:
    """ Display the feature cards in a three column grid. """
    columns = st.columns(3)
    for i, (icon, title, text) in enumerate(FEATURES):
        with columns[i % 3]:
            with st.container(border=True):
                st.markdown(f"#### {icon} {title}")
                st.write(text)

def display_statistics() -> None:
    """ Display live counts from the store. """
    try:
        with session_scope() as session:
            resource_count = len(list_resources(session))
            test_count = len(list_tests(session))
    except RuntimeError as e:
        logger.error(f"display_statistics: {e}")
        st.warning("Platform statistics are unavailable right now.")
        return

    resource_col, test_col = st.columns(2)
    resource_col.metric("Study Resources", resource_count)
    test_col.metric("MCQ Tests", test_count)

# --- Streamlit Page Layout ---
st.title("Your Centralized Engineering Resource Hub")
st.write(
    "Access curated study materials, lecture notes, videos and MCQ tests "
    "organized by semester and subject."
)

explore_col, test_col, _ = st.columns([1, 1, 2])
with explore_col:
    st.page_link("views/resources_page.py", label="Explore Resources", icon="🔍")
with test_col:
    st.page_link("views/tests_page.py", label="Take a Test", icon="📝")

# --- Features Section ---
st.header("Everything You Need for Academic Success")
display_features()

# --- Statistics Section ---
st.header("Platform Statistics")
display_statistics()
