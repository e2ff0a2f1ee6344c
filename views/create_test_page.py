import logging
import streamlit as st

from generation_manager.question_generator import generate_mcq_questions
from test_manager.authoring import new_draft, questions_from_generated, save_test
from utils.database.db_setup import session_scope
from utils.settings_manager import get_setting
from view_components.alerter import show_alert, store_alert
from view_components.auth_guard import require_user
from view_components.question_editor import questions_editor

logger = logging.getLogger(__name__)

SUBJECTS = get_setting('CATALOG', 'subjects')
TOPICS = get_setting('CATALOG', 'topics')
DIFFICULTIES = get_setting('TEST_AUTHORING', 'difficulties')
QUESTION_COUNTS = get_setting('TEST_AUTHORING', 'question_counts')
QUESTION_COUNT_DEFAULT = get_setting('TEST_AUTHORING', 'question_count_default')
DURATION_MIN = get_setting('TEST_AUTHORING', 'duration_min')
DURATION_MAX = get_setting('TEST_AUTHORING', 'duration_max')
TOTAL_MARKS_MIN = get_setting('TEST_AUTHORING', 'total_marks_min')
TOTAL_MARKS_MAX = get_setting('TEST_AUTHORING', 'total_marks_max')

# Display alert if it exists in session state
if st.session_state.get('stored_alert'):
    show_alert()

user = require_user()

# Draft survives reruns; draft_run changes the widget keys when the draft is replaced
if 'test_draft' not in st.session_state:
    st.session_state.test_draft = new_draft()
st.session_state.setdefault('draft_run', 0)

draft = st.session_state.test_draft
run = st.session_state.draft_run

def reset_draft() -> None:
    st.session_state.test_draft = new_draft()
    st.session_state.draft_run += 1

def test_details_form() -> None:
    """ Display the title, subject, duration and marks inputs. """
    with st.container(border=True):
        draft['title'] = st.text_input("Test Title", value=draft['title'], key=f"draft_title_{run}")

        subject_options = SUBJECTS if not draft['subject'] or draft['subject'] in SUBJECTS else SUBJECTS + [draft['subject']]
        draft['subject'] = st.selectbox(
            "Subject",
            subject_options,
            index=subject_options.index(draft['subject']) if draft['subject'] else None,
            placeholder="Select subject",
            key=f"draft_subject_{run}"
        ) or ''

        duration_col, marks_col = st.columns(2)
        with duration_col:
            draft['duration'] = st.number_input(
                "Duration (minutes)", min_value=DURATION_MIN, max_value=DURATION_MAX,
                value=draft['duration'], key=f"draft_duration_{run}"
            )
        with marks_col:
            draft['total_marks'] = st.number_input(
                "Total Marks", min_value=TOTAL_MARKS_MIN, max_value=TOTAL_MARKS_MAX,
                value=draft['total_marks'], key=f"draft_marks_{run}"
            )

def generate_questions_form() -> None:
    """ Display the AI generation controls and replace the draft questions on success. """
    with st.expander("Generate Questions with AI", icon="🤖", expanded=not draft['questions']):
        suggestions = TOPICS.get(draft['subject'], [])
        topic_col, custom_col = st.columns(2)
        with topic_col:
            suggested_topic = st.selectbox("Topic", suggestions, index=None, placeholder="Select a topic",
                                           key=f"topic_{run}")
        with custom_col:
            custom_topic = st.text_input("Or enter a custom topic", key=f"custom_topic_{run}")
        topic = custom_topic.strip() or suggested_topic

        difficulty_col, count_col = st.columns(2)
        with difficulty_col:
            difficulty = st.selectbox("Difficulty", DIFFICULTIES, index=DIFFICULTIES.index('medium'),
                                      format_func=str.title)
        with count_col:
            count = st.selectbox("Number of Questions", QUESTION_COUNTS,
                                 index=QUESTION_COUNTS.index(QUESTION_COUNT_DEFAULT))

        if not st.button("Generate Questions", icon="✨"):
            return

        if not draft['title'].strip() or not draft['subject'] or not topic:
            st.error("Please enter test title, subject, and topic first")
            return

        try:
            with st.spinner(f"Generating {count} questions..."):
                generated = generate_mcq_questions(draft['subject'], topic, difficulty, count)
                draft['questions'] = questions_from_generated(generated)
        except ValueError as e:
            st.error(str(e))
            return
        except RuntimeError as e:
            logger.error(f"generate_questions_form: {e}")
            st.error("Failed to generate questions. Please try again.")
            return

        store_alert('success', f"Generated {len(draft['questions'])} questions for {topic}!")
        st.rerun()

def save_button() -> None:
    """ Validate and save the draft as a new test. """
    if not st.button("Create Test", type="primary", icon="💾"):
        return

    try:
        with session_scope() as session:
            save_test(session, draft, user)
    except ValueError as e:
        st.error(str(e))
        return
    except RuntimeError as e:
        logger.error(f"save_button: {e}")
        st.error("Failed to create test")
        return

    reset_draft()
    store_alert('success', "Test created successfully!")
    st.rerun()

# --- Streamlit Page Layout ---
st.title("Create a Test")
st.write("Write questions yourself, generate them with AI, or load them from a question paper on the OCR page.")

# --- Test Details ---
test_details_form()

# --- AI Generation ---
generate_questions_form()

# --- Questions ---
st.header(f"Questions ({len(draft['questions'])})")
questions_editor(draft)

st.divider()
save_col, clear_col, _ = st.columns([1, 1, 3])
with save_col:
    save_button()
with clear_col:
    st.button("Clear Draft", icon="🧹", on_click=reset_draft)
