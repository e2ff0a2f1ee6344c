import logging
import streamlit as st

from generation_manager.question_generator import (
    extract_text_from_image,
    convert_handwritten_notes,
    analyze_question_paper
)
from test_manager.authoring import new_draft, load_question_paper
from utils.identity import get_current_user
from view_components.alerter import show_alert, store_alert

logger = logging.getLogger(__name__)

IMAGE_TYPES = ["png", "jpg", "jpeg", "webp"]

MODES = {
    'text': "Extract Text",
    'notes': "Convert Handwritten Notes",
    'paper': "Analyze Question Paper"
}

# Display alert if it exists in session state
if st.session_state.get('stored_alert'):
    show_alert()

def run_ocr(mode: str, image_bytes: bytes, mime_type: str) -> None:
    """ Run the selected conversion and keep the output for display. """
    try:
        with st.spinner("Reading image..."):
            if mode == 'text':
                st.session_state.ocr_output = {'mode': mode, 'result': extract_text_from_image(image_bytes, mime_type)}
            elif mode == 'notes':
                st.session_state.ocr_output = {'mode': mode, 'result': convert_handwritten_notes(image_bytes, mime_type)}
            else:
                st.session_state.ocr_output = {'mode': mode, 'result': analyze_question_paper(image_bytes, mime_type)}
    except ValueError as e:
        st.error(str(e))
    except RuntimeError as e:
        logger.error(f"run_ocr: {e}")
        st.error(f"{MODES[mode]} failed. Please try again.")

def load_into_draft(paper: dict) -> None:
    """ Replace the create-test draft with the analysed paper and open that page. """
    draft = st.session_state.get('test_draft') or new_draft()
    try:
        load_question_paper(draft, paper)
    except ValueError as e:
        st.error(str(e))
        return

    st.session_state.test_draft = draft
    st.session_state.draft_run = st.session_state.get('draft_run', 0) + 1
    store_alert('success', f"Loaded {len(draft['questions'])} questions from the question paper.")
    st.switch_page("views/create_test_page.py")

def display_output(output: dict) -> None:
    """ Display the last conversion result. """
    mode = output['mode']
    result = output['result']

    if mode == 'text':
        st.caption(f"Estimated confidence: {result['confidence']:.0%}")
        st.text_area("Extracted Text", result['text'], height=300)
        st.download_button("Download Text", result['text'], file_name="extracted_text.txt", icon="⬇️")

    elif mode == 'notes':
        st.markdown(result)
        st.download_button("Download Notes", result, file_name="notes.txt", icon="⬇️")

    else:
        title_col, subject_col, marks_col = st.columns(3)
        title_col.metric("Title", result.get('title') or '-')
        subject_col.metric("Subject", result.get('subject') or '-')
        marks_col.metric("Total Marks", result.get('total_marks') or '-')

        for i, question in enumerate(result.get('questions', []), start=1):
            with st.expander(f"Question {i}: {question.get('question', '')}"):
                st.json(question)

        if get_current_user():
            if st.button("Load into Create Test", icon="📝", type="primary"):
                load_into_draft(result)
        else:
            st.info("Sign in to turn this paper into a test.")

# --- Streamlit Page Layout ---
st.title("OCR & Notes Conversion")
st.write("Extract text from images, transcribe handwritten notes, or read questions from a question paper.")

mode = st.radio("What would you like to do?", list(MODES), format_func=MODES.get, horizontal=True)
image = st.file_uploader("Upload an image", type=IMAGE_TYPES)

if image is not None:
    st.image(image, width=400)
    if st.button(MODES[mode], type="primary", icon="🔍"):
        run_ocr(mode, image.getvalue(), image.type or 'image/png')

if st.session_state.get('ocr_output'):
    st.divider()
    display_output(st.session_state.ocr_output)
