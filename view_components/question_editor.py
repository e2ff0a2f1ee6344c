"""
Question Editor Component

Edits the questions of a test draft in place. Each widget is keyed by the
question id so regenerated or reordered questions get fresh widgets.
"""

import streamlit as st

from test_manager.authoring import add_question, remove_question, update_question, update_option

OPTION_LABELS = ['A', 'B', 'C', 'D']

def question_form(draft: dict, index: int):
    """ Display the editor for one question and write edits back to the draft. """
    question = draft['questions'][index]
    qid = question['id']

    with st.container(border=True):
        header_col, remove_col = st.columns([5, 1])
        with header_col:
            st.markdown(f"**Question {index + 1}**")
        with remove_col:
            st.button("Remove", key=f"remove_{qid}", icon="🗑️", on_click=remove_question, args=(draft, index))

        text = st.text_area("Question", value=question['question'], key=f"text_{qid}")
        update_question(draft, index, question=text)

        option_cols = st.columns(2)
        for option_index, option in enumerate(question['options']):
            with option_cols[option_index % 2]:
                value = st.text_input(
                    f"Option {OPTION_LABELS[option_index]}", value=option, key=f"option_{qid}_{option_index}"
                )
                update_option(draft, index, option_index, value)

        correct_answer = st.radio(
            "Correct answer",
            options=list(range(len(question['options']))),
            format_func=lambda i: OPTION_LABELS[i],
            index=question['correct_answer'],
            horizontal=True,
            key=f"correct_{qid}"
        )
        explanation = st.text_input(
            "Explanation (optional)", value=question.get('explanation', ''), key=f"explanation_{qid}"
        )
        update_question(draft, index, correct_answer=correct_answer, explanation=explanation)

def questions_editor(draft: dict):
    """ Display every question in the draft and a button to add another. """
    if not draft['questions']:
        st.info("No questions yet. Add one manually or generate them with AI.")

    for index in range(len(draft['questions'])):
        question_form(draft, index)

    st.button("Add Question", icon="➕", on_click=add_question, args=(draft,))
