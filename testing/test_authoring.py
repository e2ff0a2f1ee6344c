import pytest

from test_manager.authoring import (
    new_draft, add_question, remove_question, update_question, update_option,
    questions_from_generated, load_question_paper, validate_test_draft, build_test_document, save_test
)
from utils.database.doc_store import list_documents, TESTS

@pytest.fixture
def draft():
    """A complete draft with one filled-in question."""
    draft = new_draft()
    draft['title'] = 'Optics Quiz'
    draft['subject'] = 'Physics'
    question = add_question(draft)
    update_question(draft, 0, question='What bends light?', options=['Lens', 'Mirror', 'Prism', 'Glass'],
                    correct_answer=2)
    assert question['question'] == 'What bends light?'
    return draft

def test_new_draft_defaults():
    draft = new_draft()
    assert draft['duration'] == 30
    assert draft['total_marks'] == 100
    assert draft['questions'] == []

def test_blank_question_shape():
    draft = new_draft()
    question = add_question(draft)
    assert question['options'] == ['', '', '', '']
    assert question['correct_answer'] == 0
    assert question['id']

def test_remove_and_update(draft):
    add_question(draft)
    update_option(draft, 1, 3, 'Option D')
    assert draft['questions'][1]['options'][3] == 'Option D'
    remove_question(draft, 0)
    assert len(draft['questions']) == 1
    with pytest.raises(ValueError):
        update_question(draft, 0, colour='red')

def test_validation_order(draft):
    """The first failing rule is reported."""
    assert validate_test_draft(draft) is None

    no_title = {**draft, 'title': ' '}
    assert validate_test_draft(no_title) == "Please fill in all required fields"

    no_questions = {**draft, 'questions': []}
    assert validate_test_draft(no_questions) == "Please add at least one question"

    add_question(draft)
    assert validate_test_draft(draft) == "Question 2 is empty"

    update_question(draft, 1, question='Second?')
    assert validate_test_draft(draft) == "Question 2 has empty options"

def test_questions_from_generated_assigns_ids():
    generated = [
        {'question': 'Q1?', 'options': ['a', 'b', 'c', 'd'], 'correct_answer': 0, 'explanation': 'because'},
        {'question': 'Q2?', 'options': ['a', 'b', 'c', 'd'], 'correct_answer': 3},
    ]
    questions = questions_from_generated(generated)
    assert [q['question'] for q in questions] == ['Q1?', 'Q2?']
    assert questions[1]['explanation'] == ''
    assert questions[0]['id'] != questions[1]['id']

def test_questions_from_generated_rejects_bad_shape():
    with pytest.raises(ValueError):
        questions_from_generated([{'question': 'Q?', 'options': ['only one'], 'correct_answer': 0}])
    with pytest.raises(ValueError):
        questions_from_generated({'questions': []})

def test_load_question_paper_fills_draft():
    draft = new_draft()
    paper = {
        'title': 'Midterm',
        'subject': 'Chemistry',
        'total_marks': 500,
        'questions': [{'question': 'pH of water?', 'options': ['5', '6', '7', '8'], 'correct_answer': 2}],
    }
    load_question_paper(draft, paper)
    assert draft['title'] == 'Midterm'
    assert draft['subject'] == 'Chemistry'
    # Clamped to the allowed maximum
    assert draft['total_marks'] == 200
    assert len(draft['questions']) == 1

def test_build_test_document(draft, user):
    record = build_test_document(draft, user)
    assert record['title'] == 'Optics Quiz'
    assert record['duration'] == 30
    assert record['total_marks'] == 100
    assert record['created_by'] == 'user-1'
    assert record['created_by_email'] == 'student@example.com'
    assert len(record['questions']) == 1

def test_save_test(session, draft, user):
    test_id = save_test(session, draft, user)
    stored = list_documents(session, TESTS)
    assert [t['id'] for t in stored] == [test_id]
    assert stored[0]['questions'][0]['correct_answer'] == 2

def test_save_invalid_draft_writes_nothing(session, user):
    with pytest.raises(ValueError, match="required fields"):
        save_test(session, new_draft(), user)
    assert list_documents(session, TESTS) == []

def test_editor_writes_produce_a_savable_question():
    """Edits applied field by field, as the question form does, complete a blank question."""
    draft = new_draft()
    draft['title'] = 'Circuits'
    draft['subject'] = 'Electronics'
    add_question(draft)

    update_question(draft, 0, question='Unit of resistance?')
    for option_index, value in enumerate(['Ohm', 'Volt', 'Amp', 'Watt']):
        update_option(draft, 0, option_index, value)
    update_question(draft, 0, correct_answer=0, explanation='R = V / I')

    question = draft['questions'][0]
    assert question['options'] == ['Ohm', 'Volt', 'Amp', 'Watt']
    assert question['explanation'] == 'R = V / I'
    assert validate_test_draft(draft) is None
