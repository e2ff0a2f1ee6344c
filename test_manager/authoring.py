"""
Building, editing and validating test drafts before they are saved.

A draft is a plain dict kept in the session while the test is being written:
title, subject, duration, total_marks and an ordered list of questions.
"""

import uuid
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from prompt_manager.json_processor import compare_json
from prompt_manager.schema.question_schema import questions_json_schema, question_paper_json_schema
from utils.database.doc_store import add_document, TESTS
from utils.settings_manager import get_setting

logger = logging.getLogger(__name__)

OPTIONS_PER_QUESTION = get_setting('TEST_AUTHORING', 'options_per_question')
DURATION_DEFAULT = get_setting('TEST_AUTHORING', 'duration_default')
TOTAL_MARKS_DEFAULT = get_setting('TEST_AUTHORING', 'total_marks_default')
TOTAL_MARKS_MIN = get_setting('TEST_AUTHORING', 'total_marks_min')
TOTAL_MARKS_MAX = get_setting('TEST_AUTHORING', 'total_marks_max')

def new_draft() -> Dict:
    """ An empty draft with the default duration and marks. """
    return {
        'title': '',
        'subject': '',
        'duration': DURATION_DEFAULT,
        'total_marks': TOTAL_MARKS_DEFAULT,
        'questions': []
    }

def blank_question() -> Dict:
    return {
        'id': uuid.uuid4().hex,
        'question': '',
        'options': [''] * OPTIONS_PER_QUESTION,
        'correct_answer': 0,
        'explanation': ''
    }

def add_question(draft: Dict) -> Dict:
    question = blank_question()
    draft['questions'].append(question)
    return question

def remove_question(draft: Dict, index: int):
    del draft['questions'][index]

def update_question(draft: Dict, index: int, **fields):
    """
    Overwrite fields of one question in the draft.

    Args:
        draft (Dict): The draft being edited.
        index (int): Position of the question.
        **fields: Any of question, options, correct_answer, explanation.
    """
    allowed = {'question', 'options', 'correct_answer', 'explanation'}
    unknown = set(fields) - allowed
    if unknown:
        raise ValueError(f"Unknown question fields: {', '.join(sorted(unknown))}")
    draft['questions'][index].update(fields)

def update_option(draft: Dict, question_index: int, option_index: int, value: str):
    draft['questions'][question_index]['options'][option_index] = value

def questions_from_generated(generated: List[Dict]) -> List[Dict]:
    """
    Convert generated questions to draft questions.

    Args:
        generated (List[Dict]): Questions parsed from a model reply.

    Returns:
        List[Dict]: Questions with fresh ids and an explanation field.

    Raises:
        ValueError: If the questions do not match the question schema.
    """
    if not compare_json(generated, questions_json_schema):
        raise ValueError("Generated questions are not in the expected format.")

    return [
        {
            'id': uuid.uuid4().hex,
            'question': item['question'],
            'options': list(item['options']),
            'correct_answer': item['correct_answer'],
            'explanation': item.get('explanation', '')
        }
        for item in generated
    ]

def load_question_paper(draft: Dict, paper: Dict):
    """
    Fill a draft from an analysed question paper.

    Title, subject and total marks are taken when the paper provides them.
    The question list is always replaced.
    """
    if not compare_json(paper, question_paper_json_schema):
        raise ValueError("The analysed paper is not in the expected format.")

    draft['questions'] = questions_from_generated(paper['questions'])
    if paper.get('title'):
        draft['title'] = paper['title']
    if paper.get('subject'):
        draft['subject'] = paper['subject']
    if paper.get('total_marks'):
        draft['total_marks'] = int(min(max(paper['total_marks'], TOTAL_MARKS_MIN), TOTAL_MARKS_MAX))

def validate_test_draft(draft: Dict) -> Optional[str]:
    """
    Check a draft before saving.

    Returns:
        Optional[str]: The first problem found, or None if the draft can be saved.
    """
    if not draft.get('title', '').strip() or not draft.get('subject', '').strip():
        return "Please fill in all required fields"

    questions = draft.get('questions') or []
    if not questions:
        return "Please add at least one question"

    for i, question in enumerate(questions, start=1):
        if not question['question'].strip():
            return f"Question {i} is empty"
        if any(not option.strip() for option in question['options']):
            return f"Question {i} has empty options"

    return None

def build_test_document(draft: Dict, user: Dict) -> Dict:
    """ The 'tests' record for a validated draft. """
    return {
        'title': draft['title'].strip(),
        'subject': draft['subject'],
        'duration': int(draft['duration']),
        'total_marks': int(draft['total_marks']),
        'questions': [dict(question) for question in draft['questions']],
        'created_by': user['uid'],
        'created_by_email': user.get('email') or '',
        'created_at': datetime.now(timezone.utc).isoformat()
    }

def save_test(session: Session, draft: Dict, user: Dict) -> str:
    """
    Validate the draft and write it to the 'tests' collection.

    Raises:
        ValueError: If the draft fails validation.
        RuntimeError: If the store write fails.
    """
    error = validate_test_draft(draft)
    if error:
        raise ValueError(error)

    test_id = add_document(session, TESTS, build_test_document(draft, user))
    logger.info(f"save_test: Created test {test_id} with {len(draft['questions'])} questions")
    return test_id
