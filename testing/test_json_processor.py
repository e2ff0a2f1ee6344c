from prompt_manager.json_processor import extract_json, compare_json
from prompt_manager.schema.question_schema import questions_json_schema

def test_extract_array_from_prose():
    """The array is found inside surrounding text and code fences."""
    reply = 'Here you go:\n```json\n[{"question": "Q?", "options": ["a", "b"]}]\n```\nGood luck!'
    assert extract_json(reply, '[', ']') == [{'question': 'Q?', 'options': ['a', 'b']}]

def test_extract_object_with_nested_brackets():
    reply = 'Result: {"title": "Paper", "questions": [{"options": ["x"]}]} end'
    assert extract_json(reply, '{', '}') == {'title': 'Paper', 'questions': [{'options': ['x']}]}

def test_no_json_returns_none():
    assert extract_json("I cannot help with that.", '[', ']') is None
    assert extract_json("", '[', ']') is None
    assert extract_json("] backwards [", '[', ']') is None

def test_invalid_json_returns_none():
    assert extract_json("[not, valid json]", '[', ']') is None

def test_compare_json_with_question_schema():
    valid = [{'question': 'Q?', 'options': ['a', 'b', 'c', 'd'], 'correct_answer': 3}]
    assert compare_json(valid, questions_json_schema)

    # Three options and an out-of-range answer
    assert not compare_json([{'question': 'Q?', 'options': ['a', 'b', 'c'], 'correct_answer': 0}], questions_json_schema)
    assert not compare_json([{'question': 'Q?', 'options': ['a', 'b', 'c', 'd'], 'correct_answer': 4}], questions_json_schema)
    assert not compare_json([], questions_json_schema)
