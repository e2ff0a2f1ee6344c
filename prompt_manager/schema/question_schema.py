question_json_schema = {
    "type": "object",
    "properties": {
        "question": {"type": "string", "minLength": 1},
        "options": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 4,
            "maxItems": 4
        },
        "correct_answer": {"type": "integer", "minimum": 0, "maximum": 3},
        "explanation": {"type": "string"}
    },
    "required": ["question", "options", "correct_answer"]
}

questions_json_schema = {
    "type": "array",
    "items": question_json_schema,
    "minItems": 1
}

question_paper_json_schema = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "subject": {"type": "string"},
        "total_marks": {"type": "number"},
        "questions": questions_json_schema
    },
    "required": ["questions"]
}

questions_json_example = """
[
  {
    "question": "Question text here?",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "correct_answer": 0,
    "explanation": "Explanation here"
  }
]
"""

question_paper_json_example = """
{
  "title": "Test Title",
  "subject": "Subject Name",
  "total_marks": 100,
  "questions": [
    {
      "question": "Question text",
      "options": ["A", "B", "C", "D"],
      "correct_answer": 0,
      "explanation": "Why this is correct"
    }
  ]
}
"""
