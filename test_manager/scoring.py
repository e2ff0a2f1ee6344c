"""
Scoring functions for completed test attempts.

A result is scored by positional comparison of the chosen options with each
question's correct answer. Unanswered slots (None) never count as correct.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime, timezone
from typing import Dict, List, Optional

def count_correct(questions: List[Dict], answers: List[Optional[int]]) -> int:
    """
    Count answers that match the correct option of the question at the same position.

    Args:
        questions (List[Dict]): Questions with a 'correct_answer' index.
        answers (List[Optional[int]]): Chosen option per question, None if unanswered.

    Returns:
        int: Number of correct answers.
    """
    return sum(
        1 for question, answer in zip(questions, answers)
        if answer is not None and answer == question['correct_answer']
    )

def compute_score(correct_answers: int, total_questions: int, total_marks: float) -> float:
    """ Score scaled to the test's total marks, rounded half up to 2 decimal places. """
    if total_questions <= 0:
        return 0.0
    raw = (correct_answers / total_questions) * total_marks
    return float(Decimal(str(raw)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))

def compute_time_taken(duration_min: int, remaining_sec: int) -> int:
    """ Whole minutes used, counting a started minute as used. """
    return duration_min - math.floor(max(remaining_sec, 0) / 60)

def build_test_result(test: Dict, user: Dict, answers: List[Optional[int]], remaining_sec: int) -> Dict:
    """
    Build the result record for a finished attempt.

    Args:
        test (Dict): The test record, including its store 'id'.
        user (Dict): The signed-in user with 'uid' and 'email'.
        answers (List[Optional[int]]): One slot per question.
        remaining_sec (int): Seconds left on the timer at submission.

    Returns:
        Dict: A record ready for the 'testResults' collection.
    """
    questions = test['questions']
    if len(answers) != len(questions):
        raise ValueError(f"Expected {len(questions)} answers, got {len(answers)}")

    correct = count_correct(questions, answers)
    return {
        'test_id': test['id'],
        'user_id': user['uid'],
        'user_email': user.get('email') or '',
        'answers': list(answers),
        'score': compute_score(correct, len(questions), test['total_marks']),
        'total_questions': len(questions),
        'correct_answers': correct,
        'time_taken': compute_time_taken(test['duration'], remaining_sec),
        'submitted_at': datetime.now(timezone.utc).isoformat()
    }
