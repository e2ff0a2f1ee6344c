import pytest

from test_manager.scoring import count_correct, compute_score, compute_time_taken, build_test_result

def test_unanswered_never_counts(sample_test):
    """All answers unset gives zero correct and zero score."""
    result = build_test_result(sample_test, {'uid': 'u', 'email': ''}, [None, None, None], 600)
    assert result['correct_answers'] == 0
    assert result['score'] == 0

def test_all_correct_scores_total_marks(sample_test, user):
    """Every answer correct scores the full marks."""
    result = build_test_result(sample_test, user, [1, 0, 1], 300)
    assert result['correct_answers'] == 3
    assert result['total_questions'] == 3
    assert result['score'] == sample_test['total_marks']

def test_partial_score_is_rounded(sample_test):
    """Scores scale by total marks and round to 2 decimals."""
    # 1 of 3 correct, 100 marks
    assert compute_score(1, 3, 100) == 33.33
    assert compute_score(2, 3, 100) == 66.67
    assert count_correct(sample_test['questions'], [1, 3, None]) == 1

def test_time_taken_counts_started_minutes():
    """Time taken is duration minus whole minutes left."""
    assert compute_time_taken(10, 600) == 0
    assert compute_time_taken(10, 599) == 1
    assert compute_time_taken(10, 0) == 10

def test_result_record_fields(sample_test, user):
    """The result carries the test, user and answers it was built from."""
    result = build_test_result(sample_test, user, [1, None, 2], 450)
    assert result['test_id'] == 'test-1'
    assert result['user_id'] == 'user-1'
    assert result['user_email'] == 'student@example.com'
    assert result['answers'] == [1, None, 2]
    assert len(result['answers']) == len(sample_test['questions'])
    assert result['score'] == round((1 / 3) * 60, 2)
    assert result['time_taken'] == 3
    assert result['submitted_at']

def test_answer_count_must_match_questions(sample_test, user):
    with pytest.raises(ValueError):
        build_test_result(sample_test, user, [1, 0], 0)

def test_half_cent_scores_round_up(user):
    """Exact half-cent scores round up, not to the even digit."""
    # 3 of 8 correct on an 11 mark test is exactly 4.125
    assert compute_score(3, 8, 11) == 4.13
    assert compute_score(1, 8, 1) == 0.13

    questions = [{'correct_answer': 0} for _ in range(8)]
    test = {'id': 't', 'duration': 10, 'total_marks': 11, 'questions': questions}
    answers = [0, 0, 0, 1, 1, 1, 1, None]
    assert build_test_result(test, user, answers, 0)['score'] == 4.13
