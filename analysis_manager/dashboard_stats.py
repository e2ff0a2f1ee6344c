"""
Module for computing a user's activity summary for the dashboard.

All figures are calculated on demand from the store collections; nothing
is cached on the records themselves.
"""

from typing import Dict, Any, List

import pandas as pd

from utils.settings_manager import get_setting

RECENT_UPLOADS_COUNT = get_setting('DASHBOARD', 'recent_uploads_count')

UNKNOWN_TEST = 'Unknown Test'
UNKNOWN_SUBJECT = 'Unknown Subject'
DEFAULT_TOTAL_MARKS = 100

def join_results_with_tests(results: List[Dict[str, Any]], tests: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Attach test title, subject and total marks to each result.

    Results whose test no longer exists fall back to 'Unknown Test',
    'Unknown Subject' and 100 total marks.

    Args:
        results: Result records
        tests: Test records

    Returns:
        One row per result, in the order given
    """
    tests_by_id = {test['id']: test for test in tests}
    rows = []

    for result in results:
        test = tests_by_id.get(result['test_id'])
        total_marks = test.get('total_marks', DEFAULT_TOTAL_MARKS) if test else DEFAULT_TOTAL_MARKS
        rows.append({
            'test_title': test.get('title', UNKNOWN_TEST) if test else UNKNOWN_TEST,
            'subject': test.get('subject', UNKNOWN_SUBJECT) if test else UNKNOWN_SUBJECT,
            'score': result['score'],
            'total_marks': total_marks,
            'percentage': round(result['score'] / total_marks * 100, 2) if total_marks else 0.0,
            'correct_answers': result['correct_answers'],
            'total_questions': result['total_questions'],
            'time_taken': result['time_taken'],
            'submitted_at': result['submitted_at']
        })

    return rows

def build_results_table(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """ Results table for display, newest first. """
    if not rows:
        return pd.DataFrame()

    df = pd.DataFrame(rows)
    df['correct'] = df['correct_answers'].astype(str) + '/' + df['total_questions'].astype(str)
    df = df.sort_values('submitted_at', ascending=False)
    df = df[['test_title', 'subject', 'score', 'total_marks', 'percentage', 'correct', 'time_taken', 'submitted_at']]
    return df.rename(columns={
        'test_title': 'Test',
        'subject': 'Subject',
        'score': 'Score',
        'total_marks': 'Total Marks',
        'percentage': 'Percentage',
        'correct': 'Correct',
        'time_taken': 'Time (min)',
        'submitted_at': 'Submitted'
    }).reset_index(drop=True)

def get_user_summary(user_id: str, resources: List[Dict[str, Any]], tests: List[Dict[str, Any]],
                     results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Get dashboard metrics for one user.

    Args:
        user_id: The signed-in user's id
        resources: All resource records
        tests: All test records
        results: All result records

    Returns:
        Dictionary with upload and test counts, average and best score
        percentages, the user's most recent uploads and their result rows
    """
    uploads = [resource for resource in resources if resource.get('uploader') == user_id]
    user_results = [result for result in results if result.get('user_id') == user_id]
    rows = join_results_with_tests(user_results, tests)

    if rows:
        percentages = pd.Series([row['percentage'] for row in rows])
        average_score = round(float(percentages.mean()), 2)
        best_score = round(float(percentages.max()), 2)
    else:
        average_score = 0.0
        best_score = 0.0

    recent_uploads = sorted(uploads, key=lambda resource: resource.get('created_at', ''), reverse=True)

    return {
        'resources_uploaded': len(uploads),
        'tests_taken': len(user_results),
        'average_score': average_score,
        'best_score': best_score,
        'recent_uploads': recent_uploads[:RECENT_UPLOADS_COUNT],
        'result_rows': rows
    }
