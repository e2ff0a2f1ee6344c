"""
Store access for tests and test results.
"""

from typing import Dict, List, Optional
from sqlalchemy.orm import Session

from utils.database.db_setup import session_scope
from utils.database.doc_store import add_document, list_documents, TESTS, TEST_RESULTS

def save_test_result(record: Dict) -> str:
    """
    Persist a test result in its own session and return its id.

    Raises:
        RuntimeError: If the store write fails.
    """
    with session_scope() as session:
        return add_document(session, TEST_RESULTS, record)

def list_tests(session: Session) -> List[Dict]:
    return list_documents(session, TESTS)

def list_user_results(session: Session, user_id: str) -> List[Dict]:
    """ All results submitted by a user, oldest first. """
    return [result for result in list_documents(session, TEST_RESULTS) if result['user_id'] == user_id]

def find_latest_result(results: List[Dict], test_id: str) -> Optional[Dict]:
    """ The most recent result for a test, or None. """
    matching = [result for result in results if result['test_id'] == test_id]
    return matching[-1] if matching else None
