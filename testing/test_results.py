from test_manager import results
from test_manager.results import list_user_results, find_latest_result
from utils.database.doc_store import add_document, TEST_RESULTS

def test_list_user_results_filters_by_user(session):
    add_document(session, TEST_RESULTS, {'test_id': 't1', 'user_id': 'user-1', 'score': 10})
    add_document(session, TEST_RESULTS, {'test_id': 't1', 'user_id': 'user-2', 'score': 20})
    assert [r['score'] for r in list_user_results(session, 'user-1')] == [10]

def test_find_latest_result():
    items = [
        {'id': 'a', 'test_id': 't1'},
        {'id': 'b', 'test_id': 't2'},
        {'id': 'c', 'test_id': 't1'},
    ]
    assert find_latest_result(items, 't1')['id'] == 'c'
    assert find_latest_result(items, 't3') is None

def test_save_test_result_uses_configured_store(monkeypatch, tmp_path):
    """Results are written through a fresh session on the configured database."""
    db_url = f"sqlite:///{tmp_path / 'portal.db'}"
    monkeypatch.setenv('DATABASE_URL', db_url)

    result_id = results.save_test_result({'test_id': 't1', 'user_id': 'user-1', 'score': 5})

    from utils.database.db_setup import session_scope
    with session_scope(db_url) as session:
        assert [r['id'] for r in list_user_results(session, 'user-1')] == [result_id]
