import pytest

from resource_manager.catalog import filter_resources, format_file_size, decode_file_data, get_resource
from resource_manager.upload import encode_file_data
from utils.database.doc_store import add_document, RESOURCES

RESOURCES_LIST = [
    {'id': '1', 'title': 'Calculus Notes', 'description': 'Limits and derivatives', 'type': 'notes', 'subject': 'Mathematics'},
    {'id': '2', 'title': 'Optics Lecture', 'description': 'Lens formula', 'type': 'video', 'subject': 'Physics'},
    {'id': '3', 'title': 'Past Paper', 'description': 'Calculus exam 2023', 'type': 'pdf', 'subject': 'Mathematics'},
]

def test_no_filters_returns_everything():
    assert filter_resources(RESOURCES_LIST) == RESOURCES_LIST

def test_search_matches_title_and_description():
    """Search is case-insensitive over title and description."""
    assert [r['id'] for r in filter_resources(RESOURCES_LIST, search='CALCULUS')] == ['1', '3']
    assert [r['id'] for r in filter_resources(RESOURCES_LIST, search='lens')] == ['2']
    assert filter_resources(RESOURCES_LIST, search='chemistry') == []

def test_type_and_subject_filters_combine():
    assert [r['id'] for r in filter_resources(RESOURCES_LIST, resource_type='pdf')] == ['3']
    assert [r['id'] for r in filter_resources(RESOURCES_LIST, subject='Mathematics')] == ['1', '3']
    assert [r['id'] for r in filter_resources(RESOURCES_LIST, search='calculus', resource_type='notes',
                                              subject='Mathematics')] == ['1']

def test_format_file_size():
    assert format_file_size(2048) == '2 KB'
    assert format_file_size(1000) == '1 KB'
    assert format_file_size(0) == 'Unknown size'
    assert format_file_size(None) == 'Unknown size'

def test_decode_file_data_reverses_encoding():
    data, mime_type = decode_file_data(encode_file_data(b'%PDF-1.4', 'application/pdf'))
    assert data == b'%PDF-1.4'
    assert mime_type == 'application/pdf'

@pytest.mark.parametrize("value", ["", "not a data url", "data:text/plain,hello", "data:text/plain;base64,@@@"])
def test_decode_file_data_rejects_bad_values(value):
    with pytest.raises(ValueError):
        decode_file_data(value)

def test_get_resource(session):
    resource_id = add_document(session, RESOURCES, {'title': 'Notes'})
    assert get_resource(session, resource_id)['title'] == 'Notes'
    assert get_resource(session, 'nope') is None
