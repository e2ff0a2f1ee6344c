import base64
import pytest

from resource_manager.upload import (
    validate_upload, encode_file_data, build_resource_document, save_resource, guess_mime_type,
    MAX_FILE_SIZE_BYTES
)
from utils.database.doc_store import list_documents, RESOURCES

@pytest.fixture
def fields():
    return {
        'title': 'Thermodynamics Notes',
        'description': 'Unit 1 and 2',
        'subject': 'Physics',
        'semester': '3rd',
        'type': 'notes'
    }

def test_valid_upload_passes(fields, user):
    assert validate_upload(fields, 'notes.pdf', 2048, user) is None

def test_missing_field_reported_first(fields, user):
    fields['semester'] = None
    assert 'semester' in validate_upload(fields, None, 0, user)

def test_missing_file_and_user(fields, user):
    assert validate_upload(fields, None, 0, user) == "Please select a file to upload."
    assert validate_upload(fields, 'notes.pdf', 10, None) == "You must be logged in to upload resources."

def test_unsupported_extension(fields, user):
    """Only the allowed extensions are accepted, case-insensitively."""
    assert validate_upload(fields, 'LECTURE.MP4', 10, user) is None
    assert 'Unsupported' in validate_upload(fields, 'script.exe', 10, user)
    assert 'Unsupported' in validate_upload(fields, 'README', 10, user)

def test_size_limit(fields, user):
    assert validate_upload(fields, 'big.pdf', MAX_FILE_SIZE_BYTES, user) is None
    assert '10MB' in validate_upload(fields, 'big.pdf', MAX_FILE_SIZE_BYTES + 1, user)

def test_encode_file_data():
    assert encode_file_data(b'hello', 'text/plain') == f"data:text/plain;base64,{base64.b64encode(b'hello').decode()}"

def test_guess_mime_type():
    assert guess_mime_type('notes.pdf') == 'application/pdf'
    assert guess_mime_type('notes.pdf', 'application/x-custom') == 'application/x-custom'
    assert guess_mime_type('unknown.zzz') == 'application/octet-stream'

def test_build_resource_document(fields, user):
    record = build_resource_document(fields, 'notes.txt', b'abc', 'text/plain', user)
    assert record['file_name'] == 'notes.txt'
    assert record['file_size'] == 3
    assert record['file_data'] == 'data:text/plain;base64,YWJj'
    assert record['uploader'] == 'user-1'
    assert record['uploader_email'] == 'student@example.com'
    assert record['created_at']

def test_save_resource_writes_record(session, fields, user):
    resource_id = save_resource(session, fields, 'notes.txt', b'abc', 'text/plain', user)
    stored = list_documents(session, RESOURCES)
    assert [r['id'] for r in stored] == [resource_id]
    assert stored[0]['title'] == 'Thermodynamics Notes'

def test_invalid_upload_writes_nothing(session, fields, user):
    with pytest.raises(ValueError):
        save_resource(session, fields, 'virus.exe', b'abc', None, user)
    assert list_documents(session, RESOURCES) == []
