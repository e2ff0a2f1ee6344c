"""
Validation and encoding of uploaded study resources.

Uploaded files are embedded in the resource record as a base64 data URL,
so the document store is the only storage the portal needs.
"""

import base64
import logging
import mimetypes
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional
from sqlalchemy.orm import Session

from utils.database.doc_store import add_document, RESOURCES
from utils.settings_manager import get_setting

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_MB = get_setting('UPLOAD', 'max_file_size_mb')
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
ALLOWED_EXTENSIONS = get_setting('UPLOAD', 'allowed_extensions')

REQUIRED_FIELDS = ('title', 'description', 'subject', 'semester', 'type')

def guess_mime_type(file_name: str, declared_type: Optional[str] = None) -> str:
    """ The declared MIME type, or one guessed from the file name. """
    if declared_type:
        return declared_type
    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or 'application/octet-stream'

def validate_upload(fields: Dict, file_name: Optional[str], file_size: int, user: Optional[Dict]) -> Optional[str]:
    """
    Check an upload form before encoding the file.

    Args:
        fields (Dict): title, description, subject, semester and type.
        file_name (str): Name of the selected file, None if no file was chosen.
        file_size (int): Size of the file in bytes.
        user (Dict): The signed-in user, None if signed out.

    Returns:
        Optional[str]: The first problem found, or None if the upload is valid.
    """
    missing = [name for name in REQUIRED_FIELDS if not str(fields.get(name) or '').strip()]
    if missing:
        return f"Please fill in: {', '.join(missing)}"

    if not file_name:
        return "Please select a file to upload."

    if not user:
        return "You must be logged in to upload resources."

    extension = Path(file_name).suffix.lower().lstrip('.')
    if extension not in ALLOWED_EXTENSIONS:
        return f"Unsupported file type '.{extension}'. Allowed: {', '.join(ALLOWED_EXTENSIONS)}"

    if file_size > MAX_FILE_SIZE_BYTES:
        return f"File size must be less than {MAX_FILE_SIZE_MB}MB."

    return None

def encode_file_data(data: bytes, mime_type: str) -> str:
    """ Encode file bytes as a data URL: data:<mime>;base64,<payload> """
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"

def build_resource_document(fields: Dict, file_name: str, data: bytes, mime_type: str, user: Dict) -> Dict:
    """ The 'resources' record for a validated upload. """
    return {
        'title': fields['title'].strip(),
        'description': fields['description'].strip(),
        'subject': fields['subject'],
        'semester': fields['semester'],
        'type': fields['type'],
        'file_name': file_name,
        'file_size': len(data),
        'file_data': encode_file_data(data, mime_type),
        'uploader': user['uid'],
        'uploader_email': user.get('email') or '',
        'created_at': datetime.now(timezone.utc).isoformat()
    }

def save_resource(session: Session, fields: Dict, file_name: Optional[str], data: bytes,
                  mime_type: Optional[str], user: Optional[Dict]) -> str:
    """
    Validate an upload and write it to the 'resources' collection.

    Raises:
        ValueError: If the upload fails validation.
        RuntimeError: If the store write fails.
    """
    error = validate_upload(fields, file_name, len(data or b''), user)
    if error:
        raise ValueError(error)

    record = build_resource_document(fields, file_name, data, guess_mime_type(file_name, mime_type), user)
    resource_id = add_document(session, RESOURCES, record)
    logger.info(f"save_resource: Uploaded '{file_name}' ({record['file_size']} bytes) as {resource_id}")
    return resource_id
