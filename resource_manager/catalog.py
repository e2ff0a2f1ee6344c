"""
Listing, filtering and downloading study resources.

Filtering happens on the client side over the full collection.
"""

import base64
import binascii
from typing import Dict, List, Optional, Tuple
from sqlalchemy.orm import Session

from utils.database.doc_store import list_documents, get_document, RESOURCES

ALL = 'all'

def list_resources(session: Session) -> List[Dict]:
    return list_documents(session, RESOURCES)

def get_resource(session: Session, resource_id: str) -> Optional[Dict]:
    return get_document(session, RESOURCES, resource_id)

def filter_resources(resources: List[Dict], search: str = '', resource_type: str = ALL, subject: str = ALL) -> List[Dict]:
    """
    Filter resources by search term, type and subject.

    Args:
        resources (List[Dict]): Resource records.
        search (str): Case-insensitive term matched against title and description.
        resource_type (str): A resource type, or 'all'.
        subject (str): A subject, or 'all'.

    Returns:
        List[Dict]: Resources matching every filter, in their original order.
    """
    term = (search or '').strip().lower()

    def matches(resource: Dict) -> bool:
        if term:
            haystack = f"{resource.get('title', '')} {resource.get('description', '')}".lower()
            if term not in haystack:
                return False
        if resource_type != ALL and resource.get('type') != resource_type:
            return False
        if subject != ALL and resource.get('subject') != subject:
            return False
        return True

    return [resource for resource in resources if matches(resource)]

def format_file_size(file_size: Optional[int]) -> str:
    """ File size in whole kilobytes, or 'Unknown size'. """
    if not file_size:
        return 'Unknown size'
    return f"{round(file_size / 1024)} KB"

def decode_file_data(file_data: str) -> Tuple[bytes, str]:
    """
    Decode a data URL back to file bytes.

    Returns:
        Tuple[bytes, str]: The file content and its MIME type.

    Raises:
        ValueError: If the value is not a base64 data URL.
    """
    if not file_data or not file_data.startswith('data:') or ',' not in file_data:
        raise ValueError("Resource has no embedded file data.")

    header, payload = file_data.split(',', 1)
    meta = header[len('data:'):]
    if not meta.endswith(';base64'):
        raise ValueError("Resource file data is not base64 encoded.")

    mime_type = meta[:-len(';base64')] or 'application/octet-stream'
    try:
        return base64.b64decode(payload, validate=True), mime_type
    except binascii.Error as e:
        raise ValueError(f"Resource file data is corrupt: {e}") from e
