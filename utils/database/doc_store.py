"""
Utility functions for reading and writing collection documents.

The store exposes a small document-database surface over SQLAlchemy:
records are added to and listed from named collections. Filtering,
ordering and joins are left to the caller.
"""

import logging
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from .models import Document

logger = logging.getLogger(__name__)

RESOURCES = 'resources'
TESTS = 'tests'
TEST_RESULTS = 'testResults'

COLLECTIONS = (RESOURCES, TESTS, TEST_RESULTS)

def _check_collection(collection_name: str) -> None:
    if collection_name not in COLLECTIONS:
        raise ValueError(f"Error: Unknown collection: {collection_name}")

def _to_record(document: Document) -> Dict:
    return {'id': document.id, **document.data}

def add_document(session: Session, collection_name: str, record: Dict) -> str:
    """
    Add a record to a collection and return its generated id.

    Args:
        session (Session): SQLAlchemy database session
        collection_name (str): One of COLLECTIONS
        record (Dict): JSON-serialisable record body

    Returns:
        str: The id assigned to the new document.
    """
    _check_collection(collection_name)

    # The id is owned by the store, never by the record body
    data = {key: value for key, value in record.items() if key != 'id'}
    document = Document(collection=collection_name, data=data)
    try:
        session.add(document)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"add_document: Write to '{collection_name}' failed - {e}")
        raise RuntimeError(f"Failed to write to '{collection_name}': {e}") from e

    logger.info(f"add_document: Saved document {document.id} to '{collection_name}'")
    return document.id

def list_documents(session: Session, collection_name: str) -> List[Dict]:
    """
    List every record in a collection, oldest first.

    Args:
        session (Session): SQLAlchemy database session
        collection_name (str): One of COLLECTIONS

    Returns:
        List[Dict]: Records with their store id under 'id'.
    """
    _check_collection(collection_name)
    try:
        documents = (
            session.query(Document)
            .filter(Document.collection == collection_name)
            .order_by(Document.seq)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"list_documents: Read from '{collection_name}' failed - {e}")
        raise RuntimeError(f"Failed to read '{collection_name}': {e}") from e

    return [_to_record(document) for document in documents]

def get_document(session: Session, collection_name: str, document_id: str) -> Optional[Dict]:
    """ Get a single record by id, or None if it does not exist in the collection. """
    _check_collection(collection_name)
    try:
        document = (
            session.query(Document)
            .filter(Document.collection == collection_name, Document.id == document_id)
            .first()
        )
    except SQLAlchemyError as e:
        logger.error(f"get_document: Read from '{collection_name}' failed - {e}")
        raise RuntimeError(f"Failed to read '{collection_name}': {e}") from e

    return _to_record(document) if document else None
