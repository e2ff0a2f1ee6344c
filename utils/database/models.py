"""
Database models for the document store.

Every record lives in a single table, keyed by a generated id and grouped
by collection name. The record body is stored as JSON.
"""

import datetime
import uuid
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()

def _new_document_id() -> str:
    return uuid.uuid4().hex

# Table for all collection documents
class Document(Base):
    __tablename__ = 'documents'

    # Insertion order, used for listing
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, nullable=False, index=True, default=_new_document_id)
    collection = Column(String(64), nullable=False, index=True)
    data = Column(JSON, nullable=False)
    created_time = Column(DateTime, default=datetime.datetime.utcnow)
