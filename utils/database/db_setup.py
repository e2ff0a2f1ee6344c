"""
Database setup and session creation for the application.
"""

import os
import logging
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from utils.settings_manager import get_setting
from .models import Base

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

def get_database_url() -> str:
    """ Database URL from the environment, falling back to the local SQLite file. """
    url = os.getenv('DATABASE_URL') or get_setting('PATH', 'default_database')
    if url.startswith('sqlite:///') and not url.startswith('sqlite:////') and url != 'sqlite:///:memory:':
        # Relative SQLite paths resolve against the project root
        db_path = PROJECT_ROOT / url[len('sqlite:///'):]
        db_path.parent.mkdir(parents=True, exist_ok=True)
        url = f"sqlite:///{db_path}"
    return url

@lru_cache(maxsize=None)
def get_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create a new engine instance and all tables.

    Args:
        database_url (str, optional): SQLAlchemy URL. Defaults to get_database_url().

    Returns:
        Engine: The engine bound to the document store.
    """
    try:
        engine = create_engine(database_url or get_database_url())
        Base.metadata.create_all(engine)
        return engine

    except (ValueError, SQLAlchemyError) as e:
        logger.error(f"get_engine: Database setup failed - {e}")
        raise RuntimeError(f"Database setup failed: {e}") from e

def get_session(database_url: Optional[str] = None) -> Session:
    """ Create a session to interact with the database. """
    return sessionmaker(bind=get_engine(database_url or get_database_url()))()

@contextmanager
def session_scope(database_url: Optional[str] = None) -> Iterator[Session]:
    """ Provide a session that is closed when the block exits. """
    session = get_session(database_url)
    try:
        yield session
    finally:
        session.close()
