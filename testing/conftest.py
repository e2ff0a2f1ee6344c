import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from utils.database.models import Base

@pytest.fixture
def session():
    """In-memory document store session."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    db_session = sessionmaker(bind=engine)()
    yield db_session
    db_session.close()
    engine.dispose()

@pytest.fixture
def user():
    return {'uid': 'user-1', 'email': 'student@example.com', 'name': 'Student'}

@pytest.fixture
def sample_test():
    """A stored test with three questions worth 60 marks in total."""
    return {
        'id': 'test-1',
        'title': 'Data Structures Basics',
        'subject': 'Computer Science',
        'duration': 10,
        'total_marks': 60,
        'questions': [
            {'id': 'q1', 'question': 'Which structure is FIFO?',
             'options': ['Stack', 'Queue', 'Tree', 'Graph'], 'correct_answer': 1, 'explanation': ''},
            {'id': 'q2', 'question': 'Which structure is LIFO?',
             'options': ['Stack', 'Queue', 'Heap', 'List'], 'correct_answer': 0, 'explanation': ''},
            {'id': 'q3', 'question': 'Binary search needs a ... array.',
             'options': ['Empty', 'Sorted', 'Reversed', 'Sparse'], 'correct_answer': 1, 'explanation': ''},
        ],
    }
