"""
State machine for one user's attempt at a test.

An attempt moves NOT_STARTED -> IN_PROGRESS -> SUBMITTED. It holds the
current test, the answer slots, the question cursor and the countdown.
Persisting the result is delegated to the save_result callable, so the
machine itself has no store or UI dependency.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Optional

from test_manager.scoring import build_test_result

logger = logging.getLogger(__name__)

class AttemptState(Enum):
    NOT_STARTED = 'not_started'
    IN_PROGRESS = 'in_progress'
    SUBMITTED = 'submitted'

def format_time(seconds: int) -> str:
    """ Format a countdown as m:ss. """
    seconds = max(int(seconds), 0)
    return f"{seconds // 60}:{seconds % 60:02d}"

class TestAttempt:
    """
    A single test attempt held in the user's session.

    Only an IN_PROGRESS attempt accepts answers, ticks and submission.
    Whichever of a timer-forced or user-initiated submit runs first wins.
    The other sees SUBMITTED and does nothing.
    """

    def __init__(self, save_result: Callable[[Dict], str]):
        """
        Args:
            save_result: Persists a result record and returns its id.
                Raises RuntimeError on failure.
        """
        self.save_result = save_result
        self.reset()

    def reset(self):
        """ Drop the current test and return to NOT_STARTED. """
        self.state = AttemptState.NOT_STARTED
        self.test = None
        self.user = None
        self.answers = []
        self.current_index = 0
        self.remaining_sec = 0
        self.result = None
        # Message of the last failed save, cleared by a successful submit
        self.last_error = None

    def start(self, test: Dict, user: Dict):
        """
        Begin an attempt with every answer unset and the full duration on the clock.

        Args:
            test: Test record with 'id', 'questions' and 'duration' (minutes).
            user: Signed-in user with 'uid' and 'email'.
        """
        if not user:
            raise ValueError("Sign in to take a test.")
        if not test.get('questions'):
            raise ValueError("This test has no questions.")

        self.reset()
        self.test = test
        self.user = user
        self.answers = [None] * len(test['questions'])
        self.remaining_sec = int(test['duration']) * 60
        self.state = AttemptState.IN_PROGRESS
        logger.info(f"start: User {user['uid']} started test {test['id']}")

    @property
    def question_count(self) -> int:
        return len(self.answers)

    @property
    def current_question(self) -> Optional[Dict]:
        if self.test is None:
            return None
        return self.test['questions'][self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.question_count - 1

    def select_answer(self, question_index: int, option: int):
        """ Record the chosen option for a question, replacing any earlier choice. """
        if self.state != AttemptState.IN_PROGRESS:
            return
        if not 0 <= question_index < self.question_count:
            raise IndexError(f"No question at index {question_index}")
        self.answers[question_index] = option

    def advance(self):
        """ Move to the next question. Stays on the last one. """
        if self.current_index < self.question_count - 1:
            self.current_index += 1

    def retreat(self):
        """ Move to the previous question. Stays on the first one. """
        if self.current_index > 0:
            self.current_index -= 1

    def tick(self, seconds: int = 1) -> Optional[Dict]:
        """
        Count the timer down. The tick that reaches zero submits the attempt.

        Returns:
            The stored result if this tick submitted the attempt, otherwise None.
        """
        if self.state != AttemptState.IN_PROGRESS or self.remaining_sec <= 0:
            return None

        self.remaining_sec = max(self.remaining_sec - seconds, 0)
        if self.remaining_sec == 0:
            logger.info(f"tick: Time is up for test {self.test['id']}")
            return self.submit()
        return None

    def submit(self) -> Optional[Dict]:
        """
        Score and persist the attempt.

        Returns:
            The stored result record with its 'id', or None if the attempt
            is not in progress.

        Raises:
            RuntimeError: If the result could not be saved. The attempt stays
                IN_PROGRESS so the user can try again.
        """
        if self.state != AttemptState.IN_PROGRESS:
            return None

        record = build_test_result(self.test, self.user, self.answers, self.remaining_sec)
        try:
            record['id'] = self.save_result(record)
        except RuntimeError as e:
            self.last_error = str(e)
            raise

        self.result = record
        self.state = AttemptState.SUBMITTED
        self.last_error = None
        logger.info(f"submit: Test {self.test['id']} scored {record['score']}/{self.test['total_marks']}")
        return record
