import datetime as dt
import logging

from dailyquiz.domain.models import GateStatus, Quiz
from dailyquiz.services.errors import AlreadyCompletedError, QuizNotFoundError, StorageError

logger = logging.getLogger(__name__)


def evaluate_gate(has_quiz: bool, already_completed: bool) -> GateStatus:
    """One attempt per date: allowed only when a quiz exists and no result does."""
    return GateStatus(has_quiz=bool(has_quiz), already_completed=bool(already_completed))


def check_attempt_gate(store, date: dt.date) -> GateStatus:
    """Gate status for `date` as seen by the store.

    A storage failure while looking up the result counts as "not completed".
    This is only used for status display; the submission path re-checks and
    the results table rejects a second row for the same date anyway.
    """
    has_quiz = store.quiz_exists_for_date(date)
    try:
        completed = store.result_exists_for_date(date)
    except StorageError:
        logger.warning("Could not check completion for %s; assuming not completed", date, exc_info=True)
        completed = False
    return evaluate_gate(has_quiz, completed)


def require_open_attempt(store, date: dt.date) -> Quiz:
    """The full quiz for `date`, or the reason it can't be attempted.

    Unlike check_attempt_gate, storage errors propagate: this guards the
    take-quiz and submit paths.
    """
    if store.result_exists_for_date(date):
        raise AlreadyCompletedError(date)
    quiz = store.fetch_quiz_for_date(date)
    if quiz is None:
        raise QuizNotFoundError(date)
    return quiz
