"""Request boundary between the Streamlit views and the store.

Each view computes ``today`` once with :func:`current_date` and passes it to
every call it makes, so a request that straddles midnight still talks about
a single date.
"""
import datetime as dt
import logging
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from dailyquiz.domain.models import GateStatus, GradedResult, GradedSubmission, Quiz, Submission
from dailyquiz.services.config import QUIZ_TIMEZONE, RESULTS_LIMIT
from dailyquiz.services.db import QuizStore
from dailyquiz.services.errors import ValidationError
from dailyquiz.services.gate import check_attempt_gate, require_open_attempt
from dailyquiz.services.grader import grade_submission
from dailyquiz.services.validation import parse_date, validate_quiz_payload

logger = logging.getLogger(__name__)


def current_date(tz_name: Optional[str] = None, now: Optional[dt.datetime] = None) -> dt.date:
    tz = ZoneInfo(tz_name or QUIZ_TIMEZONE)
    if now is None:
        return dt.datetime.now(tz).date()
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)
    return now.astimezone(tz).date()


def init_database(store: QuizStore):
    store.init_db()


def get_quiz_status(store: QuizStore, today: dt.date) -> GateStatus:
    return check_attempt_gate(store, today)


def get_today_quiz(store: QuizStore, today: dt.date) -> Quiz:
    """Today's quiz without correct answers, if it can still be taken."""
    return require_open_attempt(store, today).redacted()


def build_submission(payload: Dict[str, Any]) -> Submission:
    """Submission from a JSON-like dict (``answers`` keys may be strings)."""
    raw_answers = payload.get("answers") or {}
    if not isinstance(raw_answers, dict):
        raise ValidationError("answers must map question ids to answers")
    answers = {}
    for key, value in raw_answers.items():
        try:
            answers[int(key)] = value
        except (TypeError, ValueError):
            raise ValidationError(f"Unknown question id: {key!r}")
    try:
        time_taken = int(payload.get("time_taken", payload.get("timeTaken", 0)))
    except (TypeError, ValueError):
        raise ValidationError("time_taken must be a whole number of seconds")
    return Submission(date=parse_date(payload.get("date")), answers=answers, time_taken=time_taken)


def submit_quiz(store: QuizStore, submission: Submission, today: dt.date) -> GradedSubmission:
    if submission.date != today:
        raise ValidationError(f"Submission for {submission.date} does not match today's quiz ({today})")
    if submission.time_taken < 0:
        raise ValidationError("time_taken must not be negative")

    # gate again right before grading; the unique constraint covers the race
    quiz = require_open_attempt(store, today)

    graded = grade_submission(quiz, submission)
    store.record_result(today, graded.score, graded.time_taken, graded.total)
    logger.info("Graded quiz %s for %s: %d/%d", quiz.id, today, graded.score, graded.total)
    return graded


def add_quiz(store: QuizStore, payload: Dict[str, Any]) -> Quiz:
    date, drafts = validate_quiz_payload(payload)
    return store.create_quiz(date, drafts)


def get_results(store: QuizStore, limit: Optional[int] = None) -> List[GradedResult]:
    return store.list_recent_results(limit or RESULTS_LIMIT)
