"""Tests for the one-attempt-per-date gate."""

import pytest

from dailyquiz.domain.models import QuestionDraft
from dailyquiz.services.errors import AlreadyCompletedError, QuizNotFoundError, StorageError
from dailyquiz.services.gate import check_attempt_gate, evaluate_gate, require_open_attempt


@pytest.mark.parametrize(
    "has_quiz, completed, can_attempt",
    [
        (False, False, False),
        (False, True, False),
        (True, False, True),
        (True, True, False),
    ],
)
def test_evaluate_gate_all_combinations(has_quiz, completed, can_attempt) -> None:
    status = evaluate_gate(has_quiz, completed)
    assert status.can_attempt is can_attempt
    assert status.to_dict() == {
        "hasQuizPublished": has_quiz,
        "alreadyCompleted": completed,
        "canAttempt": can_attempt,
    }


def test_check_attempt_gate_follows_store(store, today) -> None:
    assert not check_attempt_gate(store, today).has_quiz

    store.create_quiz(today, [QuestionDraft("Q", "text", None, "x")])
    status = check_attempt_gate(store, today)
    assert status.has_quiz and status.can_attempt

    store.record_result(today, 1, 10, 1)
    status = check_attempt_gate(store, today)
    assert status.already_completed and not status.can_attempt


class _BrokenResultsStore:
    def quiz_exists_for_date(self, date):
        return True

    def result_exists_for_date(self, date):
        raise StorageError("db down")


def test_completion_lookup_failure_counts_as_not_completed(today) -> None:
    status = check_attempt_gate(_BrokenResultsStore(), today)
    assert status.has_quiz
    assert not status.already_completed


def test_quiz_lookup_failure_propagates(today) -> None:
    class _Broken(_BrokenResultsStore):
        def quiz_exists_for_date(self, date):
            raise StorageError("db down")

    with pytest.raises(StorageError):
        check_attempt_gate(_Broken(), today)


def test_require_open_attempt(store, today) -> None:
    with pytest.raises(QuizNotFoundError):
        require_open_attempt(store, today)

    store.create_quiz(today, [QuestionDraft("Q", "text", None, "x")])
    quiz = require_open_attempt(store, today)
    assert quiz.questions[0].correct_answer == "x"

    store.record_result(today, 1, 10, 1)
    with pytest.raises(AlreadyCompletedError):
        require_open_attempt(store, today)


def test_require_open_attempt_propagates_storage_errors(today) -> None:
    with pytest.raises(StorageError):
        require_open_attempt(_BrokenResultsStore(), today)
