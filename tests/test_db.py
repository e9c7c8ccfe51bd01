"""Tests for the SQLAlchemy quiz store."""

import datetime as dt

import pytest
from sqlalchemy.exc import OperationalError

from dailyquiz.domain.models import QuestionDraft
from dailyquiz.services.errors import AlreadyCompletedError, DuplicateQuizError, StorageError


def _drafts():
    return [
        QuestionDraft("q1", "radio", ["A", "B"], "A"),
        QuestionDraft("q2", "text", None, "x"),
        QuestionDraft("q3", "checkbox", ["Z", "Y", "X"], "Z,X"),
    ]


def test_create_and_fetch_preserves_order(store, today) -> None:
    created = store.create_quiz(today, _drafts())
    fetched = store.fetch_quiz_for_date(today)

    assert fetched.id == created.id
    assert fetched.date == today
    assert [q.question for q in fetched.questions] == ["q1", "q2", "q3"]
    assert [q.options for q in fetched.questions] == [["A", "B"], None, ["Z", "Y", "X"]]
    assert [q.correct_answer for q in fetched.questions] == ["A", "x", "Z,X"]
    assert len({q.id for q in fetched.questions}) == 3


def test_fetch_missing_date_returns_none(store, today) -> None:
    assert store.fetch_quiz_for_date(today) is None
    assert not store.quiz_exists_for_date(today)


def test_second_quiz_for_same_date_is_rejected(store, today) -> None:
    store.create_quiz(today, _drafts())
    with pytest.raises(DuplicateQuizError):
        store.create_quiz(today, _drafts()[:1])
    assert len(store.fetch_quiz_for_date(today).questions) == 3


def test_record_result_once_per_date(store, today) -> None:
    assert store.count_results_for_date(today) == 0
    res = store.record_result(today, 2, 65, 3)
    assert (res.date, res.score, res.time_taken, res.total_questions) == (today, 2, 65, 3)
    assert res.created_at is not None

    with pytest.raises(AlreadyCompletedError):
        store.record_result(today, 3, 10, 3)
    assert store.count_results_for_date(today) == 1
    assert store.result_exists_for_date(today)


def test_list_recent_results_newest_first(store, today) -> None:
    for i in range(5):
        store.record_result(today - dt.timedelta(days=i), i, 10 * i, 5)
    recent = store.list_recent_results(limit=3)
    assert [r.score for r in recent] == [4, 3, 2]
    assert recent[0].to_dict()["totalQuestions"] == 5


def test_sqlalchemy_errors_become_storage_error(store, today, monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(store, "session", boom)
    with pytest.raises(StorageError):
        store.fetch_quiz_for_date(today)
    with pytest.raises(StorageError):
        store.list_recent_results()
