import datetime as dt

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from dailyquiz.domain.models import Question, Quiz
from dailyquiz.services.db import QuizStore

TODAY = dt.date(2026, 10, 19)


@pytest.fixture()
def store() -> QuizStore:
    """Fresh in-memory SQLite store per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    s = QuizStore(engine)
    s.init_db()
    yield s
    engine.dispose()


@pytest.fixture()
def today() -> dt.date:
    return TODAY


def make_quiz(*questions: Question, date: dt.date = TODAY) -> Quiz:
    return Quiz(id=1, date=date, questions=list(questions))
