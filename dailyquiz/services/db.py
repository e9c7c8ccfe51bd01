# services/db.py (quiz + result storage)
from __future__ import annotations
import datetime as dt
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from sqlalchemy import (
    JSON, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint,
    create_engine, func, select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import (
    Mapped, Session, declarative_base, mapped_column, relationship, selectinload, sessionmaker,
)

from dailyquiz.domain.models import GradedResult, Question, QuestionDraft, Quiz
from dailyquiz.services.config import DATABASE_URL
from dailyquiz.services.errors import AlreadyCompletedError, DuplicateQuizError, StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()
_engine = None
_store = None


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)


class QuizRow(Base):
    __tablename__ = "quizzes"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=_utcnow)

    questions: Mapped[List["QuestionRow"]] = relationship(
        back_populates="quiz", order_by="QuestionRow.position", cascade="all, delete-orphan",
    )

    __table_args__ = (UniqueConstraint("date", name="uq_quizzes_date"),)


class QuestionRow(Base):
    __tablename__ = "questions"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quiz_id: Mapped[int] = mapped_column(ForeignKey("quizzes.id"), nullable=False, index=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    options: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    correct_answer: Mapped[str] = mapped_column(Text, nullable=False)

    quiz: Mapped[QuizRow] = relationship(back_populates="questions")


class ResultRow(Base):
    __tablename__ = "results"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    time_taken: Mapped[int] = mapped_column(Integer, nullable=False)
    total_questions: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=_utcnow)

    # one recorded attempt per date
    __table_args__ = (UniqueConstraint("date", name="uq_results_date"),)


# ---- row -> domain ----

def _to_quiz(row: QuizRow) -> Quiz:
    return Quiz(
        id=row.id,
        date=row.date,
        questions=[
            Question(
                id=q.id,
                question=q.question,
                type=q.type,
                options=list(q.options) if q.options is not None else None,
                correct_answer=q.correct_answer,
            )
            for q in row.questions
        ],
    )


def _to_result(row: ResultRow) -> GradedResult:
    return GradedResult(
        id=row.id,
        date=row.date,
        score=row.score,
        time_taken=row.time_taken,
        total_questions=row.total_questions,
        created_at=row.created_at,
    )


# ---- engine ----

def _ensure_sqlite_dir(url: str):
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        Path(url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _ensure_sqlite_dir(DATABASE_URL)
        connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
        _engine = create_engine(DATABASE_URL, echo=False, future=True, connect_args=connect_args)
    return _engine


def get_store() -> "QuizStore":
    """Process-wide store bound to DATABASE_URL."""
    global _store
    if _store is None:
        _store = QuizStore(get_engine())
    return _store


class QuizStore:
    """Persistence for quizzes and results.

    Every SQLAlchemy failure is re-raised as StorageError; the two unique
    constraints surface as DuplicateQuizError / AlreadyCompletedError.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    def session(self) -> Session:
        return self._session_factory()

    def init_db(self):
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.exception("Error initializing database")
            raise StorageError(f"Failed to initialize database: {e}") from e
        logger.info("Database initialized (%s)", self.engine.url.render_as_string(hide_password=True))

    # ---- quizzes ----

    def create_quiz(self, date: dt.date, questions: Sequence[QuestionDraft]) -> Quiz:
        """Insert the quiz and all its questions in one transaction."""
        try:
            with self.session() as db:
                row = QuizRow(date=date)
                row.questions = [
                    QuestionRow(
                        position=i,
                        question=q.question,
                        type=q.type,
                        options=list(q.options) if q.options is not None else None,
                        correct_answer=q.correct_answer,
                    )
                    for i, q in enumerate(questions)
                ]
                db.add(row)
                db.commit()
                db.refresh(row)
                quiz = _to_quiz(row)
        except IntegrityError as e:
            logger.warning("Quiz for %s already exists", date)
            raise DuplicateQuizError(date) from e
        except SQLAlchemyError as e:
            logger.exception("Error adding quiz for %s", date)
            raise StorageError(f"Failed to add quiz: {e}") from e
        logger.info("Added quiz %s for %s (%d questions)", quiz.id, date, len(quiz.questions))
        return quiz

    def fetch_quiz_for_date(self, date: dt.date) -> Optional[Quiz]:
        try:
            with self.session() as db:
                row = db.execute(
                    select(QuizRow)
                    .where(QuizRow.date == date)
                    .options(selectinload(QuizRow.questions))
                    .order_by(QuizRow.id)
                ).scalars().first()
                return _to_quiz(row) if row else None
        except SQLAlchemyError as e:
            logger.exception("Error fetching quiz for %s", date)
            raise StorageError(f"Failed to fetch quiz: {e}") from e

    def quiz_exists_for_date(self, date: dt.date) -> bool:
        try:
            with self.session() as db:
                count = db.scalar(select(func.count(QuizRow.id)).where(QuizRow.date == date))
        except SQLAlchemyError as e:
            logger.exception("Error checking quiz for %s", date)
            raise StorageError(f"Failed to check quiz: {e}") from e
        return bool(count)

    # ---- results ----

    def record_result(self, date: dt.date, score: int, time_taken: int, total_questions: int) -> GradedResult:
        """Conditional insert: fails with AlreadyCompletedError if the date has a result."""
        try:
            with self.session() as db:
                row = ResultRow(date=date, score=score, time_taken=time_taken, total_questions=total_questions)
                db.add(row)
                db.commit()
                db.refresh(row)
                result = _to_result(row)
        except IntegrityError as e:
            logger.warning("Rejected second result for %s", date)
            raise AlreadyCompletedError(date) from e
        except SQLAlchemyError as e:
            logger.exception("Error submitting quiz result for %s", date)
            raise StorageError(f"Failed to record result: {e}") from e
        logger.info("Recorded result for %s: %d/%d in %ds", date, score, total_questions, time_taken)
        return result

    def count_results_for_date(self, date: dt.date) -> int:
        try:
            with self.session() as db:
                return db.scalar(select(func.count(ResultRow.id)).where(ResultRow.date == date)) or 0
        except SQLAlchemyError as e:
            logger.exception("Error counting results for %s", date)
            raise StorageError(f"Failed to count results: {e}") from e

    def result_exists_for_date(self, date: dt.date) -> bool:
        return self.count_results_for_date(date) > 0

    def list_recent_results(self, limit: int = 30) -> List[GradedResult]:
        """Newest first."""
        try:
            with self.session() as db:
                rows = db.execute(
                    select(ResultRow)
                    .order_by(ResultRow.created_at.desc(), ResultRow.id.desc())
                    .limit(limit)
                ).scalars().all()
                return [_to_result(r) for r in rows]
        except SQLAlchemyError as e:
            logger.exception("Error fetching results")
            raise StorageError(f"Failed to fetch results: {e}") from e


if __name__ == "__main__":
    get_store().init_db()
    print(f"DB initialized at: {DATABASE_URL}")
