import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

# question types (wire values stored in the DB)
SINGLE_CHOICE = "radio"
MULTI_CHOICE = "checkbox"
FREE_TEXT = "text"
DROPDOWN = "dropdown"

QUESTION_TYPES = [SINGLE_CHOICE, MULTI_CHOICE, FREE_TEXT, DROPDOWN]
CHOICE_TYPES = [SINGLE_CHOICE, MULTI_CHOICE, DROPDOWN]

TYPE_LABELS = {
    SINGLE_CHOICE: "Single choice",
    MULTI_CHOICE: "Multiple choice",
    FREE_TEXT: "Free text",
    DROPDOWN: "Dropdown",
}

Answer = Union[str, List[str], None]


@dataclass
class QuestionDraft:
    """A question as typed by the admin, before it has an id."""
    question: str
    type: str
    options: Optional[List[str]]  # None for free text
    correct_answer: str


@dataclass
class Question:
    id: int
    question: str
    type: str                     # radio / checkbox / text / dropdown
    options: Optional[List[str]]
    correct_answer: Optional[str]  # None once redacted for the quiz page


@dataclass
class Quiz:
    id: int
    date: dt.date
    questions: List[Question] = field(default_factory=list)

    def redacted(self) -> "Quiz":
        """Copy of the quiz that is safe to show before grading."""
        return Quiz(
            id=self.id,
            date=self.date,
            questions=[
                Question(id=q.id, question=q.question, type=q.type,
                         options=list(q.options) if q.options is not None else None,
                         correct_answer=None)
                for q in self.questions
            ],
        )


@dataclass
class Submission:
    date: dt.date
    answers: Dict[int, Answer]
    time_taken: int  # seconds


@dataclass
class QuestionVerdict:
    question_id: int
    question: str
    user_answer: Answer
    correct_answer: str
    is_correct: bool


@dataclass
class GradedSubmission:
    score: int
    total: int
    time_taken: int
    breakdown: List[QuestionVerdict]

    @property
    def is_perfect(self) -> bool:
        return self.total > 0 and self.score == self.total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "totalQuestions": self.total,
            "timeTaken": self.time_taken,
            "results": [
                {
                    "questionId": v.question_id,
                    "question": v.question,
                    "userAnswer": v.user_answer,
                    "correctAnswer": v.correct_answer,
                    "isCorrect": v.is_correct,
                }
                for v in self.breakdown
            ],
        }


@dataclass
class GradedResult:
    id: int
    date: dt.date
    score: int
    time_taken: int
    total_questions: int
    created_at: Optional[dt.datetime]

    @property
    def percentage(self) -> float:
        if not self.total_questions:
            return 0.0
        return self.score / self.total_questions * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "score": self.score,
            "timeTaken": self.time_taken,
            "totalQuestions": self.total_questions,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class GateStatus:
    has_quiz: bool
    already_completed: bool

    @property
    def can_attempt(self) -> bool:
        return self.has_quiz and not self.already_completed

    def to_dict(self) -> Dict[str, bool]:
        return {
            "hasQuizPublished": self.has_quiz,
            "alreadyCompleted": self.already_completed,
            "canAttempt": self.can_attempt,
        }
