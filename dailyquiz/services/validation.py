"""Validation of the admin "add quiz" payload.

Payload shape::

    {"date": "2026-10-19",
     "questions": [{"question": "...", "type": "radio",
                    "options": ["A", "B"], "correct_answer": "A"}]}

``correctAnswer`` is accepted in place of ``correct_answer``. Every error
message starts with the failing question number so the admin form can show
it as-is.
"""
import datetime as dt
from typing import Any, Dict, List, Tuple

from dailyquiz.domain.models import CHOICE_TYPES, FREE_TEXT, MULTI_CHOICE, QUESTION_TYPES, QuestionDraft
from dailyquiz.services.errors import ValidationError
from dailyquiz.services.grader import split_correct_options


def parse_date(value: Any) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        raw = value.strip()
        # "YYYY-MM-DD" or a full ISO datetime "YYYY-MM-DDT..."
        if len(raw) > 10 and raw[10] not in "T ":
            raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")
        try:
            return dt.date.fromisoformat(raw[:10])
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from None
    raise ValidationError("Please select a date")


def _validate_question(n: int, raw: Dict[str, Any]) -> QuestionDraft:
    if not isinstance(raw, dict):
        raise ValidationError(f"Question {n} is malformed")

    text = raw.get("question")
    text = text.strip() if isinstance(text, str) else ""
    if not text:
        raise ValidationError(f"Question {n} is empty")

    qtype = raw.get("type")
    if qtype not in QUESTION_TYPES:
        raise ValidationError(f"Question {n} has an unknown type: {qtype!r}")

    correct = raw.get("correct_answer", raw.get("correctAnswer"))
    correct = (correct or "").strip() if isinstance(correct, str) else ""
    if not correct:
        raise ValidationError(f"Question {n} needs a correct answer")

    options = raw.get("options")
    if qtype == FREE_TEXT:
        if options:
            raise ValidationError(f"Question {n} is free text and must not have options")
        return QuestionDraft(question=text, type=qtype, options=None, correct_answer=correct)

    if not isinstance(options, list) or len(options) < 2:
        raise ValidationError(f"Question {n} needs at least two options")
    if any(not isinstance(o, str) or not o.strip() for o in options):
        raise ValidationError(f"Question {n} has empty options")
    options = [o.strip() for o in options]
    if len(set(options)) != len(options):
        raise ValidationError(f"Question {n} has duplicate options")
    if qtype == MULTI_CHOICE and any("," in o for o in options):
        # the correct answer is stored comma-separated
        raise ValidationError(f"Question {n} options must not contain commas in multiple choice")

    if qtype == MULTI_CHOICE:
        expected = split_correct_options(correct)
        missing = [c for c in expected if c not in options]
        if not expected or missing:
            raise ValidationError(
                f"Question {n} correct answer must be a comma-separated list of its options"
                + (f" (not an option: {', '.join(missing)})" if missing else "")
            )
        if len(set(expected)) != len(expected):
            raise ValidationError(f"Question {n} lists the same correct option twice")
        # store the canonical form, e.g. "Cat, Bird" -> "Cat,Bird"
        correct = ",".join(expected)
    elif correct not in options:
        raise ValidationError(f"Question {n} correct answer must be one of its options")

    return QuestionDraft(question=text, type=qtype, options=options, correct_answer=correct)


def validate_quiz_payload(payload: Dict[str, Any]) -> Tuple[dt.date, List[QuestionDraft]]:
    if not isinstance(payload, dict):
        raise ValidationError("Date and questions are required")
    date = parse_date(payload.get("date"))
    questions = payload.get("questions") or []
    if not isinstance(questions, list) or not questions:
        raise ValidationError("Date and questions are required")
    drafts = [_validate_question(i, q) for i, q in enumerate(questions, start=1)]
    return date, drafts
