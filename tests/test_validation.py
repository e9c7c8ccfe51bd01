"""Tests for admin quiz payload validation."""

import datetime as dt

import pytest

from dailyquiz.services.errors import ValidationError
from dailyquiz.services.validation import parse_date, validate_quiz_payload


def _payload(*questions, date="2026-10-19"):
    return {"date": date, "questions": list(questions)}


def _radio(**kw):
    q = {"question": "Pick one", "type": "radio", "options": ["A", "B"], "correct_answer": "A"}
    q.update(kw)
    return q


def test_valid_payload_is_normalized() -> None:
    date, drafts = validate_quiz_payload(_payload(
        _radio(question="  Pick one  ", options=[" A ", "B"]),
        {"question": "Free", "type": "text", "options": None, "correctAnswer": " x "},
        {"question": "Many", "type": "checkbox", "options": ["Cat", "Dog", "Bird"],
         "correct_answer": "Cat, Bird"},
    ))
    assert date == dt.date(2026, 10, 19)
    assert drafts[0].question == "Pick one"
    assert drafts[0].options == ["A", "B"]
    assert drafts[1].options is None and drafts[1].correct_answer == "x"
    assert drafts[2].correct_answer == "Cat,Bird"


@pytest.mark.parametrize(
    "question, message",
    [
        (_radio(question=" "), "Question 2 is empty"),
        (_radio(question=42), "Question 2 is empty"),
        (_radio(question=["a"]), "Question 2 is empty"),
        (_radio(type="essay"), "Question 2 has an unknown type"),
        (_radio(correct_answer=""), "Question 2 needs a correct answer"),
        (_radio(options=["A"]), "Question 2 needs at least two options"),
        (_radio(options=None), "Question 2 needs at least two options"),
        (_radio(options=["A", " "]), "Question 2 has empty options"),
        (_radio(options=["A", "A"]), "Question 2 has duplicate options"),
        (_radio(correct_answer="C"), "Question 2 correct answer must be one of its options"),
        (_radio(type="checkbox", correct_answer="A,C"), "not an option: C"),
        (_radio(type="checkbox", correct_answer="A,A"), "Question 2 lists the same correct option twice"),
        (_radio(type="checkbox", options=["Paris, France", "Rome"], correct_answer="Rome"),
         "Question 2 options must not contain commas"),
        ({"question": "Free", "type": "text", "options": ["A", "B"], "correct_answer": "x"},
         "Question 2 is free text and must not have options"),
    ],
)
def test_invalid_question_names_the_question(question, message) -> None:
    with pytest.raises(ValidationError, match=message):
        validate_quiz_payload(_payload(_radio(), question))


def test_missing_date_or_questions() -> None:
    with pytest.raises(ValidationError, match="Please select a date"):
        validate_quiz_payload(_payload(_radio(), date=""))
    with pytest.raises(ValidationError, match="Date and questions are required"):
        validate_quiz_payload(_payload())


def test_parse_date() -> None:
    assert parse_date("2026-10-19T08:00:00Z") == dt.date(2026, 10, 19)
    assert parse_date(dt.datetime(2026, 10, 19, 23, 59)) == dt.date(2026, 10, 19)
    with pytest.raises(ValidationError, match="Invalid date"):
        parse_date("19/10/2026")
    with pytest.raises(ValidationError, match="Invalid date"):
        parse_date("2026-10-19junk")
    assert parse_date("2026-10-19 08:00") == dt.date(2026, 10, 19)


def test_commas_allowed_in_single_choice_options() -> None:
    _, drafts = validate_quiz_payload(_payload(_radio(options=["Paris, France", "Rome"], correct_answer="Rome")))
    assert drafts[0].options == ["Paris, France", "Rome"]
