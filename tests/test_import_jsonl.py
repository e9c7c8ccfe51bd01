"""Tests for the JSONL bulk import."""

import datetime as dt
import json

import pytest

from dailyquiz.services.errors import ValidationError
from dailyquiz.services.import_jsonl import import_jsonl


def _line(date, answer="x"):
    return json.dumps({"date": date, "questions": [
        {"question": "Q", "type": "text", "options": None, "correct_answer": answer},
    ]})


def test_import_skips_blank_lines_and_existing_dates(store, tmp_path) -> None:
    src = tmp_path / "quizzes.jsonl"
    src.write_text("\n".join([_line("2026-10-19"), "", _line("2026-10-20"), _line("2026-10-19")]) + "\n",
                   encoding="utf-8")

    report = import_jsonl(src, store)
    assert report.imported == ["2026-10-19", "2026-10-20"]
    assert report.skipped == ["2026-10-19"]


def test_import_reports_bad_line(store, tmp_path) -> None:
    src = tmp_path / "quizzes.jsonl"
    src.write_text(_line("2026-10-19") + "\n" + _line("2026-10-20", answer="") + "\n", encoding="utf-8")
    with pytest.raises(ValidationError, match="line 2: Question 1 needs a correct answer"):
        import_jsonl(src, store)

    src.write_text("{not json\n", encoding="utf-8")
    with pytest.raises(ValidationError, match="line 1: invalid JSON"):
        import_jsonl(src, store)


def test_import_missing_file(store, tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        import_jsonl(tmp_path / "nope.jsonl", store)


def test_import_non_string_question_reports_line(store, tmp_path) -> None:
    src = tmp_path / "quizzes.jsonl"
    src.write_text(json.dumps({"date": "2026-10-19", "questions": [
        {"question": 42, "type": "text", "options": None, "correct_answer": "x"},
    ]}) + "\n", encoding="utf-8")
    with pytest.raises(ValidationError, match="line 1: Question 1 is empty"):
        import_jsonl(src, store)
    assert store.fetch_quiz_for_date(dt.date(2026, 10, 19)) is None
