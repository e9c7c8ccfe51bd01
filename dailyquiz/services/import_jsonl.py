import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dailyquiz.services.config import JSONL_PATH
from dailyquiz.services.db import QuizStore, get_store
from dailyquiz.services.errors import DuplicateQuizError, ValidationError
from dailyquiz.services.validation import validate_quiz_payload

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    imported: List[str] = field(default_factory=list)  # ISO dates
    skipped: List[str] = field(default_factory=list)   # dates that already had a quiz


def import_jsonl(src=JSONL_PATH, store: Optional[QuizStore] = None) -> ImportReport:
    """One quiz per line: {"date": "...", "questions": [...]}.

    A malformed line aborts the import with ValidationError naming the line;
    quizzes written before it are kept.
    """
    src = Path(src)
    if not src.exists():
        raise FileNotFoundError(src)
    store = store or get_store()
    store.init_db()

    report = ImportReport()
    with src.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                payload = json.loads(line)
                date, drafts = validate_quiz_payload(payload)
            except json.JSONDecodeError as e:
                raise ValidationError(f"line {lineno}: invalid JSON ({e.msg})") from e
            except ValidationError as e:
                raise ValidationError(f"line {lineno}: {e}") from e
            try:
                store.create_quiz(date, drafts)
            except DuplicateQuizError:
                report.skipped.append(date.isoformat())
                continue
            report.imported.append(date.isoformat())
    logger.info("Imported %d quizzes from %s (%d skipped)", len(report.imported), src, len(report.skipped))
    return report


if __name__ == "__main__":
    from dailyquiz.services.logging_config import configure_logging

    configure_logging()
    path = sys.argv[1] if len(sys.argv) > 1 else JSONL_PATH
    rep = import_jsonl(path)
    print("imported:", ", ".join(rep.imported) or "-")
    if rep.skipped:
        print("skipped (already exists):", ", ".join(rep.skipped))
