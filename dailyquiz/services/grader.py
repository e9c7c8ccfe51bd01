from typing import List
from dailyquiz.domain.models import (
    MULTI_CHOICE, Answer, GradedSubmission, Question, QuestionVerdict, Quiz, Submission,
)

def split_correct_options(correct_answer: str | None) -> List[str]:
    """'Cat, Bird' -> ['Cat', 'Bird'] (empty items dropped)"""
    return [part.strip() for part in (correct_answer or "").split(",") if part.strip()]

def _as_option_list(answer: Answer) -> List[str]:
    # anything that is not a list of options counts as "nothing ticked"
    if not isinstance(answer, (list, tuple)):
        return []
    return [str(a).strip() for a in answer]

def _normalize_text(value) -> str:
    return str(value).strip().casefold()

def is_answer_correct(question: Question, answer: Answer) -> bool:
    if question.type == MULTI_CHOICE:
        expected = sorted(split_correct_options(question.correct_answer))
        given = sorted(_as_option_list(answer))
        # duplicates are kept, so ['A', 'A'] never matches 'A'
        return bool(expected) and given == expected

    # radio / text / dropdown
    if answer is None or isinstance(answer, (list, tuple, dict)):
        return False
    if question.correct_answer is None:
        return False
    return _normalize_text(answer) == _normalize_text(question.correct_answer)

def grade_submission(quiz: Quiz, submission: Submission) -> GradedSubmission:
    """Grade every question of the quiz in order. Pure; no I/O."""
    breakdown: List[QuestionVerdict] = []
    score = 0
    for q in quiz.questions:
        answer = submission.answers.get(q.id)
        ok = is_answer_correct(q, answer)
        if ok:
            score += 1
        breakdown.append(QuestionVerdict(
            question_id=q.id,
            question=q.question,
            user_answer=answer,
            correct_answer=q.correct_answer or "",
            is_correct=ok,
        ))
    return GradedSubmission(
        score=score,
        total=len(quiz.questions),
        time_taken=submission.time_taken,
        breakdown=breakdown,
    )
