import datetime as dt
import logging
import time
from typing import Dict, List

import streamlit as st

from dailyquiz.domain.models import (
    DROPDOWN, FREE_TEXT, MULTI_CHOICE, SINGLE_CHOICE, Answer, GradedSubmission, Question, Quiz,
)
from dailyquiz.services.db import QuizStore
from dailyquiz.services.errors import (
    AlreadyCompletedError, QuizNotFoundError, StorageError, ValidationError,
)
from dailyquiz.services.progress import format_time, score_emoji
from dailyquiz.services.quiz_service import build_submission, get_today_quiz, submit_quiz
from dailyquiz.views.nav import HOME, PROGRESS, nav_button

logger = logging.getLogger(__name__)


def _is_unanswered(answer: Answer) -> bool:
    if answer is None:
        return True
    if isinstance(answer, str):
        return not answer.strip()
    return len(answer) == 0


def _show_answer(answer: Answer) -> str:
    if isinstance(answer, (list, tuple)):
        return ", ".join(answer) or "—"
    return answer or "—"


def _answer_widget(i: int, q: Question) -> Answer:
    label = f"**Q{i}.** {q.question}"
    key = f"q_{q.id}"
    if q.type == SINGLE_CHOICE:
        return st.radio(label, options=q.options or [], index=None, key=key)
    if q.type == DROPDOWN:
        return st.selectbox(label, options=q.options or [], index=None,
                            placeholder="Select an answer...", key=key)
    if q.type == MULTI_CHOICE:
        st.markdown(label)
        return [opt for j, opt in enumerate(q.options or [])
                if st.checkbox(opt, key=f"{key}_{j}")]
    if q.type == FREE_TEXT:
        return st.text_input(label, key=key, placeholder="Type your answer...")
    st.warning(f"Unsupported question type: {q.type}")
    return None


def _clear_answer_widgets():
    for k in list(st.session_state.keys()):
        if str(k).startswith("q_"):
            del st.session_state[k]


def _render_result(result: GradedSubmission):
    pct = result.score / result.total * 100 if result.total else 0
    if result.is_perfect and not st.session_state.get("_celebrated"):
        st.balloons()
        st.session_state._celebrated = True

    st.markdown(
        f"<div style='text-align:center;font-size:4rem'>{score_emoji(pct)}</div>"
        f"<h2 style='text-align:center'>{result.score}/{result.total}</h2>"
        f"<p style='text-align:center'>⏱️ Time: {format_time(result.time_taken)}</p>",
        unsafe_allow_html=True,
    )
    st.subheader("Review")
    for i, v in enumerate(result.breakdown, start=1):
        with st.container(border=True):
            st.markdown(f"**Q{i}.** {v.question} {'✅' if v.is_correct else '❌'}")
            st.write(f"- Your answer: {_show_answer(v.user_answer)}")
            if not v.is_correct:
                st.write(f"- Correct answer: {v.correct_answer}")

    c1, c2 = st.columns(2)
    with c1:
        nav_button("Go Home", HOME, key="result_home")
    with c2:
        nav_button("View Results", PROGRESS, key="result_progress", type="primary")


def _render_form(store: QuizStore, quiz: Quiz, today: dt.date):
    started = st.session_state.get("quiz_started_at")
    if started is None or st.session_state.get("quiz_started_for") != today:
        st.session_state.quiz_started_at = started = time.monotonic()
        st.session_state.quiz_started_for = today
    st.caption(f"⏱️ {format_time(int(time.monotonic() - started))} elapsed")

    answers: Dict[int, Answer] = {}
    with st.form("quiz_form"):
        for i, q in enumerate(quiz.questions, start=1):
            answers[q.id] = _answer_widget(i, q)
            st.markdown("---")
        submitted = st.form_submit_button("Submit Quiz", type="primary", width="stretch")

    if not submitted:
        return

    unanswered: List[int] = [i for i, q in enumerate(quiz.questions, start=1)
                             if _is_unanswered(answers.get(q.id))]
    if unanswered:
        st.warning("Please answer all questions before submitting! "
                   f"(missing: {', '.join(f'Q{n}' for n in unanswered)})")
        return

    elapsed = int(time.monotonic() - st.session_state.quiz_started_at)
    try:
        submission = build_submission({
            "date": quiz.date.isoformat(),
            "answers": answers,
            "time_taken": elapsed,
        })
        result = submit_quiz(store, submission, today)
    except AlreadyCompletedError:
        st.info("You've already completed today's quiz. Come back tomorrow for a new challenge!")
        return
    except (QuizNotFoundError, ValidationError) as e:
        st.error(str(e))
        return
    except StorageError:
        logger.exception("Error submitting quiz")
        st.error("Failed to submit quiz. Please try again.")
        return

    st.session_state.quiz_result = result
    st.session_state.quiz_result_for = today
    st.session_state.pop("quiz_started_at", None)
    _clear_answer_widgets()
    st.rerun()


def render(store: QuizStore, today: dt.date):
    st.title("Today's Quiz 🧠")

    result = st.session_state.get("quiz_result")
    if result is not None and st.session_state.get("quiz_result_for") == today:
        _render_result(result)
        return

    try:
        quiz = get_today_quiz(store, today)
    except AlreadyCompletedError:
        st.success("🏆 You've already completed today's quiz. Come back tomorrow for a new challenge!")
        c1, c2 = st.columns(2)
        with c1:
            nav_button("Go Home", HOME, key="done_home")
        with c2:
            nav_button("View Results", PROGRESS, key="done_progress", type="primary")
        return
    except QuizNotFoundError:
        st.warning("😕 No quiz available for today. Check back later!")
        nav_button("Go Home", HOME, key="none_home")
        return
    except StorageError:
        logger.exception("Error fetching quiz")
        st.error("Failed to load quiz.")
        return

    st.caption(f"{quiz.date:%A, %B %d, %Y} · {len(quiz.questions)} questions")
    _render_form(store, quiz, today)
