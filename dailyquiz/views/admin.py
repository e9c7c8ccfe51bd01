import datetime as dt
import logging
from typing import Any, Dict, List

import streamlit as st

from dailyquiz.domain.models import FREE_TEXT, MULTI_CHOICE, QUESTION_TYPES, TYPE_LABELS
from dailyquiz.services.db import QuizStore
from dailyquiz.services.errors import StorageError, ValidationError
from dailyquiz.services.quiz_service import add_quiz

logger = logging.getLogger(__name__)


def _init_state():
    if "admin_qids" not in st.session_state:
        st.session_state.admin_qids = [0]
        st.session_state.admin_next_qid = 1
    # reset requested by the previous run (widget keys can't be changed after render)
    if st.session_state.pop("_admin_reset", False):
        for k in list(st.session_state.keys()):
            if str(k).startswith("adm_"):
                del st.session_state[k]
        st.session_state.admin_qids = [0]
        st.session_state.admin_next_qid = 1


def _add_question():
    st.session_state.admin_qids.append(st.session_state.admin_next_qid)
    st.session_state.admin_next_qid += 1


def _remove_question(qid: int):
    st.session_state.admin_qids = [q for q in st.session_state.admin_qids if q != qid]


def _split_options(raw: str) -> List[str]:
    # one option per line; blank lines ignored
    return [ln.strip() for ln in (raw or "").splitlines() if ln.strip()]


def _question_editor(n: int, qid: int) -> Dict[str, Any]:
    with st.container(border=True):
        head, remove = st.columns([4, 1])
        head.markdown(f"**Question {n}**")
        if len(st.session_state.admin_qids) > 1:
            remove.button("🗑️ Remove", key=f"adm_{qid}_remove", on_click=_remove_question, args=(qid,))

        text = st.text_input("Question", key=f"adm_{qid}_text", placeholder="Enter your question...")
        qtype = st.selectbox("Type", QUESTION_TYPES, format_func=TYPE_LABELS.get, key=f"adm_{qid}_type")

        options = None
        if qtype != FREE_TEXT:
            options = _split_options(st.text_area(
                "Options (one per line)", key=f"adm_{qid}_options", height=110,
                placeholder="Option 1\nOption 2",
            ))

        hint = "Enter the correct answer..."
        if qtype == MULTI_CHOICE:
            hint = "Comma-separated, e.g. Option 1,Option 3"
        elif qtype != FREE_TEXT:
            hint = "Must match one of the options"
        correct = st.text_input("Correct Answer", key=f"adm_{qid}_correct", placeholder=hint)

    return {"question": text, "type": qtype, "options": options, "correct_answer": correct}


def render(store: QuizStore, today: dt.date):
    _init_state()
    st.title("Add New Quiz 📚")

    if msg := st.session_state.pop("_admin_success", None):
        st.success(msg)

    date = st.date_input("Quiz Date", value=today, key="adm_date")

    questions = [_question_editor(n, qid) for n, qid in enumerate(st.session_state.admin_qids, start=1)]

    st.button("➕ Add Question", on_click=_add_question, width="stretch")

    if not st.button("Save Quiz", type="primary", width="stretch"):
        return

    payload = {"date": date.isoformat() if date else None, "questions": questions}
    try:
        quiz = add_quiz(store, payload)
    except ValidationError as e:
        st.error(str(e))
        return
    except StorageError as e:
        logger.exception("Error adding quiz")
        st.error(f"Failed to add quiz: {e}")
        return

    st.session_state._admin_success = f"Quiz added successfully for {quiz.date.isoformat()}!"
    st.session_state._admin_reset = True
    st.rerun()
