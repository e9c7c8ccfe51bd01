import datetime as dt
import logging
from zoneinfo import ZoneInfo

import streamlit as st

from dailyquiz.services.config import QUIZ_TIMEZONE
from dailyquiz.services.db import QuizStore
from dailyquiz.services.errors import StorageError
from dailyquiz.services.quiz_service import get_quiz_status
from dailyquiz.views.nav import ADD_QUIZ, PROGRESS, TAKE_QUIZ, nav_button

logger = logging.getLogger(__name__)


def greeting(hour: int) -> str:
    if hour < 12:
        return "Good Morning"
    if hour < 18:
        return "Good Afternoon"
    return "Good Evening"


def render(store: QuizStore, today: dt.date):
    st.markdown("<div style='text-align:center;font-size:4rem'>🎯</div>", unsafe_allow_html=True)
    st.markdown("<h1 style='text-align:center'>Quiz Me!</h1>", unsafe_allow_html=True)
    hello = greeting(dt.datetime.now(ZoneInfo(QUIZ_TIMEZONE)).hour)
    st.markdown(
        f"<p style='text-align:center;font-size:1.3rem'>{hello}! "
        "Ready to learn something new?</p>",
        unsafe_allow_html=True,
    )

    try:
        status = get_quiz_status(store, today)
    except StorageError:
        logger.exception("Error checking today quiz")
        st.error("Could not check today's quiz. Please try again later.")
        return

    col_quiz, col_progress = st.columns(2)
    with col_quiz:
        with st.container(border=True):
            if status.already_completed:
                st.subheader("Quiz Completed! ✅")
                st.write("You've already completed today's quiz!")
            elif status.has_quiz:
                st.subheader("Start Quiz")
                st.write("Today's quiz is ready!")
            else:
                st.subheader("Start Quiz")
                st.write("No quiz available today")
            nav_button("Start Quiz", TAKE_QUIZ, key="home_start", type="primary",
                       disabled=not status.can_attempt)
    with col_progress:
        with st.container(border=True):
            st.subheader("My Progress")
            st.write("See your scores and history")
            nav_button("View Results", PROGRESS, key="home_results")

    c1, c2, c3 = st.columns(3)
    c1.info("⏱️ Timed Quizzes")
    c2.info("📊 Track Progress")
    c3.info("🎉 Fun Learning")

    st.divider()
    nav_button("📚 Add New Quiz (Admin)", ADD_QUIZ, key="home_admin", type="secondary")
