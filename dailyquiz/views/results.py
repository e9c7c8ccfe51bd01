"""
My Progress
===========

Score/time charts and the recent results table.
"""

import datetime as dt
import logging

import plotly.express as px
import streamlit as st

from dailyquiz.services.db import QuizStore
from dailyquiz.services.errors import StorageError
from dailyquiz.services.progress import format_time, history_table, results_frame, summarize
from dailyquiz.services.quiz_service import get_results
from dailyquiz.views.nav import TAKE_QUIZ, nav_button

logger = logging.getLogger(__name__)


def render_top_indicators(summary):
    c1, c2, c3 = st.columns(3)
    c1.metric("🏆 Best Score", f"{round(summary.best_score)}%")
    c2.metric("📈 Average Score", f"{summary.average_score}%")
    c3.metric("⏱️ Avg Time", format_time(summary.average_time))


def render(store: QuizStore, today: dt.date):
    st.title("Your Progress 📊")

    try:
        results = get_results(store)
    except StorageError:
        logger.exception("Error fetching results")
        st.error("Failed to fetch results.")
        return

    if not results:
        st.markdown("<div style='text-align:center;font-size:4rem'>📝</div>", unsafe_allow_html=True)
        st.subheader("No quizzes completed yet!")
        st.write("Take your first quiz to see your progress here.")
        nav_button("Start Quiz", TAKE_QUIZ, key="progress_start", type="primary")
        return

    render_top_indicators(summarize(results))

    df = results_frame(results)

    st.subheader("Score Trend")
    fig = px.line(df, x="label", y="percentage", markers=True, range_y=[0, 100],
                  labels={"label": "Date", "percentage": "Score (%)"},
                  hover_data={"score": True, "total_questions": True})
    fig.update_traces(line_color="#a855f7", line_width=3, marker_size=10)
    st.plotly_chart(fig, width="stretch", key="score_trend")

    st.subheader("Time Taken")
    df["time_label"] = df["time"].map(format_time)
    fig = px.bar(df, x="label", y="time", labels={"label": "Date", "time": "Seconds"},
                 hover_data={"time_label": True})
    fig.update_traces(marker_color="#10b981")
    st.plotly_chart(fig, width="stretch", key="time_taken")

    st.subheader("Recent Quizzes")
    st.dataframe(history_table(results), hide_index=True, width="stretch")
    if today not in {r.date for r in results}:
        st.caption("No result recorded for today yet.")
