"""
Progress analytics
==================

Turns the recent result history into the numbers and frames shown on the
"My Progress" page.
"""

from dataclasses import dataclass
from typing import List

import pandas as pd

from dailyquiz.domain.models import GradedResult

FRAME_COLUMNS = ["date", "label", "score", "total_questions", "percentage", "time"]


@dataclass
class ProgressSummary:
    count: int
    best_score: float     # percent
    average_score: int    # percent, rounded
    average_time: int     # seconds, rounded


def format_time(seconds: int) -> str:
    """125 -> '2:05'"""
    mins, secs = divmod(max(int(seconds), 0), 60)
    return f"{mins}:{secs:02}"


def score_emoji(percentage: float) -> str:
    if percentage >= 100:
        return "🎉"
    if percentage >= 70:
        return "😊"
    if percentage >= 50:
        return "😐"
    return "😢"


def results_frame(results: List[GradedResult]) -> pd.DataFrame:
    """Chart data, oldest first (results arrive newest first)."""
    if not results:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    rows = [
        {
            "date": r.date,
            "label": r.date.strftime("%b %d").replace(" 0", " "),
            "score": r.score,
            "total_questions": r.total_questions,
            "percentage": round(r.percentage),
            "time": r.time_taken,
        }
        for r in reversed(results)
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def summarize(results: List[GradedResult]) -> ProgressSummary:
    if not results:
        return ProgressSummary(count=0, best_score=0.0, average_score=0, average_time=0)

    pct = pd.Series([r.percentage for r in results], dtype="float64")
    times = pd.Series([r.time_taken for r in results], dtype="float64")
    return ProgressSummary(
        count=len(results),
        best_score=float(pct.max()),
        average_score=int(round(pct.mean())),
        average_time=int(round(times.mean())),
    )


def history_table(results: List[GradedResult]) -> pd.DataFrame:
    """Recent results as displayed in the table, newest first."""
    return pd.DataFrame(
        [
            {
                "Date": r.date.strftime("%B %d, %Y"),
                "Score": f"{r.score}/{r.total_questions}",
                "Percentage": f"{score_emoji(r.percentage)} {round(r.percentage)}%",
                "Time": format_time(r.time_taken),
            }
            for r in results
        ],
        columns=["Date", "Score", "Percentage", "Time"],
    )
