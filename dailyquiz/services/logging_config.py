"""Logging configuration helpers for the daily quiz app."""

from __future__ import annotations

import logging
from logging import Logger

from dailyquiz.services.config import LOG_LEVEL


def configure_logging(level: str | None = None) -> Logger:
    """Configure basic logging once and return the app logger.

    Streamlit re-executes the script on every interaction; basicConfig is a
    no-op after the first call, so this is safe to call at the top of a page.
    """
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("dailyquiz")
