import os
from pathlib import Path
import streamlit as st

def _get(key: str, default: str | None = None) -> str | None:
    # Streamlit secrets > environment > default
    try:
        if hasattr(st, "secrets") and key in st.secrets:
            return st.secrets[key]
    except Exception:
        # no secrets.toml outside `streamlit run`
        pass
    return os.getenv(key, default)

def _get_int(key: str, default: int) -> int:
    raw = _get(key, None)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be an integer, got {raw!r}")

ROOT_DIR = Path(__file__).resolve().parents[2]

# "cloud" keeps the sqlite file under /tmp (the app directory is read-only there)
RUN_ENV = _get("QUIZ_ENV", "local")

if RUN_ENV == "cloud":
    DB_PATH = Path("/tmp/quiz.db")
else:
    DB_PATH = ROOT_DIR / "data" / "quiz.db"

DATABASE_URL = _get("DATABASE_URL", f"sqlite:///{DB_PATH.as_posix()}")

# every "today" in the app is computed in this zone
QUIZ_TIMEZONE = _get("QUIZ_TIMEZONE", "UTC")

RESULTS_LIMIT = _get_int("RESULTS_LIMIT", 30)

LOG_LEVEL = _get("QUIZ_LOG_LEVEL", "INFO")

JSONL_PATH = _get("QUIZ_JSONL_PATH", str(ROOT_DIR / "data" / "quizzes.jsonl"))
