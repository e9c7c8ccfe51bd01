import os
import sys
import streamlit as st

# --- make `dailyquiz` importable under `streamlit run dailyquiz/streamlit_app.py` ---
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dailyquiz.services.db import get_store
from dailyquiz.services.logging_config import configure_logging
from dailyquiz.services.quiz_service import current_date, init_database
from dailyquiz.views import admin, home, quiz, results
from dailyquiz.views.nav import ADD_QUIZ, HOME, PAGES, PROGRESS, TAKE_QUIZ

logger = configure_logging()

VIEWS = {
    HOME: home.render,
    TAKE_QUIZ: quiz.render,
    PROGRESS: results.render,
    ADD_QUIZ: admin.render,
}


@st.cache_resource
def _store():
    """Create tables once per server process."""
    store = get_store()
    init_database(store)
    return store


st.set_page_config(page_title="Quiz Me!", page_icon="🎯", layout="centered")

if "page" not in st.session_state:
    st.session_state.page = HOME

with st.sidebar:
    st.markdown("## 🎯 Quiz Me!")
    st.radio("Go to", PAGES, key="page", label_visibility="collapsed")

# one "today" for the whole run
today = current_date()
logger.debug("Rendering %s for %s", st.session_state.page, today)

VIEWS[st.session_state.page](_store(), today)

st.caption("Made with ❤️ for curious minds")
