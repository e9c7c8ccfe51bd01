import streamlit as st

HOME = "🏠 Home"
TAKE_QUIZ = "🧠 Take Quiz"
PROGRESS = "🏆 My Progress"
ADD_QUIZ = "📚 Add Quiz (Admin)"

PAGES = [HOME, TAKE_QUIZ, PROGRESS, ADD_QUIZ]


def goto(page: str):
    # used as on_click callback: runs before the sidebar radio is rebuilt
    st.session_state.page = page


def nav_button(label: str, page: str, key: str, **kwargs):
    st.button(label, key=key, on_click=goto, args=(page,), width="stretch", **kwargs)
