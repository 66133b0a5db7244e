# app/main.py

import streamlit as st
from dotenv import load_dotenv
from ui.login import login_page, logout, restore_session
from ui.posts import index_page, post_page
from ui.editor import create_page, edit_page


load_dotenv()


PAGES = {
    "index": index_page,
    "post": post_page,
    "create": create_page,
    "edit": edit_page,
}


def sidebar():
    st.sidebar.markdown("## 📋 Menu")

    if st.sidebar.button("📰 All posts"):
        st.session_state["page"] = "index"

    if "token" in st.session_state:
        st.sidebar.caption(f"Signed in as {st.session_state['username']}")
        if st.sidebar.button("✍️ New post"):
            st.session_state["page"] = "create"
        if st.sidebar.button("🔓 Logout"):
            logout()
            st.session_state.clear()
            st.rerun()
    elif st.sidebar.button("🔐 Login"):
        st.session_state["page"] = "login"


def main_page():
    sidebar()

    page = st.session_state.get("page", "index")
    if page in ("create", "edit") and "token" not in st.session_state:
        page = "login"

    if page == "login":
        login_page()
    else:
        PAGES.get(page, index_page)()


restore_session()
main_page()
