# app/ui/editor.py

import streamlit as st
from services.api import create_post, get_post, update_post
from ui.posts import open_post

COVER_TYPES = ["jpg", "jpeg", "png", "gif", "webp"]


def create_page():
    st.title("✍️ New post")

    with st.form("create_post"):
        title = st.text_input("Title")
        summary = st.text_input("Summary")
        cover = st.file_uploader("Cover image", type=COVER_TYPES)
        content = st.text_area("Content", height=300)
        submitted = st.form_submit_button("Create post")

    if not submitted:
        return
    if not title.strip():
        st.error("Title is required.")
        return
    if cover is None:
        st.error("Please choose a cover image.")
        return

    with st.spinner("Publishing..."):
        result = create_post(st.session_state["token"], title, summary, content, cover)
    if result.get("error"):
        st.error(f"❌ {result['error']}")
        return

    open_post(result["id"])
    st.rerun()


def edit_page():
    post_id = st.session_state.get("post_id")
    post = get_post(post_id) if post_id else {"error": "No post selected"}
    if post.get("error"):
        st.error(post["error"])
        return

    st.title("✏️ Edit post")

    with st.form("edit_post"):
        title = st.text_input("Title", value=post["title"])
        summary = st.text_input("Summary", value=post["summary"])
        cover = st.file_uploader("New cover image (optional)", type=COVER_TYPES)
        content = st.text_area("Content", value=post["content"], height=300)
        submitted = st.form_submit_button("Update post")

    if st.button("Cancel"):
        open_post(post_id)
        st.rerun()

    if not submitted:
        return

    with st.spinner("Saving..."):
        result = update_post(st.session_state["token"], post_id, title, summary, content, cover)
    if result.get("error"):
        st.error(f"❌ {result['error']}")
        return

    open_post(post_id)
    st.rerun()
